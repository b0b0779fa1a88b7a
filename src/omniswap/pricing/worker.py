"""Background price refresh.

Stale cache entries are queued here and refreshed in batches, so quote
requests never wait on a refresh they did not need.
"""

import asyncio
import logging
from typing import Optional

from omniswap.pricing.cache import PriceCache
from omniswap.pricing.sources import DefiLlamaSource, DexScreenerSource, price_address
from omniswap.routing.base import Token

logger = logging.getLogger(__name__)


class PriceRefreshWorker:
    """Drains a queue of tokens into the price cache, one batch at a time.

    Each batch is deduplicated by symbol, priced through DexScreener per
    chain, and whatever DexScreener missed goes to DefiLlama in one call.
    """

    def __init__(
        self,
        cache: PriceCache,
        dexscreener: DexScreenerSource,
        defillama: DefiLlamaSource,
        batch_size: int = 20,
        batch_delay: float = 2.0,
    ):
        self.cache = cache
        self.dexscreener = dexscreener
        self.defillama = defillama
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._queue: asyncio.Queue[Token] = asyncio.Queue()
        self._pending: set[str] = set()
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def start(self) -> None:
        """Start the refresh loop (no-op if already running)."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(
            f"Price refresh worker started (batch size: {self.batch_size}, "
            f"delay: {self.batch_delay}s)"
        )

    async def stop(self) -> None:
        """Stop the refresh loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Price refresh worker stopped")

    def enqueue(self, token: Token) -> bool:
        """Queue a token for refresh. Returns False if it is already queued."""
        symbol = token.symbol.upper()
        if symbol in self._pending:
            return False
        self._pending.add(symbol)
        self._queue.put_nowait(token)
        return True

    async def _run(self) -> None:
        try:
            while True:
                batch = [await self._queue.get()]
                while len(batch) < self.batch_size and not self._queue.empty():
                    batch.append(self._queue.get_nowait())

                try:
                    await self.refresh_batch(batch)
                except Exception as e:
                    logger.error(f"Price refresh batch failed: {type(e).__name__}: {e}")

                if not self._queue.empty():
                    await asyncio.sleep(self.batch_delay)
        except asyncio.CancelledError:
            logger.debug("Price refresh loop cancelled")
            raise

    async def refresh_batch(self, tokens: list[Token]) -> int:
        """Refresh one batch of tokens. Returns the number of prices updated."""
        unique: dict[str, Token] = {}
        for token in tokens:
            unique.setdefault(token.symbol.upper(), token)

        logger.debug(f"Refreshing prices for {len(unique)} symbol(s)")
        updated: set[str] = set()

        try:
            by_chain: dict[str, list[tuple[str, str]]] = {}
            for symbol, token in unique.items():
                address = price_address(token.chain_id, token.address)
                if address:
                    by_chain.setdefault(str(token.chain_id), []).append((symbol, address))

            for chain_id, entries in by_chain.items():
                prices = await self.dexscreener.get_prices(chain_id, [a for _, a in entries])
                for symbol, address in entries:
                    price = prices.get(address.lower())
                    if price:
                        self.cache.set(symbol, price, self.dexscreener.source_name)
                        updated.add(symbol)

            missing = [token for symbol, token in unique.items() if symbol not in updated]
            if missing:
                prices = await self.defillama.get_prices(missing)
                for symbol, price in prices.items():
                    self.cache.set(symbol, price, self.defillama.source_name)
                    updated.add(symbol)
        finally:
            self._pending.difference_update(unique)

        logger.debug(f"Refreshed {len(updated)}/{len(unique)} price(s)")
        return len(updated)
