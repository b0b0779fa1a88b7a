"""USD spot price oracle backing estimates and rate-only quotes."""

import logging
from decimal import Decimal
from typing import Optional

from omniswap.chains import get_chain_config
from omniswap.pricing.cache import PriceCache
from omniswap.pricing.sources import CoinGeckoSource, DexScreenerSource
from omniswap.pricing.worker import PriceRefreshWorker
from omniswap.routing.base import PriceSource, Token

logger = logging.getLogger(__name__)


class PriceOracle(PriceSource):
    """Cached USD prices with live DexScreener and CoinGecko lookups.

    Lookup order:
    1. fresh cache entry
    2. stale-but-usable entry (and a background refresh is queued)
    3. DexScreener, then CoinGecko by coin id
    """

    def __init__(
        self,
        cache: PriceCache,
        dexscreener: DexScreenerSource,
        coingecko: CoinGeckoSource,
        worker: Optional[PriceRefreshWorker] = None,
    ):
        self.cache = cache
        self.dexscreener = dexscreener
        self.coingecko = coingecko
        self.worker = worker

    async def spot_price_usd(self, chain_id: str, token: Token) -> Optional[Decimal]:
        symbol = token.symbol.upper()

        fresh = self.cache.get_fresh(symbol)
        if fresh:
            return fresh.price_usd

        usable = self.cache.get_usable(symbol)
        if usable:
            if self.worker is not None:
                self.worker.enqueue(token)
            return usable.price_usd

        price = await self.dexscreener.get_price(chain_id, token.address)
        source = self.dexscreener.source_name

        if not price:
            coingecko_id = self._coingecko_id(chain_id, token)
            if coingecko_id:
                price = await self.coingecko.get_price(coingecko_id)
                source = self.coingecko.source_name

        if not price or price <= 0:
            logger.debug(f"No USD price for {symbol} on chain {chain_id}")
            return None

        self.cache.set(symbol, price, source)
        return price

    @staticmethod
    def _coingecko_id(chain_id: str, token: Token) -> Optional[str]:
        if token.coingecko_id:
            return token.coingecko_id
        if token.is_native:
            config = get_chain_config(chain_id)
            return config.native_coingecko_id if config else None
        return None
