"""USD price sources.

DexScreener is the primary on-chain source (best pair by liquidity),
DefiLlama serves batch refreshes, CoinGecko is the last resort by coin id.
MEXC ticker prices back the MEXC rate-only quote.

Every lookup is best-effort: errors are logged and come back as None or an
empty result.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional

import httpx

from omniswap.chains import get_chain_config, is_native_address
from omniswap.routing.amounts import parse_decimal
from omniswap.routing.base import PriceSource, Token

logger = logging.getLogger(__name__)

DEXSCREENER_API = "https://api.dexscreener.com"
DEFILLAMA_API = "https://coins.llama.fi"
COINGECKO_API = "https://api.coingecko.com/api/v3"
MEXC_API = "https://api.mexc.com"

DEXSCREENER_MAX_ADDRESSES = 30
STABLECOINS = {"USDT", "USDC", "DAI", "BUSD"}


def price_address(chain_id: str, address: Optional[str]) -> Optional[str]:
    """Address to price a token by; native assets use the wrapped native token."""
    if is_native_address(address):
        config = get_chain_config(chain_id)
        return config.wrapped_native_address if config else None
    return address


def select_best_pair(pairs: list[dict]) -> Optional[dict]:
    """Pick the pair with the deepest USD liquidity."""
    if not pairs:
        return None
    return max(
        pairs,
        key=lambda pair: parse_decimal((pair.get("liquidity") or {}).get("usd")) or Decimal("0"),
    )


def _base_address(pair: dict) -> str:
    return ((pair.get("baseToken") or {}).get("address") or "").lower()


class HttpPriceSource:
    """Shared HTTP plumbing for price sources."""

    source_name = "http"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Optional[Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers={"Accept": "application/json"})
            if response.status_code != 200:
                logger.debug(f"[{self.source_name}] HTTP {response.status_code} for {url}")
                return None
            return response.json()
        except Exception as e:
            logger.warning(f"[{self.source_name}] price fetch failed: {type(e).__name__}: {e}")
            return None


class DexScreenerSource(HttpPriceSource):
    """DexScreener token pair prices."""

    source_name = "DexScreener"

    async def get_price(self, chain_id: str, address: Optional[str]) -> Optional[Decimal]:
        """Price of one token from its most liquid pair."""
        config = get_chain_config(chain_id)
        token_address = price_address(chain_id, address)
        if not config or not config.dexscreener_id or not token_address:
            return None

        data = await self._get_json(
            f"{DEXSCREENER_API}/tokens/v1/{config.dexscreener_id}/{token_address}"
        )
        if not isinstance(data, list):
            return None

        # priceUsd is the base token's price; pairs quoting our token don't count
        pairs = [pair for pair in data if _base_address(pair) == token_address.lower()]
        best = select_best_pair(pairs)
        return parse_decimal(best.get("priceUsd")) if best else None

    async def get_prices(self, chain_id: str, addresses: Iterable[str]) -> dict[str, Decimal]:
        """Prices for up to 30 tokens on one chain, keyed by lower-case address."""
        config = get_chain_config(chain_id)
        batch = list(addresses)[:DEXSCREENER_MAX_ADDRESSES]
        if not config or not config.dexscreener_id or not batch:
            return {}

        data = await self._get_json(
            f"{DEXSCREENER_API}/tokens/v1/{config.dexscreener_id}/{','.join(batch)}"
        )
        if not isinstance(data, list):
            return {}

        pairs_by_token: dict[str, list[dict]] = {}
        for pair in data:
            base_address = _base_address(pair)
            if base_address:
                pairs_by_token.setdefault(base_address, []).append(pair)

        prices = {}
        for address, pairs in pairs_by_token.items():
            best = select_best_pair(pairs)
            price = parse_decimal(best.get("priceUsd")) if best else None
            if price and price > 0:
                prices[address] = price
        return prices


class DefiLlamaSource(HttpPriceSource):
    """DefiLlama current coin prices (batch by chain:address)."""

    source_name = "DefiLlama"

    async def get_prices(self, tokens: Iterable[Token]) -> dict[str, Decimal]:
        """Prices keyed by upper-case symbol."""
        symbol_by_key: dict[str, str] = {}
        for token in tokens:
            config = get_chain_config(token.chain_id)
            address = price_address(token.chain_id, token.address)
            if not config or not config.defillama_id or not address:
                continue
            symbol_by_key[f"{config.defillama_id}:{address}".lower()] = token.symbol.upper()

        if not symbol_by_key:
            return {}

        data = await self._get_json(f"{DEFILLAMA_API}/prices/current/{','.join(symbol_by_key)}")
        if not isinstance(data, dict):
            return {}

        prices = {}
        for key, coin in (data.get("coins") or {}).items():
            symbol = symbol_by_key.get(key.lower())
            price = parse_decimal((coin or {}).get("price"))
            if symbol and price and price > 0:
                prices[symbol] = price
        return prices


class CoinGeckoSource(HttpPriceSource):
    """CoinGecko simple price by coin id."""

    source_name = "CoinGecko"

    async def get_price(self, coingecko_id: str) -> Optional[Decimal]:
        data = await self._get_json(
            f"{COINGECKO_API}/simple/price",
            params={"ids": coingecko_id, "vs_currencies": "usd"},
        )
        if not isinstance(data, dict):
            return None
        return parse_decimal((data.get(coingecko_id) or {}).get("usd"))


class MexcTickerPrices(HttpPriceSource, PriceSource):
    """MEXC spot prices against USDT; stablecoins are pinned to 1."""

    source_name = "MEXC"

    async def spot_price_usd(self, chain_id: str, token: Token) -> Optional[Decimal]:
        symbol = token.symbol.upper()
        if symbol in STABLECOINS:
            return Decimal("1")

        data = await self._get_json(
            f"{MEXC_API}/api/v3/ticker/price", params={"symbol": f"{symbol}USDT"}
        )
        if not isinstance(data, dict):
            return None
        price = parse_decimal(data.get("price"))
        return price if price and price > 0 else None
