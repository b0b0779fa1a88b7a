"""USD price oracle: cache, sources and background refresh."""

from omniswap.pricing.cache import CachedPrice, PriceCache
from omniswap.pricing.oracle import PriceOracle
from omniswap.pricing.sources import (
    CoinGeckoSource,
    DefiLlamaSource,
    DexScreenerSource,
    MexcTickerPrices,
)
from omniswap.pricing.worker import PriceRefreshWorker

__all__ = [
    "CachedPrice",
    "PriceCache",
    "PriceOracle",
    "PriceRefreshWorker",
    "DexScreenerSource",
    "DefiLlamaSource",
    "CoinGeckoSource",
    "MexcTickerPrices",
]
