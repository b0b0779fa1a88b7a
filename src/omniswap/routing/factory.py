"""Factory for creating quote providers and the aggregator.

Adapters are registered by catalog id. Providers that need an API key are
still created without one; their API will reject the call and the fetch
resolves to no quote.
"""

import logging
from typing import Optional

import httpx

from omniswap.config import Settings, get_settings
from omniswap.routing.aggregator import QuoteAggregator
from omniswap.routing.base import PriceSource, QuoteProvider
from omniswap.routing.catalog import build_catalog

logger = logging.getLogger(__name__)

MEXC_ESTIMATED_TIME = 300  # seconds
CHANGELLY_ESTIMATED_TIME = 600  # seconds


def create_price_oracle(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    with_worker: bool = True,
):
    """Create the price oracle with its cache and refresh worker.

    The worker is created but not started; the API lifespan owns it.
    Without a worker, stale prices are served as they are until a live
    lookup replaces them after the stale window.
    """
    from omniswap.pricing import (
        CoinGeckoSource,
        DefiLlamaSource,
        DexScreenerSource,
        PriceCache,
        PriceOracle,
        PriceRefreshWorker,
    )

    settings = settings or get_settings()
    timeout = settings.price_http_timeout_seconds

    cache = PriceCache(
        ttl_seconds=settings.price_cache_ttl_seconds,
        stale_ttl_seconds=settings.price_stale_ttl_seconds,
        max_entries=settings.price_cache_max_entries,
    )
    dexscreener = DexScreenerSource(timeout=timeout, transport=transport)
    worker = None
    if with_worker:
        worker = PriceRefreshWorker(
            cache=cache,
            dexscreener=dexscreener,
            defillama=DefiLlamaSource(timeout=timeout, transport=transport),
            batch_size=settings.price_refresh_batch_size,
            batch_delay=settings.price_refresh_batch_delay_seconds,
        )
    return PriceOracle(
        cache=cache,
        dexscreener=dexscreener,
        coingecko=CoinGeckoSource(timeout=timeout, transport=transport),
        worker=worker,
    )


def create_mexc_provider(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> QuoteProvider:
    """Create MEXC rate-only provider (MEXC ticker prices)."""
    from omniswap.pricing.sources import MexcTickerPrices
    from omniswap.routing.cex_rate import RateOnlyCexProvider

    settings = settings or get_settings()
    return RateOnlyCexProvider(
        provider_id="mexc",
        name="MEXC",
        price_source=MexcTickerPrices(
            timeout=settings.provider_http_timeout_seconds, transport=transport
        ),
        fee_rate=settings.mexc_fee_rate,
        estimated_time_seconds=MEXC_ESTIMATED_TIME,
    )


def create_changelly_provider(
    price_oracle: PriceSource,
    settings: Optional[Settings] = None,
) -> QuoteProvider:
    """Create Changelly rate-only provider.

    Changelly's own API requires partner auth, so the offer is an oracle
    price estimate.
    """
    from omniswap.routing.cex_rate import RateOnlyCexProvider

    settings = settings or get_settings()
    return RateOnlyCexProvider(
        provider_id="changelly",
        name="Changelly",
        price_source=price_oracle,
        fee_rate=settings.changelly_fee_rate,
        estimated_time_seconds=CHANGELLY_ESTIMATED_TIME,
        is_estimated=True,
    )


def create_providers(
    price_oracle: PriceSource,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[QuoteProvider]:
    """Create every live adapter in catalog order."""
    from omniswap.routing.changenow import ChangeNowProvider
    from omniswap.routing.jupiter import JupiterProvider
    from omniswap.routing.lifi import LiFiProvider
    from omniswap.routing.oneinch import OneInchProvider
    from omniswap.routing.rango import RangoProvider
    from omniswap.routing.socket import SocketProvider

    settings = settings or get_settings()
    timeout = settings.provider_http_timeout_seconds

    if not settings.oneinch_api_key:
        logger.warning("ONEINCH_API_KEY not set - 1inch quotes will be rejected")

    return [
        LiFiProvider(timeout=timeout, transport=transport),
        OneInchProvider(api_key=settings.oneinch_api_key, timeout=timeout, transport=transport),
        JupiterProvider(timeout=timeout, transport=transport),
        SocketProvider(api_key=settings.socket_api_key, timeout=timeout, transport=transport),
        RangoProvider(api_key=settings.rango_api_key, timeout=timeout, transport=transport),
        create_mexc_provider(settings, transport=transport),
        create_changelly_provider(price_oracle, settings),
        ChangeNowProvider(
            api_key=settings.changenow_api_key, timeout=timeout, transport=transport
        ),
    ]


def create_aggregator(
    settings: Optional[Settings] = None,
    price_oracle: Optional[PriceSource] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> QuoteAggregator:
    """Create the quote aggregator with all providers and the fallback estimate.

    Args:
        settings: Settings to use (default: cached settings)
        price_oracle: Price oracle shared with the caller (default: a new one)
        transport: Optional httpx transport for every adapter (used by tests)
    """
    from omniswap.routing.estimate import FallbackEstimator

    settings = settings or get_settings()
    price_oracle = price_oracle or create_price_oracle(settings, transport=transport)

    catalog = build_catalog(disabled=settings.disabled_provider_ids)
    providers = create_providers(price_oracle, settings, transport=transport)

    enabled = [d.id for d in catalog if d.enabled]
    logger.info(f"Quote aggregator ready with providers: {enabled}")

    return QuoteAggregator(
        providers=providers,
        fallback=FallbackEstimator(price_oracle),
        catalog=catalog,
        provider_timeout=settings.provider_timeout_seconds,
    )
