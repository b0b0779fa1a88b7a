"""Routing module for swap quote aggregation.

Providers:
- LI.FI: cross-chain bridge/DEX aggregator (EVM)
- 1inch: same-chain DEX aggregator (EVM)
- Jupiter: Solana DEX aggregator
- Socket: cross-chain bridge aggregator (EVM)
- Rango: cross-chain meta-aggregator (EVM, Solana, Sui)
- MEXC: rate-only CEX quote from MEXC ticker prices
- Changelly: rate-only CEX estimate from oracle prices
- ChangeNOW: instant exchange estimate
- Price Estimate: fallback from USD spot prices
"""

from omniswap.routing.aggregator import AggregationState, QuoteAggregator
from omniswap.routing.base import (
    Chain,
    PriceSource,
    ProviderCategory,
    ProviderDescriptor,
    Quote,
    QuoteProvider,
    QuoteRequest,
    QuoteValidationError,
    RouteStep,
    RouteStepKind,
    Token,
)
from omniswap.routing.catalog import PROVIDER_CATALOG, applicable_providers, build_catalog
from omniswap.routing.cex_rate import RateOnlyCexProvider
from omniswap.routing.estimate import FallbackEstimator
from omniswap.routing.factory import (
    create_aggregator,
    create_changelly_provider,
    create_mexc_provider,
    create_price_oracle,
    create_providers,
)

__all__ = [
    # Data model
    "Token",
    "Chain",
    "QuoteRequest",
    "Quote",
    "RouteStep",
    "RouteStepKind",
    "ProviderCategory",
    "ProviderDescriptor",
    "QuoteValidationError",
    # Interfaces
    "QuoteProvider",
    "PriceSource",
    # Catalog
    "PROVIDER_CATALOG",
    "applicable_providers",
    "build_catalog",
    # Aggregation
    "QuoteAggregator",
    "AggregationState",
    "RateOnlyCexProvider",
    "FallbackEstimator",
    # Factory functions
    "create_aggregator",
    "create_providers",
    "create_price_oracle",
    "create_mexc_provider",
    "create_changelly_provider",
]
