"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from omniswap.web.contracts.quotes import (
    BestQuoteResponse,
    ChainModel,
    MultiQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    RouteStepModel,
    TokenModel,
)

__all__ = [
    "TokenModel",
    "ChainModel",
    "QuoteRequest",
    "QuoteResponse",
    "RouteStepModel",
    "MultiQuoteResponse",
    "BestQuoteResponse",
]
