"""Quote request and response contracts."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class TokenModel(BaseModel):
    """Token as sent by clients."""

    chain_id: str = Field(..., description="Canonical chain id (1, 56, 101 for Solana, ...)")
    address: str = Field(
        default="",
        description="Token address; empty, 'native' or 0xEeee... for the native asset",
    )
    symbol: str = Field(..., min_length=1, description="Token symbol (e.g., USDC)")
    decimals: int = Field(..., ge=0, le=255, description="Token precision")
    coingecko_id: Optional[str] = Field(None, description="CoinGecko coin id for price lookups")


class ChainModel(BaseModel):
    """Chain as sent by clients."""

    id: str = Field(..., description="Canonical chain id")
    name: str = Field(default="", description="Display name")
    kind: str = Field(default="evm", description="Chain family (evm, solana, sui)")


class QuoteRequest(BaseModel):
    """Request for swap quotes."""

    input_token: TokenModel
    output_token: TokenModel
    input_chain: Optional[ChainModel] = Field(
        None, description="Source chain (default: input token's chain)"
    )
    output_chain: Optional[ChainModel] = Field(
        None, description="Destination chain (default: output token's chain)"
    )
    input_amount: str = Field(..., description="Amount to swap, human decimal string")
    user_address: Optional[str] = Field(None, description="Sender address, if known")
    slippage_bps: Optional[int] = Field(
        None, ge=0, le=5000, description="Slippage tolerance in basis points"
    )


class RouteStepModel(BaseModel):
    """One hop of a quoted route."""

    kind: str = Field(..., description="swap, bridge or cex")
    protocol: str
    from_token: Optional[str] = None
    to_token: Optional[str] = None
    from_chain_id: Optional[str] = None
    to_chain_id: Optional[str] = None


class QuoteResponse(BaseModel):
    """A normalized provider quote."""

    id: str
    provider_id: str = Field(..., description="Catalog id (lifi, 1inch, ...)")
    provider_name: str
    input_amount: str
    output_amount: str = Field(..., description="Expected output, human decimal string")
    output_amount_display: str
    exchange_rate: float
    exchange_rate_display: str
    price_impact_percent: float = 0.0
    estimated_gas: Optional[str] = None
    estimated_gas_usd: Optional[float] = None
    estimated_time_seconds: Optional[int] = None
    is_estimated: bool = False
    is_best_rate: bool = False
    tags: list[str] = Field(
        default_factory=list, description="BEST_RETURN, FASTEST and/or CHEAPEST"
    )
    route: list[RouteStepModel] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class MultiQuoteResponse(BaseModel):
    """Ranked quotes for a request, best first."""

    quotes: list[QuoteResponse] = Field(default_factory=list)
    best_quote: Optional[QuoteResponse] = None


class BestQuoteResponse(BaseModel):
    """Best quote for a request, if any provider answered."""

    quote: Optional[QuoteResponse] = None
