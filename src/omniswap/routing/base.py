"""Canonical quote model and the provider interface."""

import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_DOWN
from enum import Enum
from typing import Any, Optional

import httpx

from omniswap.chains import is_native_address
from omniswap.routing.amounts import format_amount, is_plain_decimal, parse_decimal

logger = logging.getLogger(__name__)

DEFAULT_SLIPPAGE_BPS = 100  # 1%
RATE_PRECISION = Decimal("0.00000001")


class ProviderCategory(str, Enum):
    """Kind of pricing source."""

    DEX = "dex"  # same-chain exchange aggregator
    BRIDGE = "bridge"  # cross-chain bridge aggregator
    CEX = "cex"  # centralized exchange


class RouteStepKind(str, Enum):
    """Kind of hop in a quoted route."""

    SWAP = "swap"
    BRIDGE = "bridge"
    CEX = "cex"


class QuoteTag(str, Enum):
    """Labels the ranker attaches to standout quotes."""

    BEST_RETURN = "BEST_RETURN"
    FASTEST = "FASTEST"
    CHEAPEST = "CHEAPEST"


class QuoteValidationError(ValueError):
    """Raised when a quote request is malformed."""


@dataclass
class Token:
    """A token on a specific chain."""

    chain_id: str
    address: str
    symbol: str
    decimals: int
    coingecko_id: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return is_native_address(self.address)


@dataclass
class Chain:
    """A blockchain as seen by the quote engine."""

    id: str
    name: str = ""
    kind: str = "evm"


@dataclass
class QuoteRequest:
    """Request to convert input_amount of input_token into output_token."""

    input_token: Token
    output_token: Token
    input_chain: Chain
    output_chain: Chain
    input_amount: str
    user_address: Optional[str] = None
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS

    @property
    def is_cross_chain(self) -> bool:
        return str(self.input_chain.id) != str(self.output_chain.id)

    @property
    def slippage_percent(self) -> Decimal:
        """Slippage as a percentage (100 bps -> 1)."""
        return Decimal(self.slippage_bps) / Decimal(100)

    @property
    def input_value(self) -> Optional[Decimal]:
        return parse_decimal(self.input_amount)

    def validate(self) -> None:
        """Check request invariants.

        Raises:
            QuoteValidationError: If tokens, chains or amount are missing or
                inconsistent
        """
        if self.input_token is None or self.output_token is None:
            raise QuoteValidationError("Input and output tokens are required")
        if self.input_chain is None or self.output_chain is None:
            raise QuoteValidationError("Chain information is required")
        if not str(self.input_chain.id) or not str(self.output_chain.id):
            raise QuoteValidationError("Chain id is required")
        if not self.input_amount:
            raise QuoteValidationError("Input amount is required")
        if not is_plain_decimal(self.input_amount):
            raise QuoteValidationError(
                f"Input amount must be a plain decimal number, got {self.input_amount!r}"
            )

        amount = self.input_value
        if amount is None or amount <= 0:
            raise QuoteValidationError(f"Input amount must be positive, got {self.input_amount!r}")

        if str(self.input_token.chain_id) != str(self.input_chain.id):
            raise QuoteValidationError(
                f"Input token {self.input_token.symbol} is on chain {self.input_token.chain_id}, "
                f"not {self.input_chain.id}"
            )
        if str(self.output_token.chain_id) != str(self.output_chain.id):
            raise QuoteValidationError(
                f"Output token {self.output_token.symbol} is on chain {self.output_token.chain_id}, "
                f"not {self.output_chain.id}"
            )
        if self.slippage_bps < 0:
            raise QuoteValidationError("Slippage cannot be negative")


@dataclass
class RouteStep:
    """One hop of a quoted route. Display only."""

    kind: RouteStepKind
    protocol: str
    from_token: Optional[str] = None
    to_token: Optional[str] = None
    from_chain_id: Optional[str] = None
    to_chain_id: Optional[str] = None


@dataclass
class Quote:
    """A provider's normalized offer for a quote request."""

    id: str
    provider_id: str
    provider_name: str
    input_amount: str
    output_amount: str
    output_amount_display: str
    exchange_rate: float
    exchange_rate_display: str
    price_impact_percent: float = 0.0
    estimated_gas: Optional[str] = None
    estimated_gas_usd: Optional[float] = None
    estimated_time_seconds: Optional[int] = None
    is_estimated: bool = False
    is_best_rate: bool = False
    tags: list[QuoteTag] = field(default_factory=list)
    route: list[RouteStep] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def output_value(self) -> Decimal:
        """Output amount as a Decimal (0 if unparseable)."""
        return parse_decimal(self.output_amount) or Decimal("0")


@dataclass(frozen=True)
class ProviderDescriptor:
    """Catalog entry for a provider."""

    id: str
    name: str
    category: ProviderCategory
    supported_chain_ids: frozenset[str]
    enabled: bool = True

    def supports_chain(self, chain_id: str) -> bool:
        return str(chain_id) in self.supported_chain_ids


def generate_quote_id(provider_id: str) -> str:
    """Unique id for one fetch attempt."""
    return f"{provider_id}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def quantize_amount(amount: Decimal) -> str:
    """Round an amount down to 8 decimals for rate-derived quotes."""
    return format(amount.quantize(RATE_PRECISION, rounding=ROUND_DOWN), "f")


def build_quote(
    provider_id: str,
    provider_name: str,
    request: QuoteRequest,
    output_amount: str,
    *,
    price_impact_percent: Optional[float] = None,
    estimated_gas: Optional[str] = None,
    estimated_gas_usd: Optional[float] = None,
    estimated_time_seconds: Optional[int] = None,
    is_estimated: bool = False,
    route: Optional[list[RouteStep]] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Quote:
    """Create a canonical quote.

    Raises:
        ValueError: If output_amount is not a positive number
    """
    output_value = parse_decimal(output_amount)
    if output_value is None or output_value <= 0:
        raise ValueError(f"Invalid output amount: {output_amount!r}")

    input_value = request.input_value
    if input_value is None or input_value <= 0:
        raise ValueError(f"Invalid input amount: {request.input_amount!r}")

    rate = output_value / input_value
    rate_display = format_amount(rate.quantize(RATE_PRECISION, rounding=ROUND_DOWN))

    return Quote(
        id=generate_quote_id(provider_id),
        provider_id=provider_id,
        provider_name=provider_name,
        input_amount=request.input_amount,
        output_amount=str(output_amount),
        output_amount_display=format_amount(output_value),
        exchange_rate=float(rate),
        exchange_rate_display=(
            f"1 {request.input_token.symbol} = {rate_display} {request.output_token.symbol}"
        ),
        price_impact_percent=max(0.0, float(price_impact_percent or 0.0)),
        estimated_gas=estimated_gas,
        estimated_gas_usd=estimated_gas_usd,
        estimated_time_seconds=estimated_time_seconds,
        is_estimated=is_estimated,
        route=route or [],
        metadata=metadata or {},
    )


class PriceSource(ABC):
    """USD spot price lookup used by rate-only providers and estimates."""

    @abstractmethod
    async def spot_price_usd(self, chain_id: str, token: Token) -> Optional[Decimal]:
        """Current USD price of a token, or None if unknown."""
        pass


class QuoteProvider(ABC):
    """Abstract base class for quote providers.

    fetch() never raises: provider errors are logged and turned into None.
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Catalog identifier."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""
        pass

    async def fetch(self, request: QuoteRequest) -> Optional[Quote]:
        """Get a quote, or None if the provider cannot offer one."""
        try:
            quote = await self._fetch_quote(request)
        except Exception as e:
            logger.warning(f"[{self.provider_id}] quote failed: {type(e).__name__}: {e}")
            return None

        if quote is None:
            logger.debug(
                f"[{self.provider_id}] no quote for {request.input_token.symbol} -> "
                f"{request.output_token.symbol}"
            )
        return quote

    @abstractmethod
    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        """Query the provider. May raise; fetch() contains errors."""
        pass


class HttpQuoteProvider(QuoteProvider):
    """Base for providers that quote over an HTTP JSON API."""

    def __init__(
        self,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize HTTP provider.

        Args:
            timeout: HTTP timeout per call in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _get_json(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Optional[Any]:
        """GET a JSON document, returning None on a non-200 response."""
        async with self._client() as client:
            response = await client.get(url, params=params, headers=headers)

        if response.status_code != 200:
            logger.warning(
                f"[{self.provider_id}] API error: {response.status_code} - {response.text[:200]}"
            )
            return None

        return response.json()
