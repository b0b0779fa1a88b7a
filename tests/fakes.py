"""Test doubles for providers and price sources."""

import asyncio
from decimal import Decimal
from typing import Optional

from omniswap.routing.base import (
    PriceSource,
    ProviderCategory,
    ProviderDescriptor,
    QuoteProvider,
    Quote,
    QuoteRequest,
    Token,
    build_quote,
)


class FakeProvider(QuoteProvider):
    """Provider returning a fixed output after an optional delay."""

    def __init__(
        self,
        provider_id: str,
        output: Optional[str] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        is_estimated: bool = False,
        time_seconds: Optional[int] = None,
        gas_usd: Optional[float] = None,
    ):
        self._provider_id = provider_id
        self.output = output
        self.delay = delay
        self.error = error
        self.is_estimated = is_estimated
        self.time_seconds = time_seconds
        self.gas_usd = gas_usd
        self.calls = 0
        self.cancelled = False

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def name(self) -> str:
        return self._provider_id.upper()

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        self.calls += 1
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise

        if self.error is not None:
            raise self.error
        if self.output is None:
            return None
        return build_quote(
            self.provider_id,
            self.name,
            request,
            self.output,
            estimated_time_seconds=self.time_seconds,
            estimated_gas_usd=self.gas_usd,
            is_estimated=self.is_estimated,
        )


class ExplodingProvider(FakeProvider):
    """Provider whose fetch() itself raises, bypassing the error boundary."""

    async def fetch(self, request: QuoteRequest) -> Optional[Quote]:
        self.calls += 1
        raise RuntimeError("adapter bug")


class StubPrices(PriceSource):
    """Price source backed by a symbol -> USD price dict."""

    def __init__(self, prices: Optional[dict[str, str]] = None):
        self.prices = {k.upper(): Decimal(v) for k, v in (prices or {}).items()}
        self.calls = 0

    async def spot_price_usd(self, chain_id: str, token: Token) -> Optional[Decimal]:
        self.calls += 1
        return self.prices.get(token.symbol.upper())


def descriptor(
    provider_id: str,
    category: ProviderCategory = ProviderCategory.DEX,
    chains: tuple[str, ...] = ("1",),
    enabled: bool = True,
) -> ProviderDescriptor:
    return ProviderDescriptor(
        id=provider_id,
        name=provider_id.upper(),
        category=category,
        supported_chain_ids=frozenset(chains),
        enabled=enabled,
    )
