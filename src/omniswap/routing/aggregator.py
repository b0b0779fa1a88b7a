"""Quote aggregation across providers.

Each request fans out to every applicable provider plus the fallback
estimate, waits for all of them under a per-provider time bound, and ranks
what came back by output amount.
"""

import asyncio
import logging
from enum import Enum
from typing import Iterable, Optional, Sequence

from omniswap.routing.base import (
    ProviderDescriptor,
    Quote,
    QuoteProvider,
    QuoteRequest,
    QuoteTag,
)
from omniswap.routing.catalog import PROVIDER_CATALOG, applicable_providers

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 15.0  # seconds


class AggregationState(str, Enum):
    """Lifecycle of a single get_quotes call."""

    IDLE = "idle"
    FILTERING = "filtering"
    FETCHING = "fetching"
    RANKING = "ranking"
    DONE = "done"


class QuoteAggregator:
    """Fans a quote request out to providers and ranks the answers.

    Ties on output amount keep completion order: the provider that answered
    first ranks first.
    """

    def __init__(
        self,
        providers: Iterable[QuoteProvider],
        fallback: Optional[QuoteProvider] = None,
        catalog: Sequence[ProviderDescriptor] = PROVIDER_CATALOG,
        provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT,
    ):
        self.providers: dict[str, QuoteProvider] = {p.provider_id: p for p in providers}
        self.fallback = fallback
        self.catalog = tuple(catalog)
        self.provider_timeout = provider_timeout

    async def get_quotes(self, request: QuoteRequest) -> list[Quote]:
        """Get ranked quotes for a request, best first.

        Raises:
            QuoteValidationError: If the request is malformed (before any I/O)
        """
        state = self._transition(AggregationState.IDLE, AggregationState.FILTERING)
        request.validate()

        pair = (
            f"{request.input_amount} {request.input_token.symbol}@{request.input_chain.id} -> "
            f"{request.output_token.symbol}@{request.output_chain.id}"
        )
        selected = self._select_providers(request)
        if self.fallback is not None:
            selected.append(self.fallback)

        state = self._transition(state, AggregationState.FETCHING, pair)
        results = await self._fetch_all(selected, request)

        state = self._transition(state, AggregationState.RANKING, pair)
        ranked = self._rank(results)

        self._transition(state, AggregationState.DONE, pair)
        if ranked:
            best = ranked[0]
            logger.info(
                f"Got {len(ranked)} quote(s) for {pair}. "
                f"Best: {best.provider_name} ({best.output_amount} {request.output_token.symbol})"
            )
        else:
            logger.warning(f"No quotes found for {pair}")
        return ranked

    async def get_best_quote(self, request: QuoteRequest) -> Optional[Quote]:
        """Get the best quote for a request, or None if nobody quoted."""
        quotes = await self.get_quotes(request)
        return quotes[0] if quotes else None

    def _select_providers(self, request: QuoteRequest) -> list[QuoteProvider]:
        selected = []
        for descriptor in applicable_providers(request, self.catalog):
            provider = self.providers.get(descriptor.id)
            if provider is None:
                logger.debug(f"[{descriptor.id}] applicable but no adapter registered, skipping")
                continue
            selected.append(provider)
        logger.debug(f"Querying providers: {[p.provider_id for p in selected]}")
        return selected

    async def _fetch_all(
        self, providers: list[QuoteProvider], request: QuoteRequest
    ) -> list[Quote]:
        """Run every provider concurrently, collecting results in completion order."""
        tasks = [asyncio.create_task(self._fetch_one(p, request)) for p in providers]
        results: list[Quote] = []
        try:
            for next_done in asyncio.as_completed(tasks):
                quote = await next_done
                if quote is not None:
                    results.append(quote)
        finally:
            # Caller cancellation: stop everything still in flight
            for task in tasks:
                if not task.done():
                    task.cancel()
        return results

    async def _fetch_one(self, provider: QuoteProvider, request: QuoteRequest) -> Optional[Quote]:
        try:
            return await asyncio.wait_for(provider.fetch(request), timeout=self.provider_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"[{provider.provider_id}] quote timed out after {self.provider_timeout}s"
            )
        except Exception as e:
            logger.warning(f"[{provider.provider_id}] unexpected error: {type(e).__name__}: {e}")
        return None

    @staticmethod
    def _rank(quotes: list[Quote]) -> list[Quote]:
        """Sort by output amount, highest first, and flag the winner.

        Also tags the fastest and cheapest quotes among those that report
        a time or gas cost. Tags never affect the order.
        """
        valid = [q for q in quotes if q.output_value > 0]
        ranked = sorted(valid, key=lambda q: q.output_value, reverse=True)
        for index, quote in enumerate(ranked):
            quote.is_best_rate = index == 0
            quote.tags = [QuoteTag.BEST_RETURN] if index == 0 else []

        timed = [q for q in ranked if q.estimated_time_seconds is not None]
        if timed:
            min(timed, key=lambda q: q.estimated_time_seconds).tags.append(QuoteTag.FASTEST)

        costed = [q for q in ranked if q.estimated_gas_usd is not None]
        if costed:
            min(costed, key=lambda q: q.estimated_gas_usd).tags.append(QuoteTag.CHEAPEST)

        return ranked

    @staticmethod
    def _transition(
        current: AggregationState, new: AggregationState, pair: str = ""
    ) -> AggregationState:
        logger.debug(f"Aggregation {current.value} -> {new.value} {pair}".rstrip())
        return new
