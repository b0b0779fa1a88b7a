"""Quote service for fetching swap quotes.

Translates HTTP contracts into engine requests and engine quotes back into
response contracts. Quotes only: nothing here executes a swap.
"""

import logging
from typing import Optional

from omniswap.chains import get_chain_config
from omniswap.routing.aggregator import QuoteAggregator
from omniswap.routing.base import Chain, Quote, QuoteRequest as EngineQuoteRequest, Token
from omniswap.web.contracts.quotes import (
    BestQuoteResponse,
    ChainModel,
    MultiQuoteResponse,
    QuoteRequest,
    QuoteResponse,
    RouteStepModel,
    TokenModel,
)

logger = logging.getLogger(__name__)


def _to_token(model: TokenModel) -> Token:
    return Token(
        chain_id=model.chain_id,
        address=model.address,
        symbol=model.symbol,
        decimals=model.decimals,
        coingecko_id=model.coingecko_id,
    )


def _to_chain(model: Optional[ChainModel], chain_id: str) -> Chain:
    if model is not None:
        return Chain(id=model.id, name=model.name, kind=model.kind)
    config = get_chain_config(chain_id)
    if config:
        return Chain(id=config.chain_id, name=config.name, kind=config.kind)
    return Chain(id=chain_id)


def to_quote_response(quote: Quote) -> QuoteResponse:
    """Convert an engine quote to its response contract."""
    return QuoteResponse(
        id=quote.id,
        provider_id=quote.provider_id,
        provider_name=quote.provider_name,
        input_amount=quote.input_amount,
        output_amount=quote.output_amount,
        output_amount_display=quote.output_amount_display,
        exchange_rate=quote.exchange_rate,
        exchange_rate_display=quote.exchange_rate_display,
        price_impact_percent=quote.price_impact_percent,
        estimated_gas=quote.estimated_gas,
        estimated_gas_usd=quote.estimated_gas_usd,
        estimated_time_seconds=quote.estimated_time_seconds,
        is_estimated=quote.is_estimated,
        is_best_rate=quote.is_best_rate,
        tags=[tag.value for tag in quote.tags],
        route=[
            RouteStepModel(
                kind=step.kind.value,
                protocol=step.protocol,
                from_token=step.from_token,
                to_token=step.to_token,
                from_chain_id=step.from_chain_id,
                to_chain_id=step.to_chain_id,
            )
            for step in quote.route
        ],
        metadata=quote.metadata,
    )


class QuoteService:
    """Service for fetching ranked swap quotes.

    This is a READ-ONLY service that does not execute any transactions.
    """

    def __init__(self, aggregator: QuoteAggregator, default_slippage_bps: int = 100):
        self.aggregator = aggregator
        self.default_slippage_bps = default_slippage_bps

    def to_engine_request(self, request: QuoteRequest) -> EngineQuoteRequest:
        """Build an engine request, filling chains and slippage defaults."""
        slippage = request.slippage_bps
        return EngineQuoteRequest(
            input_token=_to_token(request.input_token),
            output_token=_to_token(request.output_token),
            input_chain=_to_chain(request.input_chain, request.input_token.chain_id),
            output_chain=_to_chain(request.output_chain, request.output_token.chain_id),
            input_amount=request.input_amount.strip(),
            user_address=request.user_address,
            slippage_bps=self.default_slippage_bps if slippage is None else slippage,
        )

    async def get_quotes(self, request: QuoteRequest) -> MultiQuoteResponse:
        """Get all quotes, best first.

        Raises:
            QuoteValidationError: If the request is malformed
        """
        quotes = await self.aggregator.get_quotes(self.to_engine_request(request))
        responses = [to_quote_response(q) for q in quotes]
        return MultiQuoteResponse(
            quotes=responses,
            best_quote=responses[0] if responses else None,
        )

    async def get_best_quote(self, request: QuoteRequest) -> BestQuoteResponse:
        """Get the best quote only.

        Raises:
            QuoteValidationError: If the request is malformed
        """
        quote = await self.aggregator.get_best_quote(self.to_engine_request(request))
        return BestQuoteResponse(quote=to_quote_response(quote) if quote else None)


# Shared instance, installed by the API lifespan or created on first use
_quote_service: Optional[QuoteService] = None


def set_quote_service(service: Optional[QuoteService]) -> None:
    """Install (or clear) the shared quote service."""
    global _quote_service
    _quote_service = service


def get_quote_service() -> QuoteService:
    """Get the shared quote service (FastAPI dependency).

    Outside the API lifespan nothing would run a refresh worker, so the
    lazily created service prices without one.
    """
    global _quote_service
    if _quote_service is None:
        from omniswap.config import get_settings
        from omniswap.routing.factory import create_aggregator, create_price_oracle

        settings = get_settings()
        oracle = create_price_oracle(settings, with_worker=False)
        _quote_service = QuoteService(
            create_aggregator(settings, price_oracle=oracle),
            default_slippage_bps=settings.default_slippage_bps,
        )
    return _quote_service
