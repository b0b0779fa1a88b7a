"""Price-based fallback estimate.

Always part of the fan-out, so a request gets an indicative figure even when
every live provider fails.
"""

import asyncio
import logging
from typing import Optional

from omniswap.routing.base import (
    PriceSource,
    QuoteProvider,
    Quote,
    QuoteRequest,
    RouteStep,
    RouteStepKind,
    build_quote,
    quantize_amount,
)

logger = logging.getLogger(__name__)


class FallbackEstimator(QuoteProvider):
    """Estimate output from USD spot prices with no fee applied."""

    def __init__(self, oracle: PriceSource):
        self.oracle = oracle

    @property
    def provider_id(self) -> str:
        return "estimate"

    @property
    def name(self) -> str:
        return "Price Estimate"

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        input_price, output_price = await asyncio.gather(
            self.oracle.spot_price_usd(str(request.input_chain.id), request.input_token),
            self.oracle.spot_price_usd(str(request.output_chain.id), request.output_token),
        )
        if not input_price or not output_price:
            return None

        output_amount = request.input_value * input_price / output_price
        kind = RouteStepKind.BRIDGE if request.is_cross_chain else RouteStepKind.SWAP

        logger.debug(
            f"[estimate] {request.input_token.symbol}=${input_price} "
            f"{request.output_token.symbol}=${output_price}"
        )

        return build_quote(
            self.provider_id,
            self.name,
            request,
            quantize_amount(output_amount),
            is_estimated=True,
            route=[
                RouteStep(
                    kind=kind,
                    protocol=self.name,
                    from_token=request.input_token.symbol,
                    to_token=request.output_token.symbol,
                    from_chain_id=str(request.input_chain.id),
                    to_chain_id=str(request.output_chain.id),
                )
            ],
        )
