"""Rate-only centralized exchange providers.

These providers have no quote endpoint we can call without an account, so
the offer is derived from USD spot prices minus the exchange's fee:

    output = input * price_in * (1 - fee) / price_out
"""

import asyncio
import logging
from decimal import Decimal
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


class RateOnlyCexProvider(QuoteProvider):
    """CEX quote derived from spot prices and a flat fee.

    Used for MEXC (its own ticker prices) and Changelly (oracle prices,
    flagged as an estimate).
    """

    def __init__(
        self,
        provider_id: str,
        name: str,
        price_source: PriceSource,
        fee_rate: float,
        estimated_time_seconds: int,
        is_estimated: bool = False,
    ):
        self._provider_id = provider_id
        self._name = name
        self.price_source = price_source
        self.fee_rate = Decimal(str(fee_rate))
        self.estimated_time_seconds = estimated_time_seconds
        self.is_estimated = is_estimated

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def name(self) -> str:
        return self._name

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        input_price, output_price = await asyncio.gather(
            self.price_source.spot_price_usd(str(request.input_chain.id), request.input_token),
            self.price_source.spot_price_usd(str(request.output_chain.id), request.output_token),
        )
        if not input_price or not output_price:
            logger.debug(f"[{self.provider_id}] Missing price, cannot derive rate")
            return None

        input_value = request.input_value * input_price
        output_amount = input_value * (Decimal("1") - self.fee_rate) / output_price

        return build_quote(
            self.provider_id,
            self.name,
            request,
            quantize_amount(output_amount),
            estimated_time_seconds=self.estimated_time_seconds,
            is_estimated=self.is_estimated,
            route=[
                RouteStep(
                    kind=RouteStepKind.CEX,
                    protocol=self.name,
                    from_token=request.input_token.symbol,
                    to_token=request.output_token.symbol,
                    from_chain_id=str(request.input_chain.id),
                    to_chain_id=str(request.output_chain.id),
                )
            ],
            metadata={
                "input_price_usd": str(input_price),
                "output_price_usd": str(output_price),
                "fee_rate": str(self.fee_rate),
            },
        )
