"""ChangeNOW instant exchange integration.

ChangeNOW quotes by currency ticker and network, in human-decimal amounts.
API docs: https://documenter.getpostman.com/view/8180765/SVfTPnM8
"""

import logging
from typing import Optional

import httpx

from omniswap.chains import get_chain_config
from omniswap.routing.amounts import parse_time_estimate
from omniswap.routing.base import (
    HttpQuoteProvider,
    Quote,
    QuoteRequest,
    RouteStep,
    RouteStepKind,
    build_quote,
)

logger = logging.getLogger(__name__)

CHANGENOW_API_V2 = "https://api.changenow.io/v2"


class ChangeNowProvider(HttpQuoteProvider):
    """ChangeNOW provider (standard floating-rate flow)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key

    @property
    def provider_id(self) -> str:
        return "changenow"

    @property
    def name(self) -> str:
        return "ChangeNOW"

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        params = {
            "fromCurrency": request.input_token.symbol.lower(),
            "toCurrency": request.output_token.symbol.lower(),
            "fromAmount": request.input_amount,
            "flow": "standard",
            "type": "direct",
        }

        from_config = get_chain_config(request.input_chain.id)
        to_config = get_chain_config(request.output_chain.id)
        if from_config and from_config.changenow_network:
            params["fromNetwork"] = from_config.changenow_network
        if to_config and to_config.changenow_network:
            params["toNetwork"] = to_config.changenow_network

        headers = {"x-changenow-api-key": self.api_key} if self.api_key else {}

        logger.debug(
            f"[changenow] Fetching estimate {params['fromCurrency']} -> {params['toCurrency']}"
        )
        data = await self._get_json(
            f"{CHANGENOW_API_V2}/exchange/estimated-amount", params=params, headers=headers
        )
        if not data or not data.get("toAmount"):
            return None

        return build_quote(
            self.provider_id,
            self.name,
            request,
            str(data["toAmount"]),
            estimated_time_seconds=parse_time_estimate(data.get("transactionSpeedForecast")),
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
            metadata={"rate_id": data.get("rateId"), "flow": data.get("flow")},
        )
