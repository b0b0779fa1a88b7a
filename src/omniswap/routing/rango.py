"""Rango Exchange cross-chain integration.

Rango takes human-decimal amounts and names tokens as BLOCKCHAIN.SYMBOL
(native) or BLOCKCHAIN.SYMBOL--address (contract tokens).
API docs: https://docs.rango.exchange/api-integration/main-api-multi-step
"""

import logging
from typing import Optional

import httpx

from omniswap.chains import RANGO_BLOCKCHAIN_TO_CHAIN, get_chain_config
from omniswap.routing.amounts import parse_decimal
from omniswap.routing.base import (
    HttpQuoteProvider,
    Quote,
    QuoteRequest,
    RouteStep,
    RouteStepKind,
    Token,
    build_quote,
)

logger = logging.getLogger(__name__)

RANGO_API = "https://api.rango.exchange"


def format_rango_token(token: Token) -> Optional[str]:
    """Rango asset name for a token, or None if its chain is unsupported."""
    config = get_chain_config(token.chain_id)
    if not config or not config.rango_blockchain:
        return None
    if token.is_native:
        return f"{config.rango_blockchain}.{token.symbol}"
    return f"{config.rango_blockchain}.{token.symbol}--{token.address}"


class RangoProvider(HttpQuoteProvider):
    """Rango bridge/DEX meta-aggregator provider."""

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
        return "rango"

    @property
    def name(self) -> str:
        return "Rango"

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        from_asset = format_rango_token(request.input_token)
        to_asset = format_rango_token(request.output_token)
        if not from_asset or not to_asset:
            logger.debug(
                f"[rango] Unsupported chain pair {request.input_chain.id} -> {request.output_chain.id}"
            )
            return None

        params = {
            "from": from_asset,
            "to": to_asset,
            "amount": request.input_amount,
            "slippage": str(request.slippage_percent),
        }
        if self.api_key:
            params["apiKey"] = self.api_key
        if request.user_address:
            params["fromAddress"] = request.user_address
            params["toAddress"] = request.user_address

        logger.debug(f"[rango] Fetching quote {from_asset} -> {to_asset}")
        data = await self._get_json(f"{RANGO_API}/routing/best", params=params)
        if not data or data.get("resultType") != "OK" or not data.get("route"):
            return None

        route = data["route"]
        fee_usd = parse_decimal(route.get("feeUsd"))
        duration = parse_decimal(route.get("estimatedTimeInSeconds"))

        steps = [self._parse_step(step, request) for step in route.get("path") or []]

        return build_quote(
            self.provider_id,
            self.name,
            request,
            str(route.get("outputAmount") or "0"),
            estimated_gas_usd=float(fee_usd) if fee_usd is not None else None,
            estimated_time_seconds=int(duration) if duration is not None else None,
            route=steps,
            metadata={
                "swapper": (route.get("swapper") or {}).get("title"),
                "output_amount_usd": route.get("outputAmountUsd"),
                "request_id": data.get("requestId"),
            },
        )

    @staticmethod
    def _parse_step(step: dict, request: QuoteRequest) -> RouteStep:
        swapper = step.get("swapper") or {}
        step_from = step.get("from") or {}
        step_to = step.get("to") or {}

        return RouteStep(
            kind=RouteStepKind.BRIDGE if step.get("swapperType") == "BRIDGE" else RouteStepKind.SWAP,
            protocol=swapper.get("title") or swapper.get("id") or "Rango",
            from_token=step_from.get("symbol"),
            to_token=step_to.get("symbol"),
            from_chain_id=RANGO_BLOCKCHAIN_TO_CHAIN.get(
                step_from.get("blockchain"), str(request.input_chain.id)
            ),
            to_chain_id=RANGO_BLOCKCHAIN_TO_CHAIN.get(
                step_to.get("blockchain"), str(request.output_chain.id)
            ),
        )
