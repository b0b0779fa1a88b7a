"""Socket (Bungee) bridge aggregator integration.

API docs: https://docs.socket.tech/socket-api/v2
"""

import logging
from typing import Optional

import httpx

from omniswap.chains import ZERO_ADDRESS, evm_token_address
from omniswap.routing.amounts import from_smallest_unit, parse_decimal, to_smallest_unit
from omniswap.routing.base import (
    HttpQuoteProvider,
    Quote,
    QuoteRequest,
    RouteStep,
    RouteStepKind,
    build_quote,
)

logger = logging.getLogger(__name__)

SOCKET_QUOTE_API = "https://api.socket.tech/v2/quote"


class SocketProvider(HttpQuoteProvider):
    """Socket bridge aggregator provider."""

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
        return "socket"

    @property
    def name(self) -> str:
        return "Socket"

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        from_chain = str(request.input_chain.id)
        to_chain = str(request.output_chain.id)
        from_amount = to_smallest_unit(request.input_amount, request.input_token.decimals)
        if from_amount == "0":
            return None

        headers = {"API-KEY": self.api_key} if self.api_key else {}

        logger.debug(f"[socket] Fetching quote {from_chain} -> {to_chain}")
        data = await self._get_json(
            SOCKET_QUOTE_API,
            params={
                "fromChainId": from_chain,
                "toChainId": to_chain,
                "fromTokenAddress": evm_token_address(request.input_token.address),
                "toTokenAddress": evm_token_address(request.output_token.address),
                "fromAmount": from_amount,
                "userAddress": request.user_address or ZERO_ADDRESS,
                "uniqueRoutesPerBridge": "true",
                "sort": "output",
            },
            headers=headers,
        )
        if not data or not data.get("success"):
            return None

        routes = (data.get("result") or {}).get("routes") or []
        if not routes:
            return None

        best_route = routes[0]
        output_amount = from_smallest_unit(
            best_route.get("toAmount", "0"), request.output_token.decimals
        )
        gas_usd = parse_decimal(best_route.get("totalGasFeesInUsd"))
        service_time = parse_decimal(best_route.get("serviceTime"))

        route = [
            RouteStep(
                kind=RouteStepKind.BRIDGE,
                protocol=bridge,
                from_token=request.input_token.symbol,
                to_token=request.output_token.symbol,
                from_chain_id=from_chain,
                to_chain_id=to_chain,
            )
            for bridge in best_route.get("usedBridgeNames") or []
        ]

        return build_quote(
            self.provider_id,
            self.name,
            request,
            output_amount,
            estimated_gas_usd=float(gas_usd) if gas_usd is not None else None,
            estimated_time_seconds=int(service_time) if service_time is not None else None,
            route=route,
            metadata={"route_id": best_route.get("routeId")},
        )
