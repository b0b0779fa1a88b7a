"""LI.FI cross-chain aggregator integration.

LI.FI aggregates bridges and DEXes across EVM chains and returns a single
best route per quote call.
API docs: https://docs.li.fi/li.fi-api/li.fi-api/requesting-a-quote
"""

import logging
from typing import Optional

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

LIFI_API = "https://li.quest/v1"


class LiFiProvider(HttpQuoteProvider):
    """LI.FI bridge aggregator provider."""

    @property
    def provider_id(self) -> str:
        return "lifi"

    @property
    def name(self) -> str:
        return "LI.FI"

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        from_amount = to_smallest_unit(request.input_amount, request.input_token.decimals)
        if from_amount == "0":
            return None

        params = {
            "fromChain": str(request.input_chain.id),
            "toChain": str(request.output_chain.id),
            "fromToken": evm_token_address(request.input_token.address),
            "toToken": evm_token_address(request.output_token.address),
            "fromAmount": from_amount,
            "fromAddress": request.user_address or ZERO_ADDRESS,
            "slippage": request.slippage_bps / 10000,
        }

        logger.debug(
            f"[lifi] Fetching quote {request.input_chain.id} -> {request.output_chain.id}"
        )
        data = await self._get_json(f"{LIFI_API}/quote", params=params)
        if not data or not data.get("estimate"):
            return None

        estimate = data["estimate"]
        output_amount = from_smallest_unit(
            estimate.get("toAmount", "0"), request.output_token.decimals
        )

        gas_costs = estimate.get("gasCosts") or []
        first_gas = gas_costs[0] if gas_costs else {}
        gas_usd = parse_decimal(first_gas.get("amountUSD"))
        duration = parse_decimal(estimate.get("executionDuration"))

        return build_quote(
            self.provider_id,
            self.name,
            request,
            output_amount,
            estimated_gas=first_gas.get("amount"),
            estimated_gas_usd=float(gas_usd) if gas_usd is not None else None,
            estimated_time_seconds=int(duration) if duration is not None else None,
            route=[self._parse_step(step) for step in data.get("includedSteps") or []],
            metadata={"tool": data.get("tool")},
        )

    @staticmethod
    def _parse_step(step: dict) -> RouteStep:
        action = step.get("action") or {}
        tool_details = step.get("toolDetails") or {}
        from_chain = action.get("fromChainId")
        to_chain = action.get("toChainId")

        return RouteStep(
            kind=RouteStepKind.BRIDGE if step.get("type") == "cross" else RouteStepKind.SWAP,
            protocol=tool_details.get("name") or step.get("tool") or "LI.FI",
            from_token=(action.get("fromToken") or {}).get("symbol"),
            to_token=(action.get("toToken") or {}).get("symbol"),
            from_chain_id=str(from_chain) if from_chain is not None else None,
            to_chain_id=str(to_chain) if to_chain is not None else None,
        )
