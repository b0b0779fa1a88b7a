"""Jupiter DEX aggregator integration for Solana.

Jupiter needs explicit mint addresses, so native SOL is quoted as the
wrapped SOL mint.
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Optional

from omniswap.chains import get_wrapped_native_address
from omniswap.routing.amounts import from_smallest_unit, parse_decimal, to_smallest_unit
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

JUPITER_QUOTE_API = "https://quote-api.jup.ag/v6/quote"
SOLANA_CHAIN_ID = "101"


class JupiterProvider(HttpQuoteProvider):
    """Jupiter provider for Solana SPL swaps."""

    @property
    def provider_id(self) -> str:
        return "jupiter"

    @property
    def name(self) -> str:
        return "Jupiter"

    @staticmethod
    def _get_mint(token: Token) -> Optional[str]:
        if token.is_native:
            return get_wrapped_native_address(SOLANA_CHAIN_ID)
        return token.address

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        input_mint = self._get_mint(request.input_token)
        output_mint = self._get_mint(request.output_token)
        if not input_mint or not output_mint:
            return None

        amount = to_smallest_unit(request.input_amount, request.input_token.decimals)
        if amount == "0":
            return None

        logger.debug(f"[jupiter] Fetching quote {input_mint} -> {output_mint}")
        data = await self._get_json(
            JUPITER_QUOTE_API,
            params={
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": amount,
                "slippageBps": request.slippage_bps,
            },
        )
        if not data or not data.get("outAmount"):
            return None

        output_amount = from_smallest_unit(data["outAmount"], request.output_token.decimals)
        price_impact = parse_decimal(data.get("priceImpactPct"))

        route = [
            RouteStep(
                kind=RouteStepKind.SWAP,
                protocol=(plan.get("swapInfo") or {}).get("label") or "Jupiter",
                from_token=request.input_token.symbol,
                to_token=request.output_token.symbol,
                from_chain_id=SOLANA_CHAIN_ID,
                to_chain_id=SOLANA_CHAIN_ID,
            )
            for plan in data.get("routePlan") or []
        ]

        return build_quote(
            self.provider_id,
            self.name,
            request,
            output_amount,
            price_impact_percent=float(price_impact) if price_impact is not None else None,
            route=route,
            metadata={"context_slot": data.get("contextSlot")},
        )
