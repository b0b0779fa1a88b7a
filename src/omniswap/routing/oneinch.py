"""1inch DEX aggregator integration.

Same-chain swaps on EVM chains via the 1inch Swap API.
API docs: https://portal.1inch.dev/documentation/apis/swap/introduction
"""

import logging
from typing import Optional

import httpx

from omniswap.chains import evm_token_address
from omniswap.routing.amounts import from_smallest_unit, to_smallest_unit
from omniswap.routing.base import (
    HttpQuoteProvider,
    Quote,
    QuoteRequest,
    RouteStep,
    RouteStepKind,
    build_quote,
)

logger = logging.getLogger(__name__)

# 1inch API endpoints
ONEINCH_API_V6 = "https://api.1inch.dev/swap/v6.0"


class OneInchProvider(HttpQuoteProvider):
    """1inch DEX aggregator provider.

    The chain comes from the request; 1inch addresses native assets with the
    0xEeee... marker.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize 1inch provider.

        Args:
            api_key: 1inch API key (required for production)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key

    @property
    def provider_id(self) -> str:
        return "1inch"

    @property
    def name(self) -> str:
        return "1inch"

    def _get_headers(self) -> dict:
        """Get API headers with authorization."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _fetch_quote(self, request: QuoteRequest) -> Optional[Quote]:
        chain_id = str(request.input_chain.id)
        amount = to_smallest_unit(request.input_amount, request.input_token.decimals)
        if amount == "0":
            return None

        logger.debug(f"[1inch] Fetching quote on chain {chain_id}")
        data = await self._get_json(
            f"{ONEINCH_API_V6}/{chain_id}/quote",
            params={
                "src": evm_token_address(request.input_token.address),
                "dst": evm_token_address(request.output_token.address),
                "amount": amount,
            },
            headers=self._get_headers(),
        )
        if not data or not data.get("dstAmount"):
            return None

        output_amount = from_smallest_unit(data["dstAmount"], request.output_token.decimals)
        gas = data.get("gas")

        return build_quote(
            self.provider_id,
            self.name,
            request,
            output_amount,
            estimated_gas=str(gas) if gas is not None else None,
            route=[
                RouteStep(
                    kind=RouteStepKind.SWAP,
                    protocol="1inch",
                    from_token=request.input_token.symbol,
                    to_token=request.output_token.symbol,
                    from_chain_id=chain_id,
                    to_chain_id=chain_id,
                )
            ],
        )
