"""Quote API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from omniswap.routing.base import QuoteValidationError
from omniswap.web.contracts.quotes import BestQuoteResponse, MultiQuoteResponse, QuoteRequest
from omniswap.web.services.quote_service import QuoteService, get_quote_service

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/", response_model=MultiQuoteResponse)
async def get_quotes(
    request: QuoteRequest,
    service: QuoteService = Depends(get_quote_service),
) -> MultiQuoteResponse:
    """Get ranked quotes from every applicable provider.

    Quotes are sorted by output amount, best first. An empty list means no
    provider (and no price estimate) could quote the pair.
    This is a READ-ONLY operation - no transactions are executed.
    """
    try:
        return await service.get_quotes(request)
    except QuoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/best", response_model=BestQuoteResponse)
async def get_best_quote(
    request: QuoteRequest,
    service: QuoteService = Depends(get_quote_service),
) -> BestQuoteResponse:
    """Get the single best quote, or null if nobody quoted."""
    try:
        return await service.get_best_quote(request)
    except QuoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
