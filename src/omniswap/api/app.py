"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from omniswap.config import get_settings
from omniswap.routing.factory import create_aggregator, create_price_oracle
from omniswap.web.services.quote_service import QuoteService, set_quote_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Builds the shared quote service and owns the price refresh worker.
    """
    # Startup
    settings = get_settings()
    oracle = create_price_oracle(settings)
    service = QuoteService(
        create_aggregator(settings, price_oracle=oracle),
        default_slippage_bps=settings.default_slippage_bps,
    )
    set_quote_service(service)
    app.state.price_oracle = oracle
    if oracle.worker is not None:
        await oracle.worker.start()
    yield
    # Shutdown
    if oracle.worker is not None:
        await oracle.worker.stop()
    set_quote_service(None)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 Bad Request."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="OmniSwap Quotes API",
        description="Multi-provider swap quote aggregation",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register routes
    from omniswap.api.routes import health
    from omniswap.web.controllers import quotes

    app.include_router(health.router, tags=["Health"])
    app.include_router(quotes.router)

    return app


# Default app instance
app = create_app()
