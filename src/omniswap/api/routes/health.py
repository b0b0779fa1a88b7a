"""Health check endpoints."""

from fastapi import APIRouter

from omniswap.config import get_settings
from omniswap.routing.catalog import build_catalog

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "omniswap"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration and provider info."""
    settings = get_settings()
    catalog = build_catalog(disabled=settings.disabled_provider_ids)
    return {
        "status": "healthy",
        "service": "omniswap",
        "version": "0.1.0",
        "config": settings.get_safe_dict(),
        "providers": [
            {"id": d.id, "name": d.name, "category": d.category.value, "enabled": d.enabled}
            for d in catalog
        ],
    }
