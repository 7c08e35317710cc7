"""Health check endpoint with settings and index info."""

from fastapi import APIRouter, Depends

from ai_server.api.dependencies import search_service_dep
from ai_server.core.settings import settings
from ai_server.services.search_service import SearchService

router = APIRouter()


@router.get("/health")
def health(service: SearchService = Depends(search_service_dep)):
    """
    Health check endpoint.

    Returns:
        - status: "ok", or "degraded" when the loaded index is corrupt
        - index: cache statistics
        - settings: public configuration (no secrets)
    """
    index_stats = service.stats()
    return {
        "status": "degraded" if index_stats["corrupt"] else "ok",
        "index": index_stats,
        "settings": settings.get_public_settings(),
    }


@router.get("/health/simple")
def health_simple():
    """Simple health check (for load balancers)."""
    return {"status": "ok"}
