"""
Index API

GET /index - Cached index statistics
POST /index/reload - Reload the snapshot after a rebuild
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ai_server.api.dependencies import search_service_dep
from ai_server.services.search_service import SearchService

logger = logging.getLogger(__name__)
router = APIRouter()


class IndexStatsResponse(BaseModel):
    """Response for /index."""

    loaded: bool
    size: int
    dimension: int | None
    corrupt: bool
    path: str


@router.get("/index", response_model=IndexStatsResponse)
def index_stats(service: SearchService = Depends(search_service_dep)):
    """Report what the search cache currently holds (nothing until first search)."""
    return IndexStatsResponse(**service.stats())


@router.post("/index/reload")
async def reload_index(service: SearchService = Depends(search_service_dep)):
    """
    Reload the embedding snapshot.

    The cache never refreshes on its own; call this after running the
    build job.
    """
    previous_size = service.stats()["size"]
    new_size = await service.reload()
    stats = service.stats()

    if stats["corrupt"]:
        logger.error(f"Reloaded index is corrupt: {stats['path']}")

    return {
        "status": "corrupt" if stats["corrupt"] else "reloaded",
        "previous_size": previous_size,
        "new_size": new_size,
    }
