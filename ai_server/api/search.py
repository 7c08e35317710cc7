"""
Search API

POST /search - Semantic search over place descriptions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ai_server.api.dependencies import search_service_dep
from ai_server.core.settings import settings
from ai_server.services.search_service import SearchService

logger = logging.getLogger(__name__)
router = APIRouter()


# ===================================
# Request/Response Schemas
# ===================================
class SearchRequest(BaseModel):
    """Request for /search."""

    query: str = Field(min_length=1)
    top_k: int = Field(default=settings.DEFAULT_TOP_K, ge=1, le=settings.MAX_TOP_K)


class PlaceResult(BaseModel):
    """A matching place."""

    id: str
    slug: str
    name: str
    similarity: float


class SearchResponse(BaseModel):
    """Response for /search."""

    query: str
    results: list[PlaceResult]
    total: int


# ===================================
# POST /search
# ===================================
@router.post("/search", response_model=SearchResponse)
async def search_places(
    request: SearchRequest,
    service: SearchService = Depends(search_service_dep),
):
    """
    Find places whose description is closest to the query.

    Returns up to top_k places ordered by descending similarity, or an
    empty list while no index has been built.
    """
    try:
        results = await service.search(request.query, top_k=request.top_k)
    except ValueError as e:
        logger.info(f"Rejected search: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return SearchResponse(
        query=request.query,
        results=[
            PlaceResult(
                id=r.entity_id,
                slug=r.slug,
                name=r.display_name,
                similarity=r.similarity_score,
            )
            for r in results
        ],
        total=len(results),
    )
