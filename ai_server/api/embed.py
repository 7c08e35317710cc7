"""
Embedding API

POST /embed - Embed arbitrary text with the configured model
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ai_server.api.dependencies import embedder_dep
from ai_server.vector.embedder import EmbeddingClient

router = APIRouter()


class EmbedRequest(BaseModel):
    """Request for /embed."""

    text: str = Field(min_length=1)


class EmbedResponse(BaseModel):
    """Response for /embed."""

    embedding: list[float]
    dimension: int


@router.post("/embed", response_model=EmbedResponse)
async def embed_text(
    request: EmbedRequest,
    embedder: EmbeddingClient = Depends(embedder_dep),
):
    try:
        vector = await embedder.embed(request.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EmbedResponse(embedding=vector, dimension=len(vector))
