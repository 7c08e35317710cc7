"""
Search service over the place embedding index.

Per query: embed the text, take the cached snapshot (loaded once on
first use), rank every record by cosine similarity and return the top
K. An empty or missing index yields no results rather than an error;
an unreachable embedding model fails the search.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ai_server.core.settings import settings
from ai_server.vector.cache import IndexCache
from ai_server.vector.embedder import EmbeddingClient, get_embedder
from ai_server.vector.ranker import RankedResult, SimilarityRanker
from ai_server.vector.store import EmbeddingIndexStore

logger = logging.getLogger(__name__)


class SearchService:
    """
    Semantic place search.

    Parameters
    ----------
    embedder : EmbeddingClient
        Used to embed query text.
    cache : IndexCache
        Owner of the in-memory snapshot.
    ranker : SimilarityRanker, optional
        Defaults to the brute-force cosine ranker.
    offload_threshold : int, optional
        Index size from which ranking runs in a worker thread so a large
        scan does not stall the event loop.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        cache: IndexCache,
        ranker: SimilarityRanker | None = None,
        offload_threshold: int | None = None,
    ):
        self.embedder = embedder
        self.cache = cache
        self.ranker = ranker or SimilarityRanker()
        self.offload_threshold = (
            settings.RANK_OFFLOAD_THRESHOLD if offload_threshold is None else offload_threshold
        )

    async def search(self, query_text: str, top_k: int) -> list[RankedResult]:
        """Return up to ``top_k`` places ranked by similarity to ``query_text``.

        Raises
        ------
        ValueError
            Empty query or negative ``top_k``.
        EmbeddingUnavailable
            The query could not be embedded.
        """
        if not query_text or not query_text.strip():
            raise ValueError("Query is required")
        if top_k < 0:
            raise ValueError(f"top_k must be >= 0, got {top_k}")

        records = await self.cache.get()
        if not records:
            logger.info("Embedding index is empty, returning no results")
            return []

        logger.info(f"Searching for query: {query_text}")
        query_vec = await self.embedder.embed(query_text)

        if len(records) >= self.offload_threshold:
            results = await asyncio.to_thread(self.ranker.rank, query_vec, records, top_k)
        else:
            results = self.ranker.rank(query_vec, records, top_k)

        logger.debug(f"Top results: {[(r.slug, round(r.similarity_score, 4)) for r in results]}")
        return results

    async def reload(self) -> int:
        """Pick up a rebuilt snapshot."""
        return await self.cache.reload()

    def stats(self) -> dict[str, Any]:
        return self.cache.stats()


# Singleton accessor
_search_service: SearchService | None = None


def get_search_service() -> SearchService:
    """Get the global search service, wired from settings."""
    global _search_service
    if _search_service is None:
        _search_service = SearchService(
            embedder=get_embedder(),
            cache=IndexCache(EmbeddingIndexStore(settings.EMBEDDINGS_PATH)),
        )
    return _search_service
