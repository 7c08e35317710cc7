"""
Similarity Ranker - brute-force cosine similarity

Scores every candidate against the query and keeps the top K.
O(N*D) per query, fine for a few thousand places. Swap this class for
an approximate index (LSH, HNSW...) if the corpus outgrows a full scan.
"""

from typing import Sequence

import numpy as np
from pydantic import BaseModel

from ai_server.vector.store import EmbeddingRecord


class RankedResult(BaseModel):
    """A ranked search hit."""

    entity_id: str
    slug: str
    display_name: str
    similarity_score: float


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity with the ranking edge-case policy.

    Returns 0.0 (never NaN, never raises) when the lengths differ or
    either vector has zero magnitude.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    with np.errstate(all="ignore"):
        sim = float(np.dot(va, vb) / (norm_a * norm_b))
    return sim if np.isfinite(sim) else 0.0


class SimilarityRanker:
    """
    Full-scan cosine ranker.

    Usage:
        ranker = SimilarityRanker()
        results = ranker.rank(query_vec, records, top_k=3)
    """

    def score(self, query: Sequence[float], candidates: Sequence[EmbeddingRecord]) -> np.ndarray:
        """Similarity of every candidate to the query, in input order."""
        scores = np.zeros(len(candidates), dtype=np.float64)

        q = np.asarray(query, dtype=np.float64)
        q_norm = np.linalg.norm(q) if q.size else 0.0
        if not candidates or q_norm == 0:
            return scores

        # Only same-dimension vectors are comparable; the rest stay at 0
        comparable = [i for i, c in enumerate(candidates) if len(c.vector) == q.size]
        if not comparable:
            return scores

        matrix = np.asarray([candidates[i].vector for i in comparable], dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1)

        with np.errstate(all="ignore"):
            sims = (matrix @ q) / (norms * q_norm)
        sims = np.where((norms == 0) | ~np.isfinite(sims), 0.0, sims)

        scores[comparable] = sims
        return scores

    def rank(
        self,
        query: Sequence[float],
        candidates: Sequence[EmbeddingRecord],
        top_k: int,
    ) -> list[RankedResult]:
        """
        Rank candidates by cosine similarity to the query.

        Args:
            query: Query vector
            candidates: Indexed records
            top_k: Maximum number of results (0 gives [])

        Returns:
            At most top_k results, best first; ties keep input order
        """
        if top_k < 0:
            raise ValueError(f"top_k must be >= 0, got {top_k}")
        if top_k == 0 or not candidates:
            return []

        scores = self.score(query, candidates)

        # Stable sort on the negated scores keeps input order for ties
        order = np.argsort(-scores, kind="stable")[:top_k]

        return [
            RankedResult(
                entity_id=candidates[i].entity_id,
                slug=candidates[i].slug,
                display_name=candidates[i].display_name,
                similarity_score=float(scores[i]),
            )
            for i in order
        ]
