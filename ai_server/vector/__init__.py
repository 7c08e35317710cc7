"""Embedding, storage and ranking primitives."""

from .cache import IndexCache
from .embedder import EmbeddingClient
from .ranker import RankedResult, SimilarityRanker, cosine_similarity
from .store import EmbeddingIndexStore, EmbeddingRecord

__all__ = [
    "EmbeddingClient",
    "EmbeddingIndexStore",
    "EmbeddingRecord",
    "IndexCache",
    "RankedResult",
    "SimilarityRanker",
    "cosine_similarity",
]
