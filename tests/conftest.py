"""
Shared fixtures.

The embedding model is replaced by a stub that maps known texts to fixed
vectors, so no test talks to a real endpoint.
"""

import pytest

from ai_server.core.errors import EmbeddingUnavailable
from ai_server.services.index_builder import CorpusItem
from ai_server.vector.store import EmbeddingIndexStore, EmbeddingRecord


class StubEmbedder:
    """Drop-in for EmbeddingClient with canned vectors."""

    def __init__(self, vectors: dict[str, list[float]] | None = None):
        self.vectors = dict(vectors or {})
        self.failing: set[str] = set()
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValueError("Text to embed must be non-empty")
        self.calls.append(text)
        if text in self.failing or text not in self.vectors:
            raise EmbeddingUnavailable(f"stub has no vector for {text!r}")
        return list(self.vectors[text])


@pytest.fixture
def embedder():
    """Stub embedder for the two-place example corpus and a 'palace' query."""
    return StubEmbedder(
        {
            "market in district 1": [1.0, 0.0],
            "historic palace": [0.0, 1.0],
            "palace": [0.1, 0.9],
            "market": [0.9, 0.1],
        }
    )


@pytest.fixture
def corpus():
    """Two approved places."""
    return [
        CorpusItem(
            entity_id="1",
            slug="cho-ben-thanh",
            display_name="Chợ Bến Thành",
            source_text="market in district 1",
        ),
        CorpusItem(
            entity_id="2",
            slug="dinh-doc-lap",
            display_name="Dinh Độc Lập",
            source_text="historic palace",
        ),
    ]


@pytest.fixture
def records():
    """Index records matching the example corpus."""
    return [
        EmbeddingRecord(
            entity_id="1",
            slug="cho-ben-thanh",
            display_name="Chợ Bến Thành",
            source_text="market in district 1",
            vector=[1.0, 0.0],
        ),
        EmbeddingRecord(
            entity_id="2",
            slug="dinh-doc-lap",
            display_name="Dinh Độc Lập",
            source_text="historic palace",
            vector=[0.0, 1.0],
        ),
    ]


@pytest.fixture
def store(tmp_path):
    """Empty snapshot store in a temp dir."""
    return EmbeddingIndexStore(tmp_path / "embeddings.json")
