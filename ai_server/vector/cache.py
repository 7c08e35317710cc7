"""
Index Cache

Provides:
- Lazy load of the embedding snapshot on first use
- Single-flight loading (concurrent first callers share one load)
- Immutable snapshot shared by all searches
- Explicit reload for picking up a rebuilt index
"""

import asyncio
import logging
from typing import Any

from ai_server.core.errors import IndexCorrupt
from ai_server.vector.store import EmbeddingIndexStore, EmbeddingRecord

logger = logging.getLogger(__name__)


class IndexCache:
    """
    In-memory copy of the embedding index.

    Reads after the first load take no lock: the snapshot is a tuple and
    is only ever swapped, never mutated.

    Usage:
        cache = IndexCache(EmbeddingIndexStore("embeddings.json"))
        records = await cache.get()   # loads once
        await cache.reload()          # after a rebuild
    """

    def __init__(self, store: EmbeddingIndexStore):
        self.store = store
        self._records: tuple[EmbeddingRecord, ...] | None = None
        self._corrupt = False
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    async def get(self) -> tuple[EmbeddingRecord, ...]:
        """Return the cached snapshot, loading it on first call."""
        records = self._records
        if records is not None:
            return records

        async with self._lock:
            if self._records is None:
                self._records = await self._load()
            return self._records

    async def reload(self) -> int:
        """Re-read the snapshot from the store. Returns the new size."""
        async with self._lock:
            old_size = len(self._records) if self._records is not None else 0
            self._records = await self._load()
            logger.info(f"Index reloaded: {old_size} -> {len(self._records)} records")
            return len(self._records)

    async def _load(self) -> tuple[EmbeddingRecord, ...]:
        logger.info(f"Loading place embeddings from {self.store.path}...")
        try:
            records = await asyncio.to_thread(self.store.load_all)
        except IndexCorrupt as e:
            # Searches degrade to no results; keep it visible in logs and stats
            logger.error(f"Failed to load embeddings: {e}")
            self._corrupt = True
            return ()

        self._corrupt = False
        return tuple(records)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        records = self._records or ()
        return {
            "loaded": self.is_loaded,
            "size": len(records),
            "dimension": records[0].dimension if records else None,
            "corrupt": self._corrupt,
            "path": str(self.store.path),
        }
