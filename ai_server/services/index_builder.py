"""
Index Builder - batch job that (re)generates the embedding snapshot

Embeds every eligible corpus item one by one. Per-item failures are
logged and skipped; the snapshot is only replaced when at least one
item embedded (or the corpus itself is empty), so a dead model endpoint
never wipes a healthy index.

One build at a time is assumed; concurrent builds are not guarded.
"""

import asyncio
import logging
from typing import Iterable

from pydantic import BaseModel, Field

from ai_server.core.errors import EmbeddingUnavailable
from ai_server.core.logging import Timer
from ai_server.vector.embedder import EmbeddingClient
from ai_server.vector.store import EmbeddingIndexStore, EmbeddingRecord

logger = logging.getLogger(__name__)


# ===================================
# Schemas
# ===================================
class CorpusItem(BaseModel):
    """An eligible place handed over by the corpus collaborator."""

    entity_id: str
    slug: str
    display_name: str
    source_text: str | None = None


class BuildFailure(BaseModel):
    """A corpus item that could not be embedded."""

    entity_id: str
    error: str


class BuildReport(BaseModel):
    """Outcome of a build run."""

    written: int = 0
    failed: int = 0
    skipped: int = 0  # items without text
    replaced: bool = False
    failures: list[BuildFailure] = Field(default_factory=list)
    duration_ms: float = 0.0


# ===================================
# Builder
# ===================================
class IndexBuilder:
    """
    Usage:
        builder = IndexBuilder(embedder, store)
        report = await builder.build(corpus)
    """

    def __init__(self, embedder: EmbeddingClient, store: EmbeddingIndexStore):
        self.embedder = embedder
        self.store = store

    async def build(self, corpus: Iterable[CorpusItem]) -> BuildReport:
        """
        Embed the corpus and replace the snapshot.

        Args:
            corpus: Items already filtered for eligibility

        Returns:
            BuildReport with written / failed / skipped counts
        """
        items = list(corpus)
        logger.info(f"Generating embeddings for {len(items)} places")

        report = BuildReport()
        records: list[EmbeddingRecord] = []

        with Timer("Index build", logger) as timer:
            for item in items:
                text = (item.source_text or "").strip()
                if not text:
                    report.skipped += 1
                    continue

                try:
                    vector = await self.embedder.embed(text)
                except EmbeddingUnavailable as e:
                    logger.error(f"Failed to embed {item.display_name}: {e}")
                    report.failed += 1
                    report.failures.append(BuildFailure(entity_id=item.entity_id, error=str(e)))
                    continue

                records.append(
                    EmbeddingRecord(
                        entity_id=item.entity_id,
                        slug=item.slug,
                        display_name=item.display_name,
                        source_text=text,
                        vector=vector,
                    )
                )
                logger.debug(f"Embedded: {item.display_name}")

            report.written = len(records)

            if report.written == 0 and items:
                logger.warning(
                    f"No place embedded ({report.failed} failed, {report.skipped} skipped); "
                    f"keeping existing index at {self.store.path}"
                )
            else:
                await asyncio.to_thread(self.store.replace_all, records)
                report.replaced = True

        report.duration_ms = round(timer.elapsed_ms, 2)

        logger.info(
            f"Build finished: written={report.written} failed={report.failed} "
            f"skipped={report.skipped} replaced={report.replaced}"
        )
        return report
