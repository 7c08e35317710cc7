"""
Embedding Index Store - JSON snapshot of place embeddings

File format (compatible with the Node generator):
    [{"id": ..., "slug": ..., "name": ..., "description": ..., "embedding": [...]}, ...]

The snapshot is replaced wholesale; there are no incremental updates.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ai_server.core.errors import IndexCorrupt
from ai_server.core.settings import settings

logger = logging.getLogger(__name__)


class EmbeddingRecord(BaseModel):
    """One embedded place, as persisted in the snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    entity_id: str = Field(alias="id")
    slug: str
    display_name: str = Field(alias="name")
    source_text: str = Field(default="", alias="description")
    vector: list[float] = Field(alias="embedding", min_length=1)

    @field_validator("entity_id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # integer primary keys from older exports
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("source_text", mode="before")
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v

    @property
    def dimension(self) -> int:
        return len(self.vector)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class EmbeddingIndexStore:
    """
    File-backed snapshot store.

    Usage:
        store = EmbeddingIndexStore("embeddings.json")
        store.replace_all(records)
        records = store.load_all()
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.EMBEDDINGS_PATH)

    def exists(self) -> bool:
        return self.path.exists()

    def replace_all(self, records: Iterable[EmbeddingRecord]) -> int:
        """
        Atomically overwrite the snapshot.

        Writes to a temp file next to the target and swaps it in with
        ``os.replace``, so readers see either the old or the new file.

        Returns:
            Number of records written
        """
        payload = [record.to_json() for record in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                os.fchmod(f.fileno(), self._snapshot_mode())
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Saved {len(payload)} embeddings to {self.path}")
        return len(payload)

    def _snapshot_mode(self) -> int:
        # mkstemp creates 0600; keep the existing mode or follow the umask
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def load_all(self) -> list[EmbeddingRecord]:
        """
        Load every record of the current snapshot.

        Returns:
            Records, or [] when no snapshot has been written yet

        Raises:
            IndexCorrupt: the file is unreadable or not a JSON array
        """
        if not self.path.exists():
            logger.info(f"No embedding index at {self.path} yet")
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise IndexCorrupt(str(self.path), str(e)) from e

        if not isinstance(raw, list):
            raise IndexCorrupt(str(self.path), f"expected a JSON array, got {type(raw).__name__}")

        records = []
        for position, entry in enumerate(raw):
            try:
                records.append(EmbeddingRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(
                    f"Dropping malformed index entry #{position}: {e.error_count()} error(s)"
                )

        dropped = len(raw) - len(records)
        logger.info(
            f"Loaded {len(records)} place embeddings from {self.path}"
            + (f" ({dropped} dropped)" if dropped else "")
        )
        return records
