import json
from pathlib import Path
from typing import List

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ai_server.db.engine import get_engine
from ai_server.services.index_builder import CorpusItem


def get_eligible_places(engine: Engine | None = None) -> List[CorpusItem]:
    """
    Fetch places that should be searchable.

    Only active, approved places with a description are returned.
    """
    sql = text("""
        select id, slug, name, description
        from places
        where is_active = true
          and status = 'APPROVED'
          and description is not null
    """)

    with (engine or get_engine()).begin() as conn:
        rows = conn.execute(sql).mappings().all()

    return [
        CorpusItem(
            entity_id=str(row["id"]),
            slug=row["slug"],
            display_name=row["name"],
            source_text=row["description"],
        )
        for row in rows
    ]


def load_corpus_file(path: str | Path) -> List[CorpusItem]:
    """
    Read a corpus exported as JSON.

    Accepts the same shape as the index file minus embeddings:
    [{"id", "slug", "name", "description"}, ...]
    """
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)

    if not isinstance(rows, list):
        raise ValueError(f"Corpus file {path} must contain a JSON array")

    return [
        CorpusItem(
            entity_id=str(row["id"]),
            slug=row["slug"],
            display_name=row["name"],
            source_text=row.get("description"),
        )
        for row in rows
    ]
