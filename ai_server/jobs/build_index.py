"""
Build Index Job - regenerate the place embedding snapshot

Run out-of-band by an operator or a scheduler, never from a request:

    ai-server-build-index
    ai-server-build-index --corpus places.json --output embeddings.json
    python scripts/generate_embeddings.py --database-url postgresql+psycopg://...

Exit code is 1 when the corpus had places but none could be embedded
(the previous index is kept), 2 when the corpus could not be read or
the snapshot could not be written, 0 otherwise.
"""

import argparse
import asyncio
import json
import logging
import sys

from ai_server.core.logging import setup_logging
from ai_server.core.settings import settings
from ai_server.services.index_builder import BuildReport, CorpusItem, IndexBuilder
from ai_server.vector.embedder import EmbeddingClient
from ai_server.vector.store import EmbeddingIndexStore

logger = logging.getLogger(__name__)


def load_corpus(corpus_path: str | None, database_url: str | None) -> list[CorpusItem]:
    """Read eligible places from a JSON export or from the database."""
    from ai_server.db.engine import get_engine
    from ai_server.db.places_repo import get_eligible_places, load_corpus_file

    if corpus_path:
        items = load_corpus_file(corpus_path)
        logger.info(f"Read {len(items)} places from {corpus_path}")
    else:
        items = get_eligible_places(get_engine(database_url))
        logger.info(f"Found {len(items)} approved places")
    return items


async def run_build(
    corpus: list[CorpusItem],
    output_path: str | None = None,
    embedder: EmbeddingClient | None = None,
) -> BuildReport:
    """Build the index for an already loaded corpus."""
    store = EmbeddingIndexStore(output_path or settings.EMBEDDINGS_PATH)
    builder = IndexBuilder(embedder or EmbeddingClient(), store)
    return await builder.build(corpus)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate place embeddings")
    parser.add_argument(
        "--corpus",
        default=None,
        help="JSON file of places [{id, slug, name, description}] instead of the database",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Place database URL (default: DATABASE_URL)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help=f"Snapshot path (default: {settings.EMBEDDINGS_PATH})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_args(argv)

    try:
        corpus = load_corpus(args.corpus, args.database_url)
    except Exception as e:
        logger.error(f"Error reading places: {e}", exc_info=True)
        return 2

    try:
        report = asyncio.run(run_build(corpus, args.output))
    except OSError as e:
        logger.error(f"Error writing embedding index: {e}", exc_info=True)
        return 2

    print(json.dumps(report.model_dump(), indent=2))

    if corpus and not report.replaced:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
