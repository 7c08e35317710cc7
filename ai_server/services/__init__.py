"""Services module."""

from .index_builder import BuildReport, CorpusItem, IndexBuilder
from .search_service import SearchService, get_search_service

__all__ = ["BuildReport", "CorpusItem", "IndexBuilder", "SearchService", "get_search_service"]
