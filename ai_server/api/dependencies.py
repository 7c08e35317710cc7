"""FastAPI dependency providers; override them in tests."""

from ai_server.services.search_service import SearchService, get_search_service
from ai_server.vector.embedder import EmbeddingClient, get_embedder


def search_service_dep() -> SearchService:
    return get_search_service()


def embedder_dep() -> EmbeddingClient:
    return get_embedder()
