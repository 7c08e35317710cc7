"""
Shared fixtures for contract tests.

The app runs with its dependencies overridden: a stub embedder and a
search service over a temp snapshot.
"""

import pytest
from fastapi.testclient import TestClient

from ai_server.api.dependencies import embedder_dep, search_service_dep
from ai_server.main import app
from ai_server.services.search_service import SearchService
from ai_server.vector.cache import IndexCache


@pytest.fixture
def search_service(embedder, store, records):
    store.replace_all(records)
    return SearchService(embedder=embedder, cache=IndexCache(store))


@pytest.fixture
def client(embedder, search_service):
    """FastAPI test client."""
    app.dependency_overrides[embedder_dep] = lambda: embedder
    app.dependency_overrides[search_service_dep] = lambda: search_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_search_request():
    """Valid search request."""
    return {"query": "palace", "top_k": 1}
