"""
Contract tests for /embed, /health and the root endpoint.
"""


class TestEmbedContract:
    """Contract tests for POST /embed."""

    def test_embed_returns_vector(self, client):
        response = client.post("/embed", json={"text": "historic palace"})
        assert response.status_code == 200
        assert response.json() == {"embedding": [0.0, 1.0], "dimension": 2}

    def test_missing_text_returns_422(self, client):
        response = client.post("/embed", json={})
        assert response.status_code == 422

    def test_empty_text_returns_422(self, client):
        response = client.post("/embed", json={"text": ""})
        assert response.status_code == 422

    def test_model_unavailable_returns_503(self, client):
        response = client.post("/embed", json={"text": "no vector for this"})
        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "embedding_unavailable"
        assert "detail" in data


class TestHealthContract:
    """Contract tests for health and status endpoints."""

    def test_health_response_schema(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "index" in data
        assert "embedding_model" in data["settings"]

    def test_health_has_no_secrets(self, client):
        settings = client.get("/health").json()["settings"]
        assert not any("key" in k and k != "api_key_configured" for k in settings)

    def test_simple_health(self, client):
        assert client.get("/health/simple").json() == {"status": "ok"}

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "name" in data and "version" in data

    def test_404_returns_json(self, client):
        response = client.get("/nonexistent/endpoint/xyz")
        assert response.status_code == 404
        assert "detail" in response.json()
