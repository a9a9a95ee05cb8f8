"""
Tests for the SnapJournal AI HTTP API.
"""

import sys

import pytest
from fastapi.testclient import TestClient

from snapjournal_ai.api.app import app
from snapjournal_ai.api.dependencies import get_adapter, get_handler
from snapjournal_ai.handlers import AIHandler
from snapjournal_ai.services import LanguageModelAdapter

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake binaries are /bin/sh wrappers")


@pytest.fixture
def adapter(echo_binary):
    """Adapter on the process backend, driving a binary that echoes its prompt."""
    return LanguageModelAdapter("process-binary", echo_binary, advertised_models=["llama2:7b", "codellama:7b"])


@pytest.fixture
def client(adapter):
    """Create a test client with the adapter injected."""
    app.dependency_overrides[get_adapter] = lambda: adapter
    app.dependency_overrides[get_handler] = lambda: AIHandler(adapter=adapter)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "/ai/chat" in data["endpoints"].values()
    assert data["endpoints"]["config"] == "/ai/config"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["backend"] == "process-binary"
    assert data["real_embeddings"] is False


def test_availability(client):
    response = client.get("/ai/availability")
    assert response.status_code == 200
    assert response.json() == {"available": True, "backend": "process-binary"}


def test_models(client):
    response = client.get("/ai/models")
    assert response.status_code == 200
    assert response.json() == {"models": ["llama2:7b", "codellama:7b"]}


def test_config(client):
    response = client.get("/ai/config")
    assert response.status_code == 200
    assert response.json()["backend"] == "process-binary"


def test_embedding(client):
    """Test embedding endpoint."""
    response = client.post("/ai/embedding", json={"text": "Halo, apa kabar?"})
    assert response.status_code == 200
    data = response.json()
    assert len(data["vector"]) == 384
    assert data["model"] == "mock-embedding"
    assert data["synthetic"] is True


def test_embedding_rejects_empty_text(client):
    response = client.post("/ai/embedding", json={"text": ""})
    assert response.status_code == 422


def test_chat(client):
    """Test chat endpoint."""
    response = client.post("/ai/chat", json={"message": "Why?", "context": "I was late today"})
    assert response.status_code == 200
    data = response.json()
    assert data["response"] == "Context: I was late today\n\nUser: Why?\n\nAssistant:"
    assert data["model"] == "llama.cpp"
    assert data["tokens_used"] is None


def test_chat_backend_failure_is_bad_gateway(fake_binary):
    failing = fake_binary("import sys\nsys.stderr.write('out of memory')\nsys.exit(1)\n")
    adapter = LanguageModelAdapter("process-binary", failing)
    app.dependency_overrides[get_handler] = lambda: AIHandler(adapter=adapter)
    try:
        response = TestClient(app).post("/ai/chat", json={"message": "Hi"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert "out of memory" in response.json()["detail"]


def test_themes_empty(client):
    response = client.post("/ai/themes", json={"entries": []})
    assert response.status_code == 200
    assert response.json() == {"patterns": [], "insights": [], "mood_trends": {}}


def test_uninitialized_service_is_unavailable():
    """Without the lifespan (and no overrides) there is no adapter in app.state."""
    app.dependency_overrides.clear()
    response = TestClient(app).get("/ai/models")
    assert response.status_code == 503
