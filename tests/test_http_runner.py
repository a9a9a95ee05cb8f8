"""
Tests for the Ollama HTTP runner backend.
"""

import asyncio
import json

import httpx
import pytest
from helpers import make_http_backend, ollama_chat_reply, python_command, request_json

from snapjournal_ai.backends import HttpRunnerBackend, parse_model_listing
from snapjournal_ai.dto import ChatRequest
from snapjournal_ai.errors import BackendError, Cancelled

LISTING = "NAME ID SIZE\nllama3.2 abc 4GB\nnomic-embed-text def 300MB\n"


@pytest.mark.asyncio
async def test_chat_happy_path():
    """POSTs a system+user conversation and returns message.content."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": "Hi there"}, "done": True})

    backend = make_http_backend(handler)
    reply = await backend.chat(ChatRequest(message="Hello"))

    assert reply.response == "Hi there"
    assert reply.model == "llama3.2"
    assert reply.tokens_used is None

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://localhost:11434/api/chat"
    assert request.headers["content-type"] == "application/json"
    body = request_json(request)
    assert body["model"] == "llama3.2"
    assert body["stream"] is False
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert body["messages"][0]["content"].startswith("You are a helpful AI introspection companion for ")
    assert body["messages"][1]["content"] == "Hello"


@pytest.mark.asyncio
async def test_chat_body_round_trips_through_echo_server():
    """The composed body survives serialize/deserialize unchanged."""

    def handler(request: httpx.Request) -> httpx.Response:
        return ollama_chat_reply(request.content.decode())

    backend = make_http_backend(handler)
    chat_request = ChatRequest(message="Why?", context="I was late today", model="mistral")
    reply = await backend.chat(chat_request)

    assert json.loads(reply.response) == backend.chat_payload(chat_request)
    assert reply.model == "mistral"


@pytest.mark.asyncio
async def test_chat_reports_token_counts():
    backend = make_http_backend(lambda request: ollama_chat_reply("ok", prompt_eval_count=12, eval_count=30))
    reply = await backend.chat(ChatRequest(message="Hello"))
    assert reply.tokens_used == 42


@pytest.mark.asyncio
async def test_chat_ignores_boolean_token_counts():
    backend = make_http_backend(lambda request: ollama_chat_reply("ok", prompt_eval_count=True, eval_count=30))
    reply = await backend.chat(ChatRequest(message="Hello"))
    assert reply.tokens_used == 30


@pytest.mark.asyncio
async def test_chat_error_status_carries_status_code():
    backend = make_http_backend(lambda request: httpx.Response(500, text="model crashed"))

    with pytest.raises(BackendError) as exc_info:
        await backend.chat(ChatRequest(message="Hello"))

    assert exc_info.value.status_code == 500
    assert "500" in str(exc_info.value)


@pytest.mark.asyncio
async def test_chat_non_json_body():
    backend = make_http_backend(lambda request: httpx.Response(200, text="<html>proxy error</html>"))

    with pytest.raises(BackendError, match="non-JSON"):
        await backend.chat(ChatRequest(message="Hello"))


@pytest.mark.parametrize(
    "body",
    [
        {"done": True},
        {"message": "Hi there"},
        {"message": {"role": "assistant"}},
        {"message": {"content": 42}},
    ],
)
@pytest.mark.asyncio
async def test_chat_missing_message_content(body):
    backend = make_http_backend(lambda request: httpx.Response(200, json=body))

    with pytest.raises(BackendError, match="message.content"):
        await backend.chat(ChatRequest(message="Hello"))


@pytest.mark.asyncio
async def test_chat_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    backend = make_http_backend(handler)

    with pytest.raises(BackendError, match="ollama serve"):
        await backend.chat(ChatRequest(message="Hello"))


@pytest.mark.asyncio
async def test_chat_cancellation_surfaces_as_cancelled():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(30)
        return ollama_chat_reply("too late")

    backend = make_http_backend(handler)

    async def call() -> str:
        try:
            await backend.chat(ChatRequest(message="Hello"))
        except Cancelled:
            return "cancelled"
        return "finished"

    task = asyncio.create_task(call())
    await started.wait()
    task.cancel()

    assert await task == "cancelled"


@pytest.mark.asyncio
async def test_encode_reads_embeddings():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"model": "nomic-embed-text", "embeddings": [[0.1, -0.2, 0.3]]})

    backend = make_http_backend(handler)
    vector = await backend.encode("hello")

    assert vector == [0.1, -0.2, 0.3]
    assert seen[0].url.path == "/api/embed"
    assert request_json(seen[0]) == {"model": "nomic-embed-text", "input": "hello"}


@pytest.mark.asyncio
async def test_encode_accepts_singular_embedding_field():
    backend = make_http_backend(lambda request: httpx.Response(200, json={"embedding": [1, 0]}))
    assert await backend.encode("hello", model="all-minilm") == [1.0, 0.0]


@pytest.mark.asyncio
async def test_encode_unexpected_format():
    backend = make_http_backend(lambda request: httpx.Response(200, json={"embeddings": []}))

    with pytest.raises(BackendError, match="Unexpected embedding response"):
        await backend.encode("hello")


def test_parse_model_listing_skips_header_and_blank_lines():
    assert parse_model_listing(LISTING) == ["llama3.2", "nomic-embed-text"]
    assert parse_model_listing("NAME ID SIZE\n\n  \nphi3 x 2GB\n") == ["phi3"]
    assert parse_model_listing("") == []


@pytest.mark.asyncio
async def test_list_models_runs_discovery_command():
    backend = HttpRunnerBackend(discovery_command=python_command(f"print({LISTING!r}, end='')"))
    assert await backend.list_models() == ["llama3.2", "nomic-embed-text"]


@pytest.mark.asyncio
async def test_list_models_failed_discovery_is_empty():
    backend = HttpRunnerBackend(discovery_command=python_command("import sys; sys.exit(1)"))
    assert await backend.list_models() == []


@pytest.mark.asyncio
async def test_list_models_spawn_error_is_raised():
    backend = HttpRunnerBackend(discovery_command=["/nonexistent/ollama", "list"])

    with pytest.raises(BackendError, match="Failed to start"):
        await backend.list_models()


@pytest.mark.asyncio
async def test_probe_ignores_exit_status():
    assert await HttpRunnerBackend(discovery_command=python_command("import sys; sys.exit(3)")).probe() is True


@pytest.mark.asyncio
async def test_probe_spawn_error_is_false():
    assert await HttpRunnerBackend(discovery_command=["/nonexistent/ollama", "list"]).probe() is False


@pytest.mark.asyncio
async def test_close_keeps_injected_client_open():
    backend = make_http_backend(lambda request: ollama_chat_reply("ok"))
    client = backend.client

    await backend.close()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_close_releases_own_client():
    backend = HttpRunnerBackend(base_url="http://localhost:11434/")
    client = backend.client

    await backend.close()

    assert client.is_closed
    assert backend.base_url == "http://localhost:11434"
