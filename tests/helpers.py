"""Helpers shared by the test modules."""

import json
import sys

import httpx

from snapjournal_ai.backends import HttpRunnerBackend


def python_command(source: str) -> list[str]:
    """Argument vector running a Python one-liner with the current interpreter."""
    return [sys.executable, "-c", source]


def ollama_chat_reply(content: str, **extra) -> httpx.Response:
    body = {"model": "llama3.2", "message": {"role": "assistant", "content": content}, "done": True}
    body.update(extra)
    return httpx.Response(200, json=body)


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by handler(request)."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_http_backend(handler, **kwargs) -> HttpRunnerBackend:
    return HttpRunnerBackend(
        base_url="http://localhost:11434",
        embedding_model="nomic-embed-text",
        chat_model="llama3.2",
        client=mock_client(handler),
        **kwargs,
    )


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
