"""Backend selector variants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpRunner:
    """A model server reachable over REST (Ollama).

    Attributes:
        base_url: Server root, without a trailing slash
    """

    base_url: str


@dataclass(frozen=True)
class ProcessBinary:
    """A model-runner executable invoked once per request (llama.cpp).

    Attributes:
        executable_path: Absolute path or a name resolved on PATH
    """

    executable_path: str


BackendSelector = HttpRunner | ProcessBinary
