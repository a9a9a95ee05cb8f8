"""Process binary backend (llama.cpp style executables).

Each chat request spawns the binary once:

    <binary> -p <prompt> -n <max_tokens>

and reads the whole reply from standard output. The binary has no
embedding or model listing support; the adapter pairs it with the stand-in
vectorizer and a configured model list.
"""

from collections.abc import Sequence

from snapjournal_ai.backends.process import can_spawn, run_command
from snapjournal_ai.config import settings
from snapjournal_ai.dto import ChatRequest, ChatResponse
from snapjournal_ai.errors import BackendError
from snapjournal_ai.prompts import completion_prompt

MODEL_LABEL = "llama.cpp"


class ProcessBinaryBackend:
    """Process implementation of the ModelBackend protocol.

    Holds no per-request state; concurrent chats spawn independent children.
    """

    def __init__(
        self,
        executable_path: str,
        advertised_models: Sequence[str] | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the process backend.

        Args:
            executable_path: Binary to run (absolute, or resolved on PATH)
            advertised_models: Models reported by list_models. Defaults to settings.
            max_tokens: Value passed with -n. Defaults to settings.
            timeout: Per-call deadline in seconds, None for no deadline.
        """
        self._executable_path = executable_path
        if advertised_models is None:
            advertised_models = settings.process_models
        self._advertised_models = tuple(advertised_models)
        self._max_tokens = max_tokens or settings.process_max_tokens
        self._timeout = timeout

    @property
    def executable_path(self) -> str:
        return self._executable_path

    def chat_argv(self, request: ChatRequest) -> list[str]:
        """Build the argument vector for one chat request."""
        prompt = completion_prompt(request.message, request.context)
        return [self._executable_path, "-p", prompt, "-n", str(self._max_tokens)]

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Run the binary once and return its trimmed stdout.

        Raises:
            BackendError: If the binary cannot start, times out, or exits non-zero
                (stderr is attached to the error)
        """
        result = await run_command(self.chat_argv(request), timeout=self._timeout)
        if not result.ok:
            raise BackendError(
                f"llama.cpp chat failed: {result.stderr.strip()}",
                stderr=result.stderr,
            )

        return ChatResponse(
            response=result.stdout.strip(),
            model=MODEL_LABEL,
            tokens_used=None,
        )

    async def list_models(self) -> list[str]:
        return list(self._advertised_models)

    async def probe(self) -> bool:
        """Check that the binary can be spawned with --help."""
        return await can_spawn([self._executable_path, "--help"], timeout=self._timeout)
