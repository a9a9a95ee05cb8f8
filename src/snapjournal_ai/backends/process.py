"""Child-process plumbing shared by the backends.

Both pipes are always drained with ``communicate()`` so a chatty child can
never block on a full pipe. On timeout or cancellation the child is killed
and reaped before the error surfaces.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from snapjournal_ai.errors import BackendError, Cancelled
from snapjournal_ai.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished child process."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Whether the child exited with status 0."""
        return self.returncode == 0


async def run_command(argv: Sequence[str], timeout: float | None = None) -> CommandResult:
    """Run a command to completion and capture its output.

    Args:
        argv: Program and arguments (no shell involved)
        timeout: Seconds to wait for the child, or None to wait forever

    Returns:
        CommandResult with decoded stdout/stderr

    Raises:
        BackendError: If the child cannot be spawned or the deadline passes
        Cancelled: If the awaiting task is cancelled
    """
    program = argv[0]
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise BackendError(f"Failed to start {program}: {e}") from e
    except asyncio.CancelledError as e:
        raise Cancelled(f"Starting {program} was cancelled") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        await _kill_and_reap(process)
        raise BackendError(f"{program} timed out after {timeout}s") from e
    except asyncio.CancelledError as e:
        await _kill_and_reap(process)
        raise Cancelled(f"{program} was cancelled") from e

    result = CommandResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    logger.debug("%s exited with status %s", program, result.returncode)
    return result


async def can_spawn(argv: Sequence[str], timeout: float | None = None) -> bool:
    """Check whether a command can be started and run to completion.

    The exit status is not examined. Cancellation still propagates.

    Returns:
        True if the child spawned and finished, False on any error
    """
    try:
        await run_command(argv, timeout=timeout)
        return True
    except Exception as e:
        logger.debug("Probe of %s failed: %s", argv[0], e)
        return False


async def _kill_and_reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            # already exited between the check and the signal
            pass
    await process.wait()
