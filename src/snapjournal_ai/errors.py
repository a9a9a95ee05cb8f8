"""Error types raised by the language-model adapter.

Callers see one of three outcomes from an adapter call: a value, a typed
error from this module, or a cancellation.
"""

import asyncio


class AdapterError(Exception):
    """Base class for adapter errors."""


class ConfigError(AdapterError, ValueError):
    """Invalid adapter configuration (unknown backend tag, malformed URL, ...).

    Raised only while constructing settings or the adapter.
    """


class BackendError(AdapterError):
    """A backend call failed.

    Covers transport failures, non-success process exits, undecodable
    responses and missing response fields.

    Attributes:
        stderr: Standard error of the failed child process, if any
        status_code: HTTP status returned by the runner, if any
    """

    def __init__(
        self,
        message: str,
        *,
        stderr: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.status_code = status_code


class Cancelled(asyncio.CancelledError):
    """An in-flight backend call was cancelled by the host.

    Subclasses ``asyncio.CancelledError`` so the surrounding task still
    finishes as cancelled.
    """
