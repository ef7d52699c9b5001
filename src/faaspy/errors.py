"""faaspy exception hierarchy.

Shared across the loader, dispatcher, config and CLI so every module
raises and catches the same types.
"""

from pathlib import Path


class FaaspyError(Exception):
    """Base for all faaspy-specific errors."""


class ConfigurationError(FaaspyError):
    """Raised when configuration is invalid (bad port, missing root)."""


class HandlerLoadError(FaaspyError):
    """A handler file could not be read, compiled, or executed.

    The original failure is kept as ``cause`` and chained as
    ``__cause__``. Error classification looks at the cause, not at this
    wrapper, so the file path never leaks into the triage text.
    """

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to load handler {path}")


class InvalidResponseError(FaaspyError):
    """A handler returned something that cannot be sent as a ``Response``.

    ``reason`` names the failed check (wrong type, body, status or headers).
    """

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value_type = type(value).__name__
        self.reason = reason or f"expected Response, got {self.value_type}"
        super().__init__(f"Handler returned an invalid response: {self.reason}")
