"""Route handler diagnostic output into the request logger.

While a handler runs, ``print()`` (stdout), ``sys.stderr`` writes and
``warnings.warn()`` are logged on that request's logger with a fixed
prefix per channel instead of going to the raw process streams.

Redirection is per invocation, not a global swap: a routing proxy is
installed on ``sys.stdout``/``sys.stderr``/``warnings.showwarning`` while
at least one capture is active, and each write is delivered to the
capture stored in the *current* context (``ContextVar``). Overlapping
requests therefore never see each other's output. The original streams
are restored when the last capture exits, whichever way it exits.

Usage::

    with OutputCapture(request_logger):
        result = await invoke(handler, request)
"""

from __future__ import annotations

import logging
import sys
import threading
import warnings
from contextvars import ContextVar, Token
from types import TracebackType
from typing import IO, Any

STDOUT_PREFIX = "    📝 "
WARNING_PREFIX = "    ⚠️  "
STDERR_PREFIX = "    ❌ "

_CHANNELS: dict[str, tuple[int, str]] = {
    "stdout": (logging.INFO, STDOUT_PREFIX),
    "warning": (logging.WARNING, WARNING_PREFIX),
    "stderr": (logging.ERROR, STDERR_PREFIX),
}

_active: ContextVar[OutputCapture | None] = ContextVar("faaspy_output_capture", default=None)

_install_lock = threading.Lock()
_install_count = 0
_saved: tuple[Any, Any, Any] | None = None


class _ChannelRouter:
    """Stand-in for ``sys.stdout``/``sys.stderr`` while captures are active."""

    def __init__(self, original: IO[str], channel: str) -> None:
        self._original = original
        self._channel = channel

    def write(self, text: str) -> int:
        capture = _active.get()
        if capture is None or capture.emitting:
            return self._original.write(text)
        capture.feed(self._channel, text)
        return len(text)

    def flush(self) -> None:
        capture = _active.get()
        if capture is None or capture.emitting:
            self._original.flush()

    def isatty(self) -> bool:
        return self._original.isatty()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._original, name)


def _show_warning(
    message: Warning | str,
    category: type[Warning],
    filename: str,
    lineno: int,
    file: IO[str] | None = None,
    line: str | None = None,
) -> None:
    capture = _active.get()
    if capture is None or capture.emitting:
        original = _saved[2] if _saved is not None else None
        if original is None or original is _show_warning:
            sys.stderr.write(warnings.formatwarning(message, category, filename, lineno, line))
        else:
            original(message, category, filename, lineno, file, line)
        return
    capture.emit("warning", f"{category.__name__}: {message}")


def _install() -> None:
    global _install_count, _saved
    with _install_lock:
        if _install_count == 0:
            _saved = (sys.stdout, sys.stderr, warnings.showwarning)
            sys.stdout = _ChannelRouter(sys.stdout, "stdout")  # type: ignore[assignment]
            sys.stderr = _ChannelRouter(sys.stderr, "stderr")  # type: ignore[assignment]
            warnings.showwarning = _show_warning
        _install_count += 1


def _uninstall() -> None:
    global _install_count, _saved
    with _install_lock:
        _install_count -= 1
        if _install_count == 0 and _saved is not None:
            sys.stdout, sys.stderr, warnings.showwarning = _saved
            _saved = None


def is_installed() -> bool:
    """True while any capture scope is active in the process."""
    return _install_count > 0


class OutputCapture:
    """Scoped capture of one handler invocation's diagnostic output.

    Complete lines are logged as they are written; a trailing partial line
    is logged when the scope exits.
    """

    __slots__ = ("_buffers", "_token", "emitting", "logger")

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter) -> None:
        self.logger = logger
        self.emitting = False
        self._buffers: dict[str, str] = {}
        self._token: Token[OutputCapture | None] | None = None

    def __enter__(self) -> OutputCapture:
        _install()
        self._token = _active.set(self)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.flush()
        finally:
            if self._token is not None:
                _active.reset(self._token)
                self._token = None
            _uninstall()

    def feed(self, channel: str, text: str) -> None:
        """Buffer *text* for *channel* and log every completed line."""
        *lines, rest = (self._buffers.get(channel, "") + text).split("\n")
        self._buffers[channel] = rest
        for line in lines:
            self.emit(channel, line)

    def flush(self) -> None:
        """Log any partial lines still buffered."""
        buffers, self._buffers = self._buffers, {}
        for channel, rest in buffers.items():
            if rest:
                self.emit(channel, rest)

    def emit(self, channel: str, line: str) -> None:
        """Log one line on the request logger with the channel's prefix."""
        level, prefix = _CHANNELS[channel]
        # Writes made by logging handlers while emitting go to the real stream.
        self.emitting = True
        try:
            self.logger.log(level, "%s%s", prefix, line)
        finally:
            self.emitting = False
