"""Terminal output for the faaspy server: banner, log format, tracebacks.

Log lines look like::

    [2026-01-31 12:00:00] 📥 GET /api/health
    [2026-01-31 12:00:00] ✅ GET /api/health -> 200

Traceback verbosity for error records is controlled by the
``FAASPY_TRACEBACK`` environment variable (``compact``, ``full`` or
``minimal``; compact by default).
"""

from __future__ import annotations

import logging
import os
import sys
import time
import traceback as _traceback
from typing import IO

SUCCESS = 25
"""Log level between INFO and WARNING for completed requests."""

logging.addLevelName(SUCCESS, "SUCCESS")

BANNER = """
╔══════════════════════════════════════╗
║             🚀 faaspy                ║
║          File as a Service           ║
║                                      ║
║  Transform your files into APIs      ║
║  Powered by Python + ASGI            ║
╚══════════════════════════════════════╝
"""

_RESET = "\x1b[0m"

# level -> (ANSI colour, glyph)
_LEVEL_STYLES: dict[int, tuple[str, str]] = {
    logging.DEBUG: ("\x1b[35m", "🔍"),
    logging.INFO: ("\x1b[36m", ""),
    SUCCESS: ("\x1b[32m", "✅"),
    logging.WARNING: ("\x1b[33m", "⚠️ "),
    logging.ERROR: ("\x1b[31m", "❌"),
    logging.CRITICAL: ("\x1b[31m", "❌"),
}


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from user code (not stdlib/site-packages/faaspy)."""
    if "site-packages" in filename or filename.startswith("<"):
        return False
    if os.sep + "faaspy" + os.sep in filename:
        return False
    stdlib_prefix = os.path.dirname(os.__file__)
    return not filename.startswith(stdlib_prefix)


def format_compact_traceback(exc: BaseException) -> str:
    """Error summary plus the last few application frames."""
    frames = _traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display_frames = app_frames if app_frames else frames[-3:]

    parts = [f"{type(exc).__name__}: {exc}"]
    if display_frames:
        parts.append("  Trace (app frames):")
        for frame in display_frames[-5:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary with the innermost location."""
    frames = _traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {exc}"


def format_exception(exc: BaseException) -> str:
    """Format *exc* according to ``FAASPY_TRACEBACK``."""
    style = os.environ.get("FAASPY_TRACEBACK", "compact").lower()
    if style == "full":
        return "".join(_traceback.format_exception(exc)).rstrip()
    if style == "minimal":
        return format_minimal_error(exc)
    return format_compact_traceback(exc)


class TerminalFormatter(logging.Formatter):
    """Timestamped, coloured single-line records with indented tracebacks."""

    def __init__(self, *, color: bool = False) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        colour, glyph = _LEVEL_STYLES.get(record.levelno, ("", ""))
        head = f"[{stamp}] {glyph} " if glyph else f"[{stamp}] "
        text = head + record.getMessage()

        if record.exc_info and record.exc_info[1] is not None:
            detail = format_exception(record.exc_info[1])
            text += "\n" + "\n".join(f"    {line}" for line in detail.splitlines())

        if self.color and colour:
            return f"{colour}{text}{_RESET}"
        return text


def _wants_color(stream: IO[str]) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(level: str = "info", stream: IO[str] | None = None) -> logging.Logger:
    """Install the terminal formatter on the ``faaspy`` logger.

    Safe to call more than once: the previous faaspy handler is replaced.
    """
    target = stream if stream is not None else sys.stderr
    root = logging.getLogger("faaspy")
    for existing in list(root.handlers):
        if isinstance(existing.formatter, TerminalFormatter):
            root.removeHandler(existing)

    handler = logging.StreamHandler(target)
    handler.setFormatter(TerminalFormatter(color=_wants_color(target)))
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
    return root
