"""Error classification and structured error responses.

Two kinds of failure responses exist:

- Structural answers that are certain: no handler file (404) or no
  function for the method (405). These are built directly by
  :func:`not_found_response` and :func:`method_not_allowed_response`.
- Failures raised while loading or running a handler. These are triaged by
  :func:`classify_error` into an :class:`ErrorKind` and turned into the
  stable JSON error envelope by :func:`build_error_response`::

      {"error": {"id", "type", "message", "suggestion", "documentation",
                 "context", "timestamp"}}

Every envelope carries a short correlation id that also appears in the log
record holding the full exception, so stack traces stay out of responses.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from faaspy._internal.clock import utc_timestamp
from faaspy._internal.ids import short_id
from faaspy.http.response import Response, json_response

logger = logging.getLogger("faaspy.server")

_DOCS = "https://github.com/faaspy/faaspy#readme"
_ISSUES = "https://github.com/faaspy/faaspy/issues"


class ErrorKind(StrEnum):
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    HANDLER_LOAD_FAILED = "HANDLER_LOAD_FAILED"
    HANDLER_EXECUTION_FAILED = "HANDLER_EXECUTION_FAILED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    COMPILE_ERROR = "COMPILE_ERROR"
    DEPENDENCY_ERROR = "DEPENDENCY_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Phase(StrEnum):
    """Dispatch stage a failure happened in."""

    LOADING = "handler_loading"
    EXECUTION = "handler_execution"


@dataclass(frozen=True, slots=True)
class ErrorConfig:
    """Static description of one error kind."""

    status: int
    message: str
    doc_url: str | None = None
    suggestion: str | None = None


ERROR_CONFIGS: Mapping[ErrorKind, ErrorConfig] = MappingProxyType({
    ErrorKind.ROUTE_NOT_FOUND: ErrorConfig(
        status=404,
        message="API route not found",
        doc_url=f"{_DOCS}#route-files",
        suggestion="Create an index.py file in the directory matching your request path",
    ),
    ErrorKind.METHOD_NOT_ALLOWED: ErrorConfig(
        status=405,
        message="HTTP method not allowed",
        doc_url=f"{_DOCS}#handler-exports",
        suggestion=(
            "Export the corresponding HTTP method function (GET, POST, etc.) "
            "or a 'default' function"
        ),
    ),
    ErrorKind.HANDLER_LOAD_FAILED: ErrorConfig(
        status=500,
        message="Failed to load route handler",
        doc_url=f"{_DOCS}#route-files",
        suggestion="Check file syntax and ensure the handler functions are defined at module level",
    ),
    ErrorKind.HANDLER_EXECUTION_FAILED: ErrorConfig(
        status=500,
        message="Handler execution failed",
        doc_url=f"{_DOCS}#route-files",
        suggestion="Check your handler function for runtime errors",
    ),
    ErrorKind.INVALID_RESPONSE: ErrorConfig(
        status=500,
        message="Handler returned invalid response",
        doc_url=f"{_DOCS}#responses",
        suggestion="Handler must return a faaspy.Response (use faaspy.json_response for JSON)",
    ),
    ErrorKind.COMPILE_ERROR: ErrorConfig(
        status=500,
        message="Handler compilation error",
        doc_url=f"{_DOCS}#route-files",
        suggestion="Check your Python syntax and indentation",
    ),
    ErrorKind.DEPENDENCY_ERROR: ErrorConfig(
        status=500,
        message="Dependency import error",
        suggestion=(
            "Ensure dependencies are installed in the server environment and restart faaspy"
        ),
    ),
    ErrorKind.INTERNAL_ERROR: ErrorConfig(
        status=500,
        message="Internal server error",
        doc_url=_ISSUES,
        suggestion=(
            "This is an unexpected error. Please check the logs for more details. "
            "Open an issue if you need help."
        ),
    ),
})

_TYPE_CHECK_PHRASES = ("typescript", "type error")
_DEPENDENCY_PHRASES = (
    "cannot resolve",
    "module not found",
    "cannot find module",
    "no module named",
    "cannot import name",
)
_SYNTAX_PHRASES = (
    "syntaxerror",
    "unexpected token",
    "indentationerror",
    "taberror",
    "invalid syntax",
)


def error_text(error: BaseException) -> str:
    """Lower-cased ``"<TypeName>: <message>"`` used for classification."""
    return f"{type(error).__name__}: {error}".lower()


def classify_error(
    error: BaseException | None,
    context: Mapping[str, Any] | None = None,
) -> ErrorKind:
    """Triage a failure into an :class:`ErrorKind`.

    Best effort over unstructured error text. Rules are checked in order
    and the first match wins; the text rules come before the phase
    fallbacks because they are more specific.
    """
    if error is None:
        return ErrorKind.INTERNAL_ERROR

    text = error_text(error)
    if any(phrase in text for phrase in _TYPE_CHECK_PHRASES):
        return ErrorKind.COMPILE_ERROR
    if any(phrase in text for phrase in _DEPENDENCY_PHRASES):
        return ErrorKind.DEPENDENCY_ERROR
    if any(phrase in text for phrase in _SYNTAX_PHRASES):
        return ErrorKind.COMPILE_ERROR

    phase = (context or {}).get("phase")
    if phase == Phase.EXECUTION:
        return ErrorKind.HANDLER_EXECUTION_FAILED
    if phase == Phase.LOADING:
        return ErrorKind.HANDLER_LOAD_FAILED
    return ErrorKind.INTERNAL_ERROR


def build_error_response(
    kind: ErrorKind,
    context: Mapping[str, Any] | None = None,
    error: BaseException | None = None,
) -> Response:
    """Build the JSON error envelope for *kind* and log it once.

    The log record carries ``error_id``, ``error_type``, ``error_context``
    and, when *error* is given, the exception itself (name, message and
    stack via ``exc_info``).
    """
    config = ERROR_CONFIGS[kind]
    error_id = short_id()
    ctx = {key: str(value) for key, value in (context or {}).items()}

    payload: dict[str, Any] = {
        "id": error_id,
        "type": kind.value,
        "message": config.message,
    }
    if config.suggestion is not None:
        payload["suggestion"] = config.suggestion
    if config.doc_url is not None:
        payload["documentation"] = config.doc_url
    payload["context"] = ctx
    payload["timestamp"] = utc_timestamp()

    logger.error(
        "💥 Error [%s] %s: %s",
        error_id,
        kind.value,
        config.message,
        exc_info=(type(error), error, error.__traceback__) if error is not None else None,
        extra={
            "error_id": error_id,
            "error_type": kind.value,
            "error_context": ctx,
            "original_error": (
                {"name": type(error).__name__, "message": str(error)}
                if error is not None
                else None
            ),
        },
    )

    return Response(
        body=json.dumps({"error": payload}, indent=2, ensure_ascii=False),
        status=config.status,
        content_type="application/json",
        headers=(("X-Error-ID", error_id), ("X-Error-Type", kind.value)),
    )


def handle_error(error: BaseException | None, context: Mapping[str, Any] | None = None) -> Response:
    """Classify *error* and build its error response."""
    kind = classify_error(error, context)
    return build_error_response(kind, context, error)


def not_found_response(path: str) -> Response:
    """404 for a path with no handler file."""
    return json_response(
        {"error": "Route not found", "path": path, "timestamp": utc_timestamp()},
        status=404,
    )


def method_not_allowed_response(method: str, path: str, available: Iterable[str]) -> Response:
    """405 listing the methods the handler file does export."""
    methods = list(available)
    return json_response(
        {
            "error": f"Method {method} not allowed",
            "path": path,
            "availableMethods": methods,
            "timestamp": utc_timestamp(),
        },
        status=405,
        headers={"Allow": ", ".join(methods)},
    )


def internal_error_response() -> Response:
    """Last-resort plain-text 500 used when dispatch itself breaks."""
    return Response(body="Internal Server Error", status=500)
