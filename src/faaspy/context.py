"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: the ``Request`` being dispatched in this task/thread.
- ``logger_var``: the request logger handler code should write to.

Both are set by the dispatcher around handler invocation and reset
afterwards. ``ContextVar`` values follow the task under asyncio and are
copied into worker threads, so concurrent requests never see each
other's context.
"""

import logging
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any

from faaspy.http.request import Request
from faaspy.server.terminal import SUCCESS

request_var: ContextVar[Request] = ContextVar("faaspy_request")
"""The current request. Set by the dispatcher before invoking a handler."""

logger_var: ContextVar["RequestLogger"] = ContextVar("faaspy_request_logger")
"""The current request logger."""

_handler_logger = logging.getLogger("faaspy.handler")


class RequestLogger(logging.LoggerAdapter):
    """Logger bound to one request.

    Prefixes every message with ``[<id>] <METHOD> <path> - `` and attaches
    ``request_id``, ``method`` and ``path`` to the record.
    """

    def __init__(self, logger: logging.Logger, request_id: str, method: str, path: str) -> None:
        super().__init__(logger, {"request_id": request_id, "method": method, "path": path})
        self.request_id = request_id

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = self.extra or {}
        kwargs["extra"] = {**extra, **kwargs.get("extra", {})}
        prefix = f"[{self.request_id}] {extra.get('method')} {extra.get('path')} - "
        return prefix + str(msg), kwargs

    def success(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log at the SUCCESS level."""
        self.log(SUCCESS, msg, *args, **kwargs)


def get_request() -> Request:
    """Return the request being handled.

    Raises ``LookupError`` if called outside a handler invocation.
    """
    return request_var.get()


def get_logger() -> logging.Logger | RequestLogger:
    """Return the current request's logger.

    Outside a handler invocation this is the plain ``faaspy.handler``
    logger, so handler modules can call it at import time too.
    """
    return logger_var.get(_handler_logger)
