"""Per-request dispatch: resolve → load → select → invoke → respond.

The dispatcher is the only place that turns a ``Request`` into a
``Response``. It never raises: missing files and unsupported methods are
answered directly (404/405), and any failure while loading or running a
handler is classified and turned into the JSON error envelope.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import anyio
import anyio.to_thread

from faaspy._internal.ids import short_id
from faaspy._internal.invoke import invoke
from faaspy.context import RequestLogger, logger_var, request_var
from faaspy.errors import HandlerLoadError, InvalidResponseError
from faaspy.http.request import Request
from faaspy.http.response import Response, response_problem
from faaspy.routing.loader import HandlerLoader
from faaspy.routing.resolve import PathResolver, strip_query
from faaspy.routing.select import handler_label, select_handler
from faaspy.server.capture import OutputCapture
from faaspy.server.errors import (
    ErrorKind,
    Phase,
    build_error_response,
    handle_error,
    method_not_allowed_response,
    not_found_response,
)
from faaspy.server.terminal import BANNER, SUCCESS

logger = logging.getLogger("faaspy.dispatch")
_handler_logger = logging.getLogger("faaspy.handler")


def banner_response() -> Response:
    """Static banner served at ``/``."""
    return Response(BANNER)


class Dispatcher:
    """Map requests to handler files below *root* and run them.

    Args:
        root: Directory that request paths are resolved against.
        loader: Handler loader; one is created when omitted. Passing a
            shared loader lets several dispatchers reuse one module cache.
        handler_timeout: Seconds an async handler may run before it is
            cancelled and reported as a failure. ``None`` disables it.
    """

    __slots__ = ("handler_timeout", "loader", "reserved", "resolver")

    def __init__(
        self,
        root: str | Path,
        *,
        loader: HandlerLoader | None = None,
        handler_timeout: float | None = None,
    ) -> None:
        self.resolver = PathResolver(root)
        self.loader = loader if loader is not None else HandlerLoader()
        self.handler_timeout = handler_timeout
        # Answered before any file lookup, for every method.
        self.reserved: dict[str, Callable[[], Response]] = {"/": banner_response}

    async def dispatch(self, request: Request) -> Response:
        """Produce the response for *request*. Never raises."""
        method = request.method
        path = strip_query(request.path)
        logger.info("📥 %s %s", method, path)

        reserved = self.reserved.get(path)
        if reserved is not None:
            return reserved()

        try:
            return await self._dispatch(request, method, path)
        except Exception as exc:
            logger.error("💥 Request failed: %s %s", method, path)
            return handle_error(exc, {"method": method, "path": path})

    async def _dispatch(self, request: Request, method: str, path: str) -> Response:
        filepath = self.resolver.resolve(path)
        if filepath is None:
            logger.warning("❌ Route not found: %s", path)
            return not_found_response(path)

        display = self.resolver.relative(filepath)
        logger.info("📁 Loading handler: %s", display)
        context: dict[str, Any] = {"method": method, "path": path}

        try:
            module = await anyio.to_thread.run_sync(self.loader.load, filepath)
        except HandlerLoadError as exc:
            logger.error("❌ Failed to load handler: %s", display)
            return handle_error(exc.cause, {**context, "phase": Phase.LOADING, "file": display})

        func = select_handler(module, method)
        if func is None:
            logger.warning("❌ Method %s not supported for %s", method, path)
            return method_not_allowed_response(method, path, module.methods)

        logger.info("🔧 Executing %s handler", handler_label(module, method))
        context["phase"] = Phase.EXECUTION

        request_logger = RequestLogger(_handler_logger, short_id(), method, path)
        request_token = request_var.set(request)
        logger_token = logger_var.set(request_logger)
        try:
            with OutputCapture(request_logger):
                result = await self._invoke(func, request)
        except (Exception, SystemExit) as exc:
            logger.error("💥 Request failed: %s %s", method, path)
            return handle_error(exc, context)
        finally:
            logger_var.reset(logger_token)
            request_var.reset(request_token)

        problem = response_problem(result)
        if problem is not None:
            logger.error("💥 Invalid response from %s: %s", display, problem)
            return build_error_response(
                ErrorKind.INVALID_RESPONSE, context, InvalidResponseError(result, problem)
            )

        logger.log(SUCCESS, "%s %s -> %d", method, path, result.status)
        return result

    async def _invoke(self, func: Callable[..., Any], request: Request) -> Any:
        if self.handler_timeout is None:
            return await invoke(func, request)
        with anyio.fail_after(self.handler_timeout) as scope:
            result = await invoke(func, request)
        # Worker threads cannot be cancelled, so an overrun shows up only here.
        if anyio.current_time() >= scope.deadline:
            msg = f"Handler exceeded the {self.handler_timeout}s timeout"
            raise TimeoutError(msg)
        return result
