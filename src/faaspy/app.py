"""faaspy application class.

An ASGI 3.0 callable that serves handler files from a root directory.
There is no route registration: the file system is the route table.
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from faaspy._internal.asgi import Receive, Scope, Send
from faaspy.config import AppConfig
from faaspy.errors import ConfigurationError
from faaspy.server.dispatch import Dispatcher
from faaspy.server.handler import handle_request
from faaspy.server.terminal import BANNER, SUCCESS

logger = logging.getLogger("faaspy.server")


class App:
    """The faaspy application.

    Usage::

        app = App(AppConfig(root="./functions", port=8080))
        app.run()

    Or serve ``create_app`` with any ASGI server.
    """

    __slots__ = ("config", "dispatcher")

    def __init__(self, config: AppConfig | None = None, *, root: str | Path | None = None) -> None:
        config = config or AppConfig()
        if root is not None:
            config = replace(config, root=root)

        if not config.root_path.is_dir():
            msg = f"Handler root is not a directory: {config.root_path}"
            raise ConfigurationError(msg)

        self.config: AppConfig = config
        self.dispatcher = Dispatcher(config.root_path, handler_timeout=config.handler_timeout)

    @property
    def origin(self) -> str:
        return f"http://localhost:{self.config.port}"

    def run(self, host: str | None = None, port: int | None = None, *, reload: bool = False) -> None:
        """Serve the app with pounce. Blocks until the server stops."""
        from faaspy.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=reload,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, dispatcher=self.dispatcher)

    async def startup(self) -> None:
        """Announce the server and hook loop-level error logging."""
        asyncio.get_running_loop().set_exception_handler(_log_loop_exception)
        logger.info("%s", BANNER)
        logger.log(SUCCESS, "🚀 faaspy server started")
        logger.info("Listening on %s", self.origin)
        logger.info("Handler root: %s", self.config.root_path)
        logger.info("API base path: %s", self.config.api_prefix)
        logger.info("Health check: %s%s/health", self.origin, self.config.api_prefix)

    async def shutdown(self) -> None:
        """Log the graceful shutdown and drop cached handler modules."""
        logger.info("🛑 Shutting down gracefully")
        self.dispatcher.loader.clear()

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Log exceptions nobody awaited (background tasks started by handlers)."""
    exc = context.get("exception")
    logger.error(
        "💥 Unhandled exception: %s",
        context.get("message", "unhandled error"),
        exc_info=(type(exc), exc, exc.__traceback__) if exc is not None else None,
    )


def create_app() -> App:
    """Build an App from environment variables (``PORT``, ``FAASPY_ROOT``, ...)."""
    return App(AppConfig.from_env())
