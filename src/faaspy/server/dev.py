"""Serve a faaspy App with pounce.

Pounce owns the transport: sockets, keep-alive, TLS, and graceful shutdown
on SIGTERM/SIGINT (stop accepting, drain in-flight requests, exit).
Handler files hot-reload on their own; ``reload`` only restarts the
server when faaspy or its dependencies change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from faaspy.errors import ConfigurationError

if TYPE_CHECKING:
    from faaspy.app import App


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app* and block until it stops.

    Args:
        app: The faaspy App (an ASGI callable).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (reload forces a single worker).
        reload: Restart on source changes.
        app_path: Optional ``"module:attribute"`` import string that pounce
            re-imports on reload.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install faaspy[server]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
