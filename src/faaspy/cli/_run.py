"""``faaspy run`` — start the server for a handler root.

Settings come from the environment (``AppConfig.from_env``); command-line
flags override them.
"""

import argparse
import sys
from dataclasses import replace

from faaspy.app import App
from faaspy.config import AppConfig, check_port
from faaspy.errors import ConfigurationError
from faaspy.server.terminal import configure_logging


def build_app(args: argparse.Namespace) -> App:
    """Build the App for ``faaspy run`` from environment plus flags."""
    config = AppConfig.from_env()
    if args.port is not None:
        check_port(args.port)
    overrides = {
        "root": args.root,
        "host": args.host,
        "port": args.port,
        "workers": args.workers,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    return App(config)


def run_command(args: argparse.Namespace) -> None:
    """Start the faaspy server.

    Exits with status 1 and an ``Error:`` line on stderr when the
    configuration is invalid or the server cannot start.
    """
    try:
        app = build_app(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(app.config.log_level)

    from faaspy.server.dev import run_server

    try:
        run_server(
            app,
            app.config.host,
            app.config.port,
            workers=app.config.workers,
            reload=args.reload,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
