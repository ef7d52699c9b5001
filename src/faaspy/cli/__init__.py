"""Command line interface: ``faaspy run``.

Registered as the ``faaspy`` console script; ``python -m faaspy`` is the
same entry point.
"""

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="faaspy",
        description="Serve a directory of handler files as HTTP endpoints.",
    )
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="Serve a directory of handler files")
    run.add_argument(
        "--root",
        help="Handler root directory (default: $FAASPY_ROOT or the current directory)",
    )
    run.add_argument("--host", help="Bind host address (default: $HOST or 0.0.0.0)")
    run.add_argument("--port", type=int, help="Bind port number (default: $PORT or 3000)")
    run.add_argument("--workers", type=int, help="Worker processes (default: $WORKERS or 1)")
    run.add_argument(
        "--reload",
        action="store_true",
        help="Restart when faaspy itself changes; handler files always hot-reload",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``faaspy`` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        from faaspy.cli._run import run_command

        run_command(args)
        return

    parser.print_help()
    sys.exit(0)
