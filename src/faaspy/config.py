"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups. ``AppConfig.from_env()`` reads the process environment.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from faaspy.errors import ConfigurationError

_TRUTHY = frozenset({"true", "1", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = AppConfig(root="./functions", port=8080)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1
    debug: bool = False

    # Handler files are resolved below this directory
    root: str | Path = "."
    api_prefix: str = "/api"

    # Seconds before an async handler is cancelled (None = no limit)
    handler_timeout: float | None = None

    log_level: str = "info"

    @property
    def root_path(self) -> Path:
        """The handler root as an absolute path."""
        return Path(self.root).resolve()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables.

        Recognised: ``HOST``, ``PORT``, ``WORKERS``, ``DEBUG``,
        ``FAASPY_ROOT``, ``FAASPY_HANDLER_TIMEOUT``, ``LOG_LEVEL``.

        Raises:
            ConfigurationError: If a numeric setting does not parse.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get("HOST", defaults.host),
            port=_parse_port(env.get("PORT")),
            workers=_parse_int("WORKERS", env.get("WORKERS"), defaults.workers),
            debug=env.get("DEBUG", "").lower() in _TRUTHY,
            root=env.get("FAASPY_ROOT", defaults.root),
            handler_timeout=_parse_timeout(env.get("FAASPY_HANDLER_TIMEOUT")),
            log_level=env.get("LOG_LEVEL", defaults.log_level).lower(),
        )


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from None


def check_port(port: int) -> int:
    """Return *port* if it is a usable TCP port, else raise ConfigurationError."""
    if not 0 < port < 65536:
        msg = f"PORT must be between 1 and 65535, got {port}"
        raise ConfigurationError(msg)
    return port


def _parse_port(raw: str | None) -> int:
    return check_port(_parse_int("PORT", raw, 3000))


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        msg = f"FAASPY_HANDLER_TIMEOUT must be a number, got {raw!r}"
        raise ConfigurationError(msg) from None
    if value <= 0:
        msg = f"FAASPY_HANDLER_TIMEOUT must be positive, got {value}"
        raise ConfigurationError(msg)
    return value
