"""Data model for a loaded handler file.

A handler module is a tagged mapping from the fixed method enumeration
(plus ``default``) to the functions the file defines. Selection works on
this mapping only, independent of how the file was loaded.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from faaspy.http.request import METHODS

DEFAULT_EXPORT = "default"

HandlerFunc = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class HandlerModule:
    """Functions exported by one handler file.

    Attributes:
        path: Absolute path of the file the functions came from.
        revision: Content digest of the file when it was executed.
        handlers: Method name (``"GET"``, ...) to function.
        default: The ``default`` function, if the file defines one.
    """

    path: Path
    revision: str
    handlers: Mapping[str, HandlerFunc] = field(
        default_factory=lambda: MappingProxyType({})
    )
    default: HandlerFunc | None = None

    @property
    def methods(self) -> tuple[str, ...]:
        """Method names with a function, in canonical method order."""
        return tuple(m for m in METHODS if m in self.handlers)

    @property
    def exports(self) -> tuple[str, ...]:
        """Every method-shaped export, ``default`` included when present."""
        if self.default is not None:
            return (*self.methods, DEFAULT_EXPORT)
        return self.methods

    @classmethod
    def from_namespace(
        cls,
        path: Path,
        revision: str,
        namespace: Mapping[str, Any],
        module_name: str,
    ) -> "HandlerModule":
        """Collect handler functions from an executed module namespace.

        ``GET``, ``POST``, ... count whenever they are callable. The
        lower-case spellings (``get``, ``post``, ...) count only when the
        function is defined in the file itself, so ``from httpx import get``
        does not turn into a route. Upper-case wins when both exist.
        """
        handlers: dict[str, HandlerFunc] = {}
        for method in METHODS:
            func = namespace.get(method)
            if callable(func):
                handlers[method] = func
                continue
            func = namespace.get(method.lower())
            if callable(func) and getattr(func, "__module__", None) == module_name:
                handlers[method] = func

        default = namespace.get(DEFAULT_EXPORT)
        return cls(
            path=path,
            revision=revision,
            handlers=MappingProxyType(handlers),
            default=default if callable(default) else None,
        )
