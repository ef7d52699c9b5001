"""Handler file loading with content-addressed hot reload.

Every load computes a revision (digest of the file bytes). A cached module
is reused only when the revision matches; otherwise the entry for that
path is invalidated and the file is executed again. Editing a handler on
disk is therefore visible on the very next request, without restarting.

Source files are compiled from the same bytes that were hashed, and no
bytecode is written back to disk.
"""

import hashlib
import importlib.util
import logging
import sys
import threading
from pathlib import Path
from types import ModuleType

from faaspy.errors import HandlerLoadError
from faaspy.routing.types import HandlerModule

logger = logging.getLogger("faaspy.dispatch")


def file_revision(data: bytes) -> str:
    """Revision tag for a handler file's contents."""
    return hashlib.sha256(data).hexdigest()[:16]


def module_name_for(path: Path) -> str:
    """Stable ``sys.modules`` key for a handler file."""
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"_faaspy_handler_{digest}"


class HandlerLoader:
    """Load handler files into :class:`HandlerModule` objects.

    Thread safety:
        The cache is a plain dict guarded by a lock for writes. Loads of
        different paths never interfere. Two concurrent loads of the same
        path may both execute the file; the last one to finish wins.
    """

    __slots__ = ("_cache", "_lock")

    def __init__(self) -> None:
        self._cache: dict[Path, HandlerModule] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, path: object) -> bool:
        return path in self._cache

    def load(self, path: Path) -> HandlerModule:
        """Return the handler module for *path*, executing it if it changed.

        Raises:
            HandlerLoadError: If the file cannot be read, fails to compile,
                or raises while its module body runs.
        """
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise HandlerLoadError(path, exc) from exc

        revision = file_revision(data)
        cached = self._cache.get(path)
        if cached is not None and cached.revision == revision:
            return cached

        self.invalidate(path)
        logger.debug("Executing handler file %s (revision %s)", path, revision)

        name = module_name_for(path)
        try:
            module = _execute(name, path, data)
        except (Exception, SystemExit) as exc:
            raise HandlerLoadError(path, exc) from exc

        handler_module = HandlerModule.from_namespace(path, revision, vars(module), name)
        with self._lock:
            self._cache[path] = handler_module
        return handler_module

    def invalidate(self, path: Path) -> None:
        """Forget any cached module state for *path*."""
        with self._lock:
            self._cache.pop(path, None)
            sys.modules.pop(module_name_for(path), None)

    def clear(self) -> None:
        """Forget every cached handler module."""
        with self._lock:
            for path in self._cache:
                sys.modules.pop(module_name_for(path), None)
            self._cache.clear()


def _execute(name: str, path: Path, data: bytes) -> ModuleType:
    """Run a handler file as a fresh module named *name*.

    The module is registered in ``sys.modules`` while (and after) its body
    runs so ``dataclasses`` and ``pickle`` can find it by name.
    """
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        msg = f"No module loader for {path.name}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        if path.suffix == ".py":
            code = compile(data, str(path), "exec", dont_inherit=True)
            exec(code, module.__dict__)
        else:
            spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module
