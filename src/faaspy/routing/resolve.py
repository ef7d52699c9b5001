"""Request path to handler file resolution.

A request to ``/foo/bar`` maps to ``<root>/foo/bar/index.py``. There is no
pattern matching: one directory, one handler file.
"""

import os
from pathlib import Path

# Tried in order; the first file that exists wins.
HANDLER_FILENAMES: tuple[str, ...] = ("index.py", "index.pyc")


def strip_query(path: str) -> str:
    """Drop a ``?query`` suffix from a request path."""
    return path.split("?", 1)[0]


class PathResolver:
    """Map URL paths to handler files below a fixed root.

    Resolution only checks existence; it never reads or writes files.
    Candidates that would escape the root (``..`` segments) are ignored.
    """

    __slots__ = ("root",)

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def candidates(self, path: str) -> list[Path]:
        """Candidate handler files for *path*, most preferred first."""
        clean = strip_query(path).strip("/")
        base = os.path.normpath(os.path.join(self.root, clean))
        return [Path(base, name) for name in HANDLER_FILENAMES]

    def resolve(self, path: str) -> Path | None:
        """Return the first existing candidate for *path*, or ``None``."""
        for candidate in self.candidates(path):
            if not candidate.is_relative_to(self.root):
                continue
            if _is_file(candidate):
                return candidate
        return None

    def relative(self, path: Path) -> str:
        """Display form of a handler file, relative to the root."""
        try:
            return "./" + path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)


def _is_file(path: Path) -> bool:
    # Over-long segments raise ENAMETOOLONG on some Python versions.
    try:
        return path.is_file()
    except OSError:
        return False
