"""Shared fixtures: temporary handler roots."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

WriteHandler = Callable[..., Path]


@pytest.fixture
def write_handler(tmp_path: Path) -> WriteHandler:
    """Write ``<tmp_path>/<route>/<filename>`` with dedented *source*."""

    def write(route: str, source: str, filename: str = "index.py") -> Path:
        directory = tmp_path / route.strip("/")
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / filename
        target.write_text(textwrap.dedent(source), encoding="utf-8")
        return target

    return write
