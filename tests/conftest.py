"""Shared pytest fixtures for pylox tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from pylox.core.runner import Lox


@pytest.fixture
def lox() -> Lox:
    """Return a fresh interpreter session."""
    return Lox()


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes a Lox script into a temp directory."""

    def _write(source: str, name: str = "script.lox") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
