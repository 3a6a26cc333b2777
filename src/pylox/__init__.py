"""
pylox - a Lox expression interpreter.

Scans, parses and evaluates Lox expressions with line-accurate
diagnostics.
"""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import EvalError, LexError, LoxError, ParseError
from .core.runner import Lox, RunResult, run_source

DIST_NAME = "pylox"
_SOURCE_PYPROJECT = _Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version(pyproject: _Path) -> str | None:
    """[project].version of a source checkout's pyproject.toml, if it is ours."""
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DIST_NAME:
        return None
    return project.get("version")


def _get_version() -> str:
    """Source checkouts report their pyproject version; installs report metadata."""
    if found := _checkout_version(_SOURCE_PYPROJECT):
        return found
    try:
        return _metadata_version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "Lox",
    "RunResult",
    "run_source",
    "LoxError",
    "LexError",
    "ParseError",
    "EvalError",
]
