"""
Configuration for the pylox runner and REPL.

Settings come from an optional ``pylox.toml`` and are then overridden by
environment variables:

    [repl]
    prompt = "lox> "

    [logging]
    level = "DEBUG"

    [debug]
    tokens = true
    ast = true

Environment variables:
    PYLOX_PROMPT        REPL prompt
    PYLOX_LOG_LEVEL     Logging level name (default: WARNING)
    PYLOX_SHOW_TOKENS   Print scanned tokens ("1", "true", "yes", "on")
    PYLOX_SHOW_AST      Print the rendered expression tree

Usage:
    from pylox.core.settings import load_settings

    settings = load_settings()
    logging.basicConfig(level=settings.log_level_number)
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pylox.core.errors import LoxError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "pylox.toml"

PROMPT_ENV_VAR = "PYLOX_PROMPT"
LOG_LEVEL_ENV_VAR = "PYLOX_LOG_LEVEL"
SHOW_TOKENS_ENV_VAR = "PYLOX_SHOW_TOKENS"
SHOW_AST_ENV_VAR = "PYLOX_SHOW_AST"

_DEFAULT_LOG_LEVEL = "WARNING"
_TRUTHY = {"1", "true", "yes", "on"}


class SettingsError(LoxError):
    """Raised when a settings file cannot be read."""

    pass


@dataclass
class LoxSettings:
    """Runner and REPL configuration."""

    prompt: str = "> "
    log_level: str = _DEFAULT_LOG_LEVEL
    show_tokens: bool = False
    show_ast: bool = False

    @property
    def log_level_number(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        level = logging.getLevelName(self.log_level.upper())
        if isinstance(level, int):
            return level
        return logging.WARNING


def _flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LoxSettings:
    """Load settings from a TOML file and the environment.

    Args:
        path: Settings file. Defaults to ./pylox.toml when it exists.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Resolved settings.

    Raises:
        SettingsError: If the file exists but is not valid TOML.
    """
    env = os.environ if environ is None else environ
    settings = LoxSettings()

    if path is None:
        candidate = Path.cwd() / SETTINGS_FILENAME
        path = candidate if candidate.exists() else None

    if path is not None:
        _apply_file(settings, path)

    if PROMPT_ENV_VAR in env:
        settings.prompt = env[PROMPT_ENV_VAR]
    if LOG_LEVEL_ENV_VAR in env:
        settings.log_level = env[LOG_LEVEL_ENV_VAR].upper()
    if SHOW_TOKENS_ENV_VAR in env:
        settings.show_tokens = _flag(env[SHOW_TOKENS_ENV_VAR])
    if SHOW_AST_ENV_VAR in env:
        settings.show_ast = _flag(env[SHOW_AST_ENV_VAR])

    if not isinstance(logging.getLevelName(settings.log_level), int):
        logger.warning("Unknown log level %r, using %s", settings.log_level, _DEFAULT_LOG_LEVEL)
        settings.log_level = _DEFAULT_LOG_LEVEL

    return settings


def _apply_file(settings: LoxSettings, path: Path) -> None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(f"Could not read settings file {path}: {e}") from e

    repl_data = data.get("repl", {})
    logging_data = data.get("logging", {})
    debug_data = data.get("debug", {})

    settings.prompt = str(repl_data.get("prompt", settings.prompt))
    settings.log_level = str(logging_data.get("level", settings.log_level)).upper()
    settings.show_tokens = _file_flag(debug_data, "tokens", settings.show_tokens, path)
    settings.show_ast = _file_flag(debug_data, "ast", settings.show_ast, path)
    logger.debug("Loaded settings from %s", path)


def _file_flag(section: Mapping[str, object], key: str, default: bool, path: Path) -> bool:
    """A [debug] switch: a TOML boolean, or a string spelled like the env flags."""
    value = section.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _flag(value)
    raise SettingsError(f"Invalid value for debug.{key} in {path}: expected true or false")
