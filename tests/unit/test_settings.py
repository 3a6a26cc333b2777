"""Tests for pylox settings loading."""

import logging
from pathlib import Path

import pytest

from pylox.core.settings import (
    LOG_LEVEL_ENV_VAR,
    PROMPT_ENV_VAR,
    SHOW_AST_ENV_VAR,
    SHOW_TOKENS_ENV_VAR,
    LoxSettings,
    SettingsError,
    load_settings,
)


def write_settings(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "pylox.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = load_settings(environ={})
        assert settings == LoxSettings()
        assert settings.prompt == "> "
        assert settings.log_level_number == logging.WARNING

    def test_cwd_file_is_picked_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_settings(tmp_path, '[repl]\nprompt = "lox> "\n')
        monkeypatch.chdir(tmp_path)
        assert load_settings(environ={}).prompt == "lox> "


class TestSettingsFile:
    def test_all_sections(self, tmp_path: Path) -> None:
        path = write_settings(
            tmp_path,
            """
[repl]
prompt = ">> "

[logging]
level = "debug"

[debug]
tokens = true
ast = true
""",
        )
        settings = load_settings(path, environ={})
        assert settings.prompt == ">> "
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.show_tokens
        assert settings.show_ast

    def test_missing_sections_keep_defaults(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path, "[debug]\nast = true\n")
        settings = load_settings(path, environ={})
        assert settings.show_ast
        assert not settings.show_tokens
        assert settings.prompt == "> "

    @pytest.mark.parametrize("raw, expected", [('"false"', False), ('"off"', False), ('"yes"', True)])
    def test_string_flags_use_env_spelling(self, tmp_path: Path, raw: str, expected: bool) -> None:
        path = write_settings(tmp_path, f"[debug]\ntokens = {raw}\nast = {raw}\n")
        settings = load_settings(path, environ={})
        assert settings.show_tokens is expected
        assert settings.show_ast is expected

    def test_non_boolean_flag_is_rejected(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path, "[debug]\ntokens = 3\n")
        with pytest.raises(SettingsError, match="debug.tokens"):
            load_settings(path, environ={})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path, "[repl\nprompt = ")
        with pytest.raises(SettingsError, match="Could not read settings file"):
            load_settings(path, environ={})

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsError):
            load_settings(tmp_path / "nope.toml", environ={})


class TestEnvironmentOverrides:
    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path, '[repl]\nprompt = "file> "\n[debug]\ntokens = true\n')
        settings = load_settings(
            path,
            environ={
                PROMPT_ENV_VAR: "env> ",
                SHOW_TOKENS_ENV_VAR: "off",
                SHOW_AST_ENV_VAR: "yes",
                LOG_LEVEL_ENV_VAR: "info",
            },
        )
        assert settings.prompt == "env> "
        assert not settings.show_tokens
        assert settings.show_ast
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy_flags(self, tmp_path: Path, raw: str) -> None:
        settings = load_settings(write_settings(tmp_path, ""), environ={SHOW_AST_ENV_VAR: raw})
        assert settings.show_ast

    def test_unknown_log_level_falls_back(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path, "")
        settings = load_settings(path, environ={LOG_LEVEL_ENV_VAR: "chatty"})
        assert settings.log_level == "WARNING"
        assert settings.log_level_number == logging.WARNING
