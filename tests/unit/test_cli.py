"""Tests for the pylox CLI."""

import tomllib
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pylox.cli import EXIT_DATA_ERROR, EXIT_SOFTWARE, EXIT_USAGE, app, get_version


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's pylox.toml and PYLOX_* variables out of CLI tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("PYLOX_PROMPT", "PYLOX_LOG_LEVEL", "PYLOX_SHOW_TOKENS", "PYLOX_SHOW_AST"):
        monkeypatch.delenv(name, raising=False)


class TestVersion:
    def test_version_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "pylox version" in result.output
        assert "Python:" in result.output

    def test_version_matches_pyproject(self) -> None:
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        expected = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]["version"]
        assert get_version() == expected


class TestEval:
    def test_prints_value(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--eval", "1 + 2"])
        assert result.exit_code == 0
        assert result.output.strip() == "3"

    def test_short_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["-e", '"a" + 1'])
        assert result.exit_code == 0
        assert "a1" in result.output

    def test_parse_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--eval", "(1"])
        assert result.exit_code == EXIT_DATA_ERROR
        assert "[line 1] Error at end: Expect ')' after expression." in result.output

    def test_lex_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--eval", "1 @ 2"])
        assert result.exit_code == EXIT_DATA_ERROR
        assert "Unexpected character '@'" in result.output

    def test_runtime_error_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--eval", '1 + -"a"'])
        assert result.exit_code == EXIT_SOFTWARE
        assert "Could not evaluate right operand of '+'" in result.output

    def test_overlong_number(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--eval", "1" * 400])
        assert result.exit_code == 0
        assert result.output.strip() == "inf"

    def test_deep_nesting_exit_code(self, cli_runner: CliRunner) -> None:
        depth = 300
        result = cli_runner.invoke(app, ["--eval", "(" * depth + "1" + ")" * depth])
        assert result.exit_code == EXIT_DATA_ERROR
        assert "Expression nests too deeply." in result.output

    def test_ast_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--ast", "--eval", "1 + 2 * 3"])
        assert result.exit_code == 0
        assert "( + 1 ( * 2 3 ) )" in result.output
        assert "7" in result.output

    def test_tokens_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--tokens", "--eval", "12"])
        assert result.exit_code == 0
        assert "number" in result.output
        assert "eof" in result.output

    def test_script_and_eval_conflict(
        self, cli_runner: CliRunner, write_script: Callable[[str], Path]
    ) -> None:
        script = write_script("1")
        result = cli_runner.invoke(app, [str(script), "--eval", "2"])
        assert result.exit_code == EXIT_USAGE


class TestScript:
    def test_runs_script(self, cli_runner: CliRunner, write_script: Callable[[str], Path]) -> None:
        script = write_script('// greeting\n"hello, " + "world"\n')
        result = cli_runner.invoke(app, [str(script)])
        assert result.exit_code == 0
        assert "hello, world" in result.output

    def test_missing_script(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, [str(tmp_path / "missing.lox")])
        assert result.exit_code == EXIT_USAGE
        assert "Cannot open script" in result.output

    def test_script_error_line(self, cli_runner: CliRunner, write_script: Callable[[str], Path]) -> None:
        script = write_script("1 +\n\n)")
        result = cli_runner.invoke(app, [str(script)])
        assert result.exit_code == EXIT_DATA_ERROR
        assert "[line 3] Error at ')'" in result.output


class TestSettingsIntegration:
    def test_settings_file_enables_ast(
        self, cli_runner: CliRunner, tmp_path: Path
    ) -> None:
        settings = tmp_path / "custom.toml"
        settings.write_text("[debug]\nast = true\n", encoding="utf-8")
        result = cli_runner.invoke(app, ["--settings", str(settings), "--eval", "-1"])
        assert result.exit_code == 0
        assert "( - 1 )" in result.output

    def test_bad_settings_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        settings = tmp_path / "broken.toml"
        settings.write_text("[debug", encoding="utf-8")
        result = cli_runner.invoke(app, ["--settings", str(settings), "--eval", "1"])
        assert result.exit_code == EXIT_USAGE
        assert "Could not read settings file" in result.output


class TestRepl:
    def test_evaluates_each_line(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [], input='1 + 2\n\n"a" + 1\n')
        assert result.exit_code == 0
        assert "3" in result.output
        assert "a1" in result.output

    def test_errors_do_not_end_session(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, [], input="(1\n-nil\n40 + 2\n")
        assert result.exit_code == 0
        assert "Expect ')' after expression." in result.output
        assert "Operand of '-' must be a number" in result.output
        assert "42" in result.output

    def test_prompt_from_environment(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PYLOX_PROMPT", "lox> ")
        result = cli_runner.invoke(app, [], input="1\n")
        assert "lox> " in result.output
