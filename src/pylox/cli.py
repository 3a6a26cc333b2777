"""
pylox CLI - Entry point.

    pylox script.lox      run a script and print its value
    pylox -e "1 + 2"      evaluate an expression given on the command line
    pylox                 start an interactive prompt

Exit codes follow sysexits: 64 for usage errors (e.g. unreadable script),
65 for scan/parse errors and 70 for runtime errors.
"""

import logging
import platform
import sys
from pathlib import Path

import typer

from pylox.cli_ui import console, print_ast, print_error, print_tokens, print_value
from pylox.core.errors import LoxError
from pylox.core.ir.expressions import render
from pylox.core.runner import Lox, RunResult
from pylox.core.settings import LoxSettings, load_settings

logger = logging.getLogger(__name__)

EXIT_USAGE = 64
EXIT_DATA_ERROR = 65
EXIT_SOFTWARE = 70

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_version() -> str:
    """Get pylox version from package metadata."""
    from pylox import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"pylox version {get_version()}")
        typer.echo(f"  Python:   {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform: {platform.system()} {platform.release()}")
        raise typer.Exit()


app = typer.Typer(
    help="""pylox – Lox expression interpreter

Runs SCRIPT when given, evaluates --eval EXPR, or starts an
interactive prompt when neither is passed.
""",
    add_completion=False,
)


@app.command()
def run_command(
    script: Path | None = typer.Argument(
        None,
        help="Script to run. Omit to start the interactive prompt.",
    ),
    expression: str | None = typer.Option(
        None,
        "--eval",
        "-e",
        help="Evaluate an expression instead of reading a script",
    ),
    tokens: bool = typer.Option(
        False,
        "--tokens",
        help="Print the scanned tokens",
    ),
    ast: bool = typer.Option(
        False,
        "--ast",
        help="Print the parsed expression tree",
    ),
    settings_file: Path | None = typer.Option(
        None,
        "--settings",
        help="Settings file (default: ./pylox.toml if present)",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Run a Lox script, a single expression, or an interactive prompt."""
    try:
        settings = load_settings(settings_file)
    except LoxError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_USAGE)

    logging.basicConfig(level=settings.log_level_number, format=LOG_FORMAT)
    settings.show_tokens = settings.show_tokens or tokens
    settings.show_ast = settings.show_ast or ast

    if expression is not None and script is not None:
        print_error("Pass either a script or --eval, not both.")
        raise typer.Exit(code=EXIT_USAGE)

    lox = Lox()

    if expression is not None:
        _execute(lox, expression, settings)
        raise typer.Exit(code=_exit_code(lox))

    if script is not None:
        try:
            source = script.read_text(encoding="utf-8")
        except OSError as e:
            print_error(f"Cannot open script {script}: {e.strerror or e}")
            raise typer.Exit(code=EXIT_USAGE)
        logger.info("Running %s", script)
        _execute(lox, source, settings)
        raise typer.Exit(code=_exit_code(lox))

    _repl(lox, settings)


def _exit_code(lox: Lox) -> int:
    if lox.had_error:
        return EXIT_DATA_ERROR
    if lox.had_runtime_error:
        return EXIT_SOFTWARE
    return 0


def _execute(lox: Lox, source: str, settings: LoxSettings) -> RunResult:
    """Run a source buffer and print what the settings ask for."""
    result = lox.run(source)

    if settings.show_tokens and result.tokens:
        print_tokens(result.tokens)
    if settings.show_ast and result.expr is not None:
        print_ast(render(result.expr))

    if result.error is not None:
        print_error(str(result.error))
    elif result.output is not None:
        print_value(result.output)
    return result


def _repl(lox: Lox, settings: LoxSettings) -> None:
    """Read-eval-print loop; errors are reported and the loop continues."""
    while True:
        try:
            line = console.input(settings.prompt, markup=False)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not line.strip():
            continue
        _execute(lox, line, settings)
        lox.reset()


def main(argv: list[str] | None = None) -> None:
    app(args=argv, prog_name="pylox")


if __name__ == "__main__":
    main(sys.argv[1:])
