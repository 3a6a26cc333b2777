"""
Rich console output for the pylox CLI.

Everything is printed as ``Text`` so diagnostics such as ``[line 1]`` are
never read as console markup.
"""

from collections.abc import Iterable

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from pylox.core.ir.tokens import Token

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

STYLES = {
    "value": Style(color="bright_white"),
    "error": Style(color="red", bold=True),
    "ast": Style(color="cyan"),
    "muted": Style(color="bright_black"),
}


def print_value(text: str) -> None:
    """Print an evaluation result."""
    console.print(Text(text, style=STYLES["value"]))


def print_error(message: str) -> None:
    """Print a diagnostic to stderr."""
    err_console.print(Text(message, style=STYLES["error"]))


def print_ast(text: str) -> None:
    console.print(Text(text, style=STYLES["ast"]))


def print_tokens(tokens: Iterable[Token]) -> None:
    """Print scanned tokens as a table."""
    table = Table(box=box.SIMPLE, show_edge=False)
    table.add_column("Line", justify="right", style=STYLES["muted"])
    table.add_column("Kind")
    table.add_column("Lexeme")
    table.add_column("Literal", style=STYLES["muted"])
    for tok in tokens:
        literal = "" if tok.literal is None else repr(tok.literal)
        table.add_row(str(tok.line), Text(str(tok.kind)), Text(tok.lexeme), Text(literal))
    console.print(table)
