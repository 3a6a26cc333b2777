"""
Error types for pylox scanning, parsing, and evaluation.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        lexeme: Text of the offending token, if any
        at_end: True when the error was raised at the end-of-input token
    """

    line: int
    lexeme: str | None = None
    at_end: bool = False

    def format(self) -> str:
        """
        Format the location prefix of a diagnostic.

        Returns:
            Formatted string like: "[line 3] Error at '+'"
        """
        if self.at_end:
            return f"[line {self.line}] Error at end"
        if self.lexeme is not None:
            return f"[line {self.line}] Error at '{self.lexeme}'"
        return f"[line {self.line}] Error"


class LoxError(Exception):
    """Base exception for all pylox errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    @property
    def line(self) -> int | None:
        return self.context.line if self.context else None


class LexError(LoxError):
    """
    Raised when source text cannot be scanned into tokens.

    Examples:
    - Unexpected character
    - Unterminated string or block comment
    - Malformed number literal
    """

    pass


class ParseError(LoxError):
    """
    Raised when a token sequence does not form an expression.

    Examples:
    - Unexpected token in a grammar position
    - Missing closing paren
    - Conditional expression without ':'
    """

    pass


class EvalError(LoxError):
    """
    Raised when an expression cannot be evaluated.

    Examples:
    - Non-numeric operand to '-', '*', '/' or a comparison
    - Adding nil to a string

    Attributes:
        operator: Lexeme of the operator that failed
        side: "left" or "right" when an operand of a binary expression failed
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        operator: str | None = None,
        side: str | None = None,
    ):
        self.operator = operator
        self.side = side
        super().__init__(message, context)


def make_lex_error(message: str, line: int) -> LexError:
    """Helper to create a LexError at a source line."""
    return LexError(message, ErrorContext(line=line))


def make_parse_error(message: str, line: int, lexeme: str, at_end: bool = False) -> ParseError:
    """
    Helper to create a ParseError pointing at a token.

    Args:
        message: Error description
        line: Line of the offending token
        lexeme: Text of the offending token
        at_end: True if the offending token is the end-of-input sentinel

    Returns:
        ParseError with location context
    """
    return ParseError(message, ErrorContext(line=line, lexeme=None if at_end else lexeme, at_end=at_end))
