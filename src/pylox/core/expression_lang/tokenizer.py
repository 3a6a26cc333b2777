"""
Tokenizer for the pylox expression language.

Converts a source string into a sequence of typed tokens, tracking the
line each token starts on.
"""

from __future__ import annotations

import logging

from pylox.core.errors import LexError, make_lex_error
from pylox.core.ir.tokens import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
    "?": TokenKind.QUESTION,
    ":": TokenKind.COLON,
}

# Operator -> (kind alone, kind when followed by '=')
_WITH_EQUAL: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}

_DIGITS = "0123456789"


def _is_digit(c: str) -> bool:
    return c != "" and c in _DIGITS


def _is_alpha(c: str) -> bool:
    return c != "" and c.isascii() and (c.isalpha() or c == "_")


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


class Scanner:
    """Single-pass scanner over a source string.

    ``start`` marks the beginning of the lexeme being scanned and ``cur``
    the next unread character. ``line`` counts every newline consumed,
    including those inside strings and block comments.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens: list[Token] = []
        self.start = 0
        self.cur = 0
        self.line = 1

    def scan_tokens(self) -> list[Token]:
        """Scan the whole source, raising LexError at the first problem."""
        while not self.at_end():
            self.start = self.cur
            self._scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line))
        logger.debug("Scanned %d tokens over %d line(s)", len(self.tokens), self.line)
        return self.tokens

    # -- Cursor helpers --

    def at_end(self) -> bool:
        return self.cur >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.cur]
        self.cur += 1
        return c

    def peek(self, offset: int = 0) -> str:
        """Look ahead without consuming; empty string past the end."""
        idx = self.cur + offset
        if idx < len(self.source):
            return self.source[idx]
        return ""

    def match_char(self, expected: str) -> bool:
        """Consume the next character only if it equals ``expected``."""
        if self.peek() != expected:
            return False
        self.cur += 1
        return True

    def add_token(self, kind: TokenKind, literal: str | float | None = None) -> None:
        lexeme = self.source[self.start : self.cur]
        self.tokens.append(Token(kind, lexeme, literal, self.line))

    # -- Dispatch --

    def _scan_token(self) -> None:
        c = self.advance()

        if c in _SINGLE_CHAR:
            self.add_token(_SINGLE_CHAR[c])
        elif c in _WITH_EQUAL:
            alone, with_equal = _WITH_EQUAL[c]
            self.add_token(with_equal if self.match_char("=") else alone)
        elif c == "/":
            if self.match_char("/"):
                self._skip_line_comment()
            elif self.match_char("*"):
                self._skip_block_comment()
            else:
                self.add_token(TokenKind.SLASH)
        elif c in " \t\r":
            pass
        elif c == "\n":
            self.line += 1
        elif c == '"':
            self._string()
        elif _is_digit(c):
            self._number()
        elif _is_alpha(c):
            self._identifier()
        else:
            raise make_lex_error(f"Unexpected character {c!r} (U+{ord(c):04X}).", self.line)

    def _skip_line_comment(self) -> None:
        while not self.at_end() and self.peek() != "\n":
            self.advance()

    def _skip_block_comment(self) -> None:
        opened_on = self.line
        star_seen = False
        while not self.at_end():
            c = self.advance()
            if star_seen and c == "/":
                return
            if c == "\n":
                self.line += 1
            star_seen = c == "*"
        raise make_lex_error("Unterminated block comment.", opened_on)

    def _string(self) -> None:
        opened_on = self.line
        while not self.at_end() and self.peek() != '"':
            c = self.advance()
            if c == "\\" and not self.at_end():
                c = self.advance()
            if c == "\n":
                self.line += 1

        if self.at_end():
            raise make_lex_error("Unterminated string.", opened_on)

        self.advance()  # closing quote
        self.add_token(TokenKind.STRING, self.source[self.start + 1 : self.cur - 1])

    def _number(self) -> None:
        while _is_digit(self.peek()):
            self.advance()

        # A '.' belongs to the number only when a digit follows it
        if self.peek() == "." and _is_digit(self.peek(1)):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        text = self.source[self.start : self.cur]
        try:
            value = float(text)
        except ValueError as e:
            raise make_lex_error(f"Invalid number literal '{text}'.", self.line) from e
        self.add_token(TokenKind.NUMBER, value)

    def _identifier(self) -> None:
        while _is_alnum(self.peek()):
            self.advance()

        text = self.source[self.start : self.cur]
        kind = KEYWORDS.get(text)
        if kind is None:
            self.add_token(TokenKind.IDENTIFIER, text)
        else:
            self.add_token(kind)


def scan(source: str) -> list[Token]:
    """Tokenize a source string into a list of tokens.

    Args:
        source: Program text (e.g., "1 + 2 * 3")

    Returns:
        Tokens in source order, ending with exactly one EOF token.

    Raises:
        LexError: At the first character that cannot be scanned.
    """
    return Scanner(source).scan_tokens()


__all__ = ["KEYWORDS", "LexError", "Scanner", "Token", "TokenKind", "scan"]
