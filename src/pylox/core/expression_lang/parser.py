"""
Recursive descent parser for the pylox expression language.

Grammar (precedence low to high):
    expression  → comma ( "?" branches )?
    branches    → expression ":" expression
    comma       → equality ( "," equality )*
    equality    → comparison ( ( "!=" | "==" ) comparison )*
    comparison  → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        → factor ( ( "-" | "+" ) factor )*
    factor      → unary ( ( "/" | "*" ) unary )*
    unary       → ( "!" | "-" ) unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Each left-associative level parses one operand at the next tighter level
and folds same-level operators into a left-growing Binary node. The
conditional is right-associative: its branch pair is parsed with the same
binary machinery using ':' as the separator, then repackaged as a Ternary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from pylox.core.errors import LexError, ParseError, make_parse_error
from pylox.core.expression_lang.tokenizer import scan
from pylox.core.ir.expressions import (
    Binary,
    BoolLiteral,
    Expr,
    FloatLiteral,
    Grouping,
    IntLiteral,
    NilLiteral,
    StringLiteral,
    Ternary,
    Unary,
)
from pylox.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_EQUALITY_OPS = frozenset({TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL})
_COMPARISON_OPS = frozenset(
    {TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL}
)
_TERM_OPS = frozenset({TokenKind.MINUS, TokenKind.PLUS})
_FACTOR_OPS = frozenset({TokenKind.SLASH, TokenKind.STAR})
_UNARY_OPS = frozenset({TokenKind.BANG, TokenKind.MINUS})


class Parser:
    """Recursive descent parser over an immutable token buffer.

    The parser never mutates the token sequence; ``pos`` is the index of
    the next unconsumed token. The buffer must end with an EOF token.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token sequence must end with an EOF token")
        self.tokens = tuple(tokens)
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if not self.at_end:
            self.pos += 1
        return tok

    def check(self, kinds: frozenset[TokenKind]) -> bool:
        return self.current.kind in kinds

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, message: str) -> Token:
        if self.current.kind == kind:
            return self.advance()
        raise self.error(self.current, message)

    def error(self, tok: Token, message: str) -> ParseError:
        return make_parse_error(message, tok.line, tok.lexeme, at_end=tok.kind == TokenKind.EOF)

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """Parse one expression starting at the cursor.

        A comma expression followed by '?' becomes the condition of a
        conditional expression.
        """
        expr = self._comma()
        if self.match(TokenKind.QUESTION):
            branches = self._binary_expr(self.parse_expression, frozenset({TokenKind.COLON}), limit=1)
            if not (isinstance(branches, Binary) and branches.operator.kind == TokenKind.COLON):
                raise self.error(
                    self.current, "Expect ':' after then branch of conditional expression."
                )
            expr = Ternary(
                condition=expr,
                then_branch=branches.left,
                else_branch=branches.right,
            )
        return expr

    def _binary_expr(
        self,
        operand: Callable[[], Expr],
        operators: frozenset[TokenKind],
        limit: int | None = None,
    ) -> Expr:
        """operand (OP operand)*, folded to the left.

        ``limit`` caps how many operators are consumed.
        """
        left = operand()
        folded = 0
        while self.check(operators) and (limit is None or folded < limit):
            op = self.advance()
            right = operand()
            left = Binary(left=left, operator=op, right=right)
            folded += 1
        return left

    def _comma(self) -> Expr:
        return self._binary_expr(self._equality, frozenset({TokenKind.COMMA}))

    def _equality(self) -> Expr:
        return self._binary_expr(self._comparison, _EQUALITY_OPS)

    def _comparison(self) -> Expr:
        return self._binary_expr(self._term, _COMPARISON_OPS)

    def _term(self) -> Expr:
        return self._binary_expr(self._factor, _TERM_OPS)

    def _factor(self) -> Expr:
        return self._binary_expr(self._unary, _FACTOR_OPS)

    def _unary(self) -> Expr:
        """('!' | '-') unary | primary"""
        if self.check(_UNARY_OPS):
            op = self.advance()
            operand = self._unary()
            return Unary(operator=op, operand=operand)
        return self._primary()

    def _primary(self) -> Expr:
        """Consume exactly one token and build the matching leaf or group."""
        tok = self.current

        if tok.kind == TokenKind.EOF:
            raise self.error(tok, "Expect expression.")

        self.advance()

        if tok.kind == TokenKind.FALSE:
            return BoolLiteral(value=False)
        if tok.kind == TokenKind.TRUE:
            return BoolLiteral(value=True)
        if tok.kind == TokenKind.NIL:
            return NilLiteral()
        if tok.kind == TokenKind.NUMBER:
            return _number_literal(tok)
        if tok.kind == TokenKind.STRING:
            return StringLiteral(value=str(tok.literal))
        if tok.kind == TokenKind.LEFT_PAREN:
            inner = self.parse_expression()
            self.expect(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expression=inner)

        raise self.error(tok, "Unexpected token; expect expression.")


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _number_literal(tok: Token) -> IntLiteral | FloatLiteral:
    """Integer when the lexeme is a whole number within 64 bits, float otherwise.

    Lexemes too large for a float become ``inf``.
    """
    try:
        value = int(tok.lexeme)
    except ValueError:
        return FloatLiteral(value=float(tok.lexeme))
    if _INT64_MIN <= value <= _INT64_MAX:
        return IntLiteral(value=value)
    return FloatLiteral(value=float(tok.lexeme))


def parse(tokens: Sequence[Token]) -> Expr:
    """Parse a token sequence holding exactly one expression.

    Args:
        tokens: Scanner output, ending with EOF.

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the tokens are not a single well-formed expression.
    """
    parser = Parser(tokens)
    try:
        expr = parser.parse_expression()
    except RecursionError as e:
        raise parser.error(parser.current, "Expression nests too deeply.") from e

    # Ensure all tokens consumed
    if not parser.at_end:
        raise parser.error(parser.current, "Expect end of expression.")

    logger.debug("Parsed expression: %s", expr)
    return expr


def parse_expr(source: str) -> Expr:
    """Scan and parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "1 + 2 * 3")

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If scanning fails.
        ParseError: If the expression is invalid.
    """
    return parse(scan(source))


__all__ = ["LexError", "ParseError", "Parser", "parse", "parse_expr"]
