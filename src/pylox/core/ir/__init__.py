"""
pylox intermediate representation.

Tokens, the expression tree, and runtime values.
"""

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
    render,
)
from pylox.core.ir.tokens import KEYWORDS, Token, TokenKind
from pylox.core.ir.values import (
    BooleanValue,
    NilValue,
    NumberValue,
    StringValue,
    Value,
    stringify,
)

__all__ = [
    # Tokens
    "KEYWORDS",
    "Token",
    "TokenKind",
    # Expressions
    "Binary",
    "BoolLiteral",
    "Expr",
    "FloatLiteral",
    "Grouping",
    "IntLiteral",
    "NilLiteral",
    "StringLiteral",
    "Ternary",
    "Unary",
    "render",
    # Values
    "BooleanValue",
    "NilValue",
    "NumberValue",
    "StringValue",
    "Value",
    "stringify",
]
