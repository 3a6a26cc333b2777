"""
Expression evaluator for the pylox expression language.

A tree-walking interpreter over the closed set of expression nodes. Pure
evaluation: no I/O, no shared state. Each node is evaluated depth-first
into a fresh runtime value, and the first type error aborts evaluation
with an EvalError naming the failing operator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from pylox.core.errors import ErrorContext, EvalError
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
from pylox.core.ir.values import (
    NIL,
    BooleanValue,
    NilValue,
    NumberValue,
    StringValue,
    Value,
    boolean,
    format_number,
)

logger = logging.getLogger(__name__)


def evaluate(expr: Expr) -> Value:
    """Evaluate an expression tree to a runtime value.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value.

    Raises:
        EvalError: On the first operand type mismatch, or when the tree is
            too deep to walk.
    """
    try:
        value = _interpret(expr)
    except RecursionError as e:
        raise EvalError("Expression nests too deeply.") from e
    logger.debug("Evaluated %s -> %r", expr, value)
    return value


def is_truthy(value: Value) -> bool:
    """nil is false, a boolean is itself, everything else is true."""
    if isinstance(value, NilValue):
        return False
    if isinstance(value, BooleanValue):
        return value.value
    return True


def _interpret(expr: Expr) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, StringLiteral):
        return StringValue(value=expr.value)
    if isinstance(expr, IntLiteral):
        return NumberValue(value=float(expr.value))
    if isinstance(expr, FloatLiteral):
        return NumberValue(value=expr.value)
    if isinstance(expr, BoolLiteral):
        return boolean(expr.value)
    if isinstance(expr, NilLiteral):
        return NIL
    if isinstance(expr, Grouping):
        return _interpret(expr.expression)
    if isinstance(expr, Unary):
        return _interpret_unary(expr)
    if isinstance(expr, Binary):
        return _interpret_binary(expr)
    if isinstance(expr, Ternary):
        return _interpret_ternary(expr)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _type_error(op: Token, message: str) -> EvalError:
    return EvalError(message, ErrorContext(line=op.line), operator=op.lexeme)


def _interpret_unary(expr: Unary) -> Value:
    operand = _interpret(expr.operand)
    op = expr.operator

    if op.kind == TokenKind.BANG:
        return boolean(not is_truthy(operand))
    if op.kind == TokenKind.MINUS:
        if not isinstance(operand, NumberValue):
            raise _type_error(op, f"Operand of '-' must be a number, got {operand.type_name}.")
        return NumberValue(value=-operand.value)

    raise _type_error(op, f"Unknown unary operator '{op.lexeme}'.")


def _operand(expr: Expr, op: Token, side: str) -> Value:
    """Evaluate one side of a binary expression, naming the side on failure."""
    try:
        return _interpret(expr)
    except EvalError as e:
        raise EvalError(
            f"Could not evaluate {side} operand of '{op.lexeme}': {e.message}",
            e.context,
            operator=op.lexeme,
            side=side,
        ) from e


def _interpret_binary(expr: Binary) -> Value:
    op = expr.operator
    left = _operand(expr.left, op, "left")
    right = _operand(expr.right, op, "right")

    if op.kind == TokenKind.COMMA:
        return right
    if op.kind == TokenKind.PLUS:
        return _add(op, left, right)
    if op.kind in _ARITHMETIC:
        a, b = _numbers(op, left, right)
        return NumberValue(value=_ARITHMETIC[op.kind](a, b))
    if op.kind in _COMPARISON:
        a, b = _numbers(op, left, right)
        return boolean(_COMPARISON[op.kind](a, b))
    if op.kind == TokenKind.EQUAL_EQUAL:
        return boolean(are_equal(left, right))
    if op.kind == TokenKind.BANG_EQUAL:
        return boolean(not are_equal(left, right))

    raise _type_error(op, f"Unknown binary operator '{op.lexeme}'.")


def _divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


_ARITHMETIC: dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.MINUS: lambda a, b: a - b,
    TokenKind.STAR: lambda a, b: a * b,
    TokenKind.SLASH: _divide,
}

_COMPARISON: dict[TokenKind, Callable[[float, float], bool]] = {
    TokenKind.GREATER: lambda a, b: a > b,
    TokenKind.GREATER_EQUAL: lambda a, b: a >= b,
    TokenKind.LESS: lambda a, b: a < b,
    TokenKind.LESS_EQUAL: lambda a, b: a <= b,
}


def _numbers(op: Token, left: Value, right: Value) -> tuple[float, float]:
    if isinstance(left, NumberValue) and isinstance(right, NumberValue):
        return left.value, right.value
    raise _type_error(
        op,
        f"Operands of '{op.lexeme}' must be numbers, got {left.type_name} and {right.type_name}.",
    )


def _add(op: Token, left: Value, right: Value) -> Value:
    """String concatenation when either side is a string, numeric addition otherwise."""
    if isinstance(left, StringValue) and isinstance(right, StringValue):
        return StringValue(value=left.value + right.value)
    if isinstance(left, StringValue):
        return StringValue(value=left.value + _concat_text(op, right))
    if isinstance(right, StringValue):
        return StringValue(value=_concat_text(op, left) + right.value)

    a, b = _numbers(op, left, right)
    return NumberValue(value=a + b)


def _concat_text(op: Token, value: Value) -> str:
    """Text of a non-string operand joined to a string by '+'."""
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    raise _type_error(op, f"Cannot convert {value.type_name} to a string for '{op.lexeme}'.")


def are_equal(left: Value, right: Value) -> bool:
    """Structural equality within a variant; different variants are never equal."""
    if type(left) is not type(right):
        return False
    if isinstance(left, NilValue):
        return True
    return left.value == right.value  # type: ignore[union-attr]


def _interpret_ternary(expr: Ternary) -> Value:
    """Only the taken branch is evaluated."""
    if is_truthy(_interpret(expr.condition)):
        return _interpret(expr.then_branch)
    return _interpret(expr.else_branch)
