"""
Expression AST for pylox.

Nodes are immutable pydantic models forming a tree: every non-leaf node
owns its children, there is no sharing and no cycles. Nodes are built
bottom-up by the parser and walked top-down by the evaluator and by
``render``.

Rendering is fully parenthesized and prefix-ish:

- literals render as their textual value (``nil`` for NilLiteral)
- Unary: ``( - 123 )``
- Binary: ``( * left right )``
- Ternary: ``( cond ? then : else )``
- Grouping: ``( inner )``
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from pylox.core.ir.tokens import Token

# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


class StringLiteral(BaseModel):
    """A string literal; ``value`` is the text between the quotes."""

    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.value


class IntLiteral(BaseModel):
    """A number literal whose lexeme parses as an integer."""

    value: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class FloatLiteral(BaseModel):
    """A number literal with a fractional part."""

    value: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_float_literal(self.value)


class BoolLiteral(BaseModel):
    value: bool

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class NilLiteral(BaseModel):
    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "nil"


# ---------------------------------------------------------------------------
# Compound nodes
# ---------------------------------------------------------------------------


class Unary(BaseModel):
    """Prefix operation: ``!operand`` or ``-operand``."""

    operator: Token
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"( {self.operator.lexeme} {self.operand} )"


class Binary(BaseModel):
    """Infix operation: left op right. Also used for the comma operator."""

    left: Expr
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"( {self.operator.lexeme} {self.left} {self.right} )"


class Ternary(BaseModel):
    """Conditional expression: cond ? then_branch : else_branch."""

    condition: Expr = Field(description="Condition, tested for truthiness")
    then_branch: Expr = Field(description="Value when the condition is truthy")
    else_branch: Expr = Field(description="Value otherwise")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"( {self.condition} ? {self.then_branch} : {self.else_branch} )"


class Grouping(BaseModel):
    """A parenthesized expression."""

    expression: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"( {self.expression} )"


def format_float_literal(value: float) -> str:
    """Shortest text that scans back to the same float literal.

    ``repr`` switches to exponent notation for very large or small values,
    which the scanner does not accept, so those are expanded positionally.
    """
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def render(expr: Expr) -> str:
    """Render an expression tree in fully parenthesized form.

    Purely structural: nothing is evaluated.

    Example:
        >>> render(parse_expr("-123 * (45.67)"))
        '( * ( - 123 ) ( 45.67 ) )'
    """
    return str(expr)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = (
    StringLiteral
    | IntLiteral
    | FloatLiteral
    | BoolLiteral
    | NilLiteral
    | Unary
    | Binary
    | Ternary
    | Grouping
)

# Rebuild models for recursive forward references
Unary.model_rebuild()
Binary.model_rebuild()
Ternary.model_rebuild()
Grouping.model_rebuild()
