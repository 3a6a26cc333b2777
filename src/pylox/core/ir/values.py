"""
Runtime values for the pylox evaluator.

A closed set of immutable variants. Integer literals are widened to
``NumberValue`` on evaluation, so arithmetic is always done in double
precision and there is no separate integer variant at runtime.
"""

from __future__ import annotations

import math
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class StringValue(BaseModel):
    value: str

    type_name: ClassVar[str] = "string"
    model_config = ConfigDict(frozen=True)


class NumberValue(BaseModel):
    """A double-precision number."""

    value: float

    type_name: ClassVar[str] = "number"
    model_config = ConfigDict(frozen=True)


class BooleanValue(BaseModel):
    value: bool

    type_name: ClassVar[str] = "boolean"
    model_config = ConfigDict(frozen=True)


class NilValue(BaseModel):
    type_name: ClassVar[str] = "nil"
    model_config = ConfigDict(frozen=True)


Value = StringValue | NumberValue | BooleanValue | NilValue

NIL = NilValue()
TRUE = BooleanValue(value=True)
FALSE = BooleanValue(value=False)


def boolean(flag: bool) -> BooleanValue:
    return TRUE if flag else FALSE


def format_number(value: float) -> str:
    """Shortest decimal form of a number.

    Integral values print without a fractional part (``3``, ``-0``),
    everything else prints its shortest round-tripping repr (``2.5``).
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return f"{value:.0f}"
    return repr(value)


def stringify(value: Value) -> str:
    """Render a value as program output.

    Strings print their contents, numbers their shortest decimal form,
    booleans ``true``/``false`` and nil ``nil``.
    """
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, NilValue):
        return "nil"
    raise TypeError(f"Unknown value type: {type(value).__name__}")


__all__ = [
    "FALSE",
    "NIL",
    "TRUE",
    "BooleanValue",
    "NilValue",
    "NumberValue",
    "StringValue",
    "Value",
    "boolean",
    "format_number",
    "stringify",
]
