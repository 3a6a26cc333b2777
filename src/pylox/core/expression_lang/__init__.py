"""
pylox expression language.

Tokenizer, parser, and evaluator for Lox expressions.

Usage:
    from pylox.core.expression_lang import parse_expr, evaluate

    expr = parse_expr('"total: " + 40 + 2')
    result = evaluate(expr)
    # result == StringValue(value="total: 402")
"""

from pylox.core.expression_lang.evaluator import evaluate, is_truthy
from pylox.core.expression_lang.parser import Parser, parse, parse_expr
from pylox.core.expression_lang.tokenizer import Scanner, scan

__all__ = ["Parser", "Scanner", "evaluate", "is_truthy", "parse", "parse_expr", "scan"]
