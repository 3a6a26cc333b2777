"""
Program runner for pylox.

Drives the full pipeline (scan → parse → evaluate) for one source buffer
and keeps the error flags a file runner or REPL needs to decide what to
do next. The runner never prints: diagnostics and output are returned to
the caller as plain strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pylox.core.errors import EvalError, LexError, LoxError, ParseError
from pylox.core.expression_lang.evaluator import evaluate
from pylox.core.expression_lang.parser import parse
from pylox.core.expression_lang.tokenizer import scan
from pylox.core.ir.expressions import Expr
from pylox.core.ir.tokens import Token
from pylox.core.ir.values import Value, stringify

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of running one source buffer.

    Fields are filled in as far as the pipeline got: a parse error leaves
    ``tokens`` set and ``expr``/``value`` empty.
    """

    tokens: list[Token] = field(default_factory=list)
    expr: Expr | None = None
    value: Value | None = None
    error: LoxError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output(self) -> str | None:
        """The value as program output, or None if evaluation did not finish."""
        return stringify(self.value) if self.value is not None else None

    @property
    def diagnostic(self) -> str | None:
        return str(self.error) if self.error is not None else None


class Lox:
    """A pylox session.

    ``had_error`` is set by scan/parse failures and ``had_runtime_error`` by
    evaluation failures. A REPL calls ``reset()`` between lines; a file
    runner inspects the flags once to pick an exit status.
    """

    def __init__(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def reset(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def run(self, source: str) -> RunResult:
        """Run one source buffer through the whole pipeline."""
        result = RunResult()
        try:
            result.tokens = scan(source)
            result.expr = parse(result.tokens)
            result.value = evaluate(result.expr)
        except (LexError, ParseError) as e:
            self.had_error = True
            result.error = e
            logger.info("Static error: %s", e)
        except EvalError as e:
            self.had_runtime_error = True
            result.error = e
            logger.info("Runtime error: %s", e)
        return result


def run_source(source: str) -> str:
    """Evaluate a source buffer and return its output text.

    Raises:
        LexError, ParseError, EvalError: On the first failure.
    """
    return stringify(evaluate(parse(scan(source))))
