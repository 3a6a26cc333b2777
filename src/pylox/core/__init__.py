"""
pylox core: IR, expression language, runner and settings.
"""

from pylox.core.errors import EvalError, LexError, LoxError, ParseError
from pylox.core.runner import Lox, RunResult, run_source

__all__ = ["EvalError", "LexError", "Lox", "LoxError", "ParseError", "RunResult", "run_source"]
