"""Core abacus functionality: numeric tower, syntax tree, lexer, parser, evaluator, session."""

from . import ir
from .config import OutputStyle, SessionConfig, load_config
from .errors import (
    AbacusError,
    ErrorContext,
    ErrorKind,
    EvaluationError,
    LexError,
    ParseError,
)
from .formatting import format_error, format_outcome, format_value
from .session import Outcome, Session

__all__ = [
    "ir",
    "AbacusError",
    "ErrorContext",
    "ErrorKind",
    "EvaluationError",
    "LexError",
    "ParseError",
    "OutputStyle",
    "SessionConfig",
    "load_config",
    "Outcome",
    "Session",
    "format_error",
    "format_outcome",
    "format_value",
]
