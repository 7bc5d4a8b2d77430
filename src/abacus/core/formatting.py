"""Render session outcomes as the text a result sink prints."""

from __future__ import annotations

from abacus.core.config import OutputStyle
from abacus.core.errors import AbacusError
from abacus.core.numbers import Number
from abacus.core.session import Outcome

VALUE_MARKER = "< "
FUNCTION_MARKER = "# function"


def format_value(result: Number | bool) -> str:
    """Text form of a number or truth value."""
    if isinstance(result, bool):
        return "true" if result else "false"
    return str(result)


def format_outcome(outcome: Outcome, style: OutputStyle = OutputStyle.PLAIN) -> str | None:
    """
    Format one outcome for printing.

    Returns:
        The result line, or None for a blank statement or a failure
        (errors are rendered with ``format_error``).
    """
    if outcome.error is not None:
        return None
    if outcome.function is not None:
        return f"{FUNCTION_MARKER} {outcome.function.name}({outcome.function.arity})"
    if outcome.value is None:
        return None

    text = format_value(outcome.value)
    if style == OutputStyle.MARKED:
        return f"{VALUE_MARKER}{text}"
    return text


def format_error(error: AbacusError) -> str:
    """Error title followed by its source location, when known."""
    if error.context is None:
        return error.title
    return f"{error.title}\n{error.context.format()}"
