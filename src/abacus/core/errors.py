"""
Error types for abacus lexing, parsing, and evaluation.

Every failure in the pipeline is raised as an ``AbacusError`` subclass tagged
with an ``ErrorKind``; drivers catch it, report it and move on to the next
input line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Which stage of the pipeline rejected the input."""

    LEXICAL = "lexical"
    PARSE = "parse"
    EVALUATION = "evaluation"


class AbacusError(Exception):
    """Base exception for all abacus errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    @property
    def title(self) -> str:
        return f"{self.kind.capitalize()} error: {self.message}"


class LexError(AbacusError):
    """
    Raised when source text cannot be split into tokens.

    Examples:
    - Unrecognized character
    - Malformed numeric literal (mixing ``//``, ``.`` and ``i`` markers)
    """

    kind = ErrorKind.LEXICAL


class ParseError(AbacusError):
    """
    Raised when a token sequence does not match the grammar.

    Examples:
    - Unexpected token where a specific token was required
    - ``if`` without ``else``
    - Call to a function that has not been defined
    """

    kind = ErrorKind.PARSE


class EvaluationError(AbacusError):
    """
    Raised when a well-formed tree cannot be evaluated.

    Examples:
    - Unresolved variable name
    - Numeric value requested from a condition (or the reverse)
    - Division by zero
    """

    kind = ErrorKind.EVALUATION


@dataclass
class ErrorContext:
    """
    Source location for an error.

    Attributes:
        line: Input line number within the session (1-indexed)
        column: Column number (1-indexed)
        snippet: The source line the error occurred on
        offending: The offending character or token text
    """

    line: int
    column: int
    snippet: str | None = None
    offending: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "line 2, column 5 (near '@')"
        """
        location = f"line {self.line}, column {self.column}"
        if self.offending:
            location += f" (near {self.offending!r})"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the source line with an error marker under the column."""
        if not self.snippet:
            return ""

        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet.rstrip()}\n{marker}"


def make_lex_error(
    message: str,
    line: int,
    pos: int,
    snippet: str | None = None,
    offending: str | None = None,
) -> LexError:
    """
    Helper to create a LexError with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        pos: Zero-based offset into the line
        snippet: The source line
        offending: Offending character

    Returns:
        LexError with context attached
    """
    context = ErrorContext(line=line, column=pos + 1, snippet=snippet, offending=offending)
    return LexError(message, context)


def make_parse_error(
    message: str,
    line: int,
    pos: int,
    snippet: str | None = None,
    offending: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        pos: Zero-based offset into the line
        snippet: The source line
        offending: Offending token text

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=line, column=pos + 1, snippet=snippet, offending=offending)
    return ParseError(message, context)
