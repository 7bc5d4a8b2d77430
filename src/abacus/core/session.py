"""
Driver-facing calculator session.

A ``Session`` owns the function table and the parser for one run of the
interpreter and turns input lines into ``Outcome`` values. Input is pushed a
line at a time, like ``code.InteractiveConsole.push``: ``push`` returns None
while the current statement is still open and an ``Outcome`` once it is
complete.

    session = Session()
    session.push("fn inc(num) {")     # None, the function body is open
    session.push("num + 1 }")         # Outcome(function=inc)
    session.push("inc(4)").value      # Natural(5)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from abacus.core.calc_lang.evaluator import evaluate
from abacus.core.calc_lang.functions import FunctionTable
from abacus.core.calc_lang.parser import InputRequest, ParseSteps, Parser
from abacus.core.config import SessionConfig
from abacus.core.errors import AbacusError, EvaluationError, ParseError, make_parse_error
from abacus.core.ir.syntax import FunctionDef, Line
from abacus.core.numbers import Number

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """
    Result of one top-level statement.

    Attributes:
        source: The statement's input lines joined with newlines
        node: Parsed statement, None for a blank line or a failure
        value: Number or truth value of an evaluated statement
        function: The definition, when the statement defined a function
        error: The error that stopped the statement, if any
    """

    source: str
    node: Line | None = None
    value: Number | bool | None = None
    function: FunctionDef | None = None
    error: AbacusError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_blank(self) -> bool:
        return self.node is None and self.error is None


class Session:
    """Interpreter state for one user: defined functions plus any open statement."""

    def __init__(self, config: SessionConfig | None = None) -> None:
        self.config = config if config is not None else SessionConfig()
        self.functions = FunctionTable()
        self.parser = Parser(
            self.functions,
            check_arity=self.config.check_arity,
            unicode_operators=self.config.unicode_operators,
        )
        self.last_source = ""
        self._steps: ParseSteps[Line | None] | None = None
        self._request: InputRequest | None = None
        self._lines: list[str] = []

    @property
    def pending(self) -> bool:
        """True while a statement is waiting for more lines."""
        return self._steps is not None

    @property
    def request(self) -> InputRequest | None:
        """What the open statement is waiting for, if anything."""
        return self._request

    def push(self, line: str) -> Outcome | None:
        """
        Feed one line of input.

        Returns:
            None if the statement needs more lines, otherwise its Outcome.

        Raises:
            AbacusError: If the statement fails to lex, parse or evaluate.
                The open statement is discarded.
        """
        self._lines.append(line)
        try:
            if self._steps is None:
                self.parser.append(line)
                self._steps = self.parser.parse_line()
                self._request = next(self._steps)
            else:
                self._request = self._steps.send(line)
        except StopIteration as done:
            return self._complete(done.value)
        except AbacusError:
            self.cancel()
            raise
        except RecursionError as e:
            self.cancel()
            raise self._too_deep(line) from e
        logger.debug("Awaiting line %d (%s)", self._request.line, self._request.reason)
        return None

    def finish(self) -> Outcome | None:
        """
        Signal end of input.

        Returns:
            None when no statement was open.

        Raises:
            ParseError: If a statement was still waiting for lines.
        """
        if self._steps is None:
            return None
        try:
            self._steps.send(None)
        except StopIteration as done:
            return self._complete(done.value)
        except AbacusError:
            self.cancel()
            raise
        except RecursionError as e:
            self.cancel()
            raise self._too_deep(self.last_source) from e
        # A generator that asks again after end of input is a parser bug
        self.cancel()
        raise RuntimeError("parser requested input after end of stream")

    def run(self, lines: Iterable[str]) -> Iterator[Outcome]:
        """
        Evaluate a stream of lines, yielding one Outcome per statement.

        Errors are captured on the Outcome instead of being raised, so a
        failing statement never stops the rest of the stream. Blank lines
        produce no Outcome.
        """
        for line in lines:
            try:
                outcome = self.push(line)
            except AbacusError as e:
                yield Outcome(source=self.last_source, error=e)
                continue
            if outcome is not None and not outcome.is_blank:
                yield outcome

        try:
            outcome = self.finish()
        except AbacusError as e:
            yield Outcome(source=self.last_source, error=e)
            return
        if outcome is not None and not outcome.is_blank:
            yield outcome

    def execute(self, source: str) -> Outcome:
        """Evaluate one statement given as text; errors are raised."""
        outcome: Outcome | None = None
        for line in source.splitlines() or [""]:
            if outcome is not None and line.strip():
                raise make_parse_error(
                    "Unexpected input after statement",
                    self.parser.lexer.line + 1,
                    0,
                    snippet=line,
                )
            if outcome is None:
                outcome = self.push(line)
        if outcome is None:
            outcome = self.finish()
        assert outcome is not None
        return outcome

    def _complete(self, node: Line | None) -> Outcome:
        source = self._take_source()
        if node is None:
            return Outcome(source=source)
        if isinstance(node, FunctionDef):
            return Outcome(source=source, node=node, function=node)
        try:
            result = evaluate(node)
        except AbacusError as e:
            logger.debug("Evaluation failed for %r: %s", source, e.message)
            raise
        except RecursionError as e:
            raise EvaluationError("Statement is nested too deeply to evaluate") from e
        return Outcome(source=source, node=node, value=result)

    def cancel(self) -> None:
        """Discard the open statement, if any."""
        if self._steps is not None:
            self._steps.close()
        self._take_source()

    def _too_deep(self, snippet: str) -> ParseError:
        return make_parse_error(
            "Statement is nested too deeply to parse",
            self.parser.lexer.line,
            0,
            snippet=snippet,
        )

    def _take_source(self) -> str:
        self.last_source = "\n".join(self._lines)
        self._lines = []
        self._steps = None
        self._request = None
        return self.last_source
