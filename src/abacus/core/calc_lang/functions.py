"""
Function table for a calculator session.

Holds the most recent definition of every function parsed so far. The table
is owned by a ``Session`` (or whoever constructs the ``Parser``) rather than
being module state, so independent sessions never see each other's
functions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from abacus.core.ir.syntax import FunctionDef

logger = logging.getLogger(__name__)


class FunctionTable:
    """Ordered mapping of function name to its latest definition."""

    def __init__(self) -> None:
        self._functions: dict[str, FunctionDef] = {}

    def define(self, function: FunctionDef) -> None:
        """Register a definition; a later definition of the same name wins."""
        if function.name in self._functions:
            logger.debug("Redefining function %s/%d", function.name, function.arity)
        else:
            logger.debug("Defining function %s/%d", function.name, function.arity)
        self._functions[function.name] = function

    def get(self, name: str) -> FunctionDef | None:
        return self._functions.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __getitem__(self, name: str) -> FunctionDef:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def names(self) -> list[str]:
        return list(self._functions)
