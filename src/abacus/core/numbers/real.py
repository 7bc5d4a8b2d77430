"""
Floating-point reals.

Equality is tolerance based: two reals are equal when they differ by less
than ``EPSILON``. This is an accepted approximation and it is not transitive:
``a == b`` and ``b == c`` do not imply ``a == c`` for values spread across
more than one tolerance window.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from abacus.core.numbers.base import Kind, Numeric, format_float

if TYPE_CHECKING:
    from abacus.core.numbers.complex import Complex
    from abacus.core.numbers.number import Number

EPSILON = 1e-14

_LITERAL_RE = re.compile(r"\d+\.\d*")


class Real(Numeric):
    """A signed floating-point value."""

    __slots__ = ("_value",)

    kind = Kind.REAL

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)

    @classmethod
    def parse(cls, text: str) -> Real:
        """Build from the ``n.f`` literal form, e.g. ``"1.5"``."""
        if _LITERAL_RE.fullmatch(text) is None:
            raise ValueError(f"invalid real literal: {text!r}")
        return cls(float(text))

    @property
    def value(self) -> float:
        return self._value

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"Real({self._value!r})"

    def __str__(self) -> str:
        return format_float(self._value)

    def __neg__(self) -> Real:
        return Real(-self._value)

    def __abs__(self) -> Real:
        return Real(abs(self._value))

    def sqrt(self) -> Real | None:
        """Real square root, or None for negative values."""
        if self._value < 0:
            return None
        return Real(math.sqrt(self._value))

    def complex_sqrt(self) -> Complex:
        """Principal square root; always defined."""
        from abacus.core.numbers.complex import Complex

        if self._value >= 0:
            return Complex(math.sqrt(self._value), 0.0)
        return Complex(0.0, math.sqrt(-self._value))

    def _add(self, other: Real) -> Number:
        return Real(self._value + other._value)

    def _sub(self, other: Real) -> Number:
        return Real(self._value - other._value)

    def _mul(self, other: Real) -> Number:
        return Real(self._value * other._value)

    def _div(self, other: Real) -> Number:
        if other._value == 0:
            raise ZeroDivisionError("real division by zero")
        return Real(self._value / other._value)

    def _equals(self, other: Real) -> bool:
        return abs(self._value - other._value) < EPSILON

    def _compare(self, other: Real) -> int | None:
        if math.isnan(self._value) or math.isnan(other._value):
            return None
        if self._equals(other):
            return 0
        return -1 if self._value < other._value else 1
