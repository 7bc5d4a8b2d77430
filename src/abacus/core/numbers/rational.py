"""
Exact fractions.

A ``Rational`` is always kept in lowest terms with a positive denominator;
every construction renormalizes, so two equal fractions always carry the
same numerator and denominator.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from abacus.core.numbers.base import Kind, Numeric, sign
from abacus.core.numbers.integer import Integer

if TYPE_CHECKING:
    from abacus.core.numbers.number import Number

_LITERAL_RE = re.compile(r"(\d+)//(\d+)")


def reduce_fraction(numerator: int, denominator: int) -> tuple[int, int]:
    """Divide out the gcd of the magnitudes and move the sign onto the numerator."""
    if denominator == 0:
        raise ZeroDivisionError("rational with zero denominator")
    divisor = math.gcd(abs(numerator), abs(denominator))
    numerator //= divisor
    denominator //= divisor
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return numerator, denominator


class Rational(Numeric):
    """A fraction ``numerator / denominator`` in lowest terms."""

    __slots__ = ("_numerator", "_denominator")

    kind = Kind.RATIONAL

    def __init__(self, numerator: int = 0, denominator: int = 1) -> None:
        self._numerator, self._denominator = reduce_fraction(
            int(numerator), int(denominator)
        )

    @classmethod
    def parse(cls, text: str) -> Rational:
        """Build from the ``n//d`` literal form, e.g. ``"3//4"``."""
        match = _LITERAL_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid rational literal: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return f"{self._numerator} / {self._denominator}"

    def __neg__(self) -> Rational:
        return Rational(-self._numerator, self._denominator)

    def __abs__(self) -> Rational:
        return Rational(abs(self._numerator), self._denominator)

    def inverse(self) -> Rational:
        return Rational(self._denominator, self._numerator)

    def as_integer(self) -> Integer | None:
        """The equal ``Integer``, or None when the fraction is not whole."""
        if self._denominator == 1:
            return Integer(self._numerator)
        return None

    def _add(self, other: Rational) -> Number:
        return Rational(
            self._numerator * other._denominator + self._denominator * other._numerator,
            self._denominator * other._denominator,
        )

    def _sub(self, other: Rational) -> Number:
        return Rational(
            self._numerator * other._denominator - self._denominator * other._numerator,
            self._denominator * other._denominator,
        )

    def _mul(self, other: Rational) -> Number:
        return Rational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def _div(self, other: Rational) -> Number:
        return self._mul(other.inverse())

    def _equals(self, other: Rational) -> bool:
        return (
            self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def _compare(self, other: Rational) -> int:
        return sign(
            self._numerator * other._denominator - self._denominator * other._numerator
        )
