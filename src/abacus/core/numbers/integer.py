"""Signed integers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from abacus.core.numbers.base import Kind, Numeric, sign
from abacus.core.numbers.natural import Natural

if TYPE_CHECKING:
    from abacus.core.numbers.number import Number


def truncated_remainder(dividend: int, divisor: int) -> int:
    """Remainder of truncating division; takes the sign of the dividend."""
    remainder = abs(dividend) % abs(divisor)
    return -remainder if dividend < 0 else remainder


class Integer(Numeric):
    """A signed integer."""

    __slots__ = ("_value",)

    kind = Kind.INTEGER

    def __init__(self, value: int = 0) -> None:
        self._value = int(value)

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Integer({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __neg__(self) -> Integer:
        return Integer(-self._value)

    def __abs__(self) -> Natural:
        return Natural(abs(self._value))

    def _add(self, other: Integer) -> Number:
        return Integer(self._value + other._value)

    def _sub(self, other: Integer) -> Number:
        return Integer(self._value - other._value)

    def _mul(self, other: Integer) -> Number:
        return Integer(self._value * other._value)

    def _div(self, other: Integer) -> Number:
        if other._value == 0:
            raise ZeroDivisionError("integer division by zero")
        if truncated_remainder(self._value, other._value) == 0:
            return Integer(self._value // other._value)
        from abacus.core.numbers.rational import Rational

        return Rational(self._value, other._value)

    def _mod(self, other: Integer) -> Number:
        if other._value == 0:
            raise ZeroDivisionError("integer remainder by zero")
        return Integer(truncated_remainder(self._value, other._value))

    def _equals(self, other: Integer) -> bool:
        return self._value == other._value

    def _compare(self, other: Integer) -> int:
        return sign(self._value - other._value)
