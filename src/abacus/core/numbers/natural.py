"""Natural numbers: non-negative integers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from abacus.core.numbers.base import Kind, Numeric, sign

if TYPE_CHECKING:
    from abacus.core.numbers.number import Number


class Natural(Numeric):
    """A non-negative integer. Construction from a negative value fails."""

    __slots__ = ("_value",)

    kind = Kind.NATURAL

    def __init__(self, value: int = 0) -> None:
        value = int(value)
        if value < 0:
            raise ValueError(f"natural number cannot be negative: {value}")
        self._value = value

    @classmethod
    def parse(cls, text: str) -> Natural:
        """Build from a run of decimal digits, e.g. ``"123"``."""
        if not text.isdecimal():
            raise ValueError(f"invalid natural literal: {text!r}")
        return cls(int(text))

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Natural({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __neg__(self) -> Number:
        from abacus.core.numbers.integer import Integer

        return Integer(-self._value)

    def __abs__(self) -> Natural:
        return self

    def _add(self, other: Natural) -> Number:
        return Natural(self._value + other._value)

    def _sub(self, other: Natural) -> Number:
        difference = self._value - other._value
        if difference < 0:
            from abacus.core.numbers.integer import Integer

            return Integer(difference)
        return Natural(difference)

    def _mul(self, other: Natural) -> Number:
        return Natural(self._value * other._value)

    def _div(self, other: Natural) -> Number:
        if other._value == 0:
            raise ZeroDivisionError("natural division by zero")
        quotient, remainder = divmod(self._value, other._value)
        if remainder == 0:
            return Natural(quotient)
        from abacus.core.numbers.rational import Rational

        return Rational(self._value, other._value)

    def _mod(self, other: Natural) -> Number:
        if other._value == 0:
            raise ZeroDivisionError("natural remainder by zero")
        return Natural(self._value % other._value)

    def _equals(self, other: Natural) -> bool:
        return self._value == other._value

    def _compare(self, other: Natural) -> int:
        return sign(self._value - other._value)
