"""
Complex numbers over ``Real`` parts.

Ordering is partial: two values compare only when their real parts or their
imaginary parts are equal. Every ordering comparison between incomparable
values is False.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from abacus.core.numbers.base import Kind, Numeric
from abacus.core.numbers.real import Real

if TYPE_CHECKING:
    from abacus.core.numbers.number import Number

_LITERAL_RE = re.compile(r"(\d+(?:\.\d*)?)i")


def _as_real(part: Real | float) -> Real:
    if isinstance(part, Real):
        return part
    return Real(part)


class Complex(Numeric):
    """``real + imag·i`` with both parts stored as ``Real``."""

    __slots__ = ("_real", "_imag")

    kind = Kind.COMPLEX

    def __init__(self, real: Real | float = 0.0, imag: Real | float = 0.0) -> None:
        self._real = _as_real(real)
        self._imag = _as_real(imag)

    @classmethod
    def parse(cls, text: str) -> Complex:
        """Build from an imaginary literal such as ``"2.5i"``; the real part is 0."""
        match = _LITERAL_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid complex literal: {text!r}")
        return cls(0.0, float(match.group(1)))

    @property
    def real(self) -> Real:
        return self._real

    @property
    def imag(self) -> Real:
        return self._imag

    @property
    def is_real(self) -> bool:
        return self._imag == Real(0.0)

    def as_real(self) -> Real | None:
        """The real part when the imaginary part is zero, otherwise None."""
        if self.is_real:
            return self._real
        return None

    def __repr__(self) -> str:
        return f"Complex({self._real.value!r}, {self._imag.value!r})"

    def __str__(self) -> str:
        imag = self._imag.value
        if imag >= 0:
            return f"{self._real} + {self._imag}i"
        return f"{self._real} - {-self._imag}i"

    def __neg__(self) -> Complex:
        return Complex(-self._real, -self._imag)

    def __abs__(self) -> Real:
        return Real(math.sqrt(self.magnitude_squared().value))

    def magnitude_squared(self) -> Real:
        re_, im = self._real.value, self._imag.value
        return Real(re_ * re_ + im * im)

    def conjugate(self) -> Complex:
        return Complex(self._real, -self._imag)

    def inverse(self) -> Complex:
        return Complex(1.0, 0.0)._div(self)

    def _add(self, other: Complex) -> Number:
        return Complex(
            self._real.value + other._real.value,
            self._imag.value + other._imag.value,
        )

    def _sub(self, other: Complex) -> Number:
        return Complex(
            self._real.value - other._real.value,
            self._imag.value - other._imag.value,
        )

    def _mul(self, other: Complex) -> Number:
        a, b = self._real.value, self._imag.value
        c, d = other._real.value, other._imag.value
        return Complex(a * c - b * d, b * c + d * a)

    def _div(self, other: Complex) -> Complex:
        norm = other.magnitude_squared().value
        if norm == 0:
            raise ZeroDivisionError("complex division by zero")
        product = self._mul(other.conjugate())
        assert isinstance(product, Complex)
        return Complex(product._real.value / norm, product._imag.value / norm)

    def _equals(self, other: Complex) -> bool:
        return self._real == other._real and self._imag == other._imag

    def _compare(self, other: Complex) -> int | None:
        if self._real == other._real:
            return self._imag._compare(other._imag)
        if self._imag == other._imag:
            return self._real._compare(other._real)
        return None
