"""
Promotion table for the numeric tower.

Kinds are ordered Natural < Integer < Rational < Real < Complex. ``PROMOTIONS``
declares exactly one lossless converter for every ordered pair (narrow, wide);
``promote`` and ``unify`` are derived from it, and every binary operator on
``Numeric`` goes through ``unify`` before delegating to the wider kind. Because
both ``a op b`` and ``b op a`` resolve through the same entry, the two operand
orders can never disagree about the result kind.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from abacus.core.numbers.base import Kind
from abacus.core.numbers.complex import Complex
from abacus.core.numbers.integer import Integer
from abacus.core.numbers.natural import Natural
from abacus.core.numbers.number import Number
from abacus.core.numbers.rational import Rational
from abacus.core.numbers.real import Real

PROMOTIONS: dict[tuple[Kind, Kind], Callable[[Any], Number]] = {
    (Kind.NATURAL, Kind.INTEGER): lambda n: Integer(n.value),
    (Kind.NATURAL, Kind.RATIONAL): lambda n: Rational(n.value, 1),
    (Kind.NATURAL, Kind.REAL): lambda n: Real(n.value),
    (Kind.NATURAL, Kind.COMPLEX): lambda n: Complex(n.value, 0.0),
    (Kind.INTEGER, Kind.RATIONAL): lambda i: Rational(i.value, 1),
    (Kind.INTEGER, Kind.REAL): lambda i: Real(i.value),
    (Kind.INTEGER, Kind.COMPLEX): lambda i: Complex(i.value, 0.0),
    (Kind.RATIONAL, Kind.REAL): lambda q: Real(float(q)),
    (Kind.RATIONAL, Kind.COMPLEX): lambda q: Complex(float(q), 0.0),
    (Kind.REAL, Kind.COMPLEX): lambda r: Complex(r, 0.0),
}


def promote(value: Number, kind: Kind) -> Number:
    """Convert ``value`` to ``kind``, which must not be narrower than its own."""
    if value.kind == kind:
        return value
    if value.kind > kind:
        raise ValueError(f"cannot narrow {value.kind} to {kind}")
    return PROMOTIONS[(value.kind, kind)](value)


def unify(left: Number, right: Number) -> tuple[Number, Number]:
    """Promote both operands to the wider of their two kinds."""
    if left.kind == right.kind:
        return left, right
    wider = max(left.kind, right.kind)
    return promote(left, wider), promote(right, wider)
