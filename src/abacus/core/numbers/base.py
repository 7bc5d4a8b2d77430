"""
Shared base for the numeric kinds.

Every kind derives from ``Numeric`` and implements the same-kind operations
(``_add``, ``_sub``, ...). The public operators defined here never touch two
different kinds directly: they unify both operands through the promotion
table in ``abacus.core.numbers.promotion`` and delegate to the wider kind.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import IntEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from abacus.core.numbers.number import Number


class Kind(IntEnum):
    """Numeric kinds in promotion order (narrowest first)."""

    NATURAL = 1
    INTEGER = 2
    RATIONAL = 3
    REAL = 4
    COMPLEX = 5

    def __str__(self) -> str:
        return self.name.lower()


class Numeric:
    """Base class for all numeric kinds."""

    __slots__ = ()

    kind: ClassVar[Kind]

    # -- same-kind hooks, overridden per kind --

    def _add(self, other: Any) -> Number:
        raise NotImplementedError

    def _sub(self, other: Any) -> Number:
        raise NotImplementedError

    def _mul(self, other: Any) -> Number:
        raise NotImplementedError

    def _div(self, other: Any) -> Number:
        raise NotImplementedError

    def _mod(self, other: Any) -> Number:
        raise TypeError(f"remainder is not defined for {self.kind} operands")

    def _equals(self, other: Any) -> bool:
        raise NotImplementedError

    def _compare(self, other: Any) -> int | None:
        """Return -1, 0 or 1, or None when the values are not comparable."""
        raise NotImplementedError

    # -- promotion-aware operators --

    def __add__(self, other: object) -> Number:
        return _dispatch("_add", self, other)

    def __radd__(self, other: object) -> Number:
        return _dispatch("_add", other, self)

    def __sub__(self, other: object) -> Number:
        return _dispatch("_sub", self, other)

    def __rsub__(self, other: object) -> Number:
        return _dispatch("_sub", other, self)

    def __mul__(self, other: object) -> Number:
        return _dispatch("_mul", self, other)

    def __rmul__(self, other: object) -> Number:
        return _dispatch("_mul", other, self)

    def __truediv__(self, other: object) -> Number:
        return _dispatch("_div", self, other)

    def __rtruediv__(self, other: object) -> Number:
        return _dispatch("_div", other, self)

    def __mod__(self, other: object) -> Number:
        return _dispatch("_mod", self, other)

    def __rmod__(self, other: object) -> Number:
        return _dispatch("_mod", other, self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Numeric):
            return NotImplemented
        left, right = _unify(self, other)
        return left._equals(right)

    # Tolerance-based Real equality has no consistent hash.
    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: object) -> bool:
        order = _order(self, other)
        return order is not None and order < 0

    def __le__(self, other: object) -> bool:
        order = _order(self, other)
        return order is not None and order <= 0

    def __gt__(self, other: object) -> bool:
        order = _order(self, other)
        return order is not None and order > 0

    def __ge__(self, other: object) -> bool:
        order = _order(self, other)
        return order is not None and order >= 0

    def __pos__(self) -> Number:
        return self  # type: ignore[return-value]


def _unify(left: Numeric, right: Numeric) -> tuple[Any, Any]:
    from abacus.core.numbers.promotion import unify

    return unify(left, right)  # type: ignore[arg-type]


def _dispatch(hook: str, left: object, right: object) -> Number:
    if not isinstance(left, Numeric) or not isinstance(right, Numeric):
        return NotImplemented
    a, b = _unify(left, right)
    result: Number = getattr(a, hook)(b)
    return result


def _order(left: Numeric, right: object) -> int | None:
    if not isinstance(right, Numeric):
        raise TypeError(
            f"cannot compare {type(left).__name__} with {type(right).__name__}"
        )
    a, b = _unify(left, right)
    order: int | None = a._compare(b)
    return order


def sign(value: int | float) -> int:
    return (value > 0) - (value < 0)


def format_float(value: float) -> str:
    """Shortest round-trip decimal text, without exponent or trailing ``.0``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
