"""The closed sum type over the five numeric kinds."""

from __future__ import annotations

from typing import TypeAlias

from abacus.core.numbers.complex import Complex
from abacus.core.numbers.integer import Integer
from abacus.core.numbers.natural import Natural
from abacus.core.numbers.rational import Rational
from abacus.core.numbers.real import Real

Number: TypeAlias = Natural | Integer | Rational | Real | Complex

NUMBER_TYPES = (Natural, Integer, Rational, Real, Complex)


def is_number(value: object) -> bool:
    return isinstance(value, NUMBER_TYPES)
