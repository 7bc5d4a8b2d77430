"""
Automatic numeric tower.

Five immutable kinds with lossless promotion along
Natural < Integer < Rational < Real < Complex:

    from abacus.core.numbers import Natural, Rational

    Natural(2) + Rational(3, 4)   # Rational(11, 4)
    Rational(4, 12)               # Rational(1, 3)
"""

from abacus.core.numbers.base import Kind, Numeric
from abacus.core.numbers.complex import Complex
from abacus.core.numbers.integer import Integer
from abacus.core.numbers.natural import Natural
from abacus.core.numbers.number import Number, is_number
from abacus.core.numbers.promotion import PROMOTIONS, promote, unify
from abacus.core.numbers.rational import Rational
from abacus.core.numbers.real import EPSILON, Real

__all__ = [
    "EPSILON",
    "PROMOTIONS",
    "Complex",
    "Integer",
    "Kind",
    "Natural",
    "Number",
    "Numeric",
    "Rational",
    "Real",
    "is_number",
    "promote",
    "unify",
]
