"""Tests for the abacus numeric tower.

Covers:
- Construction, literal parsing and normalization per kind
- Promotion table: commutativity, closure, lossless conversion
- Tolerance equality and ordering (real, complex)
- Text forms
"""

from __future__ import annotations

import itertools
import math

import pytest

from abacus.core.numbers import (
    EPSILON,
    PROMOTIONS,
    Complex,
    Integer,
    Kind,
    Natural,
    Number,
    Rational,
    Real,
    is_number,
    promote,
    unify,
)

SAMPLES: dict[Kind, Number] = {
    Kind.NATURAL: Natural(3),
    Kind.INTEGER: Integer(-2),
    Kind.RATIONAL: Rational(3, 4),
    Kind.REAL: Real(1.5),
    Kind.COMPLEX: Complex(2.0, -1.0),
}

PAIRS = list(itertools.product(SAMPLES.values(), repeat=2))
PAIR_IDS = [f"{a.kind}-{b.kind}" for a, b in PAIRS]


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    """Each kind builds from values and from its literal text."""

    def test_natural_rejects_negative(self) -> None:
        with pytest.raises(ValueError, match="cannot be negative"):
            Natural(-1)

    def test_natural_parse(self) -> None:
        assert Natural.parse("123") == Natural(123)

    def test_natural_parse_rejects_sign(self) -> None:
        with pytest.raises(ValueError, match="invalid natural literal"):
            Natural.parse("-1")

    def test_rational_parse(self) -> None:
        q = Rational.parse("3//4")
        assert (q.numerator, q.denominator) == (3, 4)

    def test_rational_parse_reduces(self) -> None:
        q = Rational.parse("4//12")
        assert (q.numerator, q.denominator) == (1, 3)

    def test_rational_parse_rejects_single_slash(self) -> None:
        with pytest.raises(ValueError):
            Rational.parse("3/4")

    def test_real_parse(self) -> None:
        assert Real.parse("1.5").value == 1.5

    def test_complex_parse_is_imaginary_only(self) -> None:
        z = Complex.parse("2.5i")
        assert z.real.value == 0.0
        assert z.imag.value == 2.5

    def test_complex_parts_are_reals(self) -> None:
        z = Complex(1, 2)
        assert isinstance(z.real, Real)
        assert isinstance(z.imag, Real)

    def test_is_number(self) -> None:
        assert is_number(Natural(1))
        assert is_number(Complex(0.0, 1.0))
        assert not is_number(1)

    def test_numbers_are_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Natural(1))


class TestRationalNormalization:
    """Rationals are always in lowest terms with a positive denominator."""

    @pytest.mark.parametrize(
        ("n", "d", "expected"),
        [
            (4, 12, (1, 3)),
            (5, 15, (1, 3)),
            (1, -2, (-1, 2)),
            (-3, -6, (1, 2)),
            (0, 5, (0, 1)),
            (10, 1, (10, 1)),
        ],
    )
    def test_reduced(self, n: int, d: int, expected: tuple[int, int]) -> None:
        q = Rational(n, d)
        assert (q.numerator, q.denominator) == expected

    @pytest.mark.parametrize(("n", "d"), [(4, 12), (-9, 6), (7, -21), (0, 3), (1, 1)])
    def test_idempotent(self, n: int, d: int) -> None:
        once = Rational(n, d)
        twice = Rational(once.numerator, once.denominator)
        assert (twice.numerator, twice.denominator) == (once.numerator, once.denominator)

    def test_equal_fractions(self) -> None:
        assert Rational(4, 12) == Rational(1, 3)
        assert Rational(1, 3) == Rational(5, 15)

    def test_zero_denominator(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Rational(1, 0)


# ============================================================================
# Promotion
# ============================================================================


class TestPromotion:
    """The promotion table converts narrow kinds into wider ones."""

    def test_one_converter_per_ordered_pair(self) -> None:
        expected = {(a, b) for a in Kind for b in Kind if a < b}
        assert set(PROMOTIONS) == expected

    @pytest.mark.parametrize(("narrow", "wide"), sorted(PROMOTIONS))
    def test_lossless(self, narrow: Kind, wide: Kind) -> None:
        value = SAMPLES[narrow] if narrow != Kind.INTEGER else Integer(7)
        promoted = promote(value, wide)
        assert promoted.kind == wide
        assert promoted == value

    def test_promote_same_kind_is_identity(self) -> None:
        value = Real(2.0)
        assert promote(value, Kind.REAL) is value

    def test_cannot_narrow(self) -> None:
        with pytest.raises(ValueError, match="cannot narrow"):
            promote(Integer(1), Kind.NATURAL)

    def test_unify_picks_wider_kind(self) -> None:
        left, right = unify(Natural(2), Rational(1, 2))
        assert isinstance(left, Rational)
        assert isinstance(right, Rational)

    def test_kind_order(self) -> None:
        assert Kind.NATURAL < Kind.INTEGER < Kind.RATIONAL < Kind.REAL < Kind.COMPLEX
        assert str(Kind.REAL) == "real"


class TestCommutativity:
    """a op b equals b op a for every one of the 25 kind pairs."""

    @pytest.mark.parametrize(("a", "b"), PAIRS, ids=PAIR_IDS)
    def test_addition(self, a: Number, b: Number) -> None:
        assert a + b == b + a

    @pytest.mark.parametrize(("a", "b"), PAIRS, ids=PAIR_IDS)
    def test_multiplication(self, a: Number, b: Number) -> None:
        assert a * b == b * a


class TestClosure:
    """The result kind is the wider operand kind unless it cannot hold the result."""

    @pytest.mark.parametrize(("a", "b"), PAIRS, ids=PAIR_IDS)
    def test_addition_kind(self, a: Number, b: Number) -> None:
        assert (a + b).kind == max(a.kind, b.kind)

    @pytest.mark.parametrize(("a", "b"), PAIRS, ids=PAIR_IDS)
    def test_multiplication_kind(self, a: Number, b: Number) -> None:
        assert (a * b).kind == max(a.kind, b.kind)

    @pytest.mark.parametrize(("a", "b"), PAIRS, ids=PAIR_IDS)
    def test_subtraction_kind(self, a: Number, b: Number) -> None:
        expected = max(a.kind, b.kind, Kind.INTEGER)
        if a.kind == b.kind == Kind.NATURAL:
            # 3 - 3 stays natural
            expected = Kind.NATURAL
        assert (a - b).kind == expected

    def test_natural_subtraction_below_zero(self) -> None:
        result = Natural(3) - Natural(5)
        assert isinstance(result, Integer)
        assert result == Integer(-2)

    def test_natural_subtraction_at_zero(self) -> None:
        assert isinstance(Natural(3) - Natural(3), Natural)

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            (Natural(6), Natural(3), Natural(2)),
            (Natural(2), Natural(3), Rational(2, 3)),
            (Integer(-6), Natural(3), Integer(-2)),
            (Integer(-2), Natural(3), Rational(-2, 3)),
            (Rational(3, 8), Rational(5, 8), Rational(3, 5)),
            (Natural(2), Rational(3, 4), Rational(8, 3)),
        ],
    )
    def test_exact_division(self, a: Number, b: Number, expected: Number) -> None:
        result = a / b
        assert type(result) is type(expected)
        assert result == expected

    def test_mixed_with_python_numbers_is_unsupported(self) -> None:
        with pytest.raises(TypeError):
            Natural(1) + 1  # type: ignore[operator]


# ============================================================================
# Arithmetic per kind
# ============================================================================


class TestArithmetic:
    """Same-kind operations and the unary helpers."""

    def test_rational_addition(self) -> None:
        assert Rational(3, 8) + Rational(5, 8) == Rational(1, 1)

    def test_rational_times_natural(self) -> None:
        assert Rational(2, 3) * Rational(3, 4) == Rational(1, 2)

    def test_complex_multiplication(self) -> None:
        assert Complex(2.0, 3.0) * Complex(2.0, -3.0) == Complex(13.0, 0.0)

    def test_complex_division(self) -> None:
        assert Complex(2.0, 1.0) / Rational(1, 4) == Complex(8.0, 4.0)

    def test_negation(self) -> None:
        negated = -Natural(2)
        assert isinstance(negated, Integer)
        assert negated == Integer(-2)
        assert -Rational(1, 2) == Rational(-1, 2)
        assert -Complex(1.0, -1.0) == Complex(-1.0, 1.0)

    def test_absolute_value(self) -> None:
        magnitude = abs(Integer(-3))
        assert isinstance(magnitude, Natural)
        assert magnitude == Natural(3)
        assert abs(Complex(3.0, 4.0)) == Real(5.0)

    def test_inverse(self) -> None:
        assert Rational(2, 3).inverse() == Rational(3, 2)
        assert Complex(0.0, 2.0).inverse() == Complex(0.0, -0.5)

    def test_conjugate_and_magnitude(self) -> None:
        z = Complex(3.0, 4.0)
        assert z.conjugate() == Complex(3.0, -4.0)
        assert z.magnitude_squared() == Real(25.0)

    def test_square_roots(self) -> None:
        assert Real(4.0).sqrt() == Real(2.0)
        assert Real(-4.0).sqrt() is None
        assert Real(-4.0).complex_sqrt() == Complex(0.0, 2.0)
        assert Real(9.0).complex_sqrt() == Complex(3.0, 0.0)

    def test_narrowing_helpers(self) -> None:
        assert Rational(4, 2).as_integer() == Integer(2)
        assert Rational(1, 2).as_integer() is None
        assert Complex(2.0, 0.0).as_real() == Real(2.0)
        assert Complex(2.0, 1.0).as_real() is None
        assert Complex(2.0, 0.0).is_real


class TestRemainder:
    """Remainder is truncated and only defined for integer-like kinds."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            (Natural(7), Natural(3), Natural(1)),
            (Integer(-7), Natural(3), Integer(-1)),
            (Integer(7), Integer(-3), Integer(1)),
            (Integer(-7), Integer(-3), Integer(-1)),
        ],
    )
    def test_truncated(self, a: Number, b: Number, expected: Number) -> None:
        result = a % b
        assert type(result) is type(expected)
        assert result == expected

    @pytest.mark.parametrize(
        ("a", "b", "kind"),
        [
            (Rational(1, 2), Natural(1), "rational"),
            (Real(2.5), Natural(2), "real"),
            (Complex(1.0, 1.0), Natural(1), "complex"),
        ],
    )
    def test_undefined_for_wider_kinds(self, a: Number, b: Number, kind: str) -> None:
        with pytest.raises(TypeError, match=f"not defined for {kind} operands"):
            a % b


class TestDivisionByZero:
    """Division and remainder by zero fail at the tower level."""

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (Natural(1), Natural(0)),
            (Integer(-1), Integer(0)),
            (Rational(1, 2), Rational(0, 1)),
            (Real(1.0), Real(0.0)),
            (Complex(1.0, 1.0), Natural(0)),
        ],
    )
    def test_division(self, a: Number, b: Number) -> None:
        with pytest.raises(ZeroDivisionError):
            a / b

    def test_remainder(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Natural(1) % Natural(0)

    def test_rational_inverse_of_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            Rational(0, 1).inverse()


# ============================================================================
# Equality and ordering
# ============================================================================


class TestEquality:
    """Equality unifies kinds; reals compare within a tolerance."""

    def test_tolerance(self) -> None:
        assert Real(0.1) + Real(0.2) == Real(0.3)
        assert Real(1.0) == Real(1.0 + EPSILON / 2)
        assert Real(1.0) != Real(1.0 + EPSILON * 10)

    def test_across_kinds(self) -> None:
        assert Natural(2) == Real(2.0)
        assert Rational(1, 2) == Real(0.5)
        assert Natural(3) == Integer(3)
        assert Integer(3) == Complex(3.0, 0.0)

    def test_non_numbers(self) -> None:
        assert Natural(1) != 1
        assert Natural(1) != "1"


class TestOrdering:
    """Exact kinds order exactly, reals within tolerance, complexes partially."""

    def test_exact(self) -> None:
        assert Natural(2) < Integer(3)
        assert Rational(1, 3) < Rational(1, 2)
        assert Integer(-1) <= Natural(0)

    def test_real_tolerance_agrees_with_equality(self) -> None:
        a, b = Real(1.0), Real(1.0 + EPSILON / 2)
        assert a <= b
        assert a >= b
        assert not a < b
        assert not a > b

    def test_nan_is_unordered(self) -> None:
        nan = Real(math.nan)
        assert not nan < Real(1.0)
        assert not nan >= Real(1.0)

    def test_complex_comparable(self) -> None:
        assert Complex(1.0, 2.0) < Complex(1.0, 3.0)
        assert Complex(1.0, 2.0) > Complex(0.0, 2.0)

    def test_complex_incomparable(self) -> None:
        a, b = Complex(1.0, 2.0), Complex(2.0, 3.0)
        assert not a < b
        assert not a > b
        assert not a <= b
        assert not a >= b

    def test_non_numbers_raise(self) -> None:
        with pytest.raises(TypeError, match="cannot compare"):
            Natural(1) < 2  # type: ignore[operator]


# ============================================================================
# Text forms
# ============================================================================


class TestTextForms:
    """Each kind prints in its literal-like text form."""

    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (Natural(13), "13"),
            (Integer(-13), "-13"),
            (Rational(2, 3), "2 / 3"),
            (Rational(1, 1), "1 / 1"),
            (Rational(-1, 4), "-1 / 4"),
            (Real(3.25), "3.25"),
            (Real(10.0), "10"),
            (Real(-0.0), "0"),
            (Real(1e20), "100000000000000000000"),
            (Real(2.5e-7), "0.00000025"),
            (Real(math.inf), "inf"),
            (Real(-math.inf), "-inf"),
            (Real(math.nan), "NaN"),
            (Complex(13.0, 0.0), "13 + 0i"),
            (Complex(0.0, 3.0), "0 + 3i"),
            (Complex(2.5, -3.2), "2.5 - 3.2i"),
            (Complex(0.75, 1.5), "0.75 + 1.5i"),
        ],
    )
    def test_str(self, value: Number, text: str) -> None:
        assert str(value) == text

    def test_repr(self) -> None:
        assert repr(Rational(2, 4)) == "Rational(1, 2)"
        assert repr(Complex(1.0, 2.0)) == "Complex(1.0, 2.0)"
