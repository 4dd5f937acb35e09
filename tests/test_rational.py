"""
Tests for common/rational.py exact fractions.
"""

from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from common.errors import DomainError, TrainerError
from common.rational import ONE, ZERO, Rational, parse_rational, rational_to_string


class TestNormalization:
    """Construction always lands in lowest terms with a positive denominator."""

    def test_reduces_by_gcd(self):
        r = Rational(6, 8)
        assert (r.n, r.d) == (3, 4)

    def test_negative_denominator_moves_sign(self):
        r = Rational(6, -8)
        assert (r.n, r.d) == (-3, 4)

    def test_zero_is_zero_over_one(self):
        assert Rational(0, -17) == ZERO
        assert (ZERO.n, ZERO.d) == (0, 1)

    def test_zero_denominator_raises(self):
        with pytest.raises(DomainError):
            Rational(1, 0)

    def test_domain_error_is_trainer_error(self):
        with pytest.raises(TrainerError):
            Rational(3, 0)

    @given(st.integers(-10**6, 10**6), st.integers(-10**6, 10**6).filter(lambda d: d != 0))
    @settings(max_examples=100)
    def test_matches_fraction(self, n, d):
        r = Rational(n, d)
        assert r.to_fraction() == Fraction(n, d)
        assert r.d > 0


class TestArithmetic:
    """Operators return normalized results."""

    def test_add_sub(self):
        assert Rational(1, 2) + Rational(1, 3) == Rational(5, 6)
        assert Rational(1, 2) - Rational(1, 3) == Rational(1, 6)
        assert 1 - Rational(1, 4) == Rational(3, 4)

    def test_mul_div(self):
        assert Rational(2, 3) * Rational(9, 4) == Rational(3, 2)
        assert Rational(2, 3) / Rational(4, 9) == Rational(3, 2)
        assert 2 / Rational(1, 3) == Rational(6)

    def test_division_by_zero(self):
        with pytest.raises(DomainError):
            Rational(1, 2) / ZERO

    def test_power(self):
        assert Rational(2, 3) ** 2 == Rational(4, 9)
        assert Rational(2, 3) ** -2 == Rational(9, 4)
        assert Rational(5, 7) ** 0 == ONE

    def test_zero_to_negative_power(self):
        with pytest.raises(DomainError):
            ZERO ** -1

    def test_ordering(self):
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(-1, 2) <= 0
        assert Rational(7, 2) > 3

    def test_bool_and_abs(self):
        assert not ZERO
        assert abs(Rational(-3, 4)) == Rational(3, 4)
        assert Rational(4, 2).is_integer


class TestParsing:
    """parse_rational reads fractions, mixed numbers and decimals."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3/4", Rational(3, 4)),
            (" -6/8 ", Rational(-3, 4)),
            ("1 2/3", Rational(5, 3)),
            ("-1 1/2", Rational(-3, 2)),
            ("0.25", Rational(1, 4)),
            ("7", Rational(7)),
        ],
    )
    def test_accepted(self, text, expected):
        assert parse_rational(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1/0", "1/2/3", "2 1/0"])
    def test_rejected(self, text):
        assert parse_rational(text) is None

    def test_to_string(self):
        assert rational_to_string(Rational(-3, 4)) == "-3/4"
        assert rational_to_string(Rational(8, 4)) == "2"
        assert str(Rational(1, 3)) == "1/3"

    @given(st.integers(-10**4, 10**4), st.integers(1, 10**4))
    @settings(max_examples=100)
    def test_string_round_trip(self, n, d):
        r = Rational(n, d)
        assert parse_rational(rational_to_string(r)) == r

    def test_from_float_is_bounded(self):
        assert Rational.from_float(0.1) == Rational(1, 10)
