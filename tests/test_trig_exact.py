"""
Tests for trig/angles.py and trig/exact.py.
"""

from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from common.errors import DomainError, ExpressionSyntaxError
from common.rational import Rational
from trig.angles import (
    DegAngle,
    RadAngle,
    angle_to_string,
    angles_equivalent,
    format_multiple,
    normalize_angle,
    parse_angle,
    to_rad_angle,
)
from trig.exact import (
    Half,
    InvSqrt,
    One,
    RationalValue,
    Sqrt,
    Undef,
    Zero,
    exact_equal,
    format_exact,
    parse_exact_value,
    sin_cos_tan_exact,
    special_multiple,
)

CLOSED_VALUES = [
    Zero(),
    One(1),
    One(-1),
    Half(1),
    Half(-1),
    Sqrt(2, 1, over_two=True),
    Sqrt(2, -1, over_two=True),
    Sqrt(3, 1, over_two=True),
    Sqrt(3, -1, over_two=True),
    Sqrt(3, 1),
    Sqrt(3, -1),
    InvSqrt(3, 1),
    InvSqrt(3, -1),
    RationalValue(Rational(3, 7)),
    Undef(),
]


class TestAngles:
    @pytest.mark.parametrize(
        "text, angle",
        [
            ("30°", DegAngle(30.0)),
            ("-45 deg", DegAngle(-45.0)),
            ("π", RadAngle(1)),
            ("-π/2", RadAngle(-1, 2)),
            ("3π/4", RadAngle(3, 4)),
            ("3pi/4", RadAngle(3, 4)),
            ("1.5π", RadAngle(3, 2)),
            ("2/3", RadAngle(2, 3)),
            ("0", RadAngle(0)),
        ],
    )
    def test_parse(self, text, angle):
        assert parse_angle(text) == angle

    @pytest.mark.parametrize("text", ["", "abc", "π/0", "30°°", "3/0"])
    def test_parse_errors(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse_angle(text)

    def test_rad_angle_lowest_terms(self):
        angle = RadAngle(2, -4)
        assert (angle.p, angle.q) == (-1, 2)
        with pytest.raises(DomainError):
            RadAngle(1, 0)

    def test_normalize(self):
        assert normalize_angle(DegAngle(-30)) == DegAngle(330)
        assert normalize_angle(DegAngle(720)) == DegAngle(0.0)
        assert normalize_angle(RadAngle(-1, 2)) == RadAngle(3, 2)
        assert normalize_angle(RadAngle(9, 4)) == RadAngle(1, 4)

    def test_equivalence_across_units(self):
        assert to_rad_angle(DegAngle(135)) == RadAngle(3, 4)
        assert angles_equivalent(DegAngle(180), RadAngle(1))
        assert angles_equivalent(DegAngle(-90), DegAngle(270))
        assert not angles_equivalent(RadAngle(1, 6), RadAngle(1, 3))

    def test_format(self):
        assert format_multiple(Fraction(1, 6)) == "π/6"
        assert format_multiple(Fraction(-3, 4)) == "-3π/4"
        assert format_multiple(Fraction(2)) == "2π"
        assert format_multiple(Fraction(0)) == "0"
        assert angle_to_string(DegAngle(22.5)) == "22.5°"
        assert angle_to_string(DegAngle(30.0)) == "30°"


class TestSpecialValues:
    @pytest.mark.parametrize(
        "angle, sin, cos, tan",
        [
            (DegAngle(0), "0", "1", "0"),
            (DegAngle(30), "1/2", "sqrt(3)/2", "sqrt(3)/3"),
            (DegAngle(45), "sqrt(2)/2", "sqrt(2)/2", "1"),
            (DegAngle(60), "sqrt(3)/2", "1/2", "sqrt(3)"),
            (DegAngle(90), "1", "0", "undef"),
            (DegAngle(120), "sqrt(3)/2", "-1/2", "-sqrt(3)"),
            (RadAngle(3, 4), "sqrt(2)/2", "-sqrt(2)/2", "-1"),
            (DegAngle(180), "0", "-1", "0"),
            (RadAngle(7, 6), "-1/2", "-sqrt(3)/2", "sqrt(3)/3"),
            (DegAngle(270), "-1", "0", "undef"),
            (RadAngle(-1, 2), "-1", "0", "undef"),
            (DegAngle(330), "-1/2", "sqrt(3)/2", "-sqrt(3)/3"),
            (DegAngle(360), "0", "1", "0"),
        ],
    )
    def test_table(self, angle, sin, cos, tan):
        values = sin_cos_tan_exact(angle)
        assert values.exact
        assert (format_exact(values.sin), format_exact(values.cos), format_exact(values.tan)) == (sin, cos, tan)

    def test_special_multiple(self):
        assert special_multiple(DegAngle(225)) == Fraction(5, 4)
        assert special_multiple(RadAngle(13, 6)) == Fraction(1, 6)
        assert special_multiple(DegAngle(15)) is None

    def test_non_special_falls_back_to_rational(self):
        values = sin_cos_tan_exact(DegAngle(15))
        assert not values.exact
        assert isinstance(values.sin, RationalValue)
        assert float(values.sin.r) == pytest.approx(0.258819, abs=1e-6)

    def test_to_dict(self):
        assert sin_cos_tan_exact(DegAngle(90)).to_dict() == {
            "sin": "1", "cos": "0", "tan": "undef", "exact": True,
        }


class TestExactText:
    @pytest.mark.parametrize(
        "text, value",
        [
            ("√2/2", Sqrt(2, 1, over_two=True)),
            ("-sqrt(3)/2", Sqrt(3, -1, over_two=True)),
            ("sqrt3", Sqrt(3, 1)),
            ("1/sqrt(3)", InvSqrt(3, 1)),
            ("−√3/3", InvSqrt(3, -1)),
            ("1/√2", Sqrt(2, 1, over_two=True)),
            ("0.5", Half(1)),
            ("-1", One(-1)),
            ("0", Zero()),
            ("undefined", Undef()),
        ],
    )
    def test_parse(self, text, value):
        assert parse_exact_value(text) == value

    @pytest.mark.parametrize("text", ["", "sqrt(5)", "sqrt(2)/3", "1/sqrt(7)", "abc"])
    def test_parse_errors(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse_exact_value(text)

    def test_exact_equal(self):
        assert exact_equal(parse_exact_value("1/sqrt(2)"), Sqrt(2, 1, over_two=True))
        assert not exact_equal(Half(1), Half(-1))

    @given(st.sampled_from(CLOSED_VALUES))
    @settings(max_examples=50)
    def test_format_parse_round_trip(self, value):
        assert parse_exact_value(format_exact(value)) == value
