"""
Exact sine, cosine and tangent of special angles.

Values live in a closed enumeration: 0, ±1, ±1/2, ±√n, ±√n/2 (n ∈ {2, 3}),
±√3/3, a rational, or undefined. Angles that are integer multiples of
1/6, 1/4, 1/3, 1/2 or 1 times π are computed exactly; anything else falls
back to a rational approximation and is flagged with ``exact=False``.

Textual forms round-trip through ``format_exact`` / ``parse_exact_value``:

    "0"  "1"  "-1"  "1/2"  "-1/2"  "sqrt(2)/2"  "-sqrt(3)"  "sqrt(3)/3"
    "undef"  "7/10"
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple, Union

from common.errors import ExpressionSyntaxError
from common.rational import Rational, parse_rational, rational_to_string
from trig.angles import Angle, DegAngle, to_radians

SPECIAL_FRACTIONS = (Fraction(1, 6), Fraction(1, 4), Fraction(1, 3), Fraction(1, 2), Fraction(1))
SPECIAL_TOLERANCE = 1e-9
UNDEF_COS_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class Zero:
    pass


@dataclass(frozen=True, slots=True)
class One:
    sign: int = 1


@dataclass(frozen=True, slots=True)
class Half:
    sign: int = 1


@dataclass(frozen=True, slots=True)
class Sqrt:
    """``sign · √n``, halved when ``over_two``."""
    n: int
    sign: int = 1
    over_two: bool = False


@dataclass(frozen=True, slots=True)
class InvSqrt:
    """``sign · √n / n``, i.e. ``1/√n``."""
    n: int = 3
    sign: int = 1


@dataclass(frozen=True, slots=True)
class RationalValue:
    r: Rational


@dataclass(frozen=True, slots=True)
class Undef:
    pass


ExactValue = Union[Zero, One, Half, Sqrt, InvSqrt, RationalValue, Undef]


@dataclass(frozen=True, slots=True)
class TrigValues:
    sin: ExactValue
    cos: ExactValue
    tan: ExactValue
    exact: bool = True

    def to_dict(self) -> dict:
        return {
            "sin": format_exact(self.sin),
            "cos": format_exact(self.cos),
            "tan": format_exact(self.tan),
            "exact": self.exact,
        }


def _sign_of(value: ExactValue) -> int:
    return getattr(value, "sign", 1)


def exact_from_rational(r: Rational) -> ExactValue:
    """Canonical variant for a rational: 0, ±1 and ±1/2 get their own kinds."""
    if r.n == 0:
        return Zero()
    sign = 1 if r.n > 0 else -1
    if abs(r.n) == 1 and r.d == 1:
        return One(sign)
    if abs(r.n) == 1 and r.d == 2:
        return Half(sign)
    return RationalValue(r)


def to_float(value: ExactValue) -> float:
    if isinstance(value, Zero):
        return 0.0
    if isinstance(value, One):
        return float(value.sign)
    if isinstance(value, Half):
        return value.sign / 2
    if isinstance(value, Sqrt):
        return value.sign * math.sqrt(value.n) / (2 if value.over_two else 1)
    if isinstance(value, InvSqrt):
        return value.sign / math.sqrt(value.n)
    if isinstance(value, RationalValue):
        return float(value.r)
    return math.nan


# ---------------------------------------------------------------------------
# Special angles
# ---------------------------------------------------------------------------

# (sin, cos) magnitudes for reference angles in [0, π/2), keyed by multiple of π.
_REFERENCE = {
    Fraction(0): ("0", "1"),
    Fraction(1, 6): ("1/2", "√3/2"),
    Fraction(1, 4): ("√2/2", "√2/2"),
    Fraction(1, 3): ("√3/2", "1/2"),
}


def _with_sign(magnitude: str, sign: int) -> ExactValue:
    if magnitude == "0":
        return Zero()
    if magnitude == "1":
        return One(sign)
    if magnitude == "1/2":
        return Half(sign)
    return Sqrt(int(magnitude[1]), sign, over_two=True)


def special_multiple(angle: Angle) -> Optional[Fraction]:
    """
    The angle as an exact multiple of π in ``[0, 2)`` when it is an integer
    multiple of one of the special fractions, else None.
    """
    if isinstance(angle, DegAngle):
        turns = angle.value / 180
    else:
        turns = angle.p / angle.q
    turns %= 2
    for base in SPECIAL_FRACTIONS:
        ratio = turns / float(base)
        m = round(ratio)
        if abs(ratio - m) < SPECIAL_TOLERANCE:
            return (m * base) % 2
    return None


def exact_sin_cos(angle: Angle) -> Optional[Tuple[ExactValue, ExactValue]]:
    multiple = special_multiple(angle)
    if multiple is None:
        return None
    quadrant = int(multiple // Fraction(1, 2))
    sin_mag, cos_mag = _REFERENCE[multiple - Fraction(quadrant, 2)]
    if quadrant % 2 == 1:
        sin_mag, cos_mag = cos_mag, sin_mag
    sin_sign = -1 if quadrant in (2, 3) else 1
    cos_sign = -1 if quadrant in (1, 2) else 1
    return _with_sign(sin_mag, sin_sign), _with_sign(cos_mag, cos_sign)


def tan_from_exact(sin: ExactValue, cos: ExactValue) -> ExactValue:
    """
    Quotient table over the values special angles produce.

    Combinations outside the table are reported as Undef; this is a known
    boundary of the exact subsystem, not a statement that tan is undefined.
    """
    if isinstance(cos, Zero):
        return Undef()
    if isinstance(sin, Zero):
        return Zero()
    sign = _sign_of(sin) * _sign_of(cos)
    if type(sin) is type(cos) and isinstance(sin, (One, Half)):
        return One(sign)
    if isinstance(sin, Sqrt) and isinstance(cos, Sqrt) and (sin.n, sin.over_two) == (cos.n, cos.over_two):
        return One(sign)
    if isinstance(sin, Sqrt) and sin.over_two and isinstance(cos, Half):
        return Sqrt(sin.n, sign, over_two=False)
    if isinstance(sin, Half) and isinstance(cos, Sqrt) and cos.over_two and cos.n == 3:
        return InvSqrt(3, sign)
    return Undef()


def sin_cos_tan_exact(angle: Angle) -> TrigValues:
    special = exact_sin_cos(angle)
    if special is not None:
        sin, cos = special
        return TrigValues(sin, cos, tan_from_exact(sin, cos))

    radians = to_radians(angle)
    s, c = math.sin(radians), math.cos(radians)
    tan: ExactValue
    if abs(c) < UNDEF_COS_TOLERANCE:
        tan = Undef()
    else:
        tan = exact_from_rational(Rational.from_float(s / c))
    return TrigValues(
        exact_from_rational(Rational.from_float(s)),
        exact_from_rational(Rational.from_float(c)),
        tan,
        exact=False,
    )


# ---------------------------------------------------------------------------
# Text form
# ---------------------------------------------------------------------------

def format_exact(value: ExactValue) -> str:
    minus = "-" if _sign_of(value) < 0 else ""
    if isinstance(value, Zero):
        return "0"
    if isinstance(value, One):
        return f"{minus}1"
    if isinstance(value, Half):
        return f"{minus}1/2"
    if isinstance(value, Sqrt):
        return f"{minus}sqrt({value.n})" + ("/2" if value.over_two else "")
    if isinstance(value, InvSqrt):
        return f"{minus}sqrt({value.n})/{value.n}"
    if isinstance(value, RationalValue):
        return rational_to_string(value.r)
    if isinstance(value, Undef):
        return "undef"
    raise TypeError(f"not an exact value: {value!r}")


_SQRT_RE = re.compile(r"^([+-]?)(?:1\*?)?sqrt\(?(\d+)\)?(?:/(\d+))?$")
_INV_SQRT_RE = re.compile(r"^([+-]?)1/sqrt\(?(\d+)\)?$")


def parse_exact_value(text: str) -> ExactValue:
    """Inverse of ``format_exact``; also accepts ``√`` and ``1/sqrt(n)``."""
    t = re.sub(r"\s+", "", text).replace("√", "sqrt").replace("−", "-").lower()
    if not t:
        raise ExpressionSyntaxError("empty value", 0, text)
    if t in ("undef", "undefined"):
        return Undef()

    m = _INV_SQRT_RE.match(t)
    if m:
        sign = -1 if m.group(1) == "-" else 1
        n = int(m.group(2))
        if n == 2:
            return Sqrt(2, sign, over_two=True)
        if n == 3:
            return InvSqrt(3, sign)
        raise ExpressionSyntaxError(f"unsupported radicand {n}", t.find(m.group(2)), text)

    m = _SQRT_RE.match(t)
    if m:
        sign = -1 if m.group(1) == "-" else 1
        n = int(m.group(2))
        divisor = m.group(3)
        if n not in (2, 3):
            raise ExpressionSyntaxError(f"unsupported radicand {n}", t.find(m.group(2)), text)
        if divisor is None:
            return Sqrt(n, sign, over_two=False)
        if divisor == "2":
            return Sqrt(n, sign, over_two=True)
        if divisor == "3" and n == 3:
            return InvSqrt(3, sign)
        raise ExpressionSyntaxError(f"unsupported divisor {divisor}", t.rfind("/"), text)

    r = parse_rational(t)
    if r is None:
        raise ExpressionSyntaxError(f"cannot read value {text.strip()!r}", 0, text)
    return exact_from_rational(r)


def exact_equal(a: ExactValue, b: ExactValue) -> bool:
    return format_exact(a) == format_exact(b)


__all__ = [
    "Zero",
    "One",
    "Half",
    "Sqrt",
    "InvSqrt",
    "RationalValue",
    "Undef",
    "ExactValue",
    "TrigValues",
    "SPECIAL_FRACTIONS",
    "exact_from_rational",
    "to_float",
    "special_multiple",
    "exact_sin_cos",
    "tan_from_exact",
    "sin_cos_tan_exact",
    "format_exact",
    "parse_exact_value",
    "exact_equal",
]
