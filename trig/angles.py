"""
Angles in degrees or as exact rational multiples of π.

Radian angles are stored as ``p/q · π`` in lowest terms, never as floats,
so two radian angles compare by exact rational equality. Degree angles
may be fractional and compare with a ``1e-9`` tolerance.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Optional, Union

from common.errors import DomainError, ExpressionSyntaxError

DEGREE_TOLERANCE = 1e-9

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_DEGREES_RE = re.compile(rf"^({_NUMBER})(?:°|deg)$", re.IGNORECASE)
_PI_RE = re.compile(rf"^([+-]?|{_NUMBER}(?:/\d+)?)\*?(?:π|pi)(?:/(\d+))?$", re.IGNORECASE)
_PLAIN_RE = re.compile(rf"^{_NUMBER}(?:/\d+)?$")


@dataclass(frozen=True, slots=True)
class DegAngle:
    value: float


@dataclass(frozen=True, slots=True)
class RadAngle:
    """``p/q · π`` with ``q > 0`` and ``gcd(|p|, q) == 1``."""

    p: int
    q: int = 1

    def __post_init__(self):
        p, q = int(self.p), int(self.q)
        if q == 0:
            raise DomainError("angle denominator must not be zero")
        if q < 0:
            p, q = -p, -q
        g = gcd(p, q) or 1
        object.__setattr__(self, "p", p // g)
        object.__setattr__(self, "q", q // g)

    @classmethod
    def from_fraction(cls, turns: Fraction) -> "RadAngle":
        return cls(turns.numerator, turns.denominator)

    @property
    def multiple(self) -> Fraction:
        """The factor in front of π."""
        return Fraction(self.p, self.q)


Angle = Union[DegAngle, RadAngle]


def _fraction(text: str) -> Fraction:
    try:
        return Fraction(text)
    except (ValueError, ZeroDivisionError) as exc:
        raise ExpressionSyntaxError(f"not a number: {text!r}", 0, text) from exc


def parse_angle(text: str) -> Angle:
    """
    Read ``"30°"``, ``"π"``, ``"-π/2"``, ``"3π/4"``, ``"1.5π"`` or a bare
    number (a multiple of π). Raises ExpressionSyntaxError otherwise.
    """
    compact = re.sub(r"\s+", "", text).replace("−", "-")
    if not compact:
        raise ExpressionSyntaxError("empty angle", 0, text)

    m = _DEGREES_RE.match(compact)
    if m:
        return DegAngle(float(m.group(1)))

    m = _PI_RE.match(compact)
    if m:
        factor_text, divisor = m.group(1), m.group(2)
        if factor_text in ("", "+"):
            factor = Fraction(1)
        elif factor_text == "-":
            factor = Fraction(-1)
        else:
            factor = _fraction(factor_text)
        if divisor is not None:
            if int(divisor) == 0:
                raise ExpressionSyntaxError("angle denominator must not be zero", len(compact) - 1, text)
            factor /= int(divisor)
        return RadAngle.from_fraction(factor)

    if _PLAIN_RE.match(compact):
        return RadAngle.from_fraction(_fraction(compact))

    raise ExpressionSyntaxError(f"cannot read angle {text.strip()!r}", 0, text)


def normalize_angle(angle: Angle) -> Angle:
    """Degrees into ``[0, 360)``, radians into ``[0, 2)·π``."""
    if isinstance(angle, DegAngle):
        value = angle.value % 360
        return DegAngle(0.0 if value == 0 else value)
    return RadAngle(angle.p % (2 * angle.q), angle.q)


def degrees_to_multiple(value: float) -> Fraction:
    """Exact multiple of π for a degree value."""
    return Fraction(value).limit_denominator(10**6) / 180


def to_rad_angle(angle: Angle) -> RadAngle:
    if isinstance(angle, RadAngle):
        return angle
    return RadAngle.from_fraction(degrees_to_multiple(angle.value))


def to_radians(angle: Angle) -> float:
    if isinstance(angle, DegAngle):
        return math.radians(angle.value)
    return angle.p / angle.q * math.pi


def angles_equivalent(a: Angle, b: Angle) -> bool:
    """Same direction on the unit circle."""
    if isinstance(a, DegAngle) and isinstance(b, DegAngle):
        diff = abs(normalize_angle(a).value - normalize_angle(b).value)
        return diff < DEGREE_TOLERANCE or abs(diff - 360) < DEGREE_TOLERANCE
    return normalize_angle(to_rad_angle(a)) == normalize_angle(to_rad_angle(b))


def format_multiple(multiple: Fraction) -> str:
    """``π/6``, ``-3π/4``, ``2π``, ``0``."""
    if multiple == 0:
        return "0"
    p, q = multiple.numerator, multiple.denominator
    head = {1: "π", -1: "-π"}.get(p, f"{p}π")
    return head if q == 1 else f"{head}/{q}"


def format_degrees(value: float) -> str:
    return f"{int(value)}°" if float(value).is_integer() else f"{value}°"


def angle_to_string(angle: Angle) -> str:
    if isinstance(angle, DegAngle):
        return format_degrees(angle.value)
    return format_multiple(angle.multiple)


__all__ = [
    "DegAngle",
    "RadAngle",
    "Angle",
    "DEGREE_TOLERANCE",
    "parse_angle",
    "normalize_angle",
    "degrees_to_multiple",
    "to_rad_angle",
    "to_radians",
    "angles_equivalent",
    "format_multiple",
    "format_degrees",
    "angle_to_string",
]
