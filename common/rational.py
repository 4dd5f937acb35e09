"""
Exact rational numbers with GCD normalization.

A Rational is always stored in lowest terms with a positive denominator;
zero is 0/1. Construction with a zero denominator raises DomainError.

Usage:
    from common.rational import Rational, parse_rational, rational_to_string

    r = Rational(6, -8)          # Rational(n=-3, d=4)
    parse_rational("1 2/3")      # Rational(n=5, d=3)
    rational_to_string(r)        # "-3/4"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Optional, Union

from common.errors import DomainError

_MIXED_RE = re.compile(r"^(-?\d+)\s+(\d+)\s*/\s*(\d+)$")

# Denominator cap used when approximating floats.
MAX_APPROX_DENOMINATOR = 10**6

Number = Union["Rational", int]


@dataclass(frozen=True, slots=True)
class Rational:
    """Exact fraction n/d in lowest terms, d > 0."""

    n: int
    d: int = 1

    def __post_init__(self):
        n, d = int(self.n), int(self.d)
        if d == 0:
            raise DomainError("denominator must not be zero")
        if d < 0:
            n, d = -n, -d
        g = gcd(n, d) or 1
        object.__setattr__(self, "n", n // g)
        object.__setattr__(self, "d", d // g)

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        return cls(value.numerator, value.denominator)

    @classmethod
    def from_float(cls, value: float) -> "Rational":
        """Closest fraction to ``value`` with a bounded denominator."""
        return cls.from_fraction(Fraction(value).limit_denominator(MAX_APPROX_DENOMINATOR))

    def to_fraction(self) -> Fraction:
        return Fraction(self.n, self.d)

    @property
    def is_integer(self) -> bool:
        return self.d == 1

    # -- arithmetic ---------------------------------------------------------

    @staticmethod
    def _coerce(other: object) -> Optional["Rational"]:
        if isinstance(other, Rational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Rational(other, 1)
        return None

    def __add__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(self.n * o.d + o.n * self.d, self.d * o.d)

    __radd__ = __add__

    def __sub__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(self.n * o.d - o.n * self.d, self.d * o.d)

    def __rsub__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(self.n * o.n, self.d * o.d)

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        if o.n == 0:
            raise DomainError("division by zero")
        return Rational(self.n * o.d, self.d * o.n)

    def __rtruediv__(self, other: Number) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o / self

    def __pow__(self, exponent: int) -> "Rational":
        if not isinstance(exponent, int) or isinstance(exponent, bool):
            return NotImplemented
        if exponent >= 0:
            return Rational(self.n ** exponent, self.d ** exponent)
        if self.n == 0:
            raise DomainError("zero raised to a negative power")
        return Rational(self.d ** -exponent, self.n ** -exponent)

    def __neg__(self) -> "Rational":
        return Rational(-self.n, self.d)

    def __abs__(self) -> "Rational":
        return Rational(abs(self.n), self.d)

    def __float__(self) -> float:
        return self.n / self.d

    def __bool__(self) -> bool:
        return self.n != 0

    def __lt__(self, other: Number) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.n * o.d < o.n * self.d

    def __le__(self, other: Number) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.n * o.d <= o.n * self.d

    def __gt__(self, other: Number) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.n * o.d > o.n * self.d

    def __ge__(self, other: Number) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.n * o.d >= o.n * self.d

    def __str__(self) -> str:
        return rational_to_string(self)


ZERO = Rational(0, 1)
ONE = Rational(1, 1)


def rational_to_string(r: Rational) -> str:
    """Render ``n`` for integers, ``n/d`` otherwise."""
    if r.d == 1:
        return f"{r.n}"
    return f"{r.n}/{r.d}"


def _parse_number(text: str) -> Optional[Fraction]:
    try:
        return Fraction(text.strip())
    except (ValueError, ZeroDivisionError):
        return None


def parse_rational(text: str) -> Optional[Rational]:
    """
    Read a fraction, mixed number, integer or finite decimal.

    Returns None when the text is not a number or names a zero denominator.
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    mixed = _MIXED_RE.match(trimmed)
    if mixed:
        whole, num, den = (int(g) for g in mixed.groups())
        if den == 0:
            return None
        sign = -1 if mixed.group(1).startswith("-") else 1
        return Rational(sign * (abs(whole) * den + num), den)

    if "/" in trimmed:
        parts = trimmed.split("/")
        if len(parts) != 2:
            return None
        num = _parse_number(parts[0])
        den = _parse_number(parts[1])
        if num is None or den is None or den == 0:
            return None
        return Rational.from_fraction(num / den)

    value = _parse_number(trimmed)
    if value is None:
        return None
    return Rational.from_fraction(value)


__all__ = [
    "Rational",
    "ZERO",
    "ONE",
    "MAX_APPROX_DENOMINATOR",
    "rational_to_string",
    "parse_rational",
]
