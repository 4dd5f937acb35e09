"""
Monomials: a rational coefficient times single-letter variables with
integer exponents.

Grammar (whitespace ignored, variables case-folded):

    product  := factor (('*' | '·' | '/' | <adjacent>) factor)*
    factor   := ['-' | '+'] atom ['^' exponent]
    atom     := number | letter | '(' product ')'
    exponent := ['('] ['-'] digits [')']

Every factor after a ``/`` lands in the denominator, so ``a/b·c`` reads
as ``a/(b·c)``. A sign is only accepted where a factor is expected;
``a-b`` is a sum, not a monomial, and is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from common.errors import ExpressionSyntaxError
from common.rational import ONE, Rational, parse_rational, rational_to_string


_MULTIPLY = "*·×"
_OPEN = "({["
_CLOSE = ")}]"


@dataclass(frozen=True, slots=True)
class Monomial:
    coeff: Rational
    powers: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self):
        items = self.powers.items() if isinstance(self.powers, Mapping) else self.powers
        merged: Dict[str, int] = {}
        for name, exp in items:
            key = name.lower()
            merged[key] = merged.get(key, 0) + int(exp)
        object.__setattr__(self, "powers", tuple(sorted((k, e) for k, e in merged.items() if e != 0)))
        coeff = self.coeff if isinstance(self.coeff, Rational) else Rational(self.coeff)
        object.__setattr__(self, "coeff", coeff)

    def exponent(self, name: str) -> int:
        return dict(self.powers).get(name.lower(), 0)

    @property
    def has_negative_exponent(self) -> bool:
        return any(e < 0 for _, e in self.powers)

    def __mul__(self, other: "Monomial") -> "Monomial":
        if not isinstance(other, Monomial):
            return NotImplemented
        return Monomial(self.coeff * other.coeff, self.powers + other.powers)

    def __pow__(self, exponent: int) -> "Monomial":
        return Monomial(self.coeff ** exponent, tuple((k, e * exponent) for k, e in self.powers))

    def reciprocal(self) -> "Monomial":
        return self ** -1


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class MonomialParser:
    def __init__(self, text: str):
        self.text = "".join(text.replace("−", "-").split())
        self.pos = 0

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _error(self, message: str) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.pos, self.text)

    def parse(self) -> Monomial:
        if not self.text:
            raise self._error("empty term")
        result = self.parse_product()
        if self.pos < len(self.text):
            raise self._error(f"unexpected {self._peek()!r} in term")
        return result

    def parse_product(self) -> Monomial:
        result = Monomial(ONE)
        in_denominator = False
        expect_factor = True
        factors = 0
        while True:
            ch = self._peek()
            if not ch or ch in _CLOSE:
                break
            if ch in _MULTIPLY or ch == "/":
                if expect_factor:
                    raise self._error(f"missing factor before {ch!r}")
                self.pos += 1
                in_denominator = in_denominator or ch == "/"
                expect_factor = True
                continue
            if ch in "+-" and not expect_factor:
                raise self._error("a sum is not a monomial")
            factor = self.parse_factor()
            result = result * (factor.reciprocal() if in_denominator else factor)
            expect_factor = False
            factors += 1
        if expect_factor:
            raise self._error("term is incomplete" if factors else "empty term")
        return result

    def parse_factor(self) -> Monomial:
        sign = 1
        while self._peek() in ("+", "-"):
            if self._peek() == "-":
                sign = -sign
            self.pos += 1
        atom = self.parse_atom()
        if self._peek() == "^":
            self.pos += 1
            atom = atom ** self.parse_exponent()
        return atom if sign > 0 else Monomial(-atom.coeff, atom.powers)

    def parse_exponent(self) -> int:
        closing = ""
        if self._peek() and self._peek() in _OPEN:
            closing = _CLOSE[_OPEN.index(self._peek())]
            self.pos += 1
        start = self.pos
        if self._peek() in ("+", "-"):
            self.pos += 1
        while self._peek().isdigit():
            self.pos += 1
        digits = self.text[start:self.pos]
        if not digits.lstrip("+-"):
            raise self._error("exponent must be an integer")
        if closing:
            if self._peek() != closing:
                raise self._error("missing closing bracket in exponent")
            self.pos += 1
        return int(digits)

    def parse_atom(self) -> Monomial:
        ch = self._peek()
        if not ch:
            raise self._error("term is incomplete")
        if ch.isdigit() or ch == ".":
            start = self.pos
            while self._peek().isdigit() or self._peek() == ".":
                self.pos += 1
            value = parse_rational(self.text[start:self.pos])
            if value is None:
                raise ExpressionSyntaxError(f"bad number {self.text[start:self.pos]!r}", start, self.text)
            return Monomial(value)
        if ch.isascii() and ch.isalpha():
            self.pos += 1
            return Monomial(ONE, ((ch, 1),))
        if ch in _OPEN:
            closing = _CLOSE[_OPEN.index(ch)]
            open_pos = self.pos
            self.pos += 1
            inner = self.parse_product()
            if self._peek() != closing:
                raise ExpressionSyntaxError(
                    f"missing closing bracket for {ch!r} at {open_pos}", self.pos, self.text
                )
            self.pos += 1
            return inner
        raise self._error(f"unexpected symbol {ch!r}")


def parse_monomial(text: str) -> Monomial:
    """Parse a product of powers; raises ExpressionSyntaxError."""
    return MonomialParser(text).parse()


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------

def _power_text(name: str, exp: int) -> str:
    return name if exp == 1 else f"{name}^{exp}"


def monomial_to_string(m: Monomial) -> str:
    """``-3·a^2·b``; negative exponents are printed as such."""
    sign = "-" if m.coeff < 0 else ""
    magnitude = abs(m.coeff)
    parts = [] if magnitude == ONE and m.powers else [rational_to_string(magnitude)]
    parts.extend(_power_text(name, exp) for name, exp in m.powers)
    return sign + "·".join(parts)


def monomial_to_fraction(m: Monomial) -> str:
    """Same monomial written with positive exponents only: ``y^3/a^2``."""
    sign = "-" if m.coeff < 0 else ""
    top = [_power_text(n, e) for n, e in m.powers if e > 0]
    bottom = [_power_text(n, -e) for n, e in m.powers if e < 0]
    if abs(m.coeff.n) != 1 or not top:
        top.insert(0, str(abs(m.coeff.n)))
    if m.coeff.d != 1:
        bottom.insert(0, str(m.coeff.d))
    text = "·".join(top)
    if bottom:
        denominator = bottom[0] if len(bottom) == 1 else "(" + "·".join(bottom) + ")"
        text = f"{text}/{denominator}"
    return sign + text


__all__ = [
    "Monomial",
    "MonomialParser",
    "parse_monomial",
    "monomial_to_string",
    "monomial_to_fraction",
]
