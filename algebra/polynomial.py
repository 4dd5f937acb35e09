"""
Polynomials in one variable with rational coefficients.

Accepted input is a signed sum of terms ``c``, ``c*x``, ``cx^k`` or
``x^k`` with non-negative integer exponents; like terms are combined, so
``x^2 + 2x + x`` equals ``x^2 + 3x``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

from common.errors import ExpressionSyntaxError
from common.rational import ONE, ZERO, Rational, parse_rational, rational_to_string

_COEFF = r"(?P<coeff>\d+(?:\.\d+)?(?:/\d+)?|\.\d+)?"


def _term_pattern(var: str) -> re.Pattern:
    return re.compile(
        rf"^{_COEFF}(?:[*·]?(?P<var>{re.escape(var)})(?:\^(?:\((?P<pexp>\d+)\)|(?P<exp>\d+)))?)?$",
        re.IGNORECASE,
    )


@dataclass(frozen=True, slots=True)
class Polynomial:
    """Coefficients keyed by exponent, zero terms dropped, highest power first."""

    terms: Tuple[Tuple[int, Rational], ...] = ()

    def __post_init__(self):
        items = self.terms.items() if isinstance(self.terms, Mapping) else self.terms
        merged: Dict[int, Rational] = {}
        for exp, coeff in items:
            c = coeff if isinstance(coeff, Rational) else Rational(coeff)
            merged[int(exp)] = merged.get(int(exp), ZERO) + c
        object.__setattr__(
            self, "terms", tuple(sorted(((e, c) for e, c in merged.items() if c), reverse=True))
        )

    def coefficient(self, exp: int) -> Rational:
        return dict(self.terms).get(exp, ZERO)

    @property
    def degree(self) -> int:
        return self.terms[0][0] if self.terms else 0


def parse_polynomial(text: str, var: str = "x") -> Polynomial:
    """Parse a sum of terms in ``var``; raises ExpressionSyntaxError."""
    compact = "".join(text.replace("−", "-").split())
    if not compact:
        raise ExpressionSyntaxError("empty polynomial", 0, text)
    pattern = _term_pattern(var)
    coeffs: Dict[int, Rational] = {}
    for match in re.finditer(r"([+-]?)([^+-]*)", compact):
        sign, body = match.group(1), match.group(2)
        if not sign and not body:
            continue
        if not body:
            raise ExpressionSyntaxError("sign without a term", match.start(), compact)
        term = pattern.match(body)
        if term is None:
            raise ExpressionSyntaxError(f"cannot read term {body!r}", match.start(2), compact)
        if term.group("coeff"):
            coeff = parse_rational(term.group("coeff"))
            if coeff is None:
                raise ExpressionSyntaxError(f"bad coefficient {term.group('coeff')!r}", match.start(2), compact)
        else:
            if not term.group("var") or body[0] in "*·":
                raise ExpressionSyntaxError(f"cannot read term {body!r}", match.start(2), compact)
            coeff = ONE
        if term.group("var"):
            exp = int(term.group("exp") or term.group("pexp") or 1)
        else:
            exp = 0
        if sign == "-":
            coeff = -coeff
        coeffs[exp] = coeffs.get(exp, ZERO) + coeff
    return Polynomial(coeffs)


def polynomial_to_string(p: Polynomial, var: str = "x") -> str:
    """``4x^2-12x+9``; non-integer coefficients are joined with ``*``."""
    if not p.terms:
        return "0"
    out = []
    for exp, coeff in p.terms:
        sign = "-" if coeff < 0 else "+"
        magnitude = abs(coeff)
        if exp == 0:
            body = rational_to_string(magnitude)
        else:
            power = var if exp == 1 else f"{var}^{exp}"
            if magnitude == ONE:
                body = power
            elif magnitude.is_integer:
                body = f"{magnitude.n}{power}"
            else:
                body = f"{rational_to_string(magnitude)}*{power}"
        out.append(f"{sign}{body}")
    text = "".join(out)
    return text[1:] if text.startswith("+") else text


__all__ = ["Polynomial", "parse_polynomial", "polynomial_to_string"]
