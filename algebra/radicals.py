"""Square roots in the normal form ``k·√m`` with ``m`` square-free."""

from __future__ import annotations

import re
from dataclasses import dataclass

from common.errors import DomainError, ExpressionSyntaxError

_SQRT_FORM_RE = re.compile(r"^([+-]?\d*)\*?(?:sqrt|√)\(?(\d+)\)?$", re.IGNORECASE)
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True, slots=True)
class SqrtForm:
    k: int
    m: int = 1


def simplify_sqrt(value: int) -> SqrtForm:
    """``√value`` as ``k·√m``: ``simplify_sqrt(72) == SqrtForm(6, 2)``."""
    if value < 0:
        raise DomainError(f"square root of negative number {value}")
    if value == 0:
        return SqrtForm(0, 1)
    k, m, d = 1, value, 2
    while d * d <= m:
        while m % (d * d) == 0:
            m //= d * d
            k *= d
        d += 1
    return SqrtForm(k, m)


def sqrt_form(k: int, m: int) -> SqrtForm:
    """Normal form of ``k·√m``."""
    inner = simplify_sqrt(k * k * m)
    return SqrtForm(-inner.k if k < 0 else inner.k, inner.m)


def parse_sqrt_form(text: str) -> SqrtForm:
    """Read ``6*sqrt(2)``, ``6sqrt(2)``, ``6√2``, ``-sqrt(8)`` or an integer."""
    compact = "".join(text.replace("−", "-").split())
    if _INTEGER_RE.match(compact):
        return SqrtForm(int(compact), 1)
    match = _SQRT_FORM_RE.match(compact)
    if match is None:
        raise ExpressionSyntaxError("expected the form k*sqrt(m)", 0, text)
    head = match.group(1)
    k = -1 if head == "-" else 1 if head in ("", "+") else int(head)
    return sqrt_form(k, int(match.group(2)))


def format_sqrt_form(form: SqrtForm) -> str:
    if form.m == 1:
        return str(form.k)
    if form.k == 1:
        return f"sqrt({form.m})"
    if form.k == -1:
        return f"-sqrt({form.m})"
    return f"{form.k}*sqrt({form.m})"


__all__ = ["SqrtForm", "simplify_sqrt", "sqrt_form", "parse_sqrt_form", "format_sqrt_form"]
