"""Seeded algebra exercises: rationals, powers, roots, binomials, quadratics, logarithms, sums."""

from algebra.monomial import Monomial, monomial_to_string, parse_monomial
from algebra.polynomial import Polynomial, parse_polynomial, polynomial_to_string
from algebra.radicals import SqrtForm, format_sqrt_form, parse_sqrt_form, simplify_sqrt
from algebra.payloads import (
    BooleanPayload,
    CheckResult,
    ExpressionPayload,
    MathMode,
    MathTask,
    MonomialPayload,
    NumericPayload,
    PolynomialPayload,
    RadicalPayload,
    RationalPayload,
    TextPayload,
)
from algebra.tasks import check_answer, generate_task

__all__ = [
    "Monomial",
    "parse_monomial",
    "monomial_to_string",
    "Polynomial",
    "parse_polynomial",
    "polynomial_to_string",
    "SqrtForm",
    "simplify_sqrt",
    "parse_sqrt_form",
    "format_sqrt_form",
    "MathMode",
    "MathTask",
    "CheckResult",
    "RationalPayload",
    "NumericPayload",
    "ExpressionPayload",
    "MonomialPayload",
    "BooleanPayload",
    "PolynomialPayload",
    "TextPayload",
    "RadicalPayload",
    "generate_task",
    "check_answer",
]
