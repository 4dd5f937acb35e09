"""
Task and result records for the algebra exercises.

A ``MathTask`` carries its expected answer as one of eight payload kinds;
``check_answer`` dispatches on the payload type, never on the mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from algebra.monomial import Monomial, monomial_to_string
from algebra.polynomial import Polynomial, polynomial_to_string
from algebra.radicals import SqrtForm, format_sqrt_form
from common.rational import Rational, rational_to_string

DEFAULT_NUMERIC_TOLERANCE = 1e-6


class MathMode(str, Enum):
    CALC = "mathCalc"
    POWERS = "mathPowers"
    ROOTS = "mathRoots"
    BINOM = "mathBinom"
    QUAD = "mathQuad"
    LOGS = "mathLogs"
    SUMS = "mathSums"


class ExpressionForm(str, Enum):
    """Shape an expression answer must have on top of being equivalent."""

    VERTEX = "vertex"
    RADICAL = "radical"
    POWER = "power"


@dataclass(frozen=True)
class RationalPayload:
    kind: ClassVar[str] = "rational"
    value: Rational

    def describe(self) -> Dict[str, Any]:
        return {"value": rational_to_string(self.value)}


@dataclass(frozen=True)
class NumericPayload:
    kind: ClassVar[str] = "numeric"
    value: float
    tolerance: float = DEFAULT_NUMERIC_TOLERANCE

    def describe(self) -> Dict[str, Any]:
        return {"value": self.value, "tolerance": self.tolerance}


@dataclass(frozen=True)
class ExpressionPayload:
    kind: ClassVar[str] = "expression"
    expr: str
    variables: Tuple[str, ...] = ()
    positive_only: bool = False
    form: Optional[ExpressionForm] = None

    def describe(self) -> Dict[str, Any]:
        return {
            "expr": self.expr,
            "variables": list(self.variables),
            "positive_only": self.positive_only,
            "form": self.form.value if self.form else None,
        }


@dataclass(frozen=True)
class MonomialPayload:
    kind: ClassVar[str] = "monomial"
    value: Monomial
    disallow_negative: bool = False

    def describe(self) -> Dict[str, Any]:
        return {"value": monomial_to_string(self.value), "disallow_negative": self.disallow_negative}


@dataclass(frozen=True)
class BooleanPayload:
    kind: ClassVar[str] = "boolean"
    value: bool

    def describe(self) -> Dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class PolynomialPayload:
    kind: ClassVar[str] = "polynomial"
    value: Polynomial

    def describe(self) -> Dict[str, Any]:
        return {"value": polynomial_to_string(self.value)}


@dataclass(frozen=True)
class TextPayload:
    """Accepted answers, already lowercased with whitespace removed."""

    kind: ClassVar[str] = "text"
    accepts: Tuple[str, ...]

    def describe(self) -> Dict[str, Any]:
        return {"accepts": list(self.accepts)}


@dataclass(frozen=True)
class RadicalPayload:
    kind: ClassVar[str] = "radical"
    value: SqrtForm

    def describe(self) -> Dict[str, Any]:
        return {"value": format_sqrt_form(self.value)}


Payload = Union[
    RationalPayload,
    NumericPayload,
    ExpressionPayload,
    MonomialPayload,
    BooleanPayload,
    PolynomialPayload,
    TextPayload,
    RadicalPayload,
]


@dataclass(frozen=True)
class Draft:
    """What a builder produces before the task is stamped with mode and seeds."""

    prompt: str
    solution: str
    payload: Payload
    explanation: Optional[str] = None


@dataclass(frozen=True)
class MathTask:
    mode: MathMode
    difficulty: str
    prompt: str
    solution: str
    payload: Payload
    target_seconds: int
    seed: int
    next_seed: int
    explanation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "difficulty": self.difficulty,
            "prompt": self.prompt,
            "solution": self.solution,
            "payload": {"kind": self.payload.kind, **self.payload.describe()},
            "target_seconds": self.target_seconds,
            "seed": self.seed,
            "next_seed": self.next_seed,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class CheckResult:
    correct: bool
    feedback: str
    normalized_input: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correct": self.correct,
            "feedback": self.feedback,
            "normalized_input": self.normalized_input,
        }


__all__ = [
    "MathMode",
    "ExpressionForm",
    "RationalPayload",
    "NumericPayload",
    "ExpressionPayload",
    "MonomialPayload",
    "BooleanPayload",
    "PolynomialPayload",
    "TextPayload",
    "RadicalPayload",
    "Payload",
    "Draft",
    "MathTask",
    "CheckResult",
]
