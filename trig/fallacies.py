"""
"Spot the fallacy": a fixed bank of trigonometric claims.

Each claim is labelled always / sometimes / false. ``generate_fallacy_rule``
selects one by weighted LCG sampling (``sometimes`` claims weigh 1, 2, 3
for easy, medium, hard) and renders feedback with a worked numeric example
drawn from the same generator, so the same seed and difficulty always
produce the same rule, option and feedback text.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from common.config import check_difficulty
from common.prng import Lcg

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 16
DIFFERENCE_TOLERANCE = 1e-9


class FallacyLabel(str, Enum):
    ALWAYS = "always"
    SOMETIMES = "sometimes"
    FALSE = "false"


OPTION_FOR_LABEL = {FallacyLabel.ALWAYS: "A", FallacyLabel.SOMETIMES: "B", FallacyLabel.FALSE: "C"}

SOMETIMES_WEIGHT = {"easy": 1, "medium": 2, "hard": 3}


class AngleSample(NamedTuple):
    value: float
    label: str


ANGLE_SAMPLES = (
    AngleSample(0.0, "0"),
    AngleSample(math.pi / 6, "π/6"),
    AngleSample(math.pi / 4, "π/4"),
    AngleSample(math.pi / 3, "π/3"),
    AngleSample(math.pi / 2, "π/2"),
)
NON_SINGULAR = tuple(a for a in ANGLE_SAMPLES if abs(math.cos(a.value)) > 1e-6)
NEGATIVE_SAMPLES = tuple(AngleSample(-a.value, f"-{a.label}") for a in ANGLE_SAMPLES[1:])

Example = Callable[[Lcg], Tuple[str, Lcg]]


@dataclass(frozen=True)
class FallacyRule:
    statement: str
    label: FallacyLabel
    explanation: str
    condition: Optional[str] = None
    example: Optional[Example] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class FallacyTask:
    rule: FallacyRule
    feedback: str
    option: str


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

def _tan(x: float) -> float:
    c = math.cos(x)
    return math.nan if abs(c) < 1e-9 else math.sin(x) / c


def _fmt(v: float) -> str:
    if not math.isfinite(v):
        return "undef"
    return f"{0.0 if abs(v) < 5e-4 else v:.3f}"


def _compare(lhs: float, rhs: float) -> str:
    return f"LHS≈{_fmt(lhs)}, RHS≈{_fmt(rhs)}"


def _differs(lhs: float, rhs: float) -> bool:
    return math.isfinite(lhs) and math.isfinite(rhs) and abs(lhs - rhs) > DIFFERENCE_TOLERANCE


# ---------------------------------------------------------------------------
# Example generators
# ---------------------------------------------------------------------------

def _check_pair(lhs: Callable[[float, float], float], rhs: Callable[[float, float], float]) -> Example:
    def example(rng: Lcg) -> Tuple[str, Lcg]:
        a, rng = rng.choice(NON_SINGULAR)
        b, rng = rng.choice(NON_SINGULAR)
        return f"Check: a={a.label}, b={b.label} → {_compare(lhs(a.value, b.value), rhs(a.value, b.value))}", rng
    return example


def _counter_pair(lhs: Callable[[float, float], float], rhs: Callable[[float, float], float]) -> Example:
    def example(rng: Lcg) -> Tuple[str, Lcg]:
        for _ in range(MAX_ATTEMPTS):
            a, rng = rng.choice(NON_SINGULAR)
            b, rng = rng.choice(NON_SINGULAR)
            if _differs(lhs(a.value, b.value), rhs(a.value, b.value)):
                break
        else:
            a = b = ANGLE_SAMPLES[1]
        return (
            f"Counterexample a={a.label}, b={b.label}: {_compare(lhs(a.value, b.value), rhs(a.value, b.value))}",
            rng,
        )
    return example


def _check_single(lhs: Callable[[float], float], rhs: Callable[[float], float]) -> Example:
    def example(rng: Lcg) -> Tuple[str, Lcg]:
        x, rng = rng.choice(NON_SINGULAR)
        return f"Check x={x.label}: {_compare(lhs(x.value), rhs(x.value))}", rng
    return example


def _counter_single(
    lhs: Callable[[float], float],
    rhs: Callable[[float], float],
    pool: Sequence[AngleSample] = NON_SINGULAR,
    note: str = "",
) -> Example:
    fallback = pool[-2] if len(pool) > 1 else pool[0]

    def example(rng: Lcg) -> Tuple[str, Lcg]:
        for _ in range(MAX_ATTEMPTS):
            x, rng = rng.choice(pool)
            if _differs(lhs(x.value), rhs(x.value)):
                break
        else:
            x = fallback
        return f"Counterexample x={x.label}: {_compare(lhs(x.value), rhs(x.value))}{note}", rng
    return example


def _tan_addition_example(rng: Lcg) -> Tuple[str, Lcg]:
    for _ in range(MAX_ATTEMPTS):
        a, rng = rng.choice(NON_SINGULAR)
        b, rng = rng.choice(NON_SINGULAR)
        if abs(_tan(a.value) * _tan(b.value) - 1) > 1e-9:
            break
    else:
        a = b = ANGLE_SAMPLES[0]
    return (
        f"holds e.g. for a={a.label}, b={b.label}; counterexample a=π/4, b=π/4: "
        "tan(a)·tan(b)=1 → denominator 0 (undefined)",
        rng,
    )


def _pythagoras_tan_example(rng: Lcg) -> Tuple[str, Lcg]:
    good, rng = rng.choice(NON_SINGULAR)
    bad = ANGLE_SAMPLES[-1]
    lhs_bad = 1 + _tan(bad.value) ** 2
    return (
        f"Condition cos x ≠ 0. x={good.label} works; x={bad.label} → cos x=0, RHS undefined "
        f"({_compare(lhs_bad, math.inf)})",
        rng,
    )


def _tan_period_example(rng: Lcg) -> Tuple[str, Lcg]:
    ok, rng = rng.choice(NON_SINGULAR)
    bad = ANGLE_SAMPLES[-1]
    return (
        f"Holds where tan is defined, e.g. x={ok.label}. At x={bad.label} tan(x) is undefined → "
        f"{_compare(_tan(bad.value + math.pi), _tan(bad.value))}",
        rng,
    )


def _square_fixed_point_example(rng: Lcg) -> Tuple[str, Lcg]:
    candidates = [
        a for a in NON_SINGULAR
        if abs(math.sin(a.value)) > 1e-6 and abs(math.sin(a.value) - 1) > 1e-6
    ]
    bad, rng = rng.choice(candidates)
    s = math.sin(bad.value)
    return (
        f"Holds only for sin x ∈ {{0,1}}, e.g. x=0. Counterexample x={bad.label}: {_compare(s ** 2, s)}",
        rng,
    )


RULE_BANK: Tuple[FallacyRule, ...] = (
    FallacyRule(
        "sin(a+b)=sin a cos b + cos a sin b", FallacyLabel.ALWAYS, "Angle addition formula for sine.",
        example=_check_pair(lambda a, b: math.sin(a + b),
                            lambda a, b: math.sin(a) * math.cos(b) + math.cos(a) * math.sin(b)),
    ),
    FallacyRule(
        "sin(a+b)=sin a + sin b", FallacyLabel.FALSE, "The cross terms are missing; it holds only in special cases.",
        example=_counter_pair(lambda a, b: math.sin(a + b), lambda a, b: math.sin(a) + math.sin(b)),
    ),
    FallacyRule(
        "cos(a+b)=cos a cos b − sin a sin b", FallacyLabel.ALWAYS, "Angle addition formula for cosine.",
        example=_check_pair(lambda a, b: math.cos(a + b),
                            lambda a, b: math.cos(a) * math.cos(b) - math.sin(a) * math.sin(b)),
    ),
    FallacyRule(
        "cos(a+b)=cos a + cos b", FallacyLabel.FALSE, "The cross terms are missing; it rarely holds.",
        example=_counter_pair(lambda a, b: math.cos(a + b), lambda a, b: math.cos(a) + math.cos(b)),
    ),
    FallacyRule(
        "tan(a+b)=(tan a + tan b)/(1 − tan a tan b)", FallacyLabel.SOMETIMES,
        "Angle addition formula for tangent.",
        condition="Defined only when tan a tan b ≠ 1 and cos a, cos b ≠ 0.",
        example=_tan_addition_example,
    ),
    FallacyRule(
        "tan(a+b)=tan a + tan b", FallacyLabel.FALSE, "The addition formula was simplified incorrectly.",
        example=_counter_pair(lambda a, b: _tan(a + b), lambda a, b: _tan(a) + _tan(b)),
    ),
    FallacyRule(
        "sin^2 x + cos^2 x = 1", FallacyLabel.ALWAYS, "Pythagorean identity on the unit circle.",
        example=_check_single(lambda x: math.sin(x) ** 2 + math.cos(x) ** 2, lambda x: 1.0),
    ),
    FallacyRule(
        "cos^2 x = 1 − sin x", FallacyLabel.FALSE, "Correct is 1 − sin^2 x.",
        example=_counter_single(lambda x: math.cos(x) ** 2, lambda x: 1 - math.sin(x)),
    ),
    FallacyRule(
        "cos^2 x = 1 − sin^2 x", FallacyLabel.ALWAYS, "Rearranged from sin²+cos²=1.",
        example=_check_single(lambda x: math.cos(x) ** 2, lambda x: 1 - math.sin(x) ** 2),
    ),
    FallacyRule(
        "1 + tan^2 x = 1/cos^2 x", FallacyLabel.SOMETIMES, "Pythagorean identity divided by cos².",
        condition="Only when cos x ≠ 0.",
        example=_pythagoras_tan_example,
    ),
    FallacyRule(
        "sin(-x) = -sin x", FallacyLabel.ALWAYS, "Sine is odd.",
        example=_check_single(lambda x: math.sin(-x), lambda x: -math.sin(x)),
    ),
    FallacyRule(
        "cos(-x) = -cos x", FallacyLabel.FALSE, "Cosine is even: cos(-x)=cos x.",
        example=_counter_single(lambda x: math.cos(-x), lambda x: -math.cos(x)),
    ),
    FallacyRule(
        "tan(x+π) = tan x", FallacyLabel.SOMETIMES, "Tangent has period π.",
        condition="Only where tan is defined (cos x ≠ 0).",
        example=_tan_period_example,
    ),
    FallacyRule(
        "sin(x+π) = sin x", FallacyLabel.FALSE, "Correct: sin(x+π) = -sin x.",
        example=_counter_single(lambda x: math.sin(x + math.pi), lambda x: math.sin(x)),
    ),
    FallacyRule(
        "sin(2x)=2 sin x cos x", FallacyLabel.ALWAYS, "Double-angle formula for sine.",
        example=_check_single(lambda x: math.sin(2 * x), lambda x: 2 * math.sin(x) * math.cos(x)),
    ),
    FallacyRule(
        "cos(2x)=1-2 sin^2 x", FallacyLabel.ALWAYS, "Double-angle formula for cosine.",
        example=_check_single(lambda x: math.cos(2 * x), lambda x: 1 - 2 * math.sin(x) ** 2),
    ),
    FallacyRule(
        "cos(2x)=1−sin x", FallacyLabel.FALSE, "The square is missing.",
        example=_counter_single(lambda x: math.cos(2 * x), lambda x: 1 - math.sin(x)),
    ),
    FallacyRule(
        "sin^2 x = sin x", FallacyLabel.SOMETIMES, "Squaring changes the value except at 0 and 1.",
        condition="Only for sin x ∈ {0,1}.",
        example=_square_fixed_point_example,
    ),
    FallacyRule(
        "√(sin^2 x) = sin x", FallacyLabel.FALSE, "Correct: |sin x|.",
        example=_counter_single(
            lambda x: math.sqrt(math.sin(x) ** 2), lambda x: math.sin(x),
            pool=NEGATIVE_SAMPLES, note=" (sign lost)",
        ),
    ),
)


def weighted_rules(difficulty: str) -> List[FallacyRule]:
    weight = SOMETIMES_WEIGHT[check_difficulty(difficulty)]
    expanded: List[FallacyRule] = []
    for rule in RULE_BANK:
        expanded.extend([rule] * (weight if rule.label is FallacyLabel.SOMETIMES else 1))
    return expanded


def draw_fallacy(rng: Lcg, difficulty: str) -> Tuple[FallacyTask, Lcg]:
    """Select a claim with ``rng`` and render its feedback; returns the advanced generator."""
    rule, rng = rng.choice(weighted_rules(difficulty))
    parts = [rule.explanation]
    if rule.condition:
        parts.append(f"Condition: {rule.condition}")
    if rule.example is not None:
        detail, rng = rule.example(rng)
        parts.append(detail)
    task = FallacyTask(rule=rule, feedback=" · ".join(parts), option=OPTION_FOR_LABEL[rule.label])
    return task, rng


def generate_fallacy_rule(seed: int, difficulty: str) -> FallacyTask:
    """Pick a claim for ``(seed, difficulty)``; a zero seed is treated as 1."""
    task, _ = draw_fallacy(Lcg.from_seed(seed or 1), difficulty)
    logger.debug("fallacy seed=%s difficulty=%s -> %r", seed, difficulty, task.rule.statement)
    return task


__all__ = [
    "FallacyLabel",
    "FallacyRule",
    "FallacyTask",
    "RULE_BANK",
    "OPTION_FOR_LABEL",
    "ANGLE_SAMPLES",
    "weighted_rules",
    "draw_fallacy",
    "generate_fallacy_rule",
]
