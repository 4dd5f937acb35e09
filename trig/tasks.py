"""
Trigonometry exercises: generation from ``(mode, difficulty, seed)`` and
answer checking.

Every generator threads one ``Lcg`` through its draws and records the
final state as ``next_seed``. Radian answers are compared as exact
multiples of π; degree answers with a ``1e-9`` tolerance.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple

from common.answers import parse_bool_answer, parse_choice, split_answers
from common.config import TrainerConfig, check_difficulty
from common.errors import TrainerError
from common.expr import evaluate, expressions_equivalent, parse_expression
from common.prng import Lcg, random_seed
from trig.angles import (
    DEGREE_TOLERANCE,
    Angle,
    DegAngle,
    RadAngle,
    format_multiple,
    normalize_angle,
    parse_angle,
    to_rad_angle,
    to_radians,
)
from trig.exact import (
    ExactValue,
    Half,
    InvSqrt,
    One,
    Sqrt,
    Zero,
    exact_sin_cos,
    format_exact,
    parse_exact_value,
    sin_cos_tan_exact,
    tan_from_exact,
)
from trig.fallacies import FallacyTask, draw_fallacy

logger = logging.getLogger(__name__)

GRAPH_TOLERANCE = 1e-3
IDENTITY_POINTS = tuple({"x": x} for x in (0.2, 0.5, 1.0, 1.5, 2.1, 2.7, 3.4, 4.2))
CHOICE_LETTERS = ("A", "B", "C", "D")

_PLAIN_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


class TrigMode(str, Enum):
    DEG_RAD = "trigDegRad"
    UNIT_CIRCLE = "trigUnitCircle"
    IDENTITIES = "trigIdentities"
    EQUATIONS = "trigEquations"
    GRAPHS = "trigGraphs"
    FALLACIES = "trigFallacies"


@dataclass(frozen=True)
class GraphSpec:
    """``y = a·fn(b(x − c·π)) + d``; ``options`` is empty for parameter entry."""

    fn: str
    a: int
    b: int
    c: Fraction
    d: int
    options: Tuple[str, ...] = ()
    correct_index: Optional[int] = None

    @property
    def period(self) -> Fraction:
        """Period as a multiple of π."""
        return Fraction(2, self.b)


@dataclass(frozen=True)
class TrigTask:
    mode: TrigMode
    difficulty: str
    prompt: str
    solution: str
    target_seconds: int
    seed: int
    next_seed: int
    explanation: Optional[str] = None
    angle: Optional[Angle] = None
    ask_radians: bool = False
    func: Optional[str] = None
    expr_expected: Optional[str] = None
    truth_expected: Optional[bool] = None
    solutions: Tuple[RadAngle, ...] = ()
    value: Optional[ExactValue] = None
    graph: Optional[GraphSpec] = None
    fallacy: Optional[FallacyTask] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "difficulty": self.difficulty,
            "prompt": self.prompt,
            "solution": self.solution,
            "target_seconds": self.target_seconds,
            "seed": self.seed,
            "next_seed": self.next_seed,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class TrigCheck:
    correct: bool
    feedback: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"correct": self.correct, "feedback": self.feedback}


# ---------------------------------------------------------------------------
# Static pools
# ---------------------------------------------------------------------------

EASY_DEGREES = (0, 30, 45, 60, 90, 120, 135, 150, 180, 270, 360)
MEDIUM_DEGREES = (15, 75, 105, 165, 210, 225, 240, 300, 315, 330)

UNIT_CIRCLE_BASES = tuple(
    Fraction(p, q) for p, q in ((1, 6), (1, 4), (1, 3), (1, 2), (2, 3), (3, 4), (5, 6), (1, 1))
)

TRIG_FUNCTIONS = ("sin", "cos", "tan")


@dataclass(frozen=True)
class _Rewrite:
    prompt: str
    expected: str
    explanation: str


@dataclass(frozen=True)
class _Claim:
    prompt: str
    truth: bool
    explanation: str


REWRITES = (
    _Rewrite("Simplify: sin(x)^2 + cos(x)^2", "1", "Pythagoras: sin²+cos²=1."),
    _Rewrite("Simplify: sin(-x)", "-sin(x)", "Sine is odd."),
    _Rewrite("Simplify: cos(-x)", "cos(x)", "Cosine is even."),
    _Rewrite("Simplify: tan(-x)", "-tan(x)", "Tangent is odd."),
    _Rewrite("Rewrite: sin(π/2 - x)", "cos(x)", "Cofunction identity."),
    _Rewrite("Rewrite: cos(π/2 - x)", "sin(x)", "Cofunction identity."),
    _Rewrite("Rewrite: sin(x+2π)", "sin(x)", "Period 2π."),
    _Rewrite("Rewrite: cos(x+2π)", "cos(x)", "Period 2π."),
    _Rewrite("Rewrite: tan(x+π)", "tan(x)", "Tangent has period π."),
    _Rewrite("Rewrite: sin(2x)", "2*sin(x)*cos(x)", "Double angle."),
    _Rewrite("Rewrite: cos(2x)", "cos(x)^2 - sin(x)^2", "cos(2x)=cos²−sin²."),
)

CLAIMS = (
    _Claim("Identity? sin(x)^2 + cos(x)^2 = 1", True, "Pythagoras."),
    _Claim("Identity? sin(x) = cos(x-π/2)", True, "Phase shift by π/2."),
    _Claim("Identity? sin(x)+cos(x)=1", False, "True only for special angles."),
)

SIN_COS_VALUES: Tuple[ExactValue, ...] = (
    Zero(),
    Half(1),
    Half(-1),
    Sqrt(2, 1, over_two=True),
    Sqrt(2, -1, over_two=True),
    Sqrt(3, 1, over_two=True),
    Sqrt(3, -1, over_two=True),
    One(1),
    One(-1),
)

# Values tan attains at special angles.
TAN_VALUES: Tuple[ExactValue, ...] = (
    Zero(),
    One(1),
    One(-1),
    Sqrt(3, 1),
    Sqrt(3, -1),
    InvSqrt(3, 1),
    InvSqrt(3, -1),
)

# Multiples of π/12 cover every multiple of π/6 and π/4 in [0, 2).
_EQUATION_CANDIDATES = tuple(Fraction(k, 12) for k in range(24))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _value_of(func: str, angle: Angle) -> ExactValue:
    values = sin_cos_tan_exact(angle)
    return {"sin": values.sin, "cos": values.cos, "tan": values.tan}[func]


def _special_value(func: str, multiple: Fraction) -> Optional[ExactValue]:
    special = exact_sin_cos(RadAngle.from_fraction(multiple))
    if special is None:
        return None
    sin, cos = special
    if func == "sin":
        return sin
    if func == "cos":
        return cos
    return tan_from_exact(sin, cos)


def solve_equation(func: str, value: ExactValue, coeff: int = 1, shift: Fraction = Fraction(0)) -> List[Fraction]:
    """
    All x in ``[0, 2)·π`` with ``func(coeff·x − shift·π) = value``, as
    sorted multiples of π.
    """
    target = format_exact(value)
    roots = set()
    for theta in _EQUATION_CANDIDATES:
        found = _special_value(func, theta)
        if found is None or format_exact(found) != target:
            continue
        for turn in range(-1, coeff + 2):
            x = (theta + shift + 2 * turn) / coeff
            if 0 <= x < 2:
                roots.add(x)
    return sorted(roots)


def _argument_text(coeff: int, shift: Fraction) -> str:
    text = "x" if coeff == 1 else f"{coeff}x"
    if shift > 0:
        text += f" - {format_multiple(shift)}"
    elif shift < 0:
        text += f" + {format_multiple(-shift)}"
    return text


def graph_formula(fn: str, a: int, b: int, c: Fraction, d: int) -> str:
    inner = "x" if b == 1 else f"{b}x"
    if c:
        inner = f"{inner} - {format_multiple(c * b)}"
    head = f"{fn}({inner})" if a == 1 else f"{a}·{fn}({inner})"
    return f"{head} + {d}" if d else head


def _target(config: TrainerConfig, mode: TrigMode, difficulty: str) -> int:
    return config.target_seconds(mode.value, difficulty)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

def _deg_rad(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    pool: List[int] = list(EASY_DEGREES)
    if difficulty != "easy":
        pool.extend(MEDIUM_DEGREES)
    if difficulty == "hard":
        for _ in range(6):
            fine, rng = rng.coin()
            if fine:
                step, rng = rng.randint(0, 72)
                pool.append(step * 5)
            else:
                step, rng = rng.randint(0, 36)
                pool.append(step * 10)
    degrees, rng = rng.choice(pool)
    if difficulty == "hard":
        negate, rng = rng.coin()
        if negate:
            degrees = -degrees
    degrees %= 360
    multiple = Fraction(degrees, 180)
    ask_radians, rng = rng.coin()
    if ask_radians:
        prompt = f"Convert {degrees}° to radians."
        solution = format_multiple(multiple)
    else:
        prompt = f"Convert {format_multiple(multiple)} to degrees."
        solution = f"{degrees}°"
    return {
        "prompt": prompt,
        "solution": solution,
        "angle": DegAngle(float(degrees)),
        "ask_radians": ask_radians,
    }, rng


def _unit_circle(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    base, rng = rng.choice(UNIT_CIRCLE_BASES)
    positive, rng = rng.coin()
    single, rng = rng.coin()
    factor = 1
    if not single:
        double, rng = rng.coin()
        factor = 2 if double else 3
    angle = RadAngle.from_fraction(base * factor * (1 if positive else -1))
    func, rng = rng.choice(TRIG_FUNCTIONS)
    value = _value_of(func, angle)
    return {
        "prompt": f"Find {func}({format_multiple(angle.multiple)}) exactly.",
        "solution": format_exact(value),
        "angle": angle,
        "func": func,
        "value": value,
    }, rng


def _identities(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    r, rng = rng.uniform()
    if r > 0.6:
        claim, rng = rng.choice(CLAIMS)
        return {
            "prompt": f"{claim.prompt} (true/false)",
            "solution": "true" if claim.truth else "false",
            "truth_expected": claim.truth,
            "explanation": claim.explanation,
        }, rng
    rewrite, rng = rng.choice(REWRITES)
    return {
        "prompt": rewrite.prompt,
        "solution": rewrite.expected,
        "expr_expected": rewrite.expected,
        "explanation": rewrite.explanation,
    }, rng


def _equations(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    func, rng = rng.choice(TRIG_FUNCTIONS)
    value, rng = rng.choice(TAN_VALUES if func == "tan" else SIN_COS_VALUES)
    coeff = 1
    if difficulty != "easy":
        coeff, rng = rng.choice((1, 2, 3))
    shift = Fraction(0)
    if difficulty == "hard":
        shifted, rng = rng.coin()
        if shifted:
            sign, rng = rng.choice((1, -1))
            shift = Fraction(sign, 6)
    roots = solve_equation(func, value, coeff, shift)
    rhs = format_exact(value).replace("sqrt", "√")
    return {
        "prompt": f"Solve {func}({_argument_text(coeff, shift)}) = {rhs} for x in [0, 2π). Separate solutions with ';'.",
        "solution": "; ".join(format_multiple(x) for x in roots),
        "func": func,
        "value": value,
        "solutions": tuple(RadAngle.from_fraction(x) for x in roots),
    }, rng


def _graph_option(rng: Lcg, fn: str, a: int) -> Tuple[str, Lcg]:
    b, rng = rng.choice((1, 2))
    c, rng = rng.choice((Fraction(0), Fraction(1, 2)))
    d, rng = rng.choice((0, 1))
    return graph_formula(fn, a, b, c, d), rng


def _graphs(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    fn, rng = rng.choice(("sin", "cos"))
    a, rng = rng.choice((1, 2))
    b, rng = rng.choice((1, 2))
    c, rng = rng.choice((Fraction(0), Fraction(1, 2)))
    d, rng = rng.choice((0, 1))
    use_choice = False
    if difficulty != "easy":
        r, rng = rng.uniform()
        use_choice = r > 0.6

    if use_choice:
        correct = graph_formula(fn, a, b, c, d)
        options = [correct]
        while len(options) < len(CHOICE_LETTERS):
            alternative, rng = _graph_option(rng, fn, a)
            if alternative not in options:
                options.append(alternative)
        options, rng = rng.shuffle(options)
        index = options.index(correct)
        listing = "  ".join(f"{letter}) {option}" for letter, option in zip(CHOICE_LETTERS, options))
        return {
            "prompt": f"Which expression matches the graph shown? {listing} (answer A/B/C/D)",
            "solution": CHOICE_LETTERS[index],
            "graph": GraphSpec(fn, a, b, c, d, tuple(options), index),
        }, rng

    if c:
        inner = f"x - {format_multiple(c)}" if b == 1 else f"{b}(x - {format_multiple(c)})"
    else:
        inner = "x" if b == 1 else f"{b}x"
    spec = GraphSpec(fn, a, b, c, d)
    return {
        "prompt": (
            f"Given y = {a}·{fn}({inner}) + {d}. "
            "Enter amplitude;period;phase;vertical shift as a;T;phi;d."
        ),
        "solution": f"{a};{format_multiple(spec.period)};{format_multiple(c)};{d}",
        "graph": spec,
    }, rng


def _fallacies(rng: Lcg, difficulty: str) -> Tuple[Dict[str, Any], Lcg]:
    task, rng = draw_fallacy(rng, difficulty)
    return {
        "prompt": (
            f"Spot the fallacy: {task.rule.statement}\n"
            "A) always true · B) sometimes true (condition) · C) false. Answer A/B/C."
        ),
        "solution": task.option,
        "explanation": task.feedback,
        "fallacy": task,
    }, rng


_GENERATORS = {
    TrigMode.DEG_RAD: _deg_rad,
    TrigMode.UNIT_CIRCLE: _unit_circle,
    TrigMode.IDENTITIES: _identities,
    TrigMode.EQUATIONS: _equations,
    TrigMode.GRAPHS: _graphs,
    TrigMode.FALLACIES: _fallacies,
}


def generate_trig_task(
    mode: TrigMode | str,
    difficulty: str,
    seed: Optional[int] = None,
    *,
    config: Optional[TrainerConfig] = None,
) -> TrigTask:
    """Build one exercise; the same ``(mode, difficulty, seed)`` always gives the same task."""
    mode = TrigMode(mode)
    check_difficulty(difficulty)
    config = config or TrainerConfig()
    if seed is None:
        seed = random_seed()
    # The fallacy bank treats seed 0 as 1.
    rng = Lcg.from_seed(seed or 1) if mode is TrigMode.FALLACIES else Lcg.from_seed(seed)
    fields, rng = _GENERATORS[mode](rng, difficulty)
    task = TrigTask(
        mode=mode,
        difficulty=difficulty,
        target_seconds=_target(config, mode, difficulty),
        seed=seed,
        next_seed=rng.state,
        **fields,
    )
    logger.debug("generated %s/%s seed=%s next_seed=%s", mode.value, difficulty, seed, task.next_seed)
    return task


# ---------------------------------------------------------------------------
# Checking
# ---------------------------------------------------------------------------

def _check_deg_rad(task: TrigTask, answer: str) -> TrigCheck:
    degrees = task.angle.value if isinstance(task.angle, DegAngle) else 0.0
    text = answer.strip()
    if task.ask_radians:
        given = parse_angle(text)
        if isinstance(given, DegAngle):
            return TrigCheck(False, "Give the angle in radians, e.g. 3π/4.")
        ok = given.multiple == Fraction(int(round(degrees)), 180)
        return TrigCheck(ok, "Correct." if ok else f"Expected: {task.solution}")
    value = float(text) if _PLAIN_NUMBER.match(text) else None
    if value is None:
        given = parse_angle(text)
        if not isinstance(given, DegAngle):
            return TrigCheck(False, "Give the angle in degrees, e.g. 135°.")
        value = given.value
    ok = abs(value - degrees) < DEGREE_TOLERANCE
    return TrigCheck(ok, "Correct." if ok else f"Expected: {task.solution}")


def _check_unit_circle(task: TrigTask, answer: str) -> TrigCheck:
    given = parse_exact_value(answer)
    expected = _value_of(task.func or "sin", task.angle) if task.angle is not None else task.value
    ok = format_exact(given) == format_exact(expected)
    return TrigCheck(ok, "Correct." if ok else f"Expected: {format_exact(expected)}")


def _check_identities(task: TrigTask, answer: str) -> TrigCheck:
    if task.truth_expected is not None:
        chosen = parse_bool_answer(answer)
        if chosen is None:
            return TrigCheck(False, "Answer true or false.")
        return TrigCheck(chosen == task.truth_expected, task.explanation or "")
    given = parse_expression(answer)
    ok = expressions_equivalent(task.expr_expected or "", given, ["x"], points=IDENTITY_POINTS)
    return TrigCheck(ok, task.explanation or "")


def _check_equations(task: TrigTask, answer: str) -> TrigCheck:
    parts = split_answers(answer)
    if not parts:
        return TrigCheck(False, "Please enter at least one solution.")
    given = {normalize_angle(to_rad_angle(parse_angle(part))) for part in parts}
    expected = set(task.solutions)
    if given == expected:
        return TrigCheck(True, "All solutions found.")
    missing = sorted(expected - given, key=lambda a: a.multiple)
    extra = sorted(given - expected, key=lambda a: a.multiple)
    notes = []
    if missing:
        notes.append(f"missing {len(missing)} solution(s)")
    if extra:
        notes.append("not solutions: " + ", ".join(format_multiple(a.multiple) for a in extra))
    return TrigCheck(False, "; ".join(notes) + f". Expected: {task.solution}")


def _number(text: str) -> float:
    return evaluate(parse_expression(text), {})


def _check_graphs(task: TrigTask, answer: str) -> TrigCheck:
    graph = task.graph
    if graph is None:
        return TrigCheck(False, "No graph attached to this task.")
    if graph.options:
        chosen = parse_choice(answer, CHOICE_LETTERS)
        ok = chosen == task.solution
        return TrigCheck(ok, "Correct." if ok else f"Expected: {task.solution}")

    parts = split_answers(answer)
    if len(parts) < 4:
        return TrigCheck(False, "Enter four values a;T;phi;d.")
    amplitude, period, phase_text, shift = parts[:4]
    a_given, t_given, d_given = _number(amplitude), _number(period), _number(shift)
    phase = to_radians(parse_angle(phase_text))
    period_expected = float(graph.period) * math.pi

    checks = {
        "amplitude": abs(abs(a_given) - graph.a) < GRAPH_TOLERANCE,
        "period": abs(t_given - period_expected) < GRAPH_TOLERANCE,
        "vertical shift": abs(d_given - graph.d) < GRAPH_TOLERANCE,
    }
    offset = (phase - float(graph.c) * math.pi) % period_expected
    checks["phase"] = offset < GRAPH_TOLERANCE or abs(offset - period_expected) < GRAPH_TOLERANCE
    wrong = [name for name, ok in checks.items() if not ok]
    if not wrong:
        return TrigCheck(True, "All parameters correct.")
    return TrigCheck(False, "Check " + ", ".join(wrong) + f". Expected: {task.solution}")


def _check_fallacies(task: TrigTask, answer: str) -> TrigCheck:
    option = task.fallacy.option if task.fallacy else task.solution
    ok = parse_choice(answer, ("A", "B", "C")) == option
    feedback = task.explanation or ""
    if not ok:
        feedback += f" · Expected: {option}"
    return TrigCheck(ok, feedback)


_CHECKERS = {
    TrigMode.DEG_RAD: _check_deg_rad,
    TrigMode.UNIT_CIRCLE: _check_unit_circle,
    TrigMode.IDENTITIES: _check_identities,
    TrigMode.EQUATIONS: _check_equations,
    TrigMode.GRAPHS: _check_graphs,
    TrigMode.FALLACIES: _check_fallacies,
}


def check_trig_answer(task: TrigTask, answer: str) -> TrigCheck:
    """Judge ``answer``; unreadable input is a rejected answer, not an error."""
    if not answer.strip():
        return TrigCheck(False, "Please enter an answer.")
    try:
        result = _CHECKERS[task.mode](task, answer)
    except TrainerError as exc:
        logger.debug("trig answer rejected: %s", exc)
        return TrigCheck(False, f"Error: {exc}")
    logger.debug("checked %s answer %r: %s", task.mode.value, answer, result.correct)
    return result


__all__ = [
    "TrigMode",
    "TrigTask",
    "TrigCheck",
    "GraphSpec",
    "solve_equation",
    "graph_formula",
    "generate_trig_task",
    "check_trig_answer",
]
