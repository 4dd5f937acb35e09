"""
Entry points for the algebra exercises.

    task = generate_task("mathPowers", "medium", seed=42)
    result = check_answer(task, "a^7")

``generate_task`` is a pure function of ``(mode, difficulty, seed)``;
``task.next_seed`` is the generator state after the last draw, so
``generate_task(mode, difficulty, task.next_seed)`` continues the sequence.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Callable, Dict, Optional, Type

from algebra.builders import BUILDERS
from algebra.monomial import monomial_to_string, parse_monomial
from algebra.payloads import (
    BooleanPayload,
    CheckResult,
    ExpressionForm,
    ExpressionPayload,
    MathMode,
    MathTask,
    MonomialPayload,
    NumericPayload,
    Payload,
    PolynomialPayload,
    RadicalPayload,
    RationalPayload,
    TextPayload,
)
from algebra.polynomial import parse_polynomial, polynomial_to_string
from algebra.radicals import format_sqrt_form, parse_sqrt_form
from common.answers import compact, parse_bool_answer
from common.config import TrainerConfig, check_difficulty
from common.errors import TrainerError
from common.expr import evaluate, expressions_equivalent, free_variables, parse_expression
from common.prng import Lcg, random_seed
from common.rational import parse_rational, rational_to_string

logger = logging.getLogger(__name__)

_NEGATIVE_EXPONENT_RE = re.compile(r"\^\s*[({]?\s*[-−]")
_RADICAL_RE = re.compile(r"√|sqrt|root", re.IGNORECASE)
_SQUARE_RE = re.compile(r"\^\s*2|²")
_PLAIN_FRACTION_RE = re.compile(r"^-?(\d+)\s*/\s*(\d+)$")


def generate_task(
    mode: MathMode | str,
    difficulty: str,
    seed: Optional[int] = None,
    *,
    config: Optional[TrainerConfig] = None,
) -> MathTask:
    mode = MathMode(mode)
    check_difficulty(difficulty)
    config = config or TrainerConfig()
    if seed is None:
        seed = random_seed()
    draft, rng = BUILDERS[mode](Lcg.from_seed(seed), difficulty)
    task = MathTask(
        mode=mode,
        difficulty=difficulty,
        prompt=draft.prompt,
        solution=draft.solution,
        payload=draft.payload,
        target_seconds=config.target_seconds(mode.value, difficulty),
        seed=seed,
        next_seed=rng.state,
        explanation=draft.explanation,
    )
    logger.debug("generated %s/%s seed=%s next_seed=%s", mode.value, difficulty, seed, task.next_seed)
    return task


# ---------------------------------------------------------------------------
# Checkers, one per payload kind
# ---------------------------------------------------------------------------

def _expected(task: MathTask) -> str:
    return f"Expected: {task.solution}"


def _check_rational(task: MathTask, payload: RationalPayload, answer: str, config: TrainerConfig) -> CheckResult:
    given = parse_rational(answer)
    if given is None:
        return CheckResult(False, "Could not read the fraction or number.")
    normalized = rational_to_string(given)
    if given == payload.value:
        fraction = _PLAIN_FRACTION_RE.match(answer)
        if fraction and math.gcd(int(fraction.group(1)), int(fraction.group(2))) > 1:
            return CheckResult(False, "Right value, but reduce the fraction fully.", normalized)
        return CheckResult(True, "Correct.", normalized)
    explain = f" ({task.explanation})" if task.explanation else ""
    return CheckResult(False, f"{_expected(task)}{explain}", normalized)


def _check_numeric(task: MathTask, payload: NumericPayload, answer: str, config: TrainerConfig) -> CheckResult:
    given = parse_rational(answer)
    value = float(given) if given is not None else evaluate(parse_expression(answer), {})
    if not math.isfinite(value):
        return CheckResult(False, "Could not read the number.")
    ok = abs(value - payload.value) <= payload.tolerance
    return CheckResult(ok, "Correct." if ok else _expected(task), f"{value:g}")


def _form_problem(payload: ExpressionPayload, answer: str) -> Optional[str]:
    if payload.form is ExpressionForm.RADICAL and not _RADICAL_RE.search(answer):
        return "Write the answer with a root sign."
    if payload.form is ExpressionForm.POWER and _RADICAL_RE.search(answer):
        return "Write the answer as a power without a root sign."
    if payload.form is ExpressionForm.VERTEX:
        occurrences = len(re.findall(re.escape(payload.variables[0]), answer))
        if occurrences != 1 or not _SQUARE_RE.search(answer):
            return "Write the answer in vertex form a(x + h)^2 + k."
    return None


def _check_expression(task: MathTask, payload: ExpressionPayload, answer: str, config: TrainerConfig) -> CheckResult:
    given = parse_expression(answer)
    unknown = sorted(free_variables(given) - set(payload.variables))
    if unknown:
        return CheckResult(False, f"Unknown variable(s): {', '.join(unknown)}.")
    problem = _form_problem(payload, answer)
    if problem:
        return CheckResult(False, problem)
    ok = expressions_equivalent(
        payload.expr,
        given,
        payload.variables,
        positive_only=payload.positive_only,
        samples=config.samples,
        tolerance=config.tolerance,
    )
    if ok:
        return CheckResult(True, "Correctly rewritten.")
    return CheckResult(False, f"Not equivalent to the target form ({task.solution}).")


def _check_radical(task: MathTask, payload: RadicalPayload, answer: str, config: TrainerConfig) -> CheckResult:
    given = parse_sqrt_form(answer)
    ok = given == payload.value
    return CheckResult(ok, "Correct." if ok else _expected(task), format_sqrt_form(given))


def _check_monomial(task: MathTask, payload: MonomialPayload, answer: str, config: TrainerConfig) -> CheckResult:
    if payload.disallow_negative and _NEGATIVE_EXPONENT_RE.search(answer):
        return CheckResult(False, "Write it without negative exponents (use a fraction).")
    given = parse_monomial(answer)
    ok = given == payload.value
    return CheckResult(ok, "Correct." if ok else _expected(task), monomial_to_string(given))


def _check_boolean(task: MathTask, payload: BooleanPayload, answer: str, config: TrainerConfig) -> CheckResult:
    chosen = parse_bool_answer(answer)
    if chosen is None:
        return CheckResult(False, "Answer true or false.")
    if chosen == payload.value:
        return CheckResult(True, "Correctly judged.", str(chosen).lower())
    verdict = "true" if payload.value else "false"
    explain = f" {task.explanation}" if task.explanation else ""
    return CheckResult(False, f"That is {verdict}.{explain}", str(chosen).lower())


def _check_polynomial(task: MathTask, payload: PolynomialPayload, answer: str, config: TrainerConfig) -> CheckResult:
    given = parse_polynomial(answer)
    ok = given == payload.value
    return CheckResult(ok, "Correct." if ok else _expected(task), polynomial_to_string(given))


def _check_text(task: MathTask, payload: TextPayload, answer: str, config: TrainerConfig) -> CheckResult:
    normalized = compact(answer)
    ok = normalized in payload.accepts
    return CheckResult(ok, "Correct." if ok else _expected(task), normalized)


_CHECKERS: Dict[Type, Callable[..., CheckResult]] = {
    RationalPayload: _check_rational,
    NumericPayload: _check_numeric,
    ExpressionPayload: _check_expression,
    RadicalPayload: _check_radical,
    MonomialPayload: _check_monomial,
    BooleanPayload: _check_boolean,
    PolynomialPayload: _check_polynomial,
    TextPayload: _check_text,
}


def check_answer(task: MathTask, answer: str, *, config: Optional[TrainerConfig] = None) -> CheckResult:
    """
    Judge ``answer`` against the task payload.

    Unreadable input yields ``correct=False`` with the parser message as
    feedback; it never raises.
    """
    text = answer.strip()
    if not text:
        return CheckResult(False, "Please enter an answer.")
    payload: Payload = task.payload
    checker = _CHECKERS.get(type(payload))
    if checker is None:
        raise TypeError(f"unknown payload {payload!r}")
    try:
        result = checker(task, payload, text, config or TrainerConfig())
    except TrainerError as exc:
        logger.debug("answer %r rejected: %s", text, exc)
        return CheckResult(False, f"Error: {exc}")
    logger.debug("checked %s answer %r: %s", task.mode.value, text, result.correct)
    return result


__all__ = ["generate_task", "check_answer"]
