"""
Answer checking for the propositional-logic exercises.

Every check is decided by the truth-table oracle, never by comparing
strings, so any correct rewrite the learner finds is accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.errors import ExpressionSyntaxError
from logic.formula import parse_formula
from logic.transforms import (
    contains_iff,
    contains_implication,
    eliminate_implications,
    negate_with_de_morgan,
)
from logic.truthtab import TruthTableComparison, truth_table_equality

logger = logging.getLogger(__name__)


class LogicMode(str, Enum):
    ELIMINATE_IMP = "eliminateImp"
    ELIMINATE_IFF = "eliminateIff"
    NEGATION = "negation"
    EQUIVALENCE = "equivalence"


@dataclass(frozen=True, slots=True)
class LogicCheck:
    correct: bool
    feedback: str
    table: Optional[TruthTableComparison] = None

    def to_dict(self) -> dict:
        return {
            "correct": self.correct,
            "feedback": self.feedback,
            "table": self.table.to_dict() if self.table is not None else None,
        }


def check_logic_answer(mode: LogicMode | str, base: str, answer: str) -> LogicCheck:
    """Judge ``answer`` as a solution of the exercise ``base`` in ``mode``."""
    mode = LogicMode(mode)
    if not answer.strip():
        return LogicCheck(False, "Please enter a formula.")
    try:
        base_ast = parse_formula(base)
        user_ast = parse_formula(answer)
    except ExpressionSyntaxError as exc:
        logger.debug("logic answer rejected: %s", exc)
        return LogicCheck(False, f"Error: {exc}")

    if mode is LogicMode.EQUIVALENCE:
        comparison = truth_table_equality(base_ast, user_ast)
        feedback = (
            "Equivalent: the truth tables agree."
            if comparison.equal
            else "Not equivalent. Compare the truth table rows."
        )
        return LogicCheck(comparison.equal, feedback, comparison)

    if mode is LogicMode.NEGATION:
        comparison = truth_table_equality(negate_with_de_morgan(base_ast), user_ast)
        feedback = "Correctly negated." if comparison.equal else "Not the negation of the given formula."
        return LogicCheck(comparison.equal, feedback, comparison)

    comparison = truth_table_equality(eliminate_implications(base_ast), user_ast)
    if mode is LogicMode.ELIMINATE_IMP:
        leftover = contains_implication(user_ast)
        leftover_msg = "⇒ or ⇔ still present. Eliminate them."
        done_msg = "Correct: ⇒ and ⇔ eliminated and equivalent to the task."
    else:
        leftover = contains_iff(user_ast)
        leftover_msg = "⇔ still present. Eliminate it."
        done_msg = "Correct: ⇔ eliminated and equivalent to the task."

    correct = comparison.equal and not leftover
    if correct:
        feedback = done_msg
    elif leftover:
        feedback = leftover_msg
    else:
        feedback = "Not equivalent. Check your rewrite."
    return LogicCheck(correct, feedback, comparison)


__all__ = ["LogicMode", "LogicCheck", "check_logic_answer"]
