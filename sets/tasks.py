"""
Set-theory exercises and their answer checks.

Four modes share one ``SetTask`` record:

- ``setIdentity``: rewrite ``left`` into an equivalent term.
- ``setRelation``: name the relation between ``left`` and ``right``.
- ``setVennTermToDiagram``: shade the regions of ``left`` (answer is a mask
  or a list of region labels).
- ``setVennDiagramToTerm``: give a term whose regions equal ``mask``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from common.errors import ExpressionSyntaxError, TrainerError
from sets.expr import parse_set_expression, set_to_string
from sets.oracle import are_set_expr_equivalent, is_disjoint, is_subset
from sets.venn import (
    RegionFeedback,
    RegionState,
    compare_masks,
    compute_region_mask_from_expr,
    full_mask,
    mask_to_regions,
    region_labels,
)

logger = logging.getLogger(__name__)


class SetMode(str, Enum):
    IDENTITY = "setIdentity"
    RELATION = "setRelation"
    VENN_TERM_TO_DIAGRAM = "setVennTermToDiagram"
    VENN_DIAGRAM_TO_TERM = "setVennDiagramToTerm"


class SetRelation(str, Enum):
    EQUAL = "equal"
    SUBSET = "subset"
    SUPERSET = "superset"
    DISJOINT = "disjoint"
    OVERLAP = "overlap"


_RELATION_ALIASES = {
    "equal": SetRelation.EQUAL,
    "=": SetRelation.EQUAL,
    "subset": SetRelation.SUBSET,
    "⊆": SetRelation.SUBSET,
    "superset": SetRelation.SUPERSET,
    "⊇": SetRelation.SUPERSET,
    "disjoint": SetRelation.DISJOINT,
    "overlap": SetRelation.OVERLAP,
    "none": SetRelation.OVERLAP,
}


@dataclass(frozen=True)
class SetTask:
    mode: SetMode
    left: str
    right: Optional[str] = None
    sets: Tuple[str, ...] = ("A", "B")
    mask: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "mode", SetMode(self.mode))
        object.__setattr__(self, "sets", tuple(self.sets))

    @property
    def prompt(self) -> str:
        if self.mode is SetMode.IDENTITY:
            return f"Rewrite as an equivalent term: {self.left}"
        if self.mode is SetMode.RELATION:
            return f"How are {self.left} and {self.right} related? (equal/subset/superset/disjoint/overlap)"
        if self.mode is SetMode.VENN_TERM_TO_DIAGRAM:
            return f"Shade {self.left} in the diagram of {', '.join(self.sets)}."
        regions = ", ".join(mask_to_regions(self.mask or 0, self.sets)) or "nothing"
        return f"Give a term for the shaded regions: {regions}"


@dataclass(frozen=True)
class SetCheck:
    correct: bool
    feedback: str
    regions: Tuple[RegionFeedback, ...] = field(default_factory=tuple)


def classify_relation(left: str, right: str) -> SetRelation:
    """Strongest relation that holds, checked as equal, subset, superset, disjoint."""
    l_node = parse_set_expression(left)
    r_node = parse_set_expression(right)
    if are_set_expr_equivalent(l_node, r_node):
        return SetRelation.EQUAL
    if is_subset(l_node, r_node):
        return SetRelation.SUBSET
    if is_subset(r_node, l_node):
        return SetRelation.SUPERSET
    if is_disjoint(l_node, r_node):
        return SetRelation.DISJOINT
    return SetRelation.OVERLAP


def parse_mask_answer(answer: str, sets: Tuple[str, ...]) -> int:
    """Read a mask given as an integer or as comma/semicolon separated region labels."""
    text = answer.strip()
    if re.fullmatch(r"\d+", text):
        mask = int(text)
        if mask > full_mask(sets):
            raise ExpressionSyntaxError(f"mask {mask} has more regions than the diagram", 0, text)
        return mask
    labels = region_labels(sets)
    normalized = {label.replace("∩", "").lower(): bit for bit, label in enumerate(labels)}
    mask = 0
    for part in re.split(r"[;,]", text):
        key = part.strip().replace("∩", "").replace("&", "").replace(" ", "").lower()
        if not key:
            continue
        if key not in normalized:
            raise ExpressionSyntaxError(f"unknown region {part.strip()!r}", text.find(part), text)
        mask |= 1 << normalized[key]
    return mask


def _check(task: SetTask, answer: str) -> SetCheck:
    if task.mode is SetMode.IDENTITY:
        given = parse_set_expression(answer)
        ok = are_set_expr_equivalent(task.left, given)
        return SetCheck(ok, "Equivalent." if ok else "Not equivalent to the given term.")

    if task.mode is SetMode.RELATION:
        expected = classify_relation(task.left, task.right or "")
        chosen = _RELATION_ALIASES.get(answer.strip().lower())
        if chosen is None:
            return SetCheck(False, f"Unknown relation {answer.strip()!r}.")
        ok = chosen is expected
        return SetCheck(ok, "Correct." if ok else f"Expected: {expected.value}.")

    if task.mode is SetMode.VENN_TERM_TO_DIAGRAM:
        expected_mask = compute_region_mask_from_expr(task.left, task.sets)
        regions = compare_masks(parse_mask_answer(answer, task.sets), expected_mask, task.sets)
        ok = all(r.state is RegionState.OK for r in regions)
        return SetCheck(ok, "Diagram matches." if ok else "Some regions are wrong.", regions)

    expected_mask = task.mask or 0
    given = parse_set_expression(answer)
    actual = compute_region_mask_from_expr(given, task.sets)
    regions = compare_masks(actual, expected_mask, task.sets)
    ok = actual == expected_mask
    feedback = "Term matches the diagram." if ok else f"Your term {set_to_string(given)} shades other regions."
    return SetCheck(ok, feedback, regions)


def check_set_answer(task: SetTask, answer: str) -> SetCheck:
    """Judge ``answer``; unreadable input is a rejected answer, not an error."""
    if not answer.strip():
        return SetCheck(False, "Please enter an answer.")
    try:
        result = _check(task, answer)
    except TrainerError as exc:
        logger.debug("set answer rejected: %s", exc)
        return SetCheck(False, f"Error: {exc}")
    logger.debug("checked %s answer %r: %s", task.mode.value, answer, result.correct)
    return result


__all__ = [
    "SetMode",
    "SetRelation",
    "SetTask",
    "SetCheck",
    "classify_relation",
    "parse_mask_answer",
    "check_set_answer",
]
