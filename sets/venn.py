"""
Venn-diagram region masks.

For an ordered list of 2 or 3 set names, region ``idx`` is the membership
assignment with index ``idx`` (first set as the most significant bit) and
bit ``idx`` of a mask marks that region as shaded. Diagram drawing and
term checking both work on these masks only.

Two sets [A, B]:      0 outside, 1 B, 2 A, 3 A∩B
Three sets [A, B, C]: 0 outside, 1 C, 2 B, 3 B∩C, 4 A, 5 A∩C, 6 A∩B, 7 A∩B∩C
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from sets.expr import SET_NAMES, SetNode, as_set_node, eval_set_expr
from sets.oracle import SetArg, set_assignments


class Region(str, Enum):
    """Named regions of the two-set diagram."""
    AB = "AB"
    A_ONLY = "Aonly"
    B_ONLY = "Bonly"
    OUTSIDE = "outside"


class RegionState(str, Enum):
    OK = "ok"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True, slots=True)
class RegionFeedback:
    bit: int
    label: str
    active: bool
    state: RegionState


def _check_sets(sets: Sequence[str]) -> List[str]:
    names = list(sets)
    if len(names) not in (2, 3) or len(set(names)) != len(names) or not set(names) <= set(SET_NAMES):
        raise ValueError(f"Venn diagrams need 2 or 3 distinct sets out of {SET_NAMES}, got {names}")
    return names


def compute_region_mask_from_expr(node: SetArg, sets: Sequence[str]) -> int:
    """Bit ``idx`` is set iff the expression holds in region ``idx``."""
    tree = as_set_node(node)
    mask = 0
    for idx, assignment in enumerate(set_assignments(_check_sets(sets))):
        if eval_set_expr(tree, assignment):
            mask |= 1 << idx
    return mask


def full_mask(sets: Sequence[str]) -> int:
    return (1 << (1 << len(_check_sets(sets)))) - 1


def region_labels(sets: Sequence[str]) -> Tuple[str, ...]:
    names = _check_sets(sets)
    k = len(names)
    labels = []
    for idx in range(1 << k):
        members = [name for i, name in enumerate(names) if (idx >> (k - 1 - i)) & 1]
        labels.append("∩".join(members) if members else "outside")
    return tuple(labels)


def mask_to_regions(mask: int, sets: Sequence[str]) -> List[str]:
    labels = region_labels(sets)
    return [label for bit, label in enumerate(labels) if mask & (1 << bit)]


def compare_masks(actual: int, expected: int, sets: Sequence[str]) -> Tuple[RegionFeedback, ...]:
    """Per-region feedback for a shaded diagram against the expected mask."""
    feedback = []
    for bit, label in enumerate(region_labels(sets)):
        active = bool(actual & (1 << bit))
        wanted = bool(expected & (1 << bit))
        if wanted and not active:
            state = RegionState.MISSING
        elif active and not wanted:
            state = RegionState.EXTRA
        else:
            state = RegionState.OK
        feedback.append(RegionFeedback(bit, label, active, state))
    return tuple(feedback)


def expression_matches_mask(term: SetArg, mask: int, sets: Sequence[str]) -> bool:
    return compute_region_mask_from_expr(term, sets) == mask


_TWO_SET_REGIONS = (
    (Region.AB, {"A": True, "B": True}),
    (Region.A_ONLY, {"A": True, "B": False}),
    (Region.B_ONLY, {"A": False, "B": True}),
    (Region.OUTSIDE, {"A": False, "B": False}),
)


def regions_for_expression(expr: SetArg) -> List[Region]:
    """Named two-set regions covered by ``expr``; C counts as empty."""
    tree: SetNode = as_set_node(expr)
    return [region for region, assignment in _TWO_SET_REGIONS if eval_set_expr(tree, assignment)]


def regions_equal(a: Sequence[Region], b: Sequence[Region]) -> bool:
    return len(a) == len(b) and set(a) == set(b)


__all__ = [
    "Region",
    "RegionState",
    "RegionFeedback",
    "compute_region_mask_from_expr",
    "full_mask",
    "region_labels",
    "mask_to_regions",
    "compare_masks",
    "expression_matches_mask",
    "regions_for_expression",
    "regions_equal",
]
