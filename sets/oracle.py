"""
Enumeration oracles for set expressions.

Equality, inclusion and disjointness are all decided by evaluating both
sides over every membership assignment of the sets they mention.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from sets.expr import SET_NAMES, SetNode, as_set_node, collect_set_vars, eval_set_expr

SetArg = Union[str, SetNode]


@dataclass(frozen=True, slots=True)
class SetTruthRow:
    assignment: Dict[str, bool]
    value: bool


def set_assignments(sets: Sequence[str]) -> Iterable[Dict[str, bool]]:
    """Assignments in index order, first set as the most significant bit; unlisted sets are false."""
    k = len(sets)
    for idx in range(1 << k):
        assignment = {name: False for name in SET_NAMES}
        for i, name in enumerate(sets):
            assignment[name] = bool((idx >> (k - 1 - i)) & 1)
        yield assignment


def shared_sets(*nodes: SetNode) -> List[str]:
    found: set = set()
    for node in nodes:
        collect_set_vars(node, found)
    return sorted(found)


def truth_table_set(node: SetArg, sets: Optional[Sequence[str]] = None) -> Tuple[SetTruthRow, ...]:
    tree = as_set_node(node)
    used = list(sets) if sets is not None else shared_sets(tree)
    return tuple(SetTruthRow(a, eval_set_expr(tree, a)) for a in set_assignments(used))


def _pairs(left: SetArg, right: SetArg):
    l_node = as_set_node(left)
    r_node = as_set_node(right)
    for assignment in set_assignments(shared_sets(l_node, r_node)):
        yield eval_set_expr(l_node, assignment), eval_set_expr(r_node, assignment)


def are_set_expr_equivalent(left: SetArg, right: SetArg) -> bool:
    return all(lv == rv for lv, rv in _pairs(left, right))


def is_subset(left: SetArg, right: SetArg) -> bool:
    """Every region of ``left`` lies in ``right``."""
    return all(rv or not lv for lv, rv in _pairs(left, right))


def is_disjoint(left: SetArg, right: SetArg) -> bool:
    return all(not (lv and rv) for lv, rv in _pairs(left, right))


__all__ = [
    "SetTruthRow",
    "set_assignments",
    "shared_sets",
    "truth_table_set",
    "are_set_expr_equivalent",
    "is_subset",
    "is_disjoint",
]
