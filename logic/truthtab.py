"""
Truth tables and the equivalence oracle.

Assignments are enumerated over the sorted variable names; for assignment
index ``idx`` over ``k`` variables, variable ``i`` takes bit
``(idx >> (k - 1 - i)) & 1``, so the alphabetically first variable is the
most significant bit. A formula without variables has a single row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from logic.formula import FormulaNode, as_formula, collect_variables, evaluate_formula

Assignment = Dict[str, bool]


@dataclass(frozen=True, slots=True)
class TruthTableRow:
    assignment: Dict[str, bool]
    result: bool


@dataclass(frozen=True, slots=True)
class TruthTableResult:
    variables: Tuple[str, ...]
    rows: Tuple[TruthTableRow, ...]

    @property
    def true_count(self) -> int:
        return sum(1 for row in self.rows if row.result)

    def to_dict(self) -> dict:
        return {
            "variables": list(self.variables),
            "rows": [{"assignment": dict(r.assignment), "result": r.result} for r in self.rows],
        }


@dataclass(frozen=True, slots=True)
class TruthRow:
    """One row of a two-formula comparison."""
    assignment: Dict[str, bool]
    left: bool
    right: bool

    @property
    def matches(self) -> bool:
        return self.left == self.right


@dataclass(frozen=True, slots=True)
class TruthTableComparison:
    equal: bool
    table: Tuple[TruthRow, ...]

    def to_dict(self) -> dict:
        return {
            "equal": self.equal,
            "table": [
                {"assignment": dict(r.assignment), "left": r.left, "right": r.right, "matches": r.matches}
                for r in self.table
            ],
        }


def sorted_variables(*nodes: FormulaNode) -> List[str]:
    names: set = set()
    for node in nodes:
        collect_variables(node, names)
    return sorted(names)


def assignments(variables: Sequence[str]) -> Iterable[Assignment]:
    """All ``2^k`` assignments, first variable as the most significant bit."""
    k = len(variables)
    for idx in range(1 << k):
        yield {name: bool((idx >> (k - 1 - i)) & 1) for i, name in enumerate(variables)}


def truth_table(formula: Union[str, FormulaNode]) -> TruthTableResult:
    node = as_formula(formula)
    variables = sorted_variables(node)
    rows = tuple(TruthTableRow(a, evaluate_formula(node, a)) for a in assignments(variables))
    return TruthTableResult(tuple(variables), rows)


def truth_table_equality(
    left: Union[str, FormulaNode], right: Union[str, FormulaNode]
) -> TruthTableComparison:
    """Evaluate both formulas over their combined variables, row by row."""
    l_node = as_formula(left)
    r_node = as_formula(right)
    rows = tuple(
        TruthRow(a, evaluate_formula(l_node, a), evaluate_formula(r_node, a))
        for a in assignments(sorted_variables(l_node, r_node))
    )
    return TruthTableComparison(all(r.matches for r in rows), rows)


def are_equivalent(left: Union[str, FormulaNode], right: Union[str, FormulaNode]) -> bool:
    """Same truth value under every assignment of the combined variables."""
    l_node = as_formula(left)
    r_node = as_formula(right)
    return all(
        evaluate_formula(l_node, a) == evaluate_formula(r_node, a)
        for a in assignments(sorted_variables(l_node, r_node))
    )


__all__ = [
    "Assignment",
    "TruthTableRow",
    "TruthTableResult",
    "TruthRow",
    "TruthTableComparison",
    "sorted_variables",
    "assignments",
    "truth_table",
    "truth_table_equality",
    "are_equivalent",
]
