"""
Propositional formula AST, parser, evaluator and printer.

Grammar (lowest to highest precedence, all binary levels left-associative):
    iff     := imp ('⇔' imp)*
    imp     := or ('⇒' or)*
    or      := and ('∨' and)*
    and     := not ('∧' not)*
    not     := '¬' not | primary
    primary := '(' iff ')' | [A-Z]

Input is passed through ``normalize_symbols`` first, so ASCII spellings
such as ``A -> B`` or ``!A & B`` are accepted.

Usage:
    from logic.formula import parse_formula, ast_to_string

    node = parse_formula("A -> (B | !C)")
    ast_to_string(node)     # "A ⇒ B ∨ ¬C"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Set, Union

from common.errors import ExpressionSyntaxError
from logic.symbols import normalize_symbols


class Connective(Enum):
    """Binary connectives with their display symbol."""

    AND = "∧"
    OR = "∨"
    IMP = "⇒"
    IFF = "⇔"


@dataclass(frozen=True, slots=True)
class Var:
    """Propositional variable, a single uppercase letter."""
    name: str


@dataclass(frozen=True, slots=True)
class Not:
    child: "FormulaNode"


@dataclass(frozen=True, slots=True)
class And:
    left: "FormulaNode"
    right: "FormulaNode"


@dataclass(frozen=True, slots=True)
class Or:
    left: "FormulaNode"
    right: "FormulaNode"


@dataclass(frozen=True, slots=True)
class Imp:
    left: "FormulaNode"
    right: "FormulaNode"


@dataclass(frozen=True, slots=True)
class Iff:
    left: "FormulaNode"
    right: "FormulaNode"


FormulaNode = Union[Var, Not, And, Or, Imp, Iff]
BinaryNode = Union[And, Or, Imp, Iff]

_BINARY_TYPES = (And, Or, Imp, Iff)

_CONNECTIVE = {And: Connective.AND, Or: Connective.OR, Imp: Connective.IMP, Iff: Connective.IFF}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class FormulaParser:
    """Recursive descent parser over a normalized formula string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _match(self, symbol: str) -> bool:
        self._skip_ws()
        if self.text.startswith(symbol, self.pos):
            self.pos += len(symbol)
            return True
        return False

    def parse(self) -> FormulaNode:
        node = self.parse_iff()
        self._skip_ws()
        if self.pos < len(self.text):
            raise ExpressionSyntaxError(
                f"unexpected {self.text[self.pos]!r} after formula", self.pos, self.text
            )
        return node

    def parse_iff(self) -> FormulaNode:
        left = self.parse_imp()
        while self._match(Connective.IFF.value):
            left = Iff(left, self.parse_imp())
        return left

    def parse_imp(self) -> FormulaNode:
        left = self.parse_or()
        while self._match(Connective.IMP.value):
            left = Imp(left, self.parse_or())
        return left

    def parse_or(self) -> FormulaNode:
        left = self.parse_and()
        while self._match(Connective.OR.value):
            left = Or(left, self.parse_and())
        return left

    def parse_and(self) -> FormulaNode:
        left = self.parse_not()
        while self._match(Connective.AND.value):
            left = And(left, self.parse_not())
        return left

    def parse_not(self) -> FormulaNode:
        if self._match("¬"):
            return Not(self.parse_not())
        return self.parse_primary()

    def parse_primary(self) -> FormulaNode:
        self._skip_ws()
        if self.pos >= len(self.text):
            raise ExpressionSyntaxError("formula is incomplete", self.pos, self.text)
        ch = self.text[self.pos]
        if ch == "(":
            open_pos = self.pos
            self.pos += 1
            node = self.parse_iff()
            if not self._match(")"):
                raise ExpressionSyntaxError(
                    f"missing closing parenthesis for '(' at {open_pos}", self.pos, self.text
                )
            return node
        if "A" <= ch <= "Z":
            self.pos += 1
            return Var(ch)
        raise ExpressionSyntaxError(f"unexpected symbol {ch!r}", self.pos, self.text)


def parse_formula(text: str) -> FormulaNode:
    """Normalize and parse ``text``; raises ExpressionSyntaxError."""
    return FormulaParser(normalize_symbols(text.strip())).parse()


def as_formula(formula: Union[str, FormulaNode]) -> FormulaNode:
    return parse_formula(formula) if isinstance(formula, str) else formula


# ---------------------------------------------------------------------------
# Semantics
# ---------------------------------------------------------------------------

def evaluate_formula(node: FormulaNode, assignment: Mapping[str, bool]) -> bool:
    """Truth value under ``assignment``; unassigned variables are false."""
    if isinstance(node, Var):
        return bool(assignment.get(node.name, False))
    if isinstance(node, Not):
        return not evaluate_formula(node.child, assignment)
    if isinstance(node, And):
        return evaluate_formula(node.left, assignment) and evaluate_formula(node.right, assignment)
    if isinstance(node, Or):
        return evaluate_formula(node.left, assignment) or evaluate_formula(node.right, assignment)
    if isinstance(node, Imp):
        return (not evaluate_formula(node.left, assignment)) or evaluate_formula(node.right, assignment)
    if isinstance(node, Iff):
        return evaluate_formula(node.left, assignment) == evaluate_formula(node.right, assignment)
    raise TypeError(f"not a formula node: {node!r}")


def collect_variables(node: FormulaNode, into: Optional[Set[str]] = None) -> Set[str]:
    found = set() if into is None else into
    if isinstance(node, Var):
        found.add(node.name)
    elif isinstance(node, Not):
        collect_variables(node.child, found)
    elif isinstance(node, _BINARY_TYPES):
        collect_variables(node.left, found)
        collect_variables(node.right, found)
    return found


# ---------------------------------------------------------------------------
# Printer
# ---------------------------------------------------------------------------

_PRECEDENCE = {Iff: 1, Imp: 2, Or: 3, And: 4, Not: 5, Var: 6}


def _precedence(node: FormulaNode) -> int:
    return _PRECEDENCE[type(node)]


def _format(node: FormulaNode) -> str:
    if isinstance(node, Var):
        return node.name
    if isinstance(node, Not):
        inner = _format(node.child)
        if isinstance(node.child, _BINARY_TYPES):
            inner = f"({inner})"
        return f"¬{inner}"
    own = _precedence(node)
    left = _format(node.left)
    right = _format(node.right)
    # left-associative: an equal-precedence right child needs parentheses
    if _precedence(node.left) < own:
        left = f"({left})"
    if _precedence(node.right) <= own:
        right = f"({right})"
    return f"{left} {_CONNECTIVE[type(node)].value} {right}"


def ast_to_string(node: FormulaNode) -> str:
    """Shortest unambiguous rendering; ``parse_formula`` reads it back unchanged."""
    return _format(node)


__all__ = [
    "Connective",
    "Var",
    "Not",
    "And",
    "Or",
    "Imp",
    "Iff",
    "FormulaNode",
    "BinaryNode",
    "FormulaParser",
    "parse_formula",
    "as_formula",
    "evaluate_formula",
    "collect_variables",
    "ast_to_string",
]
