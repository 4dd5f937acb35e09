"""
Set-expression AST, parser, evaluator and printer.

Grammar (lowest to highest precedence):
    union   := diff (('∪' | 'Δ') diff)*
    diff    := inter ('∖' inter)*
    inter   := suffix ('∩' suffix)*
    suffix  := primary ('^c')*
    primary := '(' union ')' | '∅' | 'Ω' | 'U' | 'A' | 'B' | 'C'

Evaluation works on Venn regions: each named set is a membership flag, so
union is OR, intersection AND, difference ``l ∧ ¬r``, symmetric
difference XOR and complement NOT.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Set, Union

from common.errors import ExpressionSyntaxError
from logic.symbols import normalize_symbols

SET_NAMES = ("A", "B", "C")


@dataclass(frozen=True, slots=True)
class SetVar:
    name: str


@dataclass(frozen=True, slots=True)
class SetConst:
    """``False`` is the empty set, ``True`` the universe."""
    value: bool


@dataclass(frozen=True, slots=True)
class Complement:
    child: "SetNode"


@dataclass(frozen=True, slots=True)
class SetUnion:
    left: "SetNode"
    right: "SetNode"


@dataclass(frozen=True, slots=True)
class Inter:
    left: "SetNode"
    right: "SetNode"


@dataclass(frozen=True, slots=True)
class Diff:
    left: "SetNode"
    right: "SetNode"


@dataclass(frozen=True, slots=True)
class Sym:
    left: "SetNode"
    right: "SetNode"


SetNode = Union[SetVar, SetConst, Complement, SetUnion, Inter, Diff, Sym]

_BINARY = (SetUnion, Inter, Diff, Sym)
_SYMBOLS = {SetUnion: "∪", Sym: "Δ", Diff: "∖", Inter: "∩"}


class SetParser:
    """Recursive descent parser over a normalized set expression."""

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

    def parse(self) -> SetNode:
        node = self.parse_union()
        self._skip_ws()
        if self.pos < len(self.text):
            raise ExpressionSyntaxError(
                f"unexpected {self.text[self.pos]!r} after set expression", self.pos, self.text
            )
        return node

    def parse_union(self) -> SetNode:
        left = self.parse_diff()
        while True:
            if self._match("∪"):
                left = SetUnion(left, self.parse_diff())
            elif self._match("Δ"):
                left = Sym(left, self.parse_diff())
            else:
                return left

    def parse_diff(self) -> SetNode:
        left = self.parse_inter()
        while self._match("∖") or self._match("\\"):
            left = Diff(left, self.parse_inter())
        return left

    def parse_inter(self) -> SetNode:
        left = self.parse_suffix()
        while self._match("∩"):
            left = Inter(left, self.parse_suffix())
        return left

    def parse_suffix(self) -> SetNode:
        node = self.parse_primary()
        while self._match("^c"):
            node = Complement(node)
        return node

    def parse_primary(self) -> SetNode:
        self._skip_ws()
        if self.pos >= len(self.text):
            raise ExpressionSyntaxError("set expression is incomplete", self.pos, self.text)
        ch = self.text[self.pos]
        if ch == "(":
            open_pos = self.pos
            self.pos += 1
            node = self.parse_union()
            if not self._match(")"):
                raise ExpressionSyntaxError(
                    f"missing closing parenthesis for '(' at {open_pos}", self.pos, self.text
                )
            return node
        if ch == "∅":
            self.pos += 1
            return SetConst(False)
        if ch == "Ω":
            self.pos += 1
            return SetConst(True)
        name = ch.upper()
        if name == "U":
            self.pos += 1
            return SetConst(True)
        if name in SET_NAMES:
            self.pos += 1
            return SetVar(name)
        raise ExpressionSyntaxError(f"unexpected symbol {ch!r}", self.pos, self.text)


def parse_set_expression(text: str) -> SetNode:
    """Normalize and parse ``text``; raises ExpressionSyntaxError."""
    return SetParser(normalize_symbols(text.strip())).parse()


def as_set_node(expr: Union[str, SetNode]) -> SetNode:
    return parse_set_expression(expr) if isinstance(expr, str) else expr


def eval_set_expr(node: SetNode, assignment: Mapping[str, bool]) -> bool:
    """Membership of a region described by ``assignment``; unassigned sets are false."""
    if isinstance(node, SetVar):
        return bool(assignment.get(node.name, False))
    if isinstance(node, SetConst):
        return node.value
    if isinstance(node, Complement):
        return not eval_set_expr(node.child, assignment)
    if isinstance(node, SetUnion):
        return eval_set_expr(node.left, assignment) or eval_set_expr(node.right, assignment)
    if isinstance(node, Inter):
        return eval_set_expr(node.left, assignment) and eval_set_expr(node.right, assignment)
    if isinstance(node, Diff):
        return eval_set_expr(node.left, assignment) and not eval_set_expr(node.right, assignment)
    if isinstance(node, Sym):
        return eval_set_expr(node.left, assignment) != eval_set_expr(node.right, assignment)
    raise TypeError(f"not a set node: {node!r}")


def collect_set_vars(node: SetNode, into: Optional[Set[str]] = None) -> Set[str]:
    found = set() if into is None else into
    if isinstance(node, SetVar):
        found.add(node.name)
    elif isinstance(node, Complement):
        collect_set_vars(node.child, found)
    elif isinstance(node, _BINARY):
        collect_set_vars(node.left, found)
        collect_set_vars(node.right, found)
    return found


_PRECEDENCE = {SetUnion: 1, Sym: 1, Diff: 2, Inter: 3, Complement: 4, SetVar: 5, SetConst: 5}


def set_to_string(node: SetNode) -> str:
    """Minimal-parentheses rendering that parses back to the same tree."""
    if isinstance(node, SetVar):
        return node.name
    if isinstance(node, SetConst):
        return "Ω" if node.value else "∅"
    if isinstance(node, Complement):
        inner = set_to_string(node.child)
        if isinstance(node.child, _BINARY):
            inner = f"({inner})"
        return f"{inner}^c"
    own = _PRECEDENCE[type(node)]
    left = set_to_string(node.left)
    right = set_to_string(node.right)
    if _PRECEDENCE[type(node.left)] < own:
        left = f"({left})"
    if _PRECEDENCE[type(node.right)] <= own:
        right = f"({right})"
    return f"{left} {_SYMBOLS[type(node)]} {right}"


__all__ = [
    "SET_NAMES",
    "SetVar",
    "SetConst",
    "Complement",
    "SetUnion",
    "Inter",
    "Diff",
    "Sym",
    "SetNode",
    "SetParser",
    "parse_set_expression",
    "as_set_node",
    "eval_set_expr",
    "collect_set_vars",
    "set_to_string",
]
