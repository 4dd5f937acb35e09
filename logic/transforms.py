"""
Semantics-preserving rewrites of propositional formulas.

All functions return new trees; unchanged subtrees may be shared.
"""

from __future__ import annotations

from logic.formula import And, FormulaNode, Iff, Imp, Not, Or, Var


def eliminate_implications(node: FormulaNode) -> FormulaNode:
    """Rewrite ``A ⇒ B`` as ``¬A ∨ B`` and ``A ⇔ B`` as ``(A ⇒ B) ∧ (B ⇒ A)``, recursively."""
    if isinstance(node, Var):
        return node
    if isinstance(node, Not):
        return Not(eliminate_implications(node.child))
    if isinstance(node, And):
        return And(eliminate_implications(node.left), eliminate_implications(node.right))
    if isinstance(node, Or):
        return Or(eliminate_implications(node.left), eliminate_implications(node.right))
    if isinstance(node, Imp):
        return Or(Not(eliminate_implications(node.left)), eliminate_implications(node.right))
    if isinstance(node, Iff):
        left = eliminate_implications(node.left)
        right = eliminate_implications(node.right)
        return And(Or(Not(left), right), Or(Not(right), left))
    raise TypeError(f"not a formula node: {node!r}")


def eliminate_iff_only(node: FormulaNode) -> FormulaNode:
    """Expand ``⇔`` into two implications and leave ``⇒`` in place."""
    if isinstance(node, Var):
        return node
    if isinstance(node, Not):
        return Not(eliminate_iff_only(node.child))
    if isinstance(node, (And, Or, Imp)):
        return type(node)(eliminate_iff_only(node.left), eliminate_iff_only(node.right))
    if isinstance(node, Iff):
        left = eliminate_iff_only(node.left)
        right = eliminate_iff_only(node.right)
        return And(Imp(left, right), Imp(right, left))
    raise TypeError(f"not a formula node: {node!r}")


def _push_negation(node: FormulaNode, negate: bool) -> FormulaNode:
    if isinstance(node, Var):
        return Not(node) if negate else node
    if isinstance(node, Not):
        return _push_negation(node.child, not negate)
    if isinstance(node, (Imp, Iff)):
        node = eliminate_implications(node)
    if isinstance(node, And):
        parts = (_push_negation(node.left, negate), _push_negation(node.right, negate))
        return Or(*parts) if negate else And(*parts)
    if isinstance(node, Or):
        parts = (_push_negation(node.left, negate), _push_negation(node.right, negate))
        return And(*parts) if negate else Or(*parts)
    raise TypeError(f"not a formula node: {node!r}")


def negate_with_de_morgan(node: FormulaNode) -> FormulaNode:
    """
    Negation of ``node`` in negation normal form.

    ``⇒`` and ``⇔`` are eliminated first, De Morgan's laws push the negation
    to the variables and double negations cancel.
    """
    return _push_negation(node, True)


def contains_implication(node: FormulaNode) -> bool:
    """True if ``node`` contains ``⇒`` or ``⇔`` anywhere."""
    if isinstance(node, (Imp, Iff)):
        return True
    if isinstance(node, Not):
        return contains_implication(node.child)
    if isinstance(node, (And, Or)):
        return contains_implication(node.left) or contains_implication(node.right)
    return False


def contains_iff(node: FormulaNode) -> bool:
    if isinstance(node, Iff):
        return True
    if isinstance(node, Not):
        return contains_iff(node.child)
    if isinstance(node, (And, Or, Imp)):
        return contains_iff(node.left) or contains_iff(node.right)
    return False


__all__ = [
    "eliminate_implications",
    "eliminate_iff_only",
    "negate_with_de_morgan",
    "contains_implication",
    "contains_iff",
]
