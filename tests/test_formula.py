"""
Tests for logic/formula.py and logic/truthtab.py.
"""

import pytest

from common.errors import ExpressionSyntaxError
from logic.formula import And, Iff, Imp, Not, Or, Var, ast_to_string, collect_variables, evaluate_formula, parse_formula
from logic.truthtab import are_equivalent, assignments, truth_table, truth_table_equality

P, Q, R = Var("P"), Var("Q"), Var("R")


class TestParser:
    def test_precedence(self):
        assert parse_formula("P ∨ Q ∧ R") == Or(P, And(Q, R))
        assert parse_formula("P ⇒ Q ⇔ R") == Iff(Imp(P, Q), R)
        assert parse_formula("¬P ∧ Q") == And(Not(P), Q)

    def test_left_associative(self):
        assert parse_formula("P ⇒ Q ⇒ R") == Imp(Imp(P, Q), R)
        assert parse_formula("P ∧ Q ∧ R") == And(And(P, Q), R)

    def test_prefix_not_nests(self):
        assert parse_formula("¬¬P") == Not(Not(P))

    def test_ascii_input_is_normalized(self):
        assert parse_formula("!(P & Q) -> R") == Imp(Not(And(P, Q)), R)

    def test_parentheses(self):
        assert parse_formula("(P ∨ Q) ∧ R") == And(Or(P, Q), R)

    @pytest.mark.parametrize("text", ["", "P ∧", "(P ∨ Q", "P Q", "p", "P ⇒ ⇒ Q", "P ∧ )"])
    def test_errors(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse_formula(text)

    def test_missing_paren_message(self):
        with pytest.raises(ExpressionSyntaxError, match="missing closing parenthesis"):
            parse_formula("(P ∨ Q")

    def test_trailing_input_message(self):
        with pytest.raises(ExpressionSyntaxError, match="after formula"):
            parse_formula("P Q")


class TestSemantics:
    def test_connectives(self):
        env = {"P": True, "Q": False}
        assert evaluate_formula(parse_formula("P ∨ Q"), env)
        assert not evaluate_formula(parse_formula("P ∧ Q"), env)
        assert not evaluate_formula(parse_formula("P ⇒ Q"), env)
        assert evaluate_formula(parse_formula("Q ⇒ P"), env)
        assert not evaluate_formula(parse_formula("P ⇔ Q"), env)

    def test_collect_variables(self):
        assert collect_variables(parse_formula("(R ⇒ P) ∧ ¬R")) == {"P", "R"}


class TestPrinter:
    @pytest.mark.parametrize(
        "node, text",
        [
            (And(Or(P, Q), R), "(P ∨ Q) ∧ R"),
            (Or(P, And(Q, R)), "P ∨ Q ∧ R"),
            (Imp(Imp(P, Q), R), "P ⇒ Q ⇒ R"),
            (Imp(P, Imp(Q, R)), "P ⇒ (Q ⇒ R)"),
            (Not(And(P, Q)), "¬(P ∧ Q)"),
            (Not(Not(P)), "¬¬P"),
            (And(Not(P), Q), "¬P ∧ Q"),
        ],
    )
    def test_minimal_parentheses(self, node, text):
        assert ast_to_string(node) == text
        assert parse_formula(text) == node


class TestTruthTable:
    def test_row_order_first_variable_most_significant(self):
        rows = list(assignments(["P", "Q"]))
        assert rows == [
            {"P": False, "Q": False},
            {"P": False, "Q": True},
            {"P": True, "Q": False},
            {"P": True, "Q": True},
        ]

    def test_implication_table(self):
        table = truth_table("P ⇒ Q")
        assert table.variables == ("P", "Q")
        assert [row.result for row in table.rows] == [True, True, False, True]
        assert table.true_count == 3

    def test_variables_sorted_and_deduplicated(self):
        table = truth_table("R ∧ P ∨ R")
        assert table.variables == ("P", "R")
        assert len(table.rows) == 4

    def test_comparison_uses_union_of_variables(self):
        comparison = truth_table_equality("P", "P ∧ (Q ∨ ¬Q)")
        assert comparison.equal
        assert len(comparison.table) == 4

    def test_comparison_marks_mismatches(self):
        comparison = truth_table_equality("P ⇒ Q", "Q ⇒ P")
        assert not comparison.equal
        mismatches = [row.assignment for row in comparison.table if not row.matches]
        assert mismatches == [{"P": False, "Q": True}, {"P": True, "Q": False}]

    def test_to_dict(self):
        data = truth_table_equality("P", "¬¬P").to_dict()
        assert data["equal"] is True
        assert data["table"][0] == {"assignment": {"P": False}, "left": False, "right": False, "matches": True}

    def test_are_equivalent(self):
        assert are_equivalent("¬(P ∧ Q)", "¬P ∨ ¬Q")
        assert not are_equivalent("P ⇒ Q", "Q ⇒ P")
