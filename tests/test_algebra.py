"""
Tests for the algebra package: monomials, polynomials, radicals and the
seeded math exercises.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from algebra.builders import vertex_form
from algebra.monomial import Monomial, monomial_to_fraction, monomial_to_string, parse_monomial
from algebra.payloads import (
    BooleanPayload,
    ExpressionForm,
    ExpressionPayload,
    MathMode,
    MathTask,
    MonomialPayload,
    NumericPayload,
    PolynomialPayload,
    RadicalPayload,
    RationalPayload,
    TextPayload,
)
from algebra.polynomial import Polynomial, parse_polynomial, polynomial_to_string
from algebra.radicals import SqrtForm, format_sqrt_form, parse_sqrt_form, simplify_sqrt
from algebra.tasks import check_answer, generate_task
from common.config import DIFFICULTIES, TrainerConfig
from common.errors import DomainError, ExpressionSyntaxError
from common.rational import ONE, Rational

SEEDS = [3 + k * 104729 for k in range(40)]


def _task(payload, solution="", mode=MathMode.CALC, explanation=None):
    return MathTask(
        mode=mode,
        difficulty="easy",
        prompt="",
        solution=solution,
        payload=payload,
        target_seconds=45,
        seed=1,
        next_seed=2,
        explanation=explanation,
    )


class TestMonomial:
    def test_normalizes_mapping(self):
        m = Monomial(Rational(2), {"B": 1, "a": 2, "c": 0})
        assert m.powers == (("a", 2), ("b", 1))

    def test_product_combines_exponents(self):
        assert parse_monomial("a^3 · a^4") == Monomial(ONE, {"a": 7})

    def test_division_moves_to_denominator(self):
        assert parse_monomial("a/b·c") == Monomial(ONE, {"a": 1, "b": -1, "c": -1})

    def test_power_of_bracket(self):
        assert parse_monomial("(2ab)^2") == Monomial(Rational(4), {"a": 2, "b": 2})

    def test_negative_exponent(self):
        assert parse_monomial("x^(-2)") == Monomial(ONE, {"x": -2})
        assert parse_monomial("x^-2") == parse_monomial("1/x^2")

    def test_sum_rejected(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_monomial("a-b")

    def test_empty_rejected(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_monomial("   ")

    def test_unclosed_bracket(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_monomial("(ab")

    def test_to_string(self):
        assert monomial_to_string(Monomial(Rational(-3), {"a": 2, "b": 1})) == "-3·a^2·b"
        assert monomial_to_string(Monomial(ONE)) == "1"

    def test_to_fraction(self):
        assert monomial_to_fraction(Monomial(ONE, {"a": -2, "y": 3})) == "y^3/a^2"
        assert monomial_to_fraction(Monomial(ONE, {"a": -1, "b": -1})) == "1/(a·b)"
        assert monomial_to_fraction(Monomial(Rational(-2, 3), {"x": 1})) == "-2·x/3"

    @settings(max_examples=60)
    @given(
        st.integers(min_value=-9, max_value=9).filter(bool),
        st.dictionaries(st.sampled_from("abxy"), st.integers(min_value=-4, max_value=4), max_size=3),
    )
    def test_fraction_form_parses_back(self, coeff, powers):
        m = Monomial(Rational(coeff), powers)
        assert parse_monomial(monomial_to_fraction(m)) == m


class TestPolynomial:
    def test_parse_combines_like_terms(self):
        assert parse_polynomial("x^2 + 2x + x") == Polynomial({2: 1, 1: 3})

    def test_parse_signs_and_constants(self):
        assert parse_polynomial("4x^2 - 12x + 9") == Polynomial({2: 4, 1: -12, 0: 9})
        assert parse_polynomial("-x^(2)+1/2*x") == Polynomial({2: -1, 1: Rational(1, 2)})

    def test_zero_terms_dropped(self):
        assert parse_polynomial("x - x + 3") == Polynomial({0: 3})

    def test_degree(self):
        assert Polynomial({3: 1, 0: 2}).degree == 3
        assert Polynomial({}).degree == 0

    def test_bad_term(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_polynomial("x^2 + y")
        with pytest.raises(ExpressionSyntaxError):
            parse_polynomial("x +")

    def test_to_string(self):
        assert polynomial_to_string(Polynomial({2: 4, 1: -12, 0: 9})) == "4x^2-12x+9"
        assert polynomial_to_string(Polynomial({1: Rational(1, 2)})) == "1/2*x"
        assert polynomial_to_string(Polynomial({})) == "0"
        assert polynomial_to_string(Polynomial({2: -1, 0: -4})) == "-x^2-4"

    @settings(max_examples=60)
    @given(st.dictionaries(st.integers(min_value=0, max_value=4), st.integers(min_value=-20, max_value=20), max_size=4))
    def test_printed_form_parses_back(self, coeffs):
        p = Polynomial(coeffs)
        assert parse_polynomial(polynomial_to_string(p)) == p


class TestRadicals:
    @pytest.mark.parametrize(
        "value, expected",
        [(72, SqrtForm(6, 2)), (12, SqrtForm(2, 3)), (49, SqrtForm(7, 1)), (7, SqrtForm(1, 7)), (0, SqrtForm(0, 1))],
    )
    def test_simplify(self, value, expected):
        assert simplify_sqrt(value) == expected

    def test_negative_is_domain_error(self):
        with pytest.raises(DomainError):
            simplify_sqrt(-4)

    @pytest.mark.parametrize("text", ["6*sqrt(2)", "6sqrt(2)", "6√2", "sqrt(72)", "3*sqrt(8)"])
    def test_parse_equivalent_spellings(self, text):
        assert parse_sqrt_form(text) == SqrtForm(6, 2)

    def test_parse_integer_and_sign(self):
        assert parse_sqrt_form("5") == SqrtForm(5, 1)
        assert parse_sqrt_form("-sqrt(8)") == SqrtForm(-2, 2)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_sqrt_form("6*cbrt(2)")

    def test_format(self):
        assert format_sqrt_form(SqrtForm(6, 2)) == "6*sqrt(2)"
        assert format_sqrt_form(SqrtForm(1, 5)) == "sqrt(5)"
        assert format_sqrt_form(SqrtForm(-1, 5)) == "-sqrt(5)"
        assert format_sqrt_form(SqrtForm(4, 1)) == "4"


class TestVertexForm:
    def test_integer_shift(self):
        h, k, text = vertex_form(1, 6, 4)
        assert (h, k) == (Rational(3), Rational(-5))
        assert text == "(x + 3)^2 - 5"

    def test_fractional_shift_with_leading_coefficient(self):
        h, k, text = vertex_form(2, 6, 1)
        assert h == Rational(3, 2)
        assert k == Rational(-7, 2)
        assert text == "2(x + 3/2)^2 - 7/2"

    def test_pure_square(self):
        assert vertex_form(1, 0, 0)[2] == "(x)^2"


class TestGenerateTask:
    pytestmark = pytest.mark.determinism

    def test_same_seed_same_task(self):
        for mode in MathMode:
            assert generate_task(mode, "medium", 1234) == generate_task(mode, "medium", 1234)

    def test_next_seed_continues(self):
        task = generate_task("mathCalc", "easy", 99)
        follow = generate_task("mathCalc", "easy", task.next_seed)
        assert task.next_seed != task.seed
        assert follow.seed == task.next_seed

    @pytest.mark.parametrize("mode", list(MathMode))
    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_solution_is_accepted(self, mode, difficulty):
        for seed in SEEDS:
            task = generate_task(mode, difficulty, seed)
            result = check_answer(task, task.solution)
            assert result.correct, (seed, task.prompt, task.solution, result.feedback)

    def test_seed_drawn_when_missing(self):
        task = generate_task("mathSums", "hard")
        assert isinstance(task.seed, int)

    def test_target_seconds_from_config(self):
        assert generate_task("mathQuad", "hard", 5).target_seconds == 100
        custom = TrainerConfig(targets={"mathQuad": {"hard": 7}})
        assert generate_task("mathQuad", "hard", 5, config=custom).target_seconds == 7

    def test_bad_mode_and_difficulty(self):
        with pytest.raises(ValueError):
            generate_task("mathNope", "easy", 1)
        with pytest.raises(ValueError):
            generate_task("mathCalc", "extreme", 1)

    def test_to_dict(self):
        data = generate_task("mathBinom", "easy", 8).to_dict()
        assert data["mode"] == "mathBinom"
        assert data["seed"] == 8
        assert data["payload"]["kind"] in {"numeric", "polynomial"}


class TestCheckAnswer:
    def test_empty_answer(self):
        result = check_answer(_task(RationalPayload(Rational(1, 2)), "1/2"), "  ")
        assert not result.correct
        assert result.feedback == "Please enter an answer."

    def test_rational_forms(self):
        task = _task(RationalPayload(Rational(7, 2)), "7/2")
        assert check_answer(task, "7/2").correct
        assert check_answer(task, "3 1/2").correct
        assert check_answer(task, "3.5").correct

    def test_unreduced_fraction(self):
        result = check_answer(_task(RationalPayload(Rational(1, 2)), "1/2"), "2/4")
        assert not result.correct
        assert result.feedback == "Right value, but reduce the fraction fully."

    def test_wrong_rational_carries_explanation(self):
        task = _task(RationalPayload(Rational(1, 2)), "1/2", explanation="Cancel 2.")
        result = check_answer(task, "1/3")
        assert result.feedback == "Expected: 1/2 (Cancel 2.)"
        assert result.normalized_input == "1/3"

    def test_numeric_tolerance(self):
        task = _task(NumericPayload(10.0), "10", mode=MathMode.BINOM)
        assert check_answer(task, "10.0000001").correct
        assert check_answer(task, "2*5").correct
        assert not check_answer(task, "10.1").correct

    def test_monomial(self):
        task = _task(MonomialPayload(Monomial(ONE, {"a": 7})), "a^7", mode=MathMode.POWERS)
        assert check_answer(task, "a^7").correct
        assert check_answer(task, "a·a^6").correct
        assert not check_answer(task, "a^6").correct

    def test_negative_exponent_forbidden(self):
        payload = MonomialPayload(Monomial(ONE, {"a": -2, "y": 3}), disallow_negative=True)
        task = _task(payload, "y^3/a^2", mode=MathMode.POWERS)
        result = check_answer(task, "a^-2·y^3")
        assert not result.correct
        assert result.feedback == "Write it without negative exponents (use a fraction)."
        assert check_answer(task, "y^3/a^2").correct

    def test_radical_form_required(self):
        payload = ExpressionPayload("a^(2/3)", ("a",), positive_only=True, form=ExpressionForm.RADICAL)
        task = _task(payload, "√[3]{a^2}", mode=MathMode.ROOTS)
        assert check_answer(task, "√[3]{a^2}").correct
        assert check_answer(task, "root(3, a^2)").correct
        result = check_answer(task, "a^(2/3)")
        assert result.feedback == "Write the answer with a root sign."

    def test_power_form_required(self):
        payload = ExpressionPayload("a^(2/3)", ("a",), positive_only=True, form=ExpressionForm.POWER)
        task = _task(payload, "a^(2/3)", mode=MathMode.ROOTS)
        assert check_answer(task, "a^(2/3)").correct
        result = check_answer(task, "√[3]{a^2}")
        assert result.feedback == "Write the answer as a power without a root sign."

    def test_vertex_form_required(self):
        payload = ExpressionPayload("(x + 3)^2 - 5", ("x",), form=ExpressionForm.VERTEX)
        task = _task(payload, "(x + 3)^2 - 5", mode=MathMode.QUAD)
        assert check_answer(task, "(x+3)^2-5").correct
        result = check_answer(task, "x^2 + 6x + 4")
        assert result.feedback == "Write the answer in vertex form a(x + h)^2 + k."
        assert not check_answer(task, "(x + 3)^2 + 5").correct

    def test_unknown_variable(self):
        payload = ExpressionPayload("(x + 1)^2", ("x",), form=ExpressionForm.VERTEX)
        result = check_answer(_task(payload, "(x + 1)^2", mode=MathMode.QUAD), "(y + 1)^2")
        assert not result.correct
        assert result.feedback == "Unknown variable(s): y."

    def test_boolean(self):
        task = _task(BooleanPayload(False), "false", mode=MathMode.POWERS, explanation="Binomial formula.")
        assert check_answer(task, "Falsch").correct
        result = check_answer(task, "true")
        assert result.feedback == "That is false. Binomial formula."
        assert check_answer(task, "maybe").feedback == "Answer true or false."

    def test_polynomial(self):
        task = _task(PolynomialPayload(Polynomial({2: 4, 1: -12, 0: 9})), "4x^2-12x+9", mode=MathMode.BINOM)
        assert check_answer(task, "9 - 12x + 4x^2").correct
        result = check_answer(task, "4x^2+9")
        assert not result.correct
        assert result.normalized_input == "4x^2+9"

    def test_radical(self):
        task = _task(RadicalPayload(SqrtForm(6, 2)), "6*sqrt(2)", mode=MathMode.ROOTS)
        assert check_answer(task, "sqrt(72)").correct
        assert check_answer(task, "6√2").correct
        assert not check_answer(task, "3*sqrt(2)").correct

    def test_text(self):
        task = _task(TextPayload(("log_b(x)+log_b(y)",)), "log_b(x)+log_b(y)", mode=MathMode.LOGS)
        assert check_answer(task, "log_b(x) + log_b(y)").correct
        assert check_answer(task, "LOG_B(X)+LOG_B(Y)").correct
        assert not check_answer(task, "log_b(xy)").correct

    def test_unreadable_input_reports_error(self):
        task = _task(PolynomialPayload(Polynomial({1: 1})), "x", mode=MathMode.BINOM)
        result = check_answer(task, "x^^2")
        assert not result.correct
        assert result.feedback.startswith("Error:")

    def test_result_to_dict(self):
        result = check_answer(_task(RationalPayload(Rational(3)), "3"), "3")
        assert result.to_dict() == {"correct": True, "feedback": "Correct.", "normalized_input": "3"}
