"""
Tests for trig/tasks.py generation and checking.
"""

from fractions import Fraction

import pytest

from common.config import DIFFICULTIES, TrainerConfig
from trig.angles import DegAngle, RadAngle
from trig.exact import Half, One, Zero
from trig.tasks import (
    GraphSpec,
    TrigMode,
    TrigTask,
    check_trig_answer,
    generate_trig_task,
    graph_formula,
    solve_equation,
)

SEEDS = [7 + k * 7919 for k in range(40)]


def _task(mode, **fields):
    defaults = dict(difficulty="easy", prompt="", solution="", target_seconds=20, seed=1, next_seed=2)
    defaults.update(fields)
    return TrigTask(mode=mode, **defaults)


class TestSolveEquation:
    def test_sin_half(self):
        assert solve_equation("sin", Half(1)) == [Fraction(1, 6), Fraction(5, 6)]

    def test_cos_zero(self):
        assert solve_equation("cos", Zero()) == [Fraction(1, 2), Fraction(3, 2)]

    def test_tan_one(self):
        assert solve_equation("tan", One(1)) == [Fraction(1, 4), Fraction(5, 4)]

    def test_cos_minus_one(self):
        assert solve_equation("cos", One(-1)) == [Fraction(1)]

    def test_coefficient(self):
        assert solve_equation("sin", Zero(), coeff=2) == [Fraction(0), Fraction(1, 2), Fraction(1), Fraction(3, 2)]

    def test_shift(self):
        assert solve_equation("sin", One(1), shift=Fraction(1, 6)) == [Fraction(2, 3)]


class TestGraphFormula:
    def test_formats(self):
        assert graph_formula("cos", 1, 1, Fraction(0), 0) == "cos(x)"
        assert graph_formula("sin", 2, 2, Fraction(1, 2), 1) == "2·sin(2x - π) + 1"
        assert graph_formula("sin", 1, 1, Fraction(1, 2), 0) == "sin(x - π/2)"

    def test_period(self):
        assert GraphSpec("sin", 1, 2, Fraction(0), 0).period == Fraction(1)


@pytest.mark.determinism
class TestGeneration:
    @pytest.mark.parametrize("mode", list(TrigMode))
    def test_same_seed_same_task(self, mode):
        for seed in SEEDS[:10]:
            assert generate_trig_task(mode, "medium", seed) == generate_trig_task(mode, "medium", seed)

    @pytest.mark.parametrize("mode", list(TrigMode))
    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_solution_is_accepted(self, mode, difficulty):
        for seed in SEEDS:
            task = generate_trig_task(mode, difficulty, seed)
            result = check_trig_answer(task, task.solution)
            assert result.correct, (seed, task.prompt, task.solution, result.feedback)

    def test_next_seed_differs(self):
        task = generate_trig_task("trigUnitCircle", "easy", 5)
        assert task.next_seed != task.seed
        assert task.seed == 5

    def test_fallacy_zero_seed(self):
        assert generate_trig_task("trigFallacies", "easy", 0).prompt == generate_trig_task("trigFallacies", "easy", 1).prompt

    def test_target_seconds_from_config(self):
        config = TrainerConfig(targets={"trigDegRad": {"easy": 11, "medium": 12, "hard": 13}})
        assert generate_trig_task("trigDegRad", "hard", 3, config=config).target_seconds == 13
        assert generate_trig_task("trigDegRad", "easy", 3).target_seconds == 20

    def test_random_seed_when_missing(self):
        task = generate_trig_task("trigGraphs", "hard")
        assert isinstance(task.seed, int)

    def test_bad_inputs(self):
        with pytest.raises(ValueError):
            generate_trig_task("trigBogus", "easy", 1)
        with pytest.raises(ValueError):
            generate_trig_task("trigDegRad", "extreme", 1)

    def test_equations_have_solutions(self):
        for seed in SEEDS:
            task = generate_trig_task("trigEquations", "hard", seed)
            assert task.solutions
            assert all(0 <= s.multiple < 2 for s in task.solutions)

    def test_to_dict(self):
        data = generate_trig_task("trigDegRad", "easy", 9).to_dict()
        assert data["mode"] == "trigDegRad"
        assert data["seed"] == 9


class TestCheckDegRad:
    def test_radians(self):
        task = _task(TrigMode.DEG_RAD, angle=DegAngle(135.0), ask_radians=True, solution="3π/4")
        assert check_trig_answer(task, "3π/4").correct
        assert check_trig_answer(task, "3pi/4").correct
        assert check_trig_answer(task, "0.75π").correct
        assert not check_trig_answer(task, "π/4").correct
        assert "radians" in check_trig_answer(task, "135°").feedback

    def test_degrees(self):
        task = _task(TrigMode.DEG_RAD, angle=DegAngle(135.0), ask_radians=False, solution="135°")
        assert check_trig_answer(task, "135").correct
        assert check_trig_answer(task, "135°").correct
        assert "degrees" in check_trig_answer(task, "3π/4").feedback


class TestCheckUnitCircle:
    def test_exact_forms(self):
        task = _task(TrigMode.UNIT_CIRCLE, angle=RadAngle(1, 3), func="sin", solution="sqrt(3)/2")
        assert check_trig_answer(task, "√3/2").correct
        assert check_trig_answer(task, "sqrt(3) / 2").correct
        wrong = check_trig_answer(task, "1/2")
        assert not wrong.correct
        assert wrong.feedback == "Expected: sqrt(3)/2"

    def test_tan_undefined(self):
        task = _task(TrigMode.UNIT_CIRCLE, angle=RadAngle(1, 2), func="tan")
        assert check_trig_answer(task, "undef").correct

    def test_unreadable(self):
        task = _task(TrigMode.UNIT_CIRCLE, angle=RadAngle(1, 3), func="sin")
        result = check_trig_answer(task, "abc")
        assert not result.correct
        assert result.feedback.startswith("Error:")


class TestCheckIdentities:
    def test_rewrite(self):
        task = _task(TrigMode.IDENTITIES, expr_expected="cos(x)", explanation="Cofunction identity.")
        assert check_trig_answer(task, "sin(π/2 - x)").correct
        assert not check_trig_answer(task, "sin(x)").correct

    def test_claim(self):
        task = _task(TrigMode.IDENTITIES, truth_expected=False, explanation="Only special angles.")
        assert check_trig_answer(task, "false").correct
        assert not check_trig_answer(task, "yes").correct
        assert check_trig_answer(task, "perhaps").feedback == "Answer true or false."


class TestCheckEquations:
    def _sin_half(self):
        return _task(
            TrigMode.EQUATIONS,
            func="sin",
            value=Half(1),
            solutions=(RadAngle(1, 6), RadAngle(5, 6)),
            solution="π/6; 5π/6",
        )

    def test_any_order_and_units(self):
        task = self._sin_half()
        assert check_trig_answer(task, "5π/6; π/6").correct
        assert check_trig_answer(task, "30°; 150°").correct
        assert check_trig_answer(task, "13π/6; 5π/6").correct

    def test_missing(self):
        result = check_trig_answer(self._sin_half(), "π/6")
        assert not result.correct
        assert "missing 1 solution(s)" in result.feedback

    def test_extra(self):
        result = check_trig_answer(self._sin_half(), "π/6; 5π/6; π")
        assert not result.correct
        assert "not solutions: π" in result.feedback


class TestCheckGraphs:
    def _params(self):
        return _task(TrigMode.GRAPHS, graph=GraphSpec("sin", 2, 2, Fraction(1, 2), 1), solution="2;π;π/2;1")

    def test_parameters(self):
        task = self._params()
        assert check_trig_answer(task, "2;π;π/2;1").correct
        assert check_trig_answer(task, "-2; pi; 3π/2; 1").correct

    def test_wrong_period(self):
        result = check_trig_answer(self._params(), "2;2π;π/2;1")
        assert not result.correct
        assert "period" in result.feedback

    def test_too_few_values(self):
        assert check_trig_answer(self._params(), "2;π").feedback == "Enter four values a;T;phi;d."

    def test_multiple_choice(self):
        spec = GraphSpec("sin", 1, 1, Fraction(0), 0, ("sin(x) + 1", "sin(x)", "sin(2x)", "sin(x - π/2)"), 1)
        task = _task(TrigMode.GRAPHS, graph=spec, solution="B")
        assert check_trig_answer(task, "b").correct
        assert not check_trig_answer(task, "A").correct


class TestCheckFallacies:
    def test_wrong_option_names_expected(self):
        task = generate_trig_task("trigFallacies", "medium", 12345)
        wrong = next(letter for letter in "ABC" if letter != task.solution)
        result = check_trig_answer(task, wrong)
        assert not result.correct
        assert result.feedback.endswith(f"Expected: {task.solution}")
        assert check_trig_answer(task, task.solution.lower()).correct


class TestEmptyAnswer:
    def test_empty(self):
        task = generate_trig_task("trigDegRad", "easy", 1)
        assert check_trig_answer(task, "   ").feedback == "Please enter an answer."
