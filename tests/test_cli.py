"""
Tests for the trainerctl command-line front end.
"""

import json
from pathlib import Path

import pytest

import trainerctl
from algebra import generate_task
from trig import generate_trig_task

pytestmark = [pytest.mark.cli, pytest.mark.usefixtures("no_config_file")]

REPO_ROOT = Path(__file__).resolve().parents[1]
BANK_PATH = REPO_ROOT / "data" / "logic_tasks.yaml"


def run(capsys, *argv):
    code = trainerctl.main(list(argv))
    return code, capsys.readouterr().out


def run_json(capsys, *argv):
    code, out = run(capsys, "--json", *argv)
    return code, json.loads(out)


class TestParser:
    def test_no_command_prints_help(self, capsys):
        code, out = run(capsys)
        assert code == trainerctl.EXIT_OK
        assert "Symbolic trainer CLI" in out

    def test_unknown_mode_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            trainerctl.main(["task", "mathNope"])
        assert excinfo.value.code == 2


class TestLogicCommands:
    def test_normalize(self, capsys):
        code, out = run(capsys, "normalize", "P->Q")
        assert code == 0
        assert out.strip() == "P⇒Q"

    def test_normalize_json_cursor(self, capsys):
        code, data = run_json(capsys, "normalize", "P->Q", "--cursor", "4")
        assert code == 0
        assert data == {"value": "P⇒Q", "cursor": 3}

    def test_table(self, capsys):
        code, out = run(capsys, "table", "P ∧ Q")
        lines = out.splitlines()
        assert code == 0
        assert lines[0] == "P Q | result"
        assert lines[-1] == "1 1 | 1"
        assert len(lines) == 5

    def test_equiv(self, capsys):
        code, out = run(capsys, "equiv", "P ⇒ Q", "¬P ∨ Q")
        assert code == trainerctl.EXIT_OK
        assert out.strip() == "equivalent"

    def test_not_equivalent_exits_one(self, capsys):
        code, data = run_json(capsys, "equiv", "P ⇒ Q", "Q ⇒ P")
        assert code == trainerctl.EXIT_WRONG
        assert data["equal"] is False
        assert any(not row["matches"] for row in data["table"])

    def test_transform_negate(self, capsys):
        code, data = run_json(capsys, "transform", "--rule", "negate", "P ∧ Q")
        assert code == 0
        assert data["result"] == "¬P ∨ ¬Q"

    def test_unreadable_formula(self, capsys):
        code, data = run_json(capsys, "table", "P ∧")
        assert code == trainerctl.EXIT_ERROR
        assert "error" in data

    def test_logic_with_base(self, capsys):
        code, data = run_json(capsys, "logic", "negation", "--base", "P ∧ Q", "--answer", "¬P ∨ ¬Q")
        assert code == 0
        assert data["check"]["correct"] is True

    def test_logic_wrong_answer(self, capsys):
        code, _ = run(capsys, "logic", "negation", "--base", "P ∧ Q", "--answer", "¬P ∧ ¬Q")
        assert code == trainerctl.EXIT_WRONG

    def test_logic_from_bank(self, capsys):
        code, first = run_json(capsys, "logic", "eliminateImp", "--seed", "11", "--bank", str(BANK_PATH))
        _, second = run_json(capsys, "logic", "eliminateImp", "--seed", "11", "--bank", str(BANK_PATH))
        assert code == 0
        assert first == second
        assert first["base"]

    def test_logic_default_bank_from_config(self, capsys, monkeypatch):
        monkeypatch.chdir(REPO_ROOT)
        code, data = run_json(capsys, "logic", "negation", "--seed", "5")
        assert code == 0
        assert data["mode"] == "negation"

    def test_logic_missing_bank(self, capsys, tmp_path):
        code, _ = run(capsys, "logic", "negation", "--seed", "5", "--bank", str(tmp_path / "none.yaml"))
        assert code == trainerctl.EXIT_ERROR


class TestSetCommands:
    def test_sets_relation(self, capsys):
        code, data = run_json(capsys, "sets", "A ∩ B", "A")
        assert code == 0
        assert data["relation"] == "subset"

    def test_venn(self, capsys):
        code, data = run_json(capsys, "venn", "A ∖ B", "--sets", "A,B,C")
        assert code == 0
        assert data["mask"] == 0b00110000
        assert data["regions"] == ["A", "A∩C"]

    def test_venn_repeated_set(self, capsys):
        code, _ = run(capsys, "venn", "A ∪ B", "--sets", "A,A")
        assert code == trainerctl.EXIT_ERROR


class TestTrigCommands:
    def test_angle(self, capsys):
        code, out = run(capsys, "angle", "3pi/4")
        assert code == 0
        assert out.strip() == "3π/4: sin=sqrt(2)/2 cos=-sqrt(2)/2 tan=-1"

    def test_angle_json(self, capsys):
        code, data = run_json(capsys, "angle", "90°")
        assert code == 0
        assert data["tan"] == "undef"
        assert data["exact"] is True

    def test_fallacy_is_deterministic(self, capsys):
        code, first = run_json(capsys, "fallacy", "--seed", "3")
        _, second = run_json(capsys, "fallacy", "--seed", "3")
        assert code == 0
        assert first == second

    def test_fallacy_answer(self, capsys):
        _, drawn = run_json(capsys, "fallacy", "--seed", "3")
        code, data = run_json(capsys, "fallacy", "--seed", "3", "--answer", drawn["option"].lower())
        assert code == 0
        assert data["correct"] is True


class TestTaskCommand:
    def test_math_task_json(self, capsys):
        code, data = run_json(capsys, "task", "mathPowers", "--difficulty", "hard", "--seed", "42")
        expected = generate_task("mathPowers", "hard", 42)
        assert code == 0
        assert data["prompt"] == expected.prompt
        assert data["next_seed"] == expected.next_seed

    def test_show_solution(self, capsys):
        code, out = run(capsys, "task", "mathCalc", "--seed", "8", "--show-solution")
        solution = generate_task("mathCalc", "medium", 8).solution
        assert code == 0
        assert f"Solution: {solution}" in out

    def test_math_answer_checked(self, capsys):
        task = generate_task("mathBinom", "easy", 17)
        code, data = run_json(
            capsys, "task", "mathBinom", "--difficulty", "easy", "--seed", "17", f"--answer={task.solution}"
        )
        assert code == 0
        assert data["check"]["correct"] is True

    def test_trig_answer_checked(self, capsys):
        task = generate_trig_task("trigUnitCircle", "medium", 7)
        code, out = run(capsys, "task", "trigUnitCircle", "--seed", "7", f"--answer={task.solution}")
        assert code == 0
        assert "✓" in out

    def test_wrong_answer_exits_one(self, capsys):
        code, out = run(capsys, "task", "mathSums", "--seed", "4", "--answer", "-99999")
        assert code == trainerctl.EXIT_WRONG
        assert "✗" in out
