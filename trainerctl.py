#!/usr/bin/env python3
"""
trainerctl.py - symbolic trainer CLI

Command-line front end for the trainer engines:
- symbol normalization and truth tables for propositional formulas
- implication elimination and De Morgan negation
- set-term relations and Venn region masks
- exact trigonometric values for special angles
- seeded exercise generation and answer checking

Examples:
  trainerctl.py normalize "A -> !B"
  trainerctl.py table "P ⇒ Q"
  trainerctl.py equiv "P ⇒ Q" "¬P ∨ Q"
  trainerctl.py transform --rule negate "P ∧ (Q ⇒ R)"
  trainerctl.py sets "A ∩ B" "A"
  trainerctl.py venn "A ∖ B" --sets A,B,C
  trainerctl.py angle 3pi/4
  trainerctl.py task mathPowers --difficulty hard --seed 42
  trainerctl.py task trigUnitCircle --seed 7 --answer "√2/2"
  trainerctl.py fallacy --seed 3 --answer B
  trainerctl.py logic negation --seed 11 --answer "¬P ∨ ¬Q"

Exit codes: 0 success, 1 wrong answer (or non-equivalent formulas),
2 unreadable input, bad set names, or a missing or malformed task bank.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from algebra import MathMode, check_answer, generate_task
from common.config import DIFFICULTIES, TrainerConfig, load_config_from_env
from common.errors import TrainerError
from common.prng import Lcg, random_seed
from logic import (
    LogicMode,
    ast_to_string,
    check_logic_answer,
    eliminate_iff_only,
    eliminate_implications,
    load_task_bank,
    negate_with_de_morgan,
    normalize_with_cursor,
    parse_formula,
    pick_template,
    truth_table,
    truth_table_equality,
)
from sets import (
    classify_relation,
    compute_region_mask_from_expr,
    mask_to_regions,
    parse_set_expression,
    set_to_string,
)
from trig import (
    TrigMode,
    angle_to_string,
    check_trig_answer,
    draw_fallacy,
    generate_trig_task,
    normalize_angle,
    parse_angle,
    sin_cos_tan_exact,
    to_radians,
)

logger = logging.getLogger("trainerctl")

EXIT_OK = 0
EXIT_WRONG = 1
EXIT_ERROR = 2

TRANSFORMS = {
    "imp": eliminate_implications,
    "iff": eliminate_iff_only,
    "negate": negate_with_de_morgan,
}

TASK_MODES = [m.value for m in MathMode] + [m.value for m in TrigMode if m is not TrigMode.FALLACIES]


def _emit(args: argparse.Namespace, data: Dict[str, Any], lines: List[str]) -> None:
    if args.json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        for line in lines:
            print(line)


def _verdict(correct: bool) -> int:
    return EXIT_OK if correct else EXIT_WRONG


def _seed(args: argparse.Namespace) -> int:
    return args.seed if args.seed is not None else random_seed()


def cmd_normalize(args: argparse.Namespace, config: TrainerConfig) -> int:
    cursor = len(args.text) if args.cursor is None else args.cursor
    result = normalize_with_cursor(args.text, cursor)
    _emit(args, {"value": result.value, "cursor": result.cursor}, [result.value])
    return EXIT_OK


def cmd_table(args: argparse.Namespace, config: TrainerConfig) -> int:
    table = truth_table(parse_formula(args.formula))
    lines = [" ".join(table.variables) + " | result"]
    for row in table.rows:
        cells = " ".join("1" if row.assignment[v] else "0" for v in table.variables)
        lines.append(f"{cells} | {int(row.result)}")
    _emit(args, table.to_dict(), lines)
    return EXIT_OK


def cmd_equiv(args: argparse.Namespace, config: TrainerConfig) -> int:
    comparison = truth_table_equality(parse_formula(args.left), parse_formula(args.right))
    lines = ["equivalent" if comparison.equal else "not equivalent"]
    for row in comparison.table:
        if not row.matches:
            values = ", ".join(f"{k}={int(v)}" for k, v in row.assignment.items())
            lines.append(f"  differs at {values}: {int(row.left)} vs {int(row.right)}")
    _emit(args, comparison.to_dict(), lines)
    return _verdict(comparison.equal)


def cmd_transform(args: argparse.Namespace, config: TrainerConfig) -> int:
    node = parse_formula(args.formula)
    result = ast_to_string(TRANSFORMS[args.rule](node))
    _emit(args, {"input": ast_to_string(node), "rule": args.rule, "result": result}, [result])
    return EXIT_OK


def cmd_sets(args: argparse.Namespace, config: TrainerConfig) -> int:
    left = set_to_string(parse_set_expression(args.left))
    right = set_to_string(parse_set_expression(args.right))
    relation = classify_relation(args.left, args.right)
    _emit(
        args,
        {"left": left, "right": right, "relation": relation.value},
        [f"{left} {relation.value} {right}"],
    )
    return EXIT_OK


def cmd_venn(args: argparse.Namespace, config: TrainerConfig) -> int:
    sets = tuple(s.strip() for s in args.sets.split(",") if s.strip())
    node = parse_set_expression(args.expr)
    mask = compute_region_mask_from_expr(node, sets)
    regions = mask_to_regions(mask, sets)
    _emit(
        args,
        {"expr": set_to_string(node), "sets": list(sets), "mask": mask, "regions": regions},
        [f"mask {mask}: {', '.join(regions) or 'nothing'}"],
    )
    return EXIT_OK


def cmd_angle(args: argparse.Namespace, config: TrainerConfig) -> int:
    angle = parse_angle(args.angle)
    values = sin_cos_tan_exact(angle)
    normalized = angle_to_string(normalize_angle(angle))
    data = {"angle": normalized, "radians": to_radians(angle), **values.to_dict()}
    lines = [f"{normalized}: sin={data['sin']} cos={data['cos']} tan={data['tan']}"]
    if not values.exact:
        lines.append("(not a special angle, values are approximate)")
    _emit(args, data, lines)
    return EXIT_OK


def cmd_task(args: argparse.Namespace, config: TrainerConfig) -> int:
    difficulty = args.difficulty or config.default_difficulty
    seed = _seed(args)
    if args.mode in {m.value for m in MathMode}:
        task = generate_task(args.mode, difficulty, seed, config=config)
        check = check_answer(task, args.answer, config=config) if args.answer is not None else None
    else:
        task = generate_trig_task(args.mode, difficulty, seed, config=config)
        check = check_trig_answer(task, args.answer) if args.answer is not None else None

    data = task.to_dict()
    lines = [f"[{task.mode.value}/{difficulty} seed={seed}] {task.prompt}"]
    if check is None:
        if args.show_solution:
            lines.append(f"Solution: {task.solution}")
        _emit(args, data, lines)
        return EXIT_OK
    data["check"] = check.to_dict()
    lines.append(("✓ " if check.correct else "✗ ") + check.feedback)
    _emit(args, data, lines)
    return _verdict(check.correct)


def cmd_fallacy(args: argparse.Namespace, config: TrainerConfig) -> int:
    difficulty = args.difficulty or config.default_difficulty
    seed = _seed(args)
    fallacy, _ = draw_fallacy(Lcg.from_seed(seed or 1), difficulty)
    data: Dict[str, Any] = {
        "seed": seed,
        "statement": fallacy.rule.statement,
        "label": fallacy.rule.label.value,
        "option": fallacy.option,
        "feedback": fallacy.feedback,
    }
    lines = [f"Claim: {fallacy.rule.statement}", "A) always true  B) sometimes true  C) false"]
    if args.answer is None:
        _emit(args, data, lines)
        return EXIT_OK
    correct = args.answer.strip().upper() == fallacy.option
    data["correct"] = correct
    lines.append(("✓ " if correct else f"✗ Expected: {fallacy.option} · ") + fallacy.feedback)
    _emit(args, data, lines)
    return _verdict(correct)


def cmd_logic(args: argparse.Namespace, config: TrainerConfig) -> int:
    seed = _seed(args)
    if args.base:
        base, hint = args.base, None
    else:
        bank = load_task_bank(Path(args.bank or config.task_bank))
        picked, _ = pick_template(bank, args.mode, Lcg.from_seed(seed))
        base, hint = picked.base, picked.hint
    data: Dict[str, Any] = {"mode": args.mode, "seed": seed, "base": base, "hint": hint}
    lines = [f"[{args.mode} seed={seed}] {base}"]
    if hint:
        lines.append(f"Hint: {hint}")
    if args.answer is None:
        _emit(args, data, lines)
        return EXIT_OK
    check = check_logic_answer(args.mode, base, args.answer)
    data["check"] = check.to_dict()
    lines.append(("✓ " if check.correct else "✗ ") + check.feedback)
    _emit(args, data, lines)
    return _verdict(check.correct)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Symbolic trainer CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    p = subparsers.add_parser("normalize", help="Rewrite ASCII digraphs and keywords to symbols")
    p.add_argument("text")
    p.add_argument("--cursor", type=int, help="Caret position (default: end of input)")
    p.set_defaults(func=cmd_normalize)

    p = subparsers.add_parser("table", help="Print the truth table of a formula")
    p.add_argument("formula")
    p.set_defaults(func=cmd_table)

    p = subparsers.add_parser("equiv", help="Compare two formulas row by row")
    p.add_argument("left")
    p.add_argument("right")
    p.set_defaults(func=cmd_equiv)

    p = subparsers.add_parser("transform", help="Apply a rewrite to a formula")
    p.add_argument("formula")
    p.add_argument("--rule", choices=sorted(TRANSFORMS), default="imp")
    p.set_defaults(func=cmd_transform)

    p = subparsers.add_parser("sets", help="Classify how two set terms are related")
    p.add_argument("left")
    p.add_argument("right")
    p.set_defaults(func=cmd_sets)

    p = subparsers.add_parser("venn", help="Region mask of a set term")
    p.add_argument("expr")
    p.add_argument("--sets", default="A,B", help="Comma separated set names (default: A,B)")
    p.set_defaults(func=cmd_venn)

    p = subparsers.add_parser("angle", help="Exact sin, cos and tan of an angle")
    p.add_argument("angle")
    p.set_defaults(func=cmd_angle)

    p = subparsers.add_parser("task", help="Generate a math or trig exercise, optionally check an answer")
    p.add_argument("mode", choices=TASK_MODES)
    p.add_argument("--difficulty", choices=DIFFICULTIES)
    p.add_argument("--seed", type=int)
    p.add_argument("--answer")
    p.add_argument("--show-solution", action="store_true")
    p.set_defaults(func=cmd_task)

    p = subparsers.add_parser("fallacy", help="Draw a trig claim to judge")
    p.add_argument("--difficulty", choices=DIFFICULTIES)
    p.add_argument("--seed", type=int)
    p.add_argument("--answer", help="A, B or C")
    p.set_defaults(func=cmd_fallacy)

    p = subparsers.add_parser("logic", help="Pick a logic exercise from the task bank, optionally check an answer")
    p.add_argument("mode", choices=[m.value for m in LogicMode])
    p.add_argument("--seed", type=int)
    p.add_argument("--base", help="Use this formula instead of a bank template")
    p.add_argument("--bank", help="Task bank YAML (default: from config)")
    p.add_argument("--answer")
    p.set_defaults(func=cmd_logic)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config_from_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args, config)
    except (TrainerError, ValueError, KeyError, OSError) as exc:
        logger.error("%s", exc)
        if args.json:
            print(json.dumps({"error": str(exc)}, ensure_ascii=False))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
