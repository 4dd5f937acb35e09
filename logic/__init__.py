"""Propositional formula engine: normalization, parsing, truth tables, rewrites, exercises."""

from logic.symbols import NormalizationResult, normalize_symbols, normalize_with_cursor
from logic.formula import (
    And,
    FormulaNode,
    Iff,
    Imp,
    Not,
    Or,
    Var,
    ast_to_string,
    collect_variables,
    evaluate_formula,
    parse_formula,
)
from logic.truthtab import are_equivalent, truth_table, truth_table_equality
from logic.transforms import (
    contains_iff,
    contains_implication,
    eliminate_iff_only,
    eliminate_implications,
    negate_with_de_morgan,
)
from logic.tasks import LogicCheck, LogicMode, check_logic_answer
from logic.bank import LogicTask, TaskBank, load_task_bank, pick_template

__all__ = [
    "NormalizationResult",
    "normalize_with_cursor",
    "normalize_symbols",
    "Var",
    "Not",
    "And",
    "Or",
    "Imp",
    "Iff",
    "FormulaNode",
    "parse_formula",
    "evaluate_formula",
    "collect_variables",
    "ast_to_string",
    "truth_table",
    "truth_table_equality",
    "are_equivalent",
    "eliminate_implications",
    "eliminate_iff_only",
    "negate_with_de_morgan",
    "contains_implication",
    "contains_iff",
    "LogicMode",
    "LogicCheck",
    "check_logic_answer",
    "LogicTask",
    "TaskBank",
    "load_task_bank",
    "pick_template",
]
