"""
YAML template bank for the propositional-logic exercises.

Document shape:

    variables: [P, Q, R, S]
    modes:
      eliminateImp:
        - "#1 -> #2"
        - base: "(#1 -> #2) & #3"
          hint: "Rewrite each implication separately."

Each ``#N`` placeholder is replaced by a variable from the pool; equal
labels receive equal variables. Filled templates are symbol-normalized.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from common.errors import ExpressionSyntaxError
from common.prng import Lcg
from logic.formula import parse_formula
from logic.symbols import normalize_symbols
from logic.tasks import LogicMode

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"#\d")


@dataclass(frozen=True, slots=True)
class Template:
    base: str
    hint: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LogicTask:
    mode: str
    base: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class TaskBank:
    variables: Tuple[str, ...]
    modes: Mapping[str, Tuple[Template, ...]]

    def templates(self, mode: LogicMode | str) -> Tuple[Template, ...]:
        key = LogicMode(mode).value
        found = self.modes.get(key)
        if not found:
            raise KeyError(f"task bank has no templates for mode {key!r}")
        return found


def fill_template(template: str, pool: List[str]) -> str:
    """Substitute placeholders in order of first appearance, cycling through ``pool``."""
    if not pool:
        raise ValueError("variable pool is empty")
    labels: Dict[str, str] = {}
    for label in _PLACEHOLDER.findall(template):
        if label not in labels:
            labels[label] = pool[len(labels) % len(pool)]
    filled = _PLACEHOLDER.sub(lambda m: labels[m.group()], template)
    return normalize_symbols(filled)


def _read_template(raw: Any, mode: str) -> Template:
    if isinstance(raw, str):
        return Template(raw)
    if isinstance(raw, Mapping) and isinstance(raw.get("base"), str):
        hint = raw.get("hint")
        return Template(raw["base"], str(hint) if hint is not None else None)
    raise ValueError(f"malformed template in mode {mode!r}: {raw!r}")


def parse_task_bank(data: Mapping[str, Any]) -> TaskBank:
    """Validate a decoded bank; templates that do not parse are dropped with a warning."""
    if not isinstance(data, Mapping):
        raise ValueError("task bank must be a mapping")
    variables = data.get("variables")
    if not variables or not all(isinstance(v, str) and len(v) == 1 and v.isupper() for v in variables):
        raise ValueError("task bank needs a list of single uppercase variables")
    pool = list(variables)

    modes: Dict[str, Tuple[Template, ...]] = {}
    for mode, entries in (data.get("modes") or {}).items():
        kept: List[Template] = []
        for raw in entries or []:
            template = _read_template(raw, mode)
            try:
                parse_formula(fill_template(template.base, pool))
            except ExpressionSyntaxError as exc:
                logger.warning("dropping template %r in mode %s: %s", template.base, mode, exc)
                continue
            kept.append(template)
        modes[str(mode)] = tuple(kept)
    return TaskBank(tuple(pool), modes)


def load_task_bank(path: Path | str) -> TaskBank:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    bank = parse_task_bank(data)
    logger.debug("loaded task bank %s with modes %s", path, sorted(bank.modes))
    return bank


def pick_template(bank: TaskBank, mode: LogicMode | str, rng: Lcg) -> Tuple[LogicTask, Lcg]:
    """Choose and fill a template deterministically from ``rng``."""
    templates = bank.templates(mode)
    template, rng = rng.choice(templates)
    pool, rng = rng.shuffle(bank.variables)
    task = LogicTask(LogicMode(mode).value, fill_template(template.base, pool), template.hint)
    return task, rng


__all__ = [
    "Template",
    "LogicTask",
    "TaskBank",
    "fill_template",
    "parse_task_bank",
    "load_task_bank",
    "pick_template",
]
