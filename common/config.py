"""
Trainer configuration loaded from YAML.

The canonical file lives at ``config/trainer.yaml``; the ``TRAINER_CONFIG``
environment variable points elsewhere. A missing file yields the built-in
defaults, a malformed one raises.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRAINER_CONFIG"
DEFAULT_CONFIG_PATH = "config/trainer.yaml"

DIFFICULTIES = ("easy", "medium", "hard")

# Seconds a learner is expected to need, per mode and difficulty.
DEFAULT_TARGETS: Dict[str, Dict[str, int]] = {
    "mathCalc": {"easy": 45, "medium": 55, "hard": 65},
    "mathPowers": {"easy": 55, "medium": 65, "hard": 75},
    "mathRoots": {"easy": 55, "medium": 65, "hard": 75},
    "mathBinom": {"easy": 65, "medium": 75, "hard": 85},
    "mathQuad": {"easy": 80, "medium": 90, "hard": 100},
    "mathLogs": {"easy": 60, "medium": 70, "hard": 80},
    "mathSums": {"easy": 70, "medium": 85, "hard": 95},
    "trigDegRad": {"easy": 20, "medium": 30, "hard": 45},
    "trigUnitCircle": {"easy": 20, "medium": 30, "hard": 45},
    "trigIdentities": {"easy": 25, "medium": 35, "hard": 50},
    "trigEquations": {"easy": 25, "medium": 35, "hard": 55},
    "trigGraphs": {"easy": 45, "medium": 60, "hard": 90},
    "trigFallacies": {"easy": 20, "medium": 30, "hard": 45},
}


def check_difficulty(difficulty: str) -> str:
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"unknown difficulty {difficulty!r}; expected one of {', '.join(DIFFICULTIES)}")
    return difficulty


@dataclass
class TrainerConfig:
    """Runtime settings for the CLI and the task engines."""

    log_level: str = "INFO"
    default_difficulty: str = "medium"
    task_bank: str = "data/logic_tasks.yaml"
    samples: int = 6
    tolerance: float = 1e-6
    targets: Dict[str, Dict[str, int]] = field(default_factory=lambda: {k: dict(v) for k, v in DEFAULT_TARGETS.items()})

    def __post_init__(self):
        check_difficulty(self.default_difficulty)
        if self.samples < 1:
            raise ValueError("samples must be at least 1")

    def target_seconds(self, mode: str, difficulty: str) -> int:
        check_difficulty(difficulty)
        per_mode = self.targets.get(mode) or DEFAULT_TARGETS.get(mode)
        if per_mode is None:
            raise KeyError(f"no target times for mode {mode!r}")
        return int(per_mode.get(difficulty, DEFAULT_TARGETS.get(mode, {}).get(difficulty, 60)))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "TrainerConfig":
        data = data or {}
        logging_cfg = data.get("logging", {}) or {}
        sampling = data.get("sampling", {}) or {}
        targets = {k: dict(v) for k, v in DEFAULT_TARGETS.items()}
        for mode, per_mode in (data.get("targets", {}) or {}).items():
            targets.setdefault(mode, {}).update({str(k): int(v) for k, v in per_mode.items()})
        return cls(
            log_level=str(logging_cfg.get("level", cls.log_level)).upper(),
            default_difficulty=data.get("default_difficulty", cls.default_difficulty),
            task_bank=data.get("task_bank", cls.task_bank),
            samples=int(sampling.get("samples", cls.samples)),
            tolerance=float(sampling.get("tolerance", cls.tolerance)),
            targets=targets,
        )

    @classmethod
    def from_file(cls, path: Path | str) -> "TrainerConfig":
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        return cls.from_mapping(data)


def load_config_from_env() -> TrainerConfig:
    """Load the configured YAML file, or defaults when it does not exist."""
    config_path = Path(os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        logger.debug("no config at %s, using defaults", config_path)
        return TrainerConfig()
    logger.debug("loading config from %s", config_path)
    return TrainerConfig.from_file(config_path)


__all__ = [
    "TrainerConfig",
    "load_config_from_env",
    "check_difficulty",
    "DIFFICULTIES",
    "DEFAULT_TARGETS",
    "CONFIG_ENV_VAR",
]
