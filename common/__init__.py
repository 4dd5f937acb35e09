"""Shared building blocks: errors, exact rationals, the seeded LCG, arithmetic expressions, configuration."""

from common.errors import DomainError, ExpressionSyntaxError, TrainerError
from common.rational import Rational, parse_rational, rational_to_string
from common.prng import Lcg, random_seed
from common.expr import evaluate, expressions_equivalent, parse_expression
from common.config import DIFFICULTIES, TrainerConfig, check_difficulty, load_config_from_env

__all__ = [
    "TrainerError",
    "ExpressionSyntaxError",
    "DomainError",
    "Rational",
    "parse_rational",
    "rational_to_string",
    "Lcg",
    "random_seed",
    "parse_expression",
    "evaluate",
    "expressions_equivalent",
    "TrainerConfig",
    "load_config_from_env",
    "check_difficulty",
    "DIFFICULTIES",
]
