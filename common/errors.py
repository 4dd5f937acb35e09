"""
Error taxonomy shared by every engine.

Parsers raise ExpressionSyntaxError, exact arithmetic raises DomainError.
Both derive from TrainerError so task checkers and the CLI can recover
from any engine failure with a single except clause.
"""

from __future__ import annotations

from typing import Optional


class TrainerError(Exception):
    """Base class for all recoverable engine errors."""


class ExpressionSyntaxError(TrainerError, ValueError):
    """Input text does not match the grammar it was parsed with."""

    def __init__(self, message: str, position: Optional[int] = None, source: Optional[str] = None):
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self._render())

    def _render(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class DomainError(TrainerError, ArithmeticError):
    """Arithmetic left its domain: zero denominator, zero divisor, negative radicand."""


__all__ = ["TrainerError", "ExpressionSyntaxError", "DomainError"]
