"""Helpers for reading free-text learner answers."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

TRUE_WORDS = frozenset({"true", "yes", "wahr", "ja", "richtig"})
FALSE_WORDS = frozenset({"false", "no", "falsch", "nein"})


def compact(text: str) -> str:
    """Lowercase with all whitespace removed."""
    return re.sub(r"\s+", "", text).lower()


def parse_bool_answer(text: str) -> Optional[bool]:
    word = compact(text)
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    return None


def split_answers(text: str, separator: str = ";") -> List[str]:
    return [part.strip() for part in text.split(separator) if part.strip()]


def parse_choice(text: str, letters: Sequence[str]) -> Optional[str]:
    """First letter of the answer when it names one of ``letters``."""
    head = text.strip()[:1].upper()
    return head if head and head in letters else None


__all__ = ["TRUE_WORDS", "FALSE_WORDS", "compact", "parse_bool_answer", "split_answers", "parse_choice"]
