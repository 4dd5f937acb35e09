"""
Live-typing symbol normalization.

ASCII digraphs and keywords typed by the learner are rewritten to the
symbols the parsers understand (``->`` to ``⇒``, ``cap`` to ``∩``, ``!`` to
``¬`` and so on). The caret position is carried through every
substitution so an editor can restore it after rewriting the field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# (keyword, replacement); checked in order, matched case-insensitively.
_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("forall", "∀"),
    ("exists", "∃"),
    ("sqrt", "√"),
    ("deg", "°"),
)

_LATE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("union", "∪"),
    ("delta", "Δ"),
    ("empty", "∅"),
    ("omega", "Ω"),
    ("infty", "∞"),
    ("inf", "∞"),
    ("intersect", "∩"),
)

_SINGLE_CHARS = {
    "!": "¬",
    "&": "∧",
    "|": "∨",
    "\\": "∖",
    "'": "^c",
}

_LETTER = re.compile(r"[A-Za-z]")
_SET_LEFT = re.compile(r"[A-C)\]]")
_SET_RIGHT = re.compile(r"[A-CΩ∅U(]")
_UNION_LEFT = re.compile(r"[A-Za-z0-9)\]]")
_UNION_RIGHT = re.compile(r"[A-Za-z0-9(∅Ω]")


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    value: str
    cursor: int


def _is_letter(ch: Optional[str]) -> bool:
    return bool(ch) and bool(_LETTER.match(ch))


def _neighbour(raw: str, i: int, step: int) -> str:
    """Nearest non-whitespace character from ``i`` in direction ``step``."""
    j = i + step
    while 0 <= j < len(raw) and raw[j].isspace():
        j += step
    return raw[j] if 0 <= j < len(raw) else ""


def normalize_with_cursor(raw: str, cursor: int) -> NormalizationResult:
    """
    Rewrite ``raw`` into parser symbols and move ``cursor`` accordingly.

    A substitution that consumes ``c`` characters and writes ``r`` shifts the
    cursor by ``r - c`` when it starts before the original cursor. The final
    cursor is clamped into ``[0, len(value)]``.
    """
    out: List[str] = []
    new_cursor = cursor
    lower = raw.lower()
    i = 0

    def replace(replacement: str, consumed: int) -> None:
        nonlocal i, new_cursor
        out.append(replacement)
        if i < cursor:
            new_cursor += len(replacement) - consumed
        i += consumed

    while i < len(raw):
        matched = next(((kw, rep) for kw, rep in _KEYWORDS if lower.startswith(kw, i)), None)
        if matched:
            replace(matched[1], len(matched[0]))
            continue

        if lower.startswith("in", i):
            before = raw[i - 1] if i > 0 else None
            after = raw[i + 2] if i + 2 < len(raw) else None
            if not _is_letter(before) and not _is_letter(after):
                replace("∈", 2)
                continue

        if raw.startswith("<->", i):
            replace("⇔", 3)
            continue
        if raw.startswith("->", i):
            replace("⇒", 2)
            continue

        ahead3 = lower[i:i + 3]
        if ahead3 in ("cup", "cap") and not _is_letter(raw[i + 3] if i + 3 < len(raw) else None):
            replace("∪" if ahead3 == "cup" else "∩", 3)
            continue

        matched = next(((kw, rep) for kw, rep in _LATE_KEYWORDS if lower.startswith(kw, i)), None)
        if matched:
            replace(matched[1], len(matched[0]))
            continue

        ch = raw[i]
        if ch in _SINGLE_CHARS:
            replace(_SINGLE_CHARS[ch], 1)
            continue

        if ch == "-":
            prev_ch = _neighbour(raw, i, -1)
            next_ch = _neighbour(raw, i, 1)
            if prev_ch and next_ch and _SET_LEFT.match(prev_ch) and _SET_RIGHT.match(next_ch):
                replace("∖", 1)
                continue

        if ch == "U":
            prev_ch = _neighbour(raw, i, -1)
            next_ch = _neighbour(raw, i, 1)
            if prev_ch and next_ch and _UNION_LEFT.match(prev_ch) and _UNION_RIGHT.match(next_ch):
                replace("∪", 1)
                continue
            following = raw[i + 1] if i + 1 < len(raw) else ""
            if not following or following.isspace() or following in "()":
                replace("Ω", 1)
                continue

        out.append(ch)
        i += 1

    value = "".join(out)
    return NormalizationResult(value=value, cursor=max(0, min(len(value), new_cursor)))


def normalize_symbols(raw: str) -> str:
    """Normalize without tracking a cursor."""
    return normalize_with_cursor(raw, len(raw)).value


__all__ = ["NormalizationResult", "normalize_with_cursor", "normalize_symbols"]
