"""Accent and case-insensitive guess matching."""

from __future__ import annotations

import unicodedata
from typing import Iterable, List, Optional


def normalize(text: str) -> str:
    """Decompose *text*, drop combining marks and lower-case it."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def matches(guess: str, target: str) -> bool:
    return normalize(guess) == normalize(target)


def suggestions(text: str, names: Iterable[str]) -> List[str]:
    """Sorted names containing *text* once both are normalized."""
    if not text:
        return []
    needle = normalize(text)
    return sorted(name for name in names if needle in normalize(name))


def resolve_guess(text: str, names: Iterable[str]) -> Optional[str]:
    """Resolve free text to a name on confirm.

    An exact normalized match wins; otherwise the input resolves only when it
    narrows the candidates down to a single suggestion.
    """
    names = list(names)
    needle = normalize(text)
    for name in names:
        if normalize(name) == needle:
            return name
    remaining = suggestions(text, names)
    if len(remaining) == 1:
        return remaining[0]
    return None
