from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from geostats.core.catalog import CountryRecord, Language, localize

MAX_HINTS = 3


class Labels(Protocol):
    def text(self, language: Language, key: str) -> str: ...


@dataclass(frozen=True)
class Hint:
    category: str
    text: str


def build_hints(country: CountryRecord, language: Language, labels: Labels) -> List[Hint]:
    """All hint categories for *country*: continent, spoken language, notable person."""
    return [
        Hint("continent", f"{labels.text(language, 'hints.continent')}: {localize(country.continent, language)}"),
        Hint("language", f"{labels.text(language, 'hints.language')}: {localize(country.language, language)}"),
        Hint("celebrity", f"{labels.text(language, 'hints.celebrity')}: {country.famous_player}"),
    ]


def next_hint(
    country: CountryRecord,
    language: Language,
    revealed: Sequence[str],
    labels: Labels,
    rng: random.Random,
) -> Optional[Hint]:
    """Pick a random hint whose text is not yet revealed, or None when none is left."""
    if len(revealed) >= MAX_HINTS:
        return None
    available = [h for h in build_hints(country, language, labels) if h.text not in revealed]
    if not available:
        return None
    return rng.choice(available)
