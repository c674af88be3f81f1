"""Display values for the four statistics shown each round."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from geostats.core.catalog import CountryRecord, Language, localize
from geostats.core.hints import Labels


@dataclass(frozen=True)
class Statistic:
    key: str
    label: str
    value: str


def format_population(population: int, language: Language, labels: Labels) -> str:
    if population >= 1_000_000_000:
        return f"{population / 1_000_000_000:.2f} {labels.text(language, 'units.billion')}"
    if population >= 1_000_000:
        return f"{population / 1_000_000:.1f} {labels.text(language, 'units.million')}"
    grouped = f"{population:,}"
    # Portuguese groups thousands with dots.
    return grouped.replace(",", ".") if language is Language.PT else grouped


def country_statistics(country: CountryRecord, language: Language, labels: Labels) -> List[Statistic]:
    return [
        Statistic("POPULATION", labels.text(language, "stats.POPULATION"),
                  format_population(country.population, language, labels)),
        Statistic("HDI", labels.text(language, "stats.HDI"), f"{country.hdi:.3f}"),
        Statistic("HOMICIDE", labels.text(language, "stats.HOMICIDE"), f"{country.homicide_rate:g}"),
        Statistic("INDEPENDENCE", labels.text(language, "stats.INDEPENDENCE"),
                  localize(country.independence_year, language)),
    ]
