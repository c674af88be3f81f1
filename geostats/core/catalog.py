from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml


class Language(str, Enum):
    PT = "pt"
    EN = "en"

    def toggled(self) -> "Language":
        return Language.EN if self is Language.PT else Language.PT


@dataclass(frozen=True)
class Localized:
    """A display value in both supported languages."""

    pt: str
    en: str


def localize(pair: Localized, language: Language) -> str:
    """Return the side of *pair* for *language*."""
    return pair.en if language is Language.EN else pair.pt


@dataclass(frozen=True)
class CountryRecord:
    name: Localized
    flag: str
    population: int
    hdi: float
    homicide_rate: float
    continent: Localized
    language: Localized
    famous_player: str
    independence_year: Localized

    @property
    def key(self) -> str:
        """Canonical (Portuguese) name, unique across the catalog."""
        return self.name.pt


_REQUIRED_TEXT = (
    "name",
    "name_en",
    "continent",
    "continent_en",
    "language",
    "language_en",
    "famous_player",
    "independence_year",
)


def _default_data_file() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "countries.yaml"


class CountryCatalog:
    """Read-only catalog of country records loaded from YAML."""

    def __init__(self, data_file: Optional[Path] = None) -> None:
        self._data_file = data_file or _default_data_file()
        self._countries = self._load_countries()

    def __len__(self) -> int:
        return len(self._countries)

    def __iter__(self):
        return iter(self._countries.values())

    def names(self, language: Language) -> List[str]:
        """Country names in *language*, in catalog order."""
        return [localize(c.name, language) for c in self]

    def available(self, history: Iterable[str]) -> List[CountryRecord]:
        """Countries whose canonical name is not in *history*."""
        seen = set(history)
        return [c for c in self if c.key not in seen]

    def pick(self, history: Iterable[str], rng: random.Random) -> Optional[CountryRecord]:
        """Pick a random unseen country, or None when every country was presented."""
        candidates = self.available(history)
        if not candidates:
            return None
        return rng.choice(candidates)

    def _load_countries(self) -> Dict[str, CountryRecord]:
        if not self._data_file.exists():
            raise FileNotFoundError(f"Country catalog not found: {self._data_file}")

        raw = yaml.safe_load(self._data_file.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._data_file.name}: expected YAML with a 'countries' list")
        entries = raw.get("countries")
        if not isinstance(entries, list) or not entries:
            raise ValueError(f"{self._data_file.name}: 'countries' must be a non-empty list")

        countries: Dict[str, CountryRecord] = {}
        for index, entry in enumerate(entries):
            record = _parse_country(entry, f"{self._data_file.name}[{index}]")
            if record.key in countries:
                raise ValueError(f"{self._data_file.name}: duplicate country name {record.key!r}")
            countries[record.key] = record
        return countries


def _parse_country(entry: object, where: str) -> CountryRecord:
    if not isinstance(entry, dict):
        raise ValueError(f"{where}: expected a mapping")
    for field in _REQUIRED_TEXT:
        value = entry.get(field)
        if value is None or not str(value).strip():
            raise ValueError(f"{where}: missing or invalid '{field}'")
    try:
        population = int(entry["population"])
        hdi = float(entry["hdi"])
        homicide_rate = float(entry["homicide_rate"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"{where}: invalid numeric field ({e})") from e
    if not 0.0 <= hdi <= 1.0:
        raise ValueError(f"{where}: 'hdi' must be within [0, 1]")
    if population < 0 or homicide_rate < 0:
        raise ValueError(f"{where}: 'population' and 'homicide_rate' must be non-negative")

    year = str(entry["independence_year"]).strip()
    year_en = str(entry.get("independence_year_en") or "").strip() or year
    return CountryRecord(
        name=Localized(str(entry["name"]).strip(), str(entry["name_en"]).strip()),
        flag=str(entry.get("flag") or "").strip(),
        population=population,
        hdi=hdi,
        homicide_rate=homicide_rate,
        continent=Localized(str(entry["continent"]).strip(), str(entry["continent_en"]).strip()),
        language=Localized(str(entry["language"]).strip(), str(entry["language_en"]).strip()),
        famous_player=str(entry["famous_player"]).strip(),
        independence_year=Localized(year, year_en),
    )
