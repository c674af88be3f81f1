"""Shared fixtures: a small on-disk catalog and the packaged translations."""

from __future__ import annotations

import copy
import random
from pathlib import Path
from typing import Dict

import pytest
import yaml

from geostats.core.catalog import CountryCatalog, CountryRecord
from geostats.core.translations import TranslationTable

SAMPLE_COUNTRIES = [
    {
        "name": "Brasil",
        "name_en": "Brazil",
        "flag": "🇧🇷",
        "population": 216422446,
        "hdi": 0.760,
        "homicide_rate": 22.4,
        "continent": "América do Sul",
        "continent_en": "South America",
        "language": "Português",
        "language_en": "Portuguese",
        "famous_player": "Pelé",
        "independence_year": "1822",
    },
    {
        "name": "México",
        "name_en": "Mexico",
        "flag": "🇲🇽",
        "population": 128455567,
        "hdi": 0.781,
        "homicide_rate": 28.2,
        "continent": "América do Norte",
        "continent_en": "North America",
        "language": "Espanhol",
        "language_en": "Spanish",
        "famous_player": "Hugo Sánchez",
        "independence_year": "1821",
    },
    {
        "name": "Japão",
        "name_en": "Japan",
        "flag": "🇯🇵",
        "population": 124516650,
        "hdi": 0.920,
        "homicide_rate": 0.2,
        "continent": "Ásia",
        "continent_en": "Asia",
        "language": "Japonês",
        "language_en": "Japanese",
        "famous_player": "Hidetoshi Nakata",
        "independence_year": "660 a.C.",
        "independence_year_en": "660 BC",
    },
]


def _write_catalog(path: Path, countries: list[dict]) -> Path:
    path.write_text(yaml.dump({"countries": countries}, allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture()
def catalog(tmp_path: Path) -> CountryCatalog:
    return CountryCatalog(_write_catalog(tmp_path / "countries.yaml", SAMPLE_COUNTRIES))


@pytest.fixture()
def countries(catalog: CountryCatalog) -> Dict[str, CountryRecord]:
    """Sample records by canonical name."""
    return {c.key: c for c in catalog}


@pytest.fixture()
def single_catalog(tmp_path: Path) -> CountryCatalog:
    """Catalog with only Brasil, so the pool runs out after one round."""
    return CountryCatalog(_write_catalog(tmp_path / "single.yaml", SAMPLE_COUNTRIES[:1]))


@pytest.fixture()
def sample_countries() -> list[dict]:
    return copy.deepcopy(SAMPLE_COUNTRIES)


@pytest.fixture()
def write_catalog():
    """Writes a list of country dicts as a catalog file and returns its path."""
    return _write_catalog


@pytest.fixture(scope="session")
def labels() -> TranslationTable:
    return TranslationTable()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)
