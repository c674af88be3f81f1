from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml

from geostats.core.catalog import Language


def _flatten(prefix: str, value: object, out: Dict[str, str], where: str) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _flatten(f"{prefix}.{key}" if prefix else str(key), child, out, where)
        return
    if value is None:
        raise ValueError(f"{where}: missing text for '{prefix}'")
    out[prefix] = str(value)


class TranslationTable:
    """pt/en UI strings looked up by dotted key (``hints.continent``)."""

    def __init__(self, data_file: Optional[Path] = None) -> None:
        self._data_file = data_file or Path(__file__).resolve().parent.parent / "data" / "translations.yaml"
        self._tables = self._load()

    def text(self, language: Language, key: str) -> str:
        return self._tables[language][key]

    def keys(self) -> set[str]:
        return set(self._tables[Language.PT])

    def _load(self) -> Dict[Language, Dict[str, str]]:
        if not self._data_file.exists():
            raise FileNotFoundError(f"Translations file not found: {self._data_file}")
        raw = yaml.safe_load(self._data_file.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._data_file.name}: expected YAML with 'pt' and 'en' tables")

        tables: Dict[Language, Dict[str, str]] = {}
        for language in Language:
            section = raw.get(language.value)
            if not isinstance(section, dict):
                raise ValueError(f"{self._data_file.name}: missing '{language.value}' table")
            flat: Dict[str, str] = {}
            _flatten("", section, flat, self._data_file.name)
            tables[language] = flat

        missing = set(tables[Language.PT]) ^ set(tables[Language.EN])
        if missing:
            raise ValueError(f"{self._data_file.name}: keys differ between languages: {sorted(missing)}")
        return tables
