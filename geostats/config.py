"""Runtime settings read from the environment.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory. Empty variables fall back to the defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from geostats.core.catalog import Language

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_FACT_TIMEOUT = 10.0


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_path(name: str, default: Path) -> Path:
    raw = _env(name)
    return Path(raw).expanduser() if raw else default


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_language(name: str, default: Language) -> Language:
    raw = _env(name).lower()
    try:
        return Language(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str
    fact_timeout: float
    home_dir: Path
    language: Language
    log_level: str

    @property
    def progress_file(self) -> Path:
        return self.home_dir / "progress.json"

    @classmethod
    def from_env(cls, *, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        return cls(
            api_key=_env("GEMINI_API_KEY") or _env("API_KEY") or None,
            model=_env("GEOSTATS_GEMINI_MODEL") or DEFAULT_MODEL,
            fact_timeout=_env_float("GEOSTATS_FACT_TIMEOUT", DEFAULT_FACT_TIMEOUT),
            home_dir=_env_path("GEOSTATS_HOME", Path.home() / ".geostats"),
            language=_env_language("GEOSTATS_LANGUAGE", Language.PT),
            log_level=(_env("GEOSTATS_LOG_LEVEL") or "INFO").upper(),
        )
