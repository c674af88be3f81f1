from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "geoStatsHighScore"


class ScoreStore:
    """Stores the player's best score. Persists to disk across app restarts.
    File: ~/.geostats/progress.json unless another path is given."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".geostats" / "progress.json"
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create %s: %s", self._file_path.parent, e)
        self._best = self._load()

    def get_best(self) -> Optional[int]:
        """Return the stored best score, or None if nothing was recorded yet."""
        return self._best

    def set_best(self, score: int) -> bool:
        """Record *score* if it beats the stored best. Returns True when it was stored."""
        if self._best is not None and score <= self._best:
            return False
        self._best = int(score)
        self._save()
        return True

    def _load(self) -> Optional[int]:
        if not self._file_path.exists():
            return None
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load best score from %s: %s", self._file_path, e)
            return None
        if not isinstance(payload, dict):
            return None
        value = payload.get(BEST_SCORE_KEY)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid best score %r in %s", value, self._file_path)
            return None

    def _save(self) -> None:
        payload = {BEST_SCORE_KEY: str(self._best)}
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save best score to %s: %s", self._file_path, e)
