"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from geostats.core.leaderboard import HighScoreEntry

_MEDALS = ("🥇", "🥈", "🥉")


@dataclass
class LeaderboardRow:
    """One rendered leaderboard line: rank marker plus the entry it shows."""

    position: str
    entry: HighScoreEntry
    highlighted: bool = False


def leaderboard_rows(entries: Sequence[HighScoreEntry]) -> List[LeaderboardRow]:
    rows: List[LeaderboardRow] = []
    for index, entry in enumerate(entries):
        position = _MEDALS[index] if index < len(_MEDALS) else f"#{index + 1}"
        rows.append(LeaderboardRow(position=position, entry=entry, highlighted=entry.is_user))
    return rows
