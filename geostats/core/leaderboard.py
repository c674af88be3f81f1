from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import List, Optional, Sequence

LEADERBOARD_SIZE = 10


@dataclass(frozen=True)
class HighScoreEntry:
    name: str
    score: int
    date: str
    is_user: bool = False


REFERENCE_SCORES: tuple[HighScoreEntry, ...] = (
    HighScoreEntry("GeoMaster_99", 2500, "2024-05-10"),
    HighScoreEntry("AtlasHunter", 1800, "2024-05-11"),
    HighScoreEntry("MapaMundi", 1200, "2024-05-12"),
    HighScoreEntry("ExplorerBR", 900, "2024-05-09"),
    HighScoreEntry("VascoDaGama", 600, "2024-05-08"),
)


def build_leaderboard(
    best_score: Optional[int],
    player_label: str,
    today: Optional[datetime.date] = None,
    reference: Sequence[HighScoreEntry] = REFERENCE_SCORES,
) -> List[HighScoreEntry]:
    """Merge the player's best score into the reference list and keep the top entries.

    Sorting is stable, so equal scores keep their insertion order and the
    player's entry ranks after reference entries with the same score.
    """
    entries = list(reference)
    if best_score is not None:
        day = (today or datetime.date.today()).isoformat()
        entries.append(HighScoreEntry(player_label, int(best_score), day, is_user=True))
    entries.sort(key=lambda e: e.score, reverse=True)
    return entries[:LEADERBOARD_SIZE]
