from __future__ import annotations

import datetime
import logging
import random
from typing import Callable, List, Optional

from geostats.core import session as sm
from geostats.core.catalog import CountryCatalog, Language
from geostats.core.hints import Labels
from geostats.core.leaderboard import HighScoreEntry, build_leaderboard
from geostats.core.progress import ScoreStore
from geostats.core.session import FactRequest, FetchFact, PersistScore, Session, Transition
from geostats.core.stats import Statistic, country_statistics

logger = logging.getLogger(__name__)

FactLauncher = Callable[[FactRequest], None]


class GameController:
    """Owns the live session and runs the side effects of each transition.

    The fact launcher starts a background fetch and must eventually hand the
    result back through :meth:`fact_ready` on the controlling thread.
    """

    def __init__(
        self,
        catalog: CountryCatalog,
        labels: Labels,
        store: ScoreStore,
        launch_fact: FactLauncher,
        rng: Optional[random.Random] = None,
        language: Language = Language.PT,
    ) -> None:
        self._catalog = catalog
        self._labels = labels
        self._store = store
        self._launch_fact = launch_fact
        self._rng = rng or random.Random()
        self._session = Session(language=language)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def labels(self) -> Labels:
        return self._labels

    def text(self, key: str) -> str:
        return self._labels.text(self._session.language, key)

    def start(self, max_lives: int) -> Transition:
        return self._apply(sm.start_game(self._session, max_lives, self._catalog, self._rng))

    def submit_guess(self, text: str) -> Transition:
        return self._apply(sm.guess(self._session, text))

    def request_hint(self) -> Transition:
        return self._apply(sm.request_hint(self._session, self._labels, self._rng))

    def next_round(self) -> Transition:
        return self._apply(sm.next_round(self._session, self._catalog, self._rng))

    def advance(self) -> Transition:
        return self._apply(sm.advance(self._session, self._catalog, self._rng))

    def toggle_language(self) -> Transition:
        return self._apply(sm.toggle_language(self._session))

    def show_leaderboard(self) -> Transition:
        return self._apply(sm.go_to_leaderboard(self._session))

    def back_to_menu(self) -> Transition:
        return self._apply(sm.return_to_menu(self._session))

    def fact_ready(self, request: FactRequest, text: str) -> bool:
        """Apply a fetched fact. Returns False when the result was stale and dropped."""
        updated = sm.resolve_fact(self._session, request, text)
        if updated is self._session:
            logger.debug("Dropping stale fun fact for %s", request.country.key)
            return False
        self._session = updated
        return True

    def country_names(self) -> List[str]:
        """All country names in the display language, for suggestions."""
        return self._catalog.names(self._session.language)

    def statistics(self) -> List[Statistic]:
        country = self._session.current_country
        if country is None:
            return []
        return country_statistics(country, self._session.language, self._labels)

    def leaderboard(self, today: Optional[datetime.date] = None) -> List[HighScoreEntry]:
        return build_leaderboard(self._store.get_best(), self.text("you"), today)

    def _apply(self, transition: Transition) -> Transition:
        self._session = transition.session
        for effect in transition.effects:
            if isinstance(effect, PersistScore):
                self._persist(effect.score)
            elif isinstance(effect, FetchFact):
                self._launch_fact(effect.request)
        return transition

    def _persist(self, score: int) -> None:
        if self._store.set_best(score):
            logger.info("New best score: %d", score)
