"""Round/session state machine.

Every transition is a pure function taking the current :class:`Session` and
returning a :class:`Transition`: the replacement session plus the side effects
the caller must run (persist the score, fetch a fun fact, flash the error
feedback). Transitions that are not valid in the current status return the
session unchanged with no effects.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

from geostats.core.catalog import CountryCatalog, CountryRecord, Language, localize
from geostats.core.hints import MAX_HINTS, Labels, next_hint
from geostats.core.matching import matches

logger = logging.getLogger(__name__)

REWARD = 100
DIFFICULTY_LIVES = {"easy": 10, "medium": 5, "hard": 3}


class Status(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    SUCCESS = "success"
    GAMEOVER = "gameover"
    LEADERBOARD = "leaderboard"


@dataclass(frozen=True, eq=False)
class FactRequest:
    """Snapshot of the round a fun-fact fetch was launched for.

    Compared by identity: a result is applied only while this exact request is
    still the session's pending one.
    """

    country: CountryRecord
    language: Language


@dataclass(frozen=True)
class PersistScore:
    score: int


@dataclass(frozen=True)
class FetchFact:
    request: FactRequest


@dataclass(frozen=True)
class ShowError:
    pass


Effect = Union[PersistScore, FetchFact, ShowError]


@dataclass(frozen=True)
class Session:
    status: Status = Status.MENU
    score: int = 0
    lives: int = 5
    max_lives: int = 5
    current_country: Optional[CountryRecord] = None
    history: Tuple[str, ...] = ()
    round_errors: int = 0
    hints_revealed: Tuple[str, ...] = ()
    language: Language = Language.PT
    fact: Optional[str] = None
    pending_fact: Optional[FactRequest] = field(default=None, compare=False)

    @property
    def current_name(self) -> Optional[str]:
        """Name of the current country in the display language."""
        if self.current_country is None:
            return None
        return localize(self.current_country.name, self.language)

    @property
    def can_hint(self) -> bool:
        return (
            self.status is Status.PLAYING
            and self.current_country is not None
            and self.lives > 1
            and len(self.hints_revealed) < MAX_HINTS
        )


@dataclass(frozen=True)
class Transition:
    session: Session
    effects: Tuple[Effect, ...] = ()


def _unchanged(session: Session) -> Transition:
    return Transition(session)


def start_game(session: Session, max_lives: int, catalog: CountryCatalog, rng: random.Random) -> Transition:
    """Begin a fresh session with *max_lives* lives, keeping the display language.

    Only valid from the menu or as a restart after game over.
    """
    if session.status not in (Status.MENU, Status.GAMEOVER):
        return _unchanged(session)
    country = catalog.pick((), rng)
    new = Session(
        status=Status.PLAYING,
        score=0,
        lives=max_lives,
        max_lives=max_lives,
        current_country=country,
        history=(country.key,) if country else (),
        round_errors=0,
        hints_revealed=(),
        language=session.language,
    )
    logger.info("Game started with %d lives", max_lives)
    return Transition(new)


def guess(session: Session, text: str) -> Transition:
    if session.status is not Status.PLAYING or session.current_country is None:
        return _unchanged(session)

    if matches(text, session.current_name or ""):
        request = FactRequest(country=session.current_country, language=session.language)
        new = replace(
            session,
            status=Status.SUCCESS,
            score=session.score + REWARD,
            fact=None,
            pending_fact=request,
        )
        return Transition(new, (FetchFact(request),))

    lives = session.lives - 1
    if lives <= 0:
        new = replace(session, lives=0, round_errors=session.round_errors + 1, status=Status.GAMEOVER)
        logger.info("Game over with score %d", new.score)
        return Transition(new, (ShowError(), PersistScore(new.score)))

    new = replace(session, lives=lives, round_errors=session.round_errors + 1)
    return Transition(new, (ShowError(),))


def next_round(session: Session, catalog: CountryCatalog, rng: random.Random) -> Transition:
    if session.status is not Status.SUCCESS:
        return _unchanged(session)

    country = catalog.pick(session.history, rng)
    if country is None:
        # The last solved country stays current so the game-over view can show it.
        new = replace(session, status=Status.GAMEOVER, pending_fact=None)
        logger.info("Catalog exhausted, game over with score %d", new.score)
        return Transition(new, (PersistScore(new.score),))

    new = replace(
        session,
        status=Status.PLAYING,
        current_country=country,
        history=session.history + (country.key,),
        round_errors=0,
        hints_revealed=(),
        fact=None,
        pending_fact=None,
    )
    return Transition(new)


def request_hint(session: Session, labels: Labels, rng: random.Random) -> Transition:
    if not session.can_hint:
        return _unchanged(session)
    hint = next_hint(session.current_country, session.language, session.hints_revealed, labels, rng)
    if hint is None:
        return _unchanged(session)
    new = replace(
        session,
        lives=session.lives - 1,
        hints_revealed=session.hints_revealed + (hint.text,),
    )
    return Transition(new)


def toggle_language(session: Session) -> Transition:
    return Transition(replace(session, language=session.language.toggled()))


def go_to_leaderboard(session: Session) -> Transition:
    return Transition(replace(session, status=Status.LEADERBOARD))


def return_to_menu(session: Session) -> Transition:
    return Transition(replace(session, status=Status.MENU))


def advance(session: Session, catalog: CountryCatalog, rng: random.Random) -> Transition:
    """Contextual confirm key: next round, restart, or back to the menu."""
    if session.status is Status.SUCCESS:
        return next_round(session, catalog, rng)
    if session.status is Status.GAMEOVER:
        return start_game(session, session.max_lives, catalog, rng)
    if session.status is Status.LEADERBOARD:
        return return_to_menu(session)
    return _unchanged(session)


def resolve_fact(session: Session, request: FactRequest, text: str) -> Session:
    """Apply a fetched fact if *request* still belongs to the current round."""
    if session.pending_fact is not request:
        return session
    return replace(session, fact=text, pending_fact=None)
