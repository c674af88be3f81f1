"""Tests for geostats.core.session – the round/session state machine."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import List, Optional

import pytest

from geostats.core import session as sm
from geostats.core.catalog import CountryCatalog, CountryRecord, Language
from geostats.core.hints import MAX_HINTS
from geostats.core.session import (
    REWARD,
    FetchFact,
    PersistScore,
    Session,
    ShowError,
    Status,
)
from geostats.core.translations import TranslationTable

WRONG = "Atlantis"


class _EmptyCatalog:
    """Catalog stand-in whose pool is always exhausted."""

    def pick(self, history, rng) -> Optional[CountryRecord]:
        return None


def _started(catalog: CountryCatalog, rng: random.Random, lives: int = 5, **fields) -> Session:
    session = sm.start_game(Session(**fields), lives, catalog, rng).session
    assert session.status is Status.PLAYING
    return session


# ---------------------------------------------------------------------------
# start_game
# ---------------------------------------------------------------------------

class TestStartGame:
    def test_initial_fields(self, catalog: CountryCatalog, rng: random.Random):
        t = sm.start_game(Session(), 3, catalog, rng)
        s = t.session
        assert s.status is Status.PLAYING
        assert s.score == 0
        assert s.lives == 3
        assert s.max_lives == 3
        assert s.current_country is not None
        assert s.history == (s.current_country.key,)
        assert s.round_errors == 0
        assert s.hints_revealed == ()
        assert s.fact is None
        assert s.pending_fact is None
        assert t.effects == ()

    def test_keeps_language(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng, language=Language.EN)
        assert s.language is Language.EN

    def test_restart_from_gameover_resets(self, catalog: CountryCatalog, rng: random.Random):
        old = replace(_started(catalog, rng), status=Status.GAMEOVER, score=700, lives=0)
        s = sm.start_game(old, 5, catalog, rng).session
        assert s.score == 0
        assert s.lives == 5
        assert len(s.history) == 1

    def test_empty_catalog_leaves_history_empty(self, rng: random.Random):
        s = sm.start_game(Session(), 5, _EmptyCatalog(), rng).session
        assert s.current_country is None
        assert s.history == ()

    @pytest.mark.parametrize("status", [Status.PLAYING, Status.SUCCESS, Status.LEADERBOARD])
    def test_ignored_mid_session(self, catalog: CountryCatalog, rng: random.Random, status: Status):
        s = _started(catalog, rng, lives=3)
        s = replace(sm.guess(s, s.current_name).session, status=status)
        t = sm.start_game(s, 5, catalog, rng)
        assert t.session is s
        assert t.effects == ()
        assert t.session.score == REWARD

    def test_allowed_from_menu_after_leaderboard(self, catalog: CountryCatalog, rng: random.Random):
        s = sm.return_to_menu(sm.go_to_leaderboard(Session()).session).session
        assert sm.start_game(s, 3, catalog, rng).session.status is Status.PLAYING

    def test_difficulty_presets(self):
        assert sm.DIFFICULTY_LIVES == {"easy": 10, "medium": 5, "hard": 3}


# ---------------------------------------------------------------------------
# guess
# ---------------------------------------------------------------------------

class TestGuess:
    def test_correct_guess_scenario(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng, lives=3)
        t = sm.guess(s, s.current_name.upper())
        assert t.session.status is Status.SUCCESS
        assert t.session.score == REWARD
        assert t.session.lives == 3

    def test_accent_free_guess(self, catalog: CountryCatalog, countries, rng: random.Random):
        s = replace(_started(catalog, rng), current_country=countries["Japão"])
        assert sm.guess(s, "japao").session.status is Status.SUCCESS

    def test_correct_guess_launches_fact(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        t = sm.guess(s, s.current_name)
        assert len(t.effects) == 1
        effect = t.effects[0]
        assert isinstance(effect, FetchFact)
        assert effect.request is t.session.pending_fact
        assert effect.request.country is s.current_country
        assert effect.request.language is s.language
        assert t.session.fact is None

    def test_reward_is_fixed(self, catalog: CountryCatalog, rng: random.Random):
        s = replace(_started(catalog, rng, lives=5), lives=1, round_errors=4, hints_revealed=("x",))
        assert sm.guess(s, s.current_name).session.score == REWARD

    def test_cross_language_name_is_a_miss(self, catalog: CountryCatalog, countries, rng: random.Random):
        s = replace(_started(catalog, rng), current_country=countries["Brasil"])
        assert sm.guess(s, "Brazil").session.status is Status.PLAYING
        english = replace(s, language=Language.EN)
        assert sm.guess(english, "Brazil").session.status is Status.SUCCESS
        assert sm.guess(english, "Brasil").session.status is Status.PLAYING

    def test_wrong_guess_costs_a_life(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng, lives=3)
        t = sm.guess(s, WRONG)
        assert t.session.status is Status.PLAYING
        assert t.session.lives == 2
        assert t.session.round_errors == 1
        assert t.effects == (ShowError(),)

    def test_last_life_ends_game(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng, lives=1)
        t = sm.guess(s, WRONG)
        assert t.session.status is Status.GAMEOVER
        assert t.session.lives == 0
        assert PersistScore(0) in t.effects
        assert t.session.current_country is s.current_country

    def test_ignored_when_gameover(self, catalog: CountryCatalog, rng: random.Random):
        s = replace(_started(catalog, rng), status=Status.GAMEOVER)
        t = sm.guess(s, s.current_name)
        assert t.session is s
        assert t.effects == ()

    @pytest.mark.parametrize("status", [Status.MENU, Status.SUCCESS, Status.LEADERBOARD])
    def test_ignored_outside_playing(self, catalog: CountryCatalog, rng: random.Random, status: Status):
        s = replace(_started(catalog, rng), status=status)
        assert sm.guess(s, "anything").session is s

    def test_ignored_without_country(self):
        s = Session(status=Status.PLAYING)
        assert sm.guess(s, "Brasil").session is s


# ---------------------------------------------------------------------------
# next_round
# ---------------------------------------------------------------------------

class TestNextRound:
    def test_moves_to_unseen_country(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        solved = sm.guess(s, s.current_name).session
        t = sm.next_round(solved, catalog, rng)
        n = t.session
        assert n.status is Status.PLAYING
        assert n.current_country.key not in s.history
        assert n.history == s.history + (n.current_country.key,)
        assert n.score == REWARD
        assert t.effects == ()

    def test_resets_round_state(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = replace(sm.guess(s, s.current_name).session, round_errors=2, hints_revealed=("a",), fact="fun")
        n = sm.next_round(s, catalog, rng).session
        assert n.round_errors == 0
        assert n.hints_revealed == ()
        assert n.fact is None
        assert n.pending_fact is None

    def test_exhausted_pool_ends_game(self, single_catalog: CountryCatalog, rng: random.Random):
        s = _started(single_catalog, rng)
        solved = sm.guess(s, s.current_name).session
        t = sm.next_round(solved, single_catalog, rng)
        assert t.session.status is Status.GAMEOVER
        assert t.session.current_country is solved.current_country
        assert t.effects == (PersistScore(REWARD),)
        assert t.session.pending_fact is None

    def test_ignored_while_playing(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        assert sm.next_round(s, catalog, rng).session is s

    def test_full_walk_never_repeats(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        seen = [s.current_country.key]
        while True:
            s = sm.guess(s, s.current_name).session
            s = sm.next_round(s, catalog, rng).session
            if s.status is Status.GAMEOVER:
                break
            seen.append(s.current_country.key)
        assert sorted(seen) == sorted(c.key for c in catalog)
        assert s.score == REWARD * len(catalog)


# ---------------------------------------------------------------------------
# request_hint
# ---------------------------------------------------------------------------

class TestRequestHint:
    def test_three_hints_then_noop(
        self, catalog: CountryCatalog, labels: TranslationTable, rng: random.Random
    ):
        s = _started(catalog, rng, lives=5)
        for _ in range(MAX_HINTS):
            s = sm.request_hint(s, labels, rng).session
        assert len(s.hints_revealed) == MAX_HINTS
        assert len(set(s.hints_revealed)) == MAX_HINTS
        assert s.lives == 2
        assert sm.request_hint(s, labels, rng).session is s

    def test_disallowed_at_one_life(
        self, catalog: CountryCatalog, labels: TranslationTable, rng: random.Random
    ):
        s = _started(catalog, rng, lives=1)
        t = sm.request_hint(s, labels, rng)
        assert t.session is s
        assert not s.can_hint

    def test_stops_at_one_life(self, catalog: CountryCatalog, labels: TranslationTable, rng: random.Random):
        s = _started(catalog, rng, lives=2)
        s = sm.request_hint(s, labels, rng).session
        assert s.lives == 1
        assert len(s.hints_revealed) == 1
        assert sm.request_hint(s, labels, rng).session is s

    def test_ignored_outside_playing(self, labels: TranslationTable, rng: random.Random):
        s = Session()
        assert sm.request_hint(s, labels, rng).session is s

    def test_hint_uses_display_language(
        self, catalog: CountryCatalog, countries, labels: TranslationTable, rng: random.Random
    ):
        s = replace(_started(catalog, rng, language=Language.EN), current_country=countries["Japão"])
        s = sm.request_hint(s, labels, rng).session
        assert s.hints_revealed[0] in {"Continent: Asia", "Language: Japanese", "Celebrity: Hidetoshi Nakata"}


# ---------------------------------------------------------------------------
# language, navigation and advance
# ---------------------------------------------------------------------------

class TestNavigation:
    def test_toggle_language_only_flips_language(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        t = sm.toggle_language(s)
        assert t.session.language is Language.EN
        assert replace(t.session, language=Language.PT) == s

    @pytest.mark.parametrize("status", list(Status))
    def test_toggle_in_any_status(self, status: Status):
        s = Session(status=status)
        assert sm.toggle_language(s).session.status is status

    def test_leaderboard_and_back(self):
        s = sm.go_to_leaderboard(Session(score=300)).session
        assert s.status is Status.LEADERBOARD
        assert s.score == 300
        assert sm.return_to_menu(s).session.status is Status.MENU

    def test_advance_from_success(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = sm.guess(s, s.current_name).session
        assert sm.advance(s, catalog, rng).session.status is Status.PLAYING

    def test_advance_from_gameover_restarts_with_max_lives(
        self, catalog: CountryCatalog, rng: random.Random
    ):
        s = _started(catalog, rng, lives=3)
        s = replace(s, status=Status.GAMEOVER, lives=0, score=400)
        n = sm.advance(s, catalog, rng).session
        assert n.status is Status.PLAYING
        assert n.lives == 3
        assert n.score == 0

    def test_advance_from_leaderboard(self, catalog: CountryCatalog, rng: random.Random):
        s = Session(status=Status.LEADERBOARD)
        assert sm.advance(s, catalog, rng).session.status is Status.MENU

    @pytest.mark.parametrize("status", [Status.MENU, Status.PLAYING])
    def test_advance_noop(self, catalog: CountryCatalog, rng: random.Random, status: Status):
        s = Session(status=status)
        assert sm.advance(s, catalog, rng).session is s


# ---------------------------------------------------------------------------
# resolve_fact
# ---------------------------------------------------------------------------

class TestResolveFact:
    def test_applies_current_request(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = sm.guess(s, s.current_name).session
        n = sm.resolve_fact(s, s.pending_fact, "Um fato curioso.")
        assert n.fact == "Um fato curioso."
        assert n.pending_fact is None

    def test_empty_fact_is_applied(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = sm.guess(s, s.current_name).session
        assert sm.resolve_fact(s, s.pending_fact, "").fact == ""

    def test_stale_result_after_advancing(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        solved_a = sm.guess(s, s.current_name).session
        request_a = solved_a.pending_fact
        b = sm.next_round(solved_a, catalog, rng).session
        solved_b = sm.guess(b, b.current_name).session

        assert sm.resolve_fact(b, request_a, "fact about A") is b
        after = sm.resolve_fact(solved_b, request_a, "fact about A")
        assert after is solved_b
        assert after.fact is None

    def test_equal_but_distinct_request_is_stale(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = sm.guess(s, s.current_name).session
        lookalike = sm.FactRequest(country=s.pending_fact.country, language=s.pending_fact.language)
        assert sm.resolve_fact(s, lookalike, "text") is s

    def test_restart_drops_pending(self, catalog: CountryCatalog, rng: random.Random):
        s = _started(catalog, rng)
        s = sm.guess(s, s.current_name).session
        request = s.pending_fact
        restarted = sm.start_game(replace(s, status=Status.GAMEOVER), 5, catalog, rng).session
        assert restarted.pending_fact is None
        assert sm.resolve_fact(restarted, request, "late").fact is None


# ---------------------------------------------------------------------------
# invariants over a random walk
# ---------------------------------------------------------------------------

class TestInvariants:
    def test_random_walk(self, catalog: CountryCatalog, labels: TranslationTable):
        rng = random.Random(42)
        s = sm.start_game(Session(), 4, catalog, rng).session
        actions = ["right", "wrong", "hint", "advance", "toggle", "board", "menu", "start"]
        for _ in range(400):
            action = rng.choice(actions)
            if action == "start":
                t = sm.start_game(s, 4, catalog, rng)
            elif action == "right" and s.current_name:
                t = sm.guess(s, s.current_name)
            elif action == "wrong":
                t = sm.guess(s, WRONG)
            elif action == "hint":
                t = sm.request_hint(s, labels, rng)
            elif action == "toggle":
                t = sm.toggle_language(s)
            elif action == "board":
                t = sm.go_to_leaderboard(s)
            elif action == "menu":
                t = sm.return_to_menu(s)
            else:
                t = sm.advance(s, catalog, rng)
            new = t.session

            assert 0 <= new.lives <= new.max_lives
            assert new.score >= 0 and new.score % REWARD == 0
            assert len(new.history) <= len(catalog)
            assert len(set(new.history)) == len(new.history)
            assert len(new.hints_revealed) <= MAX_HINTS
            if action not in ("start", "advance"):
                assert new.hints_revealed[: len(s.hints_revealed)] == s.hints_revealed
            persisted: List[PersistScore] = [e for e in t.effects if isinstance(e, PersistScore)]
            if persisted:
                assert new.status is Status.GAMEOVER
                assert persisted == [PersistScore(new.score)]
            s = new
