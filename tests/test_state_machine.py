"""
Session State Machine Tests

Phases:
-------
    discovery -> recommendations -> alternatives -> complete

Scenarios:
----------
1. Each accepted choice appends one record and advances the round by one
2. Six consistent choices converge to recommendations
3. Disallowed transitions raise InvalidTransition and change nothing
4. Reject with / without a second-best style
5. Restart produces a fresh session id
6. Expired sessions are discarded on resume (24h fixed lifetime)
7. Forced stop at max rounds

Run:
----
    pytest tests/test_state_machine.py -v
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from discovery.errors import InvalidTransition, NoAlternativeAvailable, ValidationError
from discovery.models.session import Phase, Session
from discovery.state_machine import SessionStateMachine

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeStore:
    """Single-slot store recording calls."""

    def __init__(self, session=None, fail=False):
        self.session = session
        self.fail = fail
        self.cleared = False

    def load(self):
        if self.fail:
            raise IOError("disk on fire")
        return self.session

    def save(self, session):
        self.session = session
        return True

    def clear(self):
        self.session = None
        self.cleared = True


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class TestSessionStateMachine:

    @pytest.fixture(autouse=True)
    def setup(self, pool, make_choice):
        self.pool = pool
        self.make_choice = make_choice
        self.clock = Clock(T0)
        self.machine = SessionStateMachine(pool, clock=self.clock, rng=random.Random(5))

    def _play(self, rounds, styles=("modern",)):
        for _ in range(rounds):
            round_number = self.machine.session.current_round
            self.machine.submit_choice(self.make_choice(round_number, styles=styles))

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def test_new_session(self):
        session = self.machine.session
        assert session.phase is Phase.DISCOVERY
        assert session.current_round == 1
        assert session.choices == ()
        assert session.created_at == T0

    @pytest.mark.parametrize("rounds", [1, 3, 5])
    def test_round_count_tracks_choices(self, rounds):
        self._play(rounds)
        session = self.machine.session
        assert len(session.choices) == rounds
        assert session.current_round == rounds + 1
        assert session.phase is Phase.DISCOVERY

    def test_scores_recomputed_each_round(self):
        self._play(1, styles=("modern", "minimalist"))
        assert self.machine.session.style_scores == {"modern": 1.0, "minimalist": 0.5}
        assert self.machine.session.recommended_style is None

    def test_round_mismatch_rejected(self):
        before = self.machine.session
        with pytest.raises(ValidationError):
            self.machine.submit_choice(self.make_choice(3))
        assert self.machine.session is before

    def test_converges_after_six_consistent_rounds(self):
        self._play(5)
        assert self.machine.phase is Phase.DISCOVERY
        self._play(1)
        session = self.machine.session
        assert session.phase is Phase.RECOMMENDATIONS
        assert session.recommended_style == "modern"
        assert session.second_best_style is None
        assert session.style_scores == {"modern": 1.0}
        assert session.current_round == 7

    def test_forced_stop_at_max_rounds(self):
        for i in range(15):
            styles = ("modern", "bohemian") if i % 2 == 0 else ("bohemian", "modern")
            assert self.machine.phase is Phase.DISCOVERY
            self._play(1, styles=styles)
        session = self.machine.session
        assert session.phase is Phase.RECOMMENDATIONS
        assert len(session.choices) == 15
        assert session.recommended_style == "modern"
        assert session.second_best_style == "bohemian"

    def test_next_pair_prefers_unselected(self):
        first, second = self.machine.next_pair()
        assert first.id != second.id

    def test_progress_and_estimate(self):
        assert self.machine.progress() == "Round 1"
        self._play(3)
        assert self.machine.estimated_remaining_rounds() == 5
        assert self.machine.progress() == "Round 4 - About 3-7 more rounds"

    # -------------------------------------------------------------------------
    # Invalid transitions
    # -------------------------------------------------------------------------

    @pytest.mark.parametrize(
        "action",
        ["confirm_recommendation", "reject_recommendation", "restart_from_alternatives", "recommendation_set"],
    )
    def test_invalid_in_discovery(self, action):
        before = self.machine.session
        with pytest.raises(InvalidTransition):
            getattr(self.machine, action)()
        assert self.machine.session is before

    def test_no_choices_after_convergence(self):
        self._play(6)
        before = self.machine.session
        with pytest.raises(InvalidTransition):
            self.machine.submit_choice(self.make_choice(7))
        with pytest.raises(InvalidTransition):
            self.machine.next_pair()
        assert self.machine.session is before

    # -------------------------------------------------------------------------
    # Recommendations and alternatives
    # -------------------------------------------------------------------------

    def test_reject_without_alternative(self):
        self._play(6)
        before = self.machine.session
        with pytest.raises(NoAlternativeAvailable):
            self.machine.reject_recommendation()
        assert self.machine.session is before
        assert self.machine.phase is Phase.RECOMMENDATIONS

    def test_reject_switches_to_second_best(self):
        self._play(6, styles=("modern", "minimalist"))
        assert self.machine.session.second_best_style == "minimalist"
        session = self.machine.reject_recommendation()
        assert session.phase is Phase.ALTERNATIVES
        assert session.recommended_style == "minimalist"

    def test_confirm_from_recommendations(self):
        self._play(6)
        assert self.machine.confirm_recommendation().phase is Phase.COMPLETE

    def test_confirm_from_alternatives(self):
        self._play(6, styles=("modern", "minimalist"))
        self.machine.reject_recommendation()
        assert self.machine.confirm_recommendation().phase is Phase.COMPLETE

    def test_recommendation_set_excludes_selected(self):
        self._play(6)
        rec = self.machine.recommendation_set()
        assert rec.style_id == "modern"
        ids = [item.id for item in rec.items]
        assert "m1" not in ids
        assert set(ids[:2]) == {"m2", "m3"}

    def test_recommendation_set_after_complete(self):
        self._play(6)
        self.machine.confirm_recommendation()
        assert not self.machine.recommendation_set(count=1).is_empty

    # -------------------------------------------------------------------------
    # Restart and expiry
    # -------------------------------------------------------------------------

    def test_restart_gives_new_id(self):
        old_id = self.machine.session.id
        self._play(2)
        session = self.machine.restart()
        assert session.id != old_id
        assert session.current_round == 1
        assert session.choices == ()

    def test_restart_from_alternatives(self):
        self._play(6, styles=("modern", "minimalist"))
        self.machine.reject_recommendation()
        old_id = self.machine.session.id
        session = self.machine.restart_from_alternatives()
        assert session.id != old_id
        assert session.phase is Phase.DISCOVERY

    def test_resume_fresh_session(self):
        stored = Session.new(T0)
        store = FakeStore(stored)
        self.clock.now = T0 + timedelta(hours=23)
        assert self.machine.resume(store).id == stored.id
        assert not store.cleared

    @pytest.mark.parametrize("age", [timedelta(hours=24), timedelta(hours=25)])
    def test_resume_expired_session(self, age):
        stored = Session.new(T0)
        store = FakeStore(stored)
        self.clock.now = T0 + age
        session = self.machine.resume(store)
        assert session.id != stored.id
        assert session.created_at == T0 + age
        assert session.phase is Phase.DISCOVERY
        assert store.cleared

    def test_resume_empty_store(self):
        session = self.machine.resume(FakeStore())
        assert session.phase is Phase.DISCOVERY

    def test_resume_unreadable_store(self):
        session = self.machine.resume(FakeStore(fail=True))
        assert session.current_round == 1
