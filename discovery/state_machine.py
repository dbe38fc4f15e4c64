"""
Session state machine: phase transitions for one discovery session.

    discovery -> recommendations -> alternatives -> complete
    (recommendations may also go straight to complete)

Each accepted choice is a single transaction: append, rescore from the full
history, judge convergence, and advance phase when the judge says stop.
Transitions not allowed in the current phase raise InvalidTransition before
anything changes. Sessions are frozen values; the machine swaps in a new one
per transition.
"""

import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Tuple

from .errors import InvalidTransition, NoAlternativeAvailable, StaleSession, ValidationError
from .models.catalog import CandidateItem
from .models.choice import Choice
from .models.config import DiscoveryConfig, resolve_config
from .models.recommendation import RecommendationSet
from .models.session import Phase, Session, utc_now
from .stages.convergence import (
    estimate_remaining_rounds,
    progress_message,
    second_best,
    should_stop,
    top_styles,
)
from .stages.pairing import select_pair
from .stages.recommendation_set import recommend
from .stages.scoring import score_choices

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Persistence collaborator for a single session slot."""

    def load(self) -> Optional[Session]:
        """Return the stored session, or None if absent or unreadable."""
        ...

    def save(self, session: Session) -> bool:
        """Persist session. Returns False on failure."""
        ...

    def clear(self) -> None:
        """Remove the stored session, if any."""
        ...


def ensure_fresh(session: Session, config: DiscoveryConfig, now: Optional[datetime] = None) -> Session:
    """Return session unchanged, or raise StaleSession once its lifetime has passed."""
    if session.is_expired(config.session_ttl, now):
        raise StaleSession(session.id, session.age(now))
    return session


class SessionStateMachine:
    """
    Owns one Session and the transitions between its phases.

    Usage:
        machine = SessionStateMachine(catalog.items)
        machine.resume(store)
        machine.submit_choice(choice)
        if machine.session.phase is Phase.RECOMMENDATIONS:
            display = machine.recommendation_set()
    """

    def __init__(
        self,
        pool: List[CandidateItem],
        config: Optional[DiscoveryConfig] = None,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
        session: Optional[Session] = None,
    ):
        self.pool = pool
        self.config = resolve_config(config)
        self._clock = clock
        self._rng = rng or random.Random()
        self._session = session if session is not None else Session.new(self._clock())

    @property
    def session(self) -> Session:
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    def _require(self, action: str, *phases: Phase) -> None:
        if self._session.phase not in phases:
            raise InvalidTransition(self._session.phase.value, action)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def create(self) -> Session:
        """Start a fresh session in discovery at round 1."""
        self._session = Session.new(self._clock())
        logger.info("Created session %s", self._session.id)
        return self._session

    def resume(self, store: SessionStore) -> Session:
        """
        Adopt the stored session, or create a fresh one.

        Absent, unreadable, and expired sessions all lead to create(); an
        expired session is also cleared from the store.
        """
        try:
            loaded = store.load()
        except Exception as e:
            logger.warning("Session load failed, starting fresh: %s", e)
            loaded = None
        if loaded is None:
            return self.create()
        try:
            self._session = ensure_fresh(loaded, self.config, self._clock())
        except StaleSession as e:
            logger.info("Discarding stale session %s (age %s)", e.session_id, e.age)
            store.clear()
            return self.create()
        return self._session

    def restart(self) -> Session:
        """Discard the current session from any phase and create a fresh one."""
        logger.info("Restarting session %s from phase %s", self._session.id, self._session.phase.value)
        return self.create()

    def restart_from_alternatives(self) -> Session:
        """Discard a session that is showing alternatives and create a fresh one."""
        self._require("restart from alternatives", Phase.ALTERNATIVES)
        return self.restart()

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def submit_choice(self, choice: Choice) -> Session:
        """
        Accept one round's choice.

        Rescores the full history and checks convergence against the number
        of completed rounds (the round count before increment). On stop, sets
        the recommended and second-best styles and moves to recommendations.
        """
        self._require("submit a choice", Phase.DISCOVERY)
        current = self._session
        if choice.round != current.current_round:
            raise ValidationError(
                f"Choice is for round {choice.round}, session is at round {current.current_round}",
                field="round",
            )

        completed_rounds = current.current_round
        updated = current.with_choice(choice)
        scores = score_choices(updated.choices, self.config)

        if should_stop(scores, completed_rounds, self.config):
            ranked = top_styles(scores, 2)
            updated = updated.with_recommendations(
                scores, ranked[0], second_best(scores)
            ).with_phase(Phase.RECOMMENDATIONS)
            logger.info(
                "Session %s converged after %d rounds: %s (alternative %s)",
                updated.id, completed_rounds, updated.recommended_style, updated.second_best_style,
            )
        else:
            updated = updated.with_recommendations(scores, None, None)

        self._session = updated
        return updated

    def confirm_recommendation(self) -> Session:
        """Accept the current recommendation and complete the session."""
        self._require("confirm a recommendation", Phase.RECOMMENDATIONS, Phase.ALTERNATIVES)
        self._session = self._session.with_phase(Phase.COMPLETE)
        return self._session

    def reject_recommendation(self) -> Session:
        """
        Switch to the second-best style.

        Raises:
            NoAlternativeAvailable: There is no second-best style; nothing changes.
        """
        self._require("reject a recommendation", Phase.RECOMMENDATIONS)
        current = self._session
        if current.second_best_style is None:
            raise NoAlternativeAvailable(current.id)
        self._session = current.model_copy(
            update={"recommended_style": current.second_best_style, "phase": Phase.ALTERNATIVES}
        )
        return self._session

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def recommendation_set(self, count: Optional[int] = None) -> RecommendationSet:
        """Display set for the recommended style, excluding already-selected items."""
        self._require(
            "build a recommendation set",
            Phase.RECOMMENDATIONS,
            Phase.ALTERNATIVES,
            Phase.COMPLETE,
        )
        return recommend(
            self._session.recommended_style,
            self._session.selected_item_ids,
            self.pool,
            count if count is not None else self.config.recommendation_count,
            self._rng,
        )

    def next_pair(self) -> Tuple[CandidateItem, CandidateItem]:
        """Two items for the next discovery round."""
        self._require("draw a new pair", Phase.DISCOVERY)
        return select_pair(self.pool, self._session.selected_item_ids, self._rng)

    def estimated_remaining_rounds(self) -> Optional[int]:
        return estimate_remaining_rounds(
            self._session.completed_rounds, self._session.style_scores, self.config
        )

    def progress(self) -> str:
        return progress_message(self._session.current_round, self.estimated_remaining_rounds())
