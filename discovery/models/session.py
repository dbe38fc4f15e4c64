"""
Session model: the discovery session aggregate and its phases.

Sessions are frozen values. Every update builds a new Session from the old one
plus a delta (model_copy(update=...)); the original is never mutated.
"""

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .choice import Choice


class Phase(str, Enum):
    DISCOVERY = "discovery"
    RECOMMENDATIONS = "recommendations"
    ALTERNATIVES = "alternatives"
    COMPLETE = "complete"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    """A style discovery session with its choice history and current scores."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    current_round: int = 1
    phase: Phase = Phase.DISCOVERY
    choices: Tuple[Choice, ...] = ()
    style_scores: Dict[str, float] = Field(default_factory=dict)
    recommended_style: Optional[str] = None
    second_best_style: Optional[str] = None

    @classmethod
    def new(cls, now: Optional[datetime] = None) -> "Session":
        """Fresh session in discovery at round 1."""
        return cls(id=str(uuid.uuid4()), created_at=now or utc_now())

    @property
    def completed_rounds(self) -> int:
        return len(self.choices)

    @property
    def selected_item_ids(self) -> Set[str]:
        """Item ids already consumed as a choice's selected item."""
        return {c.selected_item_id for c in self.choices}

    def age(self, now: Optional[datetime] = None) -> timedelta:
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return (now or utc_now()) - created

    def is_expired(self, ttl: timedelta, now: Optional[datetime] = None) -> bool:
        """True once the session is ttl or more past its creation time."""
        return self.age(now) >= ttl

    def with_choice(self, choice: Choice) -> "Session":
        """Append a choice and advance the round by one."""
        return self.model_copy(
            update={
                "choices": self.choices + (choice,),
                "current_round": self.current_round + 1,
            }
        )

    def with_phase(self, phase: Phase) -> "Session":
        return self.model_copy(update={"phase": phase})

    def with_recommendations(
        self,
        style_scores: Dict[str, float],
        recommended_style: Optional[str],
        second_best_style: Optional[str],
    ) -> "Session":
        return self.model_copy(
            update={
                "style_scores": dict(style_scores),
                "recommended_style": recommended_style,
                "second_best_style": second_best_style,
            }
        )
