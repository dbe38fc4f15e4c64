"""
Exception taxonomy for the discovery core.

None of these are fatal to the process. Callers recover as follows:
- ValidationError: reject the choice before it reaches the state machine.
- InvalidTransition: surfaced to the caller; no state was changed.
- NoAlternativeAvailable: caller decides whether to restart.
- StaleSession: caught by the state machine, which creates a fresh session.
- ProviderFailure: caught inside the analysis provider, which falls back to keywords.
- UnknownItem: a choice referenced an item id that is not in the pool.
"""

from datetime import timedelta
from typing import Optional


class DiscoveryError(Exception):
    """Base class for all discovery errors."""


class ValidationError(DiscoveryError):
    """Rationale text (or another choice field) failed validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidTransition(DiscoveryError):
    """A transition was requested that the current phase does not allow."""

    def __init__(self, phase: str, action: str):
        super().__init__(f"Cannot {action} while session is in phase '{phase}'")
        self.phase = phase
        self.action = action


class NoAlternativeAvailable(DiscoveryError):
    """Recommendation rejected but there is no second-best style to offer."""

    def __init__(self, session_id: str):
        super().__init__(f"No alternative style available for session {session_id}")
        self.session_id = session_id


class StaleSession(DiscoveryError):
    """Loaded session is older than the configured lifetime."""

    def __init__(self, session_id: str, age: timedelta):
        super().__init__(f"Session {session_id} expired (age {age})")
        self.session_id = session_id
        self.age = age


class ProviderFailure(DiscoveryError):
    """Transport, timeout, or parse failure from the text analysis provider."""


class UnknownItem(DiscoveryError):
    """An item id is not present in the candidate pool."""

    def __init__(self, item_id: str):
        super().__init__(f"Unknown item id: {item_id}")
        self.item_id = item_id
