"""
Session stores: persistence for a single discovery session slot.
Persistence to a JSON file or in memory, depending on SESSIONS_DIR.

Failures never propagate: load() returns None and save() returns False, so the
state machine treats them as "no session available".
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError as ModelValidationError

from discovery.models.session import Session

logger = logging.getLogger(__name__)


class JsonSessionStore:
    """Session store backed by a JSON file (e.g. sessions/<id>.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)

    def load(self) -> Optional[Session]:
        if not self._path.exists():
            return None
        try:
            with open(self._path, encoding="utf-8") as f:
                return Session.model_validate(json.load(f))
        except (json.JSONDecodeError, UnicodeDecodeError, IOError, ModelValidationError) as e:
            logger.warning("Failed to load session from %s: %s", self._path, e)
            return None

    def save(self, session: Session) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                f.write(session.model_dump_json(indent=2))
            return True
        except (IOError, OSError) as e:
            logger.warning("Failed to save session %s: %s", session.id, e)
            return False

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clear session at %s: %s", self._path, e)


class InMemorySessionStore:
    """Session store holding the serialized session in memory."""

    def __init__(self):
        self._payload: Optional[str] = None

    def load(self) -> Optional[Session]:
        if self._payload is None:
            return None
        try:
            return Session.model_validate_json(self._payload)
        except ModelValidationError as e:
            logger.warning("Failed to load in-memory session: %s", e)
            return None

    def save(self, session: Session) -> bool:
        self._payload = session.model_dump_json()
        return True

    def clear(self) -> None:
        self._payload = None


class SessionRepository:
    """
    One store per session id.

    Sessions never share mutable state; each id maps to its own store.
    """

    def __init__(self, sessions_dir: Optional[Path] = None):
        self.sessions_dir = Path(sessions_dir) if sessions_dir else None
        self._memory: Dict[str, InMemorySessionStore] = {}

    def store_for(self, session_id: str) -> Union[JsonSessionStore, InMemorySessionStore]:
        """
        Raises:
            ValueError: If session_id is not a UUID (it becomes a file name).
        """
        session_id = str(uuid.UUID(session_id))
        if self.sessions_dir is not None:
            return JsonSessionStore(self.sessions_dir / f"{session_id}.json")
        return self._memory.setdefault(session_id, InMemorySessionStore())

    def discard(self, session_id: str) -> None:
        self.store_for(session_id).clear()
        self._memory.pop(str(uuid.UUID(session_id)), None)
