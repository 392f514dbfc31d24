from __future__ import annotations

import logging
import uuid

from sonoglyph.models.review import ReviewSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-process store of open review sessions.

    Holds at most `max_sessions`; opening one more evicts the oldest.
    """

    def __init__(self, max_sessions: int = 100) -> None:
        self._sessions: dict[str, ReviewSession] = {}
        self.max_sessions = max_sessions

    def open(self, session: ReviewSession) -> str:
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            self._sessions.pop(oldest)
            logger.info("Evicted review session %s", oldest)
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = session
        logger.info("Opened review session %s (%s)", session_id, session.mode.value)
        return session_id

    def get(self, session_id: str) -> ReviewSession | None:
        return self._sessions.get(session_id)

    def put(self, session_id: str, session: ReviewSession) -> None:
        self._sessions[session_id] = session

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
