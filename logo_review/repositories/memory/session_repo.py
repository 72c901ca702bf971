from __future__ import annotations
from typing import Dict, List, Optional
from uuid import uuid4
import logging

from logo_review.core.config import settings
from logo_review.services.annotation_session import LogoAnnotationSession

logger = logging.getLogger(__name__)


class SessionRepo:
    """
    In-memory store for live review sessions.
    Everything runs on one event loop, so no locking is needed.
    Holds at most max_sessions; adding past that evicts the oldest.
    """
    _singleton: "SessionRepo | None" = None

    def __init__(self, max_sessions: int | None = None) -> None:
        self._sessions: Dict[str, LogoAnnotationSession] = {}
        self.max_sessions = max_sessions or settings.MAX_SESSIONS

    @classmethod
    def instance(cls) -> "SessionRepo":
        if not cls._singleton:
            cls._singleton = cls()
        return cls._singleton

    def add(self, session: LogoAnnotationSession) -> LogoAnnotationSession:
        if not session.session_id:
            session.session_id = str(uuid4())
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info("Evicted review session %s", oldest)
        return session

    def get(self, session_id: str) -> Optional[LogoAnnotationSession]:
        return self._sessions.get(session_id)

    def list(self) -> List[LogoAnnotationSession]:
        return list(self._sessions.values())

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None
