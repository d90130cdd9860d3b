# app/services/conversation_registry.py
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from app.models.session import ConversationSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory practice conversations keyed by the client's session id."""

    def __init__(self, idle_ttl: float = 6 * 60 * 60,
                 now: Callable[[], datetime] = datetime.utcnow):
        self.idle_ttl = timedelta(seconds=idle_ttl)
        self.now = now
        self._sessions: Dict[str, ConversationSession] = {}

    def get(self, session_id: str) -> Optional[ConversationSession]:
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> ConversationSession:
        self.prune()
        session = self._sessions.get(session_id)
        if session is None:
            session = ConversationSession(session_id, now=self.now())
            self._sessions[session_id] = session
            logger.info(f"New practice session {session_id}")
        return session

    def prune(self) -> int:
        cutoff = self.now() - self.idle_ttl
        stale = [sid for sid, s in self._sessions.items() if s.last_active < cutoff]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.info(f"Pruned {len(stale)} idle practice session(s)")
        return len(stale)

    def __len__(self) -> int:
        return len(self._sessions)
