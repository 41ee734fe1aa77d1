"""In-memory session store (thread-safe, one state object per session id)."""

import logging
import threading
from typing import Optional

from codementor.models import SessionState

log = logging.getLogger(__name__)


class SessionStore:
    """Maps session ids to their ``SessionState``.

    States are created lazily on first access and live for the lifetime of the
    store. The store lock only guards creation; hint decisions lock the
    individual session, so sessions never contend with each other.
    """

    def __init__(self):
        self._sessions: dict[str, SessionState] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> SessionState:
        """Return the session's state, creating it exactly once."""
        session = self._sessions.get(session_id)
        if session is not None:
            return session
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = SessionState(session_id=session_id)
                self._sessions[session_id] = session
                log.debug(f"[{session_id}] New session")
            return session

    def get(self, session_id: str) -> Optional[SessionState]:
        """Return the session's state without creating it."""
        return self._sessions.get(session_id)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
