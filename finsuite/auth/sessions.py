"""
In-memory session state for the mock login.

There is no user database: any well-formed login opens a session. A
session lives only as long as the process, and no longer than the access
token issued with it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from finsuite.auth.tokens import generate_token, hash_token
from finsuite.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user as seen by the dashboard."""

    email: str

    @property
    def display_name(self) -> str:
        """Email local part with the first letter capitalised."""
        name = self.email.split("@")[0]
        return name[:1].upper() + name[1:]


@dataclass
class Session:
    user: SessionUser
    created_at: datetime


class SessionStore:
    """Maps session id hashes to open sessions.

    Sessions older than ttl are evicted whenever one is opened or looked up.
    """

    def __init__(self, ttl: Optional[timedelta] = None):
        if ttl is None:
            ttl = timedelta(minutes=get_settings().jwt_access_token_expire_minutes)
        self.ttl = ttl
        self._sessions: Dict[str, Session] = {}

    def _evict_expired(self):
        now = datetime.now(timezone.utc)
        expired = [
            key for key, session in self._sessions.items()
            if now - session.created_at >= self.ttl
        ]
        for key in expired:
            del self._sessions[key]
        if expired:
            logger.info(f"Evicted {len(expired)} expired session(s)")

    def open(self, email: str) -> str:
        """
        Open a session for the given email.

        Returns:
            The plain session id; only its hash is stored
        """
        self._evict_expired()
        session_id = generate_token()
        self._sessions[hash_token(session_id)] = Session(
            user=SessionUser(email=email.lower()),
            created_at=datetime.now(timezone.utc),
        )
        logger.info(f"Session opened for {email.lower()}")
        return session_id

    def get(self, session_id: str) -> Optional[SessionUser]:
        self._evict_expired()
        session = self._sessions.get(hash_token(session_id))
        if session is None:
            return None
        return session.user

    def close(self, session_id: str) -> bool:
        """Close a session. Returns False if it was not open."""
        session = self._sessions.pop(hash_token(session_id), None)
        if session is None:
            return False
        logger.info(f"Session closed for {session.user.email}")
        return True

    def __len__(self) -> int:
        return len(self._sessions)


# Singleton instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get the session store singleton."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
