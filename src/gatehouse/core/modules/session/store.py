"""In-memory session store keyed by client host."""

from datetime import datetime, timedelta

import structlog

from gatehouse.core.modules.session.models import Session
from gatehouse.core.rwlock import ReadWriteLock
from gatehouse.utils import now, split_host_port

logger = structlog.get_logger(__name__)


def client_key(remote_addr: str) -> str:
    """Derive the session key from a raw client address.

    The port is dropped so every connection from one host shares a session.
    Addresses that cannot be split are used verbatim.
    """
    try:
        host, _ = split_host_port(remote_addr)
    except ValueError:
        logger.warning("Could not split host:port, using full address as key", remote_addr=remote_addr)
        return remote_addr
    return host


class SessionStore:
    """Thread-safe mapping from client host to its Session.

    Sessions are created lazily and never evicted by default; call
    ``evict_expired`` explicitly to drop stale entries.
    """

    def __init__(self, expiration: timedelta) -> None:
        self._expiration = expiration
        self._sessions: dict[str, Session] = {}
        self._lock = ReadWriteLock()

    @property
    def expiration(self) -> timedelta:
        return self._expiration

    def get_or_create(self, remote_addr: str) -> Session:
        """Return the session for the client, creating it on first contact."""
        key = client_key(remote_addr)

        with self._lock.read():
            session = self._sessions.get(key)
        if session is not None:
            return session

        with self._lock.write():
            # Another thread may have inserted while we waited for the write lock
            session = self._sessions.get(key)
            if session is None:
                session = Session()
                self._sessions[key] = session
                logger.info("New session created", client=key)
        return session

    def is_expired(self, session: Session, at: datetime | None = None) -> bool:
        """True when more than the expiration has elapsed since last activity."""
        current = at if at is not None else now()
        return current - session.last_connection_time > self._expiration

    def evict_expired(self, at: datetime | None = None) -> int:
        """Drop expired sessions and return how many were removed."""
        current = at if at is not None else now()
        with self._lock.write():
            stale = [key for key, session in self._sessions.items() if self.is_expired(session, current)]
            for key in stale:
                del self._sessions[key]
        if stale:
            logger.info("Evicted expired sessions", count=len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._sessions)

    def __contains__(self, remote_addr: object) -> bool:
        if not isinstance(remote_addr, str):
            return False
        key = client_key(remote_addr)
        with self._lock.read():
            return key in self._sessions
