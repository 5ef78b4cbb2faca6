"""Registry of live browser sessions and their session monitors."""

import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import structlog

from domain.services.session_monitor import SessionMonitor
from infrastructure.notifications.toast_queue import ToastQueue

logger = structlog.get_logger()

MonitorFactory = Callable[[ToastQueue], SessionMonitor]


@dataclass
class BrowserSession:
    """One browser session: its monitor and its pending toasts."""

    id: str
    monitor: SessionMonitor
    toasts: ToastQueue
    last_seen: float = field(default_factory=time.monotonic)

    def touch(self) -> None:
        self.last_seen = time.monotonic()


class SessionRegistry:
    """Owns every browser session's monitor for the process lifetime.

    Sessions are addressed by an opaque random id carried in a cookie. There
    is no cross-session state; each session only sees its own monitor.
    """

    def __init__(
        self,
        monitor_factory: MonitorFactory,
        idle_ttl_seconds: float,
        toast_limit: int = 20,
    ) -> None:
        self._monitor_factory = monitor_factory
        self._idle_ttl = idle_ttl_seconds
        self._toast_limit = toast_limit
        self._sessions: dict[str, BrowserSession] = {}

    async def open(self) -> BrowserSession:
        """Create a session and attach its monitor to the identity provider."""
        toasts = ToastQueue(limit=self._toast_limit)
        monitor = self._monitor_factory(toasts)
        session = BrowserSession(
            id=secrets.token_urlsafe(32),
            monitor=monitor,
            toasts=toasts,
        )
        self._sessions[session.id] = session
        await monitor.start()
        logger.info("browser_session_opened", active_sessions=len(self._sessions))
        return session

    def get(self, session_id: Optional[str]) -> Optional[BrowserSession]:
        """Look up a live session and mark it as recently used."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.monitor.close()
        return True

    def expire_idle(self, now: Optional[float] = None) -> int:
        """Close sessions idle for longer than the TTL; returns how many."""
        now = time.monotonic() if now is None else now
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if now - session.last_seen > self._idle_ttl
        ]
        for session_id in expired:
            self.close(session_id)
        return len(expired)

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def __len__(self) -> int:
        return len(self._sessions)
