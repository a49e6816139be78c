"""
Session Manager - Creates and tracks preview sessions.

PERSISTENCE RULES:
- Sessions live in memory only
- One visitor per session
- Ending a session deletes all of its visit state
"""

from __future__ import annotations
import logging
import time
import uuid

from ..gateway.base import DataGateway
from ..log import get_logger, log_with_context
from ..resolver.resolver import NavigationIntent
from .preview import PreviewSession, PreviewStatus

logger = get_logger(__name__)


class SessionManager:
    """
    Manages preview sessions.

    Responsibilities:
    - Create and load sessions through the gateway
    - Track active sessions
    - Clean up ended and stale sessions
    """

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self._sessions: dict[str, PreviewSession] = {}

    def create_session(
        self,
        project_id: int,
        intent: NavigationIntent | None = None,
    ) -> PreviewSession:
        """Register a LOADING session without fetching anything."""
        session = PreviewSession(
            session_id=str(uuid.uuid4()),
            project_id=project_id,
            intent=intent,
        )
        self._sessions[session.session_id] = session
        return session

    async def open_session(
        self,
        project_id: int,
        intent: NavigationIntent | None = None,
    ) -> PreviewSession:
        """
        Create a session and load it.

        Args:
            project_id: Project to preview
            intent: Navigation intent from a scanned code, if any

        Returns:
            The session, READY or FAILED
        """
        session = self.create_session(project_id, intent)
        return await session.load(self.gateway)

    def get_session(self, session_id: str) -> PreviewSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "closed") -> bool:
        """
        End a session and clean up.

        Returns True if the session existed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.dispose()
        log_with_context(logger, logging.DEBUG, "Preview ended", session_id=session_id, reason=reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age, and any failed ones.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if session.status == PreviewStatus.FAILED
            or current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
