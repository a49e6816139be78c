"""
Session Module - Ephemeral preview sessions.

A session represents one simulated walk through a project:
- Created when the author opens a preview (or a code is scanned)
- Holds the current visit state
- Destroyed when the host navigates away

Sessions are EPHEMERAL: nothing about the visit is persisted.
"""

from .preview import PreviewSession, PreviewStatus
from .manager import SessionManager

__all__ = [
    "PreviewSession",
    "PreviewStatus",
    "SessionManager",
]
