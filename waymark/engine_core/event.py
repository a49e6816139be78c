"""
Event System - Visitor events and their results.

Events represent:
1. Selecting a location (list, dropdown or resolved code), or the homescreen
2. Simulating a code scan at the active location

All session changes flow through events.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import HOMESCREEN_INDEX


class EventType(Enum):
    """Types of visitor events."""
    SELECT_LOCATION = "select_location"
    SCAN_AT_CURRENT = "scan_at_current"


@dataclass(frozen=True)
class Event:
    """
    A visitor event to be applied to the session.

    `index` is only meaningful for SELECT_LOCATION; -1 means homescreen.
    """
    event_type: EventType
    index: int | None = None
    from_code: bool = False

    @classmethod
    def select(cls, index: int, from_code: bool = False) -> Event:
        """Factory for location selection."""
        return cls(event_type=EventType.SELECT_LOCATION, index=index, from_code=from_code)

    @classmethod
    def homescreen(cls) -> Event:
        """Factory for returning to the homescreen."""
        return cls.select(HOMESCREEN_INDEX)

    @classmethod
    def scan(cls) -> Event:
        """Factory for a simulated code scan at the active location."""
        return cls(event_type=EventType.SCAN_AT_CURRENT)


@dataclass
class EventResult:
    """
    Result of applying an event.

    Contains:
    - Whether the event was accepted
    - New session (unchanged for no-ops)
    - Points awarded by this event
    - Errors (if rejected)
    """
    success: bool
    new_state: Any | None = None  # VisitSession
    error: str | None = None
    error_code: str | None = None

    points_awarded: int = 0
    newly_visited: bool = False
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> EventResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        points_awarded: int = 0,
        newly_visited: bool = False,
    ) -> EventResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            changes=changes or [],
            points_awarded=points_awarded,
            newly_visited=newly_visited,
        )

    @classmethod
    def unchanged(cls, state: Any, reason: str) -> EventResult:
        """Create a successful no-op result."""
        return cls(success=True, new_state=state, changes=[reason])
