"""
Engine Core - Visit tracking and scoring for a location experience preview.

The engine:
1. Holds Project and Location records
2. Manages the VisitSession
3. Applies visitor events via the reducer
4. Scores visits and scans per the project's scoring mode
5. Answers what the preview should show
"""

from .records import (
    Project,
    Location,
    ParticipantScoring,
    HomescreenDisplay,
    LocationTrigger,
    sort_locations,
)
from .scoring import ScoreEvent, score, max_points
from .state import View, VisitSession, HOMESCREEN_INDEX
from .event import Event, EventType, EventResult
from .reducer import Reducer, apply_event
from .presenter import (
    HomescreenContent,
    LocationContent,
    LocationLink,
    VisitStats,
    homescreen_content,
    location_content,
    current_content,
    visit_stats,
)

__all__ = [
    "Project",
    "Location",
    "ParticipantScoring",
    "HomescreenDisplay",
    "LocationTrigger",
    "sort_locations",
    "ScoreEvent",
    "score",
    "max_points",
    "View",
    "VisitSession",
    "HOMESCREEN_INDEX",
    "Event",
    "EventType",
    "EventResult",
    "Reducer",
    "apply_event",
    "HomescreenContent",
    "LocationContent",
    "LocationLink",
    "VisitStats",
    "homescreen_content",
    "location_content",
    "current_content",
    "visit_stats",
]
