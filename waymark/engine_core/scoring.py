"""
Scoring Policy - Maps (mode, event, location) to a point delta.

Entry-based modes reward reaching a location by any trigger, scan-based
modes reward confirming presence with a code, and points-based (the
fallback) rewards the author-assigned value.

The policy never checks novelty: the reducer only calls it for a location
that was just visited, or for a scan it has already accepted.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable

from .records import Location, ParticipantScoring


class ScoreEvent(Enum):
    """Kinds of scoring events."""
    VISIT = "visit"
    SCAN = "scan"


def score(mode: ParticipantScoring, event: ScoreEvent, location: Location) -> int:
    """Return the non-negative point delta for an event at a location."""
    if mode == ParticipantScoring.NOT_SCORED:
        return 0
    if mode == ParticipantScoring.LOCATIONS_ENTERED:
        return 1 if event == ScoreEvent.VISIT else 0
    if mode == ParticipantScoring.SCANNED_CODES:
        return 1 if event == ScoreEvent.SCAN else 0
    # Points based
    return location.score_points if event == ScoreEvent.VISIT else 0


def max_points(mode: ParticipantScoring, locations: Iterable[Location]) -> int:
    """
    Points available from visiting every location once (and scanning once
    where a code is accepted). Shown next to the running score.
    """
    locations = list(locations)
    if mode == ParticipantScoring.NOT_SCORED:
        return 0
    if mode == ParticipantScoring.LOCATIONS_ENTERED:
        return len(locations)
    if mode == ParticipantScoring.SCANNED_CODES:
        return sum(1 for loc in locations if loc.location_trigger.accepts_code)
    return sum(loc.score_points for loc in locations)
