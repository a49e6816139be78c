"""
Presenter - Read-only queries over a visit.

Decides what the preview shows: the homescreen (initial clue or the list
of all locations) or a single location. Location content is passed through
verbatim; rendering it safely is the host's job.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .records import HomescreenDisplay, Location, Project
from .scoring import max_points
from .state import VisitSession


@dataclass(frozen=True)
class LocationLink:
    """An entry in the homescreen location list; selecting it issues select(index)."""
    index: int
    location_id: int
    location_name: str


@dataclass(frozen=True)
class HomescreenContent:
    title: str
    instructions: str
    display: HomescreenDisplay
    initial_clue: str | None = None
    locations: list[LocationLink] = field(default_factory=list)


@dataclass(frozen=True)
class LocationContent:
    index: int
    location_id: int
    location_name: str
    content: str
    clue: str | None = None
    can_scan: bool = False


@dataclass(frozen=True)
class VisitStats:
    points: int
    max_points: int
    visited_count: int
    location_count: int


def homescreen_content(project: Project, locations: list[Location]) -> HomescreenContent:
    """Content for the homescreen view."""
    if project.homescreen_display == HomescreenDisplay.ALL_LOCATIONS:
        return HomescreenContent(
            title=project.title,
            instructions=project.instructions,
            display=project.homescreen_display,
            locations=[
                LocationLink(index=i, location_id=loc.id, location_name=loc.location_name)
                for i, loc in enumerate(locations)
            ],
        )
    return HomescreenContent(
        title=project.title,
        instructions=project.instructions,
        display=HomescreenDisplay.INITIAL_CLUE,
        initial_clue=project.initial_clue,
    )


def location_content(location: Location, index: int) -> LocationContent:
    """Content for a single location view."""
    return LocationContent(
        index=index,
        location_id=location.id,
        location_name=location.location_name,
        content=location.content,
        clue=location.clue or None,
        can_scan=location.location_trigger.accepts_code,
    )


def current_content(
    project: Project,
    locations: list[Location],
    session: VisitSession,
) -> HomescreenContent | LocationContent:
    """Content for whatever the session is currently viewing."""
    if session.view.is_homescreen:
        return homescreen_content(project, locations)
    return location_content(locations[session.current_index], session.current_index)


def visit_stats(
    project: Project,
    locations: list[Location],
    session: VisitSession,
) -> VisitStats:
    return VisitStats(
        points=session.points,
        max_points=max_points(project.participant_scoring, locations),
        visited_count=len(session.visited_ids),
        location_count=len(locations),
    )
