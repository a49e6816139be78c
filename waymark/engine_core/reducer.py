"""
Reducer - Applies visitor events to the visit session.

The reducer is the single point of session change.
All changes must go through apply_event().

Design principles:
- Pure function: (session, event) -> EventResult
- Total: every event has an outcome in every state
- Validates before applying
- Scoring is delegated to the scoring policy
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import ErrorCode
from .event import Event, EventResult, EventType
from .records import Location, Project, sort_locations
from .scoring import ScoreEvent, score
from .state import HOMESCREEN_INDEX, View, VisitSession


@dataclass
class Reducer:
    """
    Reducer applies events to a visit session.

    Stateless - all visitor state is in VisitSession.
    The project provides the scoring mode; locations are held in
    canonical order regardless of the order they were given in.
    """
    project: Project
    locations: list[Location] = field(default_factory=list)

    def __post_init__(self):
        self.locations = sort_locations(self.locations)

    def apply(self, state: VisitSession, event: Event) -> EventResult:
        """
        Apply an event to the session.

        Returns EventResult with new session or error.
        """
        validation_error = self._validate_event(state, event)
        if validation_error:
            return EventResult.failure(validation_error, error_code=ErrorCode.INVALID_INDEX.value)

        handler = self._get_handler(event.event_type)
        return handler(state, event)

    def _validate_event(self, state: VisitSession, event: Event) -> str | None:
        """
        Validate that an event can be applied.

        Returns error message if invalid, None if valid.
        """
        if event.event_type == EventType.SELECT_LOCATION:
            if event.index is None:
                return "Location selection requires an index"
            if event.index != HOMESCREEN_INDEX and not 0 <= event.index < len(self.locations):
                return (
                    f"Location index {event.index} out of range "
                    f"(-1..{len(self.locations) - 1})"
                )
        return None

    def _get_handler(self, event_type: EventType):
        """Get the handler function for an event type."""
        handlers = {
            EventType.SELECT_LOCATION: self._handle_select,
            EventType.SCAN_AT_CURRENT: self._handle_scan,
        }
        return handlers[event_type]

    def _handle_select(self, state: VisitSession, event: Event) -> EventResult:
        """Handle location (or homescreen) selection."""
        index = event.index
        if index == state.current_index:
            return EventResult.unchanged(state, f"Already at {state.view}")

        if index == HOMESCREEN_INDEX:
            return EventResult.success_with_state(
                state.with_view(View.homescreen()),
                changes=["Returned to homescreen"],
            )

        location = self.locations[index]
        new_state = state.with_view(View.at_location(index))
        if new_state.has_visited(location.id):
            return EventResult.success_with_state(
                new_state,
                changes=[f"Revisited {location.location_name}"],
            )

        awarded = score(self.project.participant_scoring, ScoreEvent.VISIT, location)
        new_state = new_state.with_visit(location.id, awarded)
        source = " via code" if event.from_code else ""
        return EventResult.success_with_state(
            new_state,
            changes=[f"Entered {location.location_name}{source} (+{awarded} points)"],
            points_awarded=awarded,
            newly_visited=True,
        )

    def _handle_scan(self, state: VisitSession, event: Event) -> EventResult:
        """
        Handle a simulated code scan.

        Every accepted scan scores again, including repeats at the same
        location.
        """
        if state.view.is_homescreen:
            return EventResult.unchanged(state, "Nothing to scan on the homescreen")

        location = self.locations[state.current_index]
        if not location.location_trigger.accepts_code:
            return EventResult.unchanged(
                state, f"{location.location_name} is not confirmed by code"
            )

        awarded = score(self.project.participant_scoring, ScoreEvent.SCAN, location)
        return EventResult.success_with_state(
            state.with_points(awarded),
            changes=[f"Scanned code at {location.location_name} (+{awarded} points)"],
            points_awarded=awarded,
        )

    def index_of(self, location_id: int) -> int | None:
        """Index of a location id in the canonical sequence, if loaded."""
        for i, loc in enumerate(self.locations):
            if loc.id == location_id:
                return i
        return None


def apply_event(
    project: Project,
    locations: list[Location],
    state: VisitSession,
    event: Event,
) -> EventResult:
    """
    Convenience function to apply an event.

    Creates a Reducer and applies the event.
    """
    reducer = Reducer(project=project, locations=locations)
    return reducer.apply(state, event)
