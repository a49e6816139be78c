"""
Pytest fixtures for Waymark tests.
"""

import asyncio

import pytest

from ..engine_core.records import (
    HomescreenDisplay,
    Location,
    LocationTrigger,
    ParticipantScoring,
    Project,
)
from ..engine_core.reducer import Reducer
from ..engine_core.state import VisitSession
from ..errors import GatewayFailure
from ..gateway.memory import InMemoryGateway


def make_project(
    scoring: ParticipantScoring = ParticipantScoring.POINTS_BASED,
    display: HomescreenDisplay = HomescreenDisplay.INITIAL_CLUE,
    project_id: int = 1,
) -> Project:
    return Project(
        id=project_id,
        title="Riverside Hunt",
        instructions="Find every marker along the river.",
        initial_clue="Begin at the old ferry stop.",
        participant_scoring=scoring,
        homescreen_display=display,
    )


@pytest.fixture
def location_a() -> Location:
    """Entry-only location worth 5 points."""
    return Location(
        id=1,
        project_id=1,
        location_name="Ferry Stop",
        clue="Walk upstream to the bridge.",
        content="<h3>Welcome</h3><script>alert(1)</script>",
        location_trigger=LocationTrigger.ENTRY,
        position="(-27.47, 153.02)",
        score_points=5,
    )


@pytest.fixture
def location_b() -> Location:
    """Code-only location worth 3 points."""
    return Location(
        id=2,
        project_id=1,
        location_name="Bridge",
        clue="",
        content="<p>Scan the plaque.</p>",
        location_trigger=LocationTrigger.CODE,
        position="(-27.48, 153.03)",
        score_points=3,
    )


@pytest.fixture
def location_c() -> Location:
    """Location accepting both triggers, worth 7 points."""
    return Location(
        id=3,
        project_id=1,
        location_name="Boathouse",
        clue="That's the end of the trail.",
        content="<p>Well done.</p>",
        location_trigger=LocationTrigger.BOTH,
        position="(-27.49, 153.04)",
        score_points=7,
    )


@pytest.fixture
def locations(location_a, location_b, location_c) -> list[Location]:
    return [location_a, location_b, location_c]


@pytest.fixture
def points_project() -> Project:
    return make_project(ParticipantScoring.POINTS_BASED)


@pytest.fixture
def entered_project() -> Project:
    return make_project(ParticipantScoring.LOCATIONS_ENTERED)


@pytest.fixture
def scanned_project() -> Project:
    return make_project(ParticipantScoring.SCANNED_CODES)


@pytest.fixture
def unscored_project() -> Project:
    return make_project(ParticipantScoring.NOT_SCORED)


@pytest.fixture
def fresh_session() -> VisitSession:
    return VisitSession()


@pytest.fixture
def points_reducer(points_project, locations) -> Reducer:
    return Reducer(project=points_project, locations=locations)


@pytest.fixture
def gateway(points_project, locations) -> InMemoryGateway:
    """Gateway holding the points-based project and its three locations."""
    return InMemoryGateway(projects=[points_project], locations=locations)


class SlowGateway(InMemoryGateway):
    """Holds get_locations until released."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.release = asyncio.Event()

    async def get_locations(self, project_id):
        await self.release.wait()
        return await super().get_locations(project_id)


class BrokenLocationsGateway(InMemoryGateway):
    """Serves projects but fails every locations query."""

    async def get_locations(self, project_id):
        raise GatewayFailure("Data API returned 500 while fetching locations")
