"""
Demo experience - A small built-in project for quick starts and tests.

A three-stop campus trail, one location per trigger kind.
"""

from .engine_core.records import (
    HomescreenDisplay,
    Location,
    LocationTrigger,
    ParticipantScoring,
    Project,
)
from .gateway.memory import InMemoryGateway

DEMO_PROJECT_ID = 1


def create_demo_project(
    scoring: ParticipantScoring = ParticipantScoring.POINTS_BASED,
    display: HomescreenDisplay = HomescreenDisplay.INITIAL_CLUE,
) -> Project:
    return Project(
        id=DEMO_PROJECT_ID,
        title="Campus Trail",
        instructions="Visit each stop and scan the code where you find one.",
        initial_clue="Start where the books sleep.",
        participant_scoring=scoring,
        homescreen_display=display,
    )


def create_demo_locations() -> list[Location]:
    # Ids deliberately out of order; the engine sorts by id
    return [
        Location(
            id=12,
            project_id=DEMO_PROJECT_ID,
            location_name="Great Court",
            clue="You made it. Rest under the jacaranda.",
            content="<p>The heart of campus.</p>",
            location_trigger=LocationTrigger.BOTH,
            position="(-27.4975, 153.0137)",
            score_points=10,
        ),
        Location(
            id=10,
            project_id=DEMO_PROJECT_ID,
            location_name="Library",
            clue="Follow the smell of coffee.",
            content="<p>Quiet, please.</p>",
            location_trigger=LocationTrigger.ENTRY,
            position="(-27.4968, 153.0134)",
            score_points=5,
        ),
        Location(
            id=11,
            project_id=DEMO_PROJECT_ID,
            location_name="Coffee Cart",
            clue="Now find the oldest sandstone.",
            content="<p>Scan the code on the menu board.</p>",
            location_trigger=LocationTrigger.CODE,
            position="(-27.4971, 153.0141)",
            score_points=3,
        ),
    ]


def create_demo_gateway(
    scoring: ParticipantScoring = ParticipantScoring.POINTS_BASED,
    display: HomescreenDisplay = HomescreenDisplay.INITIAL_CLUE,
) -> InMemoryGateway:
    return InMemoryGateway(
        projects=[create_demo_project(scoring, display)],
        locations=create_demo_locations(),
    )
