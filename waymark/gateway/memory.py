"""In-memory gateway, used by tests, the CLI demo and local previews."""

from __future__ import annotations
from typing import Iterable

from ..engine_core.records import Location, Project, sort_locations
from ..errors import NotFoundError
from .base import DataGateway


class InMemoryGateway(DataGateway):
    """
    Serves records from dictionaries.

    Usage:
        gateway = InMemoryGateway(projects=[project], locations=[a, b])
        project = await gateway.get_project(1)
    """

    def __init__(
        self,
        projects: Iterable[Project] = (),
        locations: Iterable[Location] = (),
    ):
        self._projects: dict[int, Project] = {p.id: p for p in projects}
        self._locations: dict[int, Location] = {loc.id: loc for loc in locations}

    def add_project(self, project: Project) -> None:
        self._projects[project.id] = project

    def add_location(self, location: Location) -> None:
        self._locations[location.id] = location

    async def get_project(self, project_id: int) -> Project:
        project = self._projects.get(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found", {"project_id": project_id})
        return project

    async def get_locations(self, project_id: int) -> list[Location]:
        return sort_locations(
            loc for loc in self._locations.values() if loc.project_id == project_id
        )

    async def get_location(self, location_id: int) -> Location:
        location = self._locations.get(location_id)
        if location is None:
            raise NotFoundError(
                f"Location {location_id} not found", {"location_id": location_id}
            )
        return location
