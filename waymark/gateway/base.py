"""
Data Access Gateway - Read-only access to projects and locations.

The engine only reads; authoring happens elsewhere. Implementations raise
NotFoundError for missing records and GatewayFailure for transport or
availability problems.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..engine_core.records import Location, Project


class DataGateway(ABC):
    """Abstract read-only gateway."""

    @abstractmethod
    async def get_project(self, project_id: int) -> Project:
        """Fetch a project by id."""

    @abstractmethod
    async def get_locations(self, project_id: int) -> list[Location]:
        """Fetch a project's locations, in ascending id order."""

    @abstractmethod
    async def get_location(self, location_id: int) -> Location:
        """Fetch a single location by id."""
