"""
REST gateway - Reads records from a PostgREST style API.

Queries:
    GET /project?id=eq.{id}
    GET /location?project_id=eq.{project_id}
    GET /location?id=eq.{id}

Uses httpx for async HTTP requests. Credentials come from GatewayConfig,
never from module constants.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..engine_core.records import Location, Project, sort_locations
from ..errors import GatewayFailure, NotFoundError
from ..log import get_logger
from .base import DataGateway

logger = get_logger(__name__)


@dataclass(frozen=True)
class GatewayConfig:
    """Connection settings for the data API."""
    base_url: str
    token: str = ""
    timeout: float = 15.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GatewayConfig:
        settings = settings or get_settings()
        return cls(
            base_url=settings.API_BASE_URL,
            token=settings.API_TOKEN,
            timeout=settings.REQUEST_TIMEOUT,
        )

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


class RestGateway(DataGateway):
    """
    Gateway backed by the data API.

    Args:
        config: Connection settings
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
    """

    def __init__(self, config: GatewayConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url.rstrip("/"),
            headers=self.config.headers,
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def _fetch_rows(self, path: str, params: dict[str, str], action: str) -> list[Any]:
        """
        Run a query and return the decoded rows.

        Raises:
            GatewayFailure: transport error, non-2xx status or unexpected body
        """
        try:
            async with self._client() as client:
                resp = await client.get(path, params=params)
                resp.raise_for_status()
                rows = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Error {action}: HTTP {e.response.status_code}")
            raise GatewayFailure(
                f"Data API returned {e.response.status_code} while {action}",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error {action}: {e}")
            raise GatewayFailure(f"Data API unavailable while {action}: {e}") from e
        except ValueError as e:
            logger.error(f"Error {action}: invalid JSON body")
            raise GatewayFailure(f"Data API sent an invalid body while {action}") from e

        if not isinstance(rows, list):
            raise GatewayFailure(f"Data API sent an unexpected body while {action}")
        return rows

    def _parse(self, factory, row: Any, action: str):
        try:
            return factory(row)
        except ValidationError as e:
            raise GatewayFailure(f"Malformed record while {action}: {e}") from e

    async def get_project(self, project_id: int) -> Project:
        rows = await self._fetch_rows("/project", {"id": f"eq.{project_id}"}, "fetching project")
        if not rows:
            raise NotFoundError(f"Project {project_id} not found", {"project_id": project_id})
        return self._parse(Project.from_row, rows[0], "fetching project")

    async def get_locations(self, project_id: int) -> list[Location]:
        rows = await self._fetch_rows(
            "/location", {"project_id": f"eq.{project_id}"}, "fetching locations"
        )
        locations = [self._parse(Location.from_row, row, "fetching locations") for row in rows]
        logger.debug(f"Fetched {len(locations)} locations for project {project_id}")
        return sort_locations(locations)

    async def get_location(self, location_id: int) -> Location:
        rows = await self._fetch_rows("/location", {"id": f"eq.{location_id}"}, "fetching location")
        if not rows:
            raise NotFoundError(
                f"Location {location_id} not found", {"location_id": location_id}
            )
        return self._parse(Location.from_row, rows[0], "fetching location")
