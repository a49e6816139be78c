"""
Tests for the data gateways.

The REST gateway is exercised against httpx.MockTransport handlers that
mimic the data API's query style.
"""

import httpx
import pytest

from ..engine_core.records import LocationTrigger, ParticipantScoring
from ..errors import GatewayFailure, NotFoundError
from ..gateway import GatewayConfig, InMemoryGateway, RestGateway

PROJECT_ROW = {
    "id": 1,
    "title": "Riverside Hunt",
    "description": "",
    "instructions": "Find every marker.",
    "initial_clue": "Begin at the ferry.",
    "participant_scoring": "Number of Locations Entered",
    "homescreen_display": "Display initial clue",
    "is_published": False,
    "username": "s1234567",
}

LOCATION_ROWS = [
    {
        "id": 8, "project_id": 1, "location_name": "Bridge", "location_trigger": "QR Code",
        "location_position": "(-27.48, 153.03)", "score_points": 3, "clue": "",
        "location_content": "<p>Scan</p>",
    },
    {
        "id": 5, "project_id": 1, "location_name": "Ferry Stop", "location_trigger": "Location",
        "location_position": "(-27.47, 153.02)", "score_points": 5, "clue": "Upstream",
        "location_content": "<p>Hi</p>",
    },
]


def data_api(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the data API (eq filters only)."""
    params = dict(request.url.params)
    if request.url.path == "/api/project":
        rows = [PROJECT_ROW] if params.get("id") == f"eq.{PROJECT_ROW['id']}" else []
        return httpx.Response(200, json=rows)
    if request.url.path == "/api/location":
        if "project_id" in params:
            rows = [r for r in LOCATION_ROWS if params["project_id"] == f"eq.{r['project_id']}"]
        else:
            rows = [r for r in LOCATION_ROWS if params.get("id") == f"eq.{r['id']}"]
        return httpx.Response(200, json=rows)
    return httpx.Response(404, json={"message": "no such table"})


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(base_url="https://data.example.org/api/", token="secret-token", timeout=5)


@pytest.fixture
def rest_gateway(config) -> RestGateway:
    return RestGateway(config, transport=httpx.MockTransport(data_api))


class TestRestGateway:
    """Tests for RestGateway."""

    @pytest.mark.asyncio
    async def test_get_project(self, rest_gateway):
        project = await rest_gateway.get_project(1)

        assert project.id == 1
        assert project.participant_scoring == ParticipantScoring.LOCATIONS_ENTERED

    @pytest.mark.asyncio
    async def test_get_locations_sorted_by_id(self, rest_gateway):
        locations = await rest_gateway.get_locations(1)

        assert [loc.id for loc in locations] == [5, 8]
        assert locations[1].location_trigger == LocationTrigger.CODE
        assert locations[0].content == "<p>Hi</p>"

    @pytest.mark.asyncio
    async def test_get_location(self, rest_gateway):
        location = await rest_gateway.get_location(8)
        assert location.location_name == "Bridge"

    @pytest.mark.asyncio
    async def test_missing_project(self, rest_gateway):
        with pytest.raises(NotFoundError):
            await rest_gateway.get_project(2)

    @pytest.mark.asyncio
    async def test_missing_location(self, rest_gateway):
        with pytest.raises(NotFoundError):
            await rest_gateway.get_location(99)

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[PROJECT_ROW])

        gateway = RestGateway(config, transport=httpx.MockTransport(handler))
        await gateway.get_project(1)

        assert seen["auth"] == "Bearer secret-token"

    @pytest.mark.asyncio
    async def test_server_error_is_gateway_failure(self, config):
        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(503))
        )

        with pytest.raises(GatewayFailure) as exc_info:
            await gateway.get_locations(1)

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_transport_error_is_gateway_failure(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        gateway = RestGateway(config, transport=httpx.MockTransport(handler))

        with pytest.raises(GatewayFailure):
            await gateway.get_project(1)

    @pytest.mark.asyncio
    async def test_invalid_body_is_gateway_failure(self, config):
        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))
        )

        with pytest.raises(GatewayFailure):
            await gateway.get_project(1)

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_gateway_failure(self, config):
        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"id": 1}))
        )

        with pytest.raises(GatewayFailure):
            await gateway.get_project(1)

    @pytest.mark.asyncio
    async def test_row_without_id_is_gateway_failure(self, config):
        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[{"title": "x"}]))
        )

        with pytest.raises(GatewayFailure):
            await gateway.get_project(1)

    @pytest.mark.asyncio
    async def test_non_object_row_is_gateway_failure(self, config):
        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json=["Bridge", 8]))
        )

        with pytest.raises(GatewayFailure):
            await gateway.get_locations(1)

    @pytest.mark.asyncio
    async def test_non_object_row_fails_preview_load(self, config):
        from ..session import PreviewSession, PreviewStatus

        gateway = RestGateway(
            config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json=["Bridge"]))
        )
        session = await PreviewSession(session_id="s", project_id=1).load(gateway)

        assert session.status == PreviewStatus.FAILED
        assert session.visit is None


class TestGatewayConfig:

    def test_no_auth_header_without_token(self):
        assert "Authorization" not in GatewayConfig(base_url="http://x").headers

    def test_from_settings(self):
        from ..config import Settings

        settings = Settings(API_BASE_URL="https://data.example.org", API_TOKEN="t", REQUEST_TIMEOUT=3)
        config = GatewayConfig.from_settings(settings)

        assert config.base_url == "https://data.example.org"
        assert config.token == "t"
        assert config.timeout == 3


class TestInMemoryGateway:

    @pytest.mark.asyncio
    async def test_locations_filtered_and_sorted(self, location_a, location_b, location_c, points_project):
        other = location_c.__class__(id=4, project_id=2, location_name="Elsewhere")
        gateway = InMemoryGateway(
            projects=[points_project], locations=[location_c, other, location_a, location_b]
        )

        locations = await gateway.get_locations(1)
        assert [loc.id for loc in locations] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_not_found(self, gateway):
        with pytest.raises(NotFoundError):
            await gateway.get_project(42)
        with pytest.raises(NotFoundError):
            await gateway.get_location(42)

    @pytest.mark.asyncio
    async def test_unknown_project_has_no_locations(self, gateway):
        assert await gateway.get_locations(42) == []
