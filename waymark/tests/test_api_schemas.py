"""
Tests for API Pydantic schemas.

Validates that:
- Responses serialize with the expected field names
- Error codes are properly structured
- Request validation rejects bad input
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_preview_response_schema(self):
        from waymark.api.schemas import (
            PreviewResponse, PreviewStatusValue, StatsInfo, ViewKind, LocationContentInfo,
        )

        response = PreviewResponse(
            session_id="session-123",
            project_id=1,
            status=PreviewStatusValue.READY,
            project_title="Riverside Hunt",
            view=ViewKind.LOCATION,
            current_index=0,
            visited_ids=[1],
            location=LocationContentInfo(
                index=0, location_id=1, location_name="Ferry Stop", content="<p>x</p>",
            ),
            stats=StatsInfo(points=5, max_points=15, visited_count=1, location_count=3),
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "ready"
        assert data["view"] == "location"
        assert data["stats"]["points"] == 5
        assert data["homescreen"] is None

    def test_loading_preview_has_no_view(self):
        from waymark.api.schemas import PreviewResponse, PreviewStatusValue

        response = PreviewResponse(session_id="s", project_id=1, status=PreviewStatusValue.LOADING)

        assert response.view is None
        assert response.stats is None

    def test_error_response_schema(self):
        from waymark.api.schemas import ErrorResponse
        from waymark.errors import ErrorCode

        response = ErrorResponse(
            error="Location 99 not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"location_id": 99},
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "NOT_FOUND"
        assert data["details"]["location_id"] == 99

    def test_all_error_codes_exist(self):
        from waymark.errors import ErrorCode

        expected = {
            "NOT_FOUND",
            "MALFORMED_PAYLOAD",
            "GATEWAY_FAILURE",
            "SESSION_NOT_FOUND",
            "SESSION_NOT_READY",
            "INVALID_INDEX",
            "VALIDATION_ERROR",
        }
        assert {code.value for code in ErrorCode} == expected

    def test_select_request_rejects_below_homescreen(self):
        from waymark.api.schemas import SelectLocationRequest

        assert SelectLocationRequest(index=-1).index == -1
        with pytest.raises(ValidationError):
            SelectLocationRequest(index=-2)

    def test_code_payload_accepts_text_or_record(self):
        from waymark.api.schemas import CodePayloadRequest

        assert CodePayloadRequest(payload="42").payload == "42"
        assert CodePayloadRequest(payload={"id": 1, "project_id": 2}).payload["project_id"] == 2
