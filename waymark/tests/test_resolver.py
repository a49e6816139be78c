"""
Tests for code payload decoding and resolution.

Tests:
- Accepted payload shapes (bare id, record, encoded, scanner URL)
- Malformed payloads never escape as unhandled errors
- Resolution through the gateway
"""

import json
from urllib.parse import quote

import pytest

from ..errors import ErrorCode, GatewayFailure, MalformedPayloadError, ResolutionError
from ..gateway.memory import InMemoryGateway
from ..resolver import (
    BareId,
    CodeResolver,
    StructuredPayload,
    code_url,
    decode_payload,
    encode_payload,
)


class TestDecodePayload:
    """Tests for decode_payload."""

    @pytest.mark.parametrize("raw", ["42", 42, " 42\n", b"42", "%34%32", '"42"'])
    def test_bare_id(self, raw):
        assert decode_payload(raw) == BareId(location_id=42)

    def test_structured_record(self):
        payload = decode_payload(json.dumps({
            "id": 3,
            "name": "Boathouse",
            "position": "(-27.49, 153.04)",
            "trigger": "Both",
            "points": 7,
            "clue": "End",
            "project_id": "1",
        }))

        assert isinstance(payload, StructuredPayload)
        assert payload.location_id == 3
        assert payload.project_id == 1
        assert payload.name == "Boathouse"
        assert payload.points == 7

    def test_minimal_record(self):
        payload = decode_payload({"id": 3, "project_id": 1})

        assert isinstance(payload, StructuredPayload)
        assert payload.trigger is None

    def test_bad_snapshot_points_are_dropped(self):
        payload = decode_payload({"id": 3, "project_id": 1, "points": "many"})
        assert payload.points is None

    def test_percent_encoded_record(self):
        raw = quote(json.dumps({"id": 5, "project_id": 2}), safe="")
        payload = decode_payload(raw)

        assert payload.location_id == 5
        assert payload.project_id == 2

    def test_scanner_url(self, location_c):
        payload = decode_payload(code_url(location_c, "https://trails.example.org/"))

        assert isinstance(payload, StructuredPayload)
        assert payload.location_id == location_c.id
        assert payload.clue == location_c.clue

    def test_scanner_url_with_bare_id(self):
        assert decode_payload("https://trails.example.org/location/17") == BareId(17)

    @pytest.mark.parametrize("raw", [
        "not-json",
        "",
        "   ",
        "[1, 2]",
        "true",
        "3.5",
        "{}",
        '{"project_id": 1}',
        '{"id": 3}',
        '{"id": "three", "project_id": 1}',
        '{"id": true, "project_id": 1}',
        "{broken json",
        "https://trails.example.org/about",
        b"\xff\xfe",
        None,
        [1],
        True,
    ])
    def test_malformed(self, raw):
        with pytest.raises(MalformedPayloadError):
            decode_payload(raw)

    def test_clue_mentioning_url_is_still_a_record(self):
        raw = json.dumps({"id": 1, "project_id": 1, "clue": "see https://x.org/location/9"})
        assert decode_payload(raw) == StructuredPayload(
            id=1, project_id=1, clue="see https://x.org/location/9"
        )


class TestEncodePayload:

    def test_fields(self, location_b):
        data = json.loads(encode_payload(location_b))

        assert data == {
            "id": 2,
            "name": "Bridge",
            "position": "(-27.48, 153.03)",
            "trigger": "QR Code",
            "points": 3,
            "clue": "",
            "project_id": 1,
        }

    def test_generated_code_decodes_to_location(self, location_b):
        assert decode_payload(encode_payload(location_b)).location_id == location_b.id


class FailingGateway(InMemoryGateway):
    async def get_location(self, location_id):
        raise GatewayFailure("connection refused")


class TestCodeResolver:
    """Tests for CodeResolver."""

    @pytest.mark.asyncio
    async def test_resolves_structured_payload(self, gateway, location_b):
        intent = await CodeResolver(gateway).resolve(encode_payload(location_b))

        assert intent.project_id == 1
        assert intent.initial_location == location_b
        assert intent.originated_from_code

    @pytest.mark.asyncio
    async def test_resolves_bare_id(self, gateway, location_a):
        intent = await CodeResolver(gateway).resolve("1")
        assert intent.initial_location == location_a

    @pytest.mark.asyncio
    async def test_stored_project_wins_over_code(self, gateway):
        intent = await CodeResolver(gateway).resolve({"id": 2, "project_id": 77})
        assert intent.project_id == 1

    @pytest.mark.asyncio
    async def test_malformed_payload(self, gateway):
        with pytest.raises(ResolutionError) as exc_info:
            await CodeResolver(gateway).resolve("not-json")

        assert exc_info.value.kind == ErrorCode.MALFORMED_PAYLOAD

    @pytest.mark.asyncio
    async def test_deeply_nested_payload_is_malformed(self, gateway):
        raw = "[" * 100000 + "]" * 100000

        with pytest.raises(ResolutionError) as exc_info:
            await CodeResolver(gateway).resolve(raw)

        assert exc_info.value.kind == ErrorCode.MALFORMED_PAYLOAD

    @pytest.mark.asyncio
    async def test_unknown_location(self, gateway):
        with pytest.raises(ResolutionError) as exc_info:
            await CodeResolver(gateway).resolve(json.dumps({"id": 99, "project_id": 1}))

        assert exc_info.value.kind == ErrorCode.NOT_FOUND
        assert exc_info.value.details == {"location_id": 99}

    @pytest.mark.asyncio
    async def test_gateway_failure_reported_as_not_found(self, points_project, locations):
        resolver = CodeResolver(FailingGateway(projects=[points_project], locations=locations))

        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve("1")

        assert exc_info.value.kind == ErrorCode.NOT_FOUND
