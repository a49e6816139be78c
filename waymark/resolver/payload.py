"""
Code payloads - What a location's scannable code carries.

Two shapes are accepted, with no version tag:
- BareId: just the location id ("42", 42)
- StructuredPayload: a JSON record with `id` and `project_id`, plus an
  optional snapshot (name, position, trigger, points, clue) taken when the
  code was generated

Payloads may arrive percent-encoded, or as the last path segment of a
`/location/<payload>` URL. Anything else is malformed.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import quote, unquote, urlparse
import json

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..engine_core.records import Location, parse_id
from ..errors import MalformedPayloadError


@dataclass(frozen=True)
class BareId:
    """A payload holding only a location id."""
    location_id: int


class StructuredPayload(BaseModel):
    """A payload holding a location record snapshot."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    project_id: int
    name: Optional[str] = None
    position: Optional[Any] = None
    trigger: Optional[str] = None
    points: Optional[int] = None
    clue: Optional[str] = None

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> int:
        return parse_id(value)

    @field_validator("points", mode="before")
    @classmethod
    def _validate_points(cls, value: Any) -> Optional[int]:
        # Snapshot only; a bad value is dropped rather than rejecting the code
        try:
            return parse_id(value)
        except ValueError:
            return None

    @property
    def location_id(self) -> int:
        return self.id


CodePayload = Union[BareId, StructuredPayload]


def decode_payload(raw: Any) -> CodePayload:
    """
    Validate raw code content into a BareId or StructuredPayload.

    Raises:
        MalformedPayloadError: content is undecodable or has no usable id
    """
    if isinstance(raw, (BareId, StructuredPayload)):
        return raw
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayloadError("Code payload is not UTF-8 text") from e
    if isinstance(raw, str):
        return _decode_text(raw, from_scanner=True)
    return _decode_value(raw)


def _decode_text(text: str, from_scanner: bool) -> CodePayload:
    text = text.strip()
    if not text:
        raise MalformedPayloadError("Code payload is empty")

    if from_scanner and text.lower().startswith(("http://", "https://")):
        return _decode_text(_segment_from_url(text), from_scanner=False)

    if from_scanner and "%" in text:
        text = unquote(text).strip()

    try:
        value = json.loads(text)
    except RecursionError as e:
        raise MalformedPayloadError("Code payload is not decodable") from e
    except ValueError:
        # Not JSON: only a bare integer token is acceptable
        return _bare_id(text)
    return _decode_value(value)


def _segment_from_url(url: str) -> str:
    parts = [p for p in urlparse(url).path.split("/") if p]
    if len(parts) >= 2 and parts[-2] == "location":
        return unquote(parts[-1])
    raise MalformedPayloadError(f"Code URL has no location segment: {url}")


def _decode_value(value: Any) -> CodePayload:
    if isinstance(value, dict):
        if "id" not in value:
            raise MalformedPayloadError("Code payload has no id")
        try:
            return StructuredPayload.model_validate(value)
        except ValidationError as e:
            raise MalformedPayloadError(
                "Code payload record is invalid",
                {"errors": [err["msg"] for err in e.errors()]},
            ) from e
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return _bare_id(value)
    raise MalformedPayloadError(f"Unsupported code payload: {type(value).__name__}")


def _bare_id(value: Any) -> BareId:
    try:
        return BareId(location_id=parse_id(value))
    except ValueError as e:
        raise MalformedPayloadError(f"Code payload is not a location id: {value!r}") from e


def encode_payload(location: Location) -> str:
    """JSON text encoded in a location's code."""
    data = {
        "id": location.id,
        "name": location.location_name,
        "position": location.position,
        "trigger": location.location_trigger.value,
        "points": location.score_points,
        "clue": location.clue,
        "project_id": location.project_id,
    }
    return json.dumps(data)


def code_url(location: Location, base_url: str) -> str:
    """Scanner URL for a location: `<base_url>/location/<encoded payload>`."""
    return f"{base_url.rstrip('/')}/location/{quote(encode_payload(location), safe='')}"
