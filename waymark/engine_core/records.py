"""
Records - Project and Location value objects.

Records are immutable for the life of a preview. They are built from the
rows the data store returns (see `from_row`) and never written back by the
engine. Rows are validated with pydantic row models before the frozen
records are built from them.

Design principles:
- Lenient enums: unknown settings fall back instead of failing
- Content is opaque: markup is carried verbatim, never parsed
- Canonical order: locations sort ascending by id (creation order)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def parse_id(value: Any) -> int:
    """
    Parse a record identifier.

    Identifiers are integers in the store; digit strings are accepted.
    Raises ValueError for anything else (bools included).
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid identifier: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        token = value.strip()
        if token.lstrip("-").isdigit():
            return int(token)
    raise ValueError(f"Invalid identifier: {value!r}")


class _LenientEnum(Enum):
    """
    Enum that parses wire values, member names and their lowercase forms.

    The first declared member is the fallback for anything unrecognized.
    """

    @classmethod
    def _missing_(cls, value: Any):
        key = value.strip().lower() if isinstance(value, str) else None
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        return next(iter(cls))

    @classmethod
    def parse(cls, raw: Any):
        return cls(raw)


class ParticipantScoring(_LenientEnum):
    """How a visitor's score is accumulated."""
    POINTS_BASED = "Points Based"
    NOT_SCORED = "Not Scored"
    SCANNED_CODES = "Number of Scanned QR Codes"
    LOCATIONS_ENTERED = "Number of Locations Entered"


class HomescreenDisplay(_LenientEnum):
    """What the homescreen shows besides title and instructions."""
    INITIAL_CLUE = "Display initial clue"
    ALL_LOCATIONS = "Display all locations"


class LocationTrigger(_LenientEnum):
    """How a location counts as entered."""
    ENTRY = "Location"
    CODE = "QR Code"
    BOTH = "Both"

    @property
    def accepts_code(self) -> bool:
        """Whether a scanned code can confirm presence."""
        return self in (LocationTrigger.CODE, LocationTrigger.BOTH)


# =============================================================================
# Store rows
# =============================================================================

class _Row(BaseModel):
    """Base for data store rows. Authoring-only columns are ignored."""
    model_config = ConfigDict(extra="ignore")

    @field_validator("id", "project_id", mode="before", check_fields=False)
    @classmethod
    def _validate_id(cls, value: Any) -> int:
        return parse_id(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class ProjectRow(_Row):
    """A `project` row."""
    id: int
    title: str = ""
    instructions: str = ""
    initial_clue: str = ""
    participant_scoring: ParticipantScoring = ParticipantScoring.POINTS_BASED
    homescreen_display: HomescreenDisplay = HomescreenDisplay.INITIAL_CLUE
    description: str = ""
    is_published: bool = False

    _validate_text = field_validator(
        "title", "instructions", "initial_clue", "description", mode="before"
    )(_text)

    @field_validator("participant_scoring", mode="before")
    @classmethod
    def _validate_scoring(cls, value: Any) -> ParticipantScoring:
        return ParticipantScoring.parse(value)

    @field_validator("homescreen_display", mode="before")
    @classmethod
    def _validate_display(cls, value: Any) -> HomescreenDisplay:
        return HomescreenDisplay.parse(value)

    @field_validator("is_published", mode="before")
    @classmethod
    def _validate_published(cls, value: Any) -> Any:
        return False if value is None else value


class LocationRow(_Row):
    """A `location` row; `location_content` and `location_position` are aliased."""
    id: int
    project_id: int
    location_name: str = ""
    clue: str = ""
    content: str = Field(default="", validation_alias=AliasChoices("location_content", "content"))
    location_trigger: LocationTrigger = LocationTrigger.ENTRY
    position: str = Field(default="", validation_alias=AliasChoices("location_position", "position"))
    score_points: int = 0

    _validate_text = field_validator(
        "location_name", "clue", "content", "position", mode="before"
    )(_text)

    @field_validator("location_trigger", mode="before")
    @classmethod
    def _validate_trigger(cls, value: Any) -> LocationTrigger:
        return LocationTrigger.parse(value)

    @field_validator("score_points", mode="before")
    @classmethod
    def _validate_points(cls, value: Any) -> int:
        # Non-negative; missing or invalid values count as 0
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            return 0


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class Project:
    """
    An authored experience.

    Only the fields the preview needs are modelled; authoring-only
    columns are ignored by `from_row`.
    """
    id: int
    title: str = ""
    instructions: str = ""
    initial_clue: str = ""
    participant_scoring: ParticipantScoring = ParticipantScoring.POINTS_BASED
    homescreen_display: HomescreenDisplay = HomescreenDisplay.INITIAL_CLUE
    description: str = ""
    is_published: bool = False

    @classmethod
    def from_row(cls, row: Any) -> Project:
        """
        Build a Project from a data store row.

        Raises:
            pydantic.ValidationError: row is not a mapping or has no valid id
        """
        return cls(**ProjectRow.model_validate(row).model_dump())


@dataclass(frozen=True)
class Location:
    """
    A place within a project.

    `content` is author markup rendered verbatim by the host.
    `position` is an opaque coordinate string (e.g. "(-27.49, 153.01)").
    """
    id: int
    project_id: int
    location_name: str = ""
    clue: str = ""
    content: str = ""
    location_trigger: LocationTrigger = LocationTrigger.ENTRY
    position: str = ""
    score_points: int = 0

    @classmethod
    def from_row(cls, row: Any) -> Location:
        """
        Build a Location from a data store row.

        Raises:
            pydantic.ValidationError: row is not a mapping or lacks valid ids
        """
        return cls(**LocationRow.model_validate(row).model_dump())


def sort_locations(locations: Iterable[Location]) -> list[Location]:
    """Return locations in canonical (ascending id) order."""
    return sorted(locations, key=lambda loc: loc.id)
