"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a preview host (web page, mobile
screen) and the engine.

Error Codes:
- NOT_FOUND: Project or location does not exist
- MALFORMED_PAYLOAD: Scanned code could not be decoded
- GATEWAY_FAILURE: Data API unavailable or answered badly
- SESSION_NOT_FOUND: Preview does not exist or has ended
- SESSION_NOT_READY: Preview is not accepting events
- INVALID_INDEX: Location index out of range
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..errors import ErrorCode


# =============================================================================
# Enums
# =============================================================================

class PreviewStatusValue(str, Enum):
    """Preview status values."""
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    DISPOSED = "disposed"


class ViewKind(str, Enum):
    """What the preview is showing."""
    HOMESCREEN = "homescreen"
    LOCATION = "location"


# =============================================================================
# Shared Models
# =============================================================================

class LocationInfo(BaseModel):
    """Location summary (no content)."""
    location_id: int
    project_id: int
    location_name: str
    trigger: str
    score_points: int = 0
    position: str = ""
    clue: str = ""


class LocationLinkInfo(BaseModel):
    """Homescreen list entry; select it with its index."""
    index: int
    location_id: int
    location_name: str


class HomescreenInfo(BaseModel):
    """Homescreen content."""
    title: str
    instructions: str
    display: str = Field(description="Display initial clue | Display all locations")
    initial_clue: Optional[str] = None
    locations: list[LocationLinkInfo] = Field(default_factory=list)


class LocationContentInfo(BaseModel):
    """Content of the active location. `content` is author markup, unescaped."""
    index: int
    location_id: int
    location_name: str
    content: str
    clue: Optional[str] = None
    can_scan: bool = False


class StatsInfo(BaseModel):
    """Running score and progress."""
    points: int = 0
    max_points: int = 0
    visited_count: int = 0
    location_count: int = 0


# =============================================================================
# Requests
# =============================================================================

class OpenPreviewRequest(BaseModel):
    """Open a preview of a project."""
    project_id: int


class SelectLocationRequest(BaseModel):
    """Select a location by index; -1 returns to the homescreen."""
    index: int = Field(ge=-1)


class CodePayloadRequest(BaseModel):
    """Content read from a scanned code: a bare id or a location record."""
    payload: Any


# =============================================================================
# Responses
# =============================================================================

class PreviewResponse(BaseModel):
    """Preview status with the current view."""
    session_id: str
    project_id: int
    status: PreviewStatusValue
    project_title: Optional[str] = None
    scoring: Optional[str] = None
    view: Optional[ViewKind] = None
    current_index: Optional[int] = None
    visited_ids: list[int] = Field(default_factory=list)
    homescreen: Optional[HomescreenInfo] = None
    location: Optional[LocationContentInfo] = None
    stats: Optional[StatsInfo] = None
    originated_from_code: bool = False


class EventResponse(BaseModel):
    """Outcome of a select or scan event."""
    session_id: str
    success: bool
    points_awarded: int = 0
    newly_visited: bool = False
    changes: list[str] = Field(default_factory=list)
    preview: PreviewResponse


class NavigationIntentResponse(BaseModel):
    """Where a scanned code leads."""
    project_id: int
    originated_from_code: bool = True
    initial_location: LocationInfo


class CodeResponse(BaseModel):
    """Code content for a location."""
    location_id: int
    project_id: int
    payload: str
    url: str


class SessionListResponse(BaseModel):
    """Active preview ids."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Result of ending a preview."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check."""
    status: str = "ok"
    version: str
    active_sessions: int = 0


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
