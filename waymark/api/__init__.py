"""
API Module - HTTP interface for preview hosts.

A host (authoring web app, phone browser after a scan):
1. Opens a preview for a project
2. Forwards the visitor's selections and simulated scans
3. Renders the returned view (homescreen or location)
4. Sends scanned code content to be resolved into a preview

All state is session-scoped. Nothing about a visit is persisted.
"""

from .schemas import (
    # Requests
    OpenPreviewRequest,
    SelectLocationRequest,
    CodePayloadRequest,
    # Responses
    PreviewResponse,
    EventResponse,
    NavigationIntentResponse,
    CodeResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    LocationInfo,
    HomescreenInfo,
    LocationContentInfo,
    StatsInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "OpenPreviewRequest",
    "SelectLocationRequest",
    "CodePayloadRequest",
    # Responses
    "PreviewResponse",
    "EventResponse",
    "NavigationIntentResponse",
    "CodeResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "LocationInfo",
    "HomescreenInfo",
    "LocationContentInfo",
    "StatsInfo",
    # Service
    "APIService",
    "create_app",
]
