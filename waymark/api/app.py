"""
FastAPI Application - REST API for preview hosts.

Endpoints:
    GET    /api/v1/health                        Health check
    POST   /api/v1/previews                      Open a preview of a project
    GET    /api/v1/previews                      List active previews
    GET    /api/v1/previews/{id}                 Preview status and current view
    DELETE /api/v1/previews/{id}                 End a preview
    POST   /api/v1/previews/{id}/select          Select a location (-1 = homescreen)
    POST   /api/v1/previews/{id}/scan            Simulate a code scan
    POST   /api/v1/codes/resolve                 Resolve code content to a navigation intent
    POST   /api/v1/codes/open                    Resolve code content and open a preview
    GET    /api/v1/locations/{id}/code           Code content for a location
    GET    /location/{payload}                   Scanner entry point (opens a preview)

Code-originated flow:
    1. A visitor scans a location's code (a URL ending in /location/<payload>)
    2. The payload is resolved to the location and its project
    3. The project's preview is opened and the location selected, scoring
       exactly like a manual selection

All responses are JSON with explicit Pydantic schemas.
"""

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..errors import ErrorCode, WaymarkError
from ..gateway import GatewayConfig, RestGateway
from ..log import get_logger
from .schemas import (
    CodePayloadRequest,
    CodeResponse,
    EndSessionResponse,
    ErrorResponse,
    EventResponse,
    HealthResponse,
    NavigationIntentResponse,
    OpenPreviewRequest,
    PreviewResponse,
    SelectLocationRequest,
    SessionListResponse,
)
from .service import APIService

logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.MALFORMED_PAYLOAD: 400,
    ErrorCode.INVALID_INDEX: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.SESSION_NOT_READY: 409,
    ErrorCode.GATEWAY_FAILURE: 502,
}


def create_app(service: APIService | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (environment settings if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Waymark Preview API",
        description="""
Preview engine for location-based experiences.

## Flow

1. **Open** a preview for a project
2. **Select** locations (or the homescreen, index -1)
3. **Scan** at code-triggered locations
4. **End** the preview when done

Scanned codes go through `/api/v1/codes/open` (or `/location/{payload}`),
which opens the project already at the scanned location.

## Error Codes

| Code | Description |
|------|-------------|
| `NOT_FOUND` | Project or location not found |
| `MALFORMED_PAYLOAD` | Code content could not be decoded |
| `GATEWAY_FAILURE` | Data API unavailable |
| `SESSION_NOT_FOUND` | Preview does not exist |
| `SESSION_NOT_READY` | Preview not accepting events |
| `INVALID_INDEX` | Location index out of range |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        gateway=RestGateway(GatewayConfig.from_settings(settings)),
        public_base_url=settings.PUBLIC_BASE_URL,
        session_max_age=settings.SESSION_MAX_AGE,
    )
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: WaymarkError) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=ErrorResponse(
                error=error.message,
                error_code=error.error_code,
                details=error.details or None,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(WaymarkError)
    async def handle_waymark_error(request: Request, exc: WaymarkError) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path} failed: {exc.error_code.value} {exc.message}")
        return make_error_response(exc)

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Preview Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/previews",
        response_model=PreviewResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Project not found"},
            502: {"model": ErrorResponse, "description": "Data API unavailable"},
        },
        tags=["Previews"],
        summary="Open a preview of a project",
    )
    async def open_preview(body: OpenPreviewRequest) -> PreviewResponse:
        """
        Load the project and its locations and start at the homescreen.

        Both must load; otherwise a single error is returned and no
        preview exists.
        """
        return await api_service.open_preview(body.project_id)

    @app.get(
        "/api/v1/previews",
        response_model=SessionListResponse,
        tags=["Previews"],
        summary="List active previews",
    )
    async def list_previews() -> SessionListResponse:
        sessions = api_service.list_previews()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/previews/{session_id}",
        response_model=PreviewResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Previews"],
        summary="Get preview status and current view",
    )
    async def get_preview(session_id: str) -> PreviewResponse:
        return api_service.get_preview(session_id)

    @app.delete(
        "/api/v1/previews/{session_id}",
        response_model=EndSessionResponse,
        tags=["Previews"],
        summary="End a preview",
    )
    async def end_preview(
        session_id: str,
        reason: str = Query(default="user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        success = api_service.end_preview(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/previews/{session_id}/select",
        response_model=EventResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Index out of range"},
            404: {"model": ErrorResponse, "description": "Preview not found"},
        },
        tags=["Visit"],
        summary="Select a location",
    )
    async def select_location(session_id: str, body: SelectLocationRequest) -> EventResponse:
        """Select a location by index; `-1` returns to the homescreen."""
        return api_service.select_location(session_id, body.index)

    @app.post(
        "/api/v1/previews/{session_id}/scan",
        response_model=EventResponse,
        responses={404: {"model": ErrorResponse, "description": "Preview not found"}},
        tags=["Visit"],
        summary="Simulate a code scan at the active location",
    )
    async def scan(session_id: str) -> EventResponse:
        """
        No-op on the homescreen and at entry-only locations.
        Every other scan scores again, including repeats.
        """
        return api_service.scan(session_id)

    # =========================================================================
    # Code Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/codes/resolve",
        response_model=NavigationIntentResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Malformed payload"},
            404: {"model": ErrorResponse, "description": "Location not found"},
        },
        tags=["Codes"],
        summary="Resolve code content to a navigation intent",
    )
    async def resolve_code(body: CodePayloadRequest) -> NavigationIntentResponse:
        return await api_service.resolve_code(body.payload)

    @app.post(
        "/api/v1/codes/open",
        response_model=PreviewResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Malformed payload"},
            404: {"model": ErrorResponse, "description": "Location not found"},
        },
        tags=["Codes"],
        summary="Open a preview at a scanned location",
    )
    async def open_from_code(body: CodePayloadRequest) -> PreviewResponse:
        return await api_service.open_from_code(body.payload)

    @app.get(
        "/location/{payload:path}",
        response_model=PreviewResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Malformed payload"},
            404: {"model": ErrorResponse, "description": "Location not found"},
        },
        tags=["Codes"],
        summary="Scanner entry point",
    )
    async def scanner_entry(payload: str) -> PreviewResponse:
        return await api_service.open_from_code(payload)

    @app.get(
        "/api/v1/locations/{location_id}/code",
        response_model=CodeResponse,
        responses={404: {"model": ErrorResponse, "description": "Location not found"}},
        tags=["Codes"],
        summary="Get the code content for a location",
    )
    async def location_code(location_id: int) -> CodeResponse:
        return await api_service.location_code(location_id)

    return app
