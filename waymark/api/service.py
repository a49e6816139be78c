"""
API Service - Business logic layer between the HTTP surface and the engine.

The service:
1. Opens and ends preview sessions
2. Forwards select/scan events
3. Resolves scanned codes into navigation intents
4. Formats responses for the host

This layer is framework-agnostic. Failures are raised as WaymarkError
subclasses; the HTTP layer maps them to error responses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .. import __version__
from ..engine_core.event import EventResult
from ..engine_core.presenter import HomescreenContent
from ..engine_core.records import Location
from ..errors import (
    ErrorCode,
    GatewayFailure,
    InvalidIndexError,
    NotFoundError,
    SessionNotFoundError,
)
from ..gateway.base import DataGateway
from ..log import get_logger
from ..resolver import CodeResolver, NavigationIntent, code_url, encode_payload
from ..session import PreviewSession, PreviewStatus, SessionManager
from .schemas import (
    CodeResponse,
    EventResponse,
    HealthResponse,
    HomescreenInfo,
    LocationContentInfo,
    LocationInfo,
    LocationLinkInfo,
    NavigationIntentResponse,
    PreviewResponse,
    PreviewStatusValue,
    StatsInfo,
    ViewKind,
)

logger = get_logger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(gateway=InMemoryGateway(...))

        preview = await service.open_preview(project_id)
        event = service.select_location(preview.session_id, 0)
        event = service.scan(preview.session_id)
    """
    gateway: DataGateway
    public_base_url: str = "http://localhost:8000"
    session_max_age: int | None = None
    session_manager: SessionManager | None = None
    resolver: CodeResolver | None = None

    _load_errors: dict[ErrorCode, type] = field(
        default_factory=lambda: {
            ErrorCode.NOT_FOUND: NotFoundError,
            ErrorCode.GATEWAY_FAILURE: GatewayFailure,
        }
    )

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(self.gateway)
        if self.resolver is None:
            self.resolver = CodeResolver(self.gateway)

    # =========================================================================
    # Previews
    # =========================================================================

    async def open_preview(
        self,
        project_id: int,
        intent: NavigationIntent | None = None,
    ) -> PreviewResponse:
        """
        Open a preview of a project.

        A failed load ends the session and raises; no partial preview is
        ever returned. Idle previews older than `session_max_age`
        are cleaned up first.
        """
        if self.session_max_age is not None:
            self.cleanup(self.session_max_age)
        session = await self.session_manager.open_session(project_id, intent)
        if session.status == PreviewStatus.FAILED:
            self.session_manager.end_session(session.session_id, reason="load_failed")
            error_cls = self._load_errors.get(session.error_code, GatewayFailure)
            raise error_cls(session.error, {"project_id": project_id})
        return self._session_to_response(session)

    def get_preview(self, session_id: str) -> PreviewResponse:
        return self._session_to_response(self._get_session(session_id))

    def end_preview(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_previews(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def select_location(self, session_id: str, index: int) -> EventResponse:
        session = self._get_session(session_id)
        result = session.select(index)
        return self._event_to_response(session, result)

    def scan(self, session_id: str) -> EventResponse:
        session = self._get_session(session_id)
        result = session.scan()
        return self._event_to_response(session, result)

    def cleanup(self, max_age_seconds: int) -> int:
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    def health(self) -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(self.session_manager.list_active_sessions()),
        )

    # =========================================================================
    # Codes
    # =========================================================================

    async def resolve_code(self, payload: Any) -> NavigationIntentResponse:
        """Resolve code content to a navigation intent (no session is touched)."""
        intent = await self.resolver.resolve(payload)
        return NavigationIntentResponse(
            project_id=intent.project_id,
            originated_from_code=intent.originated_from_code,
            initial_location=self._location_info(intent.initial_location),
        )

    async def open_from_code(self, payload: Any) -> PreviewResponse:
        """Resolve code content and open its project at the scanned location."""
        intent = await self.resolver.resolve(payload)
        logger.info(f"Opening project {intent.project_id} from code for location {intent.initial_location.id}")
        return await self.open_preview(intent.project_id, intent)

    async def location_code(self, location_id: int) -> CodeResponse:
        """Code content for a location, as printed on its QR code."""
        location = await self.gateway.get_location(location_id)
        return CodeResponse(
            location_id=location.id,
            project_id=location.project_id,
            payload=encode_payload(location),
            url=code_url(location, self.public_base_url),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_session(self, session_id: str) -> PreviewSession:
        session = self.session_manager.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(
                f"Session {session_id} not found", {"session_id": session_id}
            )
        return session

    def _event_to_response(self, session: PreviewSession, result: EventResult) -> EventResponse:
        if not result.success:
            raise InvalidIndexError(result.error or "Event rejected", {"session_id": session.session_id})
        return EventResponse(
            session_id=session.session_id,
            success=result.success,
            points_awarded=result.points_awarded,
            newly_visited=result.newly_visited,
            changes=result.changes,
            preview=self._session_to_response(session),
        )

    @staticmethod
    def _location_info(location: Location) -> LocationInfo:
        return LocationInfo(
            location_id=location.id,
            project_id=location.project_id,
            location_name=location.location_name,
            trigger=location.location_trigger.value,
            score_points=location.score_points,
            position=location.position,
            clue=location.clue,
        )

    def _session_to_response(self, session: PreviewSession) -> PreviewResponse:
        response = PreviewResponse(
            session_id=session.session_id,
            project_id=session.project_id,
            status=PreviewStatusValue(session.status.value),
            originated_from_code=session.intent is not None,
        )
        if session.status != PreviewStatus.READY:
            return response

        project = session.project
        visit = session.visit
        stats = session.stats()
        content = session.content()

        response.project_title = project.title
        response.scoring = project.participant_scoring.value
        response.current_index = visit.current_index
        response.visited_ids = sorted(visit.visited_ids)
        response.stats = StatsInfo(
            points=stats.points,
            max_points=stats.max_points,
            visited_count=stats.visited_count,
            location_count=stats.location_count,
        )

        if isinstance(content, HomescreenContent):
            response.view = ViewKind.HOMESCREEN
            response.homescreen = HomescreenInfo(
                title=content.title,
                instructions=content.instructions,
                display=content.display.value,
                initial_clue=content.initial_clue,
                locations=[
                    LocationLinkInfo(
                        index=link.index,
                        location_id=link.location_id,
                        location_name=link.location_name,
                    )
                    for link in content.locations
                ],
            )
        else:
            response.view = ViewKind.LOCATION
            response.location = LocationContentInfo(
                index=content.index,
                location_id=content.location_id,
                location_name=content.location_name,
                content=content.content,
                clue=content.clue,
                can_scan=content.can_scan,
            )
        return response
