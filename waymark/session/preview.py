"""
Preview Session - One visitor walking through one project.

LIFECYCLE:
1. Created in LOADING when the host opens a preview
2. Project and locations are fetched concurrently; both must arrive
3. READY: a VisitSession at the homescreen is built (and, when opened from
   a scanned code, the scanned location is selected)
4. FAILED: any load error; no visit session exists, one error message
5. DISPOSED: the host navigated away; late load results are discarded

Events (select, scan) are only accepted while READY.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import asyncio
import logging
import time

from ..engine_core.event import Event, EventResult
from ..engine_core.presenter import (
    HomescreenContent,
    LocationContent,
    VisitStats,
    current_content,
    visit_stats,
)
from ..engine_core.records import Location, Project
from ..engine_core.reducer import Reducer
from ..engine_core.state import VisitSession
from ..errors import ErrorCode, SessionNotReadyError, WaymarkError
from ..gateway.base import DataGateway
from ..log import get_logger, log_with_context
from ..resolver.resolver import NavigationIntent

logger = get_logger(__name__)


class PreviewStatus(Enum):
    """Lifecycle of a preview session."""
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    DISPOSED = "disposed"


@dataclass
class PreviewSession:
    """
    An ephemeral preview.

    Holds the loaded records, the reducer and the only handle to the
    visitor's VisitSession. Nothing is persisted.
    """
    session_id: str
    project_id: int
    created_at: float = field(default_factory=time.time)
    status: PreviewStatus = PreviewStatus.LOADING

    intent: NavigationIntent | None = None

    project: Project | None = None
    locations: list[Location] = field(default_factory=list)
    reducer: Reducer | None = None
    visit: VisitSession | None = None

    error: str | None = None
    error_code: ErrorCode | None = None

    last_activity: float = field(default_factory=time.time)
    history: list[str] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.status in {PreviewStatus.LOADING, PreviewStatus.READY}

    async def load(self, gateway: DataGateway) -> PreviewSession:
        """
        Fetch the project and its locations, then start the visit.

        Load errors never raise: the session moves to FAILED instead.
        Both fetches run to completion; the project's error is reported
        first when both fail.
        """
        project, locations = await asyncio.gather(
            gateway.get_project(self.project_id),
            gateway.get_locations(self.project_id),
            return_exceptions=True,
        )
        error = next(
            (r for r in (project, locations) if isinstance(r, BaseException)), None
        )
        if error is not None:
            if not isinstance(error, WaymarkError):
                raise error
            if self.status == PreviewStatus.DISPOSED:
                return self
            self.status = PreviewStatus.FAILED
            self.error = f"Failed to fetch data: {error.message}"
            self.error_code = error.error_code
            log_with_context(
                logger, logging.WARNING, "Preview load failed",
                session_id=self.session_id, project_id=self.project_id,
                error_code=error.error_code.value,
            )
            return self

        if self.status == PreviewStatus.DISPOSED:
            log_with_context(
                logger, logging.DEBUG, "Discarded load for disposed preview",
                session_id=self.session_id,
            )
            return self

        self.start(project, locations)
        return self

    def start(self, project: Project, locations: list[Location]) -> None:
        """Build the visit from fully loaded records."""
        self.project = project
        self.reducer = Reducer(project=project, locations=locations)
        self.locations = self.reducer.locations
        self.visit = VisitSession()
        self.status = PreviewStatus.READY
        log_with_context(
            logger, logging.INFO, "Preview ready",
            session_id=self.session_id, project_id=project.id,
            locations=len(self.locations),
        )

        if self.intent is not None:
            index = self.reducer.index_of(self.intent.initial_location.id)
            if index is not None:
                self.select(index, from_code=True)
            else:
                log_with_context(
                    logger, logging.WARNING, "Scanned location not in project",
                    session_id=self.session_id,
                    location_id=self.intent.initial_location.id,
                )

    def _require_ready(self) -> None:
        if self.status != PreviewStatus.READY or self.visit is None or self.reducer is None:
            raise SessionNotReadyError(
                f"Preview {self.session_id} is {self.status.value}",
                {"session_id": self.session_id, "status": self.status.value},
            )

    def _apply(self, event: Event) -> EventResult:
        self._require_ready()
        result = self.reducer.apply(self.visit, event)
        if result.success:
            self.visit = result.new_state
            self.history.extend(result.changes)
        self.last_activity = time.time()
        return result

    def select(self, index: int, from_code: bool = False) -> EventResult:
        """Select a location by index (-1 for the homescreen)."""
        return self._apply(Event.select(index, from_code=from_code))

    def scan(self) -> EventResult:
        """Simulate a code scan at the active location."""
        return self._apply(Event.scan())

    def content(self) -> HomescreenContent | LocationContent:
        self._require_ready()
        return current_content(self.project, self.locations, self.visit)

    def stats(self) -> VisitStats:
        self._require_ready()
        return visit_stats(self.project, self.locations, self.visit)

    def dispose(self) -> None:
        """Drop all visitor state. Late loads are ignored afterwards."""
        self.status = PreviewStatus.DISPOSED
        self.visit = None
        self.reducer = None
        self.history.clear()
