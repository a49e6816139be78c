"""
Code Resolver - Turns scanned code content into a navigation intent.

The resolver never touches a visit session. The host loads the intent's
project and then selects the location through the normal reducer path, so
code-originated entry scores exactly like a manual selection.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any
import logging

from ..engine_core.records import Location
from ..errors import ErrorCode, GatewayFailure, MalformedPayloadError, NotFoundError, ResolutionError
from ..gateway.base import DataGateway
from ..log import get_logger, log_with_context
from .payload import CodePayload, StructuredPayload, decode_payload

logger = get_logger(__name__)


@dataclass(frozen=True)
class NavigationIntent:
    """Which project to open, with which location pre-selected."""
    project_id: int
    initial_location: Location
    originated_from_code: bool = True
    payload: CodePayload | None = None


class CodeResolver:
    """
    Resolves code payloads against the data gateway.

    Usage:
        resolver = CodeResolver(gateway)
        intent = await resolver.resolve('{"id": 3, "project_id": 1}')
    """

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    async def resolve(self, raw: Any) -> NavigationIntent:
        """
        Resolve a payload.

        Raises:
            ResolutionError: kind MALFORMED_PAYLOAD or NOT_FOUND
        """
        try:
            payload = decode_payload(raw)
        except MalformedPayloadError as e:
            logger.info(f"Rejected code payload: {e.message}")
            raise ResolutionError(ErrorCode.MALFORMED_PAYLOAD, e.message, e.details) from e

        location_id = payload.location_id
        try:
            location = await self.gateway.get_location(location_id)
        except (NotFoundError, GatewayFailure) as e:
            log_with_context(
                logger, logging.INFO, "Code location lookup failed",
                location_id=location_id, reason=e.error_code.value,
            )
            raise ResolutionError(
                ErrorCode.NOT_FOUND,
                f"Location {location_id} not found",
                {"location_id": location_id},
            ) from e

        if isinstance(payload, StructuredPayload) and payload.project_id != location.project_id:
            log_with_context(
                logger, logging.WARNING, "Code project differs from stored location",
                location_id=location_id,
                code_project_id=payload.project_id,
                stored_project_id=location.project_id,
            )

        return NavigationIntent(
            project_id=location.project_id,
            initial_location=location,
            originated_from_code=True,
            payload=payload,
        )
