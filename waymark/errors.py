"""
Error taxonomy for the preview engine.

Failures surfaced to the host are terminal for the request:
- NotFoundError: project or location missing
- MalformedPayloadError: scanned code content undecodable or missing its id
- GatewayFailure: transport/availability problem in the data gateway

No error is retried by the engine.
"""

from __future__ import annotations
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Structured error codes shared by the service and HTTP layers."""
    NOT_FOUND = "NOT_FOUND"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    GATEWAY_FAILURE = "GATEWAY_FAILURE"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_NOT_READY = "SESSION_NOT_READY"
    INVALID_INDEX = "INVALID_INDEX"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class WaymarkError(Exception):
    """Base class for all engine errors."""
    error_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(WaymarkError):
    """A project or location does not exist in the data store."""
    error_code = ErrorCode.NOT_FOUND


class MalformedPayloadError(WaymarkError):
    """A scanned code payload could not be decoded."""
    error_code = ErrorCode.MALFORMED_PAYLOAD


class GatewayFailure(WaymarkError):
    """The data gateway could not be reached or answered badly."""
    error_code = ErrorCode.GATEWAY_FAILURE


class ResolutionError(WaymarkError):
    """
    A scanned code could not be turned into a navigation intent.

    `kind` is MALFORMED_PAYLOAD or NOT_FOUND; gateway failures during
    resolution are reported as NOT_FOUND.
    """

    def __init__(
        self,
        kind: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.kind = kind
        self.error_code = kind


class SessionNotReadyError(WaymarkError):
    """An event reached a preview that is still loading, failed or disposed."""
    error_code = ErrorCode.SESSION_NOT_READY


class SessionNotFoundError(WaymarkError):
    """No preview session with the given id."""
    error_code = ErrorCode.SESSION_NOT_FOUND


class InvalidIndexError(WaymarkError):
    """A selection named a location index outside the loaded sequence."""
    error_code = ErrorCode.INVALID_INDEX
