"""
Gateway Module - Read-only data access.

The engine consumes projects and locations through DataGateway.
RestGateway talks to the data API; InMemoryGateway serves fixtures.
"""

from .base import DataGateway
from .memory import InMemoryGateway
from .rest import GatewayConfig, RestGateway

__all__ = [
    "DataGateway",
    "InMemoryGateway",
    "GatewayConfig",
    "RestGateway",
]
