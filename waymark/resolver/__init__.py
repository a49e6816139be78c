"""
Resolver Module - Scanned codes to navigation intents.

Decodes the content of a location's code (bare id or structured record),
looks the location up and tells the host which preview to open.
"""

from .payload import BareId, StructuredPayload, CodePayload, decode_payload, encode_payload, code_url
from .resolver import CodeResolver, NavigationIntent

__all__ = [
    "BareId",
    "StructuredPayload",
    "CodePayload",
    "decode_payload",
    "encode_payload",
    "code_url",
    "CodeResolver",
    "NavigationIntent",
]
