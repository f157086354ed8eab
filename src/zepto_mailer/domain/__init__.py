"""Domain layer - pure mapping logic with no network or framework I/O.

Contents:
    * :mod:`.envelope` - Envelope and sent-message value objects
    * :mod:`.headers` - Custom header helpers and the forwarding filter
    * :mod:`.payload` - Request payload and attachment classification
    * :mod:`.responses` - Response outcomes
    * :mod:`.endpoint` - Endpoint resolution
    * :mod:`.dsn` - Connection descriptor
    * :mod:`.enums` - Domain enumerations
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .dsn import Dsn
from .endpoint import display_form, normalize_region, outbound_url, resolve_endpoint
from .envelope import Envelope, SentMessage, parse_address
from .enums import OutputFormat, Scheme
from .errors import (
    ApiRejectedError,
    ApiRejectedOpaqueError,
    ConfigurationError,
    DeliveryError,
    EnvelopeError,
    HttpTransportError,
    IncompleteDsnError,
    InvalidDsnError,
    InvalidRecipientError,
    TransportUnreachableError,
    UnsupportedSchemeError,
)
from .headers import add_metadata, add_tag, filter_headers
from .payload import build_payload, classify_attachments
from .responses import Accepted, Rejected, RejectedOpaque, SendOutcome, interpret_response

__all__ = [
    # Value objects
    "Dsn",
    "Envelope",
    "SentMessage",
    "parse_address",
    # Mapping
    "add_metadata",
    "add_tag",
    "build_payload",
    "classify_attachments",
    "filter_headers",
    # Endpoint
    "display_form",
    "normalize_region",
    "outbound_url",
    "resolve_endpoint",
    # Responses
    "Accepted",
    "Rejected",
    "RejectedOpaque",
    "SendOutcome",
    "interpret_response",
    # Enums
    "OutputFormat",
    "Scheme",
    # Errors
    "ApiRejectedError",
    "ApiRejectedOpaqueError",
    "ConfigurationError",
    "DeliveryError",
    "EnvelopeError",
    "HttpTransportError",
    "IncompleteDsnError",
    "InvalidDsnError",
    "InvalidRecipientError",
    "TransportUnreachableError",
    "UnsupportedSchemeError",
]
