"""Public package surface for sending email through ZeptoMail.

Routes imports through the architectural layers:
- Domain exports: envelope, payload building, errors
- Adapter exports: the HTTP transport and its factory
- Composition exports: wired configuration access
- Metadata: package information
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.zepto import ZeptoApiTransport, ZeptoTransportFactory
from .composition import get_config
from .domain import (
    Dsn,
    Envelope,
    SentMessage,
    build_payload,
)
from .domain.errors import (
    ConfigurationError,
    DeliveryError,
    HttpTransportError,
)

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "Dsn",
    "Envelope",
    "HttpTransportError",
    "SentMessage",
    "ZeptoApiTransport",
    "ZeptoTransportFactory",
    "build_payload",
    "get_config",
    "print_info",
]
