"""ZeptoMail adapter - HTTP API email sending.

Structure:
    * :mod:`.config` - ZeptoConfig model and loader
    * :mod:`.transport` - httpx transport posting to the send-email endpoint
    * :mod:`.factory` - Transport construction from connection descriptors
    * :mod:`.sender` - Message composition and send functions
    * :mod:`.validation` - Runtime address validation
"""

from __future__ import annotations

from .config import ZeptoConfig, load_zepto_config_from_dict
from .factory import ZeptoTransportFactory
from .sender import build_message, compose_email, create_transport, send_email, send_notification
from .transport import ZeptoApiTransport

__all__ = [
    "ZeptoApiTransport",
    "ZeptoConfig",
    "ZeptoTransportFactory",
    "build_message",
    "compose_email",
    "create_transport",
    "load_zepto_config_from_dict",
    "send_email",
    "send_notification",
]
