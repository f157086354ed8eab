"""Email CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Send email with HTML, attachments and inline images.
    * :func:`.send_notification.cli_send_notification` - Send simple plain-text notification.
    * :func:`.endpoint.cli_endpoint` - Show the configured transport.
"""

from __future__ import annotations

from ._common import filter_sentinels
from .endpoint import cli_endpoint
from .send_email import cli_send_email
from .send_notification import cli_send_notification

__all__ = ["cli_endpoint", "cli_send_email", "cli_send_notification", "filter_sentinels"]
