"""CLI command implementations.

Collects all subcommand functions for registration with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Email commands from :mod:`.email` (subpackage)
"""

from __future__ import annotations

from .config import cli_config
from .email import cli_endpoint, cli_send_email, cli_send_notification
from .info import cli_info

__all__ = [
    "cli_config",
    "cli_endpoint",
    "cli_info",
    "cli_send_email",
    "cli_send_notification",
]
