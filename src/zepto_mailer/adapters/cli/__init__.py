"""CLI package providing the ``zepto-mailer`` command line.

Contents:
    * Root command group from :mod:`.root`
    * Entry point from :mod:`.main`
    * Command functions from :mod:`.commands`
    * Click context and traceback helpers from :mod:`.context`
    * Exit codes from :mod:`.exit_codes`
"""

from __future__ import annotations

from .commands import (
    cli_config,
    cli_endpoint,
    cli_info,
    cli_send_email,
    cli_send_notification,
)
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    TracebackState,
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "ExitCode",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_endpoint",
    "cli_info",
    "cli_send_email",
    "cli_send_notification",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
