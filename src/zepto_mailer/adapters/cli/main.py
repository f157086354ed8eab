"""Run the ``zepto-mailer`` command group and turn its outcome into an exit code.

Both the console script and ``python -m zepto_mailer`` go through :func:`main`.
Click usage errors keep Click's own rendering; every other escaping exception
(including the ``SystemExit`` raised by the email commands) is reported and
mapped by lib_cli_exit_tools. The lib_log_rich runtime is shut down last so
queued log records reach their sinks.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from zepto_mailer import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)
from .root import cli

if TYPE_CHECKING:
    from zepto_mailer.composition import AppServices


def _report(exc: BaseException) -> int:
    """Print *exc* through lib_cli_exit_tools and return its exit code."""
    verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(verbose)
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _invoke(args: list[str], services_factory: Callable[[], AppServices]) -> int:
    # standalone_mode=False: lib_cli_exit_tools, not Click, owns the exit code.
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:
        return _report(exc)
    return 0


def _shutdown_logging() -> None:
    if threading.current_thread() is not threading.main_thread():
        return
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when None.
        restore_traceback: Put the lib_cli_exit_tools traceback flags back
            to their previous values afterwards.
        services_factory: Returns the AppServices the commands use. Callers
            outside the adapters layer pass ``build_production``.

    Raises:
        ValueError: If services_factory is not provided.

    Example:
        >>> from zepto_mailer.composition import build_production
        >>> main(["endpoint", "--region", "eu", "--api-key", "KEY"], services_factory=build_production)  # doctest: +SKIP
        zepto+api://api.zeptomail.eu/v1.1/email
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    args = list(argv) if argv is not None else sys.argv[1:]
    previous_state = snapshot_traceback_state()
    try:
        return _invoke(args, services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        _shutdown_logging()


__all__ = ["main"]
