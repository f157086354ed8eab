"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values instead
of a bare ``1``. Signal codes are informational: ``lib_cli_exit_tools``
translates signals itself.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno where applicable.

    * 2: ENOENT (missing attachment or inline image)
    * 22: EINVAL (bad option value or address)
    * 69: EX_UNAVAILABLE (ZeptoMail unreachable or send rejected)
    * 78: EX_CONFIG (incomplete or invalid ``[zepto]`` configuration)
    * 128+N: signal N

    Example:
        >>> int(ExitCode.API_FAILURE)
        69
        >>> ExitCode.CONFIG_ERROR
        <ExitCode.CONFIG_ERROR: 78>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    API_FAILURE = 69
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
