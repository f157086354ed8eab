"""Static package metadata surfaced to CLI commands and documentation.

The ``version`` line is kept in sync with ``pyproject.toml``; the
``LAYEREDCONF_*`` identifiers select the platform configuration paths used
by lib_layered_config.
"""

from __future__ import annotations

name = "zepto_mailer"
title = "Send transactional email through the ZeptoMail HTTP API"
version = "1.0.0"
shell_command = "zepto-mailer"

#: Vendor directory component (macOS / Windows configuration paths).
LAYEREDCONF_VENDOR = "zepto_mailer"
#: Application directory component (macOS / Windows configuration paths).
LAYEREDCONF_APP = "zepto_mailer"
#: Directory slug for XDG paths on Linux and the environment variable prefix.
LAYEREDCONF_SLUG = "zepto-mailer"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for zepto_mailer:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
