"""Type-safe domain enums."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class Scheme(str, Enum):
    """Connection descriptor schemes served by the ZeptoMail factory.

    Both schemes select the HTTP API transport; ``zepto`` is the short alias.

    Example:
        >>> [s.value for s in Scheme]
        ['zepto', 'zepto+api']
        >>> Scheme("zepto+api") is Scheme.API
        True
    """

    DEFAULT = "zepto"
    API = "zepto+api"


__all__ = [
    "OutputFormat",
    "Scheme",
]
