"""ZeptoMail endpoint resolution.

The API host depends on the account's data-center region, expressed as the
top-level domain of the API host (``com``, ``eu``, ``in``, ...).
"""

from __future__ import annotations

from typing import Final

API_VERSION: Final[str] = "v1.1"
HOST_TEMPLATE: Final[str] = "api.zeptomail.{region}/{version}/email"
OUTBOUND_SCHEME: Final[str] = "https"
DISPLAY_SCHEME: Final[str] = "zepto+api"


def normalize_region(region: str) -> str:
    """Strip leading dots from a region code.

    Example:
        >>> normalize_region(".eu")
        'eu'
        >>> normalize_region("com")
        'com'
    """
    return region.lstrip(".")


def resolve_endpoint(region: str, host: str | None = None) -> str:
    """Return the endpoint authority and path, without scheme.

    An explicit *host* is used verbatim; otherwise the endpoint is computed
    from *region*.

    Example:
        >>> resolve_endpoint("eu")
        'api.zeptomail.eu/v1.1/email'
        >>> resolve_endpoint("eu", "localhost:8080/email")
        'localhost:8080/email'
    """
    if host:
        return host
    return HOST_TEMPLATE.format(region=region, version=API_VERSION)


def outbound_url(endpoint: str) -> str:
    """Return the URL the send call is posted to.

    Example:
        >>> outbound_url("api.zeptomail.eu/v1.1/email")
        'https://api.zeptomail.eu/v1.1/email'
    """
    return f"{OUTBOUND_SCHEME}://{endpoint}"


def display_form(endpoint: str) -> str:
    """Return the human-facing transport name.

    Example:
        >>> display_form("api.zeptomail.eu/v1.1/email")
        'zepto+api://api.zeptomail.eu/v1.1/email'
    """
    return f"{DISPLAY_SCHEME}://{endpoint}"


__all__ = [
    "API_VERSION",
    "DISPLAY_SCHEME",
    "HOST_TEMPLATE",
    "OUTBOUND_SCHEME",
    "display_form",
    "normalize_region",
    "outbound_url",
    "resolve_endpoint",
]
