"""Custom mail headers: tag/metadata helpers and the forwarding filter.

ZeptoMail receives user-defined headers through the ``mime_headers`` object
of the request. Headers the API derives itself (addresses, subject, dates,
trace headers) must not be forwarded.
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import Final

#: Header names never forwarded as custom headers (lower-case).
BYPASS_HEADERS: Final[frozenset[str]] = frozenset(
    {
        "date",
        "x-csa-complaints",
        "message-id",
        "domainkey-status",
        "received-spf",
        "authentication-results",
        "received",
        "from",
        "sender",
        "subject",
        "to",
        "cc",
        "bcc",
        "reply-to",
        "return-path",
        "delivered-to",
        "dkim-signature",
        "list-id",
        "user-agent",
        "x-mailer",
    }
)

#: MIME structure headers of the message tree; the payload carries bodies
#: and attachments in its own fields.
MIME_STRUCTURE_HEADERS: Final[frozenset[str]] = frozenset(
    {
        "mime-version",
        "content-type",
        "content-transfer-encoding",
        "content-disposition",
        "content-id",
    }
)

TAG_HEADER: Final[str] = "X-Tag"
METADATA_HEADER_PREFIX: Final[str] = "X-Metadata-"


def add_tag(message: EmailMessage, tag: str) -> None:
    """Attach a provider tag to *message* as an ``X-Tag`` header.

    Example:
        >>> msg = EmailMessage()
        >>> add_tag(msg, "category-one")
        >>> msg["X-Tag"]
        'category-one'
    """
    message[TAG_HEADER] = tag


def add_metadata(message: EmailMessage, key: str, value: str) -> None:
    """Attach a metadata key/value pair as an ``X-Metadata-<key>`` header.

    Example:
        >>> msg = EmailMessage()
        >>> add_metadata(msg, "Client-ID", "12345")
        >>> msg["X-Metadata-Client-ID"]
        '12345'
    """
    if not key:
        raise ValueError("Metadata key must not be empty")
    message[f"{METADATA_HEADER_PREFIX}{key}"] = value


def is_forwarded(name: str) -> bool:
    """Return True when a header called *name* belongs in ``mime_headers``.

    Example:
        >>> is_forwarded("Message-ID"), is_forwarded("X-Tag")
        (False, True)
    """
    lowered = name.lower()
    return lowered not in BYPASS_HEADERS and lowered not in MIME_STRUCTURE_HEADERS


def filter_headers(message: EmailMessage) -> dict[str, str]:
    """Return the custom headers of *message* keyed by their declared name.

    Headers are visited in message order, so when the same declared name
    occurs more than once the last value wins.

    Example:
        >>> msg = EmailMessage()
        >>> msg["Subject"] = "Hello!"
        >>> msg["foo"] = "bar"
        >>> filter_headers(msg)
        {'foo': 'bar'}
    """
    return {name: str(value) for name, value in message.items() if is_forwarded(name)}


__all__ = [
    "BYPASS_HEADERS",
    "METADATA_HEADER_PREFIX",
    "MIME_STRUCTURE_HEADERS",
    "TAG_HEADER",
    "add_metadata",
    "add_tag",
    "filter_headers",
    "is_forwarded",
]
