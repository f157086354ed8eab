"""ZeptoMail request payload construction.

Pure transformation of an :class:`~email.message.EmailMessage` and its
:class:`~zepto_mailer.domain.envelope.Envelope` into the JSON-serializable
body of the ``/v1.1/email`` call. No network or file I/O happens here.

Contents:
    * :func:`text_body` / :func:`html_body` - Message bodies or ``None``.
    * :func:`iter_attachments` - Every non-body leaf part, in tree order.
    * :func:`classify_attachments` - Split into attachments and inline images.
    * :func:`build_payload` - The complete request document.

Note:
    The API limits the total size of one request (attachments included)
    to 10 MB. The limit is enforced by the provider, not here.
"""

from __future__ import annotations

import base64
from collections.abc import Iterator
from email.headerregistry import Address
from email.message import EmailMessage, Message
from typing import Any

from .envelope import Envelope, message_addresses
from .headers import filter_headers

AttachmentEntry = dict[str, str | None]
"""One ``attachments`` or ``inline_images`` item of the payload."""

INLINE_DISPOSITION = "inline"
IMAGE_CONTENT_PREFIX = "image/"


def _has_content(message: Message) -> bool:
    return message.get_payload() is not None


def _body_part(message: EmailMessage, subtype: str) -> EmailMessage | None:
    if not _has_content(message):
        return None
    part = message.get_body(preferencelist=(subtype,))
    if part is None or part.get_content_type() != f"text/{subtype}":
        return None
    return part


def text_body(message: EmailMessage) -> str | None:
    """Return the plain-text body of *message*, or ``None`` when it has none.

    Example:
        >>> msg = EmailMessage()
        >>> msg.set_content("Hello There!")
        >>> text_body(msg)
        'Hello There!\\n'
        >>> text_body(EmailMessage()) is None
        True
    """
    part = _body_part(message, "plain")
    return part.get_content() if part is not None else None


def html_body(message: EmailMessage) -> str | None:
    """Return the HTML body of *message*, or ``None`` when it has none."""
    part = _body_part(message, "html")
    return part.get_content() if part is not None else None


def _leaf_parts(part: EmailMessage) -> Iterator[EmailMessage]:
    if part.get_content_maintype() == "multipart":
        for sub_part in part.iter_parts():
            yield from _leaf_parts(sub_part)  # type: ignore[arg-type]
    else:
        yield part


def iter_attachments(message: EmailMessage) -> Iterator[EmailMessage]:
    """Yield every leaf part that is neither the text nor the HTML body.

    Parts are yielded in document order. Attached messages
    (``message/rfc822``) are yielded whole.
    """
    if not _has_content(message):
        return
    bodies = [part for part in (_body_part(message, "plain"), _body_part(message, "html")) if part is not None]
    for part in _leaf_parts(message):
        if any(part is body for body in bodies):
            continue
        yield part


def attachment_bytes(part: Message) -> bytes:
    """Return the decoded body bytes of an attachment part."""
    if part.get_content_maintype() == "message":
        payload = part.get_payload()
        if isinstance(payload, list) and payload:
            return payload[0].as_bytes()
    data = part.get_payload(decode=True)
    return data if isinstance(data, bytes) else b""


def _attachment_entry(part: Message) -> AttachmentEntry:
    return {
        "name": part.get_filename(),
        "content": base64.b64encode(attachment_bytes(part)).decode("ascii"),
        "mime_type": part.get_content_type(),
    }


def classify_attachments(message: EmailMessage) -> tuple[list[AttachmentEntry], list[AttachmentEntry]]:
    """Split the attachments of *message* into regular ones and inline images.

    Rules:
        * disposition ``inline`` with an ``image/*`` content type becomes an
          inline image whose ``cid`` is its filename;
        * disposition ``inline`` with any other content type is dropped;
        * everything else (no disposition, ``attachment``, ...) is a regular
          attachment.

    Returns:
        ``(attachments, inline_images)``, each in original part order.
    """
    attachments: list[AttachmentEntry] = []
    inline_images: list[AttachmentEntry] = []
    for part in iter_attachments(message):
        if part.get_content_disposition() != INLINE_DISPOSITION:
            attachments.append(_attachment_entry(part))
            continue
        if not part.get_content_type().lower().startswith(IMAGE_CONTENT_PREFIX):
            continue
        entry = _attachment_entry(part)
        entry["cid"] = entry["name"]
        inline_images.append(entry)
    return attachments, inline_images


def stringify_address(address: Address) -> dict[str, str]:
    """Render *address* as ``{"address": ..., "name": ...}``.

    Example:
        >>> stringify_address(Address("Saif Eddin", addr_spec="saif.gmati@symfony.com"))
        {'address': 'saif.gmati@symfony.com', 'name': 'Saif Eddin'}
        >>> stringify_address(Address(addr_spec="fabpot@symfony.com"))
        {'address': 'fabpot@symfony.com'}
    """
    stringified = {"address": address.addr_spec}
    if address.display_name:
        stringified["name"] = address.display_name
    return stringified


def direct_recipients(envelope: Envelope) -> list[Address]:
    """Return the envelope recipients that belong in ``to``.

    A header-derived envelope contributes only its ``To`` addresses; its Cc
    and Bcc recipients travel in their own payload fields. An explicit
    envelope is authoritative and every recipient is kept.
    """
    if envelope.to_count is None:
        return list(envelope.recipients)
    return list(envelope.recipients[: envelope.to_count])


def build_payload(
    message: EmailMessage,
    envelope: Envelope,
    *,
    track_clicks: bool = False,
    track_opens: bool = False,
) -> dict[str, Any]:
    """Build the JSON document for one send call.

    Args:
        message: The message to send; read only.
        envelope: Authoritative sender and recipients.
        track_clicks: Ask the provider to rewrite links for click tracking.
        track_opens: Ask the provider to add an open-tracking pixel.

    Returns:
        A fresh dict; ``cc``, ``bcc`` and ``reply_to`` are present only
        when the message has such addresses.
    """
    attachments, inline_images = classify_attachments(message)
    subject = message["Subject"]
    data: dict[str, Any] = {
        "from": stringify_address(envelope.sender),
        "to": [{"email_address": stringify_address(r)} for r in direct_recipients(envelope)],
        "htmlbody": html_body(message),
        "textbody": text_body(message),
        "subject": str(subject) if subject is not None else None,
        "attachments": attachments,
        "track_clicks": track_clicks,
        "track_opens": track_opens,
        "mime_headers": filter_headers(message),
        "inline_images": inline_images,
    }
    for header_name, key in (("Cc", "cc"), ("Bcc", "bcc"), ("Reply-To", "reply_to")):
        if emails := [stringify_address(a) for a in message_addresses(message, header_name)]:
            data[key] = emails

    return data


__all__ = [
    "AttachmentEntry",
    "attachment_bytes",
    "build_payload",
    "classify_attachments",
    "direct_recipients",
    "html_body",
    "iter_attachments",
    "stringify_address",
    "text_body",
]
