"""Compose messages and send them through ZeptoMail.

Provides the send_email and send_notification functions used by the CLI and
library callers. Messages are built as :class:`~email.message.EmailMessage`
objects and handed to a transport created from :class:`ZeptoConfig`.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Mapping, Sequence
from email.message import EmailMessage
from pathlib import Path

import httpx

from zepto_mailer.domain.envelope import Envelope, SentMessage
from zepto_mailer.domain.headers import add_metadata, add_tag

from .config import ZeptoConfig
from .factory import ZeptoTransportFactory
from .transport import ZeptoApiTransport
from .validation import validate_addresses

logger = logging.getLogger(__name__)

_FALLBACK_CONTENT_TYPE = "application/octet-stream"


def create_transport(config: ZeptoConfig, client: httpx.Client | None = None) -> ZeptoApiTransport:
    """Create the transport described by *config*.

    Raises:
        ConfigurationError: When the settings do not describe a usable
            transport (unsupported scheme, missing region or API key).
    """
    return ZeptoTransportFactory(client, timeout=config.timeout).create(config.to_dsn())


def _resolve_sender(config: ZeptoConfig, from_address: str | None) -> str:
    """Return the override sender, else the configured one.

    Raises:
        ValueError: When neither is available.
    """
    sender = from_address if from_address is not None else config.from_address
    if sender is None:
        raise ValueError("No from_address configured and no override provided")
    return sender


def _as_list(addresses: str | Sequence[str] | None) -> list[str]:
    if addresses is None:
        return []
    return [addresses] if isinstance(addresses, str) else list(addresses)


def _resolve_recipients(config: ZeptoConfig, recipients: str | Sequence[str] | None) -> list[str]:
    """Return the override recipients, else the configured ones.

    Raises:
        ValueError: When no recipients are available from either source.
    """
    recipient_list = _as_list(recipients) if recipients is not None else list(config.recipients)
    if not recipient_list:
        raise ValueError("No recipients configured and no override provided")
    return recipient_list


def _guess_content_type(path: Path) -> tuple[str, str]:
    content_type, _ = mimetypes.guess_type(path.name)
    maintype, _, subtype = (content_type or _FALLBACK_CONTENT_TYPE).partition("/")
    return maintype, subtype


def build_message(
    *,
    sender: str,
    recipients: Sequence[str],
    subject: str,
    body: str = "",
    body_html: str = "",
    cc: Sequence[str] = (),
    bcc: Sequence[str] = (),
    reply_to: Sequence[str] = (),
    attachments: Sequence[Path] = (),
    inline_images: Sequence[Path] = (),
    tag: str | None = None,
    metadata: Mapping[str, str] | None = None,
) -> EmailMessage:
    """Compose an :class:`EmailMessage` from plain values.

    Inline images are attached to the HTML body with their file name as
    content id, so ``<img src="cid:logo.png">`` refers to ``logo.png``.

    Raises:
        ValueError: Inline images were given without an HTML body.
        FileNotFoundError: An attachment or inline image does not exist.

    Example:
        >>> msg = build_message(sender="a@example.com", recipients=["b@example.com"], subject="Hi", body="Hello")
        >>> msg["To"], msg.get_content_type()
        ('b@example.com', 'text/plain')
    """
    if inline_images and not body_html:
        raise ValueError("Inline images require an HTML body")

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = sender
    message["To"] = ", ".join(recipients)
    if cc:
        message["Cc"] = ", ".join(cc)
    if bcc:
        message["Bcc"] = ", ".join(bcc)
    if reply_to:
        message["Reply-To"] = ", ".join(reply_to)

    if body:
        message.set_content(body)
        if body_html:
            message.add_alternative(body_html, subtype="html")
    elif body_html:
        message.set_content(body_html, subtype="html")

    html_part = message.get_body(preferencelist=("html",)) if inline_images else None
    if html_part is not None:
        for path in inline_images:
            maintype, subtype = _guess_content_type(path)
            html_part.add_related(
                path.read_bytes(),
                maintype=maintype,
                subtype=subtype,
                cid=f"<{path.name}>",
                filename=path.name,
                disposition="inline",
            )

    for path in attachments:
        maintype, subtype = _guess_content_type(path)
        message.add_attachment(path.read_bytes(), maintype=maintype, subtype=subtype, filename=path.name)

    if tag:
        add_tag(message, tag)
    for key, value in (metadata or {}).items():
        add_metadata(message, key, value)

    return message


def compose_email(
    *,
    config: ZeptoConfig,
    recipients: str | Sequence[str] | None = None,
    subject: str,
    body: str = "",
    body_html: str = "",
    from_address: str | None = None,
    cc: Sequence[str] | None = None,
    bcc: Sequence[str] | None = None,
    reply_to: Sequence[str] | None = None,
    attachments: Sequence[Path] | None = None,
    inline_images: Sequence[Path] | None = None,
    tag: str | None = None,
    metadata: Mapping[str, str] | None = None,
) -> EmailMessage:
    """Resolve defaults from *config*, validate addresses and build the message.

    Args:
        config: Source of the default sender and recipients.
        recipients: Single address, sequence of addresses, or None to use
            config.recipients. When provided, replaces config recipients entirely.
        subject: Subject line (UTF-8 supported).
        body: Plain-text body.
        body_html: HTML body; sent as an alternative when ``body`` is set.
        from_address: Override sender. Uses config.from_address when None.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        reply_to: Reply-To addresses.
        attachments: Files attached as regular attachments.
        inline_images: Images embedded in the HTML body.
        tag: Provider-side tag (``X-Tag`` header).
        metadata: Provider-side metadata (``X-Metadata-*`` headers).

    Raises:
        ValueError: No sender or recipients, or inline images without HTML.
        InvalidRecipientError: A runtime address is malformed.
        FileNotFoundError: An attachment or inline image is missing.
    """
    sender = _resolve_sender(config, from_address)
    recipient_list = _resolve_recipients(config, recipients)
    cc_list, bcc_list, reply_to_list = _as_list(cc), _as_list(bcc), _as_list(reply_to)
    validate_addresses([sender, *recipient_list, *cc_list, *bcc_list, *reply_to_list])

    return build_message(
        sender=sender,
        recipients=recipient_list,
        subject=subject,
        body=body,
        body_html=body_html,
        cc=cc_list,
        bcc=bcc_list,
        reply_to=reply_to_list,
        attachments=attachments or (),
        inline_images=inline_images or (),
        tag=tag,
        metadata=metadata,
    )


def send_email(
    *,
    config: ZeptoConfig,
    recipients: str | Sequence[str] | None = None,
    subject: str,
    body: str = "",
    body_html: str = "",
    from_address: str | None = None,
    cc: Sequence[str] | None = None,
    bcc: Sequence[str] | None = None,
    reply_to: Sequence[str] | None = None,
    attachments: Sequence[Path] | None = None,
    inline_images: Sequence[Path] | None = None,
    tag: str | None = None,
    metadata: Mapping[str, str] | None = None,
    client: httpx.Client | None = None,
) -> SentMessage:
    """Compose and send an email through ZeptoMail.

    Takes the arguments of :func:`compose_email` plus ``client``, the httpx
    client to send with (a private one is created when None).

    Returns:
        The sent message with the provider's request id.

    Raises:
        ValueError: No sender or recipients, or inline images without HTML.
        InvalidRecipientError: A runtime address is malformed.
        ConfigurationError: The transport settings are incomplete.
        FileNotFoundError: An attachment or inline image is missing.
        HttpTransportError: The API could not be reached or refused the message.
    """
    message = compose_email(
        config=config,
        recipients=recipients,
        subject=subject,
        body=body,
        body_html=body_html,
        from_address=from_address,
        cc=cc,
        bcc=bcc,
        reply_to=reply_to,
        attachments=attachments,
        inline_images=inline_images,
        tag=tag,
        metadata=metadata,
    )
    envelope = Envelope.from_message(message)

    logger.info(
        "Sending email",
        extra={
            "sender": envelope.sender.addr_spec,
            "recipients": [r.addr_spec for r in envelope.recipients],
            "subject": subject,
            "has_html": bool(body_html),
            "attachment_count": len(attachments) if attachments else 0,
        },
    )

    with create_transport(config, client) as transport:
        sent = transport.send(message, envelope)

    logger.info(
        "Email sent successfully",
        extra={"sender": envelope.sender.addr_spec, "message_id": sent.message_id},
    )
    return sent


def send_notification(
    *,
    config: ZeptoConfig,
    recipients: str | Sequence[str] | None = None,
    subject: str,
    message: str,
    from_address: str | None = None,
    client: httpx.Client | None = None,
) -> SentMessage:
    """Send a simple plain-text notification email.

    Convenience wrapper for :func:`send_email` without HTML or attachments.
    """
    return send_email(
        config=config,
        recipients=recipients,
        subject=subject,
        body=message,
        from_address=from_address,
        client=client,
    )


__all__ = [
    "build_message",
    "compose_email",
    "create_transport",
    "send_email",
    "send_notification",
]
