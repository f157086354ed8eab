"""In-memory ZeptoMail adapters for testing.

Messages are composed exactly like production (defaults, validation,
attachments, custom headers) but are recorded instead of posted.

Contents:
    * :class:`RecordingTransport` - Transport double keeping every sent message.
    * :class:`EmailSpy` - send_email / send_notification double built on it.
    * :func:`load_zepto_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from email.message import EmailMessage
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from zepto_mailer.domain.envelope import Envelope, SentMessage
from zepto_mailer.domain.payload import build_payload

from ..zepto.config import ZeptoConfig
from ..zepto.sender import compose_email


def _empty_sent_list() -> list[SentMessage]:
    return []


def _empty_payload_list() -> list[dict[str, Any]]:
    return []


@dataclass
class RecordingTransport:
    """Transport double: records messages and the payload they would produce.

    Attributes:
        sent: Every message accepted so far, in order.
        payloads: The request documents built for ``sent``.
        raise_exception: When set, :meth:`send` raises it instead of recording.

    Example:
        >>> transport = RecordingTransport()
        >>> msg = EmailMessage()
        >>> msg["From"] = "a@example.com"
        >>> msg["To"] = "b@example.com"
        >>> transport.send(msg).message_id
        'memory-1'
    """

    sent: list[SentMessage] = field(default_factory=_empty_sent_list)
    payloads: list[dict[str, Any]] = field(default_factory=_empty_payload_list)
    raise_exception: Exception | None = None

    def send(self, message: EmailMessage, envelope: Envelope | None = None) -> SentMessage:
        envelope = envelope if envelope is not None else Envelope.from_message(message)
        payload = build_payload(message, envelope)
        if self.raise_exception is not None:
            raise self.raise_exception
        sent = SentMessage(message_id=f"memory-{len(self.sent) + 1}", message=message, envelope=envelope)
        self.sent.append(sent)
        self.payloads.append(payload)
        return sent

    def close(self) -> None:
        """Nothing to release."""

    def __enter__(self) -> RecordingTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def clear(self) -> None:
        self.sent.clear()
        self.payloads.clear()
        self.raise_exception = None


def _new_transport() -> RecordingTransport:
    return RecordingTransport()


def _empty_call_list() -> list[dict[str, Any]]:
    return []


@dataclass
class EmailSpy:
    """Captures send_email / send_notification calls for test assertions.

    Each test should create its own EmailSpy instance. The spy's methods match
    the signatures expected by AppServices.

    Attributes:
        sent_emails: Keyword arguments of every send_email call.
        sent_notifications: Keyword arguments of every send_notification call.
        transport: Recording transport receiving the composed messages.
        raise_exception: When set, send operations raise this exception after
            recording the call.

    Example:
        >>> spy = EmailSpy()
        >>> config = ZeptoConfig(api_key="KEY", from_address="noreply@example.com")
        >>> spy.send_email(config=config, recipients="test@example.com", subject="Hi", body="Hello").message_id
        'memory-1'
        >>> len(spy.sent_emails)
        1
    """

    sent_emails: list[dict[str, Any]] = field(default_factory=_empty_call_list)
    sent_notifications: list[dict[str, Any]] = field(default_factory=_empty_call_list)
    transport: RecordingTransport = field(default_factory=_new_transport)
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_emails.clear()
        self.sent_notifications.clear()
        self.transport.clear()
        self.raise_exception = None

    def send_email(
        self,
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
        """Compose the message like production and hand it to :attr:`transport`.

        Raises:
            ValueError: No sender or recipients, or inline images without HTML.
            InvalidRecipientError: When an address has invalid format.
            Exception: If raise_exception is set, raises that exception.
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
        self.sent_emails.append(
            {
                "config": config,
                "recipients": recipients,
                "subject": subject,
                "body": body,
                "body_html": body_html,
                "from_address": from_address,
                "cc": list(cc) if cc else None,
                "bcc": list(bcc) if bcc else None,
                "reply_to": list(reply_to) if reply_to else None,
                "attachments": list(attachments) if attachments else None,
                "inline_images": list(inline_images) if inline_images else None,
                "tag": tag,
                "metadata": dict(metadata) if metadata else None,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.transport.send(message)

    def send_notification(
        self,
        *,
        config: ZeptoConfig,
        recipients: str | Sequence[str] | None = None,
        subject: str,
        message: str,
        from_address: str | None = None,
        client: httpx.Client | None = None,
    ) -> SentMessage:
        """Record the call, then compose and record the plain-text message."""
        composed = compose_email(
            config=config,
            recipients=recipients,
            subject=subject,
            body=message,
            from_address=from_address,
        )
        self.sent_notifications.append(
            {
                "config": config,
                "recipients": recipients,
                "subject": subject,
                "message": message,
                "from_address": from_address,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.transport.send(composed)


def load_zepto_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> ZeptoConfig:
    """Parse the ``[zepto]`` section using the real Pydantic model."""
    section = config_dict.get("zepto", {})
    return ZeptoConfig.model_validate(section if section else {})


def create_transport_in_memory(config: ZeptoConfig, client: httpx.Client | None = None) -> RecordingTransport:
    """Return a fresh recording transport; *config* and *client* are ignored."""
    return RecordingTransport()


__all__ = [
    "EmailSpy",
    "RecordingTransport",
    "create_transport_in_memory",
    "load_zepto_config_from_dict_in_memory",
]
