"""ZeptoMail HTTP API transport.

Posts one request per message to ``https://api.zeptomail.<region>/v1.1/email``
using httpx and maps the response onto :class:`SentMessage` or a typed
:class:`~zepto_mailer.domain.errors.HttpTransportError`.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage
from types import TracebackType

import httpx
import orjson

from zepto_mailer.domain.endpoint import display_form, normalize_region, outbound_url, resolve_endpoint
from zepto_mailer.domain.envelope import Envelope, SentMessage
from zepto_mailer.domain.errors import ConfigurationError, TransportUnreachableError
from zepto_mailer.domain.payload import build_payload
from zepto_mailer.domain.responses import Accepted, interpret_response

logger = logging.getLogger(__name__)

#: Authorization scheme prefix for "Send Mail" tokens.
AUTH_SCHEME = "Zoho-enczapikey"

DEFAULT_TIMEOUT = 30.0


def _checked_url(endpoint: str) -> httpx.URL:
    try:
        return httpx.URL(outbound_url(endpoint))
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid ZeptoMail endpoint: {display_form(endpoint)}") from exc


class ZeptoApiTransport:
    """Send :class:`~email.message.EmailMessage` objects through ZeptoMail.

    Configuration is fixed at construction; only the host override can be
    changed afterwards through :meth:`set_host`.

    Args:
        key: ZeptoMail "Send Mail" token.
        region: Top-level domain of the API host (``com``, ``eu``, ...).
            Leading dots are stripped.
        track_opens: Enable open tracking for every message.
        track_clicks: Enable click tracking for every message.
        client: httpx client to use. When omitted the transport creates
            its own and closes it in :meth:`close`.
        timeout: Timeout in seconds for a self-created client.

    Example:
        >>> transport = ZeptoApiTransport("KEY", "eu")
        >>> str(transport)
        'zepto+api://api.zeptomail.eu/v1.1/email'
        >>> "KEY" in repr(transport)
        False
        >>> transport.close()
    """

    def __init__(
        self,
        key: str,
        region: str,
        *,
        track_opens: bool = False,
        track_clicks: bool = False,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not key:
            raise ConfigurationError("A ZeptoMail API key is required")
        self._key = key
        self._region = normalize_region(region)
        self._track_opens = track_opens
        self._track_clicks = track_clicks
        self._host: str | None = None
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    @property
    def region(self) -> str:
        return self._region

    @property
    def host(self) -> str | None:
        return self._host

    @property
    def track_opens(self) -> bool:
        return self._track_opens

    @property
    def track_clicks(self) -> bool:
        return self._track_clicks

    @property
    def endpoint(self) -> str:
        """Endpoint authority and path, without scheme."""
        return resolve_endpoint(self._region, self._host)

    def set_host(self, host: str | None) -> ZeptoApiTransport:
        """Override the computed endpoint; ``None`` restores it.

        Raises:
            ConfigurationError: *host* does not form a valid URL.
        """
        host = host or None
        _checked_url(resolve_endpoint(self._region, host))
        self._host = host
        return self

    def send(self, message: EmailMessage, envelope: Envelope | None = None) -> SentMessage:
        """Send *message* with one HTTP call.

        Args:
            message: Message to send; not modified.
            envelope: Delivery envelope. Derived from the message headers
                when omitted.

        Returns:
            The sent message carrying the provider's request id.

        Raises:
            EnvelopeError: No sender or recipient could be determined.
            TransportUnreachableError: The server could not be reached.
            ApiRejectedError: The API returned a structured error.
            ApiRejectedOpaqueError: The API returned an unexpected response.
        """
        envelope = envelope if envelope is not None else Envelope.from_message(message)
        payload = build_payload(
            message,
            envelope,
            track_clicks=self._track_clicks,
            track_opens=self._track_opens,
        )
        url = _checked_url(self.endpoint)

        logger.info(
            "Sending email via ZeptoMail",
            extra={
                "endpoint": self.endpoint,
                "recipient_count": len(envelope.recipients),
                "attachment_count": len(payload["attachments"]),
                "inline_image_count": len(payload["inline_images"]),
            },
        )

        try:
            response = self._client.post(
                url,
                content=orjson.dumps(payload),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "Authorization": f"{AUTH_SCHEME} {self._key}",
                },
            )
        except httpx.TransportError as exc:
            logger.debug("ZeptoMail server unreachable", exc_info=True)
            raise TransportUnreachableError("Could not reach the remote ZeptoMail server.") from exc

        outcome = interpret_response(response.status_code, response.content)
        if isinstance(outcome, Accepted):
            logger.info(
                "Email accepted by ZeptoMail",
                extra={"message_id": outcome.message_id, "endpoint": self.endpoint},
            )
            return SentMessage(message_id=outcome.message_id, message=message, envelope=envelope)

        logger.warning(
            "Email rejected by ZeptoMail",
            extra={"status_code": outcome.status_code, "endpoint": self.endpoint},
        )
        raise outcome.to_error()

    def close(self) -> None:
        """Close the httpx client when this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ZeptoApiTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _identity(self) -> tuple[str, str, str | None, bool, bool]:
        return (self._key, self._region, self._host, self._track_opens, self._track_clicks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZeptoApiTransport):
            return NotImplemented
        return self._identity() == other._identity()

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return display_form(self.endpoint)

    def __repr__(self) -> str:
        return (
            f"ZeptoApiTransport(endpoint={self.endpoint!r}, track_opens={self._track_opens!r}, "
            f"track_clicks={self._track_clicks!r})"
        )


__all__ = ["AUTH_SCHEME", "ZeptoApiTransport"]
