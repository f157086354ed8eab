"""Delivery envelope and sent-message value objects.

The message itself is the standard library's :class:`email.message.EmailMessage`;
this module only adds the envelope (who the mail is actually delivered to and
from) and the result of a successful send.

Contents:
    * :func:`parse_address` - Coerce ``str`` or ``Address`` into an ``Address``.
    * :func:`message_addresses` - Read all addresses of an address header.
    * :class:`Envelope` - Authoritative sender and recipients for delivery.
    * :class:`SentMessage` - Provider-assigned id plus what was sent.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from email.errors import HeaderParseError
from email.headerregistry import Address
from email.message import EmailMessage
from email.utils import getaddresses, parseaddr

from .errors import EnvelopeError

AddressLike = Address | str
"""Anything :func:`parse_address` accepts."""

#: Headers consulted, in order, for the envelope sender.
_SENDER_HEADERS: tuple[str, ...] = ("Sender", "Return-Path", "From")

#: Headers whose addresses become envelope recipients, in order.
_RECIPIENT_HEADERS: tuple[str, ...] = ("To", "Cc", "Bcc")


def parse_address(value: AddressLike) -> Address:
    """Return *value* as an :class:`~email.headerregistry.Address`.

    Args:
        value: An ``Address`` (returned unchanged) or a string such as
            ``"Fabien <fabpot@symfony.com>"`` or ``"fabpot@symfony.com"``.

    Raises:
        ValueError: When the string holds no parseable address.

    Example:
        >>> address = parse_address("Saif Eddin <saif.gmati@symfony.com>")
        >>> address.addr_spec, address.display_name
        ('saif.gmati@symfony.com', 'Saif Eddin')
        >>> parse_address("fabpot@symfony.com").display_name
        ''
    """
    if isinstance(value, Address):
        return value
    name, addr = parseaddr(value)
    return _build_address(name, addr, original=value)


def _build_address(name: str, addr: str, *, original: str) -> Address:
    if not addr:
        raise ValueError(f"Invalid address: {original!r}")
    try:
        return Address(display_name=name, addr_spec=addr)
    except HeaderParseError as exc:
        raise ValueError(f"Invalid address: {original!r}") from exc


def message_addresses(message: EmailMessage, header_name: str) -> list[Address]:
    """Collect every address of every *header_name* header in *message*.

    Structured headers (``policy.default``) expose ``.addresses``; plain
    string headers (``compat32`` or unregistered names such as
    ``Return-Path``) are parsed with :func:`email.utils.getaddresses`.
    """
    result: list[Address] = []
    for header in message.get_all(header_name, []):
        addresses = getattr(header, "addresses", None)
        if addresses is not None:
            result.extend(addresses)
            continue
        raw = str(header)
        result.extend(_build_address(name, addr, original=raw) for name, addr in getaddresses([raw]) if addr)
    return result


@dataclass(frozen=True, slots=True)
class Envelope:
    """Sender and recipients used for actual delivery.

    The envelope may differ from the message's own ``From``/``To`` headers,
    e.g. for bounce handling; it is authoritative for delivery.

    Example:
        >>> envelope = Envelope.create("alice@system.com", ["bob@system.com"])
        >>> envelope.sender.addr_spec
        'alice@system.com'
        >>> [r.addr_spec for r in envelope.recipients]
        ['bob@system.com']
    """

    sender: Address
    recipients: tuple[Address, ...]
    #: Leading recipients taken from ``To`` when derived from headers; ``None`` for explicit envelopes.
    to_count: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.sender.addr_spec:
            raise EnvelopeError("An envelope sender must have an email address.")
        if not self.recipients:
            raise EnvelopeError("An envelope must have at least one recipient.")

    @classmethod
    def create(cls, sender: AddressLike, recipients: Iterable[AddressLike]) -> Envelope:
        """Build an envelope from addresses or address strings."""
        return cls(sender=parse_address(sender), recipients=tuple(parse_address(r) for r in recipients))

    @classmethod
    def from_message(cls, message: EmailMessage) -> Envelope:
        """Derive the envelope from the message headers.

        The sender is the first address of ``Sender``, ``Return-Path`` or
        ``From`` (first header present wins). Recipients are the ``To``,
        ``Cc`` and ``Bcc`` addresses in that order.

        Raises:
            EnvelopeError: When no sender or no recipient can be found.
        """
        sender: Address | None = None
        for name in _SENDER_HEADERS:
            candidates = message_addresses(message, name)
            if candidates:
                sender = candidates[0]
                break
        if sender is None:
            raise EnvelopeError('Unable to determine the sender of the message (no "Sender", "Return-Path" or "From").')

        direct = message_addresses(message, "To")
        copies = [address for name in _RECIPIENT_HEADERS[1:] for address in message_addresses(message, name)]
        return cls(sender=sender, recipients=(*direct, *copies), to_count=len(direct))


@dataclass(frozen=True, slots=True)
class SentMessage:
    """A message the provider accepted, with the id it assigned."""

    message_id: str
    message: EmailMessage
    envelope: Envelope


__all__ = [
    "AddressLike",
    "Envelope",
    "SentMessage",
    "message_addresses",
    "parse_address",
]
