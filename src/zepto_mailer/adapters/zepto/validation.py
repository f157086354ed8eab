"""Address validation for runtime input (CLI arguments, function parameters).

Addresses may carry a display name (``"Saif Eddin <saif@example.com>"``); only
the mailbox part is checked against RFC 5321/5322 by btx_lib_mail. Failures
surface as :class:`~zepto_mailer.domain.errors.InvalidRecipientError`.
"""

from __future__ import annotations

from collections.abc import Sequence

from btx_lib_mail import validate_email_address

from zepto_mailer.domain.envelope import parse_address
from zepto_mailer.domain.errors import InvalidRecipientError


def validate_address(address: str) -> None:
    """Validate one address, with or without display name.

    Raises:
        InvalidRecipientError: When no mailbox can be parsed or it is invalid.

    Example:
        >>> validate_address("Saif Eddin <saif@example.com>")  # no exception
        >>> validate_address("invalid")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid recipient: invalid
    """
    try:
        validate_email_address(parse_address(address).addr_spec)
    except ValueError as e:
        raise InvalidRecipientError(f"Invalid recipient: {address}") from e


def validate_addresses(addresses: str | Sequence[str] | None) -> None:
    """Validate a single address, a sequence of them, or nothing.

    Example:
        >>> validate_addresses(None)
        >>> validate_addresses(["a@example.com", "B <b@example.com>"])
    """
    if addresses is None:
        return
    for address in [addresses] if isinstance(addresses, str) else addresses:
        validate_address(address)


__all__ = ["validate_address", "validate_addresses"]
