"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from collections.abc import Sequence


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> from zepto_mailer.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No ZeptoMail API key configured")
        >>> str(err)
        'No ZeptoMail API key configured'
    """


class UnsupportedSchemeError(ConfigurationError):
    """The connection descriptor names a scheme this factory cannot build.

    Example:
        >>> err = UnsupportedSchemeError("zepto+foo", "zepto", ["zepto", "zepto+api"])
        >>> str(err)
        'The "zepto+foo" scheme is not supported; supported schemes for mailer "zepto" are: "zepto", "zepto+api".'
        >>> err.supported_schemes
        ('zepto', 'zepto+api')
    """

    def __init__(self, scheme: str, mailer: str, supported_schemes: Sequence[str]) -> None:
        self.scheme = scheme
        self.mailer = mailer
        self.supported_schemes = tuple(supported_schemes)
        supported = ", ".join(f'"{s}"' for s in self.supported_schemes)
        super().__init__(
            f'The "{scheme}" scheme is not supported; supported schemes for mailer "{mailer}" are: {supported}.'
        )


class IncompleteDsnError(ConfigurationError):
    """A required credential (user or password) is missing from the descriptor."""


class InvalidDsnError(ConfigurationError):
    """The connection descriptor string cannot be parsed."""


class DeliveryError(Exception):
    """Email delivery through the provider API failed.

    Example:
        >>> err = DeliveryError("Unable to send an email")
        >>> str(err)
        'Unable to send an email'
    """


class HttpTransportError(DeliveryError):
    """Delivery failed while talking HTTP to the provider.

    Attributes:
        status_code: HTTP status returned by the provider, or ``None`` when
            no status could be read.
        response_body: Raw response text, or ``None`` when unavailable.
    """

    def __init__(self, message: str, *, status_code: int | None = None, response_body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class TransportUnreachableError(HttpTransportError):
    """The remote server could not be reached; no status code was obtained.

    The underlying httpx error is available as ``__cause__``.
    """


class ApiRejectedError(HttpTransportError):
    """The API answered with a structured error document.

    Example:
        >>> err = ApiRejectedError("X", "bad address", status_code=400)
        >>> str(err)
        'Unable to send an email (X): bad address'
        >>> err.code, err.detail, err.status_code
        ('X', 'bad address', 400)
    """

    def __init__(self, code: str, detail: str, *, status_code: int, response_body: str | None = None) -> None:
        self.code = code
        self.detail = detail
        super().__init__(
            f"Unable to send an email ({code}): {detail}",
            status_code=status_code,
            response_body=response_body,
        )


class ApiRejectedOpaqueError(HttpTransportError):
    """The API answered with a body that is not the expected JSON document.

    Example:
        >>> err = ApiRejectedOpaqueError("server error", status_code=500)
        >>> str(err)
        'Unable to send an email: server error (code 500).'
    """

    def __init__(self, body: str, *, status_code: int) -> None:
        super().__init__(
            f"Unable to send an email: {body} (code {status_code}).",
            status_code=status_code,
            response_body=body,
        )


class EnvelopeError(ValueError):
    """The delivery envelope lacks a usable sender or any recipient.

    Example:
        >>> isinstance(EnvelopeError("An envelope must have at least one recipient."), ValueError)
        True
    """


class InvalidRecipientError(ValueError):
    """Email address validation failure.

    Raised when a recipient address fails RFC 5321/5322 validation.
    Inherits from ValueError so generic ``except ValueError`` handlers
    at the CLI boundary report it as an invalid argument.

    Example:
        >>> from zepto_mailer.domain.errors import InvalidRecipientError
        >>> err = InvalidRecipientError("Invalid email: not-an-email")
        >>> str(err)
        'Invalid email: not-an-email'
        >>> isinstance(err, ValueError)
        True
    """


__all__ = [
    "ApiRejectedError",
    "ApiRejectedOpaqueError",
    "ConfigurationError",
    "DeliveryError",
    "EnvelopeError",
    "HttpTransportError",
    "IncompleteDsnError",
    "InvalidDsnError",
    "InvalidRecipientError",
    "TransportUnreachableError",
    "UnsupportedSchemeError",
]
