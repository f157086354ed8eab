"""Interpretation of ZeptoMail API responses.

A send call ends in exactly one outcome. Reading the status code either
fails (the server is unreachable, handled by the transport) or yields one of
the variants below, chosen by :func:`interpret_response`.

Contents:
    * :class:`Accepted` - 202 with a request id.
    * :class:`Rejected` - Structured error document.
    * :class:`RejectedOpaque` - Anything else.
    * :func:`interpret_response` - Status and body to outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, cast

import orjson

from .errors import ApiRejectedError, ApiRejectedOpaqueError, HttpTransportError

#: The only status the send-email endpoint uses for success.
HTTP_ACCEPTED: Final[int] = 202


@dataclass(frozen=True, slots=True)
class Accepted:
    """The provider queued the message under ``message_id``."""

    message_id: str


@dataclass(frozen=True, slots=True)
class Rejected:
    """The provider refused the message with an error code and detail."""

    code: str
    detail: str
    status_code: int
    body: str

    def to_error(self) -> HttpTransportError:
        """Return the :class:`ApiRejectedError` naming the API code and detail."""
        return ApiRejectedError(self.code, self.detail, status_code=self.status_code, response_body=self.body)


@dataclass(frozen=True, slots=True)
class RejectedOpaque:
    """The response could not be understood; carries the raw body."""

    body: str
    status_code: int

    def to_error(self) -> HttpTransportError:
        """Return the :class:`ApiRejectedOpaqueError` carrying the raw body."""
        return ApiRejectedOpaqueError(self.body, status_code=self.status_code)


SendOutcome = Accepted | Rejected | RejectedOpaque


def _decode_json(content: bytes) -> dict[str, Any] | None:
    try:
        decoded = orjson.loads(content)
    except orjson.JSONDecodeError:
        return None
    return cast(dict[str, Any], decoded) if isinstance(decoded, dict) else None


def _lookup(document: dict[str, Any], *path: str) -> object:
    node: object = document
    for key in path:
        if not isinstance(node, dict):
            return None
        node = cast(dict[str, Any], node).get(key)
    return node


def _first_detail(error: dict[str, Any]) -> str:
    details = error.get("details")
    if isinstance(details, list) and details:
        first = cast(list[Any], details)[0]
        if isinstance(first, dict) and "message" in first:
            return str(cast(dict[str, Any], first)["message"])
    message = error.get("message")
    return str(message) if message is not None else ""


def interpret_response(status_code: int, content: bytes) -> SendOutcome:
    """Map an HTTP status and body onto a :data:`SendOutcome`.

    Args:
        status_code: HTTP status of the send-email call.
        content: Raw response body.

    Returns:
        * :class:`Accepted` for 202 carrying ``Data.message.request_id``;
        * :class:`Rejected` for other statuses with an ``error.code``;
        * :class:`RejectedOpaque` otherwise, including a 202 whose body
          lacks the request id.

    Examples:
        >>> interpret_response(202, b'{"Data": {"message": {"request_id": "foobar"}}}')
        Accepted(message_id='foobar')
        >>> interpret_response(400, b'{"error": {"code": "X", "details": [{"message": "bad address"}]}}')
        Rejected(code='X', detail='bad address', status_code=400, body='{"error": {"code": "X", "details": [{"message": "bad address"}]}}')
        >>> interpret_response(500, b"server error")
        RejectedOpaque(body='server error', status_code=500)
    """
    body = content.decode("utf-8", errors="replace")
    document = _decode_json(content)

    if status_code == HTTP_ACCEPTED:
        request_id = _lookup(document, "Data", "message", "request_id") if document is not None else None
        if isinstance(request_id, str) and request_id:
            return Accepted(message_id=request_id)
        return RejectedOpaque(body=body, status_code=status_code)

    if document is not None:
        error = document.get("error")
        if isinstance(error, dict) and error.get("code") is not None:
            typed_error = cast(dict[str, Any], error)
            return Rejected(
                code=str(typed_error["code"]),
                detail=_first_detail(typed_error),
                status_code=status_code,
                body=body,
            )
    return RejectedOpaque(body=body, status_code=status_code)


__all__ = [
    "HTTP_ACCEPTED",
    "Accepted",
    "Rejected",
    "RejectedOpaque",
    "SendOutcome",
    "interpret_response",
]
