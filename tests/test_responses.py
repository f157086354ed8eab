"""Response stories: every way the API can answer a send call."""

from __future__ import annotations

import orjson
import pytest

from zepto_mailer.domain.errors import ApiRejectedError, ApiRejectedOpaqueError
from zepto_mailer.domain.responses import Accepted, Rejected, RejectedOpaque, interpret_response


def _error_body(error: dict[str, object]) -> bytes:
    return orjson.dumps({"error": error})


@pytest.mark.os_agnostic
def test_accepted_response_yields_request_id() -> None:
    """202 with ``Data.message.request_id`` is success."""
    outcome = interpret_response(202, b'{"data": [], "Data": {"message": {"request_id": "foobar"}}}')

    assert outcome == Accepted(message_id="foobar")


@pytest.mark.os_agnostic
def test_accepted_status_without_request_id_is_opaque() -> None:
    """A 202 we cannot read an id from is not reported as success."""
    outcome = interpret_response(202, b'{"data": []}')

    assert outcome == RejectedOpaque(body='{"data": []}', status_code=202)


@pytest.mark.os_agnostic
def test_structured_error_uses_first_detail_message() -> None:
    """The first detail's message describes the rejection."""
    body = _error_body({"code": "TM_3201", "details": [{"message": "bad address"}, {"message": "ignored"}]})

    outcome = interpret_response(400, body)

    assert isinstance(outcome, Rejected)
    assert outcome.code == "TM_3201"
    assert outcome.detail == "bad address"
    assert outcome.status_code == 400


@pytest.mark.os_agnostic
def test_structured_error_without_details_uses_error_message() -> None:
    """Missing details fall back to ``error.message``."""
    outcome = interpret_response(401, _error_body({"code": "SERR_157", "message": "Invalid API Token found"}))

    assert isinstance(outcome, Rejected)
    assert outcome.detail == "Invalid API Token found"


@pytest.mark.os_agnostic
def test_empty_details_fall_back_to_error_message() -> None:
    """An empty details list reads like a missing one."""
    outcome = interpret_response(400, _error_body({"code": "X", "details": [], "message": "fallback"}))

    assert isinstance(outcome, Rejected)
    assert outcome.detail == "fallback"


@pytest.mark.os_agnostic
def test_error_without_code_is_opaque() -> None:
    """Without ``error.code`` the body is reported verbatim."""
    body = _error_body({"message": "no code"})

    outcome = interpret_response(400, body)

    assert outcome == RejectedOpaque(body=body.decode(), status_code=400)


@pytest.mark.os_agnostic
def test_non_json_body_is_opaque() -> None:
    """Plain text errors keep the text and status."""
    assert interpret_response(500, b"server error") == RejectedOpaque(body="server error", status_code=500)


@pytest.mark.os_agnostic
def test_json_array_body_is_opaque() -> None:
    """Valid JSON that is not an object cannot carry an error document."""
    assert isinstance(interpret_response(400, b"[1, 2]"), RejectedOpaque)


@pytest.mark.os_agnostic
def test_rejected_converts_to_structured_error() -> None:
    """The error message names code and detail."""
    error = Rejected(code="X", detail="bad address", status_code=400, body="{}").to_error()

    assert isinstance(error, ApiRejectedError)
    assert str(error) == "Unable to send an email (X): bad address"
    assert error.status_code == 400
    assert error.response_body == "{}"


@pytest.mark.os_agnostic
def test_opaque_converts_to_opaque_error() -> None:
    """The error message quotes the body and status."""
    error = RejectedOpaque(body="server error", status_code=500).to_error()

    assert isinstance(error, ApiRejectedOpaqueError)
    assert str(error) == "Unable to send an email: server error (code 500)."
    assert error.response_body == "server error"
