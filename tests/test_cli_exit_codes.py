"""Exit code integration tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from zepto_mailer.adapters import cli as cli_mod
from zepto_mailer.adapters.cli import ExitCode
from zepto_mailer.domain.errors import (
    ApiRejectedError,
    ApiRejectedOpaqueError,
    IncompleteDsnError,
    TransportUnreachableError,
)

if TYPE_CHECKING:
    from conftest import EmailCliContext

_SEND_ARGS = ["send-email", "--to", "a@example.com", "--subject", "x", "--body", "y"]
_READY = {"region": "eu", "api_key": "KEY", "from_address": "sender@example.com"}


@pytest.mark.os_agnostic
def test_exit_code_values_follow_sysexits() -> None:
    """Exit codes keep their POSIX meaning."""
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.GENERAL_ERROR) == 1
    assert int(ExitCode.FILE_NOT_FOUND) == 2
    assert int(ExitCode.INVALID_ARGUMENT) == 22
    assert int(ExitCode.API_FAILURE) == 69
    assert int(ExitCode.CONFIG_ERROR) == 78


@pytest.mark.os_agnostic
def test_when_config_section_is_invalid_it_exits_with_code_22(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """Config --section with nonexistent section must exit with INVALID_ARGUMENT (22)."""
    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--section", "nonexistent_section_that_does_not_exist"], obj=production_factory
    )

    assert result.exit_code == 22
    assert "not found" in result.stderr


@pytest.mark.os_agnostic
def test_when_zepto_section_is_invalid_it_exits_with_code_78(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config: Callable[[Config], Callable[[], Any]],
) -> None:
    """An invalid ``[zepto]`` section must exit with CONFIG_ERROR (78)."""
    factory = inject_config(config_factory({"zepto": {"timeout": -1}}))

    result: Result = cli_runner.invoke(cli_mod.cli, _SEND_ARGS, obj=factory)

    assert result.exit_code == 78
    assert "Invalid [zepto] configuration" in result.output
    assert "timeout must be positive" in result.output


@pytest.mark.os_agnostic
def test_when_send_raises_configuration_error_it_exits_with_code_78(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
) -> None:
    """An incomplete transport must exit with CONFIG_ERROR (78)."""
    ctx = email_cli_context(_READY)
    ctx.spy.raise_exception = IncompleteDsnError('The "zepto" mailer DSN must contain the API key as password.')

    result: Result = cli_runner.invoke(cli_mod.cli, _SEND_ARGS, obj=ctx.factory)

    assert result.exit_code == 78
    assert "Configuration error" in result.output


@pytest.mark.os_agnostic
def test_when_option_value_is_invalid_it_exits_with_code_22(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
) -> None:
    """An invalid override option must exit with INVALID_ARGUMENT (22)."""
    ctx = email_cli_context(_READY)

    result: Result = cli_runner.invoke(cli_mod.cli, [*_SEND_ARGS, "--timeout", "0"], obj=ctx.factory)

    assert result.exit_code == 22
    assert "Invalid option value" in result.output
    assert ctx.spy.sent_emails == []


@pytest.mark.os_agnostic
def test_when_recipient_is_invalid_it_exits_with_code_22(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
) -> None:
    """A malformed recipient must exit with INVALID_ARGUMENT (22)."""
    ctx = email_cli_context(_READY)

    result: Result = cli_runner.invoke(
        cli_mod.cli, ["send-email", "--to", "not-an-address", "--subject", "x", "--body", "y"], obj=ctx.factory
    )

    assert result.exit_code == 22
    assert "Invalid recipient: not-an-address" in result.output


@pytest.mark.os_agnostic
def test_when_attachment_is_missing_it_exits_with_code_2(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
    tmp_path: Any,
) -> None:
    """A missing attachment must exit with FILE_NOT_FOUND (2)."""
    ctx = email_cli_context(_READY)

    result: Result = cli_runner.invoke(
        cli_mod.cli, [*_SEND_ARGS, "--attachment", str(tmp_path / "missing.pdf")], obj=ctx.factory
    )

    assert result.exit_code == 2
    assert "Attachment file not found" in result.output


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "error",
    [
        TransportUnreachableError("Could not reach the remote ZeptoMail server."),
        ApiRejectedError("TM_4001", "Access denied", status_code=401),
        ApiRejectedOpaqueError("server error", status_code=500),
    ],
    ids=["unreachable", "rejected", "opaque"],
)
def test_when_delivery_fails_it_exits_with_code_69(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
    error: Exception,
) -> None:
    """Every delivery failure must exit with API_FAILURE (69)."""
    ctx = email_cli_context(_READY)
    ctx.spy.raise_exception = error

    result: Result = cli_runner.invoke(cli_mod.cli, _SEND_ARGS, obj=ctx.factory)

    assert result.exit_code == 69
    assert "Failed to send email" in result.output
    assert str(error) in result.output


@pytest.mark.os_agnostic
def test_when_notification_delivery_fails_it_exits_with_code_69(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
) -> None:
    """send-notification maps delivery failures like send-email."""
    ctx = email_cli_context(_READY)
    ctx.spy.raise_exception = ApiRejectedOpaqueError("server error", status_code=500)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["send-notification", "--to", "a@example.com", "--subject", "x", "--message", "y"],
        obj=ctx.factory,
    )

    assert result.exit_code == 69


@pytest.mark.os_agnostic
def test_when_email_has_unexpected_error_it_exits_with_code_1(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Send-email unexpected Exception must exit with GENERAL_ERROR (1)."""
    monkeypatch.delenv("DEVELOPMENT_MODE", raising=False)
    ctx = email_cli_context(_READY)
    ctx.spy.raise_exception = TypeError("unexpected type error")

    result: Result = cli_runner.invoke(cli_mod.cli, _SEND_ARGS, obj=ctx.factory)

    assert result.exit_code == 1
    assert "unexpected type error" in (result.output + (result.stderr or ""))


@pytest.mark.os_agnostic
def test_development_mode_reraises_unexpected_errors(
    cli_runner: CliRunner,
    email_cli_context: Callable[[dict[str, Any]], EmailCliContext],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """With DEVELOPMENT_MODE set, unexpected errors propagate unchanged."""
    monkeypatch.setenv("DEVELOPMENT_MODE", "1")
    ctx = email_cli_context(_READY)
    ctx.spy.raise_exception = TypeError("unexpected type error")

    result: Result = cli_runner.invoke(cli_mod.cli, _SEND_ARGS, obj=ctx.factory)

    assert isinstance(result.exception, TypeError)
