"""Shared pytest fixtures: CLI runners, injected configuration, email spies and a mocked API.

Tests run with ``--import-mode=importlib``; fixtures reach test modules
through pytest's conftest discovery only.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner
from lib_layered_config import Config
from lib_layered_config.domain.config import SourceInfo

if TYPE_CHECKING:
    from zepto_mailer.adapters.memory import EmailSpy
    from zepto_mailer.composition import AppServices

_ANSI = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
_EXIT_TOOLS_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


@pytest.fixture
def cli_runner() -> CliRunner:
    """A fresh CliRunner; read ``result.stdout`` when log lines on stderr would interfere."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """The real composition root, for commands that need no injection."""
    from zepto_mailer.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Remove Rich colour codes before asserting on terminal text."""

    def _strip(value: str) -> str:
        return _ANSI.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Start with lib_cli_exit_tools tracebacks off and put every flag back afterwards."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    saved = {name: getattr(lib_cli_exit_tools.config, name) for name in _EXIT_TOOLS_FIELDS}
    try:
        yield
    finally:
        for name, value in saved.items():
            setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Drop cached layered configuration before the test.

    Only before: a test may monkeypatch ``get_config`` away, taking
    ``cache_clear`` with it.
    """
    from zepto_mailer.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Build a real ``lib_layered_config.Config`` from a dict, without provenance.

    Example:
        def test_zepto_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"zepto": {"region": "eu"}})
            assert config.get("zepto.region") == "eu"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def source_info_factory() -> Callable[[str, str, str | None], SourceInfo]:
    """Create SourceInfo dicts for provenance-tracking tests.

    Example:
        def test_provenance(source_info_factory: Callable[..., SourceInfo]) -> None:
            info = source_info_factory("zepto.api_key", "user", "/home/user/.config/...")
            assert info["layer"] == "user"
    """

    def _factory(key: str, layer: str, path: str | None = None) -> SourceInfo:
        return {"layer": layer, "path": path, "key": key}

    return _factory


def _services_with(config: Config, **replacements: Any) -> AppServices:
    """Production services whose ``get_config`` returns *config*."""
    from zepto_mailer.composition import AppServices, build_production

    def _fake_get_config(**_kwargs: Any) -> Config:
        return config

    prod = build_production()
    wiring: dict[str, Any] = {
        "get_config": _fake_get_config,
        "get_default_config_path": prod.get_default_config_path,
        "display_config": prod.display_config,
        "load_zepto_config_from_dict": prod.load_zepto_config_from_dict,
        "create_transport": prod.create_transport,
        "send_email": prod.send_email,
        "send_notification": prod.send_notification,
        "init_logging": prod.init_logging,
    }
    wiring.update(replacements)
    return AppServices(**wiring)


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides services with an injected Config.

    Only replaces the I/O boundary (``get_config``), not the Config object itself.

    Example:
        def test_config_display(cli_runner, config_factory, inject_config) -> None:
            factory = inject_config(config_factory({"zepto": {"region": "eu"}}))
            result = cli_runner.invoke(cli, ["config"], obj=factory)
            assert "eu" in result.output
    """

    def _inject(config: Config) -> Callable[[], AppServices]:
        services = _services_with(config)
        return lambda: services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records every profile it receives."""

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = _services_with(config, get_config=_capturing_get_config)
        return lambda: services

    return _inject


@dataclass
class EmailCliContext:
    """Container for email CLI test setup.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: EmailSpy instance for asserting on sent emails/notifications.
    """

    factory: Callable[[], Any]
    spy: EmailSpy


@pytest.fixture
def email_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], EmailCliContext]:
    """Create email CLI test context with configured factory and spy.

    Takes the ``[zepto]`` section contents and returns a context whose
    factory records sends in the spy instead of calling the API.

    Example:
        def test_send(cli_runner, email_cli_context) -> None:
            ctx = email_cli_context({"api_key": "KEY", "from_address": "a@example.com"})
            result = cli_runner.invoke(
                cli, ["send-notification", "--subject", "Hi", "--message", "Test", "--to", "b@example.com"],
                obj=ctx.factory,
            )
            assert ctx.spy.sent_notifications[0]["subject"] == "Hi"
    """
    from zepto_mailer.adapters.memory import EmailSpy as EmailSpyImpl
    from zepto_mailer.adapters.memory import create_transport_in_memory, load_zepto_config_from_dict_in_memory

    def _create(zepto_data: dict[str, Any]) -> EmailCliContext:
        spy = EmailSpyImpl()
        services = _services_with(
            Config({"zepto": zepto_data}, {}),
            load_zepto_config_from_dict=load_zepto_config_from_dict_in_memory,
            create_transport=create_transport_in_memory,
            send_email=spy.send_email,
            send_notification=spy.send_notification,
        )
        return EmailCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create CLI test context with injected config from a plain dict."""

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        services = _services_with(Config(config_data, {}))
        return lambda: services

    return _create


# ======================== HTTP fixtures ========================


@dataclass
class RecordedApi:
    """A mocked ZeptoMail API plus every request it received."""

    client: httpx.Client
    requests: list[httpx.Request]

    @property
    def last_payload(self) -> dict[str, Any]:
        return orjson.loads(self.requests[-1].content)


ACCEPTED_BODY: bytes = orjson.dumps({"data": [], "Data": {"message": {"request_id": "foobar"}}})


@pytest.fixture
def zepto_api() -> Iterator[Callable[..., RecordedApi]]:
    """Return a factory for httpx clients backed by a canned ZeptoMail response.

    Example:
        def test_send(zepto_api) -> None:
            api = zepto_api(status_code=500, content=b"server error")
            transport = ZeptoApiTransport("KEY", "eu", client=api.client)
    """
    clients: list[httpx.Client] = []

    def _create(
        *,
        status_code: int = 202,
        content: bytes = ACCEPTED_BODY,
        raise_error: Exception | None = None,
    ) -> RecordedApi:
        requests: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if raise_error is not None:
                raise raise_error
            return httpx.Response(status_code, content=content)

        client = httpx.Client(transport=httpx.MockTransport(_handler))
        clients.append(client)
        return RecordedApi(client=client, requests=requests)

    yield _create
    for client in clients:
        client.close()
