"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.logging.setup import init_logging
from ..adapters.zepto import (
    create_transport,
    load_zepto_config_from_dict,
    send_email,
    send_notification,
)

# Static conformance assertions, checked by pyright only.
if TYPE_CHECKING:
    from ..adapters.memory import EmailSpy
    from ..application.ports import (
        CreateTransport,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadZeptoConfigFromDict,
        SendEmail,
        SendNotification,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_load_zepto_config_from_dict: LoadZeptoConfigFromDict = load_zepto_config_from_dict
    _assert_create_transport: CreateTransport = create_transport
    _assert_send_email: SendEmail = send_email
    _assert_send_notification: SendNotification = send_notification
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    load_zepto_config_from_dict: LoadZeptoConfigFromDict
    create_transport: CreateTransport
    send_email: SendEmail
    send_notification: SendNotification
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        load_zepto_config_from_dict=load_zepto_config_from_dict,
        create_transport=create_transport,
        send_email=send_email,
        send_notification=send_notification,
        init_logging=init_logging,
    )


def build_testing(*, spy: EmailSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: EmailSpy capturing send operations. A fresh one is created when
            None; pass your own to assert on captured emails.
    """
    from ..adapters.memory import (
        EmailSpy,
        create_transport_in_memory,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_zepto_config_from_dict_in_memory,
    )

    email_spy = spy if spy is not None else EmailSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        load_zepto_config_from_dict=load_zepto_config_from_dict_in_memory,
        create_transport=create_transport_in_memory,
        send_email=email_spy.send_email,
        send_notification=email_spy.send_notification,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "create_transport",
    "display_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "load_zepto_config_from_dict",
    "send_email",
    "send_notification",
]
