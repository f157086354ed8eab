"""In-memory adapter implementations for testing.

Lightweight implementations of all application ports that operate entirely
in memory: no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.transport` - Recording transport and EmailSpy
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .transport import (
    EmailSpy,
    RecordingTransport,
    create_transport_in_memory,
    load_zepto_config_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from zepto_mailer.application.ports import (
        CreateTransport,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadZeptoConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_zepto_config: LoadZeptoConfigFromDict = load_zepto_config_from_dict_in_memory
    _assert_create_transport: CreateTransport = create_transport_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "EmailSpy",
    "RecordingTransport",
    "create_transport_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_zepto_config_from_dict_in_memory",
]
