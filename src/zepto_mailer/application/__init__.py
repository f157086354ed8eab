"""Application layer - port definitions.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    CreateTransport,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadZeptoConfigFromDict,
    MailTransport,
    SendEmail,
    SendNotification,
)

__all__ = [
    "CreateTransport",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadZeptoConfigFromDict",
    "MailTransport",
    "SendEmail",
    "SendNotification",
]
