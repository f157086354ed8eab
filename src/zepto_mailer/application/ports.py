"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Module-level functions satisfy
these protocols through structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``ZeptoConfig``, ``httpx.Client``) are imported under ``TYPE_CHECKING``
    only so that the layer contracts hold at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from email.message import EmailMessage
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.envelope import Envelope, SentMessage
from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    import httpx
    from lib_layered_config import Config

    from ..adapters.zepto.config import ZeptoConfig


class MailTransport(Protocol):
    """Something that delivers one message per call."""

    def send(self, message: EmailMessage, envelope: Envelope | None = ...) -> SentMessage: ...

    def close(self) -> None: ...

    def __enter__(self) -> MailTransport: ...

    def __exit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadZeptoConfigFromDict(Protocol):
    """Load ZeptoConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ZeptoConfig: ...


class CreateTransport(Protocol):
    """Build the transport described by a ZeptoConfig."""

    def __call__(self, config: ZeptoConfig, client: httpx.Client | None = ...) -> MailTransport: ...


class SendEmail(Protocol):
    """Compose and send an email through ZeptoMail."""

    def __call__(
        self,
        *,
        config: ZeptoConfig,
        recipients: str | Sequence[str] | None = ...,
        subject: str,
        body: str = ...,
        body_html: str = ...,
        from_address: str | None = ...,
        cc: Sequence[str] | None = ...,
        bcc: Sequence[str] | None = ...,
        reply_to: Sequence[str] | None = ...,
        attachments: Sequence[Path] | None = ...,
        inline_images: Sequence[Path] | None = ...,
        tag: str | None = ...,
        metadata: Mapping[str, str] | None = ...,
        client: httpx.Client | None = ...,
    ) -> SentMessage: ...


class SendNotification(Protocol):
    """Send a simple plain-text notification email."""

    def __call__(
        self,
        *,
        config: ZeptoConfig,
        recipients: str | Sequence[str] | None = ...,
        subject: str,
        message: str,
        from_address: str | None = ...,
        client: httpx.Client | None = ...,
    ) -> SentMessage: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


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
