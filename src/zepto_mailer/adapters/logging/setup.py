"""Centralized logging initialization for all entry points.

Builds the lib_log_rich runtime from the ``[lib_log_rich]`` configuration
section and bridges standard :mod:`logging` into it, so records from the
transport (``zepto_mailer.adapters.zepto.*``) reach the same sinks as the CLI.

Contents:
    * :class:`LoggingConfigModel` - Validation of the ``[lib_log_rich]`` section.
    * :func:`init_logging` - Idempotent logging initialization.
"""

from __future__ import annotations

import logging
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from zepto_mailer import __init__conf__

#: Third-party loggers that log one line per HTTP request at INFO.
HTTP_CLIENT_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` config section.

    Unknown keys pass through to lib_log_rich.RuntimeConfig.
    ``http_client_level`` is consumed here and never forwarded.

    Example:
        >>> model = LoggingConfigModel(service="mailer", environment="staging")
        >>> model.service, model.environment, model.http_client_level
        ('mailer', 'staging', 'WARNING')
    """

    service: str | None = None
    environment: str = "prod"
    http_client_level: str = "WARNING"

    model_config = ConfigDict(extra="allow")


def _parse_section(config: Config) -> LoggingConfigModel:
    log_raw: object = config.get("lib_log_rich", default={})
    return LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})


def _build_runtime_config(parsed: LoggingConfigModel) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the parsed section onto lib_log_rich's RuntimeConfig.

    The service name falls back to the package name.
    """
    extra_config = parsed.model_dump(exclude={"service", "environment", "http_client_level"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def _quiet_http_client_loggers(level: str) -> None:
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(level.upper())


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich once per process.

    Loads .env files (so LOG_* variables apply), initializes the runtime,
    attaches standard logging and lowers the verbosity of the HTTP client
    libraries. Later calls return immediately.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    parsed = _parse_section(config)
    lib_log_rich.runtime.init(_build_runtime_config(parsed))
    lib_log_rich.runtime.attach_std_logging()
    _quiet_http_client_loggers(parsed.http_client_level)


__all__ = [
    "HTTP_CLIENT_LOGGERS",
    "LoggingConfigModel",
    "init_logging",
]
