"""Layered configuration loading for zepto-mailer.

Configuration is merged by lib_layered_config in the order
``defaults -> app -> host -> user -> dotenv -> env``. The bundled
``defaultconfig.toml`` supplies the ``[zepto]`` and ``[lib_log_rich]``
sections; a user file or the environment normally adds the API key.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from zepto_mailer import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """A config loader exposing ``cache_clear`` like an lru_cache wrapper."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are unsafe as path components.

    Delegates to lib_layered_config.validate_profile_name().

    Raises:
        ValueError: Empty, too long, invalid characters, reserved names or
            path traversal.

    Examples:
        >>> validate_profile("eu-production")

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml`` next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One Config per (profile, start_dir); a CLI process is short-lived.
@lru_cache(maxsize=4)
def _read_cached(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every configuration path, e.g. one profile per ZeptoMail region
            or mail agent.
        start_dir: Directory that seeds .env discovery; the current working
            directory when None.

    Returns:
        Immutable configuration object with provenance tracking. Repeated
        calls with the same arguments return the cached instance.

    Example:
        >>> config = get_config()
        >>> "zepto" in config.as_dict()
        True
    """
    if profile is not None:
        validate_profile(profile)
    return _read_cached(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Drop cached configurations so the next call re-reads the layers."""
    _read_cached.cache_clear()


# lru_cache's cache_clear is invisible to type checkers once cast to the Protocol.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
