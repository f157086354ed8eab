"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config.

Values are JSON-coerced (``true``, ``30``, ``["a@x.org"]``) except for keys
that always hold text, such as the ZeptoMail API key or region: a region
``"in"`` or an all-digit token must stay a string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""

#: (section, key) pairs whose values are never JSON-coerced.
VERBATIM_KEYS: frozenset[tuple[str, str]] = frozenset(
    {
        ("zepto", "api_key"),
        ("zepto", "dsn"),
        ("zepto", "region"),
        ("zepto", "host"),
        ("zepto", "from_address"),
    }
)


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    The first dot separates the section from the key path and the first
    ``=`` separates the path from the value.

    Raises:
        ValueError: If the string lacks ``=``, has no dot in the key, or has
            empty section/key components.

    Examples:
        >>> override = parse_override("zepto.track_opens=true")
        >>> override.section, override.key_path, override.value
        ('zepto', ('track_opens',), True)

        >>> parse_override("zepto.api_key=12345").value
        '12345'

        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    path_part, value_str = raw.split("=", maxsplit=1)

    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_parts = path_part.split(".")

    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    verbatim = len(key_parts) == 1 and (section, key_parts[0]) in VERBATIM_KEYS
    return ConfigOverride(
        section=section,
        key_path=tuple(key_parts),
        value=value_str if verbatim else coerce_value(value_str),
    )


def coerce_value(raw: str) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Examples:
        >>> coerce_value("true")
        True
        >>> coerce_value("12.5")
        12.5
        >>> coerce_value('["a@example.com","b@example.com"]')
        ['a@example.com', 'b@example.com']
        >>> coerce_value("eu")
        'eu'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Insert *override* into the nested dict passed to ``Config.with_overrides()``.

    Examples:
        >>> d: dict[str, dict[str, object]] = {}
        >>> _nest_override(d, ConfigOverride(section="zepto", key_path=("timeout",), value=5))
        >>> d
        {'zepto': {'timeout': 5}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge CLI overrides into a Config instance.

    Returns the original object when ``raw_overrides`` is empty.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> from lib_layered_config import Config
        >>> cfg = Config({"zepto": {"region": "com"}}, {"zepto.region": {"layer": "default", "path": None, "key": "zepto.region"}})
        >>> apply_overrides(cfg, ("zepto.region=eu",))["zepto"]["region"]
        'eu'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))

    return config.with_overrides(overrides)


__all__ = [
    "VERBATIM_KEYS",
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
