"""In-memory logging adapter for testing: skips lib_log_rich entirely."""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Leave logging untouched so pytest's caplog keeps capturing records."""


__all__ = ["init_logging_in_memory"]
