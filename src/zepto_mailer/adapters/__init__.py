"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.zepto` - ZeptoMail HTTP transport, factory and sender
    * :mod:`.config` - Configuration loading, display and overrides
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory doubles for tests
    * :mod:`.cli` - rich-click command line
"""

from __future__ import annotations

__all__: list[str] = []
