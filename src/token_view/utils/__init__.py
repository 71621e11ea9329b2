# src/token_view/utils/__init__.py
"""

Does: Provide key-vocabulary loading and lightweight debug logging utilities.
Returns: Public API via load_key_set/clear_key_cache and debug/reload_topics.
Used by: params, tests.
"""

from __future__ import annotations

from .key_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_key_cache,
    load_key_set,
)
from .log import (
    debug,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # Key vocabularies
    "load_key_set",
    "clear_key_cache",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "reload_topics",
    "topic_enabled",
]
