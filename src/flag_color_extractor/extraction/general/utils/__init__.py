# flag_color_extractor/extraction/general/utils/__init__.py
"""

Does: Provide config loading and lightweight debug logging utilities for the extraction stack.
Returns: Public API via load_config/clear_config_cache/load_settings and debug/reload_topics.
Used by: The orchestrator, the CLI, the svg scanner, and tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    Settings,
    clear_config_cache,
    load_config,
    load_settings,
    resolve_data_dir,
    temp_data_dir,
)
from .log import (
    debug,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # Config loading
    "load_config",
    "load_settings",
    "resolve_data_dir",
    "clear_config_cache",
    "temp_data_dir",
    "Settings",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "reload_topics",
    "topic_enabled",
]
