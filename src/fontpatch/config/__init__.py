"""Configuration management for fontpatch.

This module provides configuration management using Pydantic models.
Settings are built once by the host adapter and passed to every component.

Key classes:
- StorageConfig: Data directory layout
- DownloadConfig: HTTP download settings
- ResolverConfig: Typeface lookup settings
- LoggingConfig: Logging settings
- FontPatchSettings: Main application settings
"""

from fontpatch.config.settings import (
    DownloadConfig,
    FontPatchSettings,
    LoggingConfig,
    ResolverConfig,
    StorageConfig,
    get_default_settings,
)

__all__ = [
    "DownloadConfig",
    "FontPatchSettings",
    "LoggingConfig",
    "ResolverConfig",
    "StorageConfig",
    "get_default_settings",
]
