"""Utility functions for fontpatch.

This module provides utility functions including:

- Logging setup and configuration
- Download statistics tracking
"""

from fontpatch.utils.logging import (
    DownloadLogger,
    SyncStats,
    configure_logging,
)

__all__ = [
    "DownloadLogger",
    "SyncStats",
    "configure_logging",
]
