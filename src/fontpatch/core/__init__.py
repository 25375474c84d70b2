"""Core services for fontpatch.

This module contains the font resolution and acquisition engine:

- Cache reconciliation (pruning fonts the definition no longer declares)
- Download coordination (concurrent, deduplicated, atomic downloads)
- Family parsing (comma-separated and ``set:logical`` requests)
- Typeface building (single fonts and fallback chains)

Resolution is synchronous and safe to run while a download pass is in
progress: cache files appear atomically, so a lookup sees either no file or
a complete one.

Key functions:
- reconcile: Delete cached fonts not referenced by a definition
- parse_family: Split a request into candidates and a style
- guess_extension: Pick a cache file extension for a URL

Key classes:
- DownloadCoordinator: Runs download passes
- TypefaceBuilder: Searches font roots and builds handles
- FontResolver / TypefaceResolver: Entry point for host adapters
- FontPatcher: Process-level orchestrator
"""

from fontpatch.core.builder import TypefaceBuilder
from fontpatch.core.downloader import (
    DownloadCoordinator,
    DownloadOutcome,
    DownloadStatus,
    guess_extension,
    write_atomic,
)
from fontpatch.core.family import parse_family, split_families
from fontpatch.core.patcher import FontPatcher
from fontpatch.core.reconciler import ReconcileResult, is_declared, is_temp_file, logical_name_of, reconcile
from fontpatch.core.resolver import FontResolver, TypefaceResolver

__all__ = [
    # Download classes
    "DownloadCoordinator",
    "DownloadOutcome",
    "DownloadStatus",
    # Orchestration classes
    "FontPatcher",
    "FontResolver",
    # Reconciliation classes
    "ReconcileResult",
    # Builder classes
    "TypefaceBuilder",
    "TypefaceResolver",
    # Functions
    "guess_extension",
    "is_declared",
    "is_temp_file",
    "logical_name_of",
    "parse_family",
    "reconcile",
    "split_families",
    "write_atomic",
]
