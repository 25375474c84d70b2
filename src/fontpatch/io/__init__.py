"""I/O layer for fontpatch.

This module handles reading the font set definition, looking up font files
on disk and in the host's bundled assets, and opening fonts with fonttools.

Key responsibilities:
- Parse the font set definition JSON
- Presence-returning lookups for cached and bundled font files
- Build font handles from font bytes

Key classes:
- AssetSource / DirectoryAssetSource: Bundled asset access
- DirectoryRoot / AssetRoot: Typeface search roots
- FontFactory / TTFontFactory: Font handle construction
"""

from fontpatch.io.assets import (
    AssetRoot,
    AssetSource,
    DirectoryAssetSource,
    DirectoryRoot,
    find_file,
    is_plain_name,
    read_file,
)
from fontpatch.io.fonts import FontFactory, TTFontFactory, family_name
from fontpatch.io.loader import load_definition

__all__ = [
    "AssetRoot",
    "AssetSource",
    "DirectoryAssetSource",
    "DirectoryRoot",
    "FontFactory",
    "TTFontFactory",
    "family_name",
    "find_file",
    "is_plain_name",
    "load_definition",
    "read_file",
]
