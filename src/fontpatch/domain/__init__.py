"""Domain models for fontpatch.

This module contains the domain models for font set definitions, font
requests and resolution results. All models are designed to be:

- Immutable (frozen dataclasses and frozen pydantic models)
- Safe to share between the resolver and the download thread
- Independent of fontTools implementation details

Key classes:
- FontSetDefinition: Font set name and logical font URLs
- ResolvedStyle: Requested style with its filename suffix
- FontCandidate: One family name from a request
- FontSource: Bytes of a font file found by a lookup
- FontHandle / FallbackChain: Resolved typefaces
- UseHostDefault: Delegation back to the host's default typeface
"""

from fontpatch.domain.candidate import FontCandidate, ResolvedStyle
from fontpatch.domain.definition import FontSetDefinition
from fontpatch.domain.typeface import (
    FallbackChain,
    FontHandle,
    FontSource,
    TypefaceHandle,
    UseHostDefault,
)

__all__: list[str] = [
    # Enums
    "ResolvedStyle",
    # Core types
    "FontSetDefinition",
    "FontCandidate",
    "FontSource",
    "FontHandle",
    "FallbackChain",
    "TypefaceHandle",
    "UseHostDefault",
]
