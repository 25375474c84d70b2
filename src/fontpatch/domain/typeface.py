"""Typeface resolution results.

Resolution ends in exactly one of:
- FontHandle: a single concrete font
- FallbackChain: a primary font with ordered fallbacks
- UseHostDefault: nothing matched; the host applies its own default
"""

from dataclasses import dataclass
from typing import Any

from fontpatch.domain.candidate import ResolvedStyle


@dataclass(frozen=True)
class FontSource:
    """Bytes of a font file found by a lookup.

    Attributes:
        origin: Filesystem path or asset name the bytes came from
        data: Full font file contents
    """

    origin: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        """Size of the font file."""
        return len(self.data)


@dataclass(frozen=True)
class FontHandle:
    """A displayable font built by a font factory.

    Attributes:
        origin: Where the font bytes came from
        font: Opaque font object produced by the factory
    """

    origin: str
    font: Any

    def close(self) -> None:
        """Release the underlying font object, if it supports it."""
        close = getattr(self.font, "close", None)
        if close is not None:
            close()


@dataclass(frozen=True)
class FallbackChain:
    """Composite typeface queried in order until a glyph is found.

    Attributes:
        primary: First family in the chain
        fallbacks: Remaining families, in priority order
    """

    primary: FontHandle
    fallbacks: tuple[FontHandle, ...] = ()

    @property
    def families(self) -> tuple[FontHandle, ...]:
        """All families, primary first."""
        return (self.primary, *self.fallbacks)

    def __len__(self) -> int:
        return 1 + len(self.fallbacks)

    def close(self) -> None:
        """Release every font in the chain."""
        for family in self.families:
            family.close()


@dataclass(frozen=True)
class UseHostDefault:
    """Signal that the host should create its default typeface.

    Attributes:
        family_name: Family name to pass on to the host
        style: Requested style
    """

    family_name: str
    style: ResolvedStyle


TypefaceHandle = FontHandle | FallbackChain
