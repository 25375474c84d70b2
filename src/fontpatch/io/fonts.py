"""Font handle construction.

This module provides the factory that turns font file bytes into font
handles. The default factory opens fonts with fontTools; hosts with their
own graphics stack inject a factory producing their native handles.
"""

from io import BytesIO
from typing import Protocol

from fontTools.ttLib import TTFont

from fontpatch.domain.typeface import FontHandle, FontSource
from fontpatch.exceptions import FontLoadError


class FontFactory(Protocol):
    """Builds a displayable font handle from found font bytes."""

    def build(self, source: FontSource) -> FontHandle:
        """Build a handle.

        Raises:
            FontLoadError: If the bytes cannot be opened as a font
        """
        ...


class TTFontFactory:
    """FontFactory backed by fontTools.

    Only the sfnt table directory is parsed up front; tables are decompiled
    on first access.

    Example:
        factory = TTFontFactory()
        handle = factory.build(FontSource("fonts/Inter.ttf", data))
        family_name(handle)  # "Inter"
    """

    def build(self, source: FontSource) -> FontHandle:
        try:
            font = TTFont(BytesIO(source.data))
        except Exception as e:
            raise FontLoadError(source.origin, str(e) or type(e).__name__) from e
        return FontHandle(origin=source.origin, font=font)


def family_name(handle: FontHandle) -> str | None:
    """Return the family name recorded in a fontTools handle's name table.

    Returns:
        Best family name, or None if the font has no usable name table
    """
    font = handle.font
    if not isinstance(font, TTFont) or "name" not in font:
        return None
    return font["name"].getBestFamilyName()
