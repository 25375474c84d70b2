"""Typeface construction from font candidates.

Lookup order for a plain family name, first match wins:

    <custom font set dir>/<family><style suffix><ext>
    <bundled asset root><family><style suffix><ext>

for each extension in ``resolver.file_extensions``. A ``set:logical``
candidate is looked up only in ``<downloads>/<set>/<logical><ext>``.
"""

from pathlib import Path

import structlog

from fontpatch.config import FontPatchSettings
from fontpatch.domain.candidate import FontCandidate, ResolvedStyle
from fontpatch.domain.typeface import (
    FallbackChain,
    FontHandle,
    FontSource,
    TypefaceHandle,
    UseHostDefault,
)
from fontpatch.exceptions import FontLoadError
from fontpatch.io.assets import AssetRoot, AssetSource, DirectoryRoot, is_plain_name, read_file
from fontpatch.io.fonts import FontFactory, TTFontFactory

logger = structlog.get_logger(__name__)


class TypefaceBuilder:
    """Builds typefaces from resolved candidates.

    Missing files and fonts the factory cannot open are skipped silently;
    only exhausting every option yields UseHostDefault.

    Example:
        builder = TypefaceBuilder(settings, custom_dir=downloads / "mySet")
        builder.build(candidates, ResolvedStyle.BOLD, assets)
    """

    def __init__(
        self,
        settings: FontPatchSettings,
        font_factory: FontFactory | None = None,
        custom_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            settings: FontPatch settings
            font_factory: Factory for font handles (fontTools if None)
            custom_dir: Directory of the active font set (None = no custom root)
        """
        self.config = settings.resolver
        self.downloads_dir = settings.storage.downloads_dir
        self.custom_dir = custom_dir
        self.font_factory: FontFactory = font_factory if font_factory is not None else TTFontFactory()

    def build(
        self,
        candidates: list[FontCandidate],
        style: ResolvedStyle,
        asset_source: AssetSource,
    ) -> TypefaceHandle | UseHostDefault:
        """Build a typeface for a parsed request.

        One candidate always takes the single-font path. Several candidates
        build a fallback chain when the runtime supports it; otherwise only
        the first candidate is used.
        """
        if not candidates:
            return UseHostDefault("", style)

        if len(candidates) > 1 and self.config.fallback_chains:
            return self.build_fallback_chain(candidates, style, asset_source)

        return self.build_single(candidates[0], style, asset_source)

    def build_single(
        self,
        candidate: FontCandidate,
        style: ResolvedStyle,
        asset_source: AssetSource,
    ) -> FontHandle | UseHostDefault:
        """Build a single font for one candidate and style."""
        handle = self.find_font(candidate, style, asset_source)
        if handle is None:
            logger.debug("No font found, using host default", family=candidate.family_name, style=style.name)
            return UseHostDefault(candidate.family_name, style)
        return handle

    def build_fallback_chain(
        self,
        candidates: list[FontCandidate],
        style: ResolvedStyle,
        asset_source: AssetSource,
    ) -> TypefaceHandle | UseHostDefault:
        """Build a composite typeface, one family per resolvable candidate.

        Families are built from the regular shape; fallback works per family,
        not per style. If no candidate resolves, the first candidate goes
        through the single-font path with the requested style.
        """
        families = [
            handle
            for handle in (
                self.find_font(candidate, ResolvedStyle.REGULAR, asset_source)
                for candidate in candidates
            )
            if handle is not None
        ]

        if not families:
            return self.build_single(candidates[0], style, asset_source)

        return FallbackChain(primary=families[0], fallbacks=tuple(families[1:]))

    def find_font(
        self,
        candidate: FontCandidate,
        style: ResolvedStyle,
        asset_source: AssetSource,
    ) -> FontHandle | None:
        """Find and open the first matching font for a candidate.

        Returns:
            FontHandle, or None if no location has a usable font
        """
        if candidate.is_custom_qualified:
            return self._find_custom(candidate)

        filename_stem = f"{candidate.family_name}{style.suffix}"
        for root in self.roots(asset_source):
            for ext in self.config.file_extensions:
                source = root.lookup(f"{filename_stem}{ext}")
                if source is None:
                    continue
                handle = self._open(source)
                if handle is not None:
                    return handle
        return None

    def roots(self, asset_source: AssetSource) -> list[DirectoryRoot | AssetRoot]:
        """Configured search roots, in priority order."""
        roots: list[DirectoryRoot | AssetRoot] = []
        if self.custom_dir is not None:
            roots.append(DirectoryRoot(self.custom_dir))
        if self.config.bundled_asset_root is not None:
            roots.append(AssetRoot(asset_source, self.config.bundled_asset_root))
        return roots

    def _find_custom(self, candidate: FontCandidate) -> FontHandle | None:
        set_name = candidate.custom_set_name or ""
        logical_name = candidate.logical_name or ""
        if not (is_plain_name(set_name) and is_plain_name(logical_name)):
            return None

        set_dir = self.downloads_dir / set_name
        for ext in self.config.file_extensions:
            path = set_dir / f"{logical_name}{ext}"
            data = read_file(path)
            if data is None:
                continue
            handle = self._open(FontSource(origin=str(path), data=data))
            if handle is not None:
                return handle
        return None

    def _open(self, source: FontSource) -> FontHandle | None:
        try:
            return self.font_factory.build(source)
        except FontLoadError as e:
            logger.debug("Skipping unreadable font", origin=e.origin, reason=e.reason)
            return None
