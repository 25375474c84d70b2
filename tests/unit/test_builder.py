"""Tests for TypefaceBuilder lookup order and fallback chains."""

from pathlib import Path
from unittest.mock import patch

import pytest

from fontpatch.config import FontPatchSettings, ResolverConfig, StorageConfig
from fontpatch.core.builder import TypefaceBuilder
from fontpatch.core.family import parse_family
from fontpatch.domain import FallbackChain, FontHandle, FontSource, ResolvedStyle, UseHostDefault
from fontpatch.io import DirectoryAssetSource, family_name


@pytest.fixture
def custom_dir(settings: FontPatchSettings) -> Path:
    path = settings.storage.downloads_dir / "mySet"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def builder(settings: FontPatchSettings, custom_dir: Path) -> TypefaceBuilder:
    return TypefaceBuilder(settings, custom_dir=custom_dir)


def _build(builder: TypefaceBuilder, raw: str, style_index: int, assets: DirectoryAssetSource):
    candidates, style = parse_family(raw, style_index)
    return builder.build(candidates, style, assets)


class TestSingleFont:
    """Tests for the single-font path."""

    def test_bundled_regular(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test a bundled font is found under the asset root."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter"))

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/Inter.ttf"
        assert family_name(result) == "Inter"

    @pytest.mark.parametrize(
        ("style_index", "filename"),
        [(1, "Inter_bold.ttf"), (2, "Inter_italic.ttf"), (3, "Inter_bold_italic.ttf")],
    )
    def test_style_suffix(self, builder, asset_source, assets_dir, make_font, style_index, filename) -> None:
        """Test the style suffix is part of the looked-up file name."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter"))
        (assets_dir / "fonts" / filename).write_bytes(make_font("Inter Styled"))

        result = _build(builder, "Inter", style_index, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == f"fonts/{filename}"

    def test_custom_root_before_bundled(self, builder, asset_source, assets_dir, custom_dir, make_font) -> None:
        """Test the active font set directory wins over bundled assets."""
        (custom_dir / "Inter.ttf").write_bytes(make_font("Custom Inter"))
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Bundled Inter"))

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == str(custom_dir / "Inter.ttf")
        assert family_name(result) == "Custom Inter"

    def test_ttf_before_otf(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test extensions are tried in configured order."""
        (assets_dir / "fonts" / "Inter.otf").write_bytes(make_font("Inter OTF"))
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter TTF"))

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert family_name(result) == "Inter TTF"

    def test_otf_when_no_ttf(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test the second extension is used when the first is missing."""
        (assets_dir / "fonts" / "Inter.otf").write_bytes(make_font("Inter OTF"))

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/Inter.otf"

    def test_custom_qualified(self, builder, settings, asset_source, make_font) -> None:
        """Test set:logical resolves inside the downloads directory, ignoring style."""
        other_set = settings.storage.downloads_dir / "otherSet"
        other_set.mkdir()
        (other_set / "Inter.otf").write_bytes(make_font("Other Inter"))

        result = _build(builder, "otherSet:Inter", 1, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == str(other_set / "Inter.otf")

    def test_custom_qualified_missing(self, builder, asset_source) -> None:
        """Test an unresolved set:logical falls back to the host default."""
        result = _build(builder, "mySet:Nope", 2, asset_source)

        assert result == UseHostDefault("mySet:Nope", ResolvedStyle.ITALIC)

    @pytest.mark.parametrize("raw", ["..:Inter", "mySet:..", ":Inter", "mySet:"])
    def test_custom_qualified_path_escape(self, builder, settings, asset_source, make_font, raw) -> None:
        """Test set:logical parts must be plain names."""
        (settings.storage.downloads_dir / "Inter.ttf").write_bytes(make_font("Escaped"))

        assert isinstance(_build(builder, raw, 0, asset_source), UseHostDefault)

    def test_no_match_uses_host_default(self, builder, asset_source) -> None:
        """Test an unconfigured family yields UseHostDefault with name and style."""
        result = _build(builder, "FamilyName", 1, asset_source)

        assert result == UseHostDefault("FamilyName", ResolvedStyle.BOLD)

    def test_unreadable_font_skipped(self, builder, asset_source, assets_dir, custom_dir, make_font) -> None:
        """Test a file the factory cannot open is skipped like a missing one."""
        (custom_dir / "Inter.ttf").write_bytes(b"truncated download")
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Bundled Inter"))

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/Inter.ttf"

    def test_without_custom_dir(self, settings, asset_source, assets_dir, make_font) -> None:
        """Test only the bundled root is searched when no font set is active."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter"))

        result = _build(TypefaceBuilder(settings), "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/Inter.ttf"

    def test_bundled_root_disabled(self, tmp_path, asset_source, assets_dir, make_font) -> None:
        """Test bundled_asset_root=None skips bundled assets."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter"))
        settings = FontPatchSettings(
            storage=StorageConfig(app_data_root=tmp_path / "data"),
            resolver=ResolverConfig(bundled_asset_root=None),
        )

        result = _build(TypefaceBuilder(settings), "Inter", 0, asset_source)

        assert isinstance(result, UseHostDefault)

    def test_no_candidates(self, builder, asset_source) -> None:
        """Test an empty candidate list yields UseHostDefault."""
        assert builder.build([], ResolvedStyle.REGULAR, asset_source) == UseHostDefault(
            "", ResolvedStyle.REGULAR
        )

    def test_single_part_never_builds_chain(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test requests with at most one part never take the fallback path."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(make_font("Inter"))

        with patch.object(TypefaceBuilder, "build_fallback_chain") as chain:
            for raw in ["Inter", "Inter,", " Inter , ", "Missing", "mySet:Inter"]:
                _build(builder, raw, 0, asset_source)

        chain.assert_not_called()


class TestFallbackChain:
    """Tests for the fallback-chain path."""

    def test_chain_in_request_order(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test each resolvable candidate becomes one family, first is primary."""
        (assets_dir / "fonts" / "A.ttf").write_bytes(make_font("A"))
        (assets_dir / "fonts" / "B.otf").write_bytes(make_font("B"))

        result = _build(builder, "A, B", 0, asset_source)

        assert isinstance(result, FallbackChain)
        assert [family_name(f) for f in result.families] == ["A", "B"]

    def test_unresolvable_candidates_contribute_nothing(
        self, builder, asset_source, assets_dir, custom_dir, make_font
    ) -> None:
        """Test missing candidates are dropped from the chain."""
        (custom_dir / "B.ttf").write_bytes(make_font("B"))
        (assets_dir / "fonts" / "C.ttf").write_bytes(make_font("C"))

        result = _build(builder, "Missing, B, C", 0, asset_source)

        assert isinstance(result, FallbackChain)
        assert family_name(result.primary) == "B"
        assert [family_name(f) for f in result.fallbacks] == ["C"]

    def test_chain_ignores_style(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test families are built from the regular file even for bold requests."""
        (assets_dir / "fonts" / "A.ttf").write_bytes(make_font("A"))
        (assets_dir / "fonts" / "A_bold.ttf").write_bytes(make_font("A Bold"))
        (assets_dir / "fonts" / "B.ttf").write_bytes(make_font("B"))

        result = _build(builder, "A, B", 1, asset_source)

        assert isinstance(result, FallbackChain)
        assert result.primary.origin == "fonts/A.ttf"

    def test_custom_qualified_in_chain(self, builder, asset_source, assets_dir, custom_dir, make_font) -> None:
        """Test set:logical candidates participate in chains."""
        (custom_dir / "Inter.ttf").write_bytes(make_font("Inter"))
        (assets_dir / "fonts" / "Emoji.ttf").write_bytes(make_font("Emoji"))

        result = _build(builder, "mySet:Inter, Emoji", 0, asset_source)

        assert isinstance(result, FallbackChain)
        assert [family_name(f) for f in result.families] == ["Inter", "Emoji"]

    def test_no_units_degrades_to_single(self, builder, asset_source, assets_dir, make_font) -> None:
        """Test only A_bold bundled: the chain is empty, so A resolves alone with its style."""
        (assets_dir / "fonts" / "A_bold.ttf").write_bytes(make_font("A Bold"))

        result = _build(builder, "A, B", 1, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/A_bold.ttf"

    def test_nothing_resolvable(self, builder, asset_source) -> None:
        """Test the host default carries the first candidate's name."""
        result = _build(builder, "A, B", 2, asset_source)

        assert result == UseHostDefault("A", ResolvedStyle.ITALIC)

    def test_chains_disabled_uses_first(self, tmp_path, asset_source, assets_dir, make_font) -> None:
        """Test runtimes without composites use only the first candidate, with style."""
        (assets_dir / "fonts" / "A_bold.ttf").write_bytes(make_font("A Bold"))
        (assets_dir / "fonts" / "B.ttf").write_bytes(make_font("B"))
        settings = FontPatchSettings(
            storage=StorageConfig(app_data_root=tmp_path / "data"),
            resolver=ResolverConfig(fallback_chains=False),
        )

        result = _build(TypefaceBuilder(settings), "A, B", 1, asset_source)

        assert isinstance(result, FontHandle)
        assert result.origin == "fonts/A_bold.ttf"


class TestFontFactoryInjection:
    """Tests for custom font factories."""

    def test_custom_factory(self, settings, asset_source, assets_dir) -> None:
        """Test the builder hands found bytes to the injected factory."""
        (assets_dir / "fonts" / "Inter.ttf").write_bytes(b"opaque bytes")
        built: list[FontSource] = []

        class RecordingFactory:
            def build(self, source: FontSource) -> FontHandle:
                built.append(source)
                return FontHandle(origin=source.origin, font=source.data)

        builder = TypefaceBuilder(settings, font_factory=RecordingFactory())

        result = _build(builder, "Inter", 0, asset_source)

        assert isinstance(result, FontHandle)
        assert result.font == b"opaque bytes"
        assert built == [FontSource("fonts/Inter.ttf", b"opaque bytes")]
