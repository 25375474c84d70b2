"""Resolution entry point called by the host's typeface hook."""

from typing import Protocol

import structlog

from fontpatch.core.builder import TypefaceBuilder
from fontpatch.core.family import parse_family
from fontpatch.domain.typeface import TypefaceHandle, UseHostDefault
from fontpatch.io.assets import AssetSource

logger = structlog.get_logger(__name__)


class FontResolver(Protocol):
    """What a host adapter needs from fontpatch."""

    def resolve(
        self,
        raw_family: str,
        style_index: int,
        asset_source: AssetSource,
    ) -> TypefaceHandle | UseHostDefault:
        ...


class TypefaceResolver:
    """FontResolver that parses requests and hands them to a TypefaceBuilder.

    The builder reference is swapped, not mutated, when the active font set
    changes, so calls already in progress keep a consistent view.
    """

    def __init__(self, builder: TypefaceBuilder) -> None:
        self.builder = builder

    def resolve(
        self,
        raw_family: str,
        style_index: int,
        asset_source: AssetSource,
    ) -> TypefaceHandle | UseHostDefault:
        """Resolve a raw family request to a typeface.

        Args:
            raw_family: Family string, possibly comma-separated and ``set:logical`` qualified
            style_index: Host style index (0-3)
            asset_source: Host's bundled assets

        Returns:
            FontHandle, FallbackChain, or UseHostDefault

        Raises:
            ValueError: If style_index is out of range
        """
        candidates, style = parse_family(raw_family, style_index)
        if not candidates:
            return UseHostDefault(raw_family.strip(), style)

        builder = self.builder
        result = builder.build(candidates, style, asset_source)
        logger.debug(
            "Resolved font family",
            family=raw_family,
            style=style.name,
            result=type(result).__name__,
        )
        return result
