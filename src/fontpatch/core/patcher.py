"""Process-level orchestration.

FontPatcher wires the components together for a host adapter:

1. The resolver is available immediately, before any definition is loaded
2. start() loads the definition, prunes the cache, and launches downloads
3. Resolution calls keep working while the download pass runs

Example:
    patcher = FontPatcher(settings)
    hook.install(patcher.resolver.resolve)
    patcher.start()
"""

from pathlib import Path
from typing import Any, ClassVar

import httpx

from fontpatch.config import FontPatchSettings
from fontpatch.core.builder import TypefaceBuilder
from fontpatch.core.downloader import DownloadCoordinator
from fontpatch.core.reconciler import ReconcileResult, reconcile
from fontpatch.core.resolver import TypefaceResolver
from fontpatch.domain.definition import FontSetDefinition
from fontpatch.exceptions import DefinitionNotFoundError, DefinitionParseError
from fontpatch.io.fonts import FontFactory
from fontpatch.io.loader import load_definition
from fontpatch.utils import SyncStats, configure_logging


class FontPatcher:
    """Owns the resolver, the cache reconciler and the download coordinator."""

    # Reported to the host frontend so it knows which font features are patched in
    CAPABILITIES: ClassVar[dict[str, int]] = {"fontPatch": 2}

    def __init__(
        self,
        settings: FontPatchSettings,
        font_factory: FontFactory | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the patcher.

        Args:
            settings: FontPatch settings
            font_factory: Factory for font handles (fontTools if None)
            transport: httpx transport override for downloads
        """
        self.settings = settings
        self.font_factory = font_factory
        self.logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
        )
        self.resolver = TypefaceResolver(TypefaceBuilder(settings, font_factory))
        self.coordinator = DownloadCoordinator(settings, transport=transport, logger=self.logger)
        self.definition: FontSetDefinition | None = None
        self.reconcile_result: ReconcileResult | None = None

    @property
    def font_dir(self) -> Path | None:
        """Cache directory of the active font set."""
        if self.definition is None:
            return None
        return self.settings.storage.downloads_dir / self.definition.name

    def start(self) -> FontSetDefinition | None:
        """Activate the configured font set.

        Loads the definition, points the resolver at its cache directory,
        deletes stale cached fonts, and starts the background download pass.
        A missing or malformed definition leaves the resolver on bundled
        fonts only.

        Returns:
            The active definition, or None if none could be loaded
        """
        if self.definition is not None:
            return self.definition

        storage = self.settings.storage
        try:
            definition = load_definition(storage.definition_path)
        except DefinitionNotFoundError:
            self.logger.debug("No font definition", path=str(storage.definition_path))
            return None
        except DefinitionParseError as e:
            self.logger.warning("Ignoring invalid font definition", path=e.path, reason=e.reason)
            return None

        downloads_dir = storage.downloads_dir
        try:
            self.reconcile_result = reconcile(definition, downloads_dir)
        except OSError as e:
            self.logger.error("Font cache unavailable", path=str(downloads_dir), error=str(e))
            return None

        self.definition = definition
        self.resolver.builder = TypefaceBuilder(
            self.settings,
            self.font_factory,
            custom_dir=downloads_dir / definition.name,
        )
        self.logger.info(
            "Font set activated",
            font_set=definition.name,
            fonts=len(definition.entries),
            deleted=len(self.reconcile_result.deleted),
        )

        self.coordinator.start_background(definition, downloads_dir)
        return definition

    def wait(self, timeout: float | None = None) -> SyncStats | None:
        """Wait for the background download pass.

        Returns:
            Stats of the finished pass, or None if none ran or it is still running
        """
        return self.coordinator.wait(timeout)

    def describe(self) -> dict[str, Any]:
        """Capability descriptor for the host frontend."""
        return dict(self.CAPABILITIES)
