"""Configuration settings for FontPatch."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StorageConfig(BaseModel):
    """Location of the definition file and the font download cache.

    Layout under ``app_data_root``::

        <namespace>/fonts.json
        <namespace>/downloads/fonts/<definition name>/<logical name>.<ext>
    """

    model_config = ConfigDict(frozen=True)

    app_data_root: Path = Field(
        default_factory=Path.cwd,
        description="Host application data directory",
    )
    namespace: str = Field(
        default="fontpatch",
        min_length=1,
        description="Subdirectory owned by fontpatch inside the data directory",
    )
    definition_filename: str = Field(
        default="fonts.json",
        description="Name of the font set definition file",
    )

    @property
    def base_dir(self) -> Path:
        """Get the namespace directory."""
        return self.app_data_root / self.namespace

    @property
    def definition_path(self) -> Path:
        """Get the path of the font set definition file."""
        return self.base_dir / self.definition_filename

    @property
    def downloads_dir(self) -> Path:
        """Get the root of the font download cache."""
        return self.base_dir / "downloads" / "fonts"


class DownloadConfig(BaseModel):
    """Configuration for background font downloads."""

    model_config = ConfigDict(frozen=True)

    user_agent: str = Field(
        default="FontPatch",
        description="User-Agent header sent with every download",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max download threads (None = executor default)",
    )
    timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="Per-request timeout in seconds",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects",
    )


class ResolverConfig(BaseModel):
    """Configuration for typeface lookup."""

    model_config = ConfigDict(frozen=True)

    bundled_asset_root: str | None = Field(
        default="fonts/",
        description="Prefix of bundled fonts in the host asset source (None = disabled)",
    )
    fallback_chains: bool = Field(
        default=True,
        description="Host runtime can build composite typefaces with custom fallbacks",
    )
    file_extensions: tuple[str, ...] = Field(
        default=(".ttf", ".otf"),
        min_length=1,
        description="Font file extensions, in lookup order",
    )

    @field_validator("file_extensions")
    @classmethod
    def _check_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for ext in value:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Invalid font file extension: {ext!r}")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    log_file: Path | None = Field(
        default=None,
        description="Path to log file (None = console only)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FontPatchSettings(BaseModel):
    """Main application settings."""

    model_config = ConfigDict(frozen=True)

    storage: StorageConfig = Field(default_factory=StorageConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FontPatchSettings:
    """Get default application settings."""
    return FontPatchSettings()
