"""FontPatch - Substitute a user-defined font set into a host application.

FontPatch sits behind a host's typeface-creation hook. It resolves requested
font families against a downloaded font set and the host's bundled fonts,
building fallback chains for comma-separated requests, while a background
pass downloads any fonts the active definition declares but the cache lacks.

Example:
    patcher = FontPatcher(FontPatchSettings(storage=StorageConfig(app_data_root=root)))
    patcher.start()
    handle = patcher.resolver.resolve("Inter, Noto Sans", 0, assets)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
