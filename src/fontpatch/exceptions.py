"""Exception hierarchy for FontPatch."""


class FontPatchError(Exception):
    """Base exception for all FontPatch errors."""

    pass


class DefinitionError(FontPatchError):
    """Errors related to the font set definition file."""

    pass


class DefinitionNotFoundError(DefinitionError):
    """No definition file exists; customization is not configured."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Font definition not found: '{path}'")


class DefinitionParseError(DefinitionError):
    """Definition file exists but does not have the expected shape."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid font definition '{path}': {reason}")


class CacheError(FontPatchError):
    """Errors related to the font download cache."""

    pass


class CacheDeleteError(CacheError):
    """A stale cache entry could not be removed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to delete cached font '{path}': {reason}")


class DownloadError(FontPatchError):
    """A font could not be downloaded."""

    def __init__(self, name: str, url: str, reason: str) -> None:
        self.name = name
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download font '{name}' from {url}: {reason}")


class DownloadStatusError(DownloadError):
    """Server answered a font download with a non-OK status."""

    def __init__(self, name: str, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(name, url, f"HTTP {status_code}")


class FontError(FontPatchError):
    """Errors related to font handles."""

    pass


class FontLoadError(FontError):
    """A font file was found but could not be opened."""

    def __init__(self, origin: str, reason: str) -> None:
        self.origin = origin
        self.reason = reason
        super().__init__(f"Failed to load font '{origin}': {reason}")
