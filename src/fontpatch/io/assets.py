"""Font file lookups.

Every lookup here returns None when the file is absent. A missing font is
an expected branch during resolution, not an error.

Key classes:
- AssetSource: Host-provided access to bundled assets
- DirectoryAssetSource: AssetSource backed by a plain directory
- DirectoryRoot / AssetRoot: Search roots used by the typeface builder
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import structlog

from fontpatch.domain.typeface import FontSource

logger = structlog.get_logger(__name__)


class AssetSource(Protocol):
    """Read-only access to files bundled with the host application."""

    def read(self, name: str) -> bytes | None:
        """Return the contents of asset ``name``, or None if it does not exist."""
        ...


class DirectoryAssetSource:
    """AssetSource serving files below a directory.

    Example:
        assets = DirectoryAssetSource(Path("/app/assets"))
        assets.read("fonts/Inter_bold.ttf")
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Directory assets are served from."""
        return self._root

    def read(self, name: str) -> bytes | None:
        return read_file(self._root / name)


def read_file(path: Path) -> bytes | None:
    """Read a whole file, or return None if it cannot be read."""
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        return None
    except OSError as e:
        logger.debug("Unreadable font file", path=str(path), error=str(e))
        return None


def is_plain_name(name: str) -> bool:
    """Check that a name is usable as a single path component."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


def find_file(directory: Path, stem: str, extensions: Iterable[str]) -> Path | None:
    """Find ``<directory>/<stem><ext>`` for the first extension that exists.

    Args:
        directory: Directory to look in
        stem: File name without extension
        extensions: Extensions to try, in order (with leading dot)

    Returns:
        Path of the first existing file, or None
    """
    for ext in extensions:
        candidate = directory / f"{stem}{ext}"
        if candidate.is_file():
            return candidate
    return None


class DirectoryRoot:
    """Search root on the local filesystem (the downloaded font set)."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def lookup(self, filename: str) -> FontSource | None:
        path = self.directory / filename
        data = read_file(path)
        if data is None:
            return None
        return FontSource(origin=str(path), data=data)

    def __repr__(self) -> str:
        return f"DirectoryRoot({str(self.directory)!r})"


class AssetRoot:
    """Search root inside the host's bundled assets (e.g. ``fonts/``)."""

    def __init__(self, source: AssetSource, prefix: str) -> None:
        self.source = source
        self.prefix = prefix

    def lookup(self, filename: str) -> FontSource | None:
        name = f"{self.prefix}{filename}"
        data = self.source.read(name)
        if data is None:
            return None
        return FontSource(origin=name, data=data)

    def __repr__(self) -> str:
        return f"AssetRoot({self.prefix!r})"
