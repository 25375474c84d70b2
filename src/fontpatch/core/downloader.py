"""Background download of the fonts a definition declares.

This module fetches every logical font missing from the cache, concurrently,
using a ThreadPoolExecutor and one shared httpx client.

Key components:
- guess_extension: Pick the cache file extension from a source URL
- write_atomic: All-or-nothing file commit
- DownloadCoordinator: Runs and joins a download pass
"""

import contextlib
import os
import tempfile
import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit

import httpx
import structlog

from fontpatch.config import FontPatchSettings
from fontpatch.domain.definition import FontSetDefinition
from fontpatch.exceptions import DownloadError, DownloadStatusError
from fontpatch.io.assets import find_file, is_plain_name
from fontpatch.utils.logging import DownloadLogger, SyncStats

# Mode a plain open() would give new files; mkstemp always uses 0600.
_UMASK = os.umask(0)
os.umask(_UMASK)
FILE_MODE = 0o666 & ~_UMASK


class DownloadStatus(str, Enum):
    """Outcome of one logical font in a download pass."""

    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DownloadOutcome:
    """Result of fetching a single logical font.

    Attributes:
        name: Logical font name
        url: Source URL
        status: What happened
        path: Cache file (existing or newly written)
        reason: Why the font was skipped
        error: Failure, for FAILED outcomes
        size_bytes: Bytes written
        duration_ms: Wall time spent on this font
    """

    name: str
    url: str
    status: DownloadStatus
    path: Path | None = None
    reason: str | None = None
    error: DownloadError | None = None
    size_bytes: int = 0
    duration_ms: float = 0.0


def guess_extension(url: str, extensions: Sequence[str]) -> str:
    """Guess the font file extension from a URL path.

    Query strings and fragments are ignored; matching is case-insensitive.
    Falls back to the first allowed extension.

    Args:
        url: Source URL
        extensions: Allowed extensions, with leading dot

    Returns:
        One of ``extensions``
    """
    path = urlsplit(url).path.lower()
    for ext in extensions:
        if path.endswith(ext.lower()):
            return ext
    return extensions[0]


def write_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` so readers never see a partial file.

    The bytes go to a hidden temp file in the same directory, which is then
    renamed over ``path`` with the usual umask-derived permissions. The temp
    file is removed on any failure.

    Raises:
        OSError: If the file cannot be written or committed
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


class DownloadCoordinator:
    """Downloads missing fonts of a definition into the cache.

    A pass never raises for individual failures: every font ends up
    downloaded, skipped, or logged as failed, and callers use whatever is
    present when they resolve. At most one fetch per logical font is in
    flight at a time, even across overlapping passes.

    Example:
        coordinator = DownloadCoordinator(settings)
        stats = coordinator.sync_all(definition, settings.storage.downloads_dir)
    """

    def __init__(
        self,
        settings: FontPatchSettings,
        transport: httpx.BaseTransport | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            settings: FontPatch settings (download and resolver sections are used)
            transport: httpx transport override, mainly for tests
            logger: Logger to report to (module logger if None)
        """
        self.config = settings.download
        self.extensions = settings.resolver.file_extensions
        self.logger = logger if logger is not None else structlog.get_logger(__name__)
        self._transport = transport
        self._lock = threading.Lock()
        self._in_flight: set[Path] = set()
        self._thread: threading.Thread | None = None
        self._last_stats: SyncStats | None = None

    def create_client(self) -> httpx.Client:
        """Create the HTTP client shared by one pass."""
        return httpx.Client(
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout,
            follow_redirects=self.config.follow_redirects,
            transport=self._transport,
        )

    def sync_all(self, definition: FontSetDefinition, cache_dir: Path) -> SyncStats:
        """Download every declared font missing from the cache.

        Args:
            definition: Active font set definition
            cache_dir: Root of the font download cache

        Returns:
            SyncStats for the pass
        """
        download_logger = DownloadLogger(self.logger)
        stats = download_logger.stats
        stats.start_time = time.time()

        font_dir = cache_dir / definition.name
        font_dir.mkdir(parents=True, exist_ok=True)

        self.logger.info(
            "Starting font sync",
            font_set=definition.name,
            fonts=len(definition.entries),
            max_workers=self.config.max_workers,
        )

        if definition.entries:
            with self.create_client() as client, ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix="fontpatch-download",
            ) as executor:
                pending = {
                    executor.submit(self.fetch, client, name, url, font_dir): (name, url)
                    for name, url in definition.entries.items()
                }

                for future in as_completed(pending):
                    name, url = pending[future]
                    try:
                        outcome = future.result()
                    except Exception as e:
                        # Executor-level error
                        download_logger.log_download_error(name, url, e)
                        continue
                    self._record(download_logger, outcome)

        stats.end_time = time.time()
        self.logger.info(
            "Font sync complete",
            font_set=definition.name,
            downloaded=stats.downloaded_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def fetch(self, client: httpx.Client, name: str, url: str, font_dir: Path) -> DownloadOutcome:
        """Fetch one logical font unless it is cached or already in flight.

        Args:
            client: HTTP client for the pass
            name: Logical font name
            url: Source URL
            font_dir: Cache directory of the font set

        Returns:
            DownloadOutcome; failures are reported, not raised
        """
        start_time = time.time()

        if not is_plain_name(name):
            return self._failed(name, url, DownloadError(name, url, "invalid logical font name"), start_time)

        existing = find_file(font_dir, name, self.extensions)
        if existing is not None:
            return DownloadOutcome(name, url, DownloadStatus.SKIPPED, path=existing, reason="already cached")

        key = font_dir / name
        if not self._claim(key):
            return DownloadOutcome(name, url, DownloadStatus.SKIPPED, reason="download in progress")

        try:
            self.logger.info("Downloading font", font=name, url=url)
            response = client.get(url)
            if response.status_code != httpx.codes.OK:
                raise DownloadStatusError(name, url, response.status_code)

            target = font_dir / f"{name}{guess_extension(url, self.extensions)}"
            data = response.content
            write_atomic(target, data)
        except DownloadError as e:
            return self._failed(name, url, e, start_time)
        except httpx.HTTPError as e:
            return self._failed(name, url, DownloadError(name, url, str(e) or type(e).__name__), start_time)
        except OSError as e:
            return self._failed(name, url, DownloadError(name, url, f"write failed: {e}"), start_time)
        finally:
            self._release(key)

        return DownloadOutcome(
            name,
            url,
            DownloadStatus.DOWNLOADED,
            path=target,
            size_bytes=len(data),
            duration_ms=(time.time() - start_time) * 1000,
        )

    def start_background(self, definition: FontSetDefinition, cache_dir: Path) -> threading.Thread:
        """Run sync_all on a daemon thread and return immediately.

        Returns:
            The started thread; join it with wait()
        """
        thread = threading.Thread(
            target=self._run_background,
            args=(definition, cache_dir),
            name="fontpatch-sync",
            daemon=True,
        )
        self._thread = thread
        thread.start()
        return thread

    def wait(self, timeout: float | None = None) -> SyncStats | None:
        """Wait for the background pass.

        Returns:
            Stats of the finished pass, or None if it has not finished
        """
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                return None
        return self._last_stats

    @property
    def in_flight(self) -> frozenset[Path]:
        """Fonts currently being downloaded."""
        with self._lock:
            return frozenset(self._in_flight)

    def _run_background(self, definition: FontSetDefinition, cache_dir: Path) -> None:
        try:
            self._last_stats = self.sync_all(definition, cache_dir)
        except Exception:
            self.logger.exception("Font sync failed", font_set=definition.name)

    def _claim(self, key: Path) -> bool:
        with self._lock:
            if key in self._in_flight:
                return False
            self._in_flight.add(key)
            return True

    def _release(self, key: Path) -> None:
        with self._lock:
            self._in_flight.discard(key)

    @staticmethod
    def _failed(name: str, url: str, error: DownloadError, start_time: float) -> DownloadOutcome:
        return DownloadOutcome(
            name,
            url,
            DownloadStatus.FAILED,
            error=error,
            duration_ms=(time.time() - start_time) * 1000,
        )

    @staticmethod
    def _record(download_logger: DownloadLogger, outcome: DownloadOutcome) -> None:
        if outcome.status is DownloadStatus.DOWNLOADED and outcome.path is not None:
            download_logger.log_download_complete(
                outcome.name, outcome.path, outcome.size_bytes, outcome.duration_ms
            )
        elif outcome.status is DownloadStatus.SKIPPED:
            download_logger.log_download_skipped(outcome.name, outcome.reason or "")
        else:
            error = outcome.error or DownloadError(outcome.name, outcome.url, "no result")
            download_logger.log_download_error(outcome.name, outcome.url, error)
