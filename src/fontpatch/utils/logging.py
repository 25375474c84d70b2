"""Logging utilities for FontPatch."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_MARKER = "_fontpatch_handler"


@dataclass
class SyncStats:
    """Statistics from a download pass."""

    downloaded_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    downloaded: list[str] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)
    download_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate pass duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def total_count(self) -> int:
        """Number of entries the pass looked at."""
        return self.downloaded_count + self.skipped_count + self.error_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so the host may call
    this again after reloading settings.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(console_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("fontpatch")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class DownloadLogger:
    """Logger for tracking download progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = SyncStats()

    def log_download_complete(
        self,
        name: str,
        path: Path,
        size_bytes: int,
        duration_ms: float,
    ) -> None:
        """Log a committed download."""
        self._logger.info(
            "Font downloaded",
            font=name,
            path=str(path),
            size_bytes=size_bytes,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.downloaded_count += 1
        self._stats.downloaded.append(name)
        self._stats.download_timings_ms.append(duration_ms)

    def log_download_skipped(self, name: str, reason: str) -> None:
        """Log skipped font."""
        self._logger.debug("Font skipped", font=name, reason=reason)
        self._stats.skipped_count += 1

    def log_download_error(
        self,
        name: str,
        url: str,
        error: Exception,
    ) -> None:
        """Log a failed download."""
        self._logger.error(
            "Failed to download font",
            font=name,
            url=url,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    @property
    def stats(self) -> SyncStats:
        """Get current download statistics."""
        return self._stats
