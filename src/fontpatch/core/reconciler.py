"""Cache reconciliation.

Removes cached font files whose logical name is no longer declared by the
active font set definition. Runs once per process start, before any
download begins.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from fontpatch.domain.definition import FontSetDefinition
from fontpatch.exceptions import CacheDeleteError

logger = structlog.get_logger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of a reconciliation pass.

    Attributes:
        font_dir: Directory that was reconciled
        kept: Entries still referenced by the definition
        deleted: Entries removed
        failed: Entries that could not be removed, with the error
    """

    font_dir: Path
    kept: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    failed: list[CacheDeleteError] = field(default_factory=list)


def logical_name_of(filename: str) -> str:
    """Logical font name a cache entry belongs to.

    Everything before the first dot: ``Inter.ttf`` and ``Inter.otf`` both
    belong to ``Inter``.
    """
    return filename.split(".", 1)[0]


def is_declared(definition: FontSetDefinition, filename: str) -> bool:
    """Whether a cache entry belongs to a font of the definition.

    Matches the prefix before the first dot, or the name without its final
    extension so that dotted logical names (``Inter.Var.ttf``) are kept.
    """
    return definition.has_font(logical_name_of(filename)) or definition.has_font(Path(filename).stem)


def is_temp_file(filename: str) -> bool:
    """Whether an entry is a download temp file (``.<name>.*.part``)."""
    return filename.startswith(".") and filename.endswith(".part")


def reconcile(definition: FontSetDefinition, cache_dir: Path) -> ReconcileResult:
    """Delete cache entries not referenced by the definition.

    Temp files left behind by an interrupted download are deleted as well;
    no download is running yet when this is called. Other hidden entries
    are never touched. Failures are logged and skipped.

    Args:
        definition: Active font set definition
        cache_dir: Root of the font download cache

    Returns:
        ReconcileResult describing what was kept and removed
    """
    font_dir = cache_dir / definition.name
    font_dir.mkdir(parents=True, exist_ok=True)
    result = ReconcileResult(font_dir=font_dir)

    for entry in sorted(font_dir.iterdir()):
        if is_temp_file(entry.name):
            logger.info("Deleting interrupted download", file=entry.name, font_set=definition.name)
        elif entry.name.startswith("."):
            continue
        elif is_declared(definition, entry.name):
            result.kept.append(entry)
            continue
        else:
            logger.info("Deleting font file", file=entry.name, font_set=definition.name)

        try:
            _remove(entry)
        except OSError as e:
            error = CacheDeleteError(str(entry), e.strerror or str(e))
            logger.warning("Could not delete font file", file=entry.name, error=error.reason)
            result.failed.append(error)
        else:
            result.deleted.append(entry)

    return result


def _remove(entry: Path) -> None:
    if entry.is_dir() and not entry.is_symlink():
        shutil.rmtree(entry)
    else:
        entry.unlink()
