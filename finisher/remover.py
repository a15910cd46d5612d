"""
remover.py

Responsibility: Delete the template's scaffolding files once customization is done.

Steps, in order:
1) Placeholder guard over a few likely-customized files (fatal when it trips).
2) External documentation presence check (advisory).
3) Deletion pass over the removal manifest; each file independently.
4) Removal of configured directories that are now empty.

Deletion is best-effort: a failure is recorded and the batch continues. Nothing
is rolled back, and rerunning on a cleaned tree is a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from finisher.config import ToolConfig
from finisher.logging_config import get_logger
from finisher.scanner import PLACEHOLDER_RE

logger = get_logger(__name__)


class CleanupError(RuntimeError):
    pass


class CustomizationIncompleteError(CleanupError):
    def __init__(self, files: list[str]) -> None:
        super().__init__(f"Template variables still found in: {', '.join(files)}")
        self.files = files


@dataclass(frozen=True)
class RemovalFailure:
    path: str
    message: str


@dataclass
class CleanupResult:
    dry_run: bool = False
    pending: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    errors: list[RemovalFailure] = field(default_factory=list)
    missing_docs: list[str] = field(default_factory=list)
    removed_dirs: list[str] = field(default_factory=list)
    dir_warnings: list[RemovalFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors


def find_unreplaced(root: Path, config: ToolConfig) -> list[str]:
    """
    Return the likely-customized files that still hold a placeholder.

    This reads a short fixed list only; it is a fast guard, not a full scan.
    """
    offenders: list[str] = []
    for rel in config.cleanup.customized_files:
        path = root / rel
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("could not read %s for the placeholder check: %s", rel, e)
            continue
        if PLACEHOLDER_RE.search(text):
            offenders.append(rel)
    return offenders


def check_customization(root: Path, config: ToolConfig) -> None:
    offenders = find_unreplaced(root, config)
    if offenders:
        raise CustomizationIncompleteError(offenders)


def find_missing_external_docs(root: Path, config: ToolConfig) -> list[str]:
    return [doc for doc in config.cleanup.external_docs if not (root / doc).exists()]


def pending_files(root: Path, config: ToolConfig) -> list[str]:
    """Manifest entries currently present, in manifest order."""
    return [rel for rel in config.cleanup.removal_manifest if (root / rel).is_file()]


def remove_files(root: Path, paths: list[str]) -> tuple[list[str], list[RemovalFailure]]:
    removed: list[str] = []
    errors: list[RemovalFailure] = []
    for rel in paths:
        path = root / rel
        if not path.is_file():
            continue
        try:
            path.unlink()
        except OSError as e:
            logger.warning("failed to remove %s: %s", rel, e)
            errors.append(RemovalFailure(path=rel, message=e.strerror or str(e)))
            continue
        logger.debug("removed %s", rel)
        removed.append(rel)
    return removed, errors


def remove_empty_dirs(root: Path, dirs: tuple[str, ...] | list[str]) -> tuple[list[str], list[RemovalFailure]]:
    """
    Remove each directory only when it has no entries left.
    Non-empty directories are left alone; failures are returned as warnings.
    """
    removed: list[str] = []
    warnings: list[RemovalFailure] = []
    for rel in dirs:
        path = root / rel
        if not path.is_dir():
            continue
        try:
            if any(path.iterdir()):
                logger.debug("keeping non-empty directory %s", rel)
                continue
            path.rmdir()
        except OSError as e:
            logger.warning("could not remove directory %s: %s", rel, e)
            warnings.append(RemovalFailure(path=rel, message=e.strerror or str(e)))
            continue
        removed.append(rel)
    return removed, warnings


def cleanup(root: str | Path, config: ToolConfig, *, dry_run: bool = False) -> CleanupResult:
    """
    Run the whole removal flow.

    Raises CustomizationIncompleteError before touching anything if the guard trips.
    With dry_run, reports what would be removed without deleting.
    """
    root_path = Path(root).resolve()
    check_customization(root_path, config)

    result = CleanupResult(dry_run=dry_run)
    result.missing_docs = find_missing_external_docs(root_path, config)
    result.pending = pending_files(root_path, config)

    if dry_run:
        return result

    result.removed, result.errors = remove_files(root_path, result.pending)
    result.removed_dirs, result.dir_warnings = remove_empty_dirs(root_path, config.cleanup.empty_dirs)
    return result
