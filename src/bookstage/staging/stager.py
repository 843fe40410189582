"""
Copy validated example assets into the book's content tree.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..util import copy_file_atomic, ensure_directory
from .errors import CopyError
from .validator import REQUIRED_ROLES, AssetStatus

logger = logging.getLogger(__name__)


class StagingOutcome(enum.Enum):
    STAGED = "Staged"
    SKIPPED_MISSING_ASSETS = "SkippedMissingAssets"
    FAILED = "Failed"


@dataclass(frozen=True)
class StagingResult:
    """
    Terminal state of one example within a run.

    Attributes:
        name: Example name.
        outcome: Staged, skipped for missing assets, or failed.
        reason: Failure reason (only for FAILED).
        missing: Missing file names (only for SKIPPED_MISSING_ASSETS).
        files: Destination paths written (only for STAGED).
    """
    name: str
    outcome: StagingOutcome
    reason: Optional[str] = None
    missing: tuple[str, ...] = ()
    files: tuple[Path, ...] = field(default=(), compare=False)

    @classmethod
    def staged(cls, name: str, files: List[Path]) -> "StagingResult":
        return cls(name=name, outcome=StagingOutcome.STAGED, files=tuple(files))

    @classmethod
    def skipped(cls, status: AssetStatus) -> "StagingResult":
        return cls(
            name=status.name,
            outcome=StagingOutcome.SKIPPED_MISSING_ASSETS,
            missing=tuple(status.missing_files),
        )

    @classmethod
    def failed(cls, name: str, reason: str) -> "StagingResult":
        return cls(name=name, outcome=StagingOutcome.FAILED, reason=reason)

    @property
    def is_hard_failure(self) -> bool:
        return self.outcome is StagingOutcome.FAILED

    def describe(self) -> str:
        if self.outcome is StagingOutcome.FAILED:
            return f"Failed: {self.reason}"
        if self.outcome is StagingOutcome.SKIPPED_MISSING_ASSETS and self.missing:
            return f"SkippedMissingAssets (missing {', '.join(self.missing)})"
        return self.outcome.value


def _copy_assets(source_dir: Path, target_dir: Path, name: str) -> List[Path]:
    written: List[Path] = []
    for role in REQUIRED_ROLES:
        try:
            written.append(copy_file_atomic(source_dir / role.filename, target_dir / role.filename))
        except OSError as exc:
            raise CopyError(name, role.filename, exc.strerror or str(exc)) from exc
    return written


def stage(source_root: Path, dest_root: Path, name: str) -> StagingResult:
    """
    Copy the three assets of ``name`` from source_root into dest_root/name.

    The caller validates the example first; this function does not. The
    destination directory is created when missing and existing files are
    overwritten. A failed copy leaves any files already copied in place.

    Returns:
        STAGED when all files were copied, otherwise FAILED with a reason.
    """
    source_dir = Path(source_root) / name
    target_dir = Path(dest_root) / name
    try:
        ensure_directory(target_dir)
    except OSError as exc:
        logger.error("Cannot create %s: %s", target_dir, exc)
        return StagingResult.failed(name, f"could not create {target_dir}: {exc.strerror or exc}")

    try:
        written = _copy_assets(source_dir, target_dir, name)
    except CopyError as exc:
        logger.error("Staging %s failed: %s", name, exc)
        return StagingResult.failed(name, str(exc))

    logger.info("Staged %s → %s", name, target_dir)
    return StagingResult.staged(name, written)
