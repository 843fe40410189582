"""
Check that an example ships every asset the book needs.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List

from .errors import MissingAssetsError

logger = logging.getLogger(__name__)


class AssetRole(enum.Enum):
    """Required files of an example, keyed by the part they play in the book."""

    SOURCE_CODE = "source.rs"
    CODE_VISUALIZATION = "vis_code.svg"
    TIMELINE_VISUALIZATION = "vis_timeline.svg"

    @property
    def filename(self) -> str:
        return self.value


REQUIRED_ROLES: tuple[AssetRole, ...] = tuple(AssetRole)


@dataclass(frozen=True)
class AssetStatus:
    """
    Outcome of validating one example.

    Attributes:
        name: Example name.
        missing: Roles whose file is absent at the source location.
    """
    name: str
    missing: FrozenSet[AssetRole] = field(default_factory=frozenset)

    @property
    def complete(self) -> bool:
        return not self.missing

    @property
    def missing_files(self) -> List[str]:
        return sorted(role.filename for role in self.missing)

    def require(self) -> None:
        """Raise MissingAssetsError unless every required file is present."""
        if self.missing:
            raise MissingAssetsError(self.name, self.missing_files)


def validate(source_root: Path, name: str) -> AssetStatus:
    """
    Check for ``source.rs``, ``vis_code.svg`` and ``vis_timeline.svg`` under
    ``source_root/name``.

    Missing files are reported in the returned status, never raised.

    Raises:
        PermissionError: If the example directory cannot be read.
    """
    example_dir = Path(source_root) / name
    if example_dir.is_dir() and not os.access(example_dir, os.R_OK | os.X_OK):
        raise PermissionError(f"Permission denied reading {example_dir}")

    missing = frozenset(role for role in REQUIRED_ROLES if not (example_dir / role.filename).is_file())
    if missing:
        logger.debug("%s is missing %s", name, ", ".join(sorted(role.filename for role in missing)))
    return AssetStatus(name=name, missing=missing)
