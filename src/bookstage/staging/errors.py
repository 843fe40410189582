"""
Error types raised while locating, validating and staging examples.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class StagingError(RuntimeError):
    """Base class for staging failures."""


class NotFoundError(StagingError):
    """Raised when the example source root is missing or not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Example source directory not found: {path}")


class MissingAssetsError(StagingError):
    """Raised when an example lacks one or more required files."""

    def __init__(self, name: str, missing: Iterable[str]) -> None:
        self.name = name
        self.missing = tuple(sorted(missing))
        super().__init__(f"{name} is missing {', '.join(self.missing)}")


class CopyError(StagingError):
    """Raised when an asset could not be copied into the destination tree."""

    def __init__(self, name: str, filename: str, reason: str) -> None:
        self.name = name
        self.filename = filename
        self.reason = reason
        super().__init__(f"could not copy {filename}: {reason}")
