"""
Discover example directories under a source root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, List

from .errors import NotFoundError

logger = logging.getLogger(__name__)


def is_example_name(name: str) -> bool:
    """True when name is a single path component (no separators, not . or ..)."""
    if not name or name in (".", ".."):
        return False
    if os.sep in name or (os.altsep and os.altsep in name) or "/" in name:
        return False
    return Path(name).name == name


class ExampleListing:
    """
    Restartable view over the example directories of a source root.

    The directory is scanned afresh each time the listing is iterated, so
    examples added between iterations are picked up.
    """

    def __init__(self, source_root: Path) -> None:
        self.source_root = source_root

    def __iter__(self) -> Iterator[str]:
        children: List[str] = []
        for child in self.source_root.iterdir():
            if child.name.startswith("."):
                continue
            if child.is_dir():
                children.append(child.name)
        yield from sorted(children)

    def __repr__(self) -> str:
        return f"ExampleListing({str(self.source_root)!r})"


def resolve_source_root(source_root: Path | str) -> Path:
    """
    Return the absolute source root, raising NotFoundError when unusable.
    """
    resolved = Path(source_root).expanduser().resolve()
    if not resolved.is_dir():
        raise NotFoundError(resolved)
    return resolved


def list_examples(source_root: Path | str) -> ExampleListing:
    """
    List example names (immediate child directories) under source_root.

    Args:
        source_root: Directory containing one folder per example.

    Returns:
        An iterable of example names in sorted order.

    Raises:
        NotFoundError: If source_root does not exist or is not a directory.
    """
    root = resolve_source_root(source_root)
    logger.debug("Listing examples under %s", root)
    return ExampleListing(root)
