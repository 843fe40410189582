"""
JSON manifest of what a run placed in the destination tree.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

from .. import __version__
from ..staging import StagingOutcome, StagingResult
from ..util import write_text_file

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = ".bookstage-manifest.json"


def _file_digest(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def build_manifest(results: Iterable[StagingResult]) -> Dict[str, Any]:
    staged: Dict[str, Dict[str, str]] = {}
    skipped: Dict[str, list[str]] = {}
    failed: Dict[str, str] = {}
    for result in sorted(results, key=lambda item: item.name):
        if result.outcome is StagingOutcome.STAGED:
            staged[result.name] = {path.name: _file_digest(path) for path in result.files}
        elif result.outcome is StagingOutcome.SKIPPED_MISSING_ASSETS:
            skipped[result.name] = list(result.missing)
        else:
            failed[result.name] = result.reason or ""
    return {
        "generator": f"bookstage {__version__}",
        "staged": staged,
        "skipped": skipped,
        "failed": failed,
    }


def write_manifest(dest_root: Path, results: Iterable[StagingResult]) -> Path:
    """
    Write the manifest into dest_root and return its path.
    """
    payload = build_manifest(results)
    target = write_text_file(Path(dest_root) / MANIFEST_FILENAME, json.dumps(payload, indent=2, sort_keys=True) + "\n")
    logger.info("Wrote staging manifest with %d example(s) to %s", len(payload["staged"]), target)
    return target
