"""
Drive locate → validate → stage for every example of a run.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .errors import MissingAssetsError, StagingError
from .locator import list_examples
from .stager import StagingResult, stage
from .validator import AssetStatus, REQUIRED_ROLES, validate

logger = logging.getLogger(__name__)

MAX_DEFAULT_WORKERS = 8


def default_worker_count() -> int:
    return min(MAX_DEFAULT_WORKERS, os.cpu_count() or 1)


class ResultCollector:
    """
    Thread-safe store with one result slot per example.

    Each slot may be written exactly once; a second write is a programming
    error and raises RuntimeError.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: Dict[str, StagingResult] = {}

    def record(self, result: StagingResult) -> None:
        with self._lock:
            if result.name in self._results:
                raise RuntimeError(f"Result for {result.name!r} already recorded")
            self._results[result.name] = result

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def sorted_results(self) -> List[StagingResult]:
        with self._lock:
            return [self._results[name] for name in sorted(self._results)]


@dataclass
class RunContext:
    """
    Everything a staging run needs, passed explicitly to each step.

    Attributes:
        source_root: Directory of example folders.
        dest_root: Content directory receiving staged assets.
        only: Optional selection of example names.
        workers: Worker pool size; 1 stages sequentially.
        results: Collector filled as examples reach a terminal state.
    """
    source_root: Path
    dest_root: Path
    only: Optional[Sequence[str]] = None
    workers: int = field(default_factory=default_worker_count)
    results: ResultCollector = field(default_factory=ResultCollector)


def process_example(source_root: Path, dest_root: Path, name: str) -> StagingResult:
    """
    Validate then stage a single example, converting errors into a result.
    """
    try:
        status = validate(source_root, name)
        status.require()
    except MissingAssetsError as exc:
        logger.info("Skipping %s: %s", name, exc)
        return StagingResult.skipped(status)
    except PermissionError as exc:
        logger.error("Cannot read %s: %s", name, exc)
        return StagingResult.failed(name, str(exc))
    except OSError as exc:
        logger.error("Validation of %s failed: %s", name, exc)
        return StagingResult.failed(name, str(exc))

    try:
        return stage(source_root, dest_root, name)
    except (StagingError, OSError) as exc:
        logger.error("Staging %s failed: %s", name, exc)
        return StagingResult.failed(name, str(exc))


def select_examples(context: RunContext) -> Tuple[List[str], Set[str]]:
    """
    Resolve the example names for a run.

    Returns the selected names together with the names that exist under the
    source root. With a selection, requested names are kept even when no
    such directory exists; those are later reported as skipped with every
    file missing and never touch the destination.

    Raises:
        NotFoundError: If the source root is unusable.
    """
    available = list(list_examples(context.source_root))
    if not context.only:
        return available, set(available)
    unknown = [name for name in context.only if name not in available]
    if unknown:
        logger.warning("Requested examples not found in %s: %s", context.source_root, ", ".join(unknown))
    return sorted(set(context.only)), set(available)


def _run_one(context: RunContext, name: str, present: bool) -> None:
    if not present:
        result = StagingResult.skipped(AssetStatus(name=name, missing=frozenset(REQUIRED_ROLES)))
    else:
        result = process_example(context.source_root, context.dest_root, name)
    context.results.record(result)


def run_staging(context: RunContext) -> List[StagingResult]:
    """
    Stage every selected example and return the results sorted by name.

    Examples are processed on a bounded thread pool. The call returns only
    after every example reached a terminal state; a failure in one example
    never stops the others.
    """
    names, available = select_examples(context)
    logger.info("Staging %d example(s) from %s into %s", len(names), context.source_root, context.dest_root)
    if context.workers <= 1 or len(names) <= 1:
        for name in names:
            _run_one(context, name, name in available)
    else:
        with ThreadPoolExecutor(max_workers=context.workers, thread_name_prefix="bookstage") as pool:
            futures = [pool.submit(_run_one, context, name, name in available) for name in names]
        for future in futures:
            future.result()
    return context.results.sorted_results()
