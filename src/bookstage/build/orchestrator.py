"""
Run the external static-site builder over the staged content tree.
"""

from __future__ import annotations

import enum
import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..config import DEFAULT_BUILD_COMMAND, DEFAULT_BUILD_TIMEOUT

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_EXIT = 127
_DETAIL_LINES = 5


class BuildError(RuntimeError):
    """Raised when the site builder exits non-zero or does not finish in time."""

    def __init__(self, exit_code: Optional[int], detail: str = "") -> None:
        self.exit_code = exit_code
        self.detail = detail
        message = f"site build failed with exit code {exit_code}" if exit_code is not None else "site build failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class BuildStatus(enum.Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"
    TIMED_OUT = "TimedOut"
    SKIPPED = "Skipped"


@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of the site build step.

    Attributes:
        status: Success, failure, timeout, or skipped.
        exit_code: Builder exit code when it ran to completion.
        detail: Short human-readable context (tail of stderr, timeout, ...).
        duration: Wall-clock seconds spent in the builder.
    """
    status: BuildStatus
    exit_code: Optional[int] = None
    detail: str = ""
    duration: float = 0.0

    @classmethod
    def skipped(cls) -> "BuildResult":
        return cls(status=BuildStatus.SKIPPED, detail="build skipped")

    @property
    def succeeded(self) -> bool:
        return self.status in (BuildStatus.SUCCESS, BuildStatus.SKIPPED)

    def raise_for_status(self) -> None:
        if not self.succeeded:
            raise BuildError(self.exit_code, self.detail)

    def describe(self) -> str:
        if self.status is BuildStatus.SUCCESS:
            return f"Success ({self.duration:.1f}s)"
        if self.status is BuildStatus.SKIPPED:
            return "Skipped"
        if self.status is BuildStatus.TIMED_OUT:
            return f"Failed: {self.detail}"
        suffix = f": {self.detail}" if self.detail else ""
        return f"Failed (exit code {self.exit_code}){suffix}"


def _tail(text: Optional[str]) -> str:
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    return " | ".join(lines[-_DETAIL_LINES:])


def build(
    dest_root: Path,
    *,
    command: Optional[Sequence[str]] = None,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = DEFAULT_BUILD_TIMEOUT,
) -> BuildResult:
    """
    Invoke the site builder once and wait for it to finish.

    Args:
        dest_root: Staged content tree; exported to the builder as
            ``BOOKSTAGE_DEST``.
        command: Builder argument vector (defaults to ``mdbook build``).
        cwd: Working directory for the builder (defaults to the current one).
        timeout: Seconds to wait before the build is abandoned; None waits forever.

    Returns:
        A BuildResult; failures are reported, never retried.
    """
    argv = list(command or DEFAULT_BUILD_COMMAND)
    env = dict(os.environ)
    env["BOOKSTAGE_DEST"] = str(dest_root)
    logger.info("Running site builder %s in %s", " ".join(argv), cwd or Path.cwd())

    started = time.monotonic()
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd) if cwd else None,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        logger.error("Site builder not found: %s", exc)
        return BuildResult(
            status=BuildStatus.FAILURE,
            exit_code=COMMAND_NOT_FOUND_EXIT,
            detail=f"builder executable not found: {argv[0]}",
        )
    except subprocess.TimeoutExpired:
        duration = time.monotonic() - started
        logger.error("Site builder exceeded %.1fs timeout", timeout)
        return BuildResult(
            status=BuildStatus.TIMED_OUT,
            detail=f"timed out after {timeout:g}s",
            duration=duration,
        )
    duration = time.monotonic() - started

    if completed.stdout:
        logger.debug("Builder stdout:\n%s", completed.stdout)
    if completed.stderr:
        logger.debug("Builder stderr:\n%s", completed.stderr)

    if completed.returncode != 0:
        logger.error("Site builder exited with %d", completed.returncode)
        return BuildResult(
            status=BuildStatus.FAILURE,
            exit_code=completed.returncode,
            detail=_tail(completed.stderr) or _tail(completed.stdout),
            duration=duration,
        )

    logger.info("Site build finished in %.1fs", duration)
    return BuildResult(status=BuildStatus.SUCCESS, exit_code=0, duration=duration)
