"""
Per-example outcome lines, build line, and run summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from ..build import BuildResult
from ..staging import StagingOutcome, StagingResult

EXIT_OK = 0
EXIT_EXAMPLE_FAILED = 1
EXIT_BUILD_FAILED = 2
EXIT_INVALID_ARGS = 3

_OUTCOME_STYLES = {
    StagingOutcome.STAGED: "green",
    StagingOutcome.SKIPPED_MISSING_ASSETS: "yellow",
    StagingOutcome.FAILED: "bold red",
}


@dataclass
class RunSummary:
    """
    Aggregate counts for one run.

    Attributes:
        staged: Examples copied successfully.
        skipped: Examples skipped for missing assets.
        failed: Examples that hit a copy/permission error.
        build_ok: True when the build succeeded or was skipped.
    """
    staged: int = 0
    skipped: int = 0
    failed: int = 0
    build_ok: bool = True

    @classmethod
    def from_results(cls, results: Iterable[StagingResult], build_result: BuildResult) -> "RunSummary":
        summary = cls(build_ok=build_result.succeeded)
        for result in results:
            if result.outcome is StagingOutcome.STAGED:
                summary.staged += 1
            elif result.outcome is StagingOutcome.SKIPPED_MISSING_ASSETS:
                summary.skipped += 1
            else:
                summary.failed += 1
        return summary

    @property
    def exit_code(self) -> int:
        if not self.build_ok:
            return EXIT_BUILD_FAILED
        if self.failed:
            return EXIT_EXAMPLE_FAILED
        return EXIT_OK

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Staged", str(self.staged))
        yield ("Skipped (missing assets)", str(self.skipped))
        yield ("Failed", str(self.failed))
        yield ("Build", "ok" if self.build_ok else "failed")

    def line(self) -> str:
        return ", ".join(f"{key}: {value}" for key, value in self.summary_rows())


def format_result_line(result: StagingResult) -> str:
    """Render one example outcome with rich markup."""
    style = _OUTCOME_STYLES[result.outcome]
    return f"{escape(result.name)}: [{style}]{escape(result.describe())}[/]"


def report(
    results: Sequence[StagingResult],
    build_result: BuildResult,
    *,
    console: Optional[Console] = None,
) -> int:
    """
    Print one line per example (sorted by name), the build outcome, and a
    summary line.

    Returns:
        0 on success, 1 when an example failed, 2 when the build failed.
    """
    console = console or Console()
    for result in sorted(results, key=lambda item: item.name):
        console.print(format_result_line(result), highlight=False)

    build_style = "green" if build_result.succeeded else "bold red"
    console.print(f"Build: [{build_style}]{escape(build_result.describe())}[/]", highlight=False)

    summary = RunSummary.from_results(results, build_result)
    console.print(f"Summary: {summary.line()}", highlight=False)
    return summary.exit_code
