"""
Run reporting: console outcome lines and the staging manifest.
"""

from .emitter import (
    EXIT_BUILD_FAILED,
    EXIT_EXAMPLE_FAILED,
    EXIT_INVALID_ARGS,
    EXIT_OK,
    RunSummary,
    format_result_line,
    report,
)
from .manifest import MANIFEST_FILENAME, build_manifest, write_manifest

__all__ = [
    "EXIT_BUILD_FAILED",
    "EXIT_EXAMPLE_FAILED",
    "EXIT_INVALID_ARGS",
    "EXIT_OK",
    "RunSummary",
    "format_result_line",
    "report",
    "MANIFEST_FILENAME",
    "build_manifest",
    "write_manifest",
]
