"""
External site-builder invocation.
"""

from .orchestrator import BuildError, BuildResult, BuildStatus, build

__all__ = ["BuildError", "BuildResult", "BuildStatus", "build"]
