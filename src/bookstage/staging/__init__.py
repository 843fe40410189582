"""
Locate, validate and stage example assets.
"""

from .errors import CopyError, MissingAssetsError, NotFoundError, StagingError
from .locator import ExampleListing, is_example_name, list_examples, resolve_source_root
from .runner import ResultCollector, RunContext, default_worker_count, process_example, run_staging
from .stager import StagingOutcome, StagingResult, stage
from .validator import REQUIRED_ROLES, AssetRole, AssetStatus, validate

__all__ = [
    "CopyError",
    "MissingAssetsError",
    "NotFoundError",
    "StagingError",
    "ExampleListing",
    "is_example_name",
    "list_examples",
    "resolve_source_root",
    "ResultCollector",
    "RunContext",
    "default_worker_count",
    "process_example",
    "run_staging",
    "StagingOutcome",
    "StagingResult",
    "stage",
    "REQUIRED_ROLES",
    "AssetRole",
    "AssetStatus",
    "validate",
]
