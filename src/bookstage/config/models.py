"""
Pydantic models for validating staging configuration files.
"""

from __future__ import annotations

import shlex
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..staging.locator import is_example_name

DEFAULT_CONFIG_FILENAME = "bookstage.toml"
DEFAULT_BUILD_COMMAND = ["mdbook", "build"]
DEFAULT_BUILD_TIMEOUT = 600.0


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class StageConfig(BaseModel):
    """
    Settings for one staging + build run.

    Attributes:
        source: Directory holding one sub-directory per example.
        dest: Content directory of the book that receives staged assets.
        book_root: Working directory for the site builder (defaults to the
            current directory).
        only: Restrict the run to these example names.
        skip_build: Stage assets without invoking the site builder.
        workers: Size of the staging worker pool (None picks a default).
        manifest: Write a JSON manifest of staged files into ``dest``.
        build_command: Argument vector of the external site builder.
        build_timeout: Seconds before a running build is abandoned.
    """
    source: Optional[Path] = None
    dest: Optional[Path] = None
    book_root: Optional[Path] = None
    only: List[str] = Field(default_factory=list)
    skip_build: bool = False
    workers: Optional[int] = Field(default=None, ge=1)
    manifest: bool = False
    build_command: List[str] = Field(default_factory=lambda: list(DEFAULT_BUILD_COMMAND))
    build_timeout: float = Field(default=DEFAULT_BUILD_TIMEOUT, gt=0)

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }

    @field_validator("build_command", mode="before")
    @classmethod
    def _split_command(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        return value

    @field_validator("build_command")
    @classmethod
    def _require_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("build_command must name an executable")
        return value

    @field_validator("only", mode="before")
    @classmethod
    def _coerce_only(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("only")
    @classmethod
    def _require_example_names(cls, value: List[str]) -> List[str]:
        invalid = [name for name in value if not is_example_name(name)]
        if invalid:
            raise ValueError(f"not a single directory name: {', '.join(invalid)}")
        return value


def default_config_path() -> Optional[Path]:
    """Return ./bookstage.toml when it exists."""
    candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | str) -> StageConfig:
    """
    Load and validate a TOML config file into a StageConfig instance.

    Relative paths inside the file are resolved against the file's directory.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated StageConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        config = StageConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return _anchor_paths(config, config_path.parent)


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Map the TOML layout onto the flat model fields.

    The builder is configured in a ``[build]`` table with ``command`` and
    ``timeout`` keys; these become ``build_command`` and ``build_timeout``.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table.")

    normalized = dict(data)
    for flat_key in ("build_command", "build_timeout"):
        if flat_key in normalized:
            raise ConfigError(f"Use the [build] table instead of a top-level '{flat_key}' key.")

    build = normalized.pop("build", None)
    if build is None:
        return normalized
    if not isinstance(build, dict):
        raise ConfigError("Invalid [build] block; expected a table.")

    unknown = set(build) - {"command", "timeout"}
    if unknown:
        raise ConfigError(f"Unknown keys in [build]: {', '.join(sorted(unknown))}")
    if "command" in build:
        normalized["build_command"] = build["command"]
    if "timeout" in build:
        normalized["build_timeout"] = build["timeout"]
    return normalized


def _anchor_paths(config: StageConfig, base: Path) -> StageConfig:
    updates: Dict[str, Path] = {}
    for key in ("source", "dest", "book_root"):
        value = getattr(config, key)
        if value is not None and not value.expanduser().is_absolute():
            updates[key] = (base / value).resolve()
        elif value is not None:
            updates[key] = value.expanduser()
    return config.model_copy(update=updates)
