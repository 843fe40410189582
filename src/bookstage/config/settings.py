"""
Environment/.env loading helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class EnvSettings(BaseModel):
    """
    Overrides read from environment variables.

    Attributes:
        source: Default example source directory.
        dest: Default destination content directory.
        builder: Site builder command line (shell-style string).
    """
    source: Optional[Path] = Field(default=None, alias="BOOKSTAGE_SOURCE")
    dest: Optional[Path] = Field(default=None, alias="BOOKSTAGE_DEST")
    builder: Optional[str] = Field(default=None, alias="BOOKSTAGE_BUILDER")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> EnvSettings:
    """
    Load overrides from environment/.env exactly once.

    Empty variables are treated as unset.
    """
    values = {field.alias: os.getenv(field.alias) or None for field in EnvSettings.model_fields.values()}
    return EnvSettings(**values)
