"""Configuration for the Swift code grapher.

Every field has a default, so running without a config file reproduces the
classic behaviour:
- output_path: codegraph.json in the current working directory
- duplicate_policy: a later type with an existing name replaces the earlier one
- fail_fast: off, failing files are skipped and reported
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_NAME = "codegrapher.yaml"
DEFAULT_OUTPUT_NAME = "codegraph.json"


class DuplicatePolicy(str, Enum):
    REPLACE = "replace"
    MERGE = "merge"


class DiscoveryMode(str, Enum):
    FILESYSTEM = "filesystem"
    GIT = "git"


class Settings(BaseModel):
    """Code grapher settings."""

    output_path: Path = Field(
        default_factory=lambda: Path(DEFAULT_OUTPUT_NAME).resolve(),
        description="Where the JSON graph is written",
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.REPLACE,
        description="How a second type with an existing name is stored",
    )
    discovery: DiscoveryMode = Field(
        default=DiscoveryMode.FILESYSTEM,
        description="Walk the filesystem or list git-tracked files",
    )
    exclude_dirs: List[str] = Field(
        default_factory=lambda: [".build", ".git"],
        description="Directory names skipped during filesystem discovery",
    )
    fail_fast: bool = Field(
        default=False,
        description="Abort the whole run on the first unreadable or unparsable file",
    )
    strict_parse: bool = Field(
        default=False,
        description="Treat syntax trees containing error nodes as parse failures",
    )
    workers: int = Field(default=1, ge=1, description="Threads used to parse files")

    @field_validator("output_path", mode="before")
    def _coerce_path(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML if provided, otherwise use defaults."""
    path = config_path or Path.cwd() / DEFAULT_CONFIG_NAME
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    else:
        data = {}
    return Settings(**data)
