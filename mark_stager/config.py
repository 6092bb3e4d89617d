"""
Configuration for the mark stager.

Values come from command-line flags first and MARK_STAGER_* environment
variables second. A .env file in the working directory is loaded on import.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from mark_stager.constants import (
    ENV_ATOMIC,
    ENV_AUTO_FILES,
    ENV_GIT,
    ENV_IN_PLACE,
    ENV_LOG_LEVEL,
    ENV_REPO,
)
from mark_stager.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()


def _env_flag(key: str) -> bool:
    return os.getenv(key, "false").lower() == "true"


def _env_list(key: str) -> list[str]:
    value = os.getenv(key, "")
    return [item for item in value.split(",") if item.strip()]


GIT_EXECUTABLE = os.getenv(ENV_GIT, "git")
DEFAULT_REPO = os.getenv(ENV_REPO)
DEFAULT_AUTO_FILES = _env_list(ENV_AUTO_FILES)
DEFAULT_IN_PLACE = _env_flag(ENV_IN_PLACE)
DEFAULT_ATOMIC = _env_flag(ENV_ATOMIC)
DEFAULT_LOG_LEVEL = os.getenv(ENV_LOG_LEVEL, "INFO")


class StagerSettings(BaseModel):
    """Resolved settings for one run."""

    repo: Path = Field(..., description="Path of the source working copy")
    auto_files: list[str] = Field(
        default_factory=list,
        description="Relative paths eligible for automatic staging (mark files)",
    )
    in_place: bool = Field(
        default=False,
        description="Stage inside the source working copy instead of a temporary copy",
    )
    atomic: bool = Field(
        default=False,
        description="Validate every mark file status before staging any of them",
    )
    log_level: str = Field(default="INFO")

    @field_validator("auto_files")
    @classmethod
    def normalize_auto_files(cls, v: list[str]) -> list[str]:
        """Strip entries, reject blank ones and drop duplicates keeping the first occurrence."""
        seen: dict[str, None] = {}
        for item in v:
            stripped = item.strip()
            if not stripped:
                raise ValueError("auto file paths cannot be empty or whitespace")
            seen.setdefault(stripped, None)
        return list(seen)

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{v}'")
        return level


def build_settings(
    repo: Optional[str] = None,
    auto_files: Optional[Iterable[str]] = None,
    in_place: Optional[bool] = None,
    atomic: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> StagerSettings:
    """Merge explicit values over the environment defaults.

    Args:
        repo: Repository path from the command line
        auto_files: Mark files from the command line
        in_place: Whether to skip the temporary copy
        atomic: Whether to validate all statuses before staging
        log_level: Logging level name

    Returns:
        Validated StagerSettings

    Raises:
        ConfigurationError: If no repository is given or a value is invalid
    """
    repo_value = repo or DEFAULT_REPO
    if not repo_value:
        raise ConfigurationError(
            f"No repository given. Pass --repo or set {ENV_REPO}."
        )

    files = list(auto_files) if auto_files else list(DEFAULT_AUTO_FILES)

    try:
        settings = StagerSettings(
            repo=Path(repo_value),
            auto_files=files,
            in_place=DEFAULT_IN_PLACE if in_place is None else in_place,
            atomic=DEFAULT_ATOMIC if atomic is None else atomic,
            log_level=log_level or DEFAULT_LOG_LEVEL,
        )
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {details}") from e

    return settings
