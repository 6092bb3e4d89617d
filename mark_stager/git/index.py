"""Index mutation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from mark_stager.constants import UNKNOWN_ERROR_MESSAGE
from mark_stager.exceptions import StagingError
from mark_stager.git.commands import _run_git_command

logger = logging.getLogger(__name__)


def add_path(repo_path: Union[str, Path], path: str) -> None:
    """Stage a single path, relative to the repository root.

    Pathspec magic is disabled so the path is matched literally.

    Raises:
        StagingError: If git add fails
    """
    logger.info(f"Adding file to the index: {path}")
    returncode, stdout, stderr = _run_git_command(
        ["--literal-pathspecs", "add", "--", path], cwd=str(repo_path)
    )
    if returncode != 0:
        error_msg = stderr or stdout.strip() or UNKNOWN_ERROR_MESSAGE
        logger.error(f"Git add failed for {path}: {error_msg}")
        raise StagingError(path, error_msg)
