"""Opening and validating git working copies."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from mark_stager.constants import GIT_METADATA_NAME, UNKNOWN_ERROR_MESSAGE
from mark_stager.exceptions import RepositoryOpenError
from mark_stager.git.commands import _run_git_command

logger = logging.getLogger(__name__)


def open_repository(path: Union[str, Path]) -> Path:
    """Open a path as the root of a git working copy.

    The path must be the top level of the working tree; a subdirectory of a
    repository is not accepted.

    Args:
        path: Candidate repository root

    Returns:
        The resolved repository root

    Raises:
        RepositoryOpenError: With the underlying reason when the path is not a working copy
    """
    repo_path = Path(path)
    if not repo_path.exists():
        raise RepositoryOpenError(repo_path, "no such file or directory")
    if not repo_path.is_dir():
        raise RepositoryOpenError(repo_path, "not a directory")

    returncode, stdout, stderr = _run_git_command(
        ["rev-parse", "--show-toplevel"], cwd=str(repo_path)
    )
    # Only the trailing newline is dropped; the path itself may end in whitespace
    top = stdout.rstrip("\n")
    if returncode != 0 or not top:
        raise RepositoryOpenError(repo_path, stderr or stdout.strip() or UNKNOWN_ERROR_MESSAGE)

    resolved = repo_path.resolve()
    top_level = Path(top).resolve()
    if top_level != resolved:
        raise RepositoryOpenError(
            repo_path, f"not the root of a working copy (top level is {top_level})"
        )

    return resolved


def has_own_git_directory(path: Union[str, Path]) -> bool:
    """Return True iff the working copy keeps its metadata in its own .git directory.

    Linked worktrees and submodules have a .git file pointing at metadata
    stored elsewhere; a copy of such a working copy would still share that
    index with the original.
    """
    return (Path(path) / GIT_METADATA_NAME).is_dir()


def is_valid_repository(path: Union[str, Path]) -> bool:
    """Return True iff the path opens as a git working copy.

    The reason for a failure is logged, not raised.
    """
    try:
        open_repository(path)
    except RepositoryOpenError as e:
        logger.warning(f"{path} is not a usable repository: {e.reason}")
        return False
    return True
