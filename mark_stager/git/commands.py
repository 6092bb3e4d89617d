"""Git command runner."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional

from mark_stager import config
from mark_stager.constants import GIT_REPOSITORY_ENV_VARS

logger = logging.getLogger(__name__)


def _git_environment() -> dict[str, str]:
    """Copy of the process environment without variables that redirect git to another repository."""
    return {
        key: value
        for key, value in os.environ.items()
        if key not in GIT_REPOSITORY_ENV_VARS
    }


def _run_git_command_raw(
    args: list[str],
    cwd: Optional[str] = None,
) -> tuple[int, bytes, str]:
    """
    Run a git command and keep stdout undecoded.

    The repository is always found from ``cwd``; GIT_DIR and friends
    inherited from the caller (e.g. a git hook) are dropped.

    Args:
        args: Git arguments, without the executable
        cwd: Working directory

    Returns:
        Tuple of (returncode, stdout bytes, stderr text)
    """
    cmd = [config.GIT_EXECUTABLE, *args]
    logger.debug(f"Running {' '.join(cmd)} in {cwd or '.'}")
    try:
        process = subprocess.run(
            cmd,
            cwd=cwd,
            env=_git_environment(),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        return 1, b"", str(e)
    return (
        process.returncode,
        process.stdout,
        process.stderr.decode("utf-8", errors="replace").strip(),
    )


def _run_git_command(
    args: list[str],
    cwd: Optional[str] = None,
) -> tuple[int, str, str]:
    """
    Run a git command.

    Args:
        args: Git arguments, without the executable
        cwd: Working directory

    Returns:
        Tuple of (returncode, stdout, stderr). Stdout is not stripped.
    """
    returncode, stdout, stderr = _run_git_command_raw(args, cwd=cwd)
    return returncode, stdout.decode("utf-8", errors="replace"), stderr
