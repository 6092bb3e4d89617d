"""Copies a working copy into an isolated temporary directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Union

from mark_stager.constants import TEMP_DIR_PREFIX
from mark_stager.exceptions import RepositoryCopyError

logger = logging.getLogger(__name__)


def copy_content(source_dir: Union[str, Path], target_dir: Union[str, Path]) -> None:
    """Copy the contents of one directory into another, existing one.

    Symlinks are copied as links, not followed.
    """
    shutil.copytree(source_dir, target_dir, symlinks=True, dirs_exist_ok=True)


def copy_tree(source_dir: Union[str, Path]) -> tempfile.TemporaryDirectory:
    """Copy a directory's contents into a new temporary directory.

    The temporary directory becomes a root with the same top-level entries as
    ``source_dir``. Use the returned handle as a context manager so the
    directory is removed however the caller exits.

    Args:
        source_dir: Directory to copy, typically a repository root

    Returns:
        Handle owning the temporary directory

    Raises:
        RepositoryCopyError: If the directory cannot be created or the copy fails
    """
    source = Path(source_dir)
    try:
        temp_dir = tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX)
    except OSError as e:
        raise RepositoryCopyError(f"Could not create a temporary directory: {e}") from e
    logger.info(f"Created a temporary directory at {temp_dir.name}")

    try:
        copy_content(source, temp_dir.name)
    except OSError as e:
        temp_dir.cleanup()
        raise RepositoryCopyError(
            f"Could not copy the repository {source} to {temp_dir.name}: {e}"
        ) from e

    logger.info(f"Copied the repository at {source} to the temporary directory")
    return temp_dir
