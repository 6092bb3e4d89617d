"""
Mark-file staging.

Decides whether staging is safe for a working copy and, if so, adds the
modified mark files to its index:

- a non-empty index aborts the run (a manual change is assumed in progress)
- no changed mark files aborts the run (nothing to do)
- any mark file whose status is not exactly "working-tree-modified" fails the run

Aborts are successful no-ops. Nothing is ever committed or pushed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from mark_stager.classifier import (
    filter_by_paths,
    find_unrepresentable,
    has_staged_changes,
)
from mark_stager.config import StagerSettings
from mark_stager.copier import copy_tree
from mark_stager.exceptions import (
    ConfigurationError,
    UnexpectedStatusError,
    UnrepresentablePathError,
)
from mark_stager.git.index import add_path
from mark_stager.git.repository import (
    has_own_git_directory,
    is_valid_repository,
    open_repository,
)
from mark_stager.git.status import query_statuses
from mark_stager.models import GitStatus, StageOutcome, StageResult, StatusEntry

logger = logging.getLogger(__name__)

DIRTY_INDEX_MESSAGE = (
    "The repository's index is not empty. There's possibly a manual change "
    "ongoing so staging is aborted."
)
NO_MARK_FILES_MESSAGE = "No mark files to stage."


def _check_expected_status(entry: StatusEntry, staged_before: list[str]) -> None:
    if entry.status != GitStatus.WT_MODIFIED:
        raise UnexpectedStatusError(entry.display_path(), entry.label, staged_before)


def stage_mark_files(
    repo_path: Union[str, Path],
    mark_files: Sequence[str],
    atomic: bool = False,
) -> StageResult:
    """Stage the modified mark files of a working copy.

    Args:
        repo_path: Root of the working copy to mutate
        mark_files: Relative paths that may be staged automatically
        atomic: Validate every mark file status before staging the first one

    Returns:
        StageResult describing a successful stage or a safe abort

    Raises:
        RepositoryOpenError: If the working copy cannot be opened
        StatusQueryError: If the status cannot be fetched
        UnrepresentablePathError: If a mark file is reported with an undecodable path
        UnexpectedStatusError: If a mark file is anything but working-tree-modified.
            Without ``atomic``, files staged before it stay staged.
        StagingError: If git add fails
    """
    repo_root = open_repository(repo_path)

    # Step 1: Query the status set
    statuses = query_statuses(repo_root)

    # Step 2: Refuse to touch an index that already holds changes
    if has_staged_changes(statuses):
        logger.warning(DIRTY_INDEX_MESSAGE)
        return StageResult(
            outcome=StageOutcome.ABORTED_DIRTY_INDEX,
            repository=repo_root,
            message=DIRTY_INDEX_MESSAGE,
        )
    logger.info("The index is clean")

    # Step 3: Narrow down to mark files
    unrepresentable = find_unrepresentable(statuses, mark_files)
    if unrepresentable:
        raise UnrepresentablePathError([entry.raw_path for entry in unrepresentable])

    for entry in statuses:
        if not entry.is_representable:
            logger.warning(f"Ignoring a non-UTF-8 path outside the mark files: {entry.raw_path!r}")

    mark_file_statuses = filter_by_paths(statuses, mark_files)

    # Step 4: Nothing to do
    if not mark_file_statuses:
        logger.info(NO_MARK_FILES_MESSAGE)
        return StageResult(
            outcome=StageOutcome.ABORTED_NO_MARK_FILES,
            repository=repo_root,
            message=NO_MARK_FILES_MESSAGE,
        )
    logger.info(f"Found {len(mark_file_statuses)} changed mark file(s)")

    # Step 5: Stage
    if atomic:
        for entry in mark_file_statuses:
            _check_expected_status(entry, [])

    staged: list[StatusEntry] = []
    try:
        for entry in mark_file_statuses:
            _check_expected_status(entry, [s.display_path() for s in staged])
            add_path(repo_root, entry.path)
            staged.append(entry)
    except Exception:
        if staged:
            logger.warning(
                "Staging stopped early; these mark files remain staged: "
                + ", ".join(s.display_path() for s in staged)
            )
        raise

    # Step 6: Report
    for entry in staged:
        logger.info(f"Staged {entry.path} ({entry.label})")

    return StageResult(
        outcome=StageOutcome.STAGED,
        repository=repo_root,
        staged=staged,
        message=f"Staged {len(staged)} mark file(s).",
    )


def run(settings: StagerSettings) -> StageResult:
    """Validate the source repository, copy it unless in-place, and stage its mark files.

    Raises:
        ConfigurationError: If ``settings.repo`` is not a working copy, or is a
            linked worktree or submodule and ``in_place`` is not set
        MarkStagerError: For any failure of the copy or the staging
    """
    if not is_valid_repository(settings.repo):
        raise ConfigurationError(f"The path `{settings.repo}` is not a valid repository.")

    if settings.in_place:
        logger.info(f"Staging in place in {settings.repo}")
        return stage_mark_files(settings.repo, settings.auto_files, atomic=settings.atomic)

    if not has_own_git_directory(settings.repo):
        raise ConfigurationError(
            f"The path `{settings.repo}` is a linked worktree or submodule whose index "
            f"cannot be copied; use --in-place to stage it directly."
        )

    with copy_tree(settings.repo) as temp_dir:
        return stage_mark_files(temp_dir, settings.auto_files, atomic=settings.atomic)
