"""
Status query for a git working copy.

Runs ``git status --porcelain=v1 -z`` and turns each record into a
StatusEntry. Paths are kept as bytes alongside their UTF-8 decoding so that
paths git reports in another encoding are never silently altered.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from mark_stager.constants import (
    IGNORED_CODE,
    RENAME_OR_COPY_CODES,
    STATUS_ARGS,
    UNKNOWN_ERROR_MESSAGE,
    UNMERGED_CODES,
    UNTRACKED_CODE,
)
from mark_stager.exceptions import StatusQueryError
from mark_stager.git.commands import _run_git_command_raw
from mark_stager.models import GitStatus, StatusEntry

logger = logging.getLogger(__name__)

_INDEX_FLAGS = {
    " ": GitStatus.CURRENT,
    "A": GitStatus.INDEX_NEW,
    "C": GitStatus.INDEX_NEW,
    "M": GitStatus.INDEX_MODIFIED,
    "D": GitStatus.INDEX_DELETED,
    "R": GitStatus.INDEX_RENAMED,
    "T": GitStatus.INDEX_TYPECHANGE,
}

_WORKTREE_FLAGS = {
    " ": GitStatus.CURRENT,
    "A": GitStatus.WT_NEW,
    "C": GitStatus.WT_NEW,
    "M": GitStatus.WT_MODIFIED,
    "D": GitStatus.WT_DELETED,
    "R": GitStatus.WT_RENAMED,
    "T": GitStatus.WT_TYPECHANGE,
}


def _decode_path(raw: bytes) -> Optional[str]:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def status_from_code(code: str) -> GitStatus:
    """Map a two-character porcelain code (XY) to status flags.

    Args:
        code: Porcelain status code, index letter first

    Returns:
        Combined GitStatus flags

    Raises:
        StatusQueryError: For a code git is not documented to emit
    """
    if code in UNMERGED_CODES:
        return GitStatus.CONFLICTED
    if code == UNTRACKED_CODE:
        return GitStatus.WT_NEW
    if code == IGNORED_CODE:
        return GitStatus.IGNORED

    index_letter, worktree_letter = code[0], code[1]
    if index_letter not in _INDEX_FLAGS or worktree_letter not in _WORKTREE_FLAGS:
        raise StatusQueryError(f"Unrecognized status code '{code}'")
    return _INDEX_FLAGS[index_letter] | _WORKTREE_FLAGS[worktree_letter]


def parse_porcelain(data: bytes) -> list[StatusEntry]:
    """Parse NUL-separated porcelain v1 output, keeping git's order.

    Rename and copy records are followed by an extra field holding the
    original path; it is stored as ``orig_path``.
    """
    entries: list[StatusEntry] = []
    fields = data.split(b"\0")
    position = 0

    while position < len(fields):
        record = fields[position]
        position += 1
        if not record:
            continue
        if len(record) < 4 or record[2:3] != b" ":
            raise StatusQueryError(f"Malformed status record: {record!r}")

        code = record[:2].decode("ascii", errors="replace")
        raw_path = record[3:]
        status = status_from_code(code)

        orig_path = None
        if code[0] in RENAME_OR_COPY_CODES or code[1] in RENAME_OR_COPY_CODES:
            if position >= len(fields) or not fields[position]:
                raise StatusQueryError(
                    f"Status record for {raw_path!r} is missing its original path"
                )
            orig_path = _decode_path(fields[position])
            position += 1

        entries.append(
            StatusEntry(
                path=_decode_path(raw_path),
                raw_path=raw_path,
                status=status,
                orig_path=orig_path,
            )
        )

    return entries


def query_statuses(repo_path: Union[str, Path]) -> list[StatusEntry]:
    """Fetch the current status set of a working copy.

    Args:
        repo_path: Repository root

    Returns:
        Status entries in the order git reports them

    Raises:
        StatusQueryError: If git fails or its output cannot be parsed
    """
    returncode, stdout, stderr = _run_git_command_raw(STATUS_ARGS, cwd=str(repo_path))
    if returncode != 0:
        raise StatusQueryError(
            f"Could not fetch file statuses in {repo_path}: {stderr or UNKNOWN_ERROR_MESSAGE}"
        )

    entries = parse_porcelain(stdout)
    logger.debug(f"Status query returned {len(entries)} entries for {repo_path}")
    return entries
