"""Classification and filtering of status entries."""

from __future__ import annotations

import os
from typing import Iterable, Sequence

from mark_stager.models import GitStatus, StatusEntry

# Any of these flags means a change is already recorded in the index
STAGED_FLAGS = (
    GitStatus.INDEX_NEW
    | GitStatus.INDEX_DELETED
    | GitStatus.INDEX_MODIFIED
    | GitStatus.INDEX_RENAMED
    | GitStatus.INDEX_TYPECHANGE
)


def is_index_status(status: GitStatus) -> bool:
    return bool(status & STAGED_FLAGS)


def has_staged_changes(status_set: Iterable[StatusEntry]) -> bool:
    """True if any entry has a change recorded in the index, whatever its working tree state."""
    return any(is_index_status(entry.status) for entry in status_set)


def filter_by_paths(
    status_set: Iterable[StatusEntry], allow_list: Iterable[str]
) -> list[StatusEntry]:
    """Keep the entries whose path exactly matches an allow-list entry.

    Order follows ``status_set``. Entries without a decodable path never match.
    """
    allowed = set(allow_list)
    return [
        entry
        for entry in status_set
        if entry.path is not None and entry.path in allowed
    ]


def find_unrepresentable(
    status_set: Iterable[StatusEntry], allow_list: Sequence[str]
) -> list[StatusEntry]:
    """Return entries without a decodable path whose raw bytes name an allow-list entry."""
    allowed_raw = {os.fsencode(path) for path in allow_list}
    return [
        entry
        for entry in status_set
        if entry.path is None and entry.raw_path in allowed_raw
    ]
