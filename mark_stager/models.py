"""
Data models for status reports and staging results.

GitStatus mirrors the per-path flags reported by the git status machinery,
split between changes recorded in the index and changes only present in the
working tree.
"""

from __future__ import annotations

from enum import Enum, IntFlag
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GitStatus(IntFlag):
    CURRENT = 0
    INDEX_NEW = 1 << 0
    INDEX_MODIFIED = 1 << 1
    INDEX_DELETED = 1 << 2
    INDEX_RENAMED = 1 << 3
    INDEX_TYPECHANGE = 1 << 4
    WT_NEW = 1 << 7
    WT_MODIFIED = 1 << 8
    WT_DELETED = 1 << 9
    WT_TYPECHANGE = 1 << 10
    WT_RENAMED = 1 << 11
    IGNORED = 1 << 14
    CONFLICTED = 1 << 15


def status_label(status: GitStatus) -> str:
    """Render a status as its flag names joined by '|' (e.g. 'INDEX_NEW|WT_MODIFIED')."""
    names = [
        member.name
        for member in GitStatus
        if member.value and (status & member) == member
    ]
    return "|".join(names) if names else GitStatus.CURRENT.name


class StatusEntry(BaseModel):
    """A single path from a status report and its flags.

    ``path`` is None when the path reported by git is not valid UTF-8; the
    undecoded bytes are always kept in ``raw_path``.
    """

    model_config = ConfigDict(frozen=True)

    path: Optional[str] = Field(default=None, description="Path relative to the repository root")
    raw_path: bytes = Field(..., description="Path bytes exactly as reported by git")
    status: GitStatus = Field(default=GitStatus.CURRENT)
    orig_path: Optional[str] = Field(
        default=None, description="Source path of a rename or copy"
    )

    @property
    def is_representable(self) -> bool:
        return self.path is not None

    @property
    def label(self) -> str:
        return status_label(self.status)

    def display_path(self) -> str:
        if self.path is not None:
            return self.path
        return self.raw_path.decode("utf-8", errors="backslashreplace")


class StageOutcome(str, Enum):
    STAGED = "staged"
    ABORTED_DIRTY_INDEX = "aborted_dirty_index"
    ABORTED_NO_MARK_FILES = "aborted_no_mark_files"


class StageResult(BaseModel):
    """Outcome of one mark-file staging run that did not fail."""

    outcome: StageOutcome
    repository: Path
    staged: list[StatusEntry] = Field(default_factory=list)
    message: str = ""

    @property
    def staged_paths(self) -> list[str]:
        return [entry.display_path() for entry in self.staged]
