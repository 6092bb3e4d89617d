"""
Exceptions raised by the mark stager.

Every failure of a run is a MarkStagerError. Safety aborts (dirty index,
no mark files changed) are not errors and are reported through StageResult.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class MarkStagerError(Exception):
    """Base class for all mark stager failures."""

    pass


class ConfigurationError(MarkStagerError):
    """Raised when the run configuration is invalid (bad repository path, bad settings)."""

    pass


class RepositoryOpenError(MarkStagerError):
    """Raised when a path cannot be opened as a git working copy."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to open a repository, {self.path}: {reason}")


class RepositoryCopyError(MarkStagerError):
    """Raised when the temporary directory cannot be created or filled."""

    pass


class StatusQueryError(MarkStagerError):
    """Raised when the working copy status cannot be fetched."""

    pass


class UnrepresentablePathError(MarkStagerError):
    """Raised when a mark file is reported with a path that cannot be decoded."""

    def __init__(self, raw_paths: list[bytes]):
        self.raw_paths = raw_paths
        shown = ", ".join(repr(raw) for raw in raw_paths)
        super().__init__(f"Could not convert all mark files to a path: {shown}")


class UnexpectedStatusError(MarkStagerError):
    """Raised when a mark file has any status other than working-tree-modified."""

    def __init__(self, path: str, status_label: str, staged_before: Optional[list[str]] = None):
        self.path = path
        self.status_label = status_label
        self.staged_before = staged_before or []
        super().__init__(f"unexpected status for mark file {path}: {status_label}")


class StagingError(MarkStagerError):
    """Raised when git refuses to add a mark file to the index."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not add {path} to the index: {reason}")
