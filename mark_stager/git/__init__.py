"""Thin wrappers around the git command line client."""

from .index import add_path
from .repository import has_own_git_directory, is_valid_repository, open_repository
from .status import parse_porcelain, query_statuses, status_from_code

__all__ = [
    "add_path",
    "has_own_git_directory",
    "is_valid_repository",
    "open_repository",
    "parse_porcelain",
    "query_statuses",
    "status_from_code",
]
