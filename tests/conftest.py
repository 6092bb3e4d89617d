"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mark_stager.constants import GIT_REPOSITORY_ENV_VARS  # noqa: E402
from tests.fixtures.repository_fixtures import create_repository  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_git_environment(tmp_path, monkeypatch):
    """Keep outer git variables and enclosing repositories out of test repositories."""
    for key in GIT_REPOSITORY_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging.basicConfig(force=True) calls made by the CLI under test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Point tempfile at a private directory so leftover copies are visible."""
    import tempfile

    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def mark_repo(tmp_path):
    """A committed repository with two mark files and one ordinary file."""
    return create_repository(
        tmp_path / "repo",
        {
            "mark1": "mark one\n",
            "mark2": "mark two\n",
            "other.txt": "other\n",
            "nested/mark3": "mark three\n",
        },
    )
