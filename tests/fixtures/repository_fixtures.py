"""
Test fixtures for git working copies.

Builds real repositories with the git binary so that status queries and
staging run against git itself.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Dict, List

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")

GIT_TEST_CONFIG = [
    "-c", "user.name=Mark Stager Tests",
    "-c", "user.email=tests@example.com",
    "-c", "commit.gpgsign=false",
    "-c", "init.defaultBranch=main",
]


def git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` and return stdout, failing the test on error."""
    result = subprocess.run(
        ["git", *GIT_TEST_CONFIG, *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def create_repository(root: Path, files: Dict[str, str]) -> Path:
    """
    Create a repository with one commit holding ``files``.

    Args:
        root: Directory to initialize (created if missing)
        files: Relative path to file content

    Returns:
        The repository root
    """
    root.mkdir(parents=True, exist_ok=True)
    git(root, "init", "-q")
    for name, content in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    git(root, "add", "--all")
    git(root, "commit", "-q", "-m", "initial")
    return root


def modify(repo: Path, name: str, content: str = "changed\n") -> None:
    (repo / name).write_text(content)


def staged_paths(repo: Path) -> List[str]:
    """Paths currently recorded in the index as differing from HEAD."""
    output = git(repo, "diff", "--cached", "--name-only", "-z")
    return [path for path in output.split("\0") if path]
