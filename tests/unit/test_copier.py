"""Tests for the temporary directory copier."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from mark_stager.copier import copy_tree
from mark_stager.exceptions import RepositoryCopyError


@pytest.fixture
def source_tree(tmp_path):
    source = tmp_path / "source"
    (source / ".git" / "objects").mkdir(parents=True)
    (source / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (source / "nested").mkdir()
    (source / "nested" / "file.txt").write_text("nested\n")
    (source / "mark1").write_text("mark\n")
    return source


class TestCopyTree:
    """Test suite for copy_tree."""

    def test_copies_contents_not_directory(self, source_tree, temp_root):
        with copy_tree(source_tree) as temp_dir:
            copied = Path(temp_dir)
            assert sorted(p.name for p in copied.iterdir()) == [".git", "mark1", "nested"]
            assert (copied / "nested" / "file.txt").read_text() == "nested\n"
            assert (copied / ".git" / "HEAD").exists()
            assert copied.parent == temp_root
            assert copied.name.startswith("mark-stager-")

    def test_removed_after_context_exit(self, source_tree, temp_root):
        with copy_tree(source_tree) as temp_dir:
            assert Path(temp_dir).exists()

        assert not Path(temp_dir).exists()
        assert list(temp_root.iterdir()) == []

    def test_removed_when_body_raises(self, source_tree, temp_root):
        with pytest.raises(RuntimeError):
            with copy_tree(source_tree):
                raise RuntimeError("boom")

        assert list(temp_root.iterdir()) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinks_are_not_followed(self, source_tree, temp_root):
        os.symlink("mark1", source_tree / "link")

        with copy_tree(source_tree) as temp_dir:
            assert (Path(temp_dir) / "link").is_symlink()

    def test_missing_source_raises_and_cleans_up(self, tmp_path, temp_root):
        with pytest.raises(RepositoryCopyError, match="Could not copy the repository"):
            copy_tree(tmp_path / "missing")

        assert list(temp_root.iterdir()) == []

    def test_temp_dir_creation_failure(self, source_tree):
        with patch(
            "mark_stager.copier.tempfile.TemporaryDirectory",
            side_effect=OSError("No space left on device"),
        ):
            with pytest.raises(RepositoryCopyError, match="No space left on device"):
                copy_tree(source_tree)
