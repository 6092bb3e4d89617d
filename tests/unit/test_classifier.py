"""Tests for status classification and mark-file filtering."""

import pytest

from mark_stager.classifier import (
    STAGED_FLAGS,
    filter_by_paths,
    find_unrepresentable,
    has_staged_changes,
    is_index_status,
)
from mark_stager.models import GitStatus, StatusEntry


def entry(path, status=GitStatus.WT_MODIFIED):
    return StatusEntry(path=path, raw_path=path.encode("utf-8"), status=status)


def undecodable(raw: bytes, status=GitStatus.WT_MODIFIED):
    return StatusEntry(path=None, raw_path=raw, status=status)


class TestHasStagedChanges:
    """Test suite for index-dirty detection."""

    def test_empty_set_is_clean(self):
        assert has_staged_changes([]) is False

    @pytest.mark.parametrize(
        "status",
        [
            GitStatus.INDEX_NEW,
            GitStatus.INDEX_MODIFIED,
            GitStatus.INDEX_DELETED,
            GitStatus.INDEX_RENAMED,
            GitStatus.INDEX_TYPECHANGE,
            GitStatus.INDEX_MODIFIED | GitStatus.WT_MODIFIED,
            GitStatus.INDEX_NEW | GitStatus.WT_DELETED,
        ],
    )
    def test_any_index_flag_is_staged(self, status):
        statuses = [entry("a.txt"), entry("b.txt", status)]

        assert has_staged_changes(statuses) is True

    @pytest.mark.parametrize(
        "status",
        [
            GitStatus.WT_MODIFIED,
            GitStatus.WT_NEW,
            GitStatus.WT_DELETED,
            GitStatus.WT_TYPECHANGE,
            GitStatus.WT_RENAMED,
            GitStatus.IGNORED,
            GitStatus.CONFLICTED,
        ],
    )
    def test_working_tree_only_is_clean(self, status):
        assert has_staged_changes([entry("a.txt", status)]) is False

    def test_is_index_status_matches_flag_set(self):
        for flag in GitStatus:
            assert is_index_status(flag) == bool(flag & STAGED_FLAGS)


class TestFilterByPaths:
    """Test suite for allow-list filtering."""

    def test_keeps_status_order_not_allow_list_order(self):
        statuses = [entry("b"), entry("other.txt"), entry("a")]

        result = filter_by_paths(statuses, ["a", "b"])

        assert [e.path for e in result] == ["b", "a"]

    def test_exact_match_only(self):
        statuses = [entry("mark1.bak"), entry("dir/mark1"), entry("mark1")]

        result = filter_by_paths(statuses, ["mark1", "dir"])

        assert [e.path for e in result] == ["mark1"]

    def test_glob_characters_are_literal(self):
        statuses = [entry("mark1"), entry("mark*")]

        result = filter_by_paths(statuses, ["mark*"])

        assert [e.path for e in result] == ["mark*"]

    def test_no_duplicates_from_repeated_allow_list(self):
        statuses = [entry("mark1")]

        assert len(filter_by_paths(statuses, ["mark1", "mark1"])) == 1

    def test_undecodable_paths_never_match(self):
        statuses = [undecodable(b"\xff"), entry("mark1")]

        result = filter_by_paths(statuses, ["", "mark1"])

        assert [e.path for e in result] == ["mark1"]

    def test_empty_allow_list(self):
        assert filter_by_paths([entry("mark1")], []) == []


class TestFindUnrepresentable:
    """Test suite for undecodable mark file detection."""

    def test_matches_raw_bytes_of_allow_list_entry(self):
        raw = b"caf\xe9"
        allowed = raw.decode("utf-8", errors="surrogateescape")

        result = find_unrepresentable([undecodable(raw), entry("mark1")], [allowed])

        assert [e.raw_path for e in result] == [raw]

    def test_ignores_unrelated_undecodable_entries(self):
        result = find_unrepresentable([undecodable(b"\xff\xfe")], ["mark1"])

        assert result == []
