"""Tests for termstore.recent."""

from unittest.mock import MagicMock

import pytest

from termstore.errors import HiveError, RecentListError
from termstore.hive import MemoryHive, RegValue, join_path
from termstore.recent import (
    JUMPLIST_KEY,
    JUMPLIST_VALUE,
    RecentList,
    build_multi_sz,
    parse_multi_sz,
)

ROOT = "Software\\Test\\App"
LIST_PATH = join_path(ROOT, JUMPLIST_KEY)


@pytest.fixture
def hive():
    return MemoryHive()


@pytest.fixture
def existing():
    return {"X", "Y", "Z", "W"}


@pytest.fixture
def recent(hive, existing):
    return RecentList(hive, ROOT, lambda name: name in existing)


def stored(hive):
    with hive.open_key(LIST_PATH) as key:
        return key.query_value(JUMPLIST_VALUE)


def seed_list(hive, entries):
    with hive.create_key(LIST_PATH) as key:
        key.set_value(JUMPLIST_VALUE, RegValue.multi_sz(build_multi_sz(entries)))


# =============================================================================
# Multi-string blobs
# =============================================================================


class TestMultiSz:
    """Tests for parse_multi_sz() and build_multi_sz()."""

    def test_build(self):
        assert build_multi_sz(["a", "b"]) == "a\0b\0\0"

    def test_build_empty(self):
        assert build_multi_sz([]) == "\0\0"

    def test_parse(self):
        assert parse_multi_sz("a\0b\0\0") == ["a", "b"]

    def test_parse_empty(self):
        assert parse_multi_sz("\0\0") == []
        assert parse_multi_sz("") == []

    def test_parse_without_terminator(self):
        assert parse_multi_sz("a\0b") == []

    def test_parse_stops_at_first_empty_entry(self):
        assert parse_multi_sz("\0X\0\0") == []
        assert parse_multi_sz("a\0\0b\0\0") == ["a"]


# =============================================================================
# List operations
# =============================================================================


class TestRecentList:
    """Tests for RecentList."""

    def test_empty(self, recent):
        assert recent.get_entries() == []

    def test_add_to_empty(self, recent, hive):
        assert recent.add_entry("X") == ["X"]
        assert stored(hive) == RegValue.multi_sz("X\0\0")

    def test_add_moves_to_front(self, recent, hive):
        seed_list(hive, ["X", "Y", "Z"])
        assert recent.add_entry("Y") == ["Y", "X", "Z"]
        assert recent.get_entries() == ["Y", "X", "Z"]

    def test_add_new_entry(self, recent, hive):
        seed_list(hive, ["X", "Y"])
        assert recent.add_entry("W") == ["W", "X", "Y"]

    def test_remove(self, recent, hive):
        seed_list(hive, ["Y", "X", "Z"])
        assert recent.remove_entry("X") == ["Y", "Z"]
        assert recent.get_entries() == ["Y", "Z"]

    def test_remove_last_entry(self, recent, hive):
        seed_list(hive, ["X"])
        assert recent.remove_entry("X") == []
        assert stored(hive) == RegValue.multi_sz("\0\0")

    def test_remove_missing(self, recent, hive):
        seed_list(hive, ["X", "Y"])
        assert recent.remove_entry("Q") == ["X", "Y"]

    def test_stale_entries_dropped_on_change(self, recent, hive, existing):
        seed_list(hive, ["X", "Y", "Z"])
        existing.discard("Y")

        assert recent.get_entries() == ["X", "Y", "Z"]
        assert recent.add_entry("W") == ["W", "X", "Z"]

    def test_added_name_not_checked(self, hive):
        recent = RecentList(hive, ROOT, lambda name: False)
        assert recent.add_entry("new") == ["new"]

    def test_duplicates_collapsed(self, recent, hive):
        seed_list(hive, ["X", "Y", "X", "Z", "Y"])
        assert recent.add_entry("Z") == ["Z", "X", "Y"]


class TestCorruption:
    """Malformed stored lists."""

    def test_wrong_type_discarded(self, recent, hive):
        with hive.create_key(LIST_PATH) as key:
            key.set_value(JUMPLIST_VALUE, RegValue.sz("X"))

        assert recent.get_entries() == []
        assert stored(hive) is None

    def test_wrong_type_replaced_on_add(self, recent, hive):
        with hive.create_key(LIST_PATH) as key:
            key.set_value(JUMPLIST_VALUE, RegValue.dword(1))

        assert recent.add_entry("X") == ["X"]
        assert stored(hive) == RegValue.multi_sz("X\0\0")

    def test_missing_terminator_reads_empty(self, recent, hive):
        with hive.create_key(LIST_PATH) as key:
            key.set_value(JUMPLIST_VALUE, RegValue.multi_sz("X\0Y"))
        assert recent.get_entries() == []

    def test_leading_empty_entry_reads_empty(self, recent, hive):
        with hive.create_key(LIST_PATH) as key:
            key.set_value(JUMPLIST_VALUE, RegValue.multi_sz("\0X\0\0"))

        assert recent.get_entries() == []
        assert recent.add_entry("Y") == ["Y"]
        assert stored(hive) == RegValue.multi_sz("Y\0\0")

    def test_unavailable_store(self):
        hive = MagicMock()
        hive.create_key.side_effect = HiveError("denied")
        recent = RecentList(hive, ROOT, lambda name: True)

        assert recent.get_entries() == []
        with pytest.raises(RecentListError):
            recent.add_entry("X")

    def test_write_failure(self):
        key = MagicMock()
        key.__enter__.return_value = key
        key.query_value.return_value = None
        key.set_value.side_effect = HiveError("read only")
        hive = MagicMock()
        hive.create_key.return_value = key
        recent = RecentList(hive, ROOT, lambda name: True)

        with pytest.raises(RecentListError):
            recent.remove_entry("X")
