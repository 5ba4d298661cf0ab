# -*- coding: utf-8 -*-
"""
Tests for folderdeck.catalog.manager - CatalogManager and order_entries.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import os
import threading
from unittest.mock import MagicMock

import pytest

from folderdeck.catalog.manager import CatalogManager, order_entries
from folderdeck.catalog.models import CatalogEntry
from folderdeck.core.pool import ThreadExecutorPool
from folderdeck.errors import NotFoundError, StorageError


def _entry(name, mtime=None):
    return CatalogEntry(name=name, path=f"/root/{name}", last_modified=mtime)


@pytest.fixture
def pool():
    p = ThreadExecutorPool(max_workers=4)
    yield p
    p.shutdown(wait=True)


# ---------------------------------------------------------------------------
# order_entries
# ---------------------------------------------------------------------------

class TestOrderEntries:

    def test_newest_first(self):
        entries = [_entry("a", 100), _entry("b", 300), _entry("c", 200)]
        assert [e.name for e in order_entries(entries)] == ["b", "c", "a"]

    def test_ties_broken_by_name(self):
        entries = [_entry("zeta", 100), _entry("alpha", 100), _entry("mid", 100)]
        assert [e.name for e in order_entries(entries)] == ["alpha", "mid", "zeta"]

    def test_missing_timestamp_sorts_last(self):
        entries = [_entry("b"), _entry("a", 1), _entry("a2")]
        assert [e.name for e in order_entries(entries)] == ["a", "a2", "b"]

    def test_returns_new_list(self):
        entries = [_entry("a", 1)]
        assert order_entries(entries) is not entries


# ---------------------------------------------------------------------------
# CatalogManager (synchronous)
# ---------------------------------------------------------------------------

class TestCatalogManagerSync:

    def test_set_root_scans_and_orders(self, tmp_path):
        for name, mtime in (("A", 1_000), ("B", 3_000), ("C", 2_000)):
            (tmp_path / name).mkdir()
            os.utime(tmp_path / name, (mtime, mtime))

        manager = CatalogManager()
        assert manager.set_root(tmp_path) is True
        assert [e.name for e in manager.entries] == ["B", "C", "A"]
        assert manager.loading is False
        assert manager.error is None

    def test_same_root_scans_once(self):
        scanner = MagicMock(return_value=[])
        manager = CatalogManager(scanner=scanner)
        manager.set_root("/data/projects")
        assert manager.set_root("/data/projects") is False
        assert scanner.call_count == 1

    def test_distinct_roots_scan_each(self):
        scanner = MagicMock(return_value=[])
        manager = CatalogManager(scanner=scanner)
        manager.set_root("/data/one")
        manager.set_root("/data/two")
        manager.set_root("/data/one")
        assert scanner.call_count == 3

    def test_refresh_rescans(self):
        scanner = MagicMock(return_value=[])
        manager = CatalogManager(scanner=scanner)
        manager.set_root("/data/projects")
        manager.refresh()
        assert scanner.call_count == 2

    def test_refresh_without_root_is_noop(self):
        scanner = MagicMock(return_value=[])
        manager = CatalogManager(scanner=scanner)
        manager.refresh()
        scanner.assert_not_called()

    def test_clear_root(self):
        scanner = MagicMock(return_value=[_entry("a", 1)])
        manager = CatalogManager(scanner=scanner)
        manager.set_root("/data/projects")
        assert manager.set_root(None) is True
        assert manager.entries == []
        assert manager.root is None

    def test_error_recorded_not_raised(self, tmp_path):
        manager = CatalogManager()
        manager.set_root(tmp_path / "missing")
        assert isinstance(manager.error, NotFoundError)
        assert manager.entries == []
        assert manager.loading is False

    def test_error_cleared_by_next_scan(self, tmp_path):
        manager = CatalogManager()
        manager.set_root(tmp_path / "missing")
        manager.set_root(tmp_path)
        assert manager.error is None

    def test_listener_notified(self):
        manager = CatalogManager(scanner=lambda root: [_entry("a", 1)])
        seen = []
        manager.add_listener(lambda m: seen.append([e.name for e in m.entries]))
        manager.set_root("/data/projects")
        assert seen == [["a"]]

    def test_failing_listener_does_not_break_manager(self):
        manager = CatalogManager(scanner=lambda root: [_entry("a", 1)])
        manager.add_listener(MagicMock(side_effect=RuntimeError("boom")))
        manager.set_root("/data/projects")
        assert [e.name for e in manager.entries] == ["a"]

    def test_entries_is_a_copy(self):
        manager = CatalogManager(scanner=lambda root: [_entry("a", 1)])
        manager.set_root("/data/projects")
        manager.entries.clear()
        assert len(manager.entries) == 1


# ---------------------------------------------------------------------------
# CatalogManager (background)
# ---------------------------------------------------------------------------

class TestCatalogManagerBackground:

    def test_scan_runs_in_pool(self, pool):
        manager = CatalogManager(pool=pool, scanner=lambda root: [_entry("a", 1)])
        manager.set_root("/data/projects")
        assert manager.wait(timeout=5)
        assert [e.name for e in manager.entries] == ["a"]

    def test_stale_scan_discarded(self, pool):
        release_slow = threading.Event()
        slow_started = threading.Event()

        def scanner(root):
            if root.endswith("slow"):
                slow_started.set()
                release_slow.wait(timeout=5)
                return [_entry("stale", 999)]
            return [_entry("fresh", 1)]

        manager = CatalogManager(pool=pool, scanner=scanner)
        manager.set_root("/data/slow")
        assert slow_started.wait(timeout=5)

        manager.set_root("/data/fast")
        assert manager.wait(timeout=5)
        assert [e.name for e in manager.entries] == ["fresh"]

        release_slow.set()
        pool.shutdown(wait=True)
        assert [e.name for e in manager.entries] == ["fresh"]
        assert manager.root.endswith("fast")

    def test_loading_flag_while_scanning(self, pool):
        release = threading.Event()

        def scanner(root):
            release.wait(timeout=5)
            return []

        manager = CatalogManager(pool=pool, scanner=scanner)
        manager.set_root("/data/projects")
        assert manager.loading is True
        release.set()
        assert manager.wait(timeout=5)
        assert manager.loading is False

    def test_refresh_after_pool_shutdown_settles(self, pool):
        manager = CatalogManager(pool=pool, scanner=lambda root: [_entry("a", 1)])
        manager.set_root("/data/projects")
        assert manager.wait(timeout=5)

        pool.shutdown(wait=True)
        manager.refresh()

        assert manager.loading is False
        assert manager.wait(timeout=0)
        assert isinstance(manager.error, StorageError)
        assert [e.name for e in manager.entries] == ["a"]
