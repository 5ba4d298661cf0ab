# -*- coding: utf-8 -*-
"""
Catalog Manager - Own the current catalog and keep it in step with the root.

The manager drives the filesystem scanner whenever the catalog root
changes, orders the results, and tracks loading/error status for the
UI. Scans run in the background; every scan is stamped with a
generation number and a result whose generation has been superseded is
dropped on arrival, so a slow scan of an old root can never overwrite
the catalog of the current one.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.catalog.models import CatalogEntry
from folderdeck.catalog.scanner import scan_root
from folderdeck.core.pool import ThreadExecutorPool
from folderdeck.errors import FolderDeckError, StorageError


CatalogListener = Callable[['CatalogManager'], None]
Scanner = Callable[[str], List[CatalogEntry]]


def order_entries(entries: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Sort entries newest first, ties broken by name.

    Entries without a modification time sort after all timestamped
    entries.

    Parameters
    ----------
    entries : Iterable[CatalogEntry]

    Returns
    -------
    List[CatalogEntry]
        A new, ordered list.
    """
    def key(entry: CatalogEntry):
        if entry.last_modified is None:
            return (1, 0.0, entry.name)
        return (0, -entry.last_modified, entry.name)

    return sorted(entries, key=key)


class CatalogManager:
    """Holds the ordered catalog for the current root.

    Parameters
    ----------
    pool : Optional[ThreadExecutorPool]
        Pool used to run scans. If None, scans run synchronously in the
        calling thread.
    scanner : Optional[Callable[[str], List[CatalogEntry]]]
        Scan function. Defaults to ``scan_root``.
    """

    def __init__(
        self,
        pool: Optional[ThreadExecutorPool] = None,
        scanner: Optional[Scanner] = None,
    ) -> None:
        self._pool = pool
        self._scanner = scanner or scan_root
        self._lock = threading.Lock()
        self._root: Optional[str] = None
        self._entries: List[CatalogEntry] = []
        self._loading = False
        self._error: Optional[FolderDeckError] = None
        self._generation = 0
        self._idle = threading.Event()
        self._idle.set()
        self._listeners: List[CatalogListener] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def root(self) -> Optional[str]:
        with self._lock:
            return self._root

    @property
    def entries(self) -> List[CatalogEntry]:
        """Copy of the current ordered catalog."""
        with self._lock:
            return list(self._entries)

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def error(self) -> Optional[FolderDeckError]:
        """Error from the most recent accepted scan, if it failed."""
        with self._lock:
            return self._error

    def add_listener(self, listener: CatalogListener) -> None:
        """Register a callback invoked after every committed scan."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def set_root(self, root: Optional[Union[str, Path]]) -> bool:
        """Point the catalog at a new root.

        Starts exactly one scan per distinct root. Re-setting the current
        root does nothing; ``None`` clears the catalog.

        Parameters
        ----------
        root : Optional[Union[str, Path]]

        Returns
        -------
        bool
            True if the root changed.
        """
        normalized = (
            str(Path(root).expanduser().absolute()) if root is not None else None
        )
        with self._lock:
            if normalized == self._root:
                return False
            self._root = normalized
            logger.info("Catalog root changed to %s", normalized)
            if normalized is None:
                self._generation += 1
                self._entries = []
                self._error = None
                self._loading = False
                self._idle.set()
                cleared = True
            else:
                cleared = False

        if cleared:
            self._notify()
        else:
            self._start_scan()
        return True

    def refresh(self) -> None:
        """Re-scan the current root, e.g. after an item was created."""
        if self.root is None:
            return
        self._start_scan()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the latest scan has been committed.

        Returns
        -------
        bool
            False if the timeout expired first.
        """
        return self._idle.wait(timeout)

    def _start_scan(self) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            root = self._root
            self._loading = True
            self._idle.clear()

        if self._pool is None:
            self._run_scan(generation, root)
            return
        try:
            self._pool.submit(self._run_scan, generation, root)
        except RuntimeError as e:
            # Pool already shut down; keep the last catalog.
            logger.warning("Cannot schedule scan of %s: %s", root, e)
            self._commit(
                generation, root, None, StorageError(f"Cannot scan {root}: {e}")
            )

    def _run_scan(self, generation: int, root: str) -> None:
        entries: List[CatalogEntry] = []
        error: Optional[FolderDeckError] = None
        try:
            entries = order_entries(self._scanner(root))
        except FolderDeckError as e:
            logger.warning("Scan of %s failed: %s", root, e)
            error = e
        except Exception as e:
            logger.exception("Unexpected error scanning %s", root)
            error = StorageError(f"Cannot read {root}: {e}")
        self._commit(generation, root, entries, error)

    def _commit(
        self,
        generation: int,
        root: str,
        entries: Optional[List[CatalogEntry]],
        error: Optional[FolderDeckError],
    ) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding stale scan of %s (generation %d, current %d)",
                    root, generation, self._generation,
                )
                return
            if entries is not None:
                self._entries = entries
            self._error = error
            self._loading = False

        self._notify()

        # Listeners have seen the result before waiters are released.
        with self._lock:
            if generation == self._generation:
                self._idle.set()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Catalog listener failed")
