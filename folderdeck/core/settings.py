# -*- coding: utf-8 -*-
"""
Settings Store - Durable key-value persistence for FolderDeck.

Holds the user's selected catalog root (and any other small values the
shell wants to keep) in a single JSON record. The record is written via
write-temp-then-rename so a crash mid-save never leaves a truncated
file behind.

Initialization is an explicit phase sequence::

    UNINITIALIZED --load()--> LOADED --arm()--> READY

Write-back listeners may be registered once the store is LOADED but are
only invoked after ``arm()``. A listener that observed the store before
the persisted values were read would see the absent default and write
it straight back over the user's saved root.

Persistence failures never propagate. They are logged and the store
drops to in-memory operation for the remainder of the session.

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
import json
import logging
import os
import tempfile
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.core.resolver import resolve_settings_path


ROOT_KEY = "root"

SettingsListener = Callable[[str, Any], None]


class SettingsPhase(Enum):
    """Initialization phase of a SettingsStore."""

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    READY = "ready"


class SettingsStore:
    """JSON-backed key-value store with an explicit load/arm sequence.

    Parameters
    ----------
    path : Optional[Path]
        Settings file. Defaults to ``resolve_settings_path()``.
    autosave : bool
        If True, every effective ``set()`` after ``arm()`` is followed
        by ``save()``.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        autosave: bool = False,
    ) -> None:
        self._path = Path(path) if path is not None else resolve_settings_path()
        self._autosave = autosave
        self._values: Dict[str, Any] = {}
        self._listeners: List[SettingsListener] = []
        self._phase = SettingsPhase.UNINITIALIZED
        self._degraded = False
        self._lock = threading.RLock()
        # Serializes load() and save() against each other.
        self._io_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def phase(self) -> SettingsPhase:
        return self._phase

    @property
    def degraded(self) -> bool:
        """True once persistence failed and the store is memory-only."""
        return self._degraded

    def load(self) -> None:
        """Read the persisted record and enter the LOADED phase.

        A missing file yields an empty record. A corrupt file is logged
        and treated as empty; the next save replaces it. An unreadable
        file puts the store in degraded mode.

        Raises
        ------
        RuntimeError
            If the store has already been loaded.
        """
        with self._io_lock:
            if self._phase is not SettingsPhase.UNINITIALIZED:
                raise RuntimeError("Settings have already been loaded")

            values: Dict[str, Any] = {}
            try:
                with open(self._path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    values = data
                else:
                    logger.warning(
                        "Ignoring settings at %s: expected an object, got %s",
                        self._path, type(data).__name__,
                    )
            except FileNotFoundError:
                logger.debug("No settings file at %s", self._path)
            except ValueError as e:
                logger.warning("Corrupt settings file %s: %s", self._path, e)
            except OSError as e:
                logger.error(
                    "Cannot read settings from %s, continuing in memory: %s",
                    self._path, e,
                )
                self._degraded = True

            with self._lock:
                self._values = values
                self._phase = SettingsPhase.LOADED

    def arm(self) -> None:
        """Enable write-back listeners and enter the READY phase.

        Raises
        ------
        RuntimeError
            If called before ``load()``.
        """
        with self._lock:
            if self._phase is SettingsPhase.UNINITIALIZED:
                raise RuntimeError("Cannot arm settings listeners before load()")
            self._phase = SettingsPhase.READY

    def add_listener(self, listener: SettingsListener) -> None:
        """Register a callback invoked as ``listener(key, value)``.

        Raises
        ------
        RuntimeError
            If called before ``load()``.
        """
        with self._lock:
            if self._phase is SettingsPhase.UNINITIALIZED:
                raise RuntimeError(
                    "Settings listeners must be registered after load()"
                )
            self._listeners.append(listener)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a value. Setting ``None`` removes the key.

        Raises
        ------
        RuntimeError
            If called before ``load()``.
        """
        with self._lock:
            if self._phase is SettingsPhase.UNINITIALIZED:
                raise RuntimeError("Cannot write settings before load()")
            previous = self._values.get(key)
            if value is None:
                self._values.pop(key, None)
            else:
                self._values[key] = value
            changed = previous != value
            notify = changed and self._phase is SettingsPhase.READY
            listeners = list(self._listeners) if notify else []

        for listener in listeners:
            try:
                listener(key, value)
            except Exception:
                logger.exception("Settings listener failed for key %r", key)

        if notify and self._autosave:
            self.save()

    def as_dict(self) -> Dict[str, Any]:
        """Shallow copy of the current record."""
        with self._lock:
            return dict(self._values)

    def save(self) -> None:
        """Flush the record to disk atomically.

        Does nothing before ``load()`` (there is nothing authoritative to
        write) or once the store is degraded.
        """
        with self._io_lock:
            with self._lock:
                if self._phase is SettingsPhase.UNINITIALIZED:
                    logger.debug("Skipping save before settings were loaded")
                    return
                if self._degraded:
                    logger.debug("Settings are memory-only, skipping save")
                    return
                snapshot = dict(self._values)

            try:
                self._write_atomic(snapshot)
            except (OSError, TypeError, ValueError) as e:
                logger.error(
                    "Failed to save settings to %s, continuing in memory: %s",
                    self._path, e,
                )
                self._degraded = True

    def _write_atomic(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self._path.parent),
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
