# -*- coding: utf-8 -*-
"""
Application Shell - The core operations exposed to the embedding UI.

FolderDeckApp wires the settings store, catalog manager, folder creator
and updater together and keeps an explicit AppState for the UI to
render. Startup is ordered so the persisted root is read before any
write-back listener exists::

    settings.load()  ->  seed catalog root  ->  listeners + settings.arm()

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
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck import __version__
from folderdeck.catalog.creator import FolderCreator
from folderdeck.catalog.manager import CatalogManager, order_entries
from folderdeck.catalog.models import CatalogEntry, CreateResult
from folderdeck.catalog.scanner import scan_root
from folderdeck.core.config import DeckConfig, load_config
from folderdeck.core.pool import ThreadExecutorPool
from folderdeck.core.settings import ROOT_KEY, SettingsStore
from folderdeck.core.state import AppState
from folderdeck.errors import FolderDeckError
from folderdeck.update.models import DownloadProgress, UpdateManifest, UpdateState
from folderdeck.update.updater import Updater


StateListener = Callable[[AppState], None]


class FolderDeckApp:
    """Application shell owning all core components.

    Parameters
    ----------
    config : Optional[DeckConfig]
        Configuration. Loaded with ``load_config()`` if None.
    settings : Optional[SettingsStore]
        Settings store. A store at the default location if None.
    updater : Optional[Updater]
        Update machine. Built from ``config`` if None.
    pool : Optional[ThreadExecutorPool]
        Background pool. Created from ``config.max_workers`` if None.
    """

    def __init__(
        self,
        config: Optional[DeckConfig] = None,
        settings: Optional[SettingsStore] = None,
        updater: Optional[Updater] = None,
        pool: Optional[ThreadExecutorPool] = None,
    ) -> None:
        self.config = config or load_config()
        self.pool = pool or ThreadExecutorPool(max_workers=self.config.max_workers)
        self.settings = settings or SettingsStore(
            autosave=self.config.autosave_settings
        )
        self.catalog = CatalogManager(pool=self.pool)
        self.creator = FolderCreator(manager=self.catalog)
        self.updater = updater or Updater(
            current_version=__version__,
            manifest_url=self.config.manifest_url,
            timeout=self.config.update_timeout,
            download_timeout=self.config.download_timeout,
        )
        self.state = AppState()
        self._listeners: List[StateListener] = []
        self._update_future: Optional[Future] = None

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked whenever ``state`` changes."""
        self._listeners.append(listener)

    def dismiss_error(self) -> None:
        """Clear the failed-action error once the user has seen it."""
        self.state.operation_error = None
        self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("App state listener failed")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load settings, show the catalog, and check for updates."""
        self.settings.load()

        root = self.settings.get(ROOT_KEY)
        if root is None:
            default = self.config.default_root_path()
            if default is not None:
                logger.info("No saved root, using default %s", default)
                root = str(default)

        self.catalog.add_listener(self._on_catalog_changed)
        self.updater.add_listener(self._on_update_state)
        self.state.selected_root = root
        if root is not None:
            self.state.loading = True
            self.catalog.set_root(root)

        # Only now may changes be written back.
        self.settings.add_listener(self._on_setting_changed)
        self.settings.arm()

        if self.config.check_updates_on_start:
            self._update_future = self.pool.submit(self._background_update_check)

    def shutdown(self) -> None:
        """Flush settings and stop background work."""
        self.settings.save()
        if self._update_future is not None:
            self._update_future.cancel()
        self.pool.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_catalog(self, root_path: Union[str, Path]) -> List[CatalogEntry]:
        """Scan ``root_path`` synchronously and return the ordered catalog.

        Raises
        ------
        NotFoundError, PermissionDeniedError, StorageError
        """
        return order_entries(scan_root(root_path))

    def select_root(self, root_path: Union[str, Path]) -> None:
        """Make ``root_path`` the catalog root and remember it."""
        root = str(Path(root_path).expanduser().absolute())
        self.state.selected_root = root
        self.state.operation_error = None
        self.settings.set(ROOT_KEY, root)
        self.catalog.set_root(root)
        self._changed()

    def create_item(
        self,
        root_path: Union[str, Path],
        raw_name: str,
        item_type: Optional[str] = None,
    ) -> CreateResult:
        """Create a new item under ``root_path``.

        Errors are recorded on ``state.operation_error`` and re-raised
        for the caller to present. The record survives the rescan that
        follows every creation attempt.

        Raises
        ------
        InvalidNameError, AlreadyExistsError, NotFoundError,
        PermissionDeniedError, StorageError
        """
        try:
            result = self.creator.create(root_path, raw_name, item_type)
        except FolderDeckError as e:
            self.state.operation_error = e
            self._changed()
            raise
        if self.state.operation_error is not None:
            self.state.operation_error = None
            self._changed()
        return result

    def item_types(self) -> List[str]:
        return self.creator.item_types()

    def _on_catalog_changed(self, manager: CatalogManager) -> None:
        self.state.entries = manager.entries
        self.state.loading = manager.loading
        self.state.scan_error = manager.error
        self._changed()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_setting(self, key: str) -> Any:
        return self.settings.get(key)

    def set_setting(self, key: str, value: Any) -> None:
        self.settings.set(key, value)

    def save(self) -> None:
        self.settings.save()

    def _on_setting_changed(self, key: str, value: Any) -> None:
        if key == ROOT_KEY and value is not None:
            self.state.selected_root = value
            self.catalog.set_root(value)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def check_for_update(self) -> Optional[UpdateManifest]:
        """Ask the update server for a newer build.

        Raises
        ------
        NetworkError
        """
        manifest = self.updater.check_for_update()
        self.state.available_update = manifest
        self._changed()
        return manifest

    def download_and_install_update(
        self,
        on_progress: Optional[Callable[[DownloadProgress], None]] = None,
    ) -> None:
        """Install the available update after the user has confirmed it.

        Raises
        ------
        NetworkError, SignatureVerificationFailed, StorageError,
        UpdateStateError
        """
        if self.updater.state is UpdateState.AVAILABLE:
            self.updater.confirm()
        try:
            self.updater.download_and_install(on_progress)
        except FolderDeckError as e:
            self.state.available_update = None
            self.state.operation_error = e
            self._changed()
            raise

    def _background_update_check(self) -> None:
        try:
            self.check_for_update()
        except FolderDeckError as e:
            logger.warning("Background update check failed: %s", e)

    def _on_update_state(self, state: UpdateState) -> None:
        self.state.update_state = state
        self._changed()
