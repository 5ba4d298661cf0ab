# -*- coding: utf-8 -*-
"""
Tests for folderdeck.app - FolderDeckApp shell.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import json
import os
from unittest.mock import MagicMock

import pytest

from folderdeck import create_app
from folderdeck.app import FolderDeckApp
from folderdeck.catalog.scaffolds import Scaffold
from folderdeck.core.config import DeckConfig
from folderdeck.core.pool import ThreadExecutorPool
from folderdeck.core.settings import ROOT_KEY, SettingsStore
from folderdeck.errors import (
    AlreadyExistsError,
    InvalidNameError,
    NetworkError,
    NotFoundError,
    ScaffoldError,
)
from folderdeck.update.models import UpdateState


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "home" / "settings.json"


@pytest.fixture
def catalog_root(tmp_path):
    root = tmp_path / "projects"
    root.mkdir()
    for name, mtime in (("A", 1_000), ("B", 3_000), ("C", 2_000)):
        (root / name).mkdir()
        os.utime(root / name, (mtime, mtime))
    return root


@pytest.fixture
def updater():
    u = MagicMock()
    u.state = UpdateState.IDLE
    u.check_for_update.return_value = None
    return u


@pytest.fixture
def make_app(settings_path, updater):
    apps = []

    def factory(**config_overrides):
        options = dict(default_root="", check_updates_on_start=False)
        options.update(config_overrides)
        config = DeckConfig(**options)
        app = FolderDeckApp(
            config=config,
            settings=SettingsStore(settings_path, autosave=config.autosave_settings),
            updater=updater,
            pool=ThreadExecutorPool(max_workers=2),
        )
        apps.append(app)
        return app

    yield factory
    for app in apps:
        app.pool.shutdown(wait=True)


# ---------------------------------------------------------------------------
# Catalog operations
# ---------------------------------------------------------------------------

class TestListCatalog:

    def test_ordered_by_mtime(self, make_app, catalog_root):
        app = make_app()
        entries = app.list_catalog(str(catalog_root))
        assert [e.name for e in entries] == ["B", "C", "A"]

    def test_missing_root(self, make_app, tmp_path):
        with pytest.raises(NotFoundError):
            make_app().list_catalog(tmp_path / "missing")


class TestCreateItem:

    def test_creates_and_rescans(self, make_app, catalog_root):
        app = make_app()
        app.start()
        app.select_root(catalog_root)
        assert app.catalog.wait(timeout=5)

        result = app.create_item(catalog_root, "My Game!!", item_type='blank')
        assert result.name == "my-game"
        assert app.catalog.wait(timeout=5)
        assert "my-game" in [e.name for e in app.catalog.entries]

    def test_invalid_name_recorded(self, make_app, catalog_root):
        app = make_app()
        app.start()
        with pytest.raises(InvalidNameError):
            app.create_item(catalog_root, "   ")
        assert isinstance(app.state.operation_error, InvalidNameError)

    def test_duplicate(self, make_app, catalog_root):
        app = make_app()
        app.start()
        app.create_item(catalog_root, "foo")
        with pytest.raises(AlreadyExistsError):
            app.create_item(catalog_root, "foo")

    def test_scaffold_error_survives_rescan(self, make_app, catalog_root):
        app = make_app()
        app.start()
        app.select_root(catalog_root)
        assert app.catalog.wait(timeout=5)
        # The second file needs README.md to be a directory.
        app.creator.scaffolds['broken'] = Scaffold(
            'broken', {'README.md': '# {name}\n', 'README.md/notes.txt': 'x'}
        )

        with pytest.raises(ScaffoldError):
            app.create_item(catalog_root, "Half Done", item_type='broken')
        assert app.catalog.wait(timeout=5)

        assert "half-done" in [e.name for e in app.state.entries]
        assert isinstance(app.state.operation_error, ScaffoldError)
        assert app.state.operation_error.files_written == ['README.md']
        assert app.state.scan_error is None
        assert app.state.error is app.state.operation_error

    def test_success_clears_previous_failure(self, make_app, catalog_root):
        app = make_app()
        app.start()
        with pytest.raises(InvalidNameError):
            app.create_item(catalog_root, "!!!")
        app.create_item(catalog_root, "fine")
        assert app.state.operation_error is None

    def test_dismiss_error(self, make_app, catalog_root):
        app = make_app()
        app.start()
        with pytest.raises(InvalidNameError):
            app.create_item(catalog_root, "!!!")
        app.dismiss_error()
        assert app.state.error is None

    def test_item_types(self, make_app):
        assert 'python' in make_app().item_types()


# ---------------------------------------------------------------------------
# Startup / settings
# ---------------------------------------------------------------------------

class TestStartup:

    def test_select_root_persists(self, make_app, catalog_root, settings_path):
        app = make_app()
        app.start()
        app.select_root(catalog_root)
        assert json.loads(settings_path.read_text()) == {ROOT_KEY: str(catalog_root)}

    def test_restart_restores_root_and_catalog(self, make_app, catalog_root,
                                               settings_path):
        first = make_app()
        first.start()
        first.select_root(catalog_root)
        first.shutdown()

        second = make_app()
        second.start()
        assert second.get_setting(ROOT_KEY) == str(catalog_root)
        assert second.state.selected_root == str(catalog_root)
        assert second.catalog.wait(timeout=5)
        assert [e.name for e in second.state.entries] == ["B", "C", "A"]
        assert second.state.loading is False

    def test_startup_does_not_overwrite_persisted_root(self, make_app,
                                                       settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({ROOT_KEY: "/persisted/root"}))
        app = make_app()
        app.start()
        assert app.catalog.wait(timeout=5)
        assert json.loads(settings_path.read_text()) == {ROOT_KEY: "/persisted/root"}

    def test_stale_root_surfaces_error(self, make_app, settings_path, tmp_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({ROOT_KEY: str(tmp_path / "gone")}))
        app = make_app()
        app.start()
        assert app.catalog.wait(timeout=5)
        assert isinstance(app.state.scan_error, NotFoundError)
        assert app.state.error is app.state.scan_error

    def test_default_root_used_but_not_saved(self, make_app, catalog_root,
                                             settings_path):
        app = make_app(default_root=str(catalog_root))
        app.start()
        assert app.catalog.wait(timeout=5)
        assert app.state.selected_root == str(catalog_root)
        assert app.get_setting(ROOT_KEY) is None
        assert not settings_path.exists()

    def test_setting_root_directly_rescans(self, make_app, catalog_root):
        app = make_app()
        app.start()
        app.set_setting(ROOT_KEY, str(catalog_root))
        assert app.catalog.wait(timeout=5)
        assert app.catalog.root == str(catalog_root)

    def test_save_explicit(self, make_app, settings_path):
        app = make_app(autosave_settings=False)
        app.start()
        app.set_setting("theme", "dark")
        assert not settings_path.exists()
        app.save()
        assert json.loads(settings_path.read_text()) == {"theme": "dark"}


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------

class TestUpdates:

    def test_background_check_on_start(self, make_app, updater):
        app = make_app(check_updates_on_start=True)
        app.start()
        app._update_future.result(timeout=5)
        updater.check_for_update.assert_called_once()

    def test_background_check_failure_is_not_fatal(self, make_app, updater):
        updater.check_for_update.side_effect = NetworkError("offline")
        app = make_app(check_updates_on_start=True)
        app.start()
        assert app._update_future.result(timeout=5) is None

    def test_check_records_available_update(self, make_app, updater):
        manifest = MagicMock(version="9.9.9")
        updater.check_for_update.return_value = manifest
        app = make_app()
        assert app.check_for_update() is manifest
        assert app.state.available_update is manifest

    def test_download_confirms_available_update(self, make_app, updater):
        updater.state = UpdateState.AVAILABLE
        app = make_app()
        progress = MagicMock()
        app.download_and_install_update(progress)
        updater.confirm.assert_called_once()
        updater.download_and_install.assert_called_once_with(progress)

    def test_no_auto_install(self, make_app, updater):
        updater.check_for_update.return_value = MagicMock(version="9.9.9")
        app = make_app(check_updates_on_start=True)
        app.start()
        app._update_future.result(timeout=5)
        updater.confirm.assert_not_called()
        updater.download_and_install.assert_not_called()


def test_create_app_factory(tmp_path):
    app = create_app(
        config=DeckConfig(default_root="", check_updates_on_start=False),
        settings=SettingsStore(tmp_path / "s.json"),
    )
    try:
        assert isinstance(app, FolderDeckApp)
        assert app.updater.state is UpdateState.IDLE
    finally:
        app.pool.shutdown()
