# -*- coding: utf-8 -*-
"""
Bundle Installer - Swap a verified update into place and relaunch.

The archive is extracted into a staging directory beside the current
application bundle. The swap is two renames on the same filesystem:
the live bundle moves to a backup name, then the staged bundle takes
its place. If the second rename fails the backup is renamed back, so
the previous build stays runnable.

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
import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.errors import StorageError


def default_bundle_dir() -> Optional[Path]:
    """Directory of the running application bundle.

    Only frozen builds have a replaceable bundle; running from source
    returns None.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).resolve().parent
    return None


def relaunch() -> None:
    """Replace the current process with a fresh instance of the app."""
    if getattr(sys, 'frozen', False):
        args = [sys.executable] + sys.argv[1:]
    else:
        args = [sys.executable] + sys.argv
    logger.info("Relaunching: %s", ' '.join(args))
    os.execv(sys.executable, args)


class BundleInstaller:
    """Installs update archives over an application bundle directory.

    Parameters
    ----------
    bundle_dir : Path
        Directory holding the installed application.
    """

    def __init__(self, bundle_dir: Path) -> None:
        self.bundle_dir = Path(bundle_dir)

    def install(self, archive: Path) -> Path:
        """Replace the bundle with the contents of ``archive``.

        Parameters
        ----------
        archive : Path
            Verified ``.zip`` or tar archive.

        Returns
        -------
        Path
            The bundle directory, now holding the new build.

        Raises
        ------
        StorageError
            If extraction or the swap fails. The previous bundle is
            restored whenever the swap got as far as moving it aside.
        """
        parent = self.bundle_dir.parent
        try:
            staging = Path(tempfile.mkdtemp(
                dir=str(parent), prefix=f".{self.bundle_dir.name}.staging-"
            ))
        except OSError as e:
            raise StorageError(f"Cannot stage update in {parent}: {e}") from e
        try:
            self._extract(archive, staging)
            new_root = self._resolve_update_root(staging)
            self._swap(new_root)
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        logger.info("Installed update into %s", self.bundle_dir)
        return self.bundle_dir

    def _extract(self, archive: Path, staging: Path) -> None:
        try:
            if zipfile.is_zipfile(archive):
                with zipfile.ZipFile(archive, 'r') as zf:
                    root = staging.resolve()
                    for member in zf.namelist():
                        dest = (staging / member).resolve()
                        if dest != root and root not in dest.parents:
                            raise StorageError(
                                f"Update archive entry escapes bundle: {member}"
                            )
                    zf.extractall(staging)
            elif tarfile.is_tarfile(archive):
                with tarfile.open(archive, 'r:*') as tf:
                    tf.extractall(staging, filter='data')
            else:
                raise StorageError("Update archive is not a zip or tar file")
        # TypeError: interpreters without tar extraction filters.
        except (OSError, TypeError, zipfile.BadZipFile, tarfile.TarError) as e:
            raise StorageError(f"Cannot extract update: {e}") from e

    @staticmethod
    def _resolve_update_root(staging: Path) -> Path:
        candidates = [p for p in staging.iterdir() if p.name != "__MACOSX"]
        if not candidates:
            raise StorageError("Update archive did not contain any files")
        if len(candidates) == 1 and candidates[0].is_dir():
            return candidates[0]
        return staging

    def _swap(self, new_root: Path) -> None:
        backup = self._backup_path()
        try:
            # mkdtemp creates the staging directory as 0700.
            shutil.copymode(self.bundle_dir, new_root)
            os.replace(self.bundle_dir, backup)
        except OSError as e:
            raise StorageError(f"Cannot move current bundle aside: {e}") from e

        try:
            os.replace(new_root, self.bundle_dir)
        except OSError as e:
            logger.error("Bundle swap failed, restoring previous build: %s", e)
            try:
                os.replace(backup, self.bundle_dir)
            except OSError as restore_error:
                logger.critical(
                    "Could not restore previous build from %s: %s",
                    backup, restore_error,
                )
                raise StorageError(
                    f"Update failed and the previous build is at {backup}"
                ) from restore_error
            raise StorageError(f"Cannot install update: {e}") from e

        shutil.rmtree(backup, ignore_errors=True)

    def _backup_path(self) -> Path:
        parent = self.bundle_dir.parent
        candidate = parent / f"{self.bundle_dir.name}.old"
        index = 1
        while candidate.exists():
            candidate = parent / f"{self.bundle_dir.name}.old{index}"
            index += 1
        return candidate
