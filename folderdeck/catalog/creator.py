# -*- coding: utf-8 -*-
"""
Folder Creator - Create new catalog items under the root.

The user's text is reduced to a slug, a directory of that name is
created under the root (never overwriting an existing one), and the
item type's scaffold files, if any, are written into it. Scaffolding
runs after the directory exists; if it fails the directory is kept and
a ScaffoldError reports what was written.

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
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.catalog.manager import CatalogManager
from folderdeck.catalog.models import CreateResult
from folderdeck.catalog.sanitize import sanitize_name
from folderdeck.catalog.scaffolds import Scaffold, load_scaffolds
from folderdeck.errors import (
    AlreadyExistsError,
    InvalidNameError,
    NotFoundError,
    PermissionDeniedError,
    ScaffoldError,
    StorageError,
)


class FolderCreator:
    """Validates names and creates item directories.

    Parameters
    ----------
    scaffolds : Optional[Dict[str, Scaffold]]
        Item types available for scaffolding. Loaded from
        ``load_scaffolds()`` on first use if None.
    manager : Optional[CatalogManager]
        Manager to refresh after a directory is created.
    """

    def __init__(
        self,
        scaffolds: Optional[Dict[str, Scaffold]] = None,
        manager: Optional[CatalogManager] = None,
    ) -> None:
        self._scaffolds = scaffolds
        self._manager = manager

    @property
    def scaffolds(self) -> Dict[str, Scaffold]:
        if self._scaffolds is None:
            self._scaffolds = load_scaffolds()
        return self._scaffolds

    def item_types(self) -> List[str]:
        return sorted(self.scaffolds)

    def create(
        self,
        root: Union[str, Path],
        raw_name: str,
        item_type: Optional[str] = None,
    ) -> CreateResult:
        """Create ``root/<slug>`` and scaffold it.

        Parameters
        ----------
        root : Union[str, Path]
            Catalog root directory.
        raw_name : str
            Name as typed by the user.
        item_type : Optional[str]
            Scaffold type to apply.

        Returns
        -------
        CreateResult

        Raises
        ------
        InvalidNameError
            If the name sanitizes to nothing or ``item_type`` is unknown.
        NotFoundError
            If ``root`` is not an existing directory.
        AlreadyExistsError
            If ``root/<slug>`` already exists.
        PermissionDeniedError
            If the directory cannot be created.
        ScaffoldError
            If the directory was created but scaffold files failed.
        StorageError
            On any other filesystem failure.
        """
        slug = sanitize_name(raw_name)
        if not slug:
            raise InvalidNameError(
                f"{raw_name.strip()!r} does not contain any usable characters"
            )

        scaffold: Optional[Scaffold] = None
        if item_type is not None:
            scaffold = self.scaffolds.get(item_type)
            if scaffold is None:
                raise InvalidNameError(f"Unknown item type: {item_type!r}")

        root_path = Path(root).expanduser().absolute()
        if not root_path.is_dir():
            raise NotFoundError(f"Folder not found: {root_path}")

        target = root_path / slug
        try:
            target.mkdir(exist_ok=False)
        except FileExistsError as e:
            raise AlreadyExistsError(f"'{slug}' already exists in {root_path}") from e
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Permission denied creating {target}"
            ) from e
        except OSError as e:
            raise StorageError(f"Cannot create {target}: {e}") from e

        logger.info("Created item %s", target)

        try:
            written = self._write_scaffold(target, scaffold, raw_name.strip(), slug)
        finally:
            # The directory exists either way; the catalog must show it.
            if self._manager is not None:
                self._manager.refresh()

        return CreateResult(
            name=slug,
            path=str(target),
            item_type=item_type,
            files_written=written,
        )

    @staticmethod
    def _write_scaffold(
        target: Path,
        scaffold: Optional[Scaffold],
        name: str,
        slug: str,
    ) -> List[str]:
        if scaffold is None:
            return []

        written: List[str] = []
        for rel, text in scaffold.render(name, slug).items():
            dest = target / rel
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, 'x', encoding='utf-8') as f:
                    f.write(text)
            except OSError as e:
                logger.error(
                    "Scaffold '%s' failed at %s: %s",
                    scaffold.item_type, dest, e,
                )
                raise ScaffoldError(
                    f"Created '{slug}' but could not write {rel}: {e}",
                    path=str(target),
                    files_written=written,
                ) from e
            written.append(rel)

        logger.info(
            "Scaffolded %s as '%s' (%d files)",
            target, scaffold.item_type, len(written),
        )
        return written


def create_item(
    root: Union[str, Path],
    raw_name: str,
    item_type: Optional[str] = None,
    manager: Optional[CatalogManager] = None,
) -> CreateResult:
    """Convenience wrapper around ``FolderCreator.create``."""
    return FolderCreator(manager=manager).create(root, raw_name, item_type)
