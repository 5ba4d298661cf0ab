# -*- coding: utf-8 -*-
"""
Filesystem Scanner - List the immediate subdirectories of a catalog root.

Listing policy:

- only directories are catalog items; files and other entries are
  skipped;
- names starting with ``.`` are hidden and skipped;
- symlinks resolving to a directory are included under the link's own
  path; broken links are skipped;
- a child that vanishes between listing and ``stat`` is skipped.

The scan never recurses and returns entries in no particular order.

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
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.catalog.models import CatalogEntry
from folderdeck.errors import NotFoundError, PermissionDeniedError, StorageError


def is_hidden(name: str) -> bool:
    return name.startswith('.')


def scan_root(root: Union[str, Path]) -> List[CatalogEntry]:
    """Scan ``root`` for catalog entries.

    Parameters
    ----------
    root : Union[str, Path]
        Catalog root directory. Relative paths are made absolute.

    Returns
    -------
    List[CatalogEntry]
        Unordered entries, one per visible child directory.

    Raises
    ------
    NotFoundError
        If ``root`` does not exist or is not a directory.
    PermissionDeniedError
        If ``root`` cannot be listed.
    StorageError
        On any other OS error while listing.
    """
    root_path = Path(root).expanduser().absolute()

    entries: List[CatalogEntry] = []
    try:
        with os.scandir(root_path) as it:
            for child in it:
                if is_hidden(child.name):
                    continue
                try:
                    if not child.is_dir(follow_symlinks=True):
                        continue
                    mtime = child.stat(follow_symlinks=True).st_mtime
                except OSError as e:
                    logger.debug("Skipping %s: %s", child.path, e)
                    continue
                entries.append(CatalogEntry(
                    name=child.name,
                    path=str(root_path / child.name),
                    last_modified=mtime,
                ))
    except FileNotFoundError as e:
        raise NotFoundError(f"Folder not found: {root_path}") from e
    except NotADirectoryError as e:
        raise NotFoundError(f"Not a folder: {root_path}") from e
    except PermissionError as e:
        raise PermissionDeniedError(
            f"Permission denied reading {root_path}"
        ) from e
    except OSError as e:
        raise StorageError(f"Cannot read {root_path}: {e}") from e

    logger.debug("Scanned %s: %d entries", root_path, len(entries))
    return entries
