# -*- coding: utf-8 -*-
"""
Catalog Models - Data models for catalog entries and created items.

Defines the CatalogEntry produced by a root scan and the CreateResult
returned when a new item is created.

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
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass(frozen=True)
class CatalogEntry:
    """One immediate subdirectory of the catalog root.

    Entries are derived entirely from the filesystem and never mutated;
    every scan produces a fresh list.

    Attributes
    ----------
    name : str
        Directory name.
    path : str
        Absolute path. Unique within one scan result.
    last_modified : Optional[float]
        POSIX modification time in seconds, if known.
    """

    name: str
    path: str
    last_modified: Optional[float] = None

    @property
    def modified_at(self) -> Optional[datetime]:
        """``last_modified`` as an aware UTC datetime."""
        if self.last_modified is None:
            return None
        return datetime.fromtimestamp(self.last_modified, tz=timezone.utc)


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful item creation.

    Attributes
    ----------
    name : str
        Sanitized directory name (the slug).
    path : str
        Absolute path of the new directory.
    item_type : Optional[str]
        Scaffold type applied, if any.
    files_written : List[str]
        Scaffold files written, relative to ``path``.
    """

    name: str
    path: str
    item_type: Optional[str] = None
    files_written: List[str] = field(default_factory=list)
