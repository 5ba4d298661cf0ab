# -*- coding: utf-8 -*-
"""
Application State - Explicit UI-facing state owned by the shell.

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
from typing import List, Optional

# FolderDeck internal
from folderdeck.catalog.models import CatalogEntry
from folderdeck.errors import FolderDeckError
from folderdeck.update.models import UpdateManifest, UpdateState


@dataclass
class AppState:
    """Snapshot of everything the UI renders.

    Attributes
    ----------
    selected_root : Optional[str]
        Current catalog root.
    entries : List[CatalogEntry]
        Ordered catalog from the most recent accepted scan.
    loading : bool
        True while a scan for ``selected_root`` is in flight.
    scan_error : Optional[FolderDeckError]
        Failure of the most recent accepted catalog scan. Replaced by
        every scan commit.
    operation_error : Optional[FolderDeckError]
        Failure of the last user action (creation or update). Kept
        until the next action succeeds or the user dismisses it, so a
        follow-up scan never hides it.
    update_state : UpdateState
        Current state of the update machine.
    available_update : Optional[UpdateManifest]
        Build offered to the user, if any.
    """

    selected_root: Optional[str] = None
    entries: List[CatalogEntry] = field(default_factory=list)
    loading: bool = False
    scan_error: Optional[FolderDeckError] = None
    operation_error: Optional[FolderDeckError] = None
    update_state: UpdateState = UpdateState.IDLE
    available_update: Optional[UpdateManifest] = None

    @property
    def error(self) -> Optional[FolderDeckError]:
        """Error to show: the last failed action, else the scan failure."""
        return self.operation_error or self.scan_error
