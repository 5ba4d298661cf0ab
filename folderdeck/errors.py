# -*- coding: utf-8 -*-
"""
Errors - Exception taxonomy for FolderDeck.

Every failure the core reports to the embedding UI derives from
FolderDeckError and carries a message suitable for display. OS-level
exceptions are translated at the boundary with ``raise ... from exc``.

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
from typing import List, Optional


class FolderDeckError(Exception):
    """Base class for all FolderDeck errors."""


class NotFoundError(FolderDeckError):
    """A path does not exist or is not a directory."""


class PermissionDeniedError(FolderDeckError):
    """A path exists but cannot be read or written."""


class InvalidNameError(FolderDeckError):
    """A user-entered name sanitizes to nothing, or names an unknown type."""


class AlreadyExistsError(FolderDeckError):
    """The target of a create operation already exists."""


class StorageError(FolderDeckError):
    """Any other filesystem failure."""


class ScaffoldError(StorageError):
    """Scaffold files could not be written into a freshly created item.

    The item directory itself exists and is left in place.

    Parameters
    ----------
    message : str
        Human-readable description.
    path : str
        Absolute path of the created item directory.
    files_written : Optional[List[str]]
        Relative paths written before the failure.
    """

    def __init__(
        self,
        message: str,
        path: str,
        files_written: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.files_written = files_written or []


class NetworkError(FolderDeckError):
    """A manifest fetch or artifact download failed in transport."""


class SignatureVerificationFailed(FolderDeckError):
    """A downloaded update does not match its published signature."""


class UpdateStateError(FolderDeckError):
    """An update operation was requested from the wrong state."""
