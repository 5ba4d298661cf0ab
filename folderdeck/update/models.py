# -*- coding: utf-8 -*-
"""
Update Models - Data models for the update subsystem.

Defines the UpdateState machine states, the UpdateManifest describing
an available build, and the DownloadProgress events emitted while an
artifact is fetched.

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
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UpdateState(Enum):
    """States of the update state machine.

    ::

        IDLE -> CHECKING -> NO_UPDATE | AVAILABLE
        AVAILABLE -> DOWNLOADING -> VERIFYING -> READY | FAILED
        READY -> INSTALLING -> RESTARTING | FAILED
        FAILED -> IDLE
    """

    IDLE = "idle"
    CHECKING = "checking"
    NO_UPDATE = "no_update"
    AVAILABLE = "available"
    DOWNLOADING = "downloading"
    VERIFYING = "verifying"
    READY = "ready"
    INSTALLING = "installing"
    RESTARTING = "restarting"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateManifest:
    """The latest published build for this platform.

    Attributes
    ----------
    version : str
        Version string of the build.
    download_url : str
        HTTPS URL of the update archive.
    signature : bytes
        Raw Ed25519 signature of the archive's SHA-256 digest.
    notes : Optional[str]
        Release notes for display.
    pub_date : Optional[str]
        Publication timestamp as published.
    platform : str
        Platform key the entry was selected for.
    """

    version: str
    download_url: str
    signature: bytes
    notes: Optional[str] = None
    pub_date: Optional[str] = None
    platform: str = ""


@dataclass(frozen=True)
class DownloadProgress:
    """Advisory progress of an artifact download.

    Attributes
    ----------
    downloaded : int
        Bytes received so far.
    total : Optional[int]
        Expected size from Content-Length, if the server sent one.
    """

    downloaded: int
    total: Optional[int] = None

    @property
    def fraction(self) -> Optional[float]:
        """Completion in [0, 1], or None when the size is unknown."""
        if not self.total:
            return None
        return min(1.0, self.downloaded / self.total)
