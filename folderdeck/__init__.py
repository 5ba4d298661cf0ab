# -*- coding: utf-8 -*-
"""
FolderDeck - A personal catalog of the folders under one root.

Treats every immediate subdirectory of a chosen root as a catalog item,
remembers the root between runs, creates new items with sanitized
names and optional scaffolds, and keeps itself up to date from signed
releases.

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

__version__ = "0.3.1"
__author__ = "Duane Smalley, PhD"


def create_app(**kwargs):
    """Build a FolderDeckApp.

    Re-exported from ``folderdeck.app``.
    See :class:`folderdeck.app.FolderDeckApp` for full documentation.
    """
    from folderdeck.app import FolderDeckApp
    return FolderDeckApp(**kwargs)


__all__: list = ["create_app"]
