# -*- coding: utf-8 -*-
"""
Name Sanitization - Derive a filesystem-safe slug from user input.

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
import re


_DISALLOWED = re.compile(r'[^a-z0-9 -]')
_WHITESPACE_RUN = re.compile(r'\s+')
_HYPHEN_RUN = re.compile(r'-+')


def sanitize_name(raw: str) -> str:
    """Convert user-entered text into a slug.

    Steps, in order: lowercase and trim; drop every character outside
    ``[a-z0-9 -]``; collapse whitespace runs to one hyphen; collapse
    hyphen runs to one hyphen; strip leading and trailing hyphens.

    Parameters
    ----------
    raw : str
        Text as typed by the user.

    Returns
    -------
    str
        The slug. May be empty.

    Examples
    --------
    >>> sanitize_name("My Game!!")
    'my-game'
    >>> sanitize_name("   ")
    ''
    """
    slug = raw.lower().strip()
    slug = _DISALLOWED.sub('', slug)
    slug = _WHITESPACE_RUN.sub('-', slug)
    slug = _HYPHEN_RUN.sub('-', slug)
    return slug.strip('-')
