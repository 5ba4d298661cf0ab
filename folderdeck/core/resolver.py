# -*- coding: utf-8 -*-
"""
Settings Path Resolver - Locate the persisted settings file.

Resolves the settings file path from environment variable or the
default location under ~/.folderdeck/.

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
import os
from pathlib import Path


_ENV_VAR = "FOLDERDECK_SETTINGS_PATH"
_CONFIG_DIR = ".folderdeck"
_DEFAULT_SETTINGS = "settings.json"
_USER_SCAFFOLDS = "scaffolds.yaml"


def resolve_settings_path() -> Path:
    """Resolve the settings file path.

    Priority:
    1. ``FOLDERDECK_SETTINGS_PATH`` environment variable
    2. ``~/.folderdeck/settings.json`` (default)

    Returns
    -------
    Path
        Resolved path to the settings file.
    """
    env_path = os.environ.get(_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path.home() / _CONFIG_DIR / _DEFAULT_SETTINGS


def resolve_user_scaffolds_path() -> Path:
    """Path of the optional user scaffold definitions file."""
    return Path.home() / _CONFIG_DIR / _USER_SCAFFOLDS
