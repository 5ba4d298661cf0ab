# -*- coding: utf-8 -*-
"""
Configuration Module - Configurable defaults for FolderDeck.

Provides a DeckConfig dataclass with default values for the update
endpoint, network timeouts, worker counts, and the fallback catalog
root. Loads from ~/.folderdeck/folderdeck_config.json if it exists,
otherwise uses sensible defaults.

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
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".folderdeck"
_CONFIG_FILE = _CONFIG_DIR / "folderdeck_config.json"

DEFAULT_MANIFEST_URL = "https://updates.folderdeck.app/v1/latest.json"


@dataclass
class DeckConfig:
    """Global FolderDeck configuration with defaults.

    Attributes
    ----------
    manifest_url : str
        HTTPS endpoint serving the latest update manifest.
    update_timeout : float
        HTTP timeout for the manifest fetch in seconds.
    download_timeout : float
        Per-read HTTP timeout for artifact downloads in seconds.
    max_workers : int
        Maximum worker threads for background operations.
    default_root : str
        Catalog root used when none has been persisted yet.
    check_updates_on_start : bool
        Submit an update check when the application starts.
    autosave_settings : bool
        Write settings back to disk whenever a value changes.
    """

    manifest_url: str = DEFAULT_MANIFEST_URL
    update_timeout: float = 10.0
    download_timeout: float = 60.0
    max_workers: int = 4
    default_root: str = "~/src"
    check_updates_on_start: bool = True
    autosave_settings: bool = True

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = path or _CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)

    def default_root_path(self) -> Optional[Path]:
        """Expanded default root, or None if it is not an existing directory."""
        if not self.default_root:
            return None
        path = Path(self.default_root).expanduser()
        return path if path.is_dir() else None


def load_config(path: Optional[Path] = None) -> DeckConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to
        ~/.folderdeck/folderdeck_config.json.

    Returns
    -------
    DeckConfig
        Loaded or default configuration.
    """
    path = path or _CONFIG_FILE
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return DeckConfig(**{
                k: v for k, v in data.items()
                if k in DeckConfig.__dataclass_fields__
            })
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return DeckConfig()
