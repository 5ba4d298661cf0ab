# -*- coding: utf-8 -*-
"""
Update Manifest - Parse the remote manifest document.

The manifest is a JSON document served from a fixed, versioned HTTPS
endpoint::

    {
      "version": "1.4.0",
      "notes": "Bug fixes",
      "pub_date": "2026-10-01T12:00:00Z",
      "platforms": {
        "linux-x86_64": {"url": "https://...", "signature": "<base64>"},
        "darwin-aarch64": {"url": "https://...", "signature": "<base64>"}
      }
    }

Dependencies
------------
packaging

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
import base64
import binascii
import logging
import platform
import sys
from typing import Any, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Third-party
from packaging.version import InvalidVersion, Version

# FolderDeck internal
from folderdeck.update.models import UpdateManifest


_ARCH_ALIASES = {
    'amd64': 'x86_64',
    'x86_64': 'x86_64',
    'x64': 'x86_64',
    'arm64': 'aarch64',
    'aarch64': 'aarch64',
    'i386': 'i686',
    'i686': 'i686',
    'x86': 'i686',
}


def current_platform_key() -> str:
    """Manifest key for this machine, e.g. ``'linux-x86_64'``."""
    if sys.platform.startswith('win'):
        os_name = 'windows'
    elif sys.platform == 'darwin':
        os_name = 'darwin'
    else:
        os_name = 'linux'
    machine = platform.machine().lower()
    return f"{os_name}-{_ARCH_ALIASES.get(machine, machine)}"


def is_newer(current: str, latest: str) -> bool:
    """Compare version strings.

    Parameters
    ----------
    current : str
    latest : str

    Returns
    -------
    bool
        True if latest is newer than current. Unparseable versions are
        never newer.
    """
    try:
        return Version(latest) > Version(current)
    except InvalidVersion:
        return False


def decode_signature(text: str) -> bytes:
    """Decode a base64 signature; undecodable input yields ``b''``."""
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Manifest signature is not valid base64")
        return b''


def parse_manifest(data: Any, platform_key: str) -> Optional[UpdateManifest]:
    """Build an UpdateManifest for ``platform_key``.

    Parameters
    ----------
    data : Any
        Decoded JSON document.
    platform_key : str
        Platform entry to select.

    Returns
    -------
    Optional[UpdateManifest]
        None if the manifest has no build for this platform.

    Raises
    ------
    ValueError
        If the document is malformed or a download URL is not HTTPS.
    """
    if not isinstance(data, dict):
        raise ValueError("Manifest must be a JSON object")

    version = data.get('version')
    if not isinstance(version, str):
        raise ValueError("Manifest is missing 'version'")
    try:
        Version(version)
    except InvalidVersion as e:
        raise ValueError(f"Invalid manifest version {version!r}") from e

    platforms = data.get('platforms')
    if not isinstance(platforms, dict):
        raise ValueError("Manifest is missing 'platforms'")

    entry = platforms.get(platform_key)
    if entry is None:
        logger.info("Manifest %s has no build for %s", version, platform_key)
        return None
    if not isinstance(entry, dict):
        raise ValueError(f"Platform entry {platform_key!r} must be an object")

    url = entry.get('url')
    signature = entry.get('signature')
    if not isinstance(url, str) or not isinstance(signature, str):
        raise ValueError(
            f"Platform entry {platform_key!r} needs 'url' and 'signature'"
        )
    if urlparse(url).scheme != 'https':
        raise ValueError(f"Refusing non-HTTPS download URL: {url}")

    notes = data.get('notes')
    pub_date = data.get('pub_date')
    return UpdateManifest(
        version=version,
        download_url=url,
        signature=decode_signature(signature),
        notes=notes if isinstance(notes, str) else None,
        pub_date=pub_date if isinstance(pub_date, str) else None,
        platform=platform_key,
    )
