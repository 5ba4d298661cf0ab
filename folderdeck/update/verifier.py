# -*- coding: utf-8 -*-
"""
Signature Verifier - Check downloaded updates against the bundled key.

Update archives are signed with Ed25519 over the SHA-256 digest of the
archive bytes. The public half of the release key ships with the
application in ``pubkey.txt`` as base64 of the 32 raw key bytes.

Dependencies
------------
cryptography

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
import hashlib
from pathlib import Path
from typing import Optional, Union

# Third-party
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

# FolderDeck internal
from folderdeck.errors import SignatureVerificationFailed


BUNDLED_PUBLIC_KEY = Path(__file__).with_name("pubkey.txt")

_CHUNK_SIZE = 1024 * 64


def load_public_key(key: Optional[Union[str, bytes]] = None) -> Ed25519PublicKey:
    """Load an Ed25519 public key.

    Parameters
    ----------
    key : Optional[Union[str, bytes]]
        Base64 text or 32 raw bytes. Defaults to the bundled key.

    Returns
    -------
    Ed25519PublicKey

    Raises
    ------
    ValueError
        If the key is not a valid Ed25519 public key.
    """
    if key is None:
        key = BUNDLED_PUBLIC_KEY.read_text(encoding='utf-8')
    if isinstance(key, str):
        try:
            key = base64.b64decode(key.strip(), validate=True)
        except binascii.Error as e:
            raise ValueError("Public key is not valid base64") from e
    return Ed25519PublicKey.from_public_bytes(key)


def file_digest(path: Path) -> bytes:
    """SHA-256 digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.digest()


def verify_file(
    path: Path,
    signature: bytes,
    public_key: Ed25519PublicKey,
) -> None:
    """Verify ``signature`` over the SHA-256 digest of ``path``.

    Raises
    ------
    SignatureVerificationFailed
        If the signature is malformed or does not match.
    """
    if len(signature) != 64:
        raise SignatureVerificationFailed(
            "Update signature is malformed; the download was discarded"
        )
    try:
        public_key.verify(signature, file_digest(path))
    except InvalidSignature as e:
        raise SignatureVerificationFailed(
            "Update signature does not match; the download was discarded"
        ) from e
