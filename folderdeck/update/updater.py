# -*- coding: utf-8 -*-
"""
Application Updater - Check for, verify, and install signed builds.

Drives the update state machine::

    IDLE -> CHECKING -> NO_UPDATE | AVAILABLE
    AVAILABLE -(confirm)-> DOWNLOADING -> VERIFYING -> READY | FAILED
    READY -> INSTALLING -> RESTARTING | FAILED
    FAILED -> IDLE

An available update is never downloaded until the user confirms it.
Every failure leaves the running application untouched and returns the
machine to IDLE. Download progress is reported through a generator of
DownloadProgress events that the UI may consume or ignore.

Dependencies
------------
requests
packaging
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
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

# Third-party
import requests
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

logger = logging.getLogger(__name__)

# FolderDeck internal
from folderdeck.core.config import DEFAULT_MANIFEST_URL
from folderdeck.errors import (
    FolderDeckError,
    NetworkError,
    SignatureVerificationFailed,
    StorageError,
    UpdateStateError,
)
from folderdeck.update.installer import BundleInstaller, default_bundle_dir, relaunch
from folderdeck.update.manifest import current_platform_key, is_newer, parse_manifest
from folderdeck.update.models import DownloadProgress, UpdateManifest, UpdateState
from folderdeck.update.verifier import load_public_key, verify_file


_CHUNK_SIZE = 1024 * 64

StateListener = Callable[[UpdateState], None]
ProgressCallback = Callable[[DownloadProgress], None]

_CHECKABLE = (
    UpdateState.IDLE,
    UpdateState.NO_UPDATE,
    UpdateState.AVAILABLE,
    UpdateState.FAILED,
)


class Updater:
    """Update state machine for the running application.

    Parameters
    ----------
    current_version : str
        Version of the running build.
    manifest_url : str
        HTTPS endpoint serving the latest manifest.
    timeout : float
        HTTP timeout for the manifest fetch in seconds. Default 10.0.
    download_timeout : float
        Per-read HTTP timeout for the artifact download. Default 60.0.
    installer : Optional[BundleInstaller]
        Installer for verified archives. Defaults to one targeting the
        frozen application bundle, if there is one.
    public_key : Optional[Ed25519PublicKey]
        Release verification key. Defaults to the bundled key.
    platform_key : Optional[str]
        Manifest platform entry to use. Defaults to this machine.
    restart : Optional[Callable[[], None]]
        Relaunches the process after install. Defaults to ``relaunch``.
    """

    def __init__(
        self,
        current_version: str,
        manifest_url: str = DEFAULT_MANIFEST_URL,
        timeout: float = 10.0,
        download_timeout: float = 60.0,
        installer: Optional[BundleInstaller] = None,
        public_key: Optional[Ed25519PublicKey] = None,
        platform_key: Optional[str] = None,
        restart: Optional[Callable[[], None]] = None,
    ) -> None:
        self.current_version = current_version
        self._manifest_url = manifest_url
        self._timeout = timeout
        self._download_timeout = download_timeout
        self._installer = installer
        self._public_key = public_key
        self._platform_key = platform_key or current_platform_key()
        self._restart = restart or relaunch

        self._lock = threading.Lock()
        self._state = UpdateState.IDLE
        self._manifest: Optional[UpdateManifest] = None
        self._confirmed = False
        self._artifact: Optional[Path] = None
        self._listeners: List[StateListener] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> UpdateState:
        with self._lock:
            return self._state

    @property
    def manifest(self) -> Optional[UpdateManifest]:
        """Manifest of the available update, once one has been found."""
        return self._manifest

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every new state."""
        self._listeners.append(listener)

    def _transition(
        self,
        state: UpdateState,
        allowed: Optional[Tuple[UpdateState, ...]] = None,
    ) -> None:
        """Move to ``state`` and notify listeners.

        With ``allowed``, the current state is checked and replaced in
        one step, so two callers racing for the same step cannot both
        win.
        """
        with self._lock:
            previous = self._state
            if allowed is not None and previous not in allowed:
                raise UpdateStateError(
                    f"Cannot do this while update is {previous.value}"
                )
            self._state = state
        logger.debug("Update state %s -> %s", previous.value, state.value)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Update listener failed")

    def _require(self, *states: UpdateState) -> None:
        current = self.state
        if current not in states:
            raise UpdateStateError(
                f"Cannot do this while update is {current.value}"
            )

    def _abort(self) -> None:
        """Discard any download and return to IDLE."""
        self._discard_artifact()
        self._manifest = None
        self._confirmed = False
        self._transition(UpdateState.IDLE)

    def _discard_artifact(self) -> None:
        if self._artifact is not None:
            try:
                self._artifact.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove %s: %s", self._artifact, e)
            self._artifact = None

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------

    def check_for_update(self) -> Optional[UpdateManifest]:
        """Fetch the manifest and report a newer build, if any.

        Returns
        -------
        Optional[UpdateManifest]
            The newer build, or None when this build is current or the
            manifest has nothing for this platform.

        Raises
        ------
        NetworkError
            If the manifest cannot be fetched or parsed. The machine
            returns to IDLE.
        UpdateStateError
            If an update is already being downloaded or installed.
        """
        self._transition(UpdateState.CHECKING, allowed=_CHECKABLE)
        self._discard_artifact()
        self._manifest = None
        self._confirmed = False

        try:
            resp = requests.get(
                self._manifest_url,
                timeout=self._timeout,
                headers={'Accept': 'application/json'},
            )
            resp.raise_for_status()
            manifest = parse_manifest(resp.json(), self._platform_key)
        except requests.RequestException as e:
            logger.warning("Update check failed: %s", e)
            self._transition(UpdateState.IDLE)
            raise NetworkError(f"Could not reach the update server: {e}") from e
        except ValueError as e:
            logger.warning("Update manifest rejected: %s", e)
            self._transition(UpdateState.IDLE)
            raise NetworkError(f"Update server sent an invalid manifest: {e}") from e

        if manifest is None or not is_newer(self.current_version, manifest.version):
            logger.info("No update available (running %s)", self.current_version)
            self._transition(UpdateState.NO_UPDATE)
            return None

        logger.info(
            "Update available: %s -> %s", self.current_version, manifest.version
        )
        self._manifest = manifest
        self._transition(UpdateState.AVAILABLE)
        return manifest

    def confirm(self) -> None:
        """Record the user's consent to download the available update.

        Raises
        ------
        UpdateStateError
            If no update is available.
        """
        self._require(UpdateState.AVAILABLE)
        self._confirmed = True

    def decline(self) -> None:
        """Dismiss the available update."""
        self._require(UpdateState.AVAILABLE)
        self._abort()

    # ------------------------------------------------------------------
    # Downloading
    # ------------------------------------------------------------------

    def iter_download(self) -> Iterator[DownloadProgress]:
        """Download the confirmed update, yielding progress events.

        The artifact is complete once the generator is exhausted.

        Raises
        ------
        UpdateStateError
            If no update is available or it was not confirmed.
        NetworkError
            If the transfer fails. The machine returns to IDLE.
        """
        self._require(UpdateState.AVAILABLE)
        if not self._confirmed:
            raise UpdateStateError("Update must be confirmed before downloading")
        manifest = self._manifest
        self._transition(UpdateState.DOWNLOADING, allowed=(UpdateState.AVAILABLE,))

        fd, tmp_name = tempfile.mkstemp(prefix="folderdeck-update-")
        self._artifact = Path(tmp_name)
        try:
            with os.fdopen(fd, 'wb') as f:
                with requests.get(
                    manifest.download_url,
                    stream=True,
                    timeout=self._download_timeout,
                ) as resp:
                    resp.raise_for_status()
                    total = _content_length(resp)
                    written = 0
                    yield DownloadProgress(0, total)
                    for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                        if not chunk:
                            continue
                        f.write(chunk)
                        written += len(chunk)
                        yield DownloadProgress(written, total)
            if total is not None and written != total:
                raise NetworkError(
                    f"Download incomplete: expected {total} bytes, got {written}"
                )
        except requests.RequestException as e:
            logger.warning("Update download failed: %s", e)
            self._abort()
            raise NetworkError(f"Update download failed: {e}") from e
        except NetworkError:
            self._abort()
            raise
        except OSError as e:
            logger.warning("Could not store update download: %s", e)
            self._abort()
            raise StorageError(f"Could not store update download: {e}") from e
        except GeneratorExit:
            self._abort()
            raise

        logger.info("Downloaded update %s (%d bytes)", manifest.version, written)

    # ------------------------------------------------------------------
    # Verifying / installing
    # ------------------------------------------------------------------

    def verify(self) -> None:
        """Check the downloaded artifact against the release key.

        Raises
        ------
        SignatureVerificationFailed
            If the signature does not match. The download is discarded
            and the machine returns to IDLE.
        """
        if self._artifact is None:
            raise UpdateStateError("No downloaded update to verify")
        self._transition(UpdateState.VERIFYING, allowed=(UpdateState.DOWNLOADING,))

        try:
            key = self._public_key or load_public_key()
            verify_file(self._artifact, self._manifest.signature, key)
        except (SignatureVerificationFailed, ValueError, OSError) as e:
            logger.warning("Update verification failed: %s", e)
            self._transition(UpdateState.FAILED)
            self._abort()
            if isinstance(e, SignatureVerificationFailed):
                raise
            raise SignatureVerificationFailed(
                f"Could not verify update: {e}"
            ) from e

        logger.info("Update %s verified", self._manifest.version)
        self._transition(UpdateState.READY)

    def install(self) -> None:
        """Install the verified update over the application bundle.

        Raises
        ------
        UpdateStateError
            If no verified update is ready or there is no bundle to
            replace.
        StorageError
            If the install fails. The previous build is kept.
        """
        self._require(UpdateState.READY)
        installer = self._installer
        if installer is None:
            bundle = default_bundle_dir()
            if bundle is None:
                self._abort()
                raise UpdateStateError(
                    "This build cannot update itself; install the new version manually"
                )
            installer = BundleInstaller(bundle)

        self._transition(UpdateState.INSTALLING, allowed=(UpdateState.READY,))
        try:
            installer.install(self._artifact)
        except Exception as e:
            logger.error("Update install failed: %s", e)
            self._transition(UpdateState.FAILED)
            self._abort()
            if isinstance(e, FolderDeckError):
                raise
            raise StorageError(f"Cannot install update: {e}") from e
        self._discard_artifact()

    def restart(self) -> None:
        """Relaunch into the freshly installed build."""
        self._transition(UpdateState.RESTARTING, allowed=(UpdateState.INSTALLING,))
        self._restart()

    def download_and_install(
        self,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        """Download, verify, install, and restart.

        Parameters
        ----------
        on_progress : Optional[Callable[[DownloadProgress], None]]
            Receives each progress event. Errors raised by the callback
            are logged and otherwise ignored.
        """
        for event in self.iter_download():
            if on_progress is None:
                continue
            try:
                on_progress(event)
            except Exception:
                logger.exception("Progress callback failed")
        self.verify()
        self.install()
        self.restart()


def _content_length(resp) -> Optional[int]:
    header = resp.headers.get('Content-Length')
    try:
        return int(header) if header is not None else None
    except ValueError:
        return None
