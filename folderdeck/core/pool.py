# -*- coding: utf-8 -*-
"""
ThreadExecutorPool - Thread pool for background FolderDeck operations.

Provides a managed thread pool for running catalog scans, update checks
and update downloads in the background without blocking the UI.

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
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


class ThreadExecutorPool:
    """Manages a pool of worker threads for background operations.

    Parameters
    ----------
    max_workers : int
        Maximum number of concurrent threads. Default 4.
    """

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="folderdeck",
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Submit a callable to run in the background.

        Parameters
        ----------
        fn : Callable
            Callable to run.
        *args, **kwargs
            Forwarded to ``fn``.

        Returns
        -------
        Future
            Future resolving to the callable's return value.
        """
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the thread pool.

        Parameters
        ----------
        wait : bool
            If True, wait for running tasks to complete.
        """
        if self._closed:
            return
        self._closed = True
        logger.debug("Shutting down worker pool (wait=%s)", wait)
        self._executor.shutdown(wait=wait)
