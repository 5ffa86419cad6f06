"""Bounded worker pool.

A ``ThreadPoolExecutor`` paired with a counting semaphore. ``submit`` blocks
the caller once ``max_workers`` items are in flight and returns as soon as
one of them finishes, so work is never queued inside the executor and the
producer (the paginated listing) is throttled to the workers' pace.

Usage:
    with WorkerPool(max_workers=5) as pool:
        for repo in repos:
            pool.submit(synchronizer.sync, repo)
    # leaving the block joins every dispatched item
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from types import TracebackType
from typing import Any

from orgsync.core.config import DEFAULT_MAX_PARALLEL_JOBS

__all__ = ["WorkerPool"]


class WorkerPool:
    """Run callables on threads with at most ``max_workers`` in flight."""

    def __init__(self, max_workers: int = DEFAULT_MAX_PARALLEL_JOBS) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._max_workers = max_workers
        self._permits = threading.BoundedSemaphore(max_workers)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="orgsync-worker"
        )
        self._futures: list[Future[Any]] = []
        self._lock = threading.Lock()
        self._active = 0
        self._peak = 0
        self._closed = False

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def active(self) -> int:
        """Items currently running."""
        with self._lock:
            return self._active

    @property
    def peak(self) -> int:
        """Highest number of items that were ever running at once."""
        with self._lock:
            return self._peak

    def submit[T](self, fn: Callable[..., T], /, *args: object) -> Future[T]:
        """Dispatch ``fn(*args)``, blocking while the pool is full.

        Raises:
            RuntimeError: If called after ``join()``.
        """
        if self._closed:
            raise RuntimeError("cannot submit to a joined WorkerPool")

        self._permits.acquire()
        try:
            future = self._executor.submit(self._run, fn, *args)
        except BaseException:
            self._permits.release()
            raise

        with self._lock:
            self._futures.append(future)
        return future

    def join(self) -> None:
        """Block until every dispatched item has completed, then shut down."""
        self._closed = True
        with self._lock:
            pending = list(self._futures)
        wait(pending)
        self._executor.shutdown(wait=True)

    def _run[T](self, fn: Callable[..., T], *args: object) -> T:
        with self._lock:
            self._active += 1
            self._peak = max(self._peak, self._active)
        try:
            return fn(*args)
        finally:
            with self._lock:
                self._active -= 1
            self._permits.release()

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.join()
