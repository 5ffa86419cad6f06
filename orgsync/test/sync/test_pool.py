"""Tests for sync/pool.py - bounded worker pool."""

from __future__ import annotations

import threading
import time

import pytest

from orgsync.sync.pool import WorkerPool


class _Tracker:
    """Counts concurrent calls and remembers the highest count seen."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.lock = threading.Lock()
        self.active = 0
        self.peak = 0
        self.done: list[int] = []

    def __call__(self, item: int) -> int:
        with self.lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(self.delay)
        with self.lock:
            self.active -= 1
            self.done.append(item)
        return item


class TestWorkerPool:
    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError):
            WorkerPool(0)

    def test_runs_everything(self) -> None:
        tracker = _Tracker(delay=0.001)
        with WorkerPool(4) as pool:
            futures = [pool.submit(tracker, i) for i in range(40)]

        assert sorted(tracker.done) == list(range(40))
        assert [f.result() for f in futures] == list(range(40))

    @pytest.mark.parametrize("cap", [1, 3, 5])
    def test_never_exceeds_cap(self, cap: int) -> None:
        tracker = _Tracker(delay=0.02)
        pool = WorkerPool(cap)
        for i in range(cap * 4):
            pool.submit(tracker, i)
            assert pool.active <= cap
        pool.join()

        assert tracker.peak <= cap
        assert pool.peak <= cap

    def test_reaches_cap(self) -> None:
        tracker = _Tracker(delay=0.1)
        with WorkerPool(3) as pool:
            for i in range(6):
                pool.submit(tracker, i)

        assert tracker.peak == 3

    def test_submit_blocks_while_full(self) -> None:
        release = threading.Event()
        pool = WorkerPool(1)
        pool.submit(release.wait)

        submitted = threading.Event()

        def second() -> None:
            pool.submit(lambda: None)
            submitted.set()

        t = threading.Thread(target=second)
        t.start()
        assert not submitted.wait(0.2)

        release.set()
        assert submitted.wait(2.0)
        t.join()
        pool.join()

    def test_slot_freed_after_exception(self) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        pool = WorkerPool(1)
        failing = pool.submit(boom)
        after = pool.submit(lambda: "ok")
        pool.join()

        assert isinstance(failing.exception(), RuntimeError)
        assert after.result() == "ok"
        assert pool.active == 0

    def test_join_waits_for_all(self) -> None:
        tracker = _Tracker(delay=0.05)
        pool = WorkerPool(2)
        for i in range(4):
            pool.submit(tracker, i)
        pool.join()

        assert len(tracker.done) == 4
        assert pool.active == 0

    def test_submit_after_join(self) -> None:
        pool = WorkerPool(1)
        pool.join()
        with pytest.raises(RuntimeError):
            pool.submit(lambda: None)
