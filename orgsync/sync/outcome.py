"""Per-repository outcomes and their thread-safe aggregation.

Each repository processed in a run produces exactly one outcome:

- ``Success`` - cloned or pulled
- ``Failed`` - clone/pull failed; carries the cause and exit code
- ``Skipped`` - excluded by name, never dispatched

Workers hand outcomes to a shared ``OutcomeAggregator``. Once the worker
pool has joined, ``snapshot()`` returns a frozen ``RunSummary``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from orgsync.sync.errors import RepoFailure

__all__ = [
    "FailureRecord",
    "Failed",
    "OutcomeAggregator",
    "RunSummary",
    "Skipped",
    "Success",
    "SyncOutcome",
]


@dataclass(frozen=True, slots=True)
class Success:
    name: str


@dataclass(frozen=True, slots=True)
class Failed:
    name: str
    error: RepoFailure

    @property
    def cause(self) -> str:
        return self.error.cause

    @property
    def exit_code(self) -> int:
        return self.error.returncode


@dataclass(frozen=True, slots=True)
class Skipped:
    name: str
    reason: str = "ignored"


SyncOutcome = Success | Failed | Skipped


@dataclass(frozen=True, slots=True)
class FailureRecord:
    """One entry of the failure list.

    Attributes:
        name: Repository name
        cause: Short description ("clone failed", "pull failed", ...)
        exit_code: Exit code of the failing git command
        detail: Captured stderr, if any
    """

    name: str
    cause: str
    exit_code: int
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.name} (exit code: {self.exit_code})"


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Final, read-only counters for one run."""

    total_processed: int = 0
    skipped: int = 0
    failures: tuple[FailureRecord, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> int:
        return self.total_processed - self.failed

    @property
    def total_listed(self) -> int:
        return self.total_processed + self.skipped

    @property
    def ok(self) -> bool:
        return not self.failures


class OutcomeAggregator:
    """Lock-protected accumulator fed by concurrent workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._skipped = 0
        self._failures: list[FailureRecord] = []

    def record(self, outcome: SyncOutcome) -> None:
        """Record one outcome. Safe to call from any thread."""
        with self._lock:
            match outcome:
                case Skipped():
                    self._skipped += 1
                case Success():
                    self._processed += 1
                case Failed(name=name, error=error):
                    self._processed += 1
                    self._failures.append(
                        FailureRecord(
                            name=name,
                            cause=error.cause,
                            exit_code=error.returncode,
                            detail=error.detail,
                        )
                    )

    def snapshot(self) -> RunSummary:
        with self._lock:
            return RunSummary(
                total_processed=self._processed,
                skipped=self._skipped,
                failures=tuple(self._failures),
            )
