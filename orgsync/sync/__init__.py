"""Bounded-concurrency organization sync engine."""

from orgsync.sync.engine import OrgSyncService, RunReport, Synchronizer
from orgsync.sync.errors import (
    BranchCheckoutWarning,
    CloneFailure,
    PullFailure,
    RepoFailure,
    WorkerCrashed,
)
from orgsync.sync.filter import ExclusionFilter
from orgsync.sync.outcome import (
    Failed,
    FailureRecord,
    OutcomeAggregator,
    RunSummary,
    Skipped,
    Success,
    SyncOutcome,
)
from orgsync.sync.pool import WorkerPool
from orgsync.sync.synchronizer import RepositorySynchronizer

__all__ = [
    "BranchCheckoutWarning",
    "CloneFailure",
    "ExclusionFilter",
    "Failed",
    "FailureRecord",
    "OrgSyncService",
    "OutcomeAggregator",
    "PullFailure",
    "RepoFailure",
    "RepositorySynchronizer",
    "RunReport",
    "RunSummary",
    "Skipped",
    "Success",
    "SyncOutcome",
    "Synchronizer",
    "WorkerCrashed",
    "WorkerPool",
]
