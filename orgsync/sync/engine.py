"""Organization sync orchestration.

Ties the pieces together for one run:

    listing (page by page) -> exclusion filter -> worker pool -> synchronizer
                                     |                              |
                                     +------> OutcomeAggregator <---+

The listing runs on the calling thread; page N+1 is requested only after
every repository of page N has been dispatched (dispatch blocks while the
pool is full). A listing error stops dispatching, but work already in
flight still completes and is counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from orgsync.core.config import SyncConfig
from orgsync.core.result import Err, Ok
from orgsync.github.errors import ListingError
from orgsync.github.http import HttpClient
from orgsync.github.lister import RepositoryDescriptor, iter_org_repositories
from orgsync.output.console import ConsoleProtocol, Style
from orgsync.sync.errors import WorkerCrashed
from orgsync.sync.filter import ExclusionFilter
from orgsync.sync.outcome import Failed, OutcomeAggregator, RunSummary, Skipped, SyncOutcome
from orgsync.sync.pool import WorkerPool
from orgsync.sync.synchronizer import RepositorySynchronizer

__all__ = ["OrgSyncService", "RunReport", "Synchronizer"]


class Synchronizer(Protocol):
    def sync(self, repo: RepositoryDescriptor) -> SyncOutcome: ...


@dataclass(frozen=True, slots=True)
class RunReport:
    """What a run produced.

    Attributes:
        summary: Aggregated outcomes of every listed repository
        listing_error: Set if the listing stopped early
    """

    summary: RunSummary
    listing_error: ListingError | None = None

    @property
    def ok(self) -> bool:
        return self.listing_error is None and self.summary.ok


class OrgSyncService:
    """Clone or update every repository of one organization."""

    def __init__(
        self,
        *,
        org: str,
        root: Path,
        token: str | None,
        config: SyncConfig,
        http: HttpClient,
        console: ConsoleProtocol,
        verbose: bool = False,
        synchronizer: Synchronizer | None = None,
    ) -> None:
        self._org = org
        self._root = root
        self._token = token
        self._config = config
        self._http = http
        self._console = console
        self._verbose = verbose
        self._filter = ExclusionFilter(config.exclude)
        self._synchronizer: Synchronizer = synchronizer or RepositorySynchronizer(
            root=root,
            console=console,
            verbose=verbose,
            branches=config.branches,
            timeout=config.git_timeout,
        )

    def run(self) -> RunReport:
        self._root.mkdir(parents=True, exist_ok=True)
        self._console.print(f"Cloning repositories to: {self._root.resolve()}", Style.INFO)
        self._console.print(f"Using up to {self._config.max_parallel_jobs} parallel jobs")

        aggregator = OutcomeAggregator()
        listing_error: ListingError | None = None

        with WorkerPool(self._config.max_parallel_jobs) as pool:
            pages = iter_org_repositories(
                self._http,
                self._org,
                self._token,
                api_url=self._config.api_url,
                on_page=self._announce_page,
            )
            for page in pages:
                match page:
                    case Err(error):
                        listing_error = error
                        break
                    case Ok(repos):
                        for repo in repos:
                            self._dispatch(repo, pool, aggregator)

            if listing_error is None:
                self._console.print("No more repositories found.")
            self._console.print("Waiting for all repositories to finish processing...")

        return RunReport(summary=aggregator.snapshot(), listing_error=listing_error)

    def _announce_page(self, page: int) -> None:
        self._console.header(f"Fetching page {page} of repositories...")

    def _dispatch(
        self,
        repo: RepositoryDescriptor,
        pool: WorkerPool,
        aggregator: OutcomeAggregator,
    ) -> None:
        if self._filter.should_exclude(repo.name):
            self._console.print(f"Skipping ignored repository: {repo.name}", Style.DIM)
            aggregator.record(Skipped(repo.name))
            return
        pool.submit(self._process, repo, aggregator)

    def _process(self, repo: RepositoryDescriptor, aggregator: OutcomeAggregator) -> None:
        try:
            outcome = self._synchronizer.sync(repo)
        except Exception as e:  # noqa: BLE001
            self._console.error(f"Unexpected error while processing {repo.name}: {e}")
            outcome = Failed(repo.name, WorkerCrashed(detail=str(e)))
        aggregator.record(outcome)
