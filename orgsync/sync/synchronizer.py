from __future__ import annotations

from pathlib import Path

from orgsync.core.config import DEFAULT_BRANCHES, DEFAULT_GIT_TIMEOUT_SECONDS
from orgsync.core.result import Err, Ok
from orgsync.git.repository import Repository, clone
from orgsync.git.urls import is_https_url, repo_dir_name, to_ssh_url
from orgsync.github.lister import RepositoryDescriptor
from orgsync.output.console import ConsoleProtocol, Style
from orgsync.sync.errors import BranchCheckoutWarning, CloneFailure, PullFailure
from orgsync.sync.outcome import Failed, Success, SyncOutcome

__all__ = ["RepositorySynchronizer"]


class RepositorySynchronizer:
    """Bring one local working copy in line with its remote.

    Policy:
    - Missing directory: clone.
    - Existing directory: rewrite an HTTPS ``origin`` to SSH, check out the
      first available branch of ``branches``, then pull.
    - Never deletes anything.

    Safe to call concurrently for different repositories; callers must not
    run two syncs of the same repository at once.
    """

    def __init__(
        self,
        *,
        root: Path,
        console: ConsoleProtocol,
        verbose: bool = False,
        branches: tuple[str, ...] = DEFAULT_BRANCHES,
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        self._root = root
        self._console = console
        self._verbose = verbose
        self._branches = branches
        self._timeout = timeout

    def target_dir(self, repo: RepositoryDescriptor) -> Path:
        return self._root / repo_dir_name(repo.clone_url)

    def sync(self, repo: RepositoryDescriptor) -> SyncOutcome:
        dest = self.target_dir(repo)
        if dest.is_dir():
            outcome = self._update(repo, dest)
        else:
            outcome = self._clone(repo, dest)

        if isinstance(outcome, Success):
            self._console.print(f"Completed processing {dest.name}", Style.DIM)
        return outcome

    def _clone(self, repo: RepositoryDescriptor, dest: Path) -> SyncOutcome:
        self._console.print(f"Cloning repository {dest.name}...")
        match clone(repo.clone_url, dest, live=self._verbose, timeout=self._timeout):
            case Err(e):
                self._console.error(f"Failed to clone {dest.name} (exit code: {e.returncode})")
                if self._verbose and e.message:
                    self._console.print(e.message, Style.DIM)
                return Failed(repo.name, CloneFailure(returncode=e.returncode, detail=e.message))
            case Ok(_):
                return Success(repo.name)

    def _update(self, repo: RepositoryDescriptor, dest: Path) -> SyncOutcome:
        self._console.print(f"Directory {dest.name} exists. Pulling latest changes...")
        local = Repository(dest, live=self._verbose, network_timeout=self._timeout)
        if not local.exists():
            self._console.error(f"{dest.name} exists but is not a git repository")
            return Failed(
                repo.name, PullFailure(returncode=128, detail=f"no .git directory in {dest}")
            )

        self._ensure_ssh_remote(local)

        if self._verbose:
            self._console.print(
                f"Checking out {'/'.join(self._branches)} branch for {dest.name}...", Style.DIM
            )
        if local.checkout_first(self._branches) is None:
            warning = BranchCheckoutWarning(repo=dest.name, branches=self._branches)
            self._console.warning(warning.message)
            current = local.current_branch() if self._verbose else None
            if current:
                self._console.print(f"Pulling {current} instead", Style.DIM)

        if self._verbose:
            match local.remotes():
                case Ok(remotes) if remotes:
                    self._console.print(remotes, Style.DIM)
                case _:
                    pass

        match local.pull():
            case Err(e):
                self._console.error(f"Failed to pull {dest.name} (exit code: {e.returncode})")
                if self._verbose and e.message:
                    self._console.print(e.message, Style.DIM)
                return Failed(repo.name, PullFailure(returncode=e.returncode, detail=e.message))
            case Ok(_):
                return Success(repo.name)

    def _ensure_ssh_remote(self, local: Repository) -> None:
        remote = local.remote_url()
        if isinstance(remote, Err):
            self._console.warning(
                f"Could not read origin of {local.path.name}: {remote.error.message}"
            )
            return

        current = remote.value
        if not is_https_url(current):
            return

        ssh_url = to_ssh_url(current)
        if self._verbose:
            self._console.print(
                f"Converting remote from HTTPS to SSH: {current} -> {ssh_url}", Style.DIM
            )
        result = local.set_remote_url(ssh_url)
        if isinstance(result, Err):
            self._console.warning(
                f"Could not update origin of {local.path.name}: {result.error.message}"
            )
