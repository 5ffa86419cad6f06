"""Git repository abstraction.

This module provides the Repository class for the handful of git operations
a sync needs: clone, remote inspection and rewrite, branch checkout, pull.
All operations return Result types.

Usage:
    match clone(url, root / "widgets", live=False, timeout=600.0):
        case Ok(repo):
            ...
        case Err(e):
            print(f"clone failed (exit {e.returncode}): {e.message}")

    repo = Repository(root / "widgets")
    match repo.pull():
        case Ok(_):
            print("up to date")
        case Err(e):
            print(f"pull failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from orgsync.core.result import Err, Ok, Result
from orgsync.platform.process import ProcessError
from orgsync.platform.process import run as run_process
from orgsync.platform.process import run_live

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 10 * 60.0

__all__ = [
    "GitError",
    "Repository",
    "clone",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    message = error.stderr.strip() or error.stdout.strip() or fallback
    return GitError(command=command, message=message, returncode=error.returncode)


def clone(
    url: str,
    dest: Path,
    *,
    live: bool = False,
    timeout: float = _GIT_NETWORK_TIMEOUT_SECONDS,
) -> Result[Repository, GitError]:
    """Clone ``url`` into ``dest``.

    Args:
        url: Remote URL
        dest: Target directory (must not exist; its parent must)
        live: Stream git output to the terminal instead of running quietly
        timeout: Seconds before the clone is abandoned

    Returns:
        Ok(Repository) on success, Err(GitError) on failure
    """
    if live:
        result = run_live(["git", "clone", url, str(dest)], cwd=dest.parent, timeout=timeout)
    else:
        result = run_process(
            ["git", "clone", "--quiet", url, str(dest)], cwd=dest.parent, timeout=timeout
        )
    match result:
        case Err(e):
            return Err(_git_error("clone", e, "clone failed"))
        case Ok(_):
            return Ok(Repository(dest, live=live, network_timeout=timeout))


class Repository:
    """A local working copy.

    Attributes:
        path: Path to the repository root
        live: Whether network commands stream their output
    """

    def __init__(
        self,
        path: Path,
        *,
        live: bool = False,
        network_timeout: float = _GIT_NETWORK_TIMEOUT_SECONDS,
    ) -> None:
        self.path = path
        self.live = live
        self._network_timeout = network_timeout

    def exists(self) -> bool:
        """Check if this is a valid git repository."""
        return (self.path / ".git").exists()

    def remote_url(self, remote: str = "origin") -> Result[str, GitError]:
        """Get the fetch URL of a remote."""
        match self._run(["remote", "get-url", remote]):
            case Err(e):
                return Err(_git_error("remote get-url", e, f"cannot read remote {remote}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def set_remote_url(self, url: str, remote: str = "origin") -> Result[None, GitError]:
        """Point a remote at a new URL. Local metadata only."""
        match self._run(["remote", "set-url", remote, url]):
            case Err(e):
                return Err(_git_error("remote set-url", e, f"cannot set remote {remote}"))
            case Ok(_):
                return Ok(None)

    def remotes(self) -> Result[str, GitError]:
        """Return ``git remote -v`` output."""
        match self._run(["remote", "-v"]):
            case Err(e):
                return Err(_git_error("remote -v", e, "cannot list remotes"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def checkout(self, branch: str) -> Result[None, GitError]:
        """Switch to an existing local or remote-tracking branch."""
        match self._run(["checkout", branch]):
            case Err(e):
                return Err(_git_error(f"checkout {branch}", e, "checkout failed"))
            case Ok(_):
                return Ok(None)

    def checkout_first(self, branches: tuple[str, ...]) -> str | None:
        """Check out the first branch of ``branches`` that works.

        Returns:
            The branch checked out, or None if every candidate failed
        """
        for branch in branches:
            if isinstance(self.checkout(branch), Ok):
                return branch
        return None

    def current_branch(self) -> str | None:
        """Get current branch name. None if detached HEAD or error."""
        match self._run(["rev-parse", "--abbrev-ref", "HEAD"]):
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def pull(self) -> Result[None, GitError]:
        """Pull the current branch from its upstream.

        Returns:
            Ok(None) on success
            Err(GitError) on failure (conflicts, no upstream, network, etc.)
        """
        if self.live:
            result = run_live(
                ["git", "-C", str(self.path), "pull"],
                cwd=self.path,
                timeout=self._network_timeout,
            )
        else:
            result = self._run(["pull", "--quiet"])
        match result:
            case Err(e):
                return Err(_git_error("pull", e, "pull failed"))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository, capturing its output."""
        command = args[0] if args else ""
        timeout = (
            self._network_timeout
            if command in {"fetch", "pull", "push", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
