from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CloneFailure:
    returncode: int
    detail: str = ""

    @property
    def cause(self) -> str:
        return "clone failed"


@dataclass(frozen=True, slots=True)
class PullFailure:
    returncode: int
    detail: str = ""

    @property
    def cause(self) -> str:
        return "pull failed"


@dataclass(frozen=True, slots=True)
class WorkerCrashed:
    """A synchronizer call raised instead of returning an outcome."""

    detail: str
    returncode: int = -1

    @property
    def cause(self) -> str:
        return "unexpected error"


@dataclass(frozen=True, slots=True)
class BranchCheckoutWarning:
    """None of the candidate branches could be checked out. Not fatal."""

    repo: str
    branches: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Could not checkout {'/'.join(self.branches)} branch for {self.repo}"


RepoFailure = CloneFailure | PullFailure | WorkerCrashed
