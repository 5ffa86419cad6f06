"""Tests for sync/synchronizer.py against real local git remotes."""

from __future__ import annotations

from pathlib import Path

from orgsync.github.lister import RepositoryDescriptor
from orgsync.output.console import MockConsole
from orgsync.sync.errors import CloneFailure, PullFailure
from orgsync.sync.outcome import Failed, Success
from orgsync.sync.synchronizer import RepositorySynchronizer
from orgsync.test.conftest import RemoteFactory, commit_file, git, requires_git


def _synchronizer(root: Path, console: MockConsole, **kwargs: object) -> RepositorySynchronizer:
    root.mkdir(parents=True, exist_ok=True)
    return RepositorySynchronizer(root=root, console=console, **kwargs)  # type: ignore[arg-type]


class TestTargetDir:
    def test_named_after_url(self, tmp_path: Path) -> None:
        sync = RepositorySynchronizer(root=tmp_path, console=MockConsole())
        repo = RepositoryDescriptor("widgets", "git@github.com:acme/widgets.git")
        assert sync.target_dir(repo) == tmp_path / "widgets"


@requires_git
class TestClone:
    def test_clones_missing_repository(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, _ = make_remote("widgets")
        console = MockConsole()
        root = tmp_path / "acme"

        outcome = _synchronizer(root, console).sync(RepositoryDescriptor("widgets", url))

        assert outcome == Success("widgets")
        assert (root / "widgets" / "hello.txt").read_text(encoding="utf-8") == "v1\n"
        assert console.find("Cloning repository widgets")
        assert console.find("Completed processing widgets")

    def test_clone_failure_is_recorded(self, tmp_path: Path) -> None:
        console = MockConsole()
        root = tmp_path / "acme"
        missing = (tmp_path / "remotes" / "A.git").as_uri()

        outcome = _synchronizer(root, console).sync(RepositoryDescriptor("A", missing))

        assert isinstance(outcome, Failed)
        assert outcome.cause == "clone failed"
        assert outcome.exit_code == 128
        assert isinstance(outcome.error, CloneFailure)
        assert console.has_error()
        assert not console.find("Completed processing")


@requires_git
class TestUpdate:
    def test_pulls_existing_repository(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, seed = make_remote("widgets")
        console = MockConsole()
        root = tmp_path / "acme"
        sync = _synchronizer(root, console)
        repo = RepositoryDescriptor("widgets", url)
        assert sync.sync(repo) == Success("widgets")

        commit_file(seed, "v2\n")
        console.clear()

        assert sync.sync(repo) == Success("widgets")
        assert (root / "widgets" / "hello.txt").read_text(encoding="utf-8") == "v2\n"
        assert console.find("Directory widgets exists. Pulling latest changes...")
        assert not console.has_warning()

    def test_idempotent_when_up_to_date(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, _ = make_remote("widgets")
        root = tmp_path / "acme"
        sync = _synchronizer(root, MockConsole())
        repo = RepositoryDescriptor("widgets", url)

        assert sync.sync(repo) == Success("widgets")
        marker = root / "widgets" / "untracked.txt"
        marker.write_text("keep me\n", encoding="utf-8")

        assert sync.sync(repo) == Success("widgets")
        assert sync.sync(repo) == Success("widgets")
        assert marker.read_text(encoding="utf-8") == "keep me\n"

    def test_rewrites_https_origin_to_ssh(
        self, tmp_path: Path, make_remote: RemoteFactory
    ) -> None:
        url, seed = make_remote("widgets")
        root = tmp_path / "acme"
        sync = _synchronizer(root, MockConsole(), verbose=True)
        repo = RepositoryDescriptor("widgets", url)
        assert sync.sync(repo) == Success("widgets")

        work = root / "widgets"
        git(work, "remote", "set-url", "origin", "https://github.com/acme/widgets.git")
        # route the rewritten SSH URL back to the local bare repo
        remotes = (tmp_path / "remotes").as_uri() + "/"
        git(work, "config", f"url.{remotes}.insteadOf", "git@github.com:acme/")
        commit_file(seed, "v2\n")

        console = MockConsole()
        sync = _synchronizer(root, console, verbose=True)
        assert sync.sync(repo) == Success("widgets")

        assert git(work, "config", "--get", "remote.origin.url") == (
            "git@github.com:acme/widgets.git"
        )
        assert (work / "hello.txt").read_text(encoding="utf-8") == "v2\n"
        assert console.find("Converting remote from HTTPS to SSH")

    def test_master_fallback(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, _ = make_remote("legacy", branch="master")
        console = MockConsole()
        sync = _synchronizer(tmp_path / "acme", console)
        repo = RepositoryDescriptor("legacy", url)
        sync.sync(repo)
        console.clear()

        assert sync.sync(repo) == Success("legacy")
        assert not console.has_warning()

    def test_unknown_branch_warns_but_pulls(
        self, tmp_path: Path, make_remote: RemoteFactory
    ) -> None:
        url, seed = make_remote("odd", branch="trunk")
        console = MockConsole()
        root = tmp_path / "acme"
        sync = _synchronizer(root, console)
        repo = RepositoryDescriptor("odd", url)
        sync.sync(repo)
        commit_file(seed, "v2\n")
        console.clear()

        assert sync.sync(repo) == Success("odd")
        assert console.find("Could not checkout main/master branch for odd")
        assert (root / "odd" / "hello.txt").read_text(encoding="utf-8") == "v2\n"

    def test_verbose_names_branch_pulled_instead(
        self, tmp_path: Path, make_remote: RemoteFactory
    ) -> None:
        url, _ = make_remote("odd", branch="trunk")
        console = MockConsole()
        sync = _synchronizer(tmp_path / "acme", console, verbose=True)
        repo = RepositoryDescriptor("odd", url)
        sync.sync(repo)
        console.clear()

        assert sync.sync(repo) == Success("odd")
        assert console.find("Pulling trunk instead")

    def test_custom_branch_candidates(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, _ = make_remote("odd", branch="trunk")
        console = MockConsole()
        sync = _synchronizer(tmp_path / "acme", console, branches=("develop", "trunk"))
        repo = RepositoryDescriptor("odd", url)
        sync.sync(repo)
        console.clear()

        assert sync.sync(repo) == Success("odd")
        assert not console.has_warning()

    def test_pull_failure_is_recorded(self, tmp_path: Path, make_remote: RemoteFactory) -> None:
        url, _ = make_remote("widgets")
        root = tmp_path / "acme"
        sync = _synchronizer(root, MockConsole())
        repo = RepositoryDescriptor("widgets", url)
        sync.sync(repo)
        git(root / "widgets", "remote", "set-url", "origin", (tmp_path / "gone.git").as_uri())

        console = MockConsole()
        outcome = _synchronizer(root, console).sync(repo)

        assert isinstance(outcome, Failed)
        assert isinstance(outcome.error, PullFailure)
        assert outcome.cause == "pull failed"
        assert outcome.exit_code != 0
        assert console.find("Failed to pull widgets")
        assert (root / "widgets" / "hello.txt").exists()

    def test_plain_directory_is_not_pulled(self, tmp_path: Path) -> None:
        root = tmp_path / "acme"
        (root / "widgets").mkdir(parents=True)
        console = MockConsole()
        repo = RepositoryDescriptor("widgets", "git@github.com:acme/widgets.git")

        outcome = _synchronizer(root, console).sync(repo)

        assert isinstance(outcome, Failed)
        assert outcome.cause == "pull failed"
        assert outcome.exit_code == 128
        assert console.find("widgets exists but is not a git repository")
        assert not console.find("Could not read origin")
        assert (root / "widgets").is_dir()
