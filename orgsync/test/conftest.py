"""Shared fixtures: throwaway git remotes for end-to-end sync tests."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not available")


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed (code {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


def commit_file(seed: Path, content: str, message: str = "update") -> None:
    """Commit ``content`` to hello.txt in ``seed`` and push it."""
    (seed / "hello.txt").write_text(content, encoding="utf-8")
    git(seed, "add", "hello.txt")
    git(seed, "commit", "-m", message)
    git(seed, "push")


RemoteFactory = Callable[..., tuple[str, Path]]


@pytest.fixture
def make_remote(tmp_path: Path) -> RemoteFactory:
    """Create a bare repo with one commit; return (clone_url, seed_dir).

    The bare repo lives at ``<tmp>/remotes/<name>.git`` so the clone URL's
    final segment is ``<name>.git``.
    """
    remotes = tmp_path / "remotes"
    remotes.mkdir(exist_ok=True)

    def factory(name: str, branch: str = "main") -> tuple[str, Path]:
        remote = remotes / f"{name}.git"
        seed = tmp_path / "seeds" / name
        git(tmp_path, "init", "--bare", "-b", branch, str(remote))

        seed.mkdir(parents=True)
        git(seed, "init", "-b", branch)
        git(seed, "config", "user.email", "test@example.com")
        git(seed, "config", "user.name", "Test")
        (seed / "hello.txt").write_text("v1\n", encoding="utf-8")
        git(seed, "add", "hello.txt")
        git(seed, "commit", "-m", "init")

        url = remote.as_uri()
        git(seed, "remote", "add", "origin", url)
        git(seed, "push", "-u", "origin", branch)
        return url, seed

    return factory
