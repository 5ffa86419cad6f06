"""Tests for orgsync.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from orgsync.core.result import Err, Ok
from orgsync.platform.process import ProcessError, run, run_live

PY = sys.executable


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "pull"),
            returncode=1,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git pull failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("git", "clone", "--quiet", "git@github.com:acme/widgets.git"),
            returncode=128,
            stdout="",
            stderr="error",
        )
        assert str(error) == "git clone --quiet ... failed (exit 128)"

    def test_timed_out(self) -> None:
        error = ProcessError(("git",), -1, "", "Command timed out after 1.0s")
        assert error.timed_out is True
        assert ProcessError(("git",), -1, "", "No such file").timed_out is False

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_keeps_exit_code(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import sys; sys.exit(128)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 128

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert "error msg" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)

        assert isinstance(result, Err)
        assert result.error.timed_out


class TestRunLive:
    def test_success(self, tmp_path: Path) -> None:
        assert run_live([PY, "-c", "pass"], cwd=tmp_path) == Ok(None)

    def test_failure_keeps_exit_code(self, tmp_path: Path) -> None:
        result = run_live([PY, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 3

    def test_timeout(self, tmp_path: Path) -> None:
        result = run_live([PY, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
