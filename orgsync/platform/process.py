"""Running external commands (git) and turning their exit into a Result.

Nothing else in orgsync imports :mod:`subprocess`. Quiet runs capture the
child's output so it can be attached to the error; verbose runs let git
write straight to the terminal and only the exit status comes back.

An exit status of -1 means the child never produced one: it was killed
after ``timeout`` seconds or could not be started at all.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from orgsync.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_live"]

_TIMEOUT_PREFIX = "Command timed out"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out, or failed to start.

    Attributes:
        command: argv as executed
        returncode: Child exit status, -1 when there is none
        stdout: Captured output ("" for live runs)
        stderr: Captured error output, or the reason the child has no status
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def timed_out(self) -> bool:
        return self.returncode == -1 and self.stderr.startswith(_TIMEOUT_PREFIX)

    def __str__(self) -> str:
        shown = list(self.command[:3])
        if len(self.command) > 3:
            shown.append("...")
        return f"{' '.join(shown)} failed (exit {self.returncode})"


def _execute(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None,
    timeout: float | None,
    *,
    capture: bool,
) -> Result[str, ProcessError]:
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=capture,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(argv, -1, partial, f"{_TIMEOUT_PREFIX} after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(argv, -1, "", str(e)))

    stdout = proc.stdout or ""
    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, stdout, proc.stderr or ""))
    return Ok(stdout)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` with output captured.

    Args:
        cmd: argv
        cwd: Working directory
        env: Replacement environment (inherit when None)
        timeout: Seconds before the child is killed (no limit when None)

    Returns:
        Ok(stdout), or Err(ProcessError) holding the exit status and both streams
    """
    return _execute(cmd, cwd, env, timeout, capture=True)


def run_live(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Run ``cmd`` with its output going straight to the terminal."""
    match _execute(cmd, cwd, env, timeout, capture=False):
        case Err(e):
            return Err(e)
        case Ok(_):
            return Ok(None)
