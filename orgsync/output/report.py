"""End-of-run summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgsync.output.console import Style

if TYPE_CHECKING:
    from orgsync.output.console import ConsoleProtocol
    from orgsync.sync.outcome import RunSummary

__all__ = ["render_summary"]

LISTING_STOPPED = "Listing stopped early; only repositories already dispatched were processed."


def render_summary(
    summary: RunSummary,
    console: ConsoleProtocol,
    *,
    verbose: bool = False,
    listing_failed: bool = False,
) -> None:
    """Print processed/skipped counts and the failure list.

    The skipped line only appears when something was skipped, the failure
    block only when something failed. After a listing failure the run is
    never reported as complete or successful.
    """
    if listing_failed:
        console.header(LISTING_STOPPED)
    else:
        console.header("All repositories have been cloned or updated.")
    console.print(f"Total repositories processed: {summary.total_processed}")
    if summary.skipped > 0:
        console.print(f"Skipped repositories (ignored): {summary.skipped}")

    if not summary.failures:
        if not listing_failed:
            console.success("All repositories processed successfully.")
        return

    noun = "repository" if summary.failed == 1 else "repositories"
    console.newline()
    console.warning(f"{summary.failed} {noun} encountered errors:")
    for failure in summary.failures:
        console.print(
            f"  - {failure.name}: {failure.cause} (exit code: {failure.exit_code})",
            Style.ERROR,
        )
        if verbose and failure.detail:
            console.print(f"    {failure.detail}", Style.DIM)
    console.newline()
    console.print("Please manually fix the repositories listed above.", Style.DIM)
