"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgsync.core.errors import ErrorCode
from orgsync.github.errors import AuthenticationError, ListingError, TransportError
from orgsync.output.console import Style

if TYPE_CHECKING:
    from orgsync.output.console import ConsoleProtocol
    from orgsync.sync.engine import RunReport

__all__ = ["print_listing_error", "listing_error_exit_code", "run_exit_code"]


def print_listing_error(error: ListingError, console: ConsoleProtocol) -> None:
    """Print a listing error with appropriate formatting."""
    match error:
        case AuthenticationError(message=message, hint=hint):
            console.error(message)
            console.print(f"hint: {hint}", Style.DIM)
        case TransportError(message=message, page=page):
            where = f" (page {page})" if page else ""
            console.error(f"Failed to list repositories{where}: {message}")
            console.print("Repositories already dispatched were still processed.", Style.DIM)


def listing_error_exit_code(error: ListingError) -> int:
    match error:
        case AuthenticationError():
            return int(ErrorCode.USER_ERROR)
        case TransportError():
            return int(ErrorCode.NETWORK_ERROR)


def run_exit_code(report: RunReport) -> int:
    """Exit status for a finished run.

    A listing error outranks repository failures; any repository failure
    makes the run unsuccessful.
    """
    if report.listing_error is not None:
        return listing_error_exit_code(report.listing_error)
    if report.summary.failures:
        return int(ErrorCode.SYNC_FAILED)
    return int(ErrorCode.OK)
