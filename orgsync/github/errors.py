from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthenticationError:
    """The token is missing or GitHub rejected it."""

    message: str
    status: int = 0
    hint: str = "Export a personal access token as GITHUB_TOKEN"


@dataclass(frozen=True, slots=True)
class TransportError:
    """A listing page could not be fetched or decoded."""

    message: str
    url: str
    status: int = 0
    page: int = 0


ListingError = AuthenticationError | TransportError
