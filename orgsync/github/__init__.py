"""GitHub REST API access: HTTP client and organization listing."""

from orgsync.github.errors import AuthenticationError, ListingError, TransportError
from orgsync.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from orgsync.github.lister import (
    PER_PAGE,
    RepositoryDescriptor,
    iter_org_repositories,
    page_url,
)

__all__ = [
    "AuthenticationError",
    "HttpClient",
    "HttpError",
    "ListingError",
    "MockHttpClient",
    "PER_PAGE",
    "RealHttpClient",
    "RepositoryDescriptor",
    "TransportError",
    "iter_org_repositories",
    "page_url",
]
