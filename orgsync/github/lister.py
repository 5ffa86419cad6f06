"""Paginated listing of an organization's repositories.

GitHub returns at most 100 repositories per page. Pages are fetched lazily,
one per iteration step, so the caller can dispatch work for page N before
page N+1 is requested:

    for page in iter_org_repositories(http, "acme", token):
        match page:
            case Ok(repos):
                for repo in repos:
                    ...
            case Err(error):
                ...  # always the last item

An empty (or ``null``) page ends the listing.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from orgsync.core.config import DEFAULT_API_URL
from orgsync.core.result import Err, Ok, Result
from orgsync.core.structured import as_obj_list, as_str_dict, get_str
from orgsync.git.urls import repo_dir_name
from orgsync.github.errors import AuthenticationError, ListingError, TransportError

if TYPE_CHECKING:
    from orgsync.github.http import HttpClient, HttpError

__all__ = [
    "PER_PAGE",
    "RepositoryDescriptor",
    "iter_org_repositories",
    "page_url",
    "parse_page",
]

PER_PAGE = 100


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    """One repository as listed by the API.

    Attributes:
        name: Repository name
        clone_url: SSH clone URL
    """

    name: str
    clone_url: str

    @classmethod
    def from_api(cls, entry: object) -> RepositoryDescriptor | None:
        """Build a descriptor from one API entry; None if it has no ``ssh_url``."""
        data = as_str_dict(entry)
        if data is None:
            return None
        url = get_str(data, "ssh_url")
        if url is None:
            return None
        return cls(name=get_str(data, "name") or repo_dir_name(url), clone_url=url)


def page_url(api_url: str, org: str, page: int, per_page: int = PER_PAGE) -> str:
    return f"{api_url.rstrip('/')}/orgs/{org}/repos?per_page={per_page}&page={page}"


def parse_page(data: object, url: str) -> Result[list[RepositoryDescriptor], TransportError]:
    """Turn one decoded page into descriptors.

    ``null`` and ``[]`` both parse to an empty list. Entries without a clone
    URL are dropped, so a non-empty page may still yield ``[]``.
    """
    if data is None:
        return Ok([])
    entries = as_obj_list(data)
    if entries is None:
        message = "expected a JSON array of repositories"
        details = as_str_dict(data)
        if details is not None and get_str(details, "message"):
            message = f"{message}, got: {get_str(details, 'message')}"
        return Err(TransportError(message=message, url=url))

    descriptors: list[RepositoryDescriptor] = []
    for entry in entries:
        descriptor = RepositoryDescriptor.from_api(entry)
        if descriptor is not None:
            descriptors.append(descriptor)
    return Ok(descriptors)


def _classify(error: HttpError, page: int) -> ListingError:
    if error.status in (401, 403):
        return AuthenticationError(
            message=f"GitHub rejected the token (HTTP {error.status}: {error.message})",
            status=error.status,
        )
    return TransportError(message=str(error), url=error.url, status=error.status, page=page)


def iter_org_repositories(
    http: HttpClient,
    org: str,
    token: str | None,
    *,
    api_url: str = DEFAULT_API_URL,
    per_page: int = PER_PAGE,
    on_page: Callable[[int], None] | None = None,
) -> Iterator[Result[list[RepositoryDescriptor], ListingError]]:
    """Yield the organization's repositories one page at a time.

    Args:
        http: HTTP client
        org: Organization login
        token: GitHub token sent as a bearer credential
        api_url: REST API base URL
        per_page: Page size
        on_page: Called with the page number just before each request

    Yields:
        Ok(descriptors) per non-empty page, then at most one Err(ListingError)
    """
    if not token:
        yield Err(AuthenticationError(message="GitHub token is not set"))
        return

    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }

    page = 1
    while True:
        if on_page is not None:
            on_page(page)
        url = page_url(api_url, org, page, per_page)

        fetched = http.get_json(url, headers)
        if isinstance(fetched, Err):
            yield Err(_classify(fetched.error, page))
            return

        raw = fetched.value
        if raw is None or raw == []:
            return

        parsed = parse_page(raw, url)
        if isinstance(parsed, Err):
            yield Err(
                TransportError(message=parsed.error.message, url=url, status=0, page=page)
            )
            return

        yield Ok(parsed.value)
        page += 1
