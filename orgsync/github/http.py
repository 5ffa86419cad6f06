"""Minimal JSON-over-HTTPS client for the GitHub REST API.

The lister depends on the :class:`HttpClient` protocol only. Production uses
:class:`RealHttpClient` (urllib, system certificates); tests script page
responses with :class:`MockHttpClient`.
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from orgsync import __version__
from orgsync.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """A request that produced no usable JSON.

    Attributes:
        url: Requested URL
        status: HTTP status, 0 when no response arrived or the body was unreadable
        message: GitHub's ``message`` field when present, else the reason phrase
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        prefix = f"HTTP {self.status}: " if self.status else ""
        return f"{prefix}{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        """GET ``url`` and decode the body; any JSON value (``null`` included) is Ok."""
        ...


def _api_message(error: urllib.error.HTTPError) -> str:
    """GitHub explains refusals in a JSON body; fall back to the reason phrase."""
    try:
        body = json.loads(error.read() or b"{}")
    except (OSError, ValueError):
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return str(error.reason)


class RealHttpClient:
    def __init__(
        self, timeout: float = 30.0, user_agent: str = f"orgsync/{__version__}"
    ) -> None:
        """Client with one shared SSL context.

        Args:
            timeout: Seconds per request
            user_agent: Sent on every request; the API refuses anonymous agents
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        request = urllib.request.Request(
            url, headers={"User-Agent": self.user_agent, **(headers or {})}
        )
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=self._ssl_context
            ) as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url, e.code, _api_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url, 0, str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url, 0, "Request timed out"))
        except (OSError, ValueError) as e:
            return Err(HttpError(url, 0, str(e)))

        try:
            return Ok(json.loads(body.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url, 0, f"JSON parse error: {e}"))


class MockHttpClient:
    """Scripted responses keyed by exact URL; anything else is a 404.

    Every call is kept in ``calls`` as ``(url, headers)``.
    """

    def __init__(self) -> None:
        self._responses: dict[str, object] = {}
        self.calls: list[tuple[str, dict[str, str]]] = []

    def set_json(self, url: str, response: object) -> None:
        """Answer ``url`` with ``response``, or fail with it if it is an HttpError."""
        self._responses[url] = response

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> Result[object, HttpError]:
        self.calls.append((url, dict(headers or {})))
        if url not in self._responses:
            return Err(HttpError(url, 404, "Not found (mock)"))
        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]
