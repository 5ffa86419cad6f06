"""Clone URL helpers.

Pure string transforms, no git involved:

    >>> to_ssh_url("https://github.com/acme/widgets")
    'git@github.com:acme/widgets'
    >>> repo_dir_name("git@github.com:acme/widgets.git")
    'widgets'
"""

from __future__ import annotations

__all__ = ["HTTPS_PREFIX", "SSH_PREFIX", "is_https_url", "repo_dir_name", "to_ssh_url"]

HTTPS_PREFIX = "https://github.com/"
SSH_PREFIX = "git@github.com:"


def is_https_url(url: str) -> bool:
    """True if the URL points at github.com over HTTPS."""
    return url.startswith(HTTPS_PREFIX)


def to_ssh_url(url: str) -> str:
    """Rewrite a github.com HTTPS URL to its SSH form.

    Any other URL (already SSH, another host, a local path) is returned
    unchanged, so applying this twice is the same as applying it once.
    """
    if not is_https_url(url):
        return url
    return SSH_PREFIX + url[len(HTTPS_PREFIX) :]


def repo_dir_name(url: str) -> str:
    """Directory name git would create when cloning ``url``.

    The final path segment (after ``/`` or ``:``) with one trailing ``.git``
    removed. Trailing slashes are ignored.
    """
    tail = url.rstrip("/")
    for sep in ("/", ":"):
        if sep in tail:
            tail = tail.rsplit(sep, 1)[1]
    if tail.endswith(".git"):
        tail = tail[: -len(".git")]
    return tail
