"""Git operations module.

- Repository: single working-copy operations (remote, checkout, pull)
- clone: create a working copy
- URL helpers: HTTPS to SSH rewrite, clone directory naming

Usage:
    from orgsync.git import Repository, to_ssh_url

    repo = Repository(Path("acme/widgets"))
    match repo.remote_url():
        case Ok(url) if url != to_ssh_url(url):
            repo.set_remote_url(to_ssh_url(url))
"""

from orgsync.git.repository import GitError, Repository, clone
from orgsync.git.urls import is_https_url, repo_dir_name, to_ssh_url

__all__ = [
    # Repository
    "GitError",
    "Repository",
    "clone",
    # URLs
    "is_https_url",
    "repo_dir_name",
    "to_ssh_url",
]
