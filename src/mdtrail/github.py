"""GitHub repository URL to README resolution."""

from __future__ import annotations

import logging
import re

from .config import GITHUB_RAW_README_TEMPLATE, GITHUB_README_BRANCHES
from .errors import FetchError, RootNotFoundError
from .fetch import ContentFetcher, HttpFetcher
from .models import RemoteContent

log = logging.getLogger(__name__)

# https://github.com/<owner>/<repo>, optionally ending in .git and/or a slash.
# Matches a URL shape, not markdown.
GITHUB_REPO_PATTERN = re.compile(r"^https://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")


def parse_github_repo_url(url: str) -> tuple[str, str] | None:
    """Return (owner, repo) if url is a GitHub repository URL."""
    match = GITHUB_REPO_PATTERN.match(url)
    if not match:
        return None
    return match.group(1), match.group(2)


def github_readme_url(owner: str, repo: str, branch: str) -> str:
    return GITHUB_RAW_README_TEMPLATE.format(owner=owner, repo=repo, branch=branch)


def fetch_github_readme(owner: str, repo: str, fetcher: ContentFetcher) -> RemoteContent:
    """Fetch a repository README, trying each branch in turn.

    Args:
        owner: Repository owner.
        repo: Repository name.
        fetcher: Fetcher used for the raw README URLs.

    Returns:
        The README content and the raw URL it was read from.

    Raises:
        RootNotFoundError: If no branch has a README.
    """
    last_error: FetchError | None = None
    for branch in GITHUB_README_BRANCHES:
        url = github_readme_url(owner, repo, branch)
        try:
            content = fetcher.fetch(url)
        except FetchError as e:
            log.debug("No README at %s: %s", url, e.message)
            last_error = e
            continue
        return RemoteContent(url=url, content=content)

    reason = last_error.message if last_error else "no branches configured"
    raise RootNotFoundError(
        f"Could not find README.md in main or master branch: {reason}",
        {"owner": owner, "repo": repo},
    )


def fetch_remote_markdown(url: str, fetcher: ContentFetcher | None = None) -> RemoteContent:
    """Fetch a single markdown document from a URL.

    GitHub repository URLs are resolved to the repository README.

    Raises:
        RootNotFoundError: If a GitHub repository has no README.
        FetchError: If the document cannot be fetched.
    """
    if fetcher is None:
        with HttpFetcher() as http:
            return fetch_remote_markdown(url, http)

    repo = parse_github_repo_url(url)
    if repo is not None:
        return fetch_github_readme(*repo, fetcher)
    return RemoteContent(url=url, content=fetcher.fetch(url))
