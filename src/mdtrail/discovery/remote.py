"""Link discovery over markdown documents served via HTTP(S)."""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import urldefrag

from ..errors import FetchError, MdtrailError, NetworkError, RootNotFoundError, TaskFailureError
from ..fetch import ContentFetcher, HttpFetcher
from ..github import fetch_github_readme, parse_github_repo_url
from ..models import RemoteLinkedDocument
from ..parser import extract_remote_links, extract_title, remote_fallback_title
from ..parser.links import EXTERNAL_PREFIXES
from .traversal import traverse, validate_max_depth

log = logging.getLogger(__name__)


class RemoteSource:
    """HTTP substrate: URL-relative links, top-level (h1) titles."""

    def __init__(self, fetcher: ContentFetcher) -> None:
        self._fetcher = fetcher

    def fetch(self, location: str) -> str:
        return self._fetcher.fetch(location)

    def extract_links(self, content: str, location: str) -> list[str]:
        return extract_remote_links(content, location)

    def extract_title(self, content: str) -> str | None:
        return extract_title(content, top_level_only=True)

    def fallback_title(self, location: str) -> str:
        return remote_fallback_title(location)

    def rejects_target(self, error: FetchError) -> bool:
        # The server answered, but not with a markdown document (404, binary,
        # wrong content type, empty). Transport failures keep the link.
        return not isinstance(error, NetworkError)


def _discover(root_url: str, max_depth: int, fetcher: ContentFetcher) -> list[RemoteLinkedDocument]:
    root_content: str | None = None

    repo = parse_github_repo_url(root_url)
    if repo is not None:
        readme = fetch_github_readme(*repo, fetcher)
        log.info("Resolved %s to %s", root_url, readme.url)
        root_url = readme.url
        root_content = readme.content

    log.debug("Discovering remote links from %s (max depth %d)", root_url, max_depth)
    documents = traverse(RemoteSource(fetcher), root_url, max_depth, root_content=root_content)
    return [RemoteLinkedDocument.from_discovered(doc) for doc in documents]


def discover_remote(
    root_url: str,
    max_depth: int,
    fetcher: ContentFetcher | None = None,
) -> list[RemoteLinkedDocument]:
    """Discover markdown documents linked from a root URL.

    Blocks on network I/O for the whole traversal. Use discover_remote_async
    from code that must not stall.

    Args:
        root_url: Starting document URL, or a GitHub repository URL.
        max_depth: Maximum number of link hops from the root.
        fetcher: Content fetcher; defaults to an HttpFetcher closed on return.

    Returns:
        Linked documents in discovery order, excluding the root.

    Raises:
        RootNotFoundError: If root_url is not an http(s) URL, or a GitHub
            repository has no README on main or master.
        ValueError: If max_depth is negative or not an integer.
    """
    validate_max_depth(max_depth)

    # The fragment never reaches the server and must not defeat the visited set
    root_url = urldefrag(root_url.strip()).url
    if not root_url.startswith(EXTERNAL_PREFIXES):
        raise RootNotFoundError(f"Not an http(s) URL: {root_url}", {"url": root_url})

    if fetcher is not None:
        return _discover(root_url, max_depth, fetcher)

    with HttpFetcher() as http:
        return _discover(root_url, max_depth, http)


async def discover_remote_async(
    root_url: str,
    max_depth: int,
    fetcher: ContentFetcher | None = None,
) -> list[RemoteLinkedDocument]:
    """Run discover_remote on a worker thread.

    Raises:
        RootNotFoundError: As for discover_remote.
        ValueError: As for discover_remote.
        TaskFailureError: If the worker failed for any other reason.
    """
    try:
        return await asyncio.to_thread(discover_remote, root_url, max_depth, fetcher)
    except (MdtrailError, ValueError):
        raise
    except Exception as e:
        raise TaskFailureError(f"Remote discovery task failed: {e}") from e
