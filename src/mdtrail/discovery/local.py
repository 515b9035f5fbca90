"""Link discovery over markdown files on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import FetchError, RootNotFoundError
from ..fetch import ContentFetcher, FileFetcher
from ..models import LinkedDocument
from ..parser import extract_local_links, extract_title, local_fallback_title
from .traversal import traverse, validate_max_depth

log = logging.getLogger(__name__)


class LocalSource:
    """Filesystem substrate: relative links, canonical paths, any-level titles."""

    def __init__(self, fetcher: ContentFetcher | None = None) -> None:
        self._fetcher = fetcher or FileFetcher()

    def fetch(self, location: str) -> str:
        return self._fetcher.fetch(location)

    def extract_links(self, content: str, location: str) -> list[str]:
        return [str(path) for path in extract_local_links(content, Path(location))]

    def extract_title(self, content: str) -> str | None:
        return extract_title(content)

    def fallback_title(self, location: str) -> str:
        return local_fallback_title(location)

    def rejects_target(self, error: FetchError) -> bool:
        # Links only resolve to files that exist, so an unreadable one is
        # still listed under its filename.
        return False


def discover_local(
    root_path: str | Path,
    max_depth: int,
    fetcher: ContentFetcher | None = None,
) -> list[LinkedDocument]:
    """Discover markdown files linked from a root file.

    Args:
        root_path: Starting markdown file.
        max_depth: Maximum number of link hops from the root.
        fetcher: Content fetcher; defaults to reading files from disk.

    Returns:
        Linked documents in discovery order, excluding the root.

    Raises:
        RootNotFoundError: If root_path does not exist.
        ValueError: If max_depth is negative or not an integer.
    """
    validate_max_depth(max_depth)

    root = Path(root_path)
    if not root.exists():
        raise RootNotFoundError(f"File does not exist: {root}", {"path": str(root)})

    root = root.resolve()
    log.debug("Discovering local links from %s (max depth %d)", root, max_depth)

    documents = traverse(LocalSource(fetcher), str(root), max_depth)
    return [LinkedDocument.from_discovered(doc) for doc in documents]
