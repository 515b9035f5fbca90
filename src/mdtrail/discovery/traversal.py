"""Breadth-first traversal of linked markdown documents.

The traversal knows nothing about disks or networks. Each substrate supplies a
DocumentSource that fetches content, extracts resolved links and titles.

Depth semantics: the root is depth 0. A document is expanded (its links
followed) only if its depth is below max_depth. Documents exactly max_depth
hops away are still fetched once for their title.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Protocol

from ..errors import FetchError
from ..models import DiscoveredDocument, FrontierEntry

log = logging.getLogger(__name__)


class DocumentSource(Protocol):
    """Substrate capabilities needed by traverse()."""

    def fetch(self, location: str) -> str:
        """Return document content or raise FetchError."""
        ...

    def extract_links(self, content: str, location: str) -> list[str]:
        """Return resolved candidate locations linked from a document."""
        ...

    def extract_title(self, content: str) -> str | None:
        ...

    def fallback_title(self, location: str) -> str:
        ...

    def rejects_target(self, error: FetchError) -> bool:
        """Whether a failed title fetch means the link is not a document."""
        ...


def validate_max_depth(max_depth: int) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise ValueError(f"max_depth must be an integer, got {max_depth!r}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    return max_depth


def traverse(
    source: DocumentSource,
    root: str,
    max_depth: int,
    root_content: str | None = None,
) -> list[DiscoveredDocument]:
    """Discover documents reachable from root within max_depth hops.

    Per-document fetch failures are logged and the document becomes a dead
    end; they never abort the traversal.

    Args:
        source: Substrate implementation.
        root: Canonical root location. Never part of the result.
        max_depth: Maximum number of hops from the root.
        root_content: Root content already fetched by the caller, if any.

    Returns:
        Discovered documents in BFS discovery order, each location once.
    """
    validate_max_depth(max_depth)

    discovered: list[DiscoveredDocument] = []
    visited: set[str] = {root}
    queue: deque[FrontierEntry] = deque([FrontierEntry(root, 0)])

    # Content read for a title, kept until the same document is expanded
    prefetched: dict[str, str] = {}
    if root_content is not None:
        prefetched[root] = root_content

    while queue:
        location, depth = queue.popleft()
        content = prefetched.pop(location, None)

        if depth >= max_depth:
            continue

        if content is None:
            try:
                content = source.fetch(location)
            except FetchError as e:
                log.warning("Error fetching %s: %s", location, e.message)
                continue

        links = source.extract_links(content, location)
        log.debug("%s (depth %d): %d candidate links", location, depth, len(links))

        for link in links:
            if link in visited:
                continue
            visited.add(link)

            title: str | None = None
            try:
                link_content = source.fetch(link)
            except FetchError as e:
                if source.rejects_target(e):
                    log.warning("Skipping link %s from %s: %s", link, location, e.message)
                    continue
                log.debug("Could not read %s for its title: %s", link, e.message)
            else:
                title = source.extract_title(link_content)
                if depth + 1 < max_depth:
                    prefetched[link] = link_content

            discovered.append(
                DiscoveredDocument(location=link, title=title or source.fallback_title(link))
            )
            queue.append(FrontierEntry(link, depth + 1))

    return discovered
