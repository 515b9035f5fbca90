"""Link filtering and resolution for local and remote documents."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urljoin, urlsplit

from ..config import MARKDOWN_EXTENSIONS, UNTITLED
from .markdown import iter_link_destinations

EXTERNAL_PREFIXES = ("http://", "https://")


def _strip_fragment(link: str) -> str | None:
    """Drop a trailing #fragment. Returns None for anchors and empty links."""
    if link.startswith("#"):
        return None
    link = link.split("#", 1)[0]
    return link or None


# ─────────────────────────────────────────────────────────────────────────────
# Local
# ─────────────────────────────────────────────────────────────────────────────


def resolve_local_link(link: str, base_dir: Path) -> Path | None:
    """Resolve a link to a canonical markdown file path.

    Args:
        link: Raw link destination.
        base_dir: Directory containing the linking document.

    Returns:
        Absolute canonical path, or None if the link is external, an anchor,
        does not exist, or is not a markdown file.
    """
    if link.startswith(EXTERNAL_PREFIXES):
        return None

    target = _strip_fragment(link)
    if target is None:
        return None

    try:
        resolved = (base_dir / unquote(target)).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        # Missing or unreadable target, symlink loop, or a NUL byte in the path
        return None

    if resolved.suffix in MARKDOWN_EXTENSIONS:
        return resolved
    return None


def extract_local_links(content: str, document_path: Path) -> list[Path]:
    """Extract resolved local markdown links from a document.

    Args:
        content: Markdown content of the document.
        document_path: Path of the document, used as resolution base.

    Returns:
        Resolved paths in document order (duplicates kept).
    """
    base_dir = document_path.parent
    links: list[Path] = []
    for destination in iter_link_destinations(content):
        resolved = resolve_local_link(destination, base_dir)
        if resolved is not None:
            links.append(resolved)
    return links


def local_fallback_title(path: str) -> str:
    return Path(path).name or UNTITLED


# ─────────────────────────────────────────────────────────────────────────────
# Remote
# ─────────────────────────────────────────────────────────────────────────────


def resolve_remote_link(link: str, base_url: str) -> str | None:
    """Resolve a link against a document URL if it plausibly names markdown.

    A link is kept when its path ends in a markdown suffix, or when it is
    relative and its final segment has no "." (extensionless pages are
    assumed to be markdown).

    Args:
        link: Raw link destination.
        base_url: URL of the linking document.

    Returns:
        Absolute URL, or None if the link is skipped.
    """
    target = _strip_fragment(link)
    if target is None:
        return None

    is_absolute = target.startswith(EXTERNAL_PREFIXES)
    resolved = target if is_absolute else urljoin(base_url, target)
    if not resolved.startswith(EXTERNAL_PREFIXES):
        # mailto:, ftp: and other schemes are never fetched
        return None

    is_markdown = urlsplit(resolved).path.endswith(MARKDOWN_EXTENSIONS)
    if is_markdown:
        return resolved

    is_relative = not is_absolute and not urlsplit(target).scheme
    final_segment = urlsplit(target).path.rsplit("/", 1)[-1]
    if is_relative and "." not in final_segment:
        return resolved

    return None


def extract_remote_links(content: str, base_url: str) -> list[str]:
    """Extract resolved markdown URLs from a remote document.

    Args:
        content: Markdown content of the document.
        base_url: URL of the document, used as resolution base.

    Returns:
        Absolute URLs in document order (duplicates kept).
    """
    links: list[str] = []
    for destination in iter_link_destinations(content):
        resolved = resolve_remote_link(destination, base_url)
        if resolved is not None:
            links.append(resolved)
    return links


def remote_fallback_title(url: str) -> str:
    return urlsplit(url).path.rsplit("/", 1)[-1] or UNTITLED
