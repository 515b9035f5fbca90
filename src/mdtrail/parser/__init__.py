"""Markdown link and title extraction."""

from .links import (
    extract_local_links,
    extract_remote_links,
    local_fallback_title,
    remote_fallback_title,
    resolve_local_link,
    resolve_remote_link,
)
from .markdown import extract_title, iter_link_destinations

__all__ = [
    "extract_title",
    "iter_link_destinations",
    "extract_local_links",
    "extract_remote_links",
    "resolve_local_link",
    "resolve_remote_link",
    "local_fallback_title",
    "remote_fallback_title",
]
