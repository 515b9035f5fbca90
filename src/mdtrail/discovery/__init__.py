"""Linked-document discovery over the filesystem and HTTP."""

from .local import LocalSource, discover_local
from .remote import RemoteSource, discover_remote, discover_remote_async
from .traversal import DocumentSource, traverse

__all__ = [
    "discover_local",
    "discover_remote",
    "discover_remote_async",
    "traverse",
    "DocumentSource",
    "LocalSource",
    "RemoteSource",
]
