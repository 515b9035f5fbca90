"""mdtrail: discover markdown documents reachable through links."""

__version__ = "0.1.0"

from .discovery import discover_local, discover_remote, discover_remote_async
from .github import fetch_remote_markdown
from .models import DiscoveredDocument, LinkedDocument, RemoteContent, RemoteLinkedDocument

__all__ = [
    "__version__",
    "discover_local",
    "discover_remote",
    "discover_remote_async",
    "fetch_remote_markdown",
    "RemoteContent",
    "DiscoveredDocument",
    "LinkedDocument",
    "RemoteLinkedDocument",
]
