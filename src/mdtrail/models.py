"""Pydantic models for discovery results."""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class DiscoveredDocument(BaseModel):
    """A document reached during traversal, independent of substrate."""

    model_config = ConfigDict(frozen=True)

    location: str  # Absolute path (local) or absolute URL (remote)
    title: str


class LinkedDocument(BaseModel):
    """A document discovered on the local filesystem."""

    model_config = ConfigDict(frozen=True)

    path: str
    title: str

    @classmethod
    def from_discovered(cls, doc: DiscoveredDocument) -> "LinkedDocument":
        return cls(path=doc.location, title=doc.title)


class RemoteLinkedDocument(BaseModel):
    """A document discovered over HTTP(S)."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str

    @classmethod
    def from_discovered(cls, doc: DiscoveredDocument) -> "RemoteLinkedDocument":
        return cls(url=doc.location, title=doc.title)


class FrontierEntry(NamedTuple):
    """A queued location and its BFS distance from the root."""

    location: str
    depth: int


class RemoteContent(BaseModel):
    """Markdown fetched from a URL, with the URL it was actually read from."""

    model_config = ConfigDict(frozen=True)

    url: str  # Raw README URL when a GitHub repository URL was given
    content: str
