"""Content fetchers: obtain a document's raw markdown from disk or over HTTP.

Both implementations return the text or raise a FetchError subclass, so the
traversal never depends on the I/O mechanism.
"""

from __future__ import annotations

import logging
import time
import unicodedata
from pathlib import Path
from typing import Protocol

import httpx

from .config import (
    BINARY_CONTROL_CHAR_RATIO,
    TEXT_CONTENT_TYPE_MARKERS,
    USER_AGENT,
    get_http_timeout,
)
from .errors import (
    BinaryContentError,
    EmptyContentError,
    FetchTimeoutError,
    HTTPStatusError,
    NetworkError,
    NotFoundError,
    ReadError,
    WrongContentTypeError,
)

log = logging.getLogger(__name__)

# Control characters allowed in text bodies
_TEXT_CONTROL_CHARS = frozenset("\n\r\t")


class ContentFetcher(Protocol):
    """Anything that can turn a location into markdown text."""

    def fetch(self, location: str) -> str:
        """Return the content at location or raise FetchError."""
        ...


class FileFetcher:
    """Reads UTF-8 markdown files from the local filesystem."""

    def fetch(self, location: str) -> str:
        path = Path(location)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(location, f"File does not exist: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(location, f"Failed to read file: {e}") from e


def count_control_chars(text: str) -> int:
    """Count control characters other than newline, carriage return and tab."""
    return sum(
        1
        for char in text
        if char not in _TEXT_CONTROL_CHARS and unicodedata.category(char) == "Cc"
    )


def validate_text_body(url: str, text: str) -> str:
    """Reject empty or binary-looking response bodies.

    The binary check is a heuristic: text with sparse control characters
    passes, only bodies where they exceed BINARY_CONTROL_CHAR_RATIO fail.

    Raises:
        EmptyContentError: If the body is empty.
        BinaryContentError: If the body looks binary.
    """
    if not text:
        raise EmptyContentError(url, "File is empty")

    if count_control_chars(text) > len(text) * BINARY_CONTROL_CHAR_RATIO:
        raise BinaryContentError(url, "File appears to be binary, not a text file")

    return text


def _is_text_content_type(content_type: str) -> bool:
    lowered = content_type.lower()
    return any(marker in lowered for marker in TEXT_CONTENT_TYPE_MARKERS)


class HttpFetcher:
    """Fetches markdown over HTTP(S) with a timeout and client label.

    httpx applies its timeout to each phase (connect, read, write, pool)
    separately, so a server trickling its body could otherwise hold a
    request open indefinitely. fetch() also enforces an overall deadline of
    the same length, checked as body chunks arrive; a request is therefore
    bounded by the timeout plus at most one read timeout.

    Usable as a context manager; close() releases the underlying client
    when this fetcher created it.
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else get_http_timeout()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self._timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        )

    def fetch(self, location: str) -> str:
        """GET a URL and return its body as validated text.

        Raises:
            FetchTimeoutError: The request exceeded the timeout.
            NetworkError: Connection or protocol failure, or an invalid URL.
            HTTPStatusError: The server answered with a non-2xx status.
            WrongContentTypeError: The declared content type is not text.
            EmptyContentError: The body is empty.
            BinaryContentError: The body looks binary.
        """
        log.debug("GET %s", location)
        deadline = time.monotonic() + self._timeout
        try:
            with self._client.stream("GET", location) as response:
                if not response.is_success:
                    raise HTTPStatusError(
                        location,
                        response.status_code,
                        response.reason_phrase or "Unknown error",
                    )

                content_type = response.headers.get("content-type", "")
                if content_type and not _is_text_content_type(content_type):
                    raise WrongContentTypeError(location, content_type)

                chunks: list[str] = []
                for chunk in response.iter_text():
                    chunks.append(chunk)
                    if time.monotonic() > deadline:
                        raise FetchTimeoutError(
                            location, f"Request exceeded the {self._timeout:g}s deadline"
                        )
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(
                location, f"Request timed out after {self._timeout:g}s: {e}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(location, f"Failed to fetch URL: {e}") from e

        return validate_text_body(location, "".join(chunks))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
