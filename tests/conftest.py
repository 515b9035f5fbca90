"""Shared test fixtures for the mdtrail test suite.

Design:
- write_md: builds markdown trees under tmp_path
- http_site: serves a dict of URL -> body through httpx.MockTransport
- Logging is reset after every test so CLI handlers never leak
"""

import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from mdtrail.fetch import HttpFetcher


# ─────────────────────────────────────────────────────────────────────────────
# Logging isolation
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog sees records and handlers don't leak."""
    yield
    logger = logging.getLogger("mdtrail")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def write_md(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a file relative to tmp_path and return its path.

    Usage:
        def test_something(write_md):
            root = write_md("A.md", "[B](B.md)")
    """

    def _write(rel_path: str, content: str) -> Path:
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class FakeSite:
    """In-memory HTTP site. Unknown URLs answer 404."""

    def __init__(self) -> None:
        self.pages: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[str] = []

    def add(self, url: str, body: str, content_type: str = "text/plain; charset=utf-8") -> None:
        self.add_response(url, 200, body.encode("utf-8"), {"content-type": content_type})

    def add_response(
        self,
        url: str,
        status_code: int,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.pages[url] = lambda request: httpx.Response(
            status_code, content=content, headers=headers or {}
        )

    def add_error(self, url: str, error_cls: type[httpx.TransportError]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise error_cls("simulated failure", request=request)

        self.pages[url] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        page = self.pages.get(url)
        if page is None:
            return httpx.Response(404)
        return page(request)

    def fetcher(self) -> HttpFetcher:
        return HttpFetcher(transport=httpx.MockTransport(self.handler))

    def count(self, url: str) -> int:
        return self.requests.count(url)


@pytest.fixture
def http_site() -> FakeSite:
    return FakeSite()
