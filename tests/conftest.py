# File: tests/conftest.py
import asyncio
from collections import Counter
from collections.abc import AsyncIterator
from typing import Callable, Dict

import pytest
import pytest_asyncio
from aiohttp import web
from bs4 import BeautifulSoup
from bs4.element import Tag

from pages import REPO
from tree_scout.config import CrawlConfig, build_config


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class ListingServer:
    """In-process listing site: paths map to pages, with hit counting and delays."""

    def __init__(self) -> None:
        self.pages: Dict[str, str] = {}
        self.bodies: Dict[str, bytes] = {}
        self.delays: Dict[str, float] = {}
        self.hits: Counter = Counter()
        self.active = 0
        self.max_active = 0
        self.origin = ""

    async def handle(self, request: web.Request) -> web.Response:
        path = request.path
        self.hits[path] += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            delay = self.delays.get(path)
            if delay:
                await asyncio.sleep(delay)
            if path in self.bodies:
                return web.Response(body=self.bodies[path], content_type="text/html", charset="utf-8")
            if path not in self.pages:
                return web.Response(status=404, text="Not Found")
            return web.Response(text=self.pages[path], content_type="text/html")
        finally:
            self.active -= 1


@pytest_asyncio.fixture
async def server(unused_tcp_port: int) -> AsyncIterator[ListingServer]:
    """Start a :class:`ListingServer` on a free port, ensure cleanup."""
    srv = ListingServer()
    app = web.Application()
    app.router.add_get("/{tail:.*}", srv.handle)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", unused_tcp_port)
    await site.start()
    srv.origin = f"http://localhost:{unused_tcp_port}"
    try:
        yield srv
    finally:
        await runner.cleanup()


@pytest.fixture()
def make_config() -> Callable[..., CrawlConfig]:
    """Return a builder of configs crawling REPO on a given server."""

    def _make(srv: ListingServer, **overrides) -> CrawlConfig:
        values = {
            "root_url": f"{srv.origin}{REPO}",
            "extension": ".md",
            "origin": srv.origin,
            "timeout": 5.0,
        }
        values.update(overrides)
        return build_config(**values)

    return _make


@pytest.fixture()
def make_tag() -> Callable[[str], Tag]:
    """Parse a snippet and return its first anchor."""

    def _make(html: str) -> Tag:
        tag = BeautifulSoup(html, "html.parser").find("a")
        assert isinstance(tag, Tag)
        return tag

    return _make
