# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web

from page_flattener.config import FlattenConfig
from page_flattener.flatten import FetchResponse, NetworkError


class StubFetcher:
    """
    In-memory fetcher serving canned bodies.

    Unknown URLs raise NetworkError, as an unreachable host would.
    """

    def __init__(self, resources: Dict[str, Union[str, bytes]], delay: float = 0.0):
        self.resources = resources
        self.delay = delay
        self.requested: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.delays: Dict[str, float] = {}

    async def fetch(self, url: str) -> FetchResponse:
        self.requested.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, self.delay))
            if url not in self.resources:
                raise NetworkError(url, "Name or service not known")
            body = self.resources[url]
            if isinstance(body, str):
                body = body.encode("utf-8")
            return FetchResponse(url=url, status=200, body=body, charset="utf-8")
        finally:
            self.in_flight -= 1


@pytest.fixture()
def config() -> FlattenConfig:
    """Config with short timeouts and no source comments, for exact assertions."""
    return FlattenConfig(timeout=2.0, max_concurrency=4, annotate_source=False)


@pytest.fixture()
def stub_fetcher_factory():
    def make(resources: Optional[Dict[str, Union[str, bytes]]] = None, delay: float = 0.0) -> StubFetcher:
        return StubFetcher(resources or {}, delay=delay)

    return make


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site_server(unused_tcp_port: int) -> AsyncIterator[str]:
    """A small site with one page, one script and one stylesheet."""
    app = web.Application()

    async def handle_root(_):
        html = (
            "<html><head>"
            '<link rel="stylesheet" href="/style.css">'
            '<script src="/app.js"></script>'
            '<script type="text/template" src="/tpl.html"></script>'
            "</head><body><h1>Hello</h1></body></html>"
        )
        return web.Response(text=html, content_type="text/html")

    async def handle_script(_):
        return web.Response(text="console.log('hi');", content_type="application/javascript")

    async def handle_style(_):
        return web.Response(text="h1 { color: red; }", content_type="text/css")

    async def handle_missing_page(_):
        return web.Response(status=404, text="not here")

    async def handle_empty(_):
        return web.Response(text="", content_type="text/html")

    async def handle_latin1(_):
        body = '<html><head><meta charset="iso-8859-1"></head><body><p>caf\xe9</p></body></html>'
        return web.Response(body=body.encode("latin-1"), content_type="text/html")

    app.router.add_get("/", handle_root)
    app.router.add_get("/app.js", handle_script)
    app.router.add_get("/style.css", handle_style)
    app.router.add_get("/gone", handle_missing_page)
    app.router.add_get("/empty", handle_empty)
    app.router.add_get("/latin1", handle_latin1)

    async for url in _serve_app(app, unused_tcp_port):
        yield url
