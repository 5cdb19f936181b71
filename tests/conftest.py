"""Shared fixtures.

Outbound HTTP is served by ``httpx.MockTransport`` routes keyed on
``host + path``; every request the fetcher makes is recorded so tests can
assert that nothing left the process (e.g. for blocked hosts).
"""

from __future__ import annotations

from typing import Callable, Union

import httpx
import pytest

from mirror.scraper.fetcher import BoundedFetcher

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


def _route_key(url: httpx.URL) -> str:
    return f"{url.host}{url.path or '/'}"


class RecordingTransport(httpx.MockTransport):
    """Mock transport answering from a route table and logging every request."""

    def __init__(self, routes: dict[str, Route]) -> None:
        self.routes = {_route_key(httpx.URL(url)): route for url, route in routes.items()}
        self.requests: list[httpx.Request] = []
        super().__init__(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(_route_key(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        # Fresh copy per request; a streamed Response can only be read once.
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)


@pytest.fixture()
def make_fetcher() -> Callable[[dict[str, Route]], tuple[BoundedFetcher, RecordingTransport]]:
    """Return a factory building a :class:`BoundedFetcher` over a route table."""

    def _factory(routes: dict[str, Route]) -> tuple[BoundedFetcher, RecordingTransport]:
        transport = RecordingTransport(routes)
        return BoundedFetcher(transport=transport), transport

    return _factory
