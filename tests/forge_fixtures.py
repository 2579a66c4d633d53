"""Fakes and HTML builders shared by the test modules."""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

from glit.domain.entities import RepositoryRequest
from glit.domain.errors import FetchError
from glit.domain.interfaces import IPageFetcher, IRepository, IRepositoryFactory

ACCOUNT_URL = "https://forge.test/alice"


def count_page(count: str) -> str:
    return (
        "<html><body><turbo-frame><div><div><div><div>"
        f"<strong>\n  {count}\n</strong>"
        "</div></div></div></div></turbo-frame></body></html>"
    )


def listing_page(names: list[str], owner: str = "alice") -> str:
    rows = "".join(
        f'<li><div><div><h3><a href="/{owner}/{name}">{name}</a></h3></div></div></li>'
        for name in names
    )
    return f"<html><body><turbo-frame><div><div><ul>{rows}</ul></div></div></turbo-frame></body></html>"


class FakeForge:
    """
    Serves an account's listing pages from an in-memory repository list,
    the way the real forge paginates them.
    """

    def __init__(self, names: list[str], page_size: int = 30, shown_count: str | None = None) -> None:
        self.names = names
        self.page_size = page_size
        self.shown_count = shown_count if shown_count is not None else f"{len(names):,}"
        self.failing_pages: dict[int, int] = {}
        self.requests: list[str] = []

    def page(self, number: int) -> list[str]:
        start = (number - 1) * self.page_size
        return self.names[start:start + self.page_size]

    def html_for(self, url: str) -> tuple[int, str]:
        self.requests.append(url)
        query = parse_qs(urlsplit(url).query)
        if "page" not in query:
            return 200, count_page(self.shown_count)
        number = int(query["page"][0])
        if number in self.failing_pages:
            return self.failing_pages[number], "<html>error</html>"
        return 200, listing_page(self.page(number))

    def handler(self, request: httpx.Request) -> httpx.Response:
        status, body = self.html_for(str(request.url))
        return httpx.Response(status, text=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class InstrumentedFetcher(IPageFetcher):
    """
    IPageFetcher over a FakeForge that records peak in-flight requests and
    which fetches ran to completion. Failing pages fail without delay.
    """

    def __init__(self, forge: FakeForge, delay: float = 0.01) -> None:
        self._forge = forge
        self._delay = delay
        self.in_flight = 0
        self.peak = 0
        self.completed: list[str] = []

    async def fetch_text(self, url: str) -> str:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            status, body = self._forge.html_for(url)
            if status >= 400:
                raise FetchError(url, f"HTTP {status}", status)
            await asyncio.sleep(self._delay)
            self.completed.append(url)
            return body
        finally:
            self.in_flight -= 1


class FakeRepository(IRepository):
    """Deterministic analyzer stand-in: commit data derived from the name."""

    def __init__(self, name: str, delay: float = 0.0, fail: bool = False) -> None:
        self.name = name
        self.delay = delay
        self.fail = fail
        self.thread_name: str | None = None

    def committed_data(self) -> Any:
        self.thread_name = threading.current_thread().name
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise RuntimeError(f"cannot clone {self.name}")
        return {"commits": len(self.name) * 10, "repository": self.name}


class FakeRepositoryFactory(IRepositoryFactory):
    def __init__(self, failing: set[str] | None = None, extraction_failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.extraction_failing = extraction_failing or set()
        self.requests: list[RepositoryRequest] = []

    async def create(self, request: RepositoryRequest) -> FakeRepository:
        self.requests.append(request)
        await asyncio.sleep(0)
        name = request.url.rstrip("/").rsplit("/", 1)[-1]
        if name in self.failing:
            raise ValueError(f"not a git repository: {request.url}")
        return FakeRepository(name, fail=name in self.extraction_failing)
