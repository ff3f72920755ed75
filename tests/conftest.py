"""
Shared fixtures: a controllable clock, a fake texttv.nu client, and a clean
cache singleton for every test.
"""

import asyncio

import pytest

from texttv_mcp.errors import UpstreamError
from texttv_mcp.services import texttv_api
from texttv_mcp.services.cache import cache


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_record(num: int, text: str | None = None, plain: bool = False, subpage: int = 1) -> dict:
    text = text or f"Innehåll på sida {num}"
    return {
        "num": num,
        "id": f"{num}-{subpage}",
        "title": f"Sida {num}",
        "content": f'<div class="root"><span>{text}</span></div>',
        "content_plain": text if plain else None,
        "date_updated_unix": 1700000000 + num,
        "next_page": num + 1,
        "prev_page": num - 1,
    }


class FakeTextTVClient:
    """Stands in for TextTVClient. Serves every page in ``pages`` and records calls."""

    def __init__(self, pages: dict[int, str] | None = None, subpages: dict[int, int] | None = None):
        self.pages = pages if pages is not None else {n: f"Nyhet nummer {n}" for n in range(100, 900)}
        self.subpages = subpages or {}
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    async def _respond(self) -> None:
        # Yield like a real request would
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with

    async def get_page(self, page: int, include_plain_text: bool = False) -> dict:
        self.calls.append(("get_page", page, include_plain_text))
        await self._respond()
        if page not in self.pages:
            raise UpstreamError(f"Page {page} not found")
        return make_record(page, self.pages[page], include_plain_text)

    async def get_page_range(self, start: int, end: int, include_plain_text: bool = False) -> dict[int, dict]:
        self.calls.append(("get_page_range", start, end, include_plain_text))
        await self._respond()
        # Provider order is not guaranteed to be sorted
        nums = [n for n in range(end, start - 1, -1) if n in self.pages]
        return {n: make_record(n, self.pages[n], include_plain_text) for n in nums}

    async def get_all_subpages(self, page: int, include_plain_text: bool = False) -> list[dict]:
        self.calls.append(("get_all_subpages", page, include_plain_text))
        await self._respond()
        if page not in self.pages:
            return []
        return [
            make_record(page, f"{self.pages[page]} del {i}", include_plain_text, subpage=i)
            for i in range(1, self.subpages.get(page, 1) + 1)
        ]

    async def search(self, query: str, start: int, end: int, include_plain_text: bool = False) -> dict[int, dict]:
        self.calls.append(("search", query, start, end, include_plain_text))
        await self._respond()
        return {
            n: make_record(n, text, include_plain_text)
            for n, text in self.pages.items()
            if start <= n <= end and query.lower() in text.lower()
        }

    async def aclose(self) -> None:
        pass


@pytest.fixture(autouse=True)
def clean_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def fake_client(monkeypatch) -> FakeTextTVClient:
    client = FakeTextTVClient()
    monkeypatch.setattr(texttv_api, "_client", client)
    return client


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
