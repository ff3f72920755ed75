"""texttv.nu API client.

Free API, only an app id is required. One endpoint serves everything:

    GET {base}/get/{pages}?app={app_id}[&includePlainTextContent=1]

where ``pages`` is a page number (``100``) or a range (``101-103``). The
response is a JSON list with one object per page; ``content`` (and
``content_plain`` when requested) is a list holding one entry per rotating
subpage.
"""

import logging
import re

import httpx

from texttv_mcp.config import settings
from texttv_mcp.errors import UpstreamError

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")


def _optional_page(value) -> int | None:
    if value in (None, "", 0, "0"):
        return None
    return int(value)


def _pick(value, index: int):
    if isinstance(value, list):
        return value[index] if index < len(value) else None
    return value


def _subpage_count(raw: dict) -> int:
    content = raw.get("content")
    if isinstance(content, list):
        return len(content)
    return 1 if content else 0


def _to_record(raw: dict, index: int = 0) -> dict:
    """Normalize one page object (and one of its subpages) into a page record."""
    try:
        num = int(raw["num"])
        record = {
            "num": num,
            "id": f"{raw.get('id', num)}-{index + 1}",
            "title": raw.get("title") or None,
            "content": _pick(raw["content"], index) or "",
            "content_plain": _pick(raw.get("content_plain"), index),
            "date_updated_unix": int(raw["date_updated_unix"]),
            "next_page": _optional_page(raw.get("next_page")),
            "prev_page": _optional_page(raw.get("prev_page")),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError(f"Malformed page data from texttv.nu: {e!r}") from e
    return record


def record_text(record: dict) -> str:
    """Text used for matching: plain content when present, else HTML with tags removed."""
    if record.get("content_plain"):
        return record["content_plain"]
    return _TAG_RE.sub(" ", record.get("content") or "")


class TextTVClient:
    def __init__(
        self,
        app_id: str,
        base_url: str = "https://api.texttv.nu/api",
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.app_id = app_id
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": f"{app_id} (httpx)"},
            transport=transport,
        )

    async def _fetch(self, pages: str, include_plain_text: bool) -> list[dict]:
        params = {"app": self.app_id}
        if include_plain_text:
            params["includePlainTextContent"] = 1

        try:
            resp = await self._http.get(f"/get/{pages}", params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("texttv.nu fetch failed for %s: %s", pages, e)
            raise UpstreamError(f"texttv.nu request for page(s) {pages} failed: {e}") from e
        except ValueError as e:
            logger.warning("texttv.nu returned invalid JSON for %s", pages)
            raise UpstreamError(f"texttv.nu returned invalid JSON for page(s) {pages}") from e

        if not isinstance(data, list):
            raise UpstreamError(f"Unexpected texttv.nu response for page(s) {pages}")
        return data

    async def get_page(self, page: int, include_plain_text: bool = False) -> dict:
        """Fetch one page (its first subpage)."""
        data = await self._fetch(str(page), include_plain_text)
        if not data:
            raise UpstreamError(f"Page {page} not found")
        return _to_record(data[0])

    async def get_page_range(
        self, start: int, end: int, include_plain_text: bool = False
    ) -> dict[int, dict]:
        """Fetch pages start..end as {page number: record}, in provider order."""
        data = await self._fetch(f"{start}-{end}", include_plain_text)
        pages: dict[int, dict] = {}
        for raw in data:
            record = _to_record(raw)
            pages[record["num"]] = record
        return pages

    async def get_all_subpages(self, page: int, include_plain_text: bool = False) -> list[dict]:
        """Fetch every rotating subpage of a page. Empty list if there are none."""
        data = await self._fetch(str(page), include_plain_text)
        subpages = []
        for raw in data:
            for index in range(_subpage_count(raw)):
                subpages.append(_to_record(raw, index))
        return subpages

    async def search(
        self, query: str, start: int, end: int, include_plain_text: bool = False
    ) -> dict[int, dict]:
        """Pages in start..end whose text contains ``query`` (case-insensitive)."""
        pages = await self.get_page_range(start, end, include_plain_text)
        needle = query.lower()
        return {
            num: record
            for num, record in pages.items()
            if needle in record_text(record).lower()
        }

    async def aclose(self) -> None:
        await self._http.aclose()


_client: TextTVClient | None = None


def get_client() -> TextTVClient:
    """Return the shared client, creating it on first call."""
    global _client
    if _client is None:
        _client = TextTVClient(
            app_id=settings.texttv_app_id,
            base_url=settings.texttv_api_base,
            timeout=settings.texttv_timeout,
        )
    return _client


async def close_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
