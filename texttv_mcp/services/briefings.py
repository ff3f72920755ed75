"""Content for the MCP resources and prompt templates.

These read straight from texttv.nu with plain text included and are not cached.
Prompts that combine several pages skip the pages that fail to load.
"""

import asyncio
import logging

from texttv_mcp.config import (
    CATEGORIES,
    NEWS_PAGES,
    PAGE_MAX,
    PAGE_MIN,
    SPORTS_PAGES,
    TV_SCHEDULE_PAGES,
    WEATHER_PAGES,
    get_category_for_page,
    weather_page_for_region,
)
from texttv_mcp.errors import InputValidationError, UpstreamError
from texttv_mcp.services import texttv_api
from texttv_mcp.services.pages import iso_timestamp

logger = logging.getLogger(__name__)


def _page_brief(record: dict) -> dict:
    return {
        "page": record["num"],
        "content": record["content"],
        "content_plain": record.get("content_plain"),
        "updated_at": iso_timestamp(record["date_updated_unix"]),
    }


def _page_text(record: dict) -> str:
    return record.get("content_plain") or record["content"]


async def _fetch_pages(pages: list[int]) -> list[dict]:
    """Fetch several pages concurrently, dropping the ones that fail."""
    client = texttv_api.get_client()
    results = await asyncio.gather(
        *[client.get_page(p, include_plain_text=True) for p in pages],
        return_exceptions=True,
    )
    records = []
    for page, result in zip(pages, results):
        if isinstance(result, UpstreamError):
            logger.warning("Skipping page %s in prompt: %s", page, result)
            continue
        if isinstance(result, BaseException):
            raise result
        records.append(result)
    return records


def _joined(records: list[dict]) -> str:
    return "\n\n".join(f"--- Sida {r['num']} ---\n{_page_text(r)}" for r in records)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

def categories_resource() -> dict:
    return {
        "categories": [
            {
                "id": key,
                "label": info["label"],
                "label_en": info["label_en"],
                "page_range": {"start": info["start"], "end": info["end"]},
            }
            for key, info in CATEGORIES.items()
        ],
        "known_pages": {
            "news": NEWS_PAGES,
            "sports": SPORTS_PAGES,
            "weather": WEATHER_PAGES,
            "tv_schedule": TV_SCHEDULE_PAGES,
        },
    }


async def latest_news_resource() -> dict:
    record = await texttv_api.get_client().get_page(NEWS_PAGES["main"], include_plain_text=True)
    return {**_page_brief(record), "title": record.get("title")}


async def latest_sports_resource() -> dict:
    record = await texttv_api.get_client().get_page(SPORTS_PAGES["main"], include_plain_text=True)
    return {**_page_brief(record), "title": record.get("title")}


async def national_weather_resource() -> dict:
    record = await texttv_api.get_client().get_page(WEATHER_PAGES["national"], include_plain_text=True)
    return {**_page_brief(record), "region": "national"}


async def tv_today_resource() -> dict:
    client = texttv_api.get_client()
    svt1, svt2 = await asyncio.gather(
        client.get_page(TV_SCHEDULE_PAGES["svt1"], include_plain_text=True),
        client.get_page(TV_SCHEDULE_PAGES["svt2"], include_plain_text=True),
    )
    return {"svt1": _page_brief(svt1), "svt2": _page_brief(svt2)}


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

async def news_summary_prompt(focus: str | None = None) -> str:
    if focus == "domestic":
        start = NEWS_PAGES["domestic_start"]
        pages = [start, start + 1, start + 2]
    elif focus == "foreign":
        start = NEWS_PAGES["foreign_start"]
        pages = [start, start + 1, start + 2]
    elif focus == "all":
        pages = [NEWS_PAGES["main"], NEWS_PAGES["domestic_start"], NEWS_PAGES["foreign_start"]]
    else:
        pages = [NEWS_PAGES["main"]]

    content = _joined(await _fetch_pages(pages))
    return (
        "Sammanfatta de viktigaste nyheterna från SVT Text-TV. "
        f"Fokus: {focus or 'huvudnyheter'}.\n\nInnehåll från Text-TV:\n\n{content}"
    )


async def sports_update_prompt(sport: str | None = None) -> str:
    if sport == "football":
        page = SPORTS_PAGES["football_start"]
    elif sport == "hockey":
        page = SPORTS_PAGES["hockey_start"]
    else:
        page = SPORTS_PAGES["main"]

    record = await texttv_api.get_client().get_page(page, include_plain_text=True)
    return (
        f"Ge mig en sportuppdatering baserat på SVT Text-TV. Sport: {sport or 'allmänt'}."
        f"\n\nInnehåll från sida {record['num']}:\n\n{_page_text(record)}"
    )


async def weather_forecast_prompt(region: str | None = None) -> str:
    page = weather_page_for_region(region or "national")
    record = await texttv_api.get_client().get_page(page, include_plain_text=True)
    return (
        f"Ge mig väderprognosen för {region or 'Sverige'} baserat på SVT Text-TV."
        f"\n\nInnehåll från sida {record['num']}:\n\n{_page_text(record)}"
    )


async def tv_tonight_prompt(channel: str | None = None) -> str:
    if channel == "svt1":
        pages = [TV_SCHEDULE_PAGES["svt1"]]
    elif channel == "svt2":
        pages = [TV_SCHEDULE_PAGES["svt2"]]
    else:
        pages = [TV_SCHEDULE_PAGES["svt1"], TV_SCHEDULE_PAGES["svt2"]]

    content = _joined(await _fetch_pages(pages))
    return (
        f"Vad går det för program på SVT ikväll? Kanal: {channel or 'SVT1 och SVT2'}."
        f"\n\nTV-tablå från Text-TV:\n\n{content}"
    )


async def page_analysis_prompt(page: str) -> str:
    try:
        page_num = int(page)
    except (TypeError, ValueError):
        page_num = None
    if page_num is None or not PAGE_MIN <= page_num <= PAGE_MAX:
        raise InputValidationError(
            f"Invalid page number. Must be between {PAGE_MIN} and {PAGE_MAX}."
        )

    label = CATEGORIES[get_category_for_page(page_num)]["label"]
    record = await texttv_api.get_client().get_page(page_num, include_plain_text=True)
    return f"Analysera innehållet på Text-TV sida {page_num} ({label}):\n\n{_page_text(record)}"
