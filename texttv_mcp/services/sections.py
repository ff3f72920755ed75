"""Section views over fixed page ranges: news, sports, weather and TV schedule.

Keys carry a domain prefix (``news:``, ``sports:`` ...) so that two sections
resolving to the same page range never share an entry.
"""

import logging

from texttv_mcp.config import (
    CACHE_TTL_PAGE,
    CACHE_TTL_TV_SCHEDULE,
    CACHE_TTL_WEATHER,
    news_pages_for_category,
    sports_pages_for_category,
    tv_schedule_pages_for_channel,
    weather_page_for_region,
)
from texttv_mcp.schemas import (
    GetNewsInput,
    GetSportsInput,
    GetTVScheduleInput,
    GetWeatherInput,
    validate_input,
)
from texttv_mcp.services import texttv_api
from texttv_mcp.services.cache import cache
from texttv_mcp.services.cache_keys import page_key, page_range_key
from texttv_mcp.services.pages import page_summary

logger = logging.getLogger(__name__)

NEWS_LABELS = {
    "main": "Huvudnyheter",
    "domestic": "Inrikes",
    "foreign": "Utrikes",
}

SPORTS_LABELS = {
    "main": "Sport",
    "football": "Fotboll",
    "hockey": "Hockey",
    "results": "Resultat",
}

REGION_LABELS = {
    "national": "Sverige",
    "stockholm": "Stockholm",
    "gothenburg": "Göteborg",
    "malmo": "Malmö",
}

CHANNEL_LABELS = {
    "svt1": "SVT1",
    "svt2": "SVT2",
    "both": "SVT1 & SVT2",
}


def channel_for_page(page_num: int) -> str:
    if 600 <= page_num < 650:
        return "SVT1"
    if 650 <= page_num < 700:
        return "SVT2"
    return "Unknown"


async def _fetch_range(start: int, end: int, include_plain_text: bool) -> list[dict]:
    """Fetch a page range from texttv.nu, shaped and sorted by page number."""
    records = await texttv_api.get_client().get_page_range(start, end, include_plain_text)
    return sorted((page_summary(r) for r in records.values()), key=lambda p: p["page"])


async def get_news(args: dict) -> dict:
    """News pages: main (100), domestic (101-103) or foreign (104-109)."""
    params = validate_input(GetNewsInput, args)
    start, end = news_pages_for_category(params.category)

    key = f"news:{page_range_key(start, end, params.include_plain_text)}"
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    pages = await _fetch_range(start, end, params.include_plain_text)

    label = NEWS_LABELS.get(params.category, params.category)
    result = {
        "_summary": f"{label}: {len(pages)} news page(s) from Text-TV {start}-{end}",
        "category": params.category,
        "category_label": label,
        "page_count": len(pages),
        "pages": pages,
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_PAGE)
    return result


async def get_sports(args: dict) -> dict:
    """Sports pages: main (300), results (301), football (330-339), hockey (340-349)."""
    params = validate_input(GetSportsInput, args)
    start, end = sports_pages_for_category(params.category)

    key = f"sports:{page_range_key(start, end, params.include_plain_text)}"
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    pages = await _fetch_range(start, end, params.include_plain_text)

    label = SPORTS_LABELS.get(params.category, params.category)
    result = {
        "_summary": f"{label}: {len(pages)} sports page(s) from Text-TV {start}-{end}",
        "category": params.category,
        "category_label": label,
        "page_count": len(pages),
        "pages": pages,
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_PAGE)
    return result


async def get_weather(args: dict) -> dict:
    """Weather forecast page for a region."""
    params = validate_input(GetWeatherInput, args)
    page = weather_page_for_region(params.region)

    key = f"weather:{page_key(page, params.include_plain_text)}"
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    record = await texttv_api.get_client().get_page(page, params.include_plain_text)

    label = REGION_LABELS.get(params.region, params.region)
    result = {
        "_summary": f"Weather for {label} from Text-TV page {record['num']}",
        "region": params.region,
        "region_label": label,
        **page_summary(record),
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_WEATHER)
    return result


async def get_tv_schedule(args: dict) -> dict:
    """TV schedule pages for SVT1 (600-619), SVT2 (650-669) or both."""
    params = validate_input(GetTVScheduleInput, args)
    start, end = tv_schedule_pages_for_channel(params.channel)

    key = f"tvschedule:{page_range_key(start, end, params.include_plain_text)}"
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    pages = [
        {**p, "channel": channel_for_page(p["page"])}
        for p in await _fetch_range(start, end, params.include_plain_text)
    ]
    label = CHANNEL_LABELS.get(params.channel, params.channel)
    result = {
        "_summary": f"TV schedule for {label}: {len(pages)} page(s)",
        "channel": params.channel,
        "channel_label": label,
        "page_count": len(pages),
        "pages": pages,
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_TV_SCHEDULE)
    return result
