"""Page-level Text-TV handlers: single pages, subpages, search and category browse.

Every handler validates first, then checks the cache, and only on a miss calls
texttv.nu. Failed fetches raise and are never cached.
"""

import logging
import re
from datetime import datetime, timezone

from texttv_mcp.config import CACHE_TTL_CATEGORY, CACHE_TTL_PAGE, CACHE_TTL_SEARCH, CATEGORIES
from texttv_mcp.schemas import (
    BrowseCategoryInput,
    GetPageInput,
    GetSubpagesInput,
    SearchInput,
    validate_input,
)
from texttv_mcp.services import texttv_api
from texttv_mcp.services.cache import cache
from texttv_mcp.services.cache_keys import category_key, page_key, search_key
from texttv_mcp.services.texttv_api import record_text

logger = logging.getLogger(__name__)

# Search scope when no category is given
DEFAULT_SEARCH_RANGE = (100, 199)


def iso_timestamp(unix: int) -> str:
    return datetime.fromtimestamp(unix, tz=timezone.utc).isoformat()


def page_summary(record: dict, with_plain_text: bool = True) -> dict:
    """Common response fields for one page record."""
    result = {
        "page": record["num"],
        "title": record.get("title"),
        "content": record["content"],
        "updated_at": iso_timestamp(record["date_updated_unix"]),
        "updated_unix": record["date_updated_unix"],
    }
    if with_plain_text:
        result["content_plain"] = record.get("content_plain")
    return result


async def get_page(args: dict) -> dict:
    """Get a single Text-TV page."""
    params = validate_input(GetPageInput, args)

    key = page_key(params.page, params.include_plain_text)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    record = await texttv_api.get_client().get_page(params.page, params.include_plain_text)

    result = {
        **page_summary(record),
        "next_page": record.get("next_page"),
        "prev_page": record.get("prev_page"),
        "_summary": f"Text-TV page {record['num']}: {record.get('title') or 'untitled'}",
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_PAGE)
    return result


async def get_subpages(args: dict) -> dict:
    """Get all rotating subpage versions of a page."""
    params = validate_input(GetSubpagesInput, args)

    key = f"subpages:{page_key(params.page, params.include_plain_text)}"
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    records = await texttv_api.get_client().get_all_subpages(params.page, params.include_plain_text)

    # Nothing to serve yet; don't pin an empty answer for a full TTL
    if not records:
        return {
            "_summary": f"Text-TV page {params.page} has no subpages",
            "page": params.page,
            "subpage_count": 0,
            "subpages": [],
        }

    subpages = [{**page_summary(r), "id": r["id"]} for r in records]
    result = {
        "_summary": f"Text-TV page {params.page}: {len(subpages)} subpage(s)",
        "page": params.page,
        "subpage_count": len(subpages),
        "subpages": subpages,
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_PAGE)
    return result


def extract_match_context(content: str, query: str, context_length: int = 100) -> str | None:
    """Snippet around the first case-insensitive match, with HTML tags stripped."""
    index = content.lower().find(query.lower())
    if index == -1:
        return None

    start = max(0, index - context_length)
    end = min(len(content), index + len(query) + context_length)

    context = re.sub(r"<[^>]*>", " ", content[start:end])
    context = re.sub(r"\s+", " ", context).strip()

    if start > 0:
        context = "..." + context
    if end < len(content):
        context = context + "..."
    return context


def _limit_results(result: dict, params: SearchInput) -> dict:
    results = result["results"][:params.max_results]
    if not params.include_plain_text:
        results = [{**r, "content_plain": None} for r in results]
    return {
        **result,
        "category": params.category,
        "_summary": f"{len(results)} Text-TV page(s) matching {result['query']!r}",
        "total_results": len(results),
        "results": results,
    }


async def search(args: dict) -> dict:
    """Search Text-TV pages within a category (news by default).

    The key has no text format in it, so the full match set is always fetched
    with plain text and cached as is. max_results and include_plain_text only
    shape what is returned.
    """
    params = validate_input(SearchInput, args)

    if params.category:
        start_page = CATEGORIES[params.category]["start"]
        end_page = CATEGORIES[params.category]["end"]
    else:
        start_page, end_page = DEFAULT_SEARCH_RANGE

    key = search_key(params.query, start_page, end_page)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return _limit_results(cached, params)

    matches = await texttv_api.get_client().search(
        params.query, start_page, end_page, include_plain_text=True
    )

    results = []
    for record in matches.values():
        results.append(
            {
                **page_summary(record),
                "match_context": extract_match_context(record_text(record), params.query),
            }
        )
    results.sort(key=lambda r: r["page"])

    full_result = {
        "query": params.query,
        "category": params.category,
        "total_results": len(results),
        "results": results,
    }
    cache.set(key, full_result, ttl_seconds=CACHE_TTL_SEARCH)
    return _limit_results(full_result, params)


def _limit_pages(result: dict, limit: int) -> dict:
    pages = result["pages"][:limit]
    return {
        **result,
        "_summary": f"{result['category_label_en']}: {len(pages)} page(s)",
        "page_count": len(pages),
        "pages": pages,
    }


async def browse_category(args: dict) -> dict:
    """List pages of a category, optionally with their content."""
    params = validate_input(BrowseCategoryInput, args)
    info = CATEGORIES[params.category]

    fetch_end = min(info["start"] + params.limit - 1, info["end"])

    # The key has no limit in it, so a cached browse is only reused when it
    # fetched at least as far as this request needs.
    key = category_key(params.category, params.include_content)
    cached = cache.get(key)
    if cached is not None and cached["fetched_range"]["end"] >= fetch_end:
        logger.debug("Cache hit %s", key)
        return _limit_pages(cached, params.limit)

    records = await texttv_api.get_client().get_page_range(
        info["start"], fetch_end, params.include_content
    )

    pages = []
    for record in records.values():
        if params.include_content:
            pages.append(page_summary(record))
        else:
            pages.append(
                {
                    "page": record["num"],
                    "title": record.get("title"),
                    "updated_at": iso_timestamp(record["date_updated_unix"]),
                    "updated_unix": record["date_updated_unix"],
                }
            )
    pages.sort(key=lambda p: p["page"])

    result = {
        "category": params.category,
        "category_label": info["label"],
        "category_label_en": info["label_en"],
        "page_range": {"start": info["start"], "end": info["end"]},
        "fetched_range": {"start": info["start"], "end": fetch_end},
        "page_count": len(pages),
        "pages": pages,
    }
    cache.set(key, result, ttl_seconds=CACHE_TTL_CATEGORY)
    return _limit_pages(result, params.limit)
