"""Text-TV routes: a REST mirror of the MCP tools.

texttv_get_page         → GET /pages/{page}
texttv_get_subpages     → GET /pages/{page}/subpages
texttv_get_news         → GET /news
texttv_get_sports       → GET /sports
texttv_get_weather      → GET /weather
texttv_get_tv_schedule  → GET /tv-schedule
texttv_search           → GET /search
texttv_browse_category  → GET /categories/{category}

Range and choice checks live in the handlers, so an out-of-range page or an
unknown category surfaces as 400 through the centralized error handlers.
Values that are not even the declared type (``/pages/abc``) are rejected by
FastAPI itself with 422.
"""

from fastapi import APIRouter, Query

from texttv_mcp.services import handle_tool_call

router = APIRouter()


@router.get("/pages/{page}")
async def page(page: int, include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_page", {"page": page, "include_plain_text": include_plain_text}
    )


@router.get("/pages/{page}/subpages")
async def subpages(page: int, include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_subpages", {"page": page, "include_plain_text": include_plain_text}
    )


@router.get("/news")
async def news(category: str = Query("main"), include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_news", {"category": category, "include_plain_text": include_plain_text}
    )


@router.get("/sports")
async def sports(category: str = Query("main"), include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_sports", {"category": category, "include_plain_text": include_plain_text}
    )


@router.get("/weather")
async def weather(region: str = Query("national"), include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_weather", {"region": region, "include_plain_text": include_plain_text}
    )


@router.get("/tv-schedule")
async def tv_schedule(channel: str = Query("both"), include_plain_text: bool = Query(False)) -> dict:
    return await handle_tool_call(
        "texttv_get_tv_schedule", {"channel": channel, "include_plain_text": include_plain_text}
    )


@router.get("/search")
async def search(
    query: str = Query(...),
    category: str | None = Query(None),
    max_results: int = Query(10),
    include_plain_text: bool = Query(False),
) -> dict:
    return await handle_tool_call(
        "texttv_search",
        {
            "query": query,
            "category": category,
            "max_results": max_results,
            "include_plain_text": include_plain_text,
        },
    )


@router.get("/categories/{category}")
async def browse(
    category: str,
    include_content: bool = Query(False),
    limit: int = Query(20),
) -> dict:
    return await handle_tool_call(
        "texttv_browse_category",
        {"category": category, "include_content": include_content, "limit": limit},
    )
