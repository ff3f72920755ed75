"""
SVT Text-TV MCP server.

Registers the Text-TV tools, resources and prompts on a FastMCP instance. The
same instance is served over stdio (``python -m texttv_mcp``) and mounted as a
streamable HTTP endpoint by ``texttv_mcp.app``.
"""

import json
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from texttv_mcp.config import SERVER_DESCRIPTION, SERVER_NAME, settings
from texttv_mcp.schemas import (
    IncludePlainText,
    NewsCategory,
    PageNumber,
    SportsCategory,
    TextTVCategory,
    TVChannel,
    WeatherRegion,
)
from texttv_mcp.services import briefings, handle_tool_call


mcp = FastMCP(
    SERVER_NAME,
    instructions=SERVER_DESCRIPTION,
    host=settings.host,
    port=settings.port,
)


def _read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=True,
        idempotentHint=True,
        openWorldHint=True,
    )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

@mcp.tool(
    name="texttv_get_page",
    description=(
        "Get a specific SVT Text-TV page by number (100-899). "
        "Returns the page content with optional plain text formatting."
    ),
    annotations=_read_only("Get Text-TV Page"),
)
async def texttv_get_page(page: PageNumber, include_plain_text: IncludePlainText = False) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_page", {"page": page, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_get_subpages",
    description=(
        "Get all subpage versions of a specific Text-TV page. "
        "Some pages have multiple subpages that rotate."
    ),
    annotations=_read_only("Get Text-TV Subpages"),
)
async def texttv_get_subpages(page: PageNumber, include_plain_text: IncludePlainText = False) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_subpages", {"page": page, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_get_news",
    description=(
        "Get news from SVT Text-TV. Categories: main (page 100), "
        "domestic (inrikes, pages 101-103), foreign (utrikes, pages 104-109)."
    ),
    annotations=_read_only("Get Text-TV News"),
)
async def texttv_get_news(
    category: NewsCategory = "main", include_plain_text: IncludePlainText = False
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_news", {"category": category, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_get_sports",
    description=(
        "Get sports content from SVT Text-TV. Categories: main (page 300), "
        "football (pages 330-339), hockey (pages 340-349), results (page 301)."
    ),
    annotations=_read_only("Get Text-TV Sports"),
)
async def texttv_get_sports(
    category: SportsCategory = "main", include_plain_text: IncludePlainText = False
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_sports", {"category": category, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_get_weather",
    description=(
        "Get weather forecasts from SVT Text-TV. Available regions: national (page 400), "
        "stockholm (402), gothenburg (403), malmo (404)."
    ),
    annotations=_read_only("Get Text-TV Weather"),
)
async def texttv_get_weather(
    region: WeatherRegion = "national", include_plain_text: IncludePlainText = False
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_weather", {"region": region, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_get_tv_schedule",
    description=(
        "Get TV schedules from SVT Text-TV. Channels: svt1 (pages 600-619), "
        "svt2 (pages 650-669), or both."
    ),
    annotations=_read_only("Get Text-TV TV Schedule"),
)
async def texttv_get_tv_schedule(
    channel: TVChannel = "both", include_plain_text: IncludePlainText = False
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_get_tv_schedule", {"channel": channel, "include_plain_text": include_plain_text}
    )


@mcp.tool(
    name="texttv_search",
    description=(
        "Search for content across SVT Text-TV pages. "
        "Optionally filter by category (news, sports, weather, tv_schedule, other)."
    ),
    annotations=_read_only("Search Text-TV"),
)
async def texttv_search(
    query: Annotated[str, Field(min_length=1, max_length=100, description="Search query string")],
    category: TextTVCategory | None = None,
    max_results: Annotated[int, Field(ge=1, le=50, description="Maximum number of results (1-50)")] = 10,
    include_plain_text: IncludePlainText = False,
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_search",
        {
            "query": query,
            "category": category,
            "max_results": max_results,
            "include_plain_text": include_plain_text,
        },
    )


@mcp.tool(
    name="texttv_browse_category",
    description=(
        "Browse pages in a Text-TV category. "
        "Get a list of available pages with optional content."
    ),
    annotations=_read_only("Browse Text-TV Category"),
)
async def texttv_browse_category(
    category: TextTVCategory,
    include_content: Annotated[bool, Field(description="Include page content (slower, more data)")] = False,
    limit: Annotated[int, Field(ge=1, le=100, description="Maximum number of pages (1-100)")] = 20,
) -> dict[str, Any]:
    return await handle_tool_call(
        "texttv_browse_category",
        {"category": category, "include_content": include_content, "limit": limit},
    )


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@mcp.resource(
    "texttv://categories",
    name="Text-TV Categories",
    description="List of available Text-TV categories with page ranges",
    mime_type="application/json",
)
def categories() -> str:
    return json.dumps(briefings.categories_resource(), ensure_ascii=False, indent=2)


@mcp.resource(
    "texttv://news/latest",
    name="Latest News",
    description="Current main news from Text-TV page 100",
    mime_type="application/json",
)
async def latest_news() -> str:
    return json.dumps(await briefings.latest_news_resource(), ensure_ascii=False, indent=2)


@mcp.resource(
    "texttv://sports/latest",
    name="Latest Sports",
    description="Current sports headlines from Text-TV page 300",
    mime_type="application/json",
)
async def latest_sports() -> str:
    return json.dumps(await briefings.latest_sports_resource(), ensure_ascii=False, indent=2)


@mcp.resource(
    "texttv://weather/national",
    name="National Weather",
    description="Current national weather forecast from Text-TV page 400",
    mime_type="application/json",
)
async def national_weather() -> str:
    return json.dumps(await briefings.national_weather_resource(), ensure_ascii=False, indent=2)


@mcp.resource(
    "texttv://tv/today",
    name="Today's TV Schedule",
    description="Current TV schedule for SVT1 and SVT2",
    mime_type="application/json",
)
async def tv_today() -> str:
    return json.dumps(await briefings.tv_today_resource(), ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

@mcp.prompt(
    name="swedish_news_summary",
    description="Get a summary of current Swedish news from Text-TV",
)
async def swedish_news_summary(focus: str | None = None) -> str:
    return await briefings.news_summary_prompt(focus)


@mcp.prompt(
    name="sports_update",
    description="Get latest sports updates and results from Text-TV",
)
async def sports_update(sport: str | None = None) -> str:
    return await briefings.sports_update_prompt(sport)


@mcp.prompt(
    name="weather_forecast",
    description="Get Swedish weather forecast from Text-TV",
)
async def weather_forecast(region: str | None = None) -> str:
    return await briefings.weather_forecast_prompt(region)


@mcp.prompt(
    name="tv_tonight",
    description="Get tonight's TV schedule for SVT channels",
)
async def tv_tonight(channel: str | None = None) -> str:
    return await briefings.tv_tonight_prompt(channel)


@mcp.prompt(
    name="texttv_page",
    description="Analyze content from a specific Text-TV page (100-899)",
)
async def texttv_page(page: str) -> str:
    return await briefings.page_analysis_prompt(page)
