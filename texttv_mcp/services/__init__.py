"""Tool registry mapping tool names to their handler functions."""

from texttv_mcp.errors import UnknownToolError
from texttv_mcp.services.pages import browse_category, get_page, get_subpages, search
from texttv_mcp.services.sections import get_news, get_sports, get_tv_schedule, get_weather

TOOL_HANDLERS = {
    "texttv_get_page": get_page,
    "texttv_get_subpages": get_subpages,
    "texttv_get_news": get_news,
    "texttv_get_sports": get_sports,
    "texttv_get_weather": get_weather,
    "texttv_get_tv_schedule": get_tv_schedule,
    "texttv_search": search,
    "texttv_browse_category": browse_category,
}


async def handle_tool_call(name: str, args: dict | None) -> dict:
    """Dispatch a tool call by name."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(name, list(TOOL_HANDLERS))
    return await handler(args or {})
