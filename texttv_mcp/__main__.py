"""Run the Text-TV MCP server over stdio (for Claude Desktop, Cursor, ...).

Run: python -m texttv_mcp
"""

import asyncio
import logging

from texttv_mcp.config import SERVER_DESCRIPTION, SERVER_NAME, SERVER_VERSION, settings
from texttv_mcp.logging_setup import configure_logging
from texttv_mcp.server import mcp
from texttv_mcp.services.cache import cache
from texttv_mcp.services.texttv_api import close_client

logger = logging.getLogger("texttv_mcp")


async def serve_stdio() -> None:
    problems = settings.validate()
    if problems:
        logger.warning("Invalid settings: %s", ", ".join(problems))

    cache.start()
    try:
        await mcp.run_stdio_async()
    finally:
        await cache.stop()
        cache.destroy()
        await close_client()


def main() -> None:
    # stdout is reserved for MCP JSON-RPC
    configure_logging()
    logger.info("%s v%s starting: %s", SERVER_NAME, SERVER_VERSION, SERVER_DESCRIPTION)
    try:
        asyncio.run(serve_stdio())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
