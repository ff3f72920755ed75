"""SVT Text-TV MCP server: texttv.nu pages exposed as MCP tools, resources and prompts."""

from texttv_mcp.config import SERVER_VERSION as __version__

__all__ = ["__version__"]
