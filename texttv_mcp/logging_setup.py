"""Logging configuration shared by the stdio and HTTP entry points."""

import logging
import sys
from typing import TextIO

from texttv_mcp.config import settings

JSON_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
LOCAL_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(stream: TextIO = sys.stderr) -> None:
    """Structured logging: JSON for production, human-readable for local.

    The stdio transport owns stdout for JSON-RPC, so it must log to stderr.
    """
    logging.basicConfig(
        level=settings.log_level,
        format=JSON_FORMAT if settings.is_production else LOCAL_FORMAT,
        stream=stream,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
