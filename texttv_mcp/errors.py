"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TextTVError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class InputValidationError(TextTVError):
    """Tool input outside its documented domain. Raised before any cache or upstream access."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class UpstreamError(TextTVError):
    """texttv.nu request failed or returned data we could not read."""

    def __init__(self, message: str):
        super().__init__(message, status_code=502)


class UnknownToolError(TextTVError):
    def __init__(self, name: str, known: list[str]):
        super().__init__(
            f"Unknown tool: {name}. Available: {sorted(known)}",
            status_code=404,
        )


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(TextTVError)
    async def handle_texttv_error(_request: Request, exc: TextTVError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
