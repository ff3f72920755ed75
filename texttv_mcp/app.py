"""FastAPI application entry point for the Text-TV HTTP front-end.

Serves health checks, a REST mirror of the MCP tools, and the MCP streamable
HTTP transport at /mcp.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from texttv_mcp.config import SERVER_DESCRIPTION, SERVER_NAME, SERVER_VERSION, settings
from texttv_mcp.errors import register_error_handlers
from texttv_mcp.logging_setup import configure_logging
from texttv_mcp.server import mcp
from texttv_mcp.services.cache import cache
from texttv_mcp.services.texttv_api import close_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    problems = settings.validate()
    if problems:
        logger.warning("Invalid settings: %s", ", ".join(problems))

    cache.start()
    try:
        async with mcp.session_manager.run():
            logger.info("%s v%s serving MCP at /mcp", SERVER_NAME, SERVER_VERSION)
            yield
    finally:
        await cache.stop()
        cache.destroy()
        await close_client()
        logger.info("Cache destroyed, upstream client closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="SVT Text-TV MCP",
        description=SERVER_DESCRIPTION,
        version=SERVER_VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from texttv_mcp.routes.health import router as health_router
    from texttv_mcp.routes.texttv import router as texttv_router

    app.include_router(health_router)
    app.include_router(texttv_router)

    # Registered last so the routes above take precedence; serves /mcp
    app.mount("/", mcp.streamable_http_app())

    return app


app = create_app()


def main() -> None:
    """Run the HTTP front-end with uvicorn."""
    import uvicorn

    configure_logging(stream=sys.stdout)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
