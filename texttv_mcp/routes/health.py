"""Health and readiness check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter

from texttv_mcp.config import SERVER_NAME, SERVER_VERSION, settings
from texttv_mcp.services.cache import cache

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check. No external calls."""
    return {"status": "ok", "service": SERVER_NAME, "commit": settings.git_sha}


@router.get("/health")
async def health() -> dict:
    """Service info plus cache occupancy. Does not call texttv.nu."""
    return {
        "status": "ok",
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "commit": settings.git_sha,
        "cache_entries": cache.size,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
