"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.config import Settings
from mailrelay.dependencies import get_app_settings


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness probe - checks if the application is running."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, str | bool]:
    """Readiness probe - reports whether SMTP delivery is configured."""
    smtp_settings = getattr(request.app.state, "smtp_settings", None)
    return {
        "status": "ready",
        "environment": settings.environment,
        "smtp_configured": bool(smtp_settings and smtp_settings.is_configured),
    }
