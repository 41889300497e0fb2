"""Shared FastAPI dependencies."""

from fastapi import Request

from mailrelay.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        return get_settings()
    return settings
