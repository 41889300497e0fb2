"""ContactPage function endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from mailrelay.config import Settings
from mailrelay.core.logging import get_logger
from mailrelay.dependencies import get_app_settings

from .page import render_contact_page


logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])


@router.get(
    "/ContactPage",
    response_class=HTMLResponse,
    summary="Contact form page",
)
async def contact_page(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HTMLResponse:
    """Serve the contact form wired to the configured recipient."""
    recipient_email = settings.recipient_email
    logger.info("contact_page_requested", recipient=recipient_email)

    return HTMLResponse(
        content=render_contact_page(recipient_email),
        headers={"Cache-Control": "no-cache"},
    )
