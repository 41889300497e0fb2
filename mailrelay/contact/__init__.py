"""Contact form page served next to the SendMail function."""

from .page import render_contact_page
from .router import router


__all__ = ["render_contact_page", "router"]
