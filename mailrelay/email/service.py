"""Email service relaying contact-form messages over SMTP.

Renders the request into the HTML template, composes the message and hands it
to the SMTP delivery client. Every outcome, including configuration problems,
comes back as a :class:`SendEmailResult`.
"""

from pathlib import Path
from typing import Protocol

from mailrelay.config.settings import SmtpSettings
from mailrelay.core.logging import get_logger

from .composer import compose_message
from .delivery import SmtpDeliveryClient
from .schemas import EmailRequest, SendEmailResult
from .templates import DEFAULT_TEMPLATE_PATH, render_email_body


logger = get_logger(__name__)


class EmailSender(Protocol):
    """Capability to send one validated email request."""

    async def send_email(self, request: EmailRequest) -> SendEmailResult: ...


class EmailService:
    """Service for sending emails through the configured SMTP server."""

    def __init__(
        self,
        settings: SmtpSettings,
        delivery_client: SmtpDeliveryClient | None = None,
        template_path: Path | str = DEFAULT_TEMPLATE_PATH,
        escape_body: bool = False,
    ):
        """Initialize the service.

        Args:
            settings: SMTP settings snapshot, resolved once at startup
            delivery_client: Client used to talk to the SMTP server
            template_path: HTML template with ``{{subject}}``/``{{body}}``
            escape_body: HTML-escape request fields before rendering
        """
        self.settings = settings
        self.delivery_client = delivery_client or SmtpDeliveryClient(settings)
        self.template_path = template_path
        self.escape_body = escape_body

    async def send_email(self, request: EmailRequest) -> SendEmailResult:
        """Send an email via SMTP.

        Args:
            request: Validated email request

        Returns:
            SendEmailResult with success status and Message-ID
        """
        html_body = render_email_body(
            request,
            template_path=self.template_path,
            escape_body=self.escape_body,
        )

        message = compose_message(self.settings, request, html_body)
        result = await self.delivery_client.deliver(message)

        if result.success:
            logger.info(
                "email_sent",
                message_id=result.message_id,
                to=request.to,
                subject=request.subject[:50],
            )
        else:
            logger.error(
                "email_send_failed",
                error=result.error,
                error_kind=result.error_kind,
                to=request.to,
                subject=request.subject[:50],
            )

        return result
