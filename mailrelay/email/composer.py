"""Builds the outgoing message for a validated request."""

from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, formatdate
from uuid import uuid4

from mailrelay.config.settings import SmtpSettings

from .schemas import EmailRequest


def generate_message_id(host: str) -> str:
    """Return a fresh ``<uuid>@<host>`` Message-ID."""
    return f"<{uuid4()}@{host}>"


@dataclass(frozen=True)
class ComposedMessage:
    """A message ready for a single delivery attempt."""

    sender: str
    recipient: str
    subject: str
    html_body: str
    message_id: str

    def to_email_message(self) -> EmailMessage:
        """Build the HTML-only RFC 5322 message."""
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = self.recipient
        message["Subject"] = self.subject
        message["Message-ID"] = self.message_id
        message["Date"] = formatdate(localtime=True)
        message.set_content(self.html_body, subtype="html", charset="utf-8")
        return message


def compose_message(
    settings: SmtpSettings,
    request: EmailRequest,
    html_body: str,
) -> ComposedMessage:
    """Compose the message for ``request`` using the configured sender.

    Args:
        settings: SMTP settings providing the sender and the Message-ID host
        request: Validated email request
        html_body: Rendered HTML body

    Returns:
        ComposedMessage carrying the generated Message-ID
    """
    return ComposedMessage(
        sender=formataddr((settings.from_name, settings.from_email)),
        recipient=formataddr(("", request.to)),
        subject=request.subject,
        html_body=html_body,
        message_id=generate_message_id(settings.host),
    )
