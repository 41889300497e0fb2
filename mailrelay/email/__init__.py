"""Email module relaying SendMail requests over SMTP."""

from .composer import ComposedMessage, compose_message
from .delivery import SmtpDeliveryClient
from .schemas import (
    EmailError,
    EmailRequest,
    EmailResponse,
    ErrorKind,
    SendEmailResult,
)
from .service import EmailSender, EmailService
from .templates import render_email_body
from .validation import is_valid_email, parse_email_request


__all__ = [
    "ComposedMessage",
    "EmailError",
    "EmailRequest",
    "EmailResponse",
    "EmailSender",
    "EmailService",
    "ErrorKind",
    "SendEmailResult",
    "SmtpDeliveryClient",
    "compose_message",
    "is_valid_email",
    "parse_email_request",
    "render_email_body",
]
