"""Schemas for the mail relay.

Request/Response models for:
- The SendMail JSON contract
- Delivery results passed between the service and the router
- Error values returned instead of raised
"""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(StrEnum):
    """Failure classes of the send pipeline."""

    PARSE = "parse"
    VALIDATION = "validation"
    CONFIG = "config"
    DELIVERY = "delivery"


@dataclass(frozen=True)
class EmailError:
    """A failure reported by value, with a short summary and optional cause."""

    kind: ErrorKind
    message: str
    details: str | None = None


class EmailRequest(BaseModel):
    """Request to send an email."""

    to: str = Field(..., description="Recipient email address")
    subject: str = Field(..., description="Email subject")
    body: str = Field(..., description="HTML body content")


class EmailResponse(BaseModel):
    """JSON body returned by the SendMail function.

    Either ``message`` and ``messageId`` or ``error`` (with optional
    ``details``) is set; unset fields are left out of the payload.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(None, description="Success message")
    message_id: str | None = Field(
        None, alias="messageId", description="Message-ID of the sent email"
    )
    error: str | None = Field(None, description="Error summary if failed")
    details: str | None = Field(None, description="Underlying cause of the error")

    def to_payload(self) -> dict[str, str]:
        """Serialize with camelCase keys, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SendEmailResult(BaseModel):
    """Outcome of a single delivery attempt."""

    success: bool = Field(..., description="Whether the email was sent successfully")
    message_id: str | None = Field(None, description="Message-ID of the sent email")
    error: str | None = Field(None, description="Error message if failed")
    error_kind: ErrorKind | None = Field(None, description="Failure class if failed")

    @classmethod
    def sent(cls, message_id: str) -> "SendEmailResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: EmailError) -> "SendEmailResult":
        return cls(success=False, error=error.message, error_kind=error.kind)
