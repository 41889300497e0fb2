"""Parsing and validation of SendMail request bodies."""

import re
from typing import Any

import orjson

from .schemas import EmailError, EmailRequest, ErrorKind


# Shape check only, not RFC 5322 validation
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$", re.IGNORECASE)

REQUIRED_FIELDS = ("to", "subject", "body")

EMPTY_BODY_ERROR = "Request body is empty"
INVALID_JSON_ERROR = "Invalid JSON format in request body"
MISSING_FIELDS_ERROR = "Missing required fields: to, subject, body"
INVALID_FIELDS_ERROR = "Invalid required fields: to"
INVALID_EMAIL_DETAILS = "Invalid email format."
INVALID_SUBJECT_ERROR = "Invalid required fields: subject"
INVALID_SUBJECT_DETAILS = "Subject must not contain line breaks."

UTF8_BOM = "\ufeff"


def is_valid_email(email: str | None) -> bool:
    """Check that ``email`` looks like ``local@domain.tld``."""
    if email is None or not email.strip():
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _extract_fields(document: dict[str, Any]) -> dict[str, str | None] | EmailError:
    """Pick the required fields out of ``document``, ignoring key case.

    When several keys differ only in case, the last one in the document wins.
    """
    fields: dict[str, str | None] = dict.fromkeys(REQUIRED_FIELDS)
    for key, value in document.items():
        name = key.lower()
        if name not in fields:
            continue
        if value is not None and not isinstance(value, str):
            return EmailError(
                ErrorKind.PARSE,
                INVALID_JSON_ERROR,
                f"Field '{key}' must be a string, got {type(value).__name__}",
            )
        fields[name] = value
    return fields


def parse_email_request(raw: bytes | str) -> EmailRequest | EmailError:
    """Parse a raw request body into an :class:`EmailRequest`.

    Args:
        raw: Request body as received

    Returns:
        The validated request, or an ``EmailError`` of kind ``PARSE`` (empty
        body, malformed JSON) or ``VALIDATION`` (missing/blank fields, bad
        recipient, multi-line subject)
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as e:
        return EmailError(ErrorKind.PARSE, INVALID_JSON_ERROR, str(e))

    text = text.removeprefix(UTF8_BOM)
    if not text.strip():
        return EmailError(ErrorKind.PARSE, EMPTY_BODY_ERROR)

    try:
        document = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        return EmailError(ErrorKind.PARSE, INVALID_JSON_ERROR, str(e))

    if document is None:
        return EmailError(ErrorKind.VALIDATION, MISSING_FIELDS_ERROR)

    if not isinstance(document, dict):
        return EmailError(
            ErrorKind.PARSE,
            INVALID_JSON_ERROR,
            f"Expected a JSON object, got {type(document).__name__}",
        )

    fields = _extract_fields(document)
    if isinstance(fields, EmailError):
        return fields

    if any(_is_blank(fields[name]) for name in REQUIRED_FIELDS):
        return EmailError(ErrorKind.VALIDATION, MISSING_FIELDS_ERROR)

    if not is_valid_email(fields["to"]):
        return EmailError(
            ErrorKind.VALIDATION, INVALID_FIELDS_ERROR, INVALID_EMAIL_DETAILS
        )

    # Header values may not span lines
    if "\r" in fields["subject"] or "\n" in fields["subject"]:
        return EmailError(
            ErrorKind.VALIDATION, INVALID_SUBJECT_ERROR, INVALID_SUBJECT_DETAILS
        )

    return EmailRequest(to=fields["to"], subject=fields["subject"], body=fields["body"])
