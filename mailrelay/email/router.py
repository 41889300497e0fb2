"""SendMail function endpoint.

Accepts ``{to, subject, body}`` as JSON and relays it through the email
service. Every response carries ``Access-Control-Allow-Origin: *`` so the
contact page can be served from another origin.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import ORJSONResponse

from mailrelay.core.logging import get_logger

from .schemas import EmailError, EmailResponse, ErrorKind
from .service import EmailSender
from .validation import parse_email_request


logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["email"])

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

ERROR_STATUS = {
    ErrorKind.PARSE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFIG: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DELIVERY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

SUCCESS_MESSAGE = "Email sent successfully"
SEND_FAILED_ERROR = "Failed to send email"
METHOD_NOT_ALLOWED_ERROR = "Method not allowed. Only POST requests are accepted."
INTERNAL_ERROR = "Internal server error"

# Every method is routed here so that non-POST requests get the JSON 405
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def json_response(status_code: int, body: EmailResponse) -> ORJSONResponse:
    """Build a JSON response carrying the CORS origin header."""
    return ORJSONResponse(
        status_code=status_code,
        content=body.to_payload(),
        headers=CORS_HEADERS,
    )


def error_response(error: EmailError) -> ORJSONResponse:
    """Map an error value to its HTTP response.

    Request problems are reported as-is; configuration and delivery problems
    are summarized as a send failure with the cause in ``details``.
    """
    if error.kind in (ErrorKind.PARSE, ErrorKind.VALIDATION):
        body = EmailResponse(error=error.message, details=error.details)
    else:
        body = EmailResponse(error=SEND_FAILED_ERROR, details=error.message)
    return json_response(ERROR_STATUS[error.kind], body)


def get_email_service(request: Request) -> EmailSender:
    """Get the email service from app state."""
    email_service = getattr(request.app.state, "email_service", None)
    if email_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Email service not available",
        )
    return email_service


async def handle_send_mail(request: Request, email_service: EmailSender) -> Response:
    """Validate the POST body and send the email."""
    parsed = parse_email_request(await request.body())

    if isinstance(parsed, EmailError):
        log_method = logger.error if parsed.kind == ErrorKind.PARSE else logger.warning
        log_method(
            "send_mail_rejected",
            error_kind=parsed.kind,
            error=parsed.message,
            details=parsed.details,
        )
        return error_response(parsed)

    logger.info(
        "email_send_requested",
        to=parsed.to,
        subject=parsed.subject[:50],
    )

    result = await email_service.send_email(parsed)

    if not result.success:
        return error_response(
            EmailError(
                result.error_kind or ErrorKind.DELIVERY,
                result.error or SEND_FAILED_ERROR,
            )
        )

    return json_response(
        status.HTTP_200_OK,
        EmailResponse(message=SUCCESS_MESSAGE, message_id=result.message_id),
    )


@router.api_route(
    "/SendMail",
    methods=ROUTED_METHODS,
    summary="Relay an email over SMTP",
)
async def send_mail(
    request: Request,
    email_service: Annotated[EmailSender, Depends(get_email_service)],
) -> Response:
    """SendMail function.

    OPTIONS answers the CORS preflight, POST sends the email and any other
    method is rejected with 405.
    """
    method = request.method.upper()

    if method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=PREFLIGHT_HEADERS)

    if method != "POST":
        return json_response(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            EmailResponse(error=METHOD_NOT_ALLOWED_ERROR),
        )

    try:
        return await handle_send_mail(request, email_service)
    except Exception as e:
        logger.exception(
            "send_mail_unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            EmailResponse(error=INTERNAL_ERROR, details=str(e)),
        )
