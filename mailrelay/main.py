"""mailrelay - Main Application.

Hosts the ContactPage and SendMail functions. Configuration is resolved once
here and handed to the components through ``app.state``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mailrelay.config import Settings, SmtpSettings, get_settings
from mailrelay.contact import router as contact_router
from mailrelay.core.logging import configure_structlog, get_logger
from mailrelay.core.middleware import RequestContextMiddleware
from mailrelay.email.router import CORS_HEADERS, INTERNAL_ERROR
from mailrelay.email.router import router as email_router
from mailrelay.email.service import EmailSender, EmailService
from mailrelay.health import router as health_router


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    smtp_settings: SmtpSettings = app.state.smtp_settings

    logger.info(
        "starting_application",
        app_name=app_settings.app_name,
        version=app_settings.app_version,
        environment=app_settings.environment,
    )

    if smtp_settings.is_configured:
        logger.info(
            "email_service_initialized",
            host=smtp_settings.host,
            port=smtp_settings.port,
            use_ssl=smtp_settings.use_ssl,
            auth_type=smtp_settings.auth_type,
            sender=smtp_settings.from_email,
        )
    else:
        logger.warning(
            "smtp_not_configured",
            message="SendMail will fail until SMTP_HOST, SMTP_USERNAME and FROM_EMAIL are set",
        )

    yield

    logger.info("shutting_down_application")


def create_app(
    app_settings: Settings | None = None,
    smtp_settings: SmtpSettings | None = None,
    email_service: EmailSender | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Application settings; read from the environment if omitted
        smtp_settings: SMTP settings; read from the environment if omitted
        email_service: Sender to use instead of the SMTP-backed service
    """
    app_settings = app_settings or get_settings()
    smtp_settings = smtp_settings or SmtpSettings()

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Contact form mail relay",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if app_settings.is_development else None,
    )

    app.state.settings = app_settings
    app.state.smtp_settings = smtp_settings
    app.state.email_service = email_service or EmailService(
        smtp_settings,
        template_path=app_settings.template_path,
        escape_body=app_settings.template_escape_body,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_settings.log_requests,
        exclude_paths=app_settings.log_exclude_paths,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Answer HTTP errors in the SendMail error shape."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers={**CORS_HEADERS, **(exc.headers or {})},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler for unhandled exceptions."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR, "details": str(exc)},
            headers=CORS_HEADERS,
        )

    app.include_router(health_router)
    app.include_router(contact_router)
    app.include_router(email_router)

    return app


app = create_app(settings)
