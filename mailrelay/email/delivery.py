"""SMTP delivery client built on aiosmtplib.

One call to :meth:`SmtpDeliveryClient.deliver` opens one connection, sends one
message and closes the connection again. Nothing is retried; a failure at any
step is returned as a :class:`SendEmailResult` rather than raised.
"""

import base64
from collections.abc import Callable

import aiosmtplib
from aiosmtplib import SMTPAuthenticationError, SMTPStatus

from mailrelay.config.settings import AuthType, SmtpSettings
from mailrelay.core.logging import get_logger

from .composer import ComposedMessage
from .schemas import EmailError, ErrorKind, SendEmailResult


logger = get_logger(__name__)

INCOMPLETE_CONFIG_ERROR = (
    "SMTP configuration is incomplete. Please check environment variables."
)
MISSING_ACCESS_TOKEN_ERROR = (
    "OAuth2 access token is required for OAuth2 authentication."
)
MISSING_PASSWORD_ERROR = "SMTP password is required for basic authentication."

SmtpFactory = Callable[..., aiosmtplib.SMTP]


def build_xoauth2_string(username: str, access_token: str) -> bytes:
    """Build the base64 initial response for ``AUTH XOAUTH2``."""
    auth_string = f"user={username}\x01auth=Bearer {access_token}\x01\x01"
    return base64.b64encode(auth_string.encode("utf-8"))


def describe_error(error: Exception) -> str:
    """Server reply text for SMTP errors, the exception text otherwise."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__


def check_settings(settings: SmtpSettings) -> EmailError | None:
    """Return a CONFIG error when a session could not be established.

    Covers the connection fields as well as the credential required by the
    configured authentication type.
    """
    if not settings.is_configured:
        return EmailError(ErrorKind.CONFIG, INCOMPLETE_CONFIG_ERROR)

    if settings.auth_type == AuthType.OAUTH2:
        if not settings.oauth2_access_token:
            return EmailError(ErrorKind.CONFIG, MISSING_ACCESS_TOKEN_ERROR)
    elif not settings.password:
        return EmailError(ErrorKind.CONFIG, MISSING_PASSWORD_ERROR)

    return None


class SmtpDeliveryClient:
    """Sends composed messages over SMTP.

    Uses implicit TLS when ``use_ssl`` is set and requires STARTTLS
    otherwise. Authentication is either username/password or SASL XOAUTH2
    with a bearer access token.
    """

    def __init__(
        self,
        settings: SmtpSettings,
        smtp_factory: SmtpFactory = aiosmtplib.SMTP,
    ):
        """Initialize the client.

        Args:
            settings: SMTP settings snapshot
            smtp_factory: Callable returning an unconnected ``aiosmtplib.SMTP``
        """
        self.settings = settings
        self._smtp_factory = smtp_factory

    def _create_client(self) -> aiosmtplib.SMTP:
        return self._smtp_factory(
            hostname=self.settings.host,
            port=self.settings.port,
            use_tls=self.settings.use_ssl,
            start_tls=not self.settings.use_ssl,
            timeout=self.settings.timeout,
        )

    async def _authenticate(self, smtp: aiosmtplib.SMTP) -> None:
        if self.settings.auth_type == AuthType.OAUTH2:
            await self._authenticate_xoauth2(smtp)
        else:
            await smtp.login(self.settings.username, self.settings.password)

    async def _authenticate_xoauth2(self, smtp: aiosmtplib.SMTP) -> None:
        """Run ``AUTH XOAUTH2`` with the configured access token.

        On rejection the server answers 334 with an error challenge, which
        must be acknowledged with an empty line before the final status.
        """
        await smtp.ehlo()
        response = await smtp.execute_command(
            b"AUTH",
            b"XOAUTH2",
            build_xoauth2_string(
                self.settings.username,
                self.settings.oauth2_access_token or "",
            ),
        )
        if response.code == SMTPStatus.auth_continue:
            response = await smtp.execute_command(b"")

        if response.code != SMTPStatus.auth_successful:
            raise SMTPAuthenticationError(response.code, response.message)

    async def _disconnect(self, smtp: aiosmtplib.SMTP) -> None:
        """Send QUIT, falling back to closing the transport."""
        if not smtp.is_connected:
            return
        try:
            await smtp.quit()
        except Exception as e:
            logger.warning(
                "smtp_quit_failed",
                host=self.settings.host,
                error=describe_error(e),
                error_type=type(e).__name__,
            )
            smtp.close()

    async def deliver(self, message: ComposedMessage) -> SendEmailResult:
        """Deliver ``message`` in a single attempt.

        Args:
            message: Composed message

        Returns:
            SendEmailResult with the message's Message-ID on success, or the
            failure description and its kind
        """
        config_error = check_settings(self.settings)
        if config_error is not None:
            logger.error(
                "smtp_configuration_invalid",
                error=config_error.message,
                to=message.recipient,
            )
            return SendEmailResult.failed(config_error)

        smtp = self._create_client()
        try:
            logger.info(
                "smtp_connecting",
                host=self.settings.host,
                port=self.settings.port,
                use_ssl=self.settings.use_ssl,
            )
            await smtp.connect()
            await self._authenticate(smtp)
            await smtp.send_message(message.to_email_message())

        except Exception as e:
            error = describe_error(e)
            logger.exception(
                "email_delivery_failed",
                error=error,
                error_type=type(e).__name__,
                to=message.recipient,
            )
            return SendEmailResult.failed(EmailError(ErrorKind.DELIVERY, error))

        finally:
            await self._disconnect(smtp)

        logger.info(
            "email_delivered",
            to=message.recipient,
            message_id=message.message_id,
        )
        return SendEmailResult.sent(message.message_id)
