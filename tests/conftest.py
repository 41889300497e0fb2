"""Shared fixtures: isolated environment, SMTP test double, app client."""

from collections.abc import Iterator
from typing import Any

import pytest
from aiosmtplib import SMTPResponse, SMTPStatus
from fastapi.testclient import TestClient

from mailrelay.config import Settings, SmtpSettings, get_settings
from mailrelay.email.schemas import EmailRequest, SendEmailResult


ENV_VARS = (
    "CONTACT_RECIPIENT_EMAIL",
    "FROM_EMAIL",
    "FROM_NAME",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USE_SSL",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "SMTP_TIMEOUT",
    "AUTH_TYPE",
    "OAUTH2_CLIENT_ID",
    "OAUTH2_CLIENT_SECRET",
    "OAUTH2_REFRESH_TOKEN",
    "OAUTH2_ACCESS_TOKEN",
    "TEMPLATE_PATH",
    "TEMPLATE_ESCAPE_BODY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test without SMTP/contact variables from the host."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeSMTP:
    """Stand-in for ``aiosmtplib.SMTP`` that records what a session did.

    Tests change behavior by monkeypatching methods or ``auth_responses`` on
    the class before the delivery client instantiates it.
    """

    instances: list["FakeSMTP"] = []
    auth_responses: list[SMTPResponse] = [
        SMTPResponse(SMTPStatus.auth_successful, "2.7.0 Accepted")
    ]

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.is_connected = False
        self.calls: list[str] = []
        self.commands: list[tuple[bytes, ...]] = []
        self.sent: list[Any] = []
        self._responses = list(type(self).auth_responses)
        FakeSMTP.instances.append(self)

    async def connect(self) -> None:
        self.calls.append("connect")
        self.is_connected = True

    async def ehlo(self) -> None:
        self.calls.append("ehlo")

    async def login(self, username: str, password: str) -> None:
        self.calls.append("login")
        self.credentials = (username, password)

    async def execute_command(self, *args: bytes) -> SMTPResponse:
        self.calls.append("execute_command")
        self.commands.append(args)
        return self._responses.pop(0)

    async def send_message(self, message: Any) -> None:
        self.calls.append("send_message")
        self.sent.append(message)

    async def quit(self) -> None:
        self.calls.append("quit")
        self.is_connected = False

    def close(self) -> None:
        self.calls.append("close")
        self.is_connected = False


@pytest.fixture
def fake_smtp() -> Iterator[type[FakeSMTP]]:
    """SMTP factory whose instances are collected on ``FakeSMTP.instances``."""
    FakeSMTP.instances = []
    yield FakeSMTP
    FakeSMTP.instances = []


@pytest.fixture
def smtp_settings() -> SmtpSettings:
    """Complete basic-auth STARTTLS settings."""
    return SmtpSettings(
        SMTP_HOST="smtp.example.com",
        SMTP_PORT=587,
        SMTP_USE_SSL=False,
        SMTP_USERNAME="relay@example.com",
        SMTP_PASSWORD="s3cret-password",
        FROM_EMAIL="noreply@example.com",
        FROM_NAME="Contact Form",
    )


@pytest.fixture
def app_settings() -> Settings:
    return Settings(
        environment="testing",
        contact_recipient_email="inbox@example.com",
        log_requests=False,
    )


class StubEmailSender:
    """EmailSender that returns a fixed result and remembers its requests."""

    def __init__(self, result: SendEmailResult | None = None) -> None:
        self.result = result or SendEmailResult.sent("<stub-id@smtp.example.com>")
        self.requests: list[EmailRequest] = []

    async def send_email(self, request: EmailRequest) -> SendEmailResult:
        self.requests.append(request)
        return self.result


@pytest.fixture
def email_sender() -> StubEmailSender:
    return StubEmailSender()


@pytest.fixture
def client(
    app_settings: Settings,
    smtp_settings: SmtpSettings,
    email_sender: StubEmailSender,
) -> Iterator[TestClient]:
    """Client for an app whose email sender is a stub."""
    from mailrelay.main import create_app

    app = create_app(app_settings, smtp_settings, email_service=email_sender)
    with TestClient(app) as test_client:
        yield test_client
