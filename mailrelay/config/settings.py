"""Application and SMTP settings using Pydantic Settings."""

from enum import StrEnum
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SMTP_PORT = 587
DEFAULT_RECIPIENT_EMAIL = "contact@yourcompany.com"


class AuthType(StrEnum):
    """SMTP authentication strategy."""

    BASIC = "basic"
    OAUTH2 = "oauth2"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="mailrelay", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=7071, description="API port")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=False, description="Include caller info"
    )
    log_requests: bool = Field(
        default=True, description="Log HTTP request start/finish"
    )
    log_exclude_paths: list[str] = Field(
        default=["/health", "/health/live", "/health/ready"],
        description="Paths to exclude from request logging",
    )

    # Contact form
    contact_recipient_email: str | None = Field(
        default=None, description="Address the contact page sends messages to"
    )
    from_email: str | None = Field(
        default=None, description="Fallback recipient (SMTP sender address)"
    )

    # Email template
    template_path: str = Field(
        default="template.html",
        description="HTML template, relative to the working directory",
    )
    template_escape_body: bool = Field(
        default=False,
        description="HTML-escape subject and body before substitution",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def recipient_email(self) -> str:
        """Recipient shown on the contact page.

        CONTACT_RECIPIENT_EMAIL wins, then FROM_EMAIL, then a placeholder.
        """
        if self.contact_recipient_email is not None:
            return self.contact_recipient_email
        if self.from_email is not None:
            return self.from_email
        return DEFAULT_RECIPIENT_EMAIL


class SmtpSettings(BaseSettings):
    """SMTP connection settings.

    Field resolution never fails: unparseable port and SSL values fall back
    to their defaults and missing strings stay empty, so that incomplete
    configuration is reported at send time instead of at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    host: str = Field(default="", validation_alias="SMTP_HOST")
    port: int = Field(default=DEFAULT_SMTP_PORT, validation_alias="SMTP_PORT")
    use_ssl: bool = Field(default=True, validation_alias="SMTP_USE_SSL")
    username: str = Field(default="", validation_alias="SMTP_USERNAME")
    password: str = Field(default="", validation_alias="SMTP_PASSWORD")
    auth_type: AuthType = Field(default=AuthType.BASIC, validation_alias="AUTH_TYPE")
    from_email: str = Field(default="", validation_alias="FROM_EMAIL")
    from_name: str = Field(default="", validation_alias="FROM_NAME")
    timeout: float = Field(
        default=60.0,
        validation_alias="SMTP_TIMEOUT",
        description="Connect/command timeout in seconds",
    )

    # OAuth2 settings for Gmail
    oauth2_client_id: str | None = Field(default=None, validation_alias="OAUTH2_CLIENT_ID")
    oauth2_client_secret: str | None = Field(
        default=None, validation_alias="OAUTH2_CLIENT_SECRET"
    )
    oauth2_refresh_token: str | None = Field(
        default=None, validation_alias="OAUTH2_REFRESH_TOKEN"
    )
    oauth2_access_token: str | None = Field(
        default=None, validation_alias="OAUTH2_ACCESS_TOKEN"
    )

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_SMTP_PORT

    @field_validator("use_ssl", mode="before")
    @classmethod
    def _parse_use_ssl(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized == "false":
            return False
        # Anything other than an explicit "false" keeps implicit TLS on
        return True

    @field_validator("auth_type", mode="before")
    @classmethod
    def _parse_auth_type(cls, value: Any) -> AuthType:
        if str(value).strip().lower() == AuthType.OAUTH2:
            return AuthType.OAUTH2
        return AuthType.BASIC

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> float:
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            return 60.0
        return timeout if timeout > 0 else 60.0

    @property
    def is_configured(self) -> bool:
        """Check if the fields required to open a session are present."""
        return bool(self.host and self.username and self.from_email)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
