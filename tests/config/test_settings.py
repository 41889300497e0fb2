"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from mailrelay.config import AuthType, Settings, SmtpSettings, get_settings


class TestSmtpSettings:
    def test_defaults(self) -> None:
        settings = SmtpSettings()

        assert settings.host == ""
        assert settings.port == 587
        assert settings.use_ssl is True
        assert settings.auth_type == AuthType.BASIC
        assert settings.timeout == 60.0
        assert settings.oauth2_access_token is None
        assert settings.is_configured is False

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMTP_HOST", "smtp.gmail.com")
        monkeypatch.setenv("SMTP_PORT", "465")
        monkeypatch.setenv("SMTP_USERNAME", "me@gmail.com")
        monkeypatch.setenv("SMTP_PASSWORD", "app-password")
        monkeypatch.setenv("FROM_EMAIL", "me@gmail.com")
        monkeypatch.setenv("FROM_NAME", "Website")
        monkeypatch.setenv("OAUTH2_ACCESS_TOKEN", "ya29.token")

        settings = SmtpSettings()

        assert settings.host == "smtp.gmail.com"
        assert settings.port == 465
        assert settings.username == "me@gmail.com"
        assert settings.password == "app-password"
        assert settings.from_email == "me@gmail.com"
        assert settings.from_name == "Website"
        assert settings.oauth2_access_token == "ya29.token"
        assert settings.is_configured is True

    @pytest.mark.parametrize("value", ["abc", "", "5.5"])
    def test_unparseable_port_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("SMTP_PORT", value)

        assert SmtpSettings().port == 587

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("false", False),
            ("FALSE", False),
            (" False ", False),
            ("true", True),
            ("0", True),
            ("no", True),
            ("", True),
        ],
    )
    def test_use_ssl_only_false_disables_tls(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        monkeypatch.setenv("SMTP_USE_SSL", value)

        assert SmtpSettings().use_ssl is expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("oauth2", AuthType.OAUTH2),
            ("OAuth2", AuthType.OAUTH2),
            ("basic", AuthType.BASIC),
            ("anything", AuthType.BASIC),
        ],
    )
    def test_auth_type(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: AuthType
    ) -> None:
        monkeypatch.setenv("AUTH_TYPE", value)

        assert SmtpSettings().auth_type == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("10", 10.0), ("2.5", 2.5), ("0", 60.0), ("-1", 60.0), ("soon", 60.0)],
    )
    def test_timeout(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: float
    ) -> None:
        monkeypatch.setenv("SMTP_TIMEOUT", value)

        assert SmtpSettings().timeout == expected

    def test_init_uses_variable_names(self) -> None:
        settings = SmtpSettings(SMTP_HOST="smtp.example.com", SMTP_PORT="2525")

        assert settings.host == "smtp.example.com"
        assert settings.port == 2525

    def test_ignores_unprefixed_variables(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Generic host variables such as PORT or USERNAME are not SMTP settings."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("USERNAME", "winuser")
        monkeypatch.setenv("PASSWORD", "leaked")
        monkeypatch.setenv("TIMEOUT", "5")
        monkeypatch.setenv("USE_SSL", "false")

        settings = SmtpSettings()

        assert settings.port == 587
        assert settings.host == ""
        assert settings.username == ""
        assert settings.password == ""
        assert settings.timeout == 60.0
        assert settings.use_ssl is True

    def test_is_frozen(self, smtp_settings: SmtpSettings) -> None:
        with pytest.raises(ValidationError):
            smtp_settings.host = "other.example.com"


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.app_name == "mailrelay"
        assert settings.template_path == "template.html"
        assert settings.template_escape_body is False
        assert settings.is_development is True

    def test_template_settings_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEMPLATE_PATH", "mail/contact.html")
        monkeypatch.setenv("TEMPLATE_ESCAPE_BODY", "true")

        settings = Settings()

        assert settings.template_path == "mail/contact.html"
        assert settings.template_escape_body is True

    def test_empty_recipient_is_kept(self) -> None:
        """Only an unset variable falls through to the next source."""
        settings = Settings(contact_recipient_email="", from_email="a@b.com")

        assert settings.recipient_email == ""

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
