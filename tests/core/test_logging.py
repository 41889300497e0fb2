"""Tests for logging processors, invocation context and request middleware."""

from fastapi.testclient import TestClient

from mailrelay.core.context import (
    clear_context,
    get_context,
    get_request_id,
    set_correlation_id,
    set_function_name,
    set_request_id,
)
from mailrelay.core.logging import (
    add_app_info_processor,
    add_context_processor,
    filter_sensitive_data,
)


class TestFilterSensitiveData:
    def test_masks_password(self) -> None:
        event = filter_sensitive_data(
            None, "info", {"event": "x", "password": "s3cret-password"}
        )

        assert event["password"] == "s3***********rd"
        assert event["event"] == "x"

    def test_masks_short_values_completely(self) -> None:
        event = filter_sensitive_data(None, "info", {"token": "abc"})

        assert event["token"] == "***"

    def test_masks_nested_keys(self) -> None:
        event = filter_sensitive_data(
            None, "info", {"smtp": {"oauth2_access_token": "ya29.abcdef", "host": "h"}}
        )

        assert event["smtp"]["oauth2_access_token"] == "ya*******ef"
        assert event["smtp"]["host"] == "h"

    def test_leaves_other_fields(self) -> None:
        event = filter_sensitive_data(None, "info", {"to": "a@b.com", "port": 587})

        assert event == {"to": "a@b.com", "port": 587}


class TestContext:
    def test_context_round_trip(self) -> None:
        set_request_id("req-1")
        set_function_name("SendMail")
        set_correlation_id("corr-1")

        assert get_context() == {
            "request_id": "req-1",
            "function": "SendMail",
            "correlation_id": "corr-1",
        }

        clear_context()

        assert get_context() == {}

    def test_generated_request_id(self) -> None:
        request_id = set_request_id()

        assert request_id
        assert get_request_id() == request_id
        clear_context()

    def test_context_processor(self) -> None:
        set_function_name("ContactPage")

        event = add_context_processor(None, "info", {"event": "x"})

        assert event["function"] == "ContactPage"
        clear_context()

    def test_app_info_processor(self) -> None:
        processor = add_app_info_processor("mailrelay", "1.2.3")

        event = processor(None, "info", {"event": "x"})

        assert event["app"] == "mailrelay"
        assert event["version"] == "1.2.3"


class TestRequestContextMiddleware:
    def test_generates_request_id(self, client: TestClient) -> None:
        response = client.get("/api/ContactPage")

        assert response.headers["x-request-id"]

    def test_echoes_request_id(self, client: TestClient) -> None:
        response = client.get("/health/live", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"

    def test_context_cleared_after_request(self, client: TestClient) -> None:
        client.get("/api/ContactPage", headers={"X-Request-ID": "abc-123"})

        assert get_request_id() == ""
