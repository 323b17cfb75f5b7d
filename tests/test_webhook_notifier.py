"""Tests for the n8n webhook notifier."""

from __future__ import annotations

import json

import httpx
import pytest

from app.services.webhook_notifier import (
    NotifierError,
    WebhookConfigurationError,
    WebhookValidationError,
    encode_payload,
)
from tests.conftest import TEST_WEBHOOK_URL, RecordingHandler, make_notifier


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler(json_body={"success": True})


class TestNotifyRequest:

    @pytest.mark.asyncio
    async def test_posts_message_to_webhook_url(self, handler) -> None:
        await make_notifier(handler).notify("Test message")

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == TEST_WEBHOOK_URL
        assert request.headers["content-type"] == "application/json"
        assert request.content == b'{"message":"Test message"}'

    @pytest.mark.asyncio
    async def test_empty_message_is_sent(self, handler) -> None:
        await make_notifier(handler).notify("")
        assert handler.requests[0].content == b'{"message":""}'

    @pytest.mark.asyncio
    async def test_long_message_is_sent_whole(self, handler) -> None:
        long_message = "A" * 10000
        await make_notifier(handler).notify(long_message)
        assert json.loads(handler.requests[0].content) == {"message": long_message}

    @pytest.mark.asyncio
    async def test_special_characters_are_kept(self, handler) -> None:
        special = "Message with: émojis 🚀, unicode: 你好, and symbols: <>&\"'"
        await make_notifier(handler).notify(special)

        content = handler.requests[0].content
        assert json.loads(content) == {"message": special}
        assert "你好".encode("utf-8") in content


class TestNotifyResult:

    @pytest.mark.asyncio
    async def test_url_rejected_by_parser_is_an_error(self, handler) -> None:
        result = await make_notifier(handler, url="https://n8n.example.com/web\nhook").notify("hi")
        assert set(result) == {"error"}
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_success_body_is_returned_verbatim(self, handler) -> None:
        assert await make_notifier(handler).notify("Success test") == {"success": True}

    @pytest.mark.asyncio
    async def test_non_dict_success_body_is_returned_verbatim(self) -> None:
        handler = RecordingHandler(json_body=[1, "two", None])
        assert await make_notifier(handler).notify("hi") == [1, "two", None]

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        handler = RecordingHandler(status_code=500, json_body={"error": "Server error"})
        result = await make_notifier(handler).notify("Error test")
        assert result == {"error": "HTTP error! status: 500"}

    @pytest.mark.asyncio
    async def test_http_error_status_is_interpolated(self) -> None:
        handler = RecordingHandler(status_code=404, json_body={})
        assert await make_notifier(handler).notify("hi") == {"error": "HTTP error! status: 404"}

    @pytest.mark.asyncio
    async def test_network_error_message_is_returned(self) -> None:
        handler = RecordingHandler(exc=httpx.ConnectError("Network error"))
        result = await make_notifier(handler).notify("Network error test")
        assert result == {"error": "Network error"}

    @pytest.mark.asyncio
    async def test_undecodable_success_body_is_an_error(self) -> None:
        handler = RecordingHandler(content=b"OK")
        result = await make_notifier(handler).notify("hi")
        assert set(result) == {"error"}
        assert isinstance(result["error"], str)

    @pytest.mark.asyncio
    async def test_single_attempt_only(self) -> None:
        handler = RecordingHandler(status_code=503, json_body={})
        await make_notifier(handler).notify("hi")
        assert len(handler.requests) == 1


class TestNotifyPreconditions:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [123, None, 1.5, True, ["a"], {"message": "x"}])
    async def test_non_string_message_is_rejected(self, handler, message) -> None:
        with pytest.raises(WebhookValidationError, match="Message must be a string"):
            await make_notifier(handler).notify(message)
        assert handler.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, ""])
    async def test_missing_url_is_rejected(self, handler, url) -> None:
        with pytest.raises(WebhookConfigurationError, match="N8N_WEBHOOK_URL is not configured"):
            await make_notifier(handler, url=url).notify("test")
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_precondition_errors_share_a_base_class(self, handler) -> None:
        with pytest.raises(NotifierError):
            await make_notifier(handler, url=None).notify(123)


def test_encode_payload_matches_compact_json() -> None:
    assert encode_payload("a b") == b'{"message":"a b"}'
    assert encode_payload("é") == '{"message":"é"}'.encode("utf-8")
