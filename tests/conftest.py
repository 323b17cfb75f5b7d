"""Shared test fixtures for the Jarvis chat backend."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from app.services.completion_client import CompletionClient
from app.services.conversation import Conversation
from app.services.dispatcher import ChatDispatcher
from app.services.webhook_notifier import WebhookNotifier
from config import Settings

TEST_WEBHOOK_URL = "https://test-n8n-webhook.com/webhook"
TEST_OPENAI_KEY = "test-openai-key"


def make_settings(**kwargs: Any) -> Settings:
    """Factory for Settings with test defaults (key set, tiny processing delay)."""
    defaults: dict[str, Any] = {
        "openai_api_key": TEST_OPENAI_KEY,
        "n8n_webhook_url": TEST_WEBHOOK_URL,
        "processing_delay_seconds": 0.01,
    }
    defaults.update(kwargs)
    return Settings(**defaults)


def completion_body(content: str) -> dict[str, Any]:
    return {"choices": [{"message": {"content": content}}]}


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


class RecordingHandler:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        exc: Exception | None = None,
        on_request: Callable[[httpx.Request], None] | None = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.exc = exc
        self.on_request = on_request
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request:
            self.on_request(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)


def mock_client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_dispatcher(handler: Callable[[httpx.Request], Any], **settings_kwargs: Any) -> ChatDispatcher:
    """Dispatcher with a fresh conversation whose completion calls go to handler."""
    settings = make_settings(**settings_kwargs)
    client = CompletionClient(settings, http_client=mock_client(handler))
    return ChatDispatcher(Conversation(settings.greeting), client, settings)


def make_notifier(handler: Callable[[httpx.Request], Any], url: str | None = TEST_WEBHOOK_URL) -> WebhookNotifier:
    return WebhookNotifier(url, http_client=mock_client(handler))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def success_handler() -> RecordingHandler:
    """Completion API mock answering "Test AI response"."""
    return RecordingHandler(json_body=completion_body("Test AI response"))
