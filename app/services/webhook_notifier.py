"""
WEBHOOK NOTIFIER MODULE
=======================

Posts one text message to the n8n automation webhook and normalizes the
outcome. Used by POST /webhook/notify. Independent of the chat dispatcher.

RESULT:
  - success            -> the decoded JSON body, unchanged
  - non-2xx status     -> {"error": "HTTP error! status: <status>"}
  - network failure    -> {"error": "<exception message>"}

Configuration and validation problems are raised (not returned) and no request
is made. Single attempt: no retry, no timeout. This module does not log.
"""

import json
from typing import Any, Optional

import httpx

from config import N8N_WEBHOOK_URL_ENV


class NotifierError(Exception):
    """Raised before any network call when notify() cannot run."""


class WebhookConfigurationError(NotifierError):
    """The webhook URL is not configured."""


class WebhookValidationError(NotifierError):
    """The message is not a string."""


def encode_payload(message: str) -> bytes:
    """Serialize {"message": message} the way JSON.stringify does (compact, UTF-8)."""
    return json.dumps({"message": message}, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class WebhookNotifier:
    """Sends {"message": ...} to the configured webhook URL."""

    def __init__(self, webhook_url: Optional[str], http_client: Optional[httpx.AsyncClient] = None):
        self.webhook_url = webhook_url
        self._client = http_client or httpx.AsyncClient(timeout=None)

    async def notify(self, message: Any) -> Any:
        if not self.webhook_url:
            raise WebhookConfigurationError(f"{N8N_WEBHOOK_URL_ENV} is not configured")
        if not isinstance(message, str):
            raise WebhookValidationError("Message must be a string")

        try:
            response = await self._client.post(
                self.webhook_url,
                content=encode_payload(message),
                headers={"Content-Type": "application/json"},
            )
            if not response.is_success:
                return {"error": f"HTTP error! status: {response.status_code}"}
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            return {"error": str(e)}

    async def aclose(self) -> None:
        await self._client.aclose()
