"""
COMPLETION CLIENT MODULE
========================

Thin async client for the chat-completion API. One call to complete() is one
POST request: no retry, no timeout, no streaming. Whatever goes wrong (non-2xx
status, network failure, a body that is not JSON or has no choices) comes back
as a single CompletionError so the dispatcher has one thing to catch.

REQUEST:
  POST <openai_api_url>
  Authorization: Bearer <openai_api_key>
  {"model": ..., "messages": [system, *history], "max_tokens": ...}

RESPONSE:
  {"choices": [{"message": {"content": "..."}}]}  -> returns the first content
"""

from typing import Dict, List, Optional

import httpx

from config import Settings


class CompletionError(Exception):
    """The completion API call did not produce an assistant reply."""


class CompletionClient:
    """Sends a conversation to the completion API and returns the reply text."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        # timeout=None: a hung call stalls only its own task.
        self._client = http_client or httpx.AsyncClient(timeout=None)

    def build_payload(self, history: List[Dict[str, str]]) -> dict:
        """System instruction first, then the conversation, plus model and token budget."""
        return {
            "model": self.settings.openai_model,
            "messages": [{"role": "system", "content": self.settings.system_prompt}, *history],
            "max_tokens": self.settings.openai_max_tokens,
        }

    async def complete(self, history: List[Dict[str, str]]) -> str:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.openai_api_key}",
        }
        try:
            response = await self._client.post(
                self.settings.openai_api_url,
                json=self.build_payload(history),
                headers=headers,
            )
        except Exception as e:
            # Anything raised while building or sending the request, not only httpx errors.
            raise CompletionError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise CompletionError(f"API request failed (status {response.status_code})")

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CompletionError(f"Malformed completion response: {e!r}") from e
        if not isinstance(content, str):
            raise CompletionError("Malformed completion response: content is not text")
        return content

    async def aclose(self) -> None:
        await self._client.aclose()
