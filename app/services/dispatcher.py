"""
CHAT DISPATCHER MODULE
======================

Owns the Conversation and runs one request/response cycle with the completion
API per user submission. Used by POST /chat.

FLOW (submit):
  1. Read the draft (input buffer). If it is blank after strip(), do nothing.
  2. Append the user message and clear the draft. This happens synchronously,
     before any network call starts.
  3. Start an asyncio task that sends the whole conversation to the completion
     API and appends the reply, or the fallback apology if the call fails.
  4. If no API key is configured, also start a task that appends the
     "still processing" message after a short delay. Both tasks may append.

CONCURRENCY:
  There is no in-flight guard. A second submit while the first reply is still
  pending starts a second request; replies are appended in the order they
  arrive, which may differ from submission order. Nothing is cancelled.
"""

import asyncio
import logging
from typing import Optional, Set

from app.models import Message
from app.services.completion_client import CompletionClient, CompletionError
from app.services.conversation import Conversation
from config import FALLBACK_MESSAGE, PROCESSING_MESSAGE, Settings

logger = logging.getLogger("J.A.R.V.I.S")


class ChatDispatcher:
    """
    Conversation state plus the draft buffer, and the completion request cycle.
    Must be used from inside a running event loop (submit schedules tasks on it).
    """

    def __init__(self, conversation: Conversation, completion_client: CompletionClient, settings: Settings):
        self.conversation = conversation
        self.completion_client = completion_client
        self.settings = settings
        self.draft = ""
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of replies still in flight (network and delayed fallback)."""
        return len(self._pending)

    def update_draft(self, text: str) -> None:
        """Replace the input buffer, as typing into the input field would."""
        self.draft = text

    def submit(self) -> Optional[Message]:
        """
        Submit the current draft.

        Returns the appended user message, or None when the draft is blank
        (in which case nothing is appended, sent or cleared).
        """
        text = self.draft
        if not text.strip():
            return None

        user_message = self.conversation.append(text, is_user=True)
        self.draft = ""
        history = self.conversation.to_completion_messages()
        logger.info("Submitted message %s (%d messages in conversation)", user_message.id, len(history))

        self._spawn(self._request_reply(history))

        if not self.settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set. Using fallback response.")
            self._spawn(self._append_processing_notice())

        return user_message

    async def drain(self) -> None:
        """Wait until every reply started so far has been appended."""
        while self._pending:
            results = await asyncio.gather(*list(self._pending), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error("Background reply task failed: %r", result)

    # -------------------------------------------------------------------------
    # BACKGROUND TASKS
    # -------------------------------------------------------------------------

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        # Keep a reference until done; the loop only holds weak ones.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _request_reply(self, history) -> None:
        try:
            reply = await self.completion_client.complete(history)
        except CompletionError as e:
            logger.error("Error calling completion API: %s", e)
            self.conversation.append(FALLBACK_MESSAGE, is_user=False)
            return
        self.conversation.append(reply, is_user=False)

    async def _append_processing_notice(self) -> None:
        await asyncio.sleep(self.settings.processing_delay_seconds)
        self.conversation.append(PROCESSING_MESSAGE, is_user=False)
