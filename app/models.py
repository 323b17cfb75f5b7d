"""
DATA MODELS MODULE
==================

This file defines the Pydantic models used for API requests, responses, and
the in-memory conversation. FastAPI uses these to validate incoming JSON and to
serialize responses; the dispatcher uses Message for every turn it appends.

MODELS:
  Message          - One turn in the conversation (id + text + isUser). Immutable.
  ChatRequest      - Body of POST /chat (the text typed into the input field).
  ConversationView - Body returned by GET /chat/messages and POST /chat.
  NotifyRequest    - Body of POST /webhook/notify. message is left untyped so the
                     notifier, not Pydantic, decides what "not a string" means.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

# ==============================================================================
# CONVERSATION MODELS
# ==============================================================================

class Message(BaseModel):
    """
    A single message in the conversation (user or assistant).
    id comes from a monotonic clock and is never reused; order defines chronology.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    text: str
    is_user: bool = Field(alias="isUser")

    @property
    def role(self) -> str:
        """Chat-completion role for this message."""
        return "user" if self.is_user else "assistant"


class ChatRequest(BaseModel):
    """
    Request body for POST /chat.

    - message: Raw content of the input field. Empty or whitespace-only is
      accepted here; the dispatcher treats it as a no-op.
    """
    message: str = ""


class ConversationView(BaseModel):
    """
    Response body for GET /chat/messages and POST /chat.

    - messages: The whole conversation, greeting first.
    - draft: Current input buffer (cleared after a successful submit).
    """
    messages: List[Message]
    draft: str = ""


class NotifyRequest(BaseModel):
    """Request body for POST /webhook/notify."""
    message: Any = None
