"""
CONVERSATION MODULE
===================

The conversation Jarvis shows: an append-only, ordered list of Message. This
class knows nothing about HTTP, the completion API or rendering; the dispatcher
appends to it and the API layer reads a snapshot of it.

INVARIANTS:
  - The first message is always the fixed greeting (id 1, assistant).
  - Messages are never mutated or removed; insertion order is chronology.
  - Consecutive messages with the same role are allowed.
"""

from typing import Dict, List, Optional, Tuple

from app.models import Message
from app.utils.clock import MonotonicIdSource
from config import GREETING_MESSAGE


GREETING_ID = 1


class Conversation:
    """Append-only sequence of chat messages, greeting first."""

    def __init__(self, greeting: str = GREETING_MESSAGE, id_source: Optional[MonotonicIdSource] = None):
        self._id_source = id_source or MonotonicIdSource(floor=GREETING_ID)
        self._messages: List[Message] = [Message(id=GREETING_ID, text=greeting, is_user=False)]

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Snapshot of the conversation; later appends do not change it."""
        return tuple(self._messages)

    @property
    def last(self) -> Message:
        return self._messages[-1]

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, text: str, is_user: bool) -> Message:
        """Create a message with the next id and add it to the end."""
        message = Message(id=self._id_source.next_id(), text=text, is_user=is_user)
        self._messages.append(message)
        return message

    def to_completion_messages(self) -> List[Dict[str, str]]:
        """Map every message to {"role", "content"} in order, for the completion API."""
        return [{"role": m.role, "content": m.text} for m in self._messages]
