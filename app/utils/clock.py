"""
MESSAGE ID CLOCK
================

Message ids are taken from the current time in milliseconds. Two messages
created within the same millisecond (a user turn and a fast mocked reply, for
example) would otherwise share an id, so the source never hands out a value
lower than or equal to the previous one.
"""

import time
from typing import Callable


def now_ms() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class MonotonicIdSource:
    """Hands out strictly increasing integer ids based on a millisecond clock."""

    def __init__(self, clock: Callable[[], int] = now_ms, floor: int = 0):
        self._clock = clock
        self._last = floor

    def next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate
