"""Bounded in-memory queue of envelopes awaiting transmission."""

from __future__ import annotations

import threading
from collections import deque

from appinsights._types import Envelope


class RingBuffer:
    """Fixed-capacity FIFO that evicts the oldest envelope on overflow.

    ``flush()`` on the client and the processor thread may drain at the same
    time, so drains and overflow accounting are guarded by a lock.
    """

    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self._items: deque[Envelope] = deque(maxlen=maxsize)
        self._lock = threading.Lock()
        self._evicted = 0

    def enqueue(self, envelope: Envelope) -> bool:
        """Append an envelope. Returns False if an older one was evicted."""
        with self._lock:
            full = len(self._items) == self._items.maxlen
            if full:
                self._evicted += 1
            self._items.append(envelope)
        return not full

    def drain(self, max_items: int | None = None) -> list[Envelope]:
        """Pop up to ``max_items`` envelopes in arrival order (all if None)."""
        with self._lock:
            count = len(self._items) if max_items is None else min(max_items, len(self._items))
            return [self._items.popleft() for _ in range(count)]

    @property
    def maxsize(self) -> int:
        return self._items.maxlen or 0

    @property
    def drop_count(self) -> int:
        """Envelopes lost to overflow since creation."""
        return self._evicted

    def __len__(self) -> int:
        return len(self._items)
