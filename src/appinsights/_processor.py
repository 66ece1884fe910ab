"""Daemon thread that ships buffered envelopes once per interval."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import timedelta

from appinsights._buffer import RingBuffer
from appinsights._config import DEFAULT_INTERVAL
from appinsights._types import Envelope

logger = logging.getLogger("appinsights.processor")

BatchHandler = Callable[[list[Envelope]], object]

# Lower bound on the wait between drains so a zero interval cannot spin.
_MIN_WAIT_S = 0.01


def _discard(batch: list[Envelope]) -> None:
    """Handler used when no transmitter is wired in."""


class BackgroundProcessor:
    """Drains the buffer every ``interval`` and hands batches to ``handler``.

    Handler failures are logged and swallowed; telemetry must never take the
    host application down.
    """

    def __init__(
        self,
        buffer: RingBuffer,
        *,
        batch_size: int = 500,
        interval: timedelta = DEFAULT_INTERVAL,
        handler: BatchHandler = _discard,
    ) -> None:
        self._buffer = buffer
        self._batch_size = batch_size
        self._wait_s = max(interval.total_seconds(), _MIN_WAIT_S)
        self._handler = handler
        self._stop_event = threading.Event()
        self._flush_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="appinsights-processor", daemon=True
        )
        self._thread.start()
        logger.debug("Processor started, flushing every %.3fs", self._wait_s)

    def stop(self, timeout_s: float = 5.0) -> None:
        """Stop the loop and push out whatever is still buffered."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout_s)
            if self._thread.is_alive():
                logger.warning("Processor thread did not stop within %.1fs", timeout_s)
            self._thread = None
        self.flush()

    def flush(self) -> int:
        """Drain what is buffered now. Returns the number of envelopes handed off.

        Only envelopes present at entry are drained, so producers that keep
        enqueueing cannot hold ``flush`` open.
        """
        sent = 0
        with self._flush_lock:
            pending = len(self._buffer)
            while sent < pending:
                batch = self._buffer.drain(min(self._batch_size, pending - sent))
                if not batch:
                    break
                sent += len(batch)
                try:
                    self._handler(batch)
                except Exception:  # noqa: BLE001
                    logger.warning(
                        "Dropping batch of %d envelopes after handler error",
                        len(batch),
                        exc_info=True,
                    )
        return sent

    def _run(self) -> None:
        while not self._stop_event.wait(timeout=self._wait_s):
            self.flush()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
