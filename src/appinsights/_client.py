"""Telemetry client: owns the buffer, processor and transmitter for one Config."""

from __future__ import annotations

import logging
import threading
from types import TracebackType

from appinsights._buffer import RingBuffer
from appinsights._config import Config
from appinsights._processor import BackgroundProcessor
from appinsights._transmitter import Transmitter
from appinsights._types import (
    Envelope,
    SeverityLevel,
    event_envelope,
    metric_envelope,
    trace_envelope,
)

logger = logging.getLogger("appinsights.client")


class TelemetryClient:
    """Collects telemetry and sends it in batches to ``config.endpoint``.

    Usage::

        with TelemetryClient(Config.new("my-key")) as client:
            client.track_event("started")
    """

    def __init__(
        self,
        config: Config,
        *,
        buffer_size: int = 8192,
        batch_size: int = 500,
        transmitter: Transmitter | None = None,
    ) -> None:
        self._config = config
        self.enabled = True
        self._buffer: RingBuffer | None = RingBuffer(buffer_size)
        self._transmitter: Transmitter | None = (
            transmitter if transmitter is not None else Transmitter(config.endpoint)
        )
        self._processor: BackgroundProcessor | None = BackgroundProcessor(
            self._buffer,
            batch_size=batch_size,
            interval=config.interval,
            handler=self._transmitter.send,
        )
        self._close_lock = threading.Lock()
        self._processor.start()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def is_closed(self) -> bool:
        return self._buffer is None

    def track_event(self, name: str, properties: dict[str, str] | None = None) -> None:
        self._track(event_envelope(self._config.ikey, name, properties))

    def track_trace(
        self,
        message: str,
        severity: SeverityLevel = SeverityLevel.INFORMATION,
        properties: dict[str, str] | None = None,
    ) -> None:
        self._track(trace_envelope(self._config.ikey, message, severity, properties))

    def track_metric(
        self,
        name: str,
        value: float,
        properties: dict[str, str] | None = None,
    ) -> None:
        self._track(metric_envelope(self._config.ikey, name, value, properties))

    def _track(self, envelope: Envelope) -> None:
        buffer = self._buffer
        if not self.enabled or buffer is None:
            return
        if not buffer.enqueue(envelope):
            logger.debug("Buffer full, dropped oldest envelope (%d total)", buffer.drop_count)

    def flush(self) -> None:
        """Send everything buffered so far, blocking until done."""
        processor = self._processor
        if processor is not None:
            processor.flush()

    def close(self) -> None:
        """Flush remaining telemetry and release resources. Safe to call twice."""
        with self._close_lock:
            if self._processor is not None:
                self._processor.stop()
                self._processor = None
            if self._transmitter is not None:
                self._transmitter.close()
                self._transmitter = None
            self._buffer = None

    def __enter__(self) -> TelemetryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
