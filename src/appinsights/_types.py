"""Core types: severity levels and telemetry envelopes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_ENVELOPE_PREFIX = "Microsoft.ApplicationInsights"


class SeverityLevel(enum.Enum):
    """Severity of a trace message."""

    VERBOSE = 0
    INFORMATION = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4


@dataclass(frozen=True)
class Envelope:
    """Immutable telemetry item ready for the buffer."""

    name: str
    time: str
    ikey: str
    base_type: str
    base_data: dict[str, Any]
    tags: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Wire form accepted by the track endpoint."""
        return {
            "name": self.name,
            "time": self.time,
            "iKey": self.ikey,
            "tags": dict(self.tags),
            "data": {"baseType": self.base_type, "baseData": self.base_data},
        }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _make_envelope(
    kind: str,
    base_type: str,
    ikey: str,
    base_data: dict[str, Any],
    properties: dict[str, str] | None,
    tags: dict[str, str] | None,
) -> Envelope:
    base_data["ver"] = 2
    if properties:
        base_data["properties"] = {k: str(v) for k, v in properties.items()}
    return Envelope(
        name=f"{_ENVELOPE_PREFIX}.{kind}",
        time=_now(),
        ikey=ikey,
        base_type=base_type,
        base_data=base_data,
        tags=dict(tags) if tags else {},
    )


def event_envelope(
    ikey: str,
    name: str,
    properties: dict[str, str] | None = None,
    tags: dict[str, str] | None = None,
) -> Envelope:
    return _make_envelope("Event", "EventData", ikey, {"name": name}, properties, tags)


def trace_envelope(
    ikey: str,
    message: str,
    severity: SeverityLevel = SeverityLevel.INFORMATION,
    properties: dict[str, str] | None = None,
    tags: dict[str, str] | None = None,
) -> Envelope:
    data = {"message": message, "severityLevel": severity.value}
    return _make_envelope("Message", "MessageData", ikey, data, properties, tags)


def metric_envelope(
    ikey: str,
    name: str,
    value: float,
    properties: dict[str, str] | None = None,
    tags: dict[str, str] | None = None,
) -> Envelope:
    """Single-measurement metric. Aggregation is left to the service."""
    data = {"metrics": [{"name": name, "value": float(value), "count": 1}]}
    return _make_envelope("Metric", "MetricData", ikey, data, properties, tags)
