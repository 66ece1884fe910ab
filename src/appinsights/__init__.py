"""appinsights: batching telemetry client for Application Insights."""

from __future__ import annotations

from appinsights._client import TelemetryClient
from appinsights._config import (
    DEFAULT_ENDPOINT,
    DEFAULT_INTERVAL,
    Builder,
    Config,
    DefaultBuilder,
)
from appinsights._errors import AppInsightsError, BuilderConsumedError
from appinsights._types import Envelope, SeverityLevel

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_INTERVAL",
    "AppInsightsError",
    "Builder",
    "BuilderConsumedError",
    "Config",
    "DefaultBuilder",
    "Envelope",
    "SeverityLevel",
    "TelemetryClient",
    "__version__",
]
