"""Customized configuration — override endpoint and flush interval.

Shows the builder chain: defaults are seeded first, then any field can be
overridden before ``build()`` freezes the result.

Usage:
    python examples/custom_config.py
"""

import logging
from datetime import timedelta

import appinsights

logging.basicConfig(level=logging.DEBUG)

builder = appinsights.Config.builder().with_ikey("my-ikey")

# Peek at the staged endpoint before deciding on an override
if builder.endpoint == appinsights.DEFAULT_ENDPOINT:
    builder.with_endpoint("http://localhost:8080/v2/track")

config = builder.with_interval(timedelta(milliseconds=500)).build()
print(config)

with appinsights.TelemetryClient(config) as client:
    for step in range(3):
        client.track_metric("step_duration_ms", 10.0 * step, {"step": str(step)})
