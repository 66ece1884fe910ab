"""appinsights Quick Start — minimal example to get telemetry flowing."""

import appinsights

# 1. Build a config from an instrumentation key (default endpoint, 2s interval)
config = appinsights.Config.new("00000000-0000-0000-0000-000000000000")

# 2. Track telemetry; the client flushes in the background every interval
client = appinsights.TelemetryClient(config)
client.track_event("app-started", {"version": appinsights.__version__})
client.track_trace("warming cache", appinsights.SeverityLevel.VERBOSE)
client.track_metric("cache_entries", 1024)

# 3. Close (flushes remaining telemetry)
client.close()

print(f"Done! Sent telemetry to {config.endpoint}")
