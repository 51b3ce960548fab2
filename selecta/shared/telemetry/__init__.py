"""Shared telemetry: logging setup and OpenTelemetry config."""

from selecta.shared.telemetry.logging import setup_logging
from selecta.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
]
