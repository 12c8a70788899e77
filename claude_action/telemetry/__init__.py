"""Telemetry utilities for the prepare step."""

from .metrics import (
    configure_metrics,
    increment_oauth_refresh,
    record_step_duration,
    shutdown_metrics,
)

__all__ = [
    "configure_metrics",
    "increment_oauth_refresh",
    "record_step_duration",
    "shutdown_metrics",
]
