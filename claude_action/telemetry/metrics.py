"""OpenTelemetry metrics instrumentation helpers."""

from __future__ import annotations

import logging

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from claude_action.core.config import Settings

_logger = logging.getLogger(__name__)

_metrics_enabled = False
_provider: MeterProvider | None = None
_step_duration_hist = None
_oauth_refresh_counter = None


def configure_metrics(settings: Settings) -> None:
    """Initialise the metrics provider if enabled via settings."""

    global _metrics_enabled, _provider, _step_duration_hist, _oauth_refresh_counter

    if not settings.otel_enabled:
        return
    if _metrics_enabled:
        return

    exporter_name = settings.otel_exporter.lower().strip()
    if exporter_name == "otlp":
        try:
            from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError(
                "OTLP exporter selected but opentelemetry-exporter-otlp is not installed."
            ) from exc
        endpoint = settings.otel_otlp_endpoint
        exporter = OTLPMetricExporter(endpoint=endpoint) if endpoint else OTLPMetricExporter()
    else:
        if exporter_name != "console":
            _logger.warning("Unsupported OTEL exporter '%s'; defaulting to console", exporter_name)
        exporter = ConsoleMetricExporter()

    _provider = MeterProvider(
        metric_readers=[PeriodicExportingMetricReader(exporter)],
        resource=Resource.create({"service.name": "claude-action-prepare"}),
    )
    metrics.set_meter_provider(_provider)
    meter = metrics.get_meter("claude_action")
    _step_duration_hist = meter.create_histogram(
        name="claude_action.prepare.step.duration",
        unit="s",
        description="Duration of each prepare pipeline step in seconds",
    )
    _oauth_refresh_counter = meter.create_counter(
        name="claude_action.oauth.refreshes",
        unit="1",
        description="OAuth refresh attempts by outcome",
    )
    _metrics_enabled = True


def record_step_duration(step: str, seconds: float) -> None:
    if _metrics_enabled and _step_duration_hist is not None:
        _step_duration_hist.record(max(seconds, 0.0), {"step": step})


def increment_oauth_refresh(outcome: str) -> None:
    if _metrics_enabled and _oauth_refresh_counter is not None:
        _oauth_refresh_counter.add(1, {"outcome": outcome})


def shutdown_metrics() -> None:
    global _metrics_enabled, _provider
    if _metrics_enabled and _provider is not None:
        try:
            _provider.shutdown()
        except Exception:  # pragma: no cover
            _logger.exception("Failed to shutdown metrics provider")
        finally:
            _metrics_enabled = False
            _provider = None
