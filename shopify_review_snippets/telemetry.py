"""OpenTelemetry helpers for metrics instrumentation."""

from typing import Optional

try:
    from opentelemetry import metrics
    from opentelemetry.sdk.metrics import MeterProvider
    from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
except ImportError:  # pragma: no cover
    metrics = None
    MeterProvider = None
    ConsoleMetricExporter = None
    PeriodicExportingMetricReader = None


_meter_provider_initialized = False
_duration_histogram = None


def init_metrics() -> None:
    """Initialize OpenTelemetry metrics with a console exporter."""
    global _meter_provider_initialized
    if _meter_provider_initialized or metrics is None:
        return
    reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
    provider = MeterProvider(metric_readers=[reader])
    metrics.set_meter_provider(provider)
    _meter_provider_initialized = True


def get_request_duration_histogram() -> Optional[object]:
    """Return the shared histogram for handler duration metrics."""
    global _duration_histogram
    if metrics is None:
        return None
    if _duration_histogram is None:
        init_metrics()
        meter = metrics.get_meter("shopify_review_snippets")
        _duration_histogram = meter.create_histogram(
            name="review_snippets.request.duration",
            unit="ms",
            description="Duration of product page and snippet proxy requests",
        )
    return _duration_histogram
