"""Prometheus metrics for the live events pipeline."""
from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _get_or_create_metric(metric_class, name: str, doc: str, labelnames=None, **kwargs):
    """Get existing metric or create new one to avoid duplication errors on reimport."""
    existing = REGISTRY._names_to_collectors.get(name)
    if existing is not None:
        return existing
    if labelnames is not None:
        kwargs["labelnames"] = labelnames
    return metric_class(name, doc, registry=REGISTRY, **kwargs)


events_posted_total = _get_or_create_metric(
    Counter,
    "live_events_posted_total",
    "Total number of events accepted by post_event",
    ["event_name"],
)

events_sent_total = _get_or_create_metric(
    Counter,
    "live_events_sent_total",
    "Total number of events delivered to the stream backend",
    ["event_name"],
)

send_errors_total = _get_or_create_metric(
    Counter,
    "live_events_send_errors_total",
    "Total number of events the stream backend rejected or failed to receive",
    ["event_name", "error_category"],
)

queue_full_total = _get_or_create_metric(
    Counter,
    "live_events_queue_full_total",
    "Total number of events dropped because the delivery queue was full",
    ["event_name"],
)

queue_depth = _get_or_create_metric(
    Gauge, "live_events_queue_depth", "Number of jobs waiting in the delivery queue"
)

worker_running = _get_or_create_metric(
    Gauge, "live_events_worker_running", "Whether the delivery worker is running (1) or not (0)"
)

send_duration_seconds = _get_or_create_metric(
    Histogram,
    "live_events_send_duration_seconds",
    "Time taken by a single put_record call",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


class MetricsCollector:
    """Helper class for collecting and updating metrics."""

    def record_event_posted(self, event_name: str):
        """Record an event accepted for delivery."""
        events_posted_total.labels(event_name=event_name).inc()

    def record_event_sent(self, event_name: str, duration: float):
        """Record a successful delivery."""
        events_sent_total.labels(event_name=event_name).inc()
        send_duration_seconds.observe(duration)

    def record_send_error(self, event_name: str, error_category: str):
        """Record a failed delivery."""
        send_errors_total.labels(
            event_name=event_name, error_category=error_category
        ).inc()

    def record_queue_full(self, event_name: str):
        """Record an event dropped on a full queue."""
        queue_full_total.labels(event_name=event_name).inc()

    def update_queue_depth(self, size: int):
        """Update queue depth gauge."""
        queue_depth.set(size)

    def update_worker_status(self, running: bool):
        """Update worker running gauge."""
        worker_running.set(1 if running else 0)


# Global metrics collector instance
metrics_collector = MetricsCollector()
