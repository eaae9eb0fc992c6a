"""
Live Events

Asynchronous delivery of structured events to a streaming backend:
- Process-wide ambient context merged into every event
- Bounded in-process queue drained by a single background worker
- Pluggable stream backends, AWS Kinesis by default
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from .client import Client
from .config.models import AwsConnectionConfig, LiveEventsConfig
from .errors import (
    ConfigurationError,
    DeliveryError,
    LiveEventsError,
    SerializationError,
)
from .runtime import LiveEventsRuntime, default_runtime
from .schemas import DeliveryJob, EventRecord, WirePayload, decode_payload
from .shared.logging_config import configure_structured_logging
from .shared.logging_utils import get_structured_logger
from .streaming.backends import KinesisStreamBackend, StreamBackend
from .streaming.worker import AsyncWorker

__version__ = "1.0.0"

_log = get_structured_logger(__name__)


def configure(config: Mapping[str, Any] | LiveEventsConfig | None) -> None:
    """Set the process-wide configuration; None disables live events."""
    default_runtime.configure(config)


def set_context(context: Mapping[str, Any]) -> None:
    """Merge ``context`` into the ambient context sent with every event."""
    default_runtime.context.set_context(context)


def get_context() -> dict[str, Any]:
    """Return a copy of the ambient context."""
    return default_runtime.context.current_context()


def clear_context() -> None:
    """Remove all ambient context."""
    default_runtime.context.clear_context()


def max_queue_size() -> int:
    return default_runtime.max_queue_size()


def set_max_queue_size(value: Callable[[], int] | int | None) -> None:
    """Set the delivery queue capacity, as a callable or a fixed size."""
    default_runtime.set_max_queue_size(value)


def stream_client() -> Any | None:
    return default_runtime.stream_client


def set_stream_client(client: Any | None) -> None:
    """Override the stream backend; None restores the default Kinesis backend."""
    default_runtime.set_stream_client(client)


def worker() -> AsyncWorker:
    """The process-wide delivery worker; call ``stop()`` to flush before exit."""
    return default_runtime.worker


def reset() -> None:
    """Flush pending events and reset all process-wide state."""
    default_runtime.reset()


def post_event(
    *,
    event_name: str,
    payload: Mapping[str, Any] | None,
    time: datetime | None = None,
    partition_key: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """
    Post an event with the ambient context merged into its attributes.

    Does nothing when live events are not configured.

    Raises:
        SerializationError: If the event cannot be encoded
    """
    client = default_runtime.get_client()
    if client is None:
        _log.debug("Live events not configured, dropping event", event_name=event_name)
        return
    client.post_event(event_name, payload, time, context, partition_key)


__all__ = [
    "AsyncWorker",
    "AwsConnectionConfig",
    "Client",
    "ConfigurationError",
    "DeliveryError",
    "DeliveryJob",
    "EventRecord",
    "KinesisStreamBackend",
    "LiveEventsConfig",
    "LiveEventsError",
    "LiveEventsRuntime",
    "SerializationError",
    "StreamBackend",
    "WirePayload",
    "clear_context",
    "configure",
    "configure_structured_logging",
    "decode_payload",
    "get_context",
    "max_queue_size",
    "post_event",
    "reset",
    "set_context",
    "set_max_queue_size",
    "set_stream_client",
    "stream_client",
    "worker",
]
