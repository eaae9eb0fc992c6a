"""
Live events client.

The client turns ``post_event`` calls into delivery jobs: it merges ambient
context with call-site context, serializes the event and hands the job to
the shared worker. It never performs network I/O itself.
"""

import threading
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .config.models import AwsConnectionConfig, LiveEventsConfig
from .errors import ConfigurationError, SerializationError
from .schemas import DeliveryJob, build_event
from .shared.logging_utils import get_structured_logger
from .shared.metrics import metrics_collector
from .streaming.backends import KinesisStreamBackend


class Client:
    """Posts events to a stream through the runtime's shared worker."""

    def __init__(
        self,
        config: Mapping[str, Any] | LiveEventsConfig | None = None,
        stream_client: Any | None = None,
        runtime=None,
    ):
        """
        Args:
            config: Explicit configuration; defaults to the process-wide one.
                ``max_queue_size`` is not applied per client: every client
                shares the runtime's worker, whose capacity comes from the
                process-wide configuration or ``set_max_queue_size``
            stream_client: Explicit stream backend; defaults to the
                process-wide override, then to a Kinesis backend built from
                the configuration on first use
            runtime: Process-wide state to use; defaults to the global runtime

        Raises:
            ConfigurationError: If no valid configuration is available
        """
        if runtime is None:
            from .runtime import default_runtime

            runtime = default_runtime
        self._runtime = runtime
        self.log = get_structured_logger(__name__)
        self.metrics = metrics_collector

        explicit = config is not None
        if config is None:
            config = runtime.config
            if config is None:
                raise ConfigurationError(
                    "Live events are not configured: stream_name is required"
                )
        self.config = LiveEventsConfig.from_mapping(config)

        if explicit and "max_queue_size" in self.config.model_fields_set:
            shared_size = runtime.max_queue_size()
            if self.config.max_queue_size != shared_size:
                self.log.warning(
                    "Ignoring max_queue_size in client config, queue capacity is process-wide",
                    configured=self.config.max_queue_size,
                    max_queue_size=shared_size,
                )

        self._stream_client = stream_client if stream_client is not None else runtime.stream_client
        self._stream_client_lock = threading.Lock()

    @classmethod
    def get_config(cls, runtime=None) -> LiveEventsConfig | None:
        """Return the process-wide configuration, or None when not configured."""
        if runtime is None:
            from .runtime import default_runtime

            runtime = default_runtime
        return runtime.config

    @staticmethod
    def aws_config(raw_config: Mapping[str, Any] | LiveEventsConfig) -> AwsConnectionConfig:
        """
        Parse AWS connection settings from a configuration mapping.

        ``aws_endpoint`` is kept exactly as given (scheme, host, port and
        trailing slash); without it the endpoint is resolved from the region.

        Raises:
            ConfigurationError: If the settings are invalid
        """
        if isinstance(raw_config, LiveEventsConfig):
            raw_config = raw_config.model_dump()
        return AwsConnectionConfig.from_mapping(raw_config)

    @property
    def stream_client(self):
        """The stream backend deliveries from this client go to."""
        if self._stream_client is None:
            with self._stream_client_lock:
                if self._stream_client is None:
                    self._stream_client = KinesisStreamBackend(self.aws_config(self.config))
        return self._stream_client

    def post_event(
        self,
        event_name: str,
        payload: Mapping[str, Any] | None,
        time: datetime | None = None,
        ctx: Mapping[str, Any] | None = None,
        partition_key: str | None = None,
    ) -> None:
        """
        Queue an event for asynchronous delivery.

        Call-site ``ctx`` wins over ambient context on key collisions. A full
        queue drops the event with an error log; delivery failures are
        handled by the worker and never reach the caller.

        Raises:
            SerializationError: If the event cannot be encoded, or is larger
                than ``max_record_bytes``
        """
        context = self._runtime.context.current_context()
        if ctx:
            context.update(ctx)

        event = build_event(event_name, payload, time or datetime.now(UTC), context)
        data = event.encode()
        if len(data) > self.config.max_record_bytes:
            raise SerializationError(
                f"Event {event_name!r} is {len(data)} bytes, "
                f"over the {self.config.max_record_bytes} byte record limit"
            )

        job = DeliveryJob(
            stream_name=self.config.stream_name,
            partition_key=partition_key if partition_key is not None else str(uuid.uuid4()),
            data=data,
            event_name=event_name,
            backend=self.stream_client,
        )

        worker = self._runtime.worker
        if not worker.push(job):
            self.log.error(
                "Error queueing job for worker",
                event_name=event_name,
                queue_size=worker.queue_size,
                max_queue_size=self._runtime.max_queue_size(),
            )
            self.metrics.record_queue_full(event_name)
            return

        self.metrics.record_event_posted(event_name)
