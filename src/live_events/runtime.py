"""
Process-wide live events state.

``LiveEventsRuntime`` owns everything the package-level helpers share
between threads: the ambient context, the configuration, the queue size
accessor, the stream backend override, the delivery worker and the cached
default client. ``reset()`` returns it to its initial state for test
isolation.
"""

import threading
from collections.abc import Callable, Mapping
from typing import Any

from .config.models import DEFAULT_MAX_QUEUE_SIZE, LiveEventsConfig
from .config.settings import load_config_with_fallback
from .context import ContextStore
from .streaming.worker import AsyncWorker

_UNSET = object()


class LiveEventsRuntime:
    """Shared state behind the package-level live events API."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.context = ContextStore()
        self._config: Any = _UNSET
        self._max_queue_size: Callable[[], int] | None = None
        self._stream_client: Any | None = None
        self._worker: AsyncWorker | None = None
        self._client = None

    # Configuration

    @property
    def config(self) -> LiveEventsConfig | None:
        """Explicit configuration, else loaded once from the environment."""
        with self._lock:
            if self._config is _UNSET:
                self._config = load_config_with_fallback()
            return self._config

    def configure(self, config: Mapping[str, Any] | LiveEventsConfig | None) -> None:
        """Set the process-wide configuration; None disables live events."""
        with self._lock:
            self._config = None if config is None else LiveEventsConfig.from_mapping(config)
            self._client = None

    # Queue size

    def max_queue_size(self) -> int:
        """Current queue capacity."""
        size_fn = self._max_queue_size
        if size_fn is not None:
            return size_fn()
        config = self.config
        return config.max_queue_size if config is not None else DEFAULT_MAX_QUEUE_SIZE

    def set_max_queue_size(self, value: Callable[[], int] | int | None) -> None:
        """Set the capacity as a callable (read on every push) or a fixed int."""
        if value is None or callable(value):
            self._max_queue_size = value
        else:
            size = int(value)
            self._max_queue_size = lambda: size

    # Stream backend

    @property
    def stream_client(self) -> Any | None:
        return self._stream_client

    def set_stream_client(self, stream_client: Any | None) -> None:
        """Route deliveries of clients created afterwards to ``stream_client``."""
        with self._lock:
            self._stream_client = stream_client
            self._client = None

    # Worker and client

    @property
    def worker(self) -> AsyncWorker:
        with self._lock:
            if self._worker is None:
                self._worker = AsyncWorker(max_queue_size=self.max_queue_size)
            return self._worker

    def get_client(self):
        """The cached default client, or None when live events are not configured."""
        from .client import Client

        with self._lock:
            if self._client is None:
                if self.config is None:
                    return None
                self._client = Client(runtime=self)
            return self._client

    def reset(self) -> None:
        """Drain and drop the worker, then forget all process-wide state."""
        with self._lock:
            worker = self._worker
            self._worker = None
            self._client = None
            self._config = _UNSET
            self._max_queue_size = None
            self._stream_client = None
            self.context.clear_context()
        if worker is not None:
            worker.stop()


default_runtime = LiveEventsRuntime()
