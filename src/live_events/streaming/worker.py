"""
Background delivery of queued live events.

A single worker thread drains a FIFO queue and hands each job to its stream
backend. Producers never wait: when the queue holds ``max_queue_size()``
jobs, ``push`` drops the new job and returns False. Failed deliveries are
logged, counted and discarded.
"""

import queue
import threading
import time
from collections.abc import Callable

from ..config.models import DEFAULT_MAX_QUEUE_SIZE
from ..errors import classify_error
from ..schemas import DeliveryJob
from ..shared.logging_utils import get_structured_logger
from ..shared.metrics import metrics_collector

_STOP = object()


class AsyncWorker:
    """
    Single-consumer delivery worker.

    Job lifecycle:
        enqueued -> dequeued -> delivering -> delivered | failed

    Lifecycle:
        The thread starts on the first ``push`` (or ``start()``) and runs
        until ``stop()``, which delivers everything queued before the call
        and then joins the thread. A later ``push`` starts a fresh thread.
        The thread is a daemon: jobs still queued when the process exits
        without calling ``stop()`` are lost.
    """

    def __init__(
        self,
        max_queue_size: Callable[[], int] | None = None,
        autostart: bool = True,
        thread_name: str = "live-events-worker",
    ):
        """
        Args:
            max_queue_size: Callable returning the current capacity; read on
                every push so it can change at runtime
            autostart: Start the thread on the first push
            thread_name: Name of the delivery thread
        """
        self._max_queue_size = max_queue_size or (lambda: DEFAULT_MAX_QUEUE_SIZE)
        self._autostart = autostart
        self._thread_name = thread_name
        self._queue: queue.Queue = queue.Queue()
        self._push_lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        # Jobs in the queue, excluding stop sentinels; guarded by _push_lock
        self._jobs = 0

        self.log = get_structured_logger(__name__, correlation_prefix="LEW")
        self.log.set_correlation_id(self.log.generate_correlation_id())
        self.metrics = metrics_collector

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    @property
    def queue_size(self) -> int:
        """Number of queued jobs, not counting stop sentinels."""
        with self._push_lock:
            return self._jobs

    def push(self, job: DeliveryJob) -> bool:
        """
        Enqueue a job without blocking.

        Returns:
            True if the job was queued, False if the queue was full and the
            job was dropped
        """
        with self._push_lock:
            if self._jobs >= self._max_queue_size():
                return False
            self._queue.put_nowait(job)
            self._jobs += 1
            self.metrics.update_queue_depth(self._jobs)

        if self._autostart and not self.running:
            self.start()
        return True

    def start(self) -> None:
        """Start the delivery thread if it is not already running."""
        with self._lifecycle_lock:
            self._start_locked()

    def _start_locked(self) -> None:
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run, name=self._thread_name, daemon=True
        )
        self._thread.start()
        self.metrics.update_worker_status(True)
        self.log.debug("Live events worker started", thread=self._thread_name)

    def stop(self) -> None:
        """
        Deliver every job queued so far, then halt the thread.

        Blocks the caller until the queue has been drained. Jobs pushed while
        ``stop()`` is draining are picked up by a fresh thread (unless the
        worker was created with ``autostart=False``).
        """
        with self._lifecycle_lock:
            if not self.running:
                if self.queue_size == 0:
                    return
                self._start_locked()
            thread = self._thread
            # Sentinel bypasses the capacity check so stop() never fails
            self._queue.put(_STOP)
            thread.join()
            self._thread = None
            self.metrics.update_worker_status(False)
            self.log.debug("Live events worker stopped", thread=self._thread_name)

            # A push that saw the old thread alive did not start a new one
            if self._autostart and self.queue_size > 0:
                self._start_locked()

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            try:
                if job is _STOP:
                    return
                with self._push_lock:
                    self._jobs -= 1
                    self.metrics.update_queue_depth(self._jobs)
                self._deliver(job)
            finally:
                self._queue.task_done()

    def _deliver(self, job: DeliveryJob) -> bool:
        started = time.monotonic()
        try:
            job.backend.put_record(
                stream_name=job.stream_name,
                data=job.data,
                partition_key=job.partition_key,
            )
        except Exception as exc:
            error = classify_error(exc)
            self.log.error(
                "Error posting event",
                event_name=job.event_name,
                stream_name=job.stream_name,
                partition_key=job.partition_key,
                error=error.message,
                error_type=type(exc).__name__,
                error_category=error.category.value,
                error_severity=error.severity.value,
            )
            self.metrics.record_send_error(job.event_name, error.category.value)
            return False

        self.metrics.record_event_sent(job.event_name, time.monotonic() - started)
        return True
