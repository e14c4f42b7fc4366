"""Concurrent dispatch engine.

Callers hand queries to ``Dispatcher.process``; a fixed pool of worker
threads pulls them from a bounded intake queue, routes each through the
``SupportAgent`` and writes the response into the caller's delivery slot.

Backpressure is immediate: a full intake queue rejects the query with
``OverloadError`` instead of blocking. Timeouts are caller-scoped: a caller
that gives up removes its slot, and the worker that eventually finishes the
query finds no slot and discards the response.
"""

import asyncio
import logging
import queue
import threading
import time
from typing import Any

from support_dispatch.config.constants import DispatchEvent, ResponseSource
from support_dispatch.config.settings import Settings
from support_dispatch.errors import DispatcherClosedError, OverloadError, RequestTimeoutError
from support_dispatch.infrastructure.logging.logger import StructuredLogger
from support_dispatch.orchestrator.agent import SupportAgent
from support_dispatch.orchestrator.correlation import CorrelationTable
from support_dispatch.orchestrator.models import Query, Response

logger = logging.getLogger(__name__)


class Dispatcher:
    """Bounded intake queue + worker pool + correlation table."""

    def __init__(
        self,
        agent: SupportAgent,
        *,
        workers: int = 5,
        intake_capacity: int = 100,
        default_timeout: float = 3.0,
        poll_interval: float = 0.1,
        shutdown_timeout: float | None = 5.0,
    ) -> None:
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        if intake_capacity <= 0:
            raise ValueError(f"intake_capacity must be positive, got {intake_capacity}")

        self._agent = agent
        self._worker_count = workers
        self._intake_capacity = intake_capacity
        self._default_timeout = default_timeout
        self._poll_interval = poll_interval
        self._shutdown_timeout = shutdown_timeout

        self._intake: queue.Queue[Query] = queue.Queue(maxsize=intake_capacity)
        self._table = CorrelationTable()
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []
        self._state_lock = threading.Lock()
        self._started = False
        self._closed = False

        self._stats_lock = threading.Lock()
        self._counters: dict[str, int] = {
            "submitted": 0,
            "rejected": 0,
            "delivered": 0,
            "escalated": 0,
            "discarded": 0,
            "timed_out": 0,
            "closed": 0,
        }
        self._events = StructuredLogger(f"{__name__}.events")

    @classmethod
    def from_settings(cls, settings: Settings, agent: SupportAgent) -> "Dispatcher":
        return cls(
            agent,
            workers=settings.dispatcher_workers,
            intake_capacity=settings.intake_queue_capacity,
            default_timeout=settings.request_timeout,
            poll_interval=settings.worker_poll_interval,
            shutdown_timeout=settings.shutdown_timeout,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def agent(self) -> SupportAgent:
        return self._agent

    @property
    def is_running(self) -> bool:
        return self._started and not self._closed and not self._stop_event.is_set()

    @property
    def pending_count(self) -> int:
        return len(self._table)

    @property
    def queue_size(self) -> int:
        return self._intake.qsize()

    def start(self, cancel_event: threading.Event | None = None) -> None:
        """Launch the escalation consumer and the worker pool.

        Args:
            cancel_event: Optional externally owned stop signal. Setting it
                stops every worker and the escalation consumer.
        """
        with self._state_lock:
            if self._closed:
                raise DispatcherClosedError()
            if self._started:
                raise RuntimeError("Dispatcher already started")
            self._started = True
            if cancel_event is not None:
                self._stop_event = cancel_event

        if not self._agent.escalation.is_running:
            self._agent.escalation.start(self._stop_event)

        for worker_id in range(self._worker_count):
            thread = threading.Thread(
                target=self._worker_loop,
                args=(worker_id,),
                name=f"dispatch-worker-{worker_id}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

        logger.info(
            "Dispatcher started: workers=%s intake_capacity=%s default_timeout=%ss",
            self._worker_count,
            self._intake_capacity,
            self._default_timeout,
        )

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop workers and the escalation consumer, then fail pending callers.

        ``timeout`` bounds each thread join and defaults to the configured
        shutdown timeout. Safe to call more than once.
        """
        with self._state_lock:
            if self._closed:
                return
            self._closed = True

        if timeout is None:
            timeout = self._shutdown_timeout
        logger.info("Shutting down dispatcher")
        self._stop_event.set()

        for thread in self._threads:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("%s did not stop within %ss", thread.name, timeout)
        self._threads.clear()

        self._agent.escalation.stop(timeout)

        failed = self._table.fail_all(lambda query_id: DispatcherClosedError(query_id=query_id))
        if failed:
            self._count("closed", failed)
            logger.warning("Failed %s pending requests at shutdown", failed)

        dropped = 0
        while True:
            try:
                self._intake.get_nowait()
            except queue.Empty:
                break
            self._intake.task_done()
            dropped += 1
        if dropped:
            logger.warning("Dropped %s queued queries at shutdown", dropped)

        logger.info("Dispatcher stopped")

    def __enter__(self) -> "Dispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, query: Query) -> bool:
        """Queue ``query`` without blocking; False when full or shut down."""
        if self._closed:
            return False
        try:
            self._intake.put_nowait(query)
        except queue.Full:
            self._count("rejected")
            logger.warning("Intake queue full (%s), query %s rejected", self._intake_capacity, query.id)
            return False
        self._count("submitted")
        logger.info("Query %s queued for processing", query.id)
        return True

    def process(self, query: Query, timeout: float | None = None) -> Response:
        """Submit ``query`` and wait for its response.

        Raises:
            DuplicateRequestIDError: ``query.id`` is already in flight.
            OverloadError: The intake queue is full.
            RequestTimeoutError: No response within ``timeout`` seconds.
                A timeout of zero or less never waits.
            DispatcherClosedError: The dispatcher is, or was while waiting,
                shut down.
            RuntimeError: The dispatcher was never started.
        """
        if timeout is None:
            timeout = self._default_timeout
        if self._closed:
            raise DispatcherClosedError(query_id=query.id)
        if not self._started:
            raise RuntimeError("Dispatcher not started")

        started = time.monotonic()
        slot = self._table.register(query.id)

        if not self.submit(query):
            self._table.pop(query.id)
            if self._closed:
                raise DispatcherClosedError(query_id=query.id)
            self._events.log_event(DispatchEvent.REJECTED.value, query.id, level=logging.WARNING)
            raise OverloadError(query_id=query.id)

        if timeout > 0 and slot.wait(timeout):
            return self._finish(slot.result(), started)

        if self._table.pop(query.id) is None:
            # The worker (or shutdown) claimed the slot after our wait expired.
            if timeout > 0:
                slot.wait()
                return self._finish(slot.result(), started)
            self._count("discarded")

        self._count("timed_out")
        self._events.log_event(
            DispatchEvent.TIMED_OUT.value,
            query.id,
            duration_ms=(time.monotonic() - started) * 1000,
            level=logging.WARNING,
            timeout_s=timeout,
        )
        raise RequestTimeoutError(query_id=query.id)

    async def process_async(self, query: Query, timeout: float | None = None) -> Response:
        """Asyncio entry point; runs ``process`` in a thread."""
        return await asyncio.to_thread(self.process, query, timeout)

    def _finish(self, response: Response, started: float) -> Response:
        self._count("delivered")
        event = DispatchEvent.ESCALATED if response.source == ResponseSource.HUMAN else DispatchEvent.ANSWERED
        self._events.log_event(
            event.value,
            response.query_id,
            duration_ms=(time.monotonic() - started) * 1000,
            source=response.source.value,
        )
        return response

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    def _worker_loop(self, worker_id: int) -> None:
        logger.info("Worker %s started", worker_id)
        while not self._stop_event.is_set():
            try:
                query = self._intake.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            try:
                self._run_one(worker_id, query)
            finally:
                self._intake.task_done()
        logger.info("Worker %s stopping", worker_id)

    def _run_one(self, worker_id: int, query: Query) -> None:
        logger.debug("Worker %s processing query %s", worker_id, query.id)
        try:
            response = self._agent.handle(query)
            delivered = self._table.deliver(response)
        except Exception as e:
            self._events.log_error("worker_failure", e, {"worker_id": worker_id, "query_id": query.id})
            return

        if response.source == ResponseSource.HUMAN:
            self._count("escalated")

        if delivered:
            return

        self._count("discarded")
        self._events.log_event(
            DispatchEvent.DISCARDED.value,
            query.id,
            level=logging.WARNING,
            source=response.source.value,
        )

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def _count(self, key: str, amount: int = 1) -> None:
        with self._stats_lock:
            self._counters[key] += amount

    def get_stats(self) -> dict[str, Any]:
        """Counters plus current queue state.

        ``delivered`` counts responses returned to a caller; a response
        written to a slot the caller then abandoned counts as ``discarded``.
        """
        with self._stats_lock:
            stats: dict[str, Any] = dict(self._counters)
        stats.update(
            {
                "workers": self._worker_count,
                "intake_capacity": self._intake_capacity,
                "queue_size": self._intake.qsize(),
                "pending": len(self._table),
                "running": self.is_running,
                "escalation": self._agent.escalation.get_stats(),
            }
        )
        return stats
