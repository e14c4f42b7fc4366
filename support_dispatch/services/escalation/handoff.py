"""Bounded hand-off of unclassified queries to human operators.

Escalation is fire-and-forget from the dispatcher's point of view: once a
query is accepted here the caller is told it was forwarded, and whatever the
operator does with it is never routed back.
"""

import logging
import queue
import threading
from typing import Any

from support_dispatch.orchestrator.models import Query
from support_dispatch.services.contracts import OperatorHandler

logger = logging.getLogger(__name__)


class SimulatedOperator:
    """Stands in for a human operator by taking a fixed time per query."""

    def __init__(self, delay: float = 0.5, stop_event: threading.Event | None = None):
        self._delay = delay
        self._stop_event = stop_event or threading.Event()

    def bind(self, stop_event: threading.Event) -> None:
        """Interrupt the simulated work when ``stop_event`` is set."""
        self._stop_event = stop_event

    def __call__(self, query: Query) -> None:
        logger.info("Operator handling query %s from user %s", query.id, query.user_id)
        if self._stop_event.wait(self._delay):
            logger.info("Operator interrupted while handling query %s", query.id)
            return
        logger.info("Operator finished query %s", query.id)


class EscalationQueue:
    """Fixed-capacity FIFO drained by a single background consumer thread."""

    def __init__(
        self,
        capacity: int = 50,
        handler: OperatorHandler | None = None,
        poll_interval: float = 0.1,
    ):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._queue: queue.Queue[Query] = queue.Queue(maxsize=capacity)
        self._handler: OperatorHandler = handler or SimulatedOperator()
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._enqueued = 0
        self._rejected = 0
        self._handled = 0
        self._failed = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return self._queue.qsize()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def try_enqueue(self, query: Query) -> bool:
        """Push ``query`` without blocking; return False when at capacity."""
        try:
            self._queue.put_nowait(query)
        except queue.Full:
            with self._lock:
                self._rejected += 1
            logger.warning("Escalation queue full (%s), query %s not forwarded", self._capacity, query.id)
            return False
        with self._lock:
            self._enqueued += 1
        logger.info("Query %s forwarded to a human operator", query.id)
        return True

    def start(self, stop_event: threading.Event | None = None) -> None:
        """Launch the consumer thread; it runs until ``stop_event`` is set."""
        if self.is_running:
            raise RuntimeError("Escalation consumer already running")
        if stop_event is not None:
            self._stop_event = stop_event
        bind = getattr(self._handler, "bind", None)
        if callable(bind):
            bind(self._stop_event)
        self._thread = threading.Thread(
            target=self._consume,
            name="escalation-consumer",
            daemon=True,
        )
        self._thread.start()
        logger.info("Escalation consumer started (capacity=%s)", self._capacity)

    def stop(self, timeout: float | None = None) -> None:
        """Signal the consumer to exit and wait for it."""
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("Escalation consumer did not stop within %ss", timeout)
        else:
            self._thread = None
            logger.info("Escalation consumer stopped (%s queries left unhandled)", self.size)

    def _consume(self) -> None:
        while not self._stop_event.is_set():
            try:
                query = self._queue.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            try:
                self._handler(query)
            except Exception as e:
                with self._lock:
                    self._failed += 1
                logger.error("Operator handler failed for query %s: %s", query.id, e, exc_info=True)
            else:
                with self._lock:
                    self._handled += 1
            finally:
                self._queue.task_done()

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "capacity": self._capacity,
                "size": self._queue.qsize(),
                "enqueued": self._enqueued,
                "rejected": self._rejected,
                "handled": self._handled,
                "failed": self._failed,
            }
