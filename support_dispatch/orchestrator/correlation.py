"""Correlation of in-flight queries with the callers waiting on them."""

import threading
from collections.abc import Callable

from support_dispatch.errors import DispatchError, DuplicateRequestIDError
from support_dispatch.orchestrator.models import Response


class DeliverySlot:
    """Single-use container for the one response to one query.

    The first ``deliver`` or ``fail`` wins; later writes are refused and
    return False instead of blocking or overwriting.
    """

    def __init__(self, query_id: str) -> None:
        self.query_id = query_id
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._response: Response | None = None
        self._error: DispatchError | None = None

    @property
    def done(self) -> bool:
        return self._ready.is_set()

    def deliver(self, response: Response) -> bool:
        with self._lock:
            if self._ready.is_set():
                return False
            self._response = response
            self._ready.set()
            return True

    def fail(self, error: DispatchError) -> bool:
        with self._lock:
            if self._ready.is_set():
                return False
            self._error = error
            self._ready.set()
            return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the slot is filled; False if ``timeout`` elapsed first."""
        return self._ready.wait(timeout)

    def result(self) -> Response:
        """Return the delivered response or raise the stored error."""
        if not self._ready.is_set():
            raise RuntimeError(f"Slot for query {self.query_id} has not been filled")
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


class CorrelationTable:
    """Thread-safe map of query id -> pending delivery slot.

    Every read and write goes through one lock. ``pop`` is the only way a
    slot leaves the table, so whichever side pops first (the worker
    delivering or the caller giving up) owns the outcome.
    """

    def __init__(self) -> None:
        self._slots: dict[str, DeliverySlot] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def __contains__(self, query_id: object) -> bool:
        with self._lock:
            return query_id in self._slots

    def register(self, query_id: str) -> DeliverySlot:
        with self._lock:
            if query_id in self._slots:
                raise DuplicateRequestIDError(query_id=query_id)
            slot = DeliverySlot(query_id)
            self._slots[query_id] = slot
            return slot

    def pop(self, query_id: str) -> DeliverySlot | None:
        with self._lock:
            return self._slots.pop(query_id, None)

    def deliver(self, response: Response) -> bool:
        """Remove the slot for ``response`` and fill it, atomically.

        Returns False when no caller is waiting any more (it timed out, was
        rejected, or never registered).
        """
        with self._lock:
            slot = self._slots.pop(response.query_id, None)
            if slot is None:
                return False
            return slot.deliver(response)

    def fail_all(self, error_factory: Callable[[str], DispatchError]) -> int:
        """Drain the table, failing each slot with ``error_factory(query_id)``."""
        with self._lock:
            slots = list(self._slots.values())
            self._slots.clear()
        failed = 0
        for slot in slots:
            if slot.fail(error_factory(slot.query_id)):
                failed += 1
        return failed
