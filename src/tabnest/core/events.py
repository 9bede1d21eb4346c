"""Host notifications, the event bus, and the serializing dispatcher.

Handling a notification can take several host calls whose intermediate
states are visible to the host. SerialDispatcher makes sure one job finishes
before the next starts, whichever thread submitted it.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tabnest.core.tree_types import Group

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupUpdated:
    """A group's title, color or collapsed flag changed (or the group is new)."""

    group: Group


@dataclass(frozen=True)
class GroupMoved:
    group: Group


@dataclass(frozen=True)
class TabsChanged:
    """Tabs were opened, closed, moved or regrouped."""


Notification = GroupUpdated | GroupMoved | TabsChanged

N = TypeVar("N", GroupUpdated, GroupMoved, TabsChanged)
T = TypeVar("T")


class EventBus:
    """Registry of notification handlers.

    Handlers are called synchronously, in subscription order. There is no
    unsubscribe: subscriptions last for the life of the process.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: type[N], handler: Callable[[N], None]) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: Notification) -> None:
        handlers = self._handlers.get(type(event), [])
        logger.debug("Publishing %s to %d handler(s)", type(event).__name__, len(handlers))
        for handler in handlers:
            handler(event)


@dataclass(frozen=True)
class Job:
    """Unit of serialized work.

    Consecutive queued jobs sharing a non-None coalesce_key run once.
    """

    description: str
    run: Callable[[], object]
    coalesce_key: str | None = None


class SerialDispatcher:
    """Runs jobs one at a time, in submission order.

    The first submitter drains the queue; submitters arriving while a drain
    is in progress (other threads, or a running job itself) only enqueue.
    A job that raises is logged and the drain carries on, so queued work
    never waits for another notification. Once the queue is empty the first
    error is re-raised to the submitter that was draining.
    """

    def __init__(self) -> None:
        self._exclusive = threading.RLock()
        self._queue_lock = threading.Lock()
        self._queue: deque[Job] = deque()
        self._draining = False

    @property
    def pending(self) -> int:
        """Number of queued jobs not yet started."""
        with self._queue_lock:
            return len(self._queue)

    def submit(self, job: Job) -> None:
        with self._queue_lock:
            self._queue.append(job)
            if self._draining:
                return
            self._draining = True

        try:
            first_error = self._drain()
        except BaseException:
            with self._queue_lock:
                self._draining = False
            raise

        if first_error is not None:
            raise first_error

    def run_exclusive(self, fn: Callable[[], T]) -> T:
        """Run fn immediately while holding the same lock jobs run under."""
        with self._exclusive:
            return fn()

    def _drain(self) -> Exception | None:
        first_error: Exception | None = None
        while True:
            with self._queue_lock:
                if not self._queue:
                    self._draining = False
                    break
                job = self._take_next()

            logger.debug("Running job: %s", job.description)
            try:
                with self._exclusive:
                    job.run()
            except Exception as e:
                logger.exception("Job failed: %s", job.description)
                if first_error is None:
                    first_error = e

        return first_error

    def _take_next(self) -> Job:
        job = self._queue.popleft()
        if job.coalesce_key is None:
            return job

        dropped = 0
        while self._queue and self._queue[0].coalesce_key == job.coalesce_key:
            job = self._queue.popleft()
            dropped += 1
        if dropped:
            logger.debug("Coalesced %d queued '%s' job(s)", dropped, job.coalesce_key)
        return job
