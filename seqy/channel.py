"""
thread-safe collaborators for the channel and cancellation-aware sources.

Channel is a closable fifo: producers send() then close(), consumers receive
until the channel is closed and drained. close() never blocks, and a send that
loses a race with close() fails instead of queueing behind the end of the
channel. CancellationToken is a threading.Event with friendlier names and a
timeout constructor.
"""

import queue
import logging
import threading
from collections import deque
from .types import *
from .errors import InvalidStateError
from .config import get_config

logger = logging.getLogger(__name__)


class CancellationToken(threading.Event):
    """an event that fires once, used to stop cancellation-aware sequences"""

    def cancel(self) -> None:
        self.set()

    @property
    def cancelled(self) -> bool:
        return self.is_set()

    @classmethod
    def after(cls, seconds: float) -> 'CancellationToken':
        """a token that cancels itself after seconds, like a context deadline"""
        token = cls()
        timer = threading.Timer(seconds, token.cancel)
        timer.daemon = True
        timer.start()
        return token


class Channel(Generic[T]):
    """a closable fifo shared between producer threads and one consuming sequence"""

    def __init__(self, maxsize: int = 0):
        self._maxsize = maxsize
        self._items: deque = deque()
        self._closed = False
        # one lock guards items and the closed flag, so close/send/receive are atomic
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def _has_room(self) -> bool:
        return self._maxsize <= 0 or len(self._items) < self._maxsize

    def send(self, item: T, timeout: Optional[float] = None) -> None:
        """
        put item on the channel, blocking while a bounded channel is full.
        raises InvalidStateError if the channel is closed (also when it closes
        while send is waiting) and queue.Full if timeout elapses first.
        """
        with self._not_full:
            if not self._not_full.wait_for(lambda: self._closed or self._has_room(), timeout):
                raise queue.Full
            if self._closed:
                raise InvalidStateError("send on closed channel")
            self._items.append(item)
            self._not_empty.notify()

    def close(self) -> None:
        """mark the channel closed without blocking. items already sent are still delivered. idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def receive(self, timeout: Optional[float] = None) -> Tuple[Optional[T], bool]:
        """
        next item as (item, True), or (None, False) once the channel is closed and drained.
        raises queue.Empty if timeout elapses first.
        """
        with self._not_empty:
            if not self._not_empty.wait_for(lambda: self._items or self._closed, timeout):
                raise queue.Empty
            if not self._items:
                return None, False
            item = self._items.popleft()
            self._not_full.notify()
            return item, True

    def receive_or_cancel(self, cancel: CancelSignal) -> Tuple[Optional[T], bool]:
        """
        like receive(), but gives up with (None, False) as soon as cancel fires.
        cancellation is checked before every wait, so it wins over a ready item.
        """
        poll_interval = get_config().poll_interval
        while not cancel.is_set():
            try:
                return self.receive(timeout=poll_interval)
            except queue.Empty:
                continue
        logger.debug("channel receive cancelled")
        return None, False

    def __iter__(self) -> Iterator[T]:
        while True:
            item, ok = self.receive()
            if not ok:
                return
            yield item
