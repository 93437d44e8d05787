"""
producer threads for the zip family.

pairing sequences that advance independently needs each side to run on its own.
a ProducerGroup starts one daemon thread per source; each thread pushes elements
into a bounded hand-off queue and checks a shared stop event between puts. the
group is a context manager owned by one traversal generator: leaving the with
block (exhaustion, early stop, exception, or release() of a cursor) sets the
stop event, lets every thread close its own source, and joins it.
"""

from __future__ import annotations

import queue
import logging
import threading
import typing
from ..types import *
from ..config import get_config
from ..errors import InvalidStateError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)

_END = object()


class _Failure:
    """carries an exception raised by a source across the hand-off queue"""
    __slots__ = ('error',)

    def __init__(self, error: BaseException):
        self.error = error


class _Producer(Generic[T]):
    def __init__(self, source: 'Enumerable[T]', name: str, stop: threading.Event,
                 handoff_size: int, poll_interval: float):
        self._source = source
        self._stop = stop
        self._poll_interval = poll_interval
        self._queue: queue.Queue = queue.Queue(handoff_size)
        self._exhausted = False
        self.thread = threading.Thread(target=self._run, name=name, daemon=True)

    def _offer(self, item: Any) -> bool:
        """hand item to the consumer, giving up if the group is stopping"""
        while not self._stop.is_set():
            try:
                self._queue.put(item, timeout=self._poll_interval)
                return True
            except queue.Full:
                continue
        return False

    def _run(self) -> None:
        try:
            # the source generator is created, advanced and closed on this thread only
            with self._source._traversal() as items:
                for item in items:
                    if not self._offer(item):
                        return
        except BaseException as e:
            # relay SystemExit and custom BaseExceptions too
            self._offer(_Failure(e))
            return
        self._offer(_END)

    def receive(self) -> Tuple[Any, bool]:
        """next element from this side as (item, True), or (None, False) once it ran out"""
        if self._exhausted:
            return None, False
        while True:
            try:
                item = self._queue.get(timeout=self._poll_interval)
                break
            except queue.Empty:
                # every put happens before the thread exits, so dead and empty means nothing is coming
                if not self.thread.is_alive() and self._queue.empty():
                    self._exhausted = True
                    raise InvalidStateError(f"{self.thread.name} exited without finishing its source")
        if item is _END:
            self._exhausted = True
            return None, False
        if isinstance(item, _Failure):
            self._exhausted = True
            raise item.error
        return item, True


class ProducerGroup:
    """one producer thread per source, started on enter and stopped and joined on exit"""

    def __init__(self, *sources: 'Enumerable[Any]'):
        config = get_config()
        self._join_timeout = config.join_timeout
        self._stop = threading.Event()
        self.producers = [
            _Producer(source, f"seqy-zip-producer-{i}", self._stop, config.handoff_size, config.poll_interval)
            for i, source in enumerate(sources)
        ]

    def __enter__(self) -> 'ProducerGroup':
        for producer in self.producers:
            producer.thread.start()
        logger.debug(f"started {len(self.producers)} zip producers")
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.stop()
        return False

    def stop(self) -> None:
        """signal every producer to stop and wait for it to close its source"""
        self._stop.set()
        for producer in self.producers:
            producer.thread.join(self._join_timeout)
            if producer.thread.is_alive():
                logger.warning(f"{producer.thread.name} did not exit within {self._join_timeout}s; "
                               f"its source is blocked and the thread is left as a daemon")
        logger.debug(f"stopped {len(self.producers)} zip producers")
