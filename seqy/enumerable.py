"""
the lazy sequence core.

an Enumerable wraps a zero-argument data function that returns a fresh
iterable for every traversal. combinators wrap the parent in a generator, so
nothing runs until something pulls. there are two ways to pull:

- push style: ``traverse(consumer)``, ``for x in seq``, and every terminal in ``seq.to``
- pull style: ``step()`` / ``peek()`` / ``release()`` over a cursor kept on the instance

both are views over the same generator. closing a traversal generator closes
its parents, which is how early stop reaches the innermost source and how zip
producer threads get torn down.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import closing
from typing import ContextManager, Generator

from .types import *
from .errors import InvalidStateError

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.combinatorics import CombinatoricsAccessor
from .extensions.utility import UtilityAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.zip import ZipAccessor

logger = logging.getLogger(__name__)


# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """start one traversal of the underlying source"""
        pass


# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, data_func: Callable[[], Iterable[T]]):
        """init with a function that returns a fresh iterable when called"""
        self._data_func = data_func
        # manual cursor state. push-style traversals never touch it.
        self._cursor: Optional[Generator[T, None, None]] = None
        self._current: Optional[T] = None
        self._started = False
        self._exhausted = False

    def __iter__(self) -> Generator[T, None, None]:
        # yield from forwards close() into the parent generator chain
        yield from self._data_func()

    def _traversal(self) -> ContextManager[Generator[T, None, None]]:
        """a new traversal that is closed when the with-block exits, however it exits"""
        return closing(iter(self))

    # --- push protocol ---

    def traverse(self, consumer: Consumer[T]) -> None:
        """
        feed each element to consumer until it returns a falsy value or the source runs out.
        the traversal is closed before returning, so an early stop releases everything upstream.
        """
        with self._traversal() as source:
            for item in source:
                if not consumer(item):
                    return

    # --- pull protocol ---

    def step(self) -> bool:
        """advance the manual cursor. returns whether peek() now has an element."""
        if self._exhausted:
            return False
        if self._cursor is None:
            self._cursor = iter(self)
        try:
            self._current = next(self._cursor)
        except StopIteration:
            self._finish_cursor()
            return False
        except BaseException:
            # a generator that raised is finished, keep the cursor consistent
            self._finish_cursor()
            raise
        self._started = True
        return True

    def peek(self) -> T:
        """the element made available by the last successful step()"""
        if not self._started:
            raise InvalidStateError("sequence is not started: call step() before peek()")
        if self._exhausted:
            raise InvalidStateError("sequence is exhausted: peek() after step() returned False")
        return self._current

    def release(self) -> None:
        """
        stop the manual cursor and free whatever its traversal holds (zip threads included).
        idempotent, and a no-op after natural exhaustion.
        """
        cursor, self._cursor = self._cursor, None
        self._exhausted = True
        self._current = None
        if cursor is None:
            return
        try:
            cursor.close()
        except Exception:
            logger.warning("error while releasing sequence cursor", exc_info=True)

    def _finish_cursor(self) -> None:
        self._cursor = None
        self._current = None
        self._exhausted = True

    def __enter__(self) -> '_BaseEnumerable[T]':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.release()
        return False


# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired sequence with push and pull consumption."""
    def __init__(self, data_func: Callable[[], Iterable[T]]):
        super().__init__(data_func)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.zip = ZipAccessor(self)
        self.group = GroupingAccessor(self)
        self.comb = CombinatoricsAccessor(self)
        self.util = UtilityAccessor(self)
        self.to = TerminalAccessor(self)
