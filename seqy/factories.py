import typing
import logging
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

logger = logging.getLogger(__name__)


def _cancelled(cancel: Optional[CancelSignal]) -> bool:
    return cancel is not None and cancel.is_set()


def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """
    create enumerable from iterable. each traversal re-iterates data, so a list
    can be traversed any number of times while a one-shot iterator is consumed once.
    """
    from .enumerable import Enumerable
    def iterable_data():
        # a plain loop, so stopping early never closes the caller's object
        for item in data:
            yield item
    return Enumerable(iterable_data)


def as_enumerable(data: Iterable[T]) -> 'Enumerable[T]':
    """pass enumerables through, lift anything else with from_iterable"""
    from .enumerable import Enumerable
    if isinstance(data, Enumerable):
        return data
    return from_iterable(data)


def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(lambda: ())


def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with item repeated count times (count < 0 yields nothing)"""
    from .enumerable import Enumerable
    def repeat_data():
        for _ in range(max(count, 0)):
            yield item
    return Enumerable(repeat_data)


def from_range(start: int, end: int) -> 'Enumerable[int]':
    """integers from start (inclusive) to end (exclusive)"""
    from .enumerable import Enumerable
    return Enumerable(lambda: range(start, end))


def range_step(start: int, end: int, step: int) -> 'Enumerable[int]':
    """
    integers from start towards end (exclusive) by step. a negative step counts down.
    a zero step yields nothing rather than looping forever.
    """
    from .enumerable import Enumerable
    if step == 0:
        return empty()
    return Enumerable(lambda: range(start, end, step))


def generate(generator_func: Callable[[], T], cancel: Optional[CancelSignal] = None) -> 'Enumerable[T]':
    """
    infinite sequence of generator_func() results. bound it with take/take_while,
    or pass a cancel signal (e.g. a CancellationToken) to stop it from outside.
    """
    from .enumerable import Enumerable
    def generate_data():
        while not _cancelled(cancel):
            yield generator_func()
        logger.debug("generate stopped by cancellation")
    return Enumerable(generate_data)


def from_func(func: Callable[[], Tuple[T, bool]], cancel: Optional[CancelSignal] = None) -> 'Enumerable[T]':
    """
    sequence from a callback returning (value, has_more). polled until has_more is
    false; the value returned alongside has_more=False is discarded.
    """
    from .enumerable import Enumerable
    def func_data():
        while not _cancelled(cancel):
            value, has_more = func()
            if not has_more:
                return
            yield value
        logger.debug("from_func stopped by cancellation")
    return Enumerable(func_data)


def flatten(*sequences: Iterable[T]) -> 'Enumerable[T]':
    """
    concatenate sequences in argument order. when the consumer stops inside one of
    them, none of the later ones is started.
    """
    from .enumerable import Enumerable
    parts = [as_enumerable(sequence) for sequence in sequences]
    def flatten_data():
        for part in parts:
            with part._traversal() as source:
                yield from source
    return Enumerable(flatten_data)


# --- aliases ---
seqy = from_iterable
S = from_iterable
