from __future__ import annotations
import typing
from functools import cmp_to_key
from itertools import islice, takewhile, dropwhile, cycle as itertools_cycle
import numpy as np
from ..types import *
from ..errors import InvalidArgumentError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

# builtin types whose falsy values count as "zero" for compact()
_ZERO_CHECKED_TYPES = (bool, int, float, complex, str, bytes, bytearray, tuple, list, dict, set, frozenset)


def is_zero_value(item: Any) -> bool:
    """none, or a falsy builtin scalar/container (0, '', [], {}...)"""
    if item is None:
        return True
    return isinstance(item, _ZERO_CHECKED_TYPES) and not item


def _less_to_key(less: Less[T]) -> Callable[[T], Any]:
    def compare(a: T, b: T) -> int:
        if less(a, b): return -1
        if less(b, a): return 1
        return 0
    return cmp_to_key(compare)


class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        def filter_data():
            with self._traversal() as source:
                for item in source:
                    if predicate(item):
                        yield item
        return Enumerable(filter_data)

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        def map_data():
            with self._traversal() as source:
                for item in source:
                    yield selector(item)
        return Enumerable(map_data)

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project each element to an iterable and flatten the results"""
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        def flat_map_data():
            with self._traversal() as source:
                for item in source:
                    with as_enumerable(selector(item))._traversal() as inner:
                        yield from inner
        return Enumerable(flat_map_data)

    # aliases
    map = select
    filter = where

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """
        take the first 'count' elements (negative counts as 0).
        element count+1 is never pulled from the source, so this bounds infinite sequences.
        """
        from ..enumerable import Enumerable
        count = max(count, 0)
        def take_data():
            if count == 0:
                return
            with self._traversal() as source:
                for taken, item in enumerate(source, 1):
                    yield item
                    if taken >= count:
                        return
        return Enumerable(take_data)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements (negative counts as 0)"""
        from ..enumerable import Enumerable
        count = max(count, 0)
        def skip_data():
            with self._traversal() as source:
                yield from islice(source, count, None)
        return Enumerable(skip_data)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import Enumerable
        def take_while_data():
            with self._traversal() as source:
                yield from takewhile(predicate, source)
        return Enumerable(take_while_data)

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true, then yield the first failing one and the rest"""
        from ..enumerable import Enumerable
        def skip_while_data():
            with self._traversal() as source:
                yield from dropwhile(predicate, source)
        return Enumerable(skip_while_data)

    drop = skip
    drop_while = skip_while

    def chain(self: 'Enumerable[T]', other: Iterable[T]) -> 'Enumerable[T]':
        """
        this sequence, then other. if the consumer stops while this sequence is
        running, other is never started.
        """
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        second = as_enumerable(other)
        def chain_data():
            with self._traversal() as source:
                yield from source
            with second._traversal() as source:
                yield from source
        return Enumerable(chain_data)

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.chain((element,))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..factories import from_iterable
        return from_iterable((element,)).chain(self)

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements. materializes the source on each traversal."""
        from ..enumerable import Enumerable
        def reverse_data():
            with self._traversal() as source:
                data = list(source)
            yield from reversed(data)
        return Enumerable(reverse_data)

    def sort(self: 'Enumerable[T]', less: Optional[Less[T]] = None) -> 'Enumerable[T]':
        """
        sort by less(a, b) -> bool, or by natural ordering when less is omitted.
        materializes the source on each traversal. the sort is stable.
        """
        from ..enumerable import Enumerable
        key = _less_to_key(less) if less is not None else None
        def sort_data():
            with self._traversal() as source:
                data = sorted(source, key=key)
            yield from data
        return Enumerable(sort_data)

    def order_by(self: 'Enumerable[T]', key_selector: KeySelector[T, K],
                 descending: bool = False) -> 'Enumerable[T]':
        """stable sort by a derived key"""
        from ..enumerable import Enumerable
        def order_data():
            with self._traversal() as source:
                data = sorted(source, key=key_selector, reverse=descending)
            yield from data
        return Enumerable(order_data)

    def unique(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """drop repeats of a key (the element itself by default). first occurrence wins."""
        from ..enumerable import Enumerable
        def unique_data():
            seen = set()  # fresh per traversal
            with self._traversal() as source:
                for item in source:
                    key = item if key_selector is None else key_selector(item)
                    if key in seen:
                        continue
                    seen.add(key)
                    yield item
        return Enumerable(unique_data)

    def cycle(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """
        repeat the sequence forever, saving a copy during the first pass.
        an empty source gives an empty sequence; otherwise bound it with take/take_while.
        """
        from ..enumerable import Enumerable
        def cycle_data():
            with self._traversal() as source:
                yield from itertools_cycle(source)
        return Enumerable(cycle_data)

    def step_by(self: 'Enumerable[T]', step: int) -> 'Enumerable[T]':
        """every step-th element, starting with the first. step must be positive."""
        from ..enumerable import Enumerable
        if step <= 0:
            raise InvalidArgumentError(f"step_by: step must be positive, got {step}")
        def step_data():
            with self._traversal() as source:
                yield from islice(source, 0, None, step)
        return Enumerable(step_data)

    def shuffle(self: 'Enumerable[T]', seed: Optional[int] = None) -> 'Enumerable[T]':
        """
        a uniformly random permutation, drawn again on every traversal.
        a seed makes every traversal produce the same permutation.
        """
        from ..enumerable import Enumerable
        def shuffle_data():
            with self._traversal() as source:
                data = list(source)
            rng = np.random.default_rng(seed)
            for index in rng.permutation(len(data)):
                yield data[index]
        return Enumerable(shuffle_data)

    def compact(self: 'Enumerable[T]', is_zero: Optional[Predicate[T]] = None) -> 'Enumerable[T]':
        """
        drop "zero" elements. by default that is none and falsy builtins (0, '', [] ...);
        pass is_zero to define zero for other types.
        """
        return self.where(lambda item: not (is_zero or is_zero_value)(item))

    def compact_with(self: 'Enumerable[T]', zero: T) -> 'Enumerable[T]':
        """drop elements equal to zero"""
        return self.where(lambda item: item != zero)

    def replace(self: 'Enumerable[T]', predicate: Predicate[T], replacement: T) -> 'Enumerable[T]':
        """substitute replacement for every element matching predicate"""
        return self.select(lambda item: replacement if predicate(item) else item)

    def replace_all(self: 'Enumerable[T]', replacement: T) -> 'Enumerable[T]':
        """substitute replacement for every element"""
        return self.select(lambda _: replacement)
