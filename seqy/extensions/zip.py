from __future__ import annotations
import typing
from ..types import *
from ._producers import ProducerGroup

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class ZipAccessor(Generic[T]):
    """
    pairwise combination. every zip traversal drives each side on its own producer
    thread; the threads live exactly as long as the traversal and are stopped and
    joined when it ends, whether by exhaustion, early stop or release().
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def zip(self, other: Iterable[U]) -> 'Enumerable[Pair[T, U]]':
        """pair element i of this sequence with element i of other, stopping at the shorter"""
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        right = as_enumerable(other)
        def zip_data():
            with ProducerGroup(self._enumerable, right) as group:
                left_side, right_side = group.producers
                while True:
                    first, ok = left_side.receive()
                    if not ok:
                        return
                    second, ok = right_side.receive()
                    if not ok:
                        return
                    yield Pair(first, second)
        return Enumerable(zip_data)

    def zip_fill(self, other: Iterable[U], fill: Pair[T, U]) -> 'Enumerable[Pair[T, U]]':
        """
        pair elements until both sides run out. an exhausted side contributes
        fill.first (this side) or fill.second (other side) to every later pair.
        """
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        right = as_enumerable(other)
        fill_first, fill_second = fill
        def zip_fill_data():
            with ProducerGroup(self._enumerable, right) as group:
                left_side, right_side = group.producers
                while True:
                    first, left_ok = left_side.receive()
                    second, right_ok = right_side.receive()
                    if not left_ok and not right_ok:
                        return
                    yield Pair(first if left_ok else fill_first,
                               second if right_ok else fill_second)
        return Enumerable(zip_fill_data)

    def zip3(self, second: Iterable[U], third: Iterable[V]) -> 'Enumerable[Triple[T, U, V]]':
        """three-way zip, stopping at the shortest"""
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        middle, last = as_enumerable(second), as_enumerable(third)
        def zip3_data():
            with ProducerGroup(self._enumerable, middle, last) as group:
                while True:
                    values = []
                    for side in group.producers:
                        value, ok = side.receive()
                        if not ok:
                            return
                        values.append(value)
                    yield Triple(*values)
        return Enumerable(zip3_data)

    def zip_with(self, other: Iterable[U], result_selector: Callable[[T, U], V]) -> 'Enumerable[V]':
        """zip two sequences with custom result selector"""
        return self.zip(other).select(lambda pair: result_selector(pair.first, pair.second))
