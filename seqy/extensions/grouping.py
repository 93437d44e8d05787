from __future__ import annotations
import typing
from collections import defaultdict
from itertools import islice
from ..types import *
from ..errors import InvalidArgumentError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _check_size(name: str, size: int) -> None:
    if size <= 0:
        raise InvalidArgumentError(f"{name}: size must be positive, got {size}")


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K]) -> Dict[K, List[T]]:
        """group elements by a key. keys appear in order of first occurrence."""
        groups = defaultdict(list)
        with self._enumerable._traversal() as source:
            for item in source:
                groups[key_selector(item)].append(item)
        return dict(groups)

    def partition(self, predicate: Predicate[T]) -> Tuple['Enumerable[T]', 'Enumerable[T]']:
        """split into (matched, unmatched) sequences over a single materialization"""
        from ..factories import from_iterable
        true_items, false_items = [], []
        with self._enumerable._traversal() as source:
            for item in source:
                (true_items if predicate(item) else false_items).append(item)
        return from_iterable(true_items), from_iterable(false_items)

    def chunk(self, size: int) -> 'Enumerable[List[T]]':
        """
        consecutive lists of size elements; the last may be shorter. every chunk is a
        fresh list, so holding on to one never aliases another.
        """
        from ..enumerable import Enumerable
        _check_size("chunk", size)
        def chunk_data():
            with self._enumerable._traversal() as source:
                while True:
                    batch = list(islice(source, size))
                    if not batch:
                        return
                    yield batch
        return Enumerable(chunk_data)

    def chunks(self, size: int) -> 'Enumerable[Enumerable[T]]':
        """consecutive chunks as sequences of their own"""
        from ..factories import from_iterable
        _check_size("chunks", size)
        return self.chunk(size).select(from_iterable)

    def chunk_list(self, size: int) -> List['Enumerable[T]']:
        """chunks(size), collected eagerly"""
        return self.chunks(size).to.list()
