from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _identity(item: Any) -> Any:
    return item


class SetAccessor(Generic[T]):
    """
    set algebra by derived key (the element itself when no key is given).
    results keep the order of first appearance and stay lazy on the left side;
    intersection and difference read the whole right side into a key set when
    each traversal starts.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _right_keys(self, other: 'Enumerable[T]', key: KeySelector[T, K]) -> Set[K]:
        with other._traversal() as source:
            return {key(item) for item in source}

    def union(self, other: Iterable[T], key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence then other, each key kept once (first occurrence wins)"""
        return self._enumerable.chain(other).unique(key_selector)

    def intersection(self, other: Iterable[T],
                     key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence whose key also appears in other, in this sequence's order"""
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        right = as_enumerable(other)
        key = key_selector or _identity
        def intersection_data():
            right_keys = self._right_keys(right, key)
            with self._enumerable._traversal() as source:
                for item in source:
                    if key(item) in right_keys:
                        yield item
        return Enumerable(intersection_data)

    def difference(self, other: Iterable[T],
                   key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence whose key does not appear in other, in this sequence's order"""
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        right = as_enumerable(other)
        key = key_selector or _identity
        def difference_data():
            right_keys = self._right_keys(right, key)
            with self._enumerable._traversal() as source:
                for item in source:
                    if key(item) not in right_keys:
                        yield item
        return Enumerable(difference_data)

