import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class CombinatoricsAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def cartesian_product(self, other: Iterable[U]) -> 'Enumerable[Pair[T, U]]':
        """
        every (a, b) pair with this sequence outer and other inner: (a0, b0), (a0, b1) ...
        other is read into memory once per traversal; this sequence stays lazy.
        if either side is empty the product is empty.
        """
        from ..enumerable import Enumerable
        from ..factories import as_enumerable
        inner = as_enumerable(other)
        def product_data():
            inner_items = inner.to.list()
            if not inner_items:
                return
            with self._enumerable._traversal() as source:
                for outer_item in source:
                    for inner_item in inner_items:
                        yield Pair(outer_item, inner_item)
        return Enumerable(product_data)
