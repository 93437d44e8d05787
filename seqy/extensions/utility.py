from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class UtilityAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """
        pipes the enumerable object into an external function. enables custom, chainable operations.
        example: .pipe(my_custom_report, title='my data')
        """
        return func(self._enumerable, *args, **kwargs)

    def side_effect(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        performs a side-effect action for each element as it passes through the sequence
        without modifying it. lazy, so it only sees what downstream actually pulls.
        example: .where(...).util.side_effect(print).select(...)
        """
        return self._enumerable.select(lambda item: (action(item), item)[1])

    # --- string helpers. non-string elements pass through untouched ---

    def upper(self) -> 'Enumerable[T]':
        return self._enumerable.select(lambda item: item.upper() if isinstance(item, str) else item)

    def lower(self) -> 'Enumerable[T]':
        return self._enumerable.select(lambda item: item.lower() if isinstance(item, str) else item)

    def strip(self) -> 'Enumerable[T]':
        """trim surrounding whitespace"""
        return self._enumerable.select(lambda item: item.strip() if isinstance(item, str) else item)
