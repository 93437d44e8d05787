from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from functools import reduce
from ..types import *
from ..errors import InvalidStateError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

_MISSING = object()


def _natural_less(a: Any, b: Any) -> bool:
    return a < b


class TerminalAccessor(Generic[T]):
    """
    operations that drive the sequence and return a concrete result. each call is a
    new traversal; the ones that can answer early (first, any, find, nth ...) stop
    the source as soon as they know.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _first_match(self, predicate: Optional[Predicate[T]]) -> Tuple[int, Any]:
        """(index, item) of the first match, or (-1, _MISSING)"""
        with self._enumerable._traversal() as source:
            for index, item in enumerate(source):
                if predicate is None or predicate(item):
                    return index, item
        return -1, _MISSING

    # --- collection ---

    def list(self) -> List[T]:
        """collect every element, in order"""
        with self._enumerable._traversal() as source:
            return [item for item in source]

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        with self._enumerable._traversal() as source:
            return {item for item in source}

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary; later keys overwrite earlier ones"""
        val_sel = value_selector if value_selector else lambda item: item
        with self._enumerable._traversal() as source:
            return {key_selector(item): val_sel(item) for item in source}

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def string(self) -> str:
        """'<Enumerable: [...]>' over a full traversal"""
        return f"<Enumerable: {self.list()}>"

    # --- side effects ---

    def each(self, action: Callable[[T], Any]) -> None:
        """call action on every element"""
        with self._enumerable._traversal() as source:
            for item in source:
                action(item)

    # --- counting and searching ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        with self._enumerable._traversal() as source:
            if predicate is None:
                return sum(1 for _ in source)
            return sum(1 for item in source if predicate(item))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition (or, without one, if there is any element)"""
        index, _ = self._first_match(predicate)
        return index >= 0

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition. true for an empty sequence."""
        index, _ = self._first_match(lambda item: not predicate(item))
        return index < 0

    def find(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        """first element matching predicate, or default"""
        _, item = self._first_match(predicate)
        return default if item is _MISSING else item

    def index(self, predicate: Predicate[T]) -> int:
        """0-based index of the first match, or -1"""
        index, _ = self._first_match(predicate)
        return index

    def last_index(self, predicate: Predicate[T]) -> int:
        """0-based index of the last match, or -1"""
        found = -1
        with self._enumerable._traversal() as source:
            for index, item in enumerate(source):
                if predicate(item):
                    found = index
        return found

    # --- element access ---

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element (matching predicate). raises InvalidStateError if there is none."""
        _, item = self._first_match(predicate)
        if item is _MISSING:
            raise InvalidStateError("sequence contains no matching element" if predicate
                                    else "sequence contains no elements")
        return item

    def first_or(self, default: T, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element (matching predicate) or default"""
        _, item = self._first_match(predicate)
        return default if item is _MISSING else item

    def last(self) -> T:
        """get last element. raises InvalidStateError if the sequence is empty."""
        item = self.last_or(_MISSING)
        if item is _MISSING:
            raise InvalidStateError("sequence contains no elements")
        return item

    def last_or(self, default: T) -> T:
        """get last element or default"""
        item = default
        with self._enumerable._traversal() as source:
            for item in source:
                pass
        return item

    def nth(self, n: int) -> T:
        """0-based nth element (negative n counts as 0). raises InvalidStateError if out of range."""
        item = self.nth_or(n, _MISSING)
        if item is _MISSING:
            raise InvalidStateError(f"sequence has no element at index {max(n, 0)}")
        return item

    def nth_or(self, n: int, default: T) -> T:
        """0-based nth element (negative n counts as 0), or default"""
        n = max(n, 0)
        with self._enumerable._traversal() as source:
            for index, item in enumerate(source):
                if index == n:
                    return item
        return default

    # --- ordering ---

    def min(self, less: Optional[Less[T]] = None) -> T:
        """smallest element by less (natural order by default). the first of equal minima wins."""
        less = less or _natural_less
        return self._extreme(lambda candidate, best: less(candidate, best))

    def max(self, less: Optional[Less[T]] = None) -> T:
        """largest element by less (natural order by default). the first of equal maxima wins."""
        less = less or _natural_less
        return self._extreme(lambda candidate, best: less(best, candidate))

    def _extreme(self, better: Callable[[T, T], bool]) -> T:
        best = _MISSING
        with self._enumerable._traversal() as source:
            for item in source:
                if best is _MISSING or better(item, best):
                    best = item
        if best is _MISSING:
            raise InvalidStateError("sequence contains no elements")
        return best

    def is_sorted(self, less: Optional[Less[T]] = None) -> bool:
        """true when no element is less than its predecessor. true for 0 or 1 elements."""
        less = less or _natural_less
        previous = _MISSING
        with self._enumerable._traversal() as source:
            for item in source:
                if previous is not _MISSING and less(item, previous):
                    return False
                previous = item
        return True

    # --- folds ---

    def fold(self, accumulator: Accumulator[U, T], initial: U) -> U:
        """strict left fold: accumulator(...accumulator(initial, x0)..., xn)"""
        with self._enumerable._traversal() as source:
            return reduce(accumulator, source, initial)

    def sum(self, identity: U, selector: Optional[Selector[T, U]] = None) -> U:
        """sum of elements (or selector(element)) starting from the additive identity"""
        if selector is None:
            return self.fold(lambda total, item: total + item, identity)
        return self.fold(lambda total, item: total + selector(item), identity)

    def product(self, identity: U, selector: Optional[Selector[T, U]] = None) -> U:
        """product of elements (or selector(element)) starting from the multiplicative identity"""
        if selector is None:
            return self.fold(lambda total, item: total * item, identity)
        return self.fold(lambda total, item: total * selector(item), identity)

    # --- comparison ---

    def assert_eq(self, expected: Iterable[T], eq: Optional[Callable[[T, T], bool]] = None) -> bool:
        """true when the sequence matches expected element by element (== by default)"""
        actual = self.list()
        expected = list(expected)
        if len(actual) != len(expected):
            return False
        eq = eq or (lambda a, b: a == b)
        return all(eq(a, b) for a, b in zip(actual, expected))
