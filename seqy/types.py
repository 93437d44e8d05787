from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, NamedTuple, Protocol
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
A = TypeVar('A')
B = TypeVar('B')
C = TypeVar('C')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Less = Callable[[T, T], bool]
Consumer = Callable[[T], bool]
Accumulator = Callable[[U, T], U]


class CancelSignal(Protocol):
    """anything that can report whether cancellation has fired, e.g. threading.Event"""

    def is_set(self) -> bool: ...

    def wait(self, timeout: Optional[float] = None) -> bool: ...


class Pair(NamedTuple, Generic[A, B]):
    """two-field value produced by zip and cartesian_product"""
    first: A
    second: B


class Triple(NamedTuple, Generic[A, B, C]):
    """three-field value produced by zip3"""
    first: A
    second: B
    third: C


class Row:
    """a parsed csv record that knows its column names"""

    __slots__ = ('fields', 'index', 'headers')

    def __init__(self, fields: List[str], index: int, headers: List[str]):
        self.fields = fields
        self.index = index
        self.headers = headers  # shared by every row, no copy

    def get(self, position: int) -> str:
        """field at position, or '' when out of bounds"""
        if 0 <= position < len(self.fields):
            return self.fields[position]
        return ""

    def get_by_header(self, name: str) -> str:
        """field under the first header called name, or '' when unknown"""
        for position, header in enumerate(self.headers):
            if header == name:
                return self.get(position)
        return ""

    def __getitem__(self, key: Union[int, str]) -> str:
        if isinstance(key, str):
            return self.get_by_header(key)
        return self.get(key)

    def __len__(self) -> int:
        return len(self.fields)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return (self.fields, self.index, self.headers) == (other.fields, other.index, other.headers)

    def __repr__(self) -> str:
        return f"Row(index={self.index}, fields={self.fields})"
