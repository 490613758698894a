from __future__ import annotations

from operator import index as op_index
from typing import TYPE_CHECKING, TypeVar, overload

from densesparse._base import _OMIT, T, _clamp_offset, _fold, _last_offset, _OrderedBase, _slice_range, _spreads

if TYPE_CHECKING:
    import sys
    from collections.abc import Callable, Iterable, Iterator
    from typing import Any, SupportsIndex

    from _typeshed import SupportsRichComparison

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self

U = TypeVar("U")
A = TypeVar("A")


class denselist(_OrderedBase[T]):  # noqa: N801
    """An ordered list in which every position holds a value.

    None is the missing-value marker and can never be stored, so a position
    in range always yields a real element. The list only grows through
    append(), one element at a time.
    """

    _items: list[T]

    def __init__(self, data: Iterable[T] | None = None) -> None:
        """Initialize a denselist, validating every element of data.

        Args:
            data: Initial elements (optional, defaults to empty)

        Raises:
            ValueError: If data contains None
        """
        self._items = []
        if data is not None:
            for value in data:
                self.append(value)

    @classmethod
    def _from_list(cls, items: list[T]) -> Self:
        """Adopt items as storage without checking for None. Caller guarantees no holes."""
        result = cls.__new__(cls)
        result._items = items
        return result

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @overload
    def __getitem__(self, key: SupportsIndex) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> denselist[T]: ...

    def __getitem__(self, key: SupportsIndex | slice) -> T | denselist[T]:
        """Get item(s) by index or slice.

        Raises:
            TypeError: If key is not an integer or slice
            IndexError: If index is out of range
        """
        if isinstance(key, slice):
            return self._from_list(self._items[key])

        idx = op_index(key)
        if idx < 0:
            idx += len(self._items)
        if not 0 <= idx < len(self._items):
            raise IndexError("denselist index out of range")
        return self._items[idx]

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, denselist):
            return self._items == other._items
        if not hasattr(other, "__iter__"):
            return NotImplemented
        return self._equals_iterable(other)

    def __repr__(self) -> str:
        return f"denselist({self._items!r})"

    def __copy__(self) -> denselist[T]:
        return self._from_list(self._items.copy())

    def copy(self) -> denselist[T]:
        """Return a shallow copy."""
        return self.__copy__()

    def get(self, index: SupportsIndex) -> T | None:
        """Return the element at index, or None if index is outside [0, len).

        Negative indices are out of range here; use ``dl[-1]`` for
        end-relative access.
        """
        idx = op_index(index)
        if 0 <= idx < len(self._items):
            return self._items[idx]
        return None

    def append(self, value: T) -> int:
        """Add value to the end and return the new length.

        Raises:
            ValueError: If value is None; the list is left unchanged
        """
        if value is None:
            raise ValueError("denselist cannot hold None")
        self._items.append(value)
        return len(self._items)

    def for_each(self, fn: Callable[[T, int], object]) -> None:
        """Call fn(value, index) for every element in order."""
        for idx, value in enumerate(self._items):
            fn(value, idx)

    def map(self, fn: Callable[[T, int], U]) -> list[U]:
        """Return a plain list of fn(value, index).

        The result is not a denselist because fn may return None.
        """
        return [fn(value, idx) for idx, value in enumerate(self._items)]

    def filter(self, fn: Callable[[T, int], object]) -> denselist[T]:
        """Return a new denselist of the elements for which fn(value, index) is truthy."""
        return self._from_list([value for idx, value in enumerate(self._items) if fn(value, idx)])

    def slice(self, start: SupportsIndex | None = None, end: SupportsIndex | None = None) -> denselist[T]:
        """Return a new denselist covering [start, end); negative offsets count from the end."""
        positions = _slice_range(start, end, len(self._items))
        return self._from_list(self._items[positions.start : positions.stop])

    def concat(self, *others: Any) -> denselist[T]:
        """Return a new denselist with the elements of others appended.

        Lists, tuples and containers from this package are spliced in; any
        other argument is appended as a single element.

        Raises:
            ValueError: If any added element is None
        """
        result = self.copy()
        for other in others:
            if _spreads(other):
                for value in other:
                    result.append(value)
            else:
                result.append(other)
        return result

    def sort(self, *, key: Callable[[T], SupportsRichComparison] | None = None, reverse: bool = False) -> Self:
        """Sort in place and return self."""
        self._items.sort(key=key, reverse=reverse)  # type: ignore[arg-type]
        return self

    def reverse(self) -> Self:
        """Reverse in place and return self."""
        self._items.reverse()
        return self

    def find(self, fn: Callable[[T, int], object]) -> T | None:
        """Return the first element for which fn(value, index) is truthy, else None."""
        for idx, value in enumerate(self._items):
            if fn(value, idx):
                return value
        return None

    def find_index(self, fn: Callable[[T, int], object]) -> int:
        """Return the index of the first element matching fn, else -1."""
        for idx, value in enumerate(self._items):
            if fn(value, idx):
                return idx
        return -1

    def index_of(self, value: object, from_index: SupportsIndex = 0) -> int:
        """Return the first index >= from_index holding value, else -1."""
        for idx in range(_clamp_offset(from_index, len(self._items), 0), len(self._items)):
            if self._items[idx] == value:
                return idx
        return -1

    def last_index_of(self, value: object, from_index: SupportsIndex | None = None) -> int:
        """Return the last index <= from_index holding value, else -1."""
        for idx in range(_last_offset(from_index, len(self._items)), -1, -1):
            if self._items[idx] == value:
                return idx
        return -1

    def reduce(self, fn: Callable[[A, T, int], A], initial: A = _OMIT) -> A:
        """Fold left to right with fn(acc, value, index).

        Raises:
            TypeError: If the list is empty and no initial value is given
        """
        return _fold(enumerate(self._items), fn, initial)

    def reduce_right(self, fn: Callable[[A, T, int], A], initial: A = _OMIT) -> A:
        """Fold right to left with fn(acc, value, index)."""
        return _fold(reversed(list(enumerate(self._items))), fn, initial)

    def some(self, fn: Callable[[T, int], object]) -> bool:
        """Return True if fn(value, index) is truthy for any element."""
        return any(fn(value, idx) for idx, value in enumerate(self._items))

    def every(self, fn: Callable[[T, int], object]) -> bool:
        """Return True if fn(value, index) is truthy for all elements."""
        return all(fn(value, idx) for idx, value in enumerate(self._items))
