from __future__ import annotations

from abc import ABC, abstractmethod
from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from typing import Any, SupportsIndex

T = TypeVar("T")
A = TypeVar("A")

# Marks an omitted reduce() initial value, since None is a legal accumulator
_OMIT: Any = object()


def _clamp_offset(offset: SupportsIndex | None, size: int, fallback: int) -> int:
    """Resolve a relative offset against size, clamped to [0, size].

    Negative offsets count back from the end. None resolves to fallback.
    """
    if offset is None:
        return fallback
    idx = op_index(offset)
    if idx < 0:
        return max(0, size + idx)
    return min(idx, size)


def _slice_range(start: SupportsIndex | None, end: SupportsIndex | None, size: int) -> range:
    """Return the positions covered by slice(start, end) on a container of size."""
    lo = _clamp_offset(start, size, 0)
    hi = _clamp_offset(end, size, size)
    return range(lo, max(lo, hi))


def _last_offset(from_index: SupportsIndex | None, size: int) -> int:
    """Resolve the starting position of a backward search (-1 if nothing to scan)."""
    if from_index is None:
        return size - 1
    idx = op_index(from_index)
    if idx < 0:
        return size + idx
    return min(idx, size - 1)


def _fold(pairs: Iterable[tuple[int, Any]], fn: Callable[[A, Any, int], A], initial: Any) -> A:
    """Fold (index, value) pairs with fn(acc, value, index).

    Without an initial value the first pair seeds the accumulator.

    Raises:
        TypeError: If pairs is empty and no initial value was given
    """
    it = iter(pairs)
    if initial is _OMIT:
        try:
            _, acc = next(it)
        except StopIteration:
            raise TypeError("reduce of empty sequence with no initial value") from None
    else:
        acc = initial
    for idx, value in it:
        acc = fn(acc, value, idx)
    return acc


def _spreads(item: object) -> bool:
    """Return True if concat() should splice item's elements rather than add item itself."""
    return isinstance(item, (_OrderedBase, list, tuple))


class _OrderedBase(ABC, Generic[T]):
    """Operations shared by denselist and sparselist.

    Subclasses provide __len__, __iter__ and index_of; everything here is
    expressed through those.
    """

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __iter__(self) -> Iterator[T | None]: ...

    @abstractmethod
    def index_of(self, value: object, from_index: SupportsIndex = 0) -> int: ...

    @property
    def length(self) -> int:
        """Number of positions, same as len()."""
        return len(self)

    def includes(self, value: object, from_index: SupportsIndex = 0) -> bool:
        """Return True if value occurs at or after from_index."""
        return self.index_of(value, from_index) != -1

    def __contains__(self, value: object) -> bool:
        return self.includes(value)

    def join(self, separator: str = ",") -> str:
        """Join the string form of each position; None renders as an empty string."""
        return separator.join("" if value is None else str(value) for value in self)

    def to_list(self) -> list[T | None]:
        """Return a plain list snapshot, one item per position."""
        return list(self)

    def _equals_iterable(self, other: object) -> bool:
        """Compare element-wise against any iterable (list, tuple, other containers)."""
        # Try to get length first for early exit
        if hasattr(other, "__len__"):
            try:
                if len(self) != len(other):  # type: ignore[arg-type]
                    return False
            except TypeError:
                pass  # Some iterables don't support len()

        other_iter = iter(other)  # type: ignore[call-overload]
        for value in self:
            try:
                other_val = next(other_iter)
            except StopIteration:
                return False
            if value != other_val:
                return False

        try:
            next(other_iter)
            return False  # Other is longer
        except StopIteration:
            return True
