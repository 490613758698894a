from __future__ import annotations

import logging
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

logger = logging.getLogger(__name__)

U = TypeVar("U")
A = TypeVar("A")

# Threshold for switching strategies from sparse (iterate explicit keys) to dense (iterate positions)
# Only switch when both density exceeds this AND explicit count > _DENSE_COUNT_THRESHOLD
_DENSE_DENSITY_THRESHOLD = 0.5
_DENSE_COUNT_THRESHOLD = 10000


class sparselist(_OrderedBase[T]):  # noqa: N801
    """An ordered list whose positions are either present or absent.

    Only present values are stored. An absent position reads as None, and
    storing None at a position makes it absent; element values themselves
    must never be None.

    Two iteration families deliberately disagree about absent positions:

    - ``for_each`` only enumerates, so it skips them.
    - ``iter()``, ``to_list()``, ``join()`` and every operation that decides
      something per position (``filter``, ``find``, ``find_index``, ``some``,
      ``every``, ``reduce``, ``reduce_right`` and the searches) see them as
      None.

    ``map`` calls its function for every position but keeps absent
    positions absent in its result.
    """

    _explicit: dict[int, T]
    _size: int

    def __init__(  # noqa: PLR0912
        self,
        data: dict[int, T | None] | Iterable[T | None] | None = None,
        size: SupportsIndex | None = None,
    ) -> None:
        """Initialize a sparselist from data.

        Args:
            data: Initial data (optional, defaults to empty)
                  - None: creates empty sparselist
                  - dict: keys must be non-negative integers, values placed at those indices
                  - iterable: elements populate indices 0, 1, 2, etc.
                  None values, and indices missing from a dict, are absent.
            size: Total logical size (optional, inferred from data if not provided).
                  Positions past the data are absent.

        Raises:
            TypeError: If dict keys are not integers or size doesn't support __index__
            ValueError: If dict keys are negative or size is negative or size too small
        """
        self._explicit = {}

        if size is not None:
            try:
                size = op_index(size)
            except TypeError:
                raise TypeError("size must support __index__") from None

        if data is None:
            final_size = size if size is not None else 0
            if final_size < 0:
                raise ValueError("size must be non-negative")
            self._size = final_size
            return

        if isinstance(data, dict):
            for key in data:
                if not isinstance(key, int):
                    raise TypeError("dict keys must be integers")
                if key < 0:
                    raise ValueError("dict keys must be non-negative")

            if size is None:
                size = max(data.keys()) + 1 if data else 0

            if size < 0:
                raise ValueError("size must be non-negative")
            if data and max(data.keys()) >= size:
                raise ValueError("size must accommodate all data")

            self._size = size
            self._explicit = {k: v for k, v in data.items() if v is not None}
        else:
            count = 0
            for i, value in enumerate(data):
                if value is not None:
                    self._explicit[i] = value
                count = i + 1

            if size is None:
                size = count

            if size < 0:
                raise ValueError("size must be non-negative")
            if count > size:
                raise ValueError("size must accommodate all data")

            self._size = size

    def _new(self, explicit: dict[int, T], size: int) -> sparselist[T]:
        """Build a sibling sparselist that takes ownership of explicit."""
        result = self.__class__.__new__(self.__class__)
        result._explicit = explicit
        result._size = size
        return result

    def _is_dense(self) -> bool:
        """Check if list exceeds density threshold for sparse optimizations.

        Returns:
            True if list is dense (should use position iteration),
            False if list is sparse (should use explicit key iteration)
        """
        explicit_count = len(self._explicit)
        if self._size == 0:
            return False
        density = explicit_count / self._size
        return density > _DENSE_DENSITY_THRESHOLD and explicit_count > _DENSE_COUNT_THRESHOLD

    def _present_indices(self) -> list[int]:
        """Return the indices of present positions in ascending order."""
        if self._is_dense():
            return [i for i in range(self._size) if i in self._explicit]
        return sorted(self._explicit)

    def _pairs(self) -> Iterator[tuple[int, T | None]]:
        """Yield (index, value) for every position, None for absent ones."""
        for i in range(self._size):
            yield i, self._explicit.get(i)

    def __len__(self) -> int:
        """Return the number of positions, present or absent."""
        return self._size

    def __iter__(self) -> Iterator[T | None]:
        """Return an iterator over every position.

        Yields:
            Values in order, None for absent positions
        """
        i = 0
        while i < self._size:
            yield self._explicit.get(i)
            i += 1

    @overload
    def __getitem__(self, key: SupportsIndex) -> T | None: ...

    @overload
    def __getitem__(self, key: slice) -> sparselist[T]: ...

    def __getitem__(self, key: SupportsIndex | slice) -> T | None | sparselist[T]:
        """Get item(s) by index or slice.

        Args:
            key: Integer index or slice

        Returns:
            Value (None if absent) for int index, new sparselist for slice

        Raises:
            TypeError: If key is not an integer or slice
            IndexError: If index is out of range
            ValueError: If slice step is zero
        """
        if isinstance(key, slice):
            start, stop, step = key.indices(self._size)
            positions = range(start, stop, step)

            new_explicit: dict[int, T] = {}
            for i, old_idx in enumerate(positions):
                if old_idx in self._explicit:
                    new_explicit[i] = self._explicit[old_idx]
            return self._new(new_explicit, len(positions))

        idx = op_index(key)
        if idx < 0:
            idx += self._size
        if not 0 <= idx < self._size:
            raise IndexError("sparselist index out of range")
        return self._explicit.get(idx)

    def __setitem__(self, key: SupportsIndex, value: T | None) -> None:
        """Same as set(key, value)."""
        self.set(key, value)

    def __eq__(self, other: object) -> bool:
        """Return True if other has the same length and the same value (or absence) at each position."""
        if self is other:
            return True
        if isinstance(other, sparselist):
            return self._size == other._size and self._explicit == other._explicit
        if not hasattr(other, "__iter__"):
            return NotImplemented
        return self._equals_iterable(other)

    def __repr__(self) -> str:
        """Return a string representation of the sparselist.

        Format: *sparselist<size>[idx: val, ..., idx: val]*

        - Uses ... for runs of absent positions
        - No ... for fully present lists or empty lists
        """
        if self._size == 0:
            return "sparselist<0>[]"
        if not self._explicit:
            return f"sparselist<{self._size}>[...]"

        def parts_gen() -> Iterator[str]:
            expected = 0
            for key in self._present_indices():
                if key > expected:
                    yield "..."
                yield f"{key}: {self._explicit[key]!r}"
                expected = key + 1
            if expected < self._size:
                yield "..."

        return f"sparselist<{self._size}>[{', '.join(parts_gen())}]"

    def __copy__(self) -> sparselist[T]:
        return self._new(self._explicit.copy(), self._size)

    def copy(self) -> sparselist[T]:
        """Return a shallow copy with the same size and absent positions."""
        return self.__copy__()

    def count_absent(self) -> int:
        """Return the number of absent positions."""
        return self._size - len(self._explicit)

    def get(self, index: SupportsIndex) -> T | None:
        """Return the value at index.

        None is returned both for an absent position and for any index
        outside [0, len); the two cases are not distinguished.
        """
        idx = op_index(index)
        if idx < 0:
            return None
        return self._explicit.get(idx)

    def set(self, index: SupportsIndex, value: T | None) -> None:
        """Store value at index, growing the list if needed.

        Setting past the end extends the list to index + 1; every new
        position before index is absent. Storing None makes the position
        absent.

        Raises:
            IndexError: If a negative index reaches before the start
        """
        idx = op_index(index)
        if idx < 0:
            idx += self._size
            if idx < 0:
                raise IndexError("sparselist assignment index out of range")

        if idx >= self._size:
            if idx > self._size:
                logger.debug(
                    "Growing sparselist from %d to %d leaves %d holes", self._size, idx + 1, idx - self._size
                )
            self._size = idx + 1

        if value is None:
            self._explicit.pop(idx, None)
        else:
            self._explicit[idx] = value

    def append(self, *items: T | None) -> int:
        """Append items in order, None items as absent positions.

        Returns:
            The new length
        """
        for value in items:
            if value is not None:
                self._explicit[self._size] = value
            self._size += 1
        return self._size

    def delete(self, index: SupportsIndex) -> None:
        """Make the position at index absent without changing the length.

        Out-of-range indices are ignored.
        """
        idx = op_index(index)
        if idx < 0:
            idx += self._size
        if 0 <= idx < self._size:
            self._explicit.pop(idx, None)

    def clear(self) -> None:
        """Remove all positions."""
        self._explicit.clear()
        self._size = 0

    def for_each(self, fn: Callable[[T, int], object]) -> None:
        """Call fn(value, index) for each present position, skipping absent ones.

        Unlike iter(), absent positions are never reported. Positions that
        become absent during the walk are skipped as well.
        """
        for idx in self._present_indices():
            if idx in self._explicit:
                fn(self._explicit[idx], idx)

    def map(self, fn: Callable[[T | None, int], U | None]) -> sparselist[U]:
        """Return a new sparselist of fn(value, index) with the same shape.

        fn is called for every position, with None for absent ones, but an
        absent input position is always absent in the result whatever fn
        returned for it.

        Raises:
            ValueError: If fn returns None for a present position; the
                source list is left unchanged
        """
        new_explicit: dict[int, U] = {}
        for idx, value in self._pairs():
            mapped = fn(value, idx)
            if idx in self._explicit:
                if mapped is None:
                    raise ValueError(f"map function returned None for present position {idx}")
                new_explicit[idx] = mapped
        return self._new(new_explicit, self._size)  # type: ignore[arg-type, return-value]

    def filter(self, fn: Callable[[T | None, int], object]) -> sparselist[T]:
        """Return a new sparselist of the positions where fn(value, index) is truthy.

        Absent positions are offered to fn as None; kept ones stay absent.
        """
        result: sparselist[T] = self._new({}, 0)
        for idx, value in self._pairs():
            if fn(value, idx):
                result.append(value)
        return result

    def slice(self, start: SupportsIndex | None = None, end: SupportsIndex | None = None) -> sparselist[T]:
        """Return a new sparselist covering [start, end), absent positions included."""
        positions = _slice_range(start, end, self._size)
        new_explicit: dict[int, T] = {}
        for i, old_idx in enumerate(positions):
            if old_idx in self._explicit:
                new_explicit[i] = self._explicit[old_idx]
        return self._new(new_explicit, len(positions))

    def concat(self, *others: Any) -> sparselist[T]:
        """Return a new sparselist with the elements of others appended.

        Lists, tuples and containers from this package are spliced in,
        keeping their absent positions; any other argument is appended as a
        single element.
        """
        result = self.copy()
        for other in others:
            if isinstance(other, sparselist):
                offset = result._size
                for idx, value in other._explicit.items():
                    result._explicit[offset + idx] = value
                result._size += other._size
            elif _spreads(other):
                result.append(*other)
            else:
                result.append(other)
        return result

    def sort(self, *, key: Callable[[T], SupportsRichComparison] | None = None, reverse: bool = False) -> Self:
        """Sort present values in place and return self.

        Absent positions are moved to the end regardless of reverse, and
        are never passed to key.
        """
        if self._explicit:
            if key is None:
                sorted_explicit = sorted(self._explicit.values(), reverse=reverse)  # type: ignore[type-var]
            else:
                sorted_explicit = sorted(self._explicit.values(), key=key, reverse=reverse)
            self._explicit = dict(enumerate(sorted_explicit))
        return self

    def reverse(self) -> Self:
        """Reverse in place and return self.

        Remaps all explicit keys according to: new_key = size - 1 - old_key
        """
        if self._size > 1:
            self._explicit = {self._size - 1 - old_key: value for old_key, value in self._explicit.items()}
        return self

    def find(self, fn: Callable[[T | None, int], object]) -> T | None:
        """Return the first value (None for an absent match) where fn is truthy, else None."""
        for idx, value in self._pairs():
            if fn(value, idx):
                return value
        return None

    def find_index(self, fn: Callable[[T | None, int], object]) -> int:
        """Return the first index where fn(value, index) is truthy, else -1.

        Absent positions are tested with None.
        """
        for idx, value in self._pairs():
            if fn(value, idx):
                return idx
        return -1

    def includes(self, value: object, from_index: SupportsIndex = 0) -> bool:
        """Return True if value occurs at or after from_index; None matches absent positions."""
        # Early exit: any absent position satisfies a search for None from the start
        if value is None and op_index(from_index) == 0:
            return len(self._explicit) < self._size
        return super().includes(value, from_index)

    def index_of(self, value: object, from_index: SupportsIndex = 0) -> int:
        """Return the first index >= from_index holding value, else -1.

        Searching for None finds the first absent position.
        """
        start = _clamp_offset(from_index, self._size, 0)

        if value is None:
            for i in range(start, self._size):
                if i not in self._explicit:
                    return i
            return -1

        if not self._is_dense():
            # Sparse: check only explicit keys
            for idx in sorted(k for k in self._explicit if k >= start):
                if self._explicit[idx] == value:
                    return idx
            return -1

        for i in range(start, self._size):
            if i in self._explicit and self._explicit[i] == value:
                return i
        return -1

    def last_index_of(self, value: object, from_index: SupportsIndex | None = None) -> int:
        """Return the last index <= from_index holding value, else -1.

        Searching for None finds the last absent position.
        """
        for i in range(_last_offset(from_index, self._size), -1, -1):
            if self._explicit.get(i) == value:
                return i
        return -1

    def reduce(self, fn: Callable[[A, T | None, int], A], initial: A = _OMIT) -> A:
        """Fold left to right with fn(acc, value, index), absent positions passed as None.

        Raises:
            TypeError: If the list is empty and no initial value is given
        """
        return _fold(self._pairs(), fn, initial)

    def reduce_right(self, fn: Callable[[A, T | None, int], A], initial: A = _OMIT) -> A:
        """Fold right to left with fn(acc, value, index), absent positions passed as None."""
        pairs = ((i, self._explicit.get(i)) for i in range(self._size - 1, -1, -1))
        return _fold(pairs, fn, initial)

    def some(self, fn: Callable[[T | None, int], object]) -> bool:
        """Return True if fn(value, index) is truthy for any position, absent ones included."""
        return any(fn(value, idx) for idx, value in self._pairs())

    def every(self, fn: Callable[[T | None, int], object]) -> bool:
        """Return True if fn(value, index) is truthy for every position, absent ones included."""
        return all(fn(value, idx) for idx, value in self._pairs())
