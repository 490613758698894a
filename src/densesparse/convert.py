"""Conversions between plain Python sequences and the two container types."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from densesparse.denselist import denselist
from densesparse.sparselist import sparselist

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def asdense(data: Iterable[T]) -> denselist[T]:
    """Wrap a copy of data as a denselist without looking for None.

    Only use this when the caller already knows data has no missing values;
    safe_to_dense() is the checking variant.
    """
    return denselist._from_list(list(data))


def assparse(data: dict[int, T | None] | Iterable[T | None]) -> sparselist[T]:
    """Build a sparselist from data; None items and indices missing from a dict become absent."""
    return sparselist(data)


def safe_to_dense(data: dict[int, T] | Iterable[T | None]) -> denselist[T] | None:
    """Convert data to a denselist, or return None if it has any hole.

    A hole is an absent position of a sparselist, an index missing from a
    positional dict (keys must be exactly 0..n-1), or a None element.
    """
    if isinstance(data, denselist):
        return data.copy()

    values: list[Any]
    if isinstance(data, sparselist):
        if data.count_absent():
            logger.debug("Rejected sparselist with %d absent positions", data.count_absent())
            return None
        values = data.to_list()
    elif isinstance(data, dict):
        if set(data) != set(range(len(data))):
            logger.debug("Rejected dict whose keys are not 0..%d", len(data) - 1)
            return None
        values = [data[i] for i in range(len(data))]
    else:
        values = list(data)

    for i, value in enumerate(values):
        if value is None:
            logger.debug("Rejected sequence with None at index %d", i)
            return None
    return denselist._from_list(values)


def is_denselist(obj: object) -> bool:
    """Return True if obj is a denselist."""
    return isinstance(obj, denselist)


def is_sparselist(obj: object) -> bool:
    """Return True if obj is a sparselist."""
    return isinstance(obj, sparselist)
