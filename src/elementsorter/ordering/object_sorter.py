"""Multi-key comparison and sorted-position lookup over item objects."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List, Sequence

from .field_compare import compare_field
from .sort_spec import OrderField

__all__ = ["compare_objects", "find_position", "sort_objects", "is_sorted"]


def compare_objects(left: Any, right: Any, order_fields: Sequence[OrderField]) -> int:
    """Compare two item objects key by key.

    The first field that distinguishes the objects decides; descending fields
    negate their result. Returns 0 when all fields tie or no field is given.
    """
    for order_field in order_fields:
        result = compare_field(left, right, order_field.path)
        if result != 0:
            return result if order_field.ascending else -result
    return 0


def find_position(
    last_items: Sequence[Any], new_item: Any, order_fields: Sequence[OrderField]
) -> int:
    """Return the index at which *new_item* keeps *last_items* sorted.

    ``last_items`` must already be ordered smallest first. The result is the
    first index whose item is strictly greater than ``new_item``, so equal
    items keep arrival order. ``-1`` means append at the end.
    """
    if not order_fields:
        return -1
    for idx, existing in enumerate(last_items):
        if compare_objects(new_item, existing, order_fields) < 0:
            return idx
    return -1


def sort_objects(items: Iterable[Any], order_fields: Sequence[OrderField]) -> List[Any]:
    """Return a new list of *items* stably sorted by *order_fields*."""
    fields = tuple(order_fields)
    return sorted(items, key=cmp_to_key(lambda a, b: compare_objects(a, b, fields)))


def is_sorted(items: Sequence[Any], order_fields: Sequence[OrderField]) -> bool:
    """True when no consecutive pair of *items* is inverted."""
    return all(
        compare_objects(items[i], items[i + 1], order_fields) <= 0
        for i in range(len(items) - 1)
    )
