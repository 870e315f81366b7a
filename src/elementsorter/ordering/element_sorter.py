"""Keep container children ordered by an order expression.

Two operations work against a live container and a caller-owned mirror list
(``last_elements``) that tracks the on-screen order:

 - ``insert_elements``: place new handles at their sorted positions one at a
   time, so later handles in the same batch see the updated order.
 - ``sort_elements``: reorder every existing handle for a new set of order
   fields using exactly ``n - 1`` placements, never removing a node.

Both run to completion synchronously. The free functions assume exclusive
access to the container/mirror pair; ``SortedElementList`` bundles that pair
with a lock for hosts that touch it from several threads.

Item objects are recomputed through ``item_mapper`` on every call and never
cached between calls. Exceptions from the mapper or the container propagate
unchanged; handles placed before the failure stay placed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from threading import RLock
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..services.telemetry import TelemetryService
from .containers import ElementContainer
from .object_sorter import compare_objects, find_position, is_sorted
from .sort_spec import OrderField, format_order_expression, parse_order_expression

__all__ = [
    "ItemMapper",
    "insert_elements",
    "sort_elements",
    "SortedElementList",
]

log = logging.getLogger(__name__)

ItemMapper = Callable[[Any], Any]


@dataclass(frozen=True)
class _TaggedItem:
    item: Any
    original_index: int


def insert_elements(
    container: ElementContainer,
    last_elements: List[Any],
    add_elements: Iterable[Any],
    order_fields: Sequence[OrderField],
    item_mapper: ItemMapper,
) -> None:
    """Insert *add_elements* into *container* at their sorted positions.

    Parameters
    ----------
    container:
        Parent exposing ``insert_before(handle, reference_or_None)``.
    last_elements:
        Handles already in the container, sorted by *order_fields*. Updated
        in place.
    add_elements:
        Handles to insert, processed in iteration order.
    order_fields:
        Parsed order fields. When empty every handle is appended.
    item_mapper:
        Maps a handle to the item object used for comparison.
    """
    last_items = [item_mapper(element) for element in last_elements]
    added = 0
    for element in add_elements:
        item = item_mapper(element)
        position = find_position(last_items, item, order_fields)
        if position == -1:
            container.insert_before(element, None)
            last_items.append(item)
            last_elements.append(element)
        else:
            container.insert_before(element, last_elements[position])
            last_items.insert(position, item)
            last_elements.insert(position, element)
        added += 1
    expression = format_order_expression(order_fields)
    log.debug(
        "Inserted %d element(s) by %r; %d tracked",
        added,
        expression,
        len(last_elements),
        extra={
            "operation": "insert",
            "order_expression": expression,
            "element_count": added,
            "moves": added,
        },
    )


def _target_permutation(items: Sequence[Any], order_fields: Sequence[OrderField]) -> List[int]:
    tagged = [_TaggedItem(item, idx) for idx, item in enumerate(items)]
    tagged.sort(key=cmp_to_key(lambda a, b: compare_objects(a.item, b.item, order_fields)))
    return [t.original_index for t in tagged]


def sort_elements(
    container: ElementContainer,
    last_elements: List[Any],
    order_fields: Sequence[OrderField],
    item_mapper: ItemMapper,
) -> int:
    """Reorder *last_elements* inside *container* to match *order_fields*.

    The new order is replayed backwards: the handle that belongs last is
    moved to the end, then each preceding handle is moved in front of the
    one placed in the previous round. The handle that ends up first is never
    moved, so ``n`` handles cost exactly ``n - 1`` placements.

    Worked example for target indexes ``[2, 3, 0, 1]`` over ``[0, 1, 2, 3]``::

        round 3: move 1 before None  -> 0 2 3 1
        round 2: move 0 before 1     -> 2 3 0 1
        round 1: move 3 before 0     -> 2 3 0 1

    ``last_elements`` is rebuilt in place. Returns the number of moves.
    """
    items = [item_mapper(element) for element in last_elements]
    targets = _target_permutation(items, order_fields)

    previous: Optional[Any] = None
    moves = 0
    for round_ in range(len(targets) - 1, 0, -1):
        element = last_elements[targets[round_]]
        container.insert_before(element, previous)
        previous = element
        moves += 1

    last_elements[:] = [last_elements[idx] for idx in targets]
    expression = format_order_expression(order_fields)
    log.debug(
        "Resorted %d element(s) by %r with %d move(s)",
        len(last_elements),
        expression,
        moves,
        extra={
            "operation": "resort",
            "order_expression": expression,
            "element_count": len(last_elements),
            "moves": moves,
        },
    )
    return moves


OrderSpec = Union[str, Sequence[OrderField], None]


def _coerce_fields(order: OrderSpec) -> Tuple[OrderField, ...]:
    if order is None or isinstance(order, str):
        return parse_order_expression(order)
    return tuple(order)


class SortedElementList:
    """Mutable façade tracking one container's sorted children.

    Usage:
        sorted_list = SortedElementList(container, mapper, "type, id DESC")
        sorted_list.add(row_a, row_b)
        sorted_list.set_order("id")   # minimal-move resort
    """

    def __init__(
        self,
        container: ElementContainer,
        item_mapper: ItemMapper,
        order: OrderSpec = None,
        *,
        elements: Iterable[Any] = (),
        telemetry: Optional[TelemetryService] = None,
    ) -> None:
        self._container = container
        self._item_mapper = item_mapper
        self._order_fields = _coerce_fields(order)
        self._elements: List[Any] = []
        self._telemetry = telemetry
        self._lock = RLock()
        initial = list(elements)
        if initial:
            self.extend(initial)

    @property
    def order_fields(self) -> Tuple[OrderField, ...]:
        return self._order_fields

    @property
    def order_expression(self) -> str:
        return format_order_expression(self._order_fields)

    @property
    def elements(self) -> Tuple[Any, ...]:
        with self._lock:
            return tuple(self._elements)

    def __len__(self) -> int:
        with self._lock:
            return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    # Mutation ---------------------------------------------------------
    def add(self, *handles: Any) -> None:
        self.extend(handles)

    def extend(self, handles: Iterable[Any]) -> None:
        batch = list(handles)
        with self._lock:
            insert_elements(
                self._container, self._elements, batch, self._order_fields, self._item_mapper
            )
        self._count("insert.elements", len(batch))

    def set_order(self, order: OrderSpec) -> bool:
        """Switch to a new order and resort. Returns False when unchanged."""
        fields = _coerce_fields(order)
        with self._lock:
            if fields == self._order_fields:
                return False
            self._order_fields = fields
            self._resort_locked()
        return True

    def resort(self) -> int:
        """Resort with the current order (e.g. after item values changed)."""
        with self._lock:
            return self._resort_locked()

    def _resort_locked(self) -> int:
        moves = sort_elements(
            self._container, self._elements, self._order_fields, self._item_mapper
        )
        self._count("resort.runs", 1)
        self._count("resort.moves", moves)
        return moves

    # Diagnostics ------------------------------------------------------
    def is_consistent(self) -> bool:
        """True when the tracked handles are still sorted by the current order."""
        with self._lock:
            items = [self._item_mapper(e) for e in self._elements]
            return is_sorted(items, self._order_fields)

    def _count(self, name: str, delta: int) -> None:
        if self._telemetry is not None:
            self._telemetry.increment(name, delta)
