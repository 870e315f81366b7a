"""Sorted list widget backed by the ordering engine.

Purpose
-------
Keep row widgets inside a ``QBoxLayout`` ordered by an order expression
without rebuilding the layout. New rows are inserted at their sorted
position; changing the order moves existing rows in place, so focus and
any transient widget state survive a resort.

Row data
--------
By default each row is described by its Qt dynamic properties::

    row = QLabel("Alpha")
    row.setProperty("id", 3)
    row.setProperty("type", "foo")

Property values must already be typed (ints, bools, strings); the engine
does not coerce strings. Hosts with richer models pass their own
``item_mapper``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from PyQt6.QtWidgets import QBoxLayout, QSizePolicy, QVBoxLayout, QWidget

from ..ordering.element_sorter import ItemMapper, OrderSpec, SortedElementList
from ..ordering.errors import ReferenceNotFoundError
from ..services.telemetry import TelemetryService

__all__ = ["LayoutContainer", "SortedListWidget", "widget_property_mapper"]


def widget_property_mapper(widget: QWidget) -> Dict[str, Any]:
    """Map a widget to a dict of its dynamic properties.

    Names the widget never received resolve to ``MISSING`` during comparison.
    """
    item: Dict[str, Any] = {}
    for raw in widget.dynamicPropertyNames():
        name = raw.data().decode("utf-8")
        item[name] = widget.property(name)
    return item


class LayoutContainer:
    """``ElementContainer`` over a ``QBoxLayout`` holding only widgets."""

    def __init__(self, layout: QBoxLayout) -> None:
        self._layout = layout
        self.move_count = 0

    @property
    def layout(self) -> QBoxLayout:
        return self._layout

    def append_child(self, handle: QWidget) -> None:
        self.insert_before(handle, None)

    def insert_before(self, handle: QWidget, reference: Optional[QWidget]) -> None:
        self.move_count += 1
        if reference is handle:
            return
        if reference is not None and self._layout.indexOf(reference) == -1:
            raise ReferenceNotFoundError(f"Widget {reference!r} is not in the layout")
        if self._layout.indexOf(handle) != -1:
            self._layout.removeWidget(handle)
        if reference is None:
            self._layout.addWidget(handle)
        else:
            self._layout.insertWidget(self._layout.indexOf(reference), handle)

    def children(self) -> List[QWidget]:
        out: List[QWidget] = []
        for i in range(self._layout.count()):
            item = self._layout.itemAt(i)
            widget = item.widget() if item is not None else None
            if widget is not None:
                out.append(widget)
        return out


class SortedListWidget(QWidget):
    """Vertical list whose rows stay ordered by an order expression.

    Parameters
    ----------
    order:
        Order expression (``"type, id DESC"``) or parsed fields.
    item_mapper:
        Row widget -> item object. Defaults to ``widget_property_mapper``.
    telemetry:
        Optional counters service forwarded to the underlying list.
    """

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        order: OrderSpec = None,
        item_mapper: Optional[ItemMapper] = None,
        telemetry: Optional[TelemetryService] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("sortedList")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.setLayout(layout)
        self._container = LayoutContainer(layout)
        self._rows = SortedElementList(
            self._container,
            item_mapper or widget_property_mapper,
            order,
            telemetry=telemetry,
        )

    # Public API -----------------------------------------------------
    def add_widgets(self, widgets: Iterable[QWidget]) -> None:
        self._rows.extend(widgets)

    def add_widget(self, widget: QWidget) -> None:
        self._rows.add(widget)

    def set_order(self, order: OrderSpec) -> bool:
        return self._rows.set_order(order)

    def resort(self) -> int:
        return self._rows.resort()

    def order_expression(self) -> str:
        return self._rows.order_expression

    def widgets(self) -> List[QWidget]:
        """Row widgets in on-screen (layout) order."""
        return self._container.children()

    def row_count(self) -> int:
        return len(self._rows)

    def container(self) -> LayoutContainer:  # accessor for tests / diagnostics
        return self._container
