"""Exception types raised by the ordering package."""

from __future__ import annotations

__all__ = ["ElementSorterError", "OrderExpressionError", "ReferenceNotFoundError"]


class ElementSorterError(Exception):
    """Base class for ordering errors."""


class OrderExpressionError(ElementSorterError, ValueError):
    """Raised by strict parsing when an order expression segment is malformed."""


class ReferenceNotFoundError(ElementSorterError, ValueError):
    """Raised when ``insert_before`` receives a reference that is not a child."""
