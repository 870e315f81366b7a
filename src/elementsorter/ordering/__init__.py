"""Ordering engine: order expressions, comparison and element placement."""

from .containers import ElementContainer, ListContainer
from .element_sorter import ItemMapper, SortedElementList, insert_elements, sort_elements
from .errors import ElementSorterError, OrderExpressionError, ReferenceNotFoundError
from .field_compare import MISSING, compare_field, compare_values, resolve_path
from .object_sorter import compare_objects, find_position, is_sorted, sort_objects
from .sort_spec import OrderField, format_order_expression, parse_order_expression

__all__ = [
    "ElementContainer",
    "ListContainer",
    "ItemMapper",
    "SortedElementList",
    "insert_elements",
    "sort_elements",
    "ElementSorterError",
    "OrderExpressionError",
    "ReferenceNotFoundError",
    "MISSING",
    "compare_field",
    "compare_values",
    "resolve_path",
    "compare_objects",
    "find_position",
    "is_sorted",
    "sort_objects",
    "OrderField",
    "format_order_expression",
    "parse_order_expression",
]
