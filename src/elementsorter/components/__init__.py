"""Qt widgets built on the ordering engine."""

from .sorted_list_widget import LayoutContainer, SortedListWidget, widget_property_mapper

__all__ = ["LayoutContainer", "SortedListWidget", "widget_property_mapper"]
