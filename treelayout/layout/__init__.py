"""Recursive tree layout: subtree sizing, placement and connector building."""

from .connectors import ConnectorPath
from .engine import LayoutResult, PlacementSink, TreeLayout
from .host import PathPublisher, place_subviews, size_that_fits
from .params import LayoutParameters

__all__ = [
    "ConnectorPath",
    "LayoutParameters",
    "LayoutResult",
    "PathPublisher",
    "PlacementSink",
    "TreeLayout",
    "place_subviews",
    "size_that_fits",
]
