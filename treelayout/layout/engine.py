from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Mapping, MutableMapping, Optional, Protocol

import numpy as np

from treelayout.geometry import Point, Rect, Segment, Size
from treelayout.tree.nodes import NodeHandle
from treelayout.tree.structure import LayoutTree

from .connectors import ConnectorPath
from .params import LayoutParameters

logger = logging.getLogger(__name__)

SizeCache = MutableMapping[Hashable, Size]


class PlacementSink(Protocol):
    """Receives the top-center point of every placed node."""

    def place(self, handle: NodeHandle, point: Point) -> None: ...


@dataclass(slots=True)
class LayoutResult:
    """Everything one layout pass derives from the tree."""

    bounds: Rect
    size: Size
    rects: Dict[Hashable, Rect] = field(default_factory=dict)
    connectors: ConnectorPath = field(default_factory=ConnectorPath)

    def positions(self) -> Dict[Hashable, Point]:
        return {node: rect.top_center for node, rect in self.rects.items()}

    def bounding_box(self) -> Optional[Rect]:
        """Smallest rectangle enclosing every placed node, or ``None`` when nothing was placed."""

        if not self.rects:
            return None
        corners = np.array(
            [[r.min_x, r.min_y, r.max_x, r.max_y] for r in self.rects.values()],
            dtype=float,
        )
        min_x, min_y = corners[:, :2].min(axis=0)
        max_x, max_y = corners[:, 2:].max(axis=0)
        return Rect.from_bounds(
            float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y)
        )


class TreeLayout:
    """Top-down tree layout: parents centered over their allotted span, children in rows.

    ``estimate_size`` computes subtree bounds bottom-up, ``place`` assigns
    rectangles top-down inside a bounding rectangle, and ``build_connectors``
    joins every placed parent to its placed children.

    All three recurse once per tree level, so a tree deeper than the
    interpreter's recursion limit (``sys.getrecursionlimit()``, typically
    1000) raises ``RecursionError``. Diagram-sized trees stay far below it.
    """

    def __init__(self, params: LayoutParameters | None = None) -> None:
        self.params = params or LayoutParameters()

    def estimate_size(
        self, tree: LayoutTree, node_id: Hashable, sizes: SizeCache | None = None
    ) -> Size:
        """Bounding size needed by ``node_id`` and all of its descendants.

        ``sizes`` memoizes results for the duration of one layout pass; the tree
        and intrinsic sizes must not change while it is in use.
        """

        if sizes is not None and node_id in sizes:
            return sizes[node_id]

        child_sizes = [
            self.estimate_size(tree, child, sizes) for child in tree.children_of(node_id)
        ]
        widths_sum = sum(size.width for size in child_sizes)
        max_height = max((size.height for size in child_sizes), default=0.0)

        own = tree.handle(node_id).size_that_fits()
        count = len(child_sizes)
        width = max(own.width, widths_sum + self.params.node_separation * max(count - 1, 0))
        height = own.height + max_height + (self.params.row_separation if count > 0 else 0.0)

        size = Size(width, height)
        if sizes is not None:
            sizes[node_id] = size
        return size

    def place(
        self,
        tree: LayoutTree,
        node_id: Hashable,
        bounds: Rect,
        rects: MutableMapping[Hashable, Rect],
        sizes: SizeCache | None = None,
        sink: PlacementSink | None = None,
    ) -> Size:
        """Place ``node_id`` centered in ``bounds`` and its subtree below it.

        Populates ``rects`` with the rectangle of every placed node and returns
        the subtree size. ``bounds`` is not clamped: bounds smaller or larger
        than the estimated size shift the result rather than failing.
        """

        handle = tree.handle(node_id)
        own = handle.size_that_fits()

        if sink is not None:
            sink.place(handle, Point(bounds.mid_x, bounds.min_y))
        rects[node_id] = Rect(Point(bounds.mid_x - own.width / 2.0, bounds.min_y), own)

        size = self.estimate_size(tree, node_id, sizes)
        y = bounds.min_y + own.height + self.params.row_separation

        offset = 0.0
        for child in tree.children_of(node_id):
            child_bounds = Rect(
                Point(bounds.min_x + offset, y),
                self.estimate_size(tree, child, sizes),
            )
            placed = self.place(tree, child, child_bounds, rects, sizes, sink)
            offset += placed.width + self.params.node_separation

        return size

    def build_connectors(
        self,
        tree: LayoutTree,
        node_id: Hashable,
        rects: Mapping[Hashable, Rect],
        origin: Point | None = None,
    ) -> ConnectorPath:
        """Segments from each parent's center to each child's top-center.

        Segments follow pre-order: a parent's segment to a child precedes the
        child's own subtree.

        Pass the layout bounds' origin as ``origin`` to get bounds-relative
        segments, as :meth:`layout` does. With the default ``None`` the
        segments stay in the same absolute coordinates as ``rects``.
        """

        segments: List[Segment] = []

        def collect(parent: Hashable) -> None:
            parent_rect = rects.get(parent)
            if parent_rect is None:
                return
            for child in tree.children_of(parent):
                child_rect = rects.get(child)
                if child_rect is not None:
                    segments.append(Segment(parent_rect.center, child_rect.top_center))
                collect(child)

        collect(node_id)
        path = ConnectorPath(segments)
        if origin is None:
            return path
        return path.offset_by(-origin.x, -origin.y)

    def size_that_fits(self, tree: LayoutTree) -> Size:
        if tree.root is None:
            return Size.zero()
        return self.estimate_size(tree, tree.root, {})

    def layout(
        self,
        tree: LayoutTree,
        bounds: Rect | None = None,
        sink: PlacementSink | None = None,
    ) -> LayoutResult:
        """Run a full pass: size the tree, place every node, build connectors."""

        if tree.root is None:
            return LayoutResult(bounds=bounds or Rect(Point(0.0, 0.0), Size.zero()), size=Size.zero())

        sizes: Dict[Hashable, Size] = {}
        if bounds is None:
            bounds = Rect(Point(0.0, 0.0), self.estimate_size(tree, tree.root, sizes))

        rects: Dict[Hashable, Rect] = {}
        size = self.place(tree, tree.root, bounds, rects, sizes, sink)
        connectors = self.build_connectors(tree, tree.root, rects, origin=bounds.origin)

        skipped = len(tree) - len(rects)
        if skipped:
            logger.debug("Skipped %d node(s) unreachable from root %r", skipped, tree.root)
        logger.debug(
            "Placed %d nodes in %.1fx%.1f with %d connectors",
            len(rects),
            size.width,
            size.height,
            len(connectors),
        )
        return LayoutResult(bounds=bounds, size=size, rects=rects, connectors=connectors)
