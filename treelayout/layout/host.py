"""Entry points for hosts that keep their nodes in a flat handle collection.

The host owns the handles and decides when to lay out. These helpers index the
collection, run a layout pass and hand placements and connectors back.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from treelayout.geometry import Rect, Size
from treelayout.tree.nodes import NodeHandle
from treelayout.tree.structure import build_layout_tree

from .connectors import ConnectorPath
from .engine import LayoutResult, PlacementSink, TreeLayout
from .params import LayoutParameters

logger = logging.getLogger(__name__)


class PathPublisher:
    """Forward connector paths to ``listener`` only when they change.

    Publishing an unchanged path is a no-op, so a listener that triggers a new
    layout pass does not cause a feedback loop.
    """

    def __init__(self, listener: Callable[[ConnectorPath], None]) -> None:
        self._listener = listener
        self._current: Optional[ConnectorPath] = None

    @property
    def current(self) -> Optional[ConnectorPath]:
        return self._current

    def publish(self, path: ConnectorPath) -> bool:
        if self._current is not None and path == self._current:
            return False
        self._current = path
        self._listener(path)
        return True


def size_that_fits(
    handles: Iterable[NodeHandle], params: LayoutParameters | None = None
) -> Size:
    tree = build_layout_tree(handles)
    return TreeLayout(params).size_that_fits(tree)


def place_subviews(
    bounds: Rect,
    handles: Iterable[NodeHandle],
    params: LayoutParameters | None = None,
    sink: PlacementSink | None = None,
    publisher: PathPublisher | None = None,
) -> LayoutResult:
    tree = build_layout_tree(handles)
    result = TreeLayout(params).layout(tree, bounds=bounds, sink=sink)
    if publisher is not None and tree.root is not None:
        if publisher.publish(result.connectors):
            logger.debug("Published %d connector segments", len(result.connectors))
    return result
