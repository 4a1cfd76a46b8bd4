from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Protocol, Tuple, runtime_checkable

from treelayout.geometry import Size

LABEL_CHAR_WIDTH = 8.0
LABEL_PADDING = (20.0, 14.0)
LABEL_LINE_HEIGHT = 16.0


@runtime_checkable
class NodeHandle(Protocol):
    """What the layout needs from each item of the host's flat node collection."""

    @property
    def node_id(self) -> Hashable: ...

    @property
    def parent_id(self) -> Optional[Hashable]: ...

    def size_that_fits(self) -> Size: ...


def estimate_label_size(label: str) -> Size:
    """Approximate the intrinsic size of a node that only shows ``label``."""

    lines = label.splitlines() or [""]
    longest = max(len(line) for line in lines)
    pad_x, pad_y = LABEL_PADDING
    return Size(
        longest * LABEL_CHAR_WIDTH + pad_x,
        len(lines) * LABEL_LINE_HEIGHT + pad_y,
    )


@dataclass(slots=True, frozen=True)
class LayoutNode:
    """Flat node handle with a fixed intrinsic size."""

    node_id: Hashable
    parent_id: Optional[Hashable]
    size: Size
    label: str = ""
    color: str | None = None

    def size_that_fits(self) -> Size:
        return self.size


@dataclass(slots=True)
class TreeNode:
    """Nested, owned description of a tree; children keep their declared order."""

    name: str
    color: str | None = None
    children: List[TreeNode] = field(default_factory=list)
    node_id: Hashable = field(default_factory=lambda: uuid.uuid4().hex)
    parent_id: Optional[Hashable] = None
    width: float | None = None
    height: float | None = None

    def intrinsic_size(self) -> Size:
        estimated = estimate_label_size(self.name)
        return Size(
            self.width if self.width is not None else estimated.width,
            self.height if self.height is not None else estimated.height,
        )

    def flatten_nodes(self) -> List[TreeNode]:
        """Return this node followed by all descendants in depth-first pre-order."""

        nodes: List[TreeNode] = []
        stack = [self]
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node.children))
        return nodes

    def populate_parent_ids(self) -> None:
        stack = [self]
        while stack:
            node = stack.pop()
            for child in node.children:
                child.parent_id = node.node_id
            stack.extend(node.children)

    def to_layout_nodes(self) -> Tuple[LayoutNode, ...]:
        self.populate_parent_ids()
        return tuple(
            LayoutNode(
                node_id=node.node_id,
                parent_id=node.parent_id,
                size=node.intrinsic_size(),
                label=node.name,
                color=node.color,
            )
            for node in self.flatten_nodes()
        )
