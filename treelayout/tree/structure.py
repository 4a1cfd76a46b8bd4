from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, MutableMapping, Optional, Tuple

import networkx as nx

from treelayout.errors import (
    DuplicateNodeError,
    MissingRootError,
    MultipleRootsError,
    OrphanedNodeError,
)

from .nodes import NodeHandle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LayoutTree:
    """Child lookup index over the host's flat collection of node handles."""

    root: Optional[Hashable]
    handles: Mapping[Hashable, NodeHandle]
    parent_to_children: Mapping[Hashable, Tuple[Hashable, ...]]

    def __len__(self) -> int:
        return len(self.handles)

    def handle(self, node_id: Hashable) -> NodeHandle:
        try:
            return self.handles[node_id]
        except KeyError:
            raise KeyError(f"Node {node_id!r} not found") from None

    def parent_of(self, node_id: Hashable) -> Optional[Hashable]:
        return self.handle(node_id).parent_id

    def children_of(self, node_id: Hashable) -> Tuple[Hashable, ...]:
        return self.parent_to_children.get(node_id, ())

    def descendants(self) -> Iterator[Hashable]:
        """Depth-first pre-order traversal starting at the root."""

        if self.root is None:
            return
        stack = [self.root]
        visited = set()
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            yield node
            stack.extend(reversed(self.children_of(node)))

    def orphans(self) -> Tuple[Hashable, ...]:
        """Nodes that are never discovered by walking children from the root."""

        reachable = set(self.descendants())
        return tuple(node for node in self.handles if node not in reachable)

    def to_networkx(self):
        """Convert the tree to a NetworkX `DiGraph` with parent -> child edges."""
        graph = nx.DiGraph()
        for node_id, handle in self.handles.items():
            size = handle.size_that_fits()
            graph.add_node(node_id, width=size.width, height=size.height)
        for parent, children in self.parent_to_children.items():
            for order, child in enumerate(children):
                graph.add_edge(parent, child, order=order)
        return graph


def find_root(handles: Iterable[NodeHandle]) -> Optional[NodeHandle]:
    """Return the single handle without a parent, or ``None`` for an empty collection."""

    handles = list(handles)
    if not handles:
        return None
    roots = [handle for handle in handles if handle.parent_id is None]
    if not roots:
        raise MissingRootError(len(handles))
    if len(roots) > 1:
        raise MultipleRootsError(handle.node_id for handle in roots)
    return roots[0]


def build_layout_tree(handles: Iterable[NodeHandle]) -> LayoutTree:
    handles = list(handles)
    root = find_root(handles)

    by_id: MutableMapping[Hashable, NodeHandle] = {}
    parent_to_children: MutableMapping[Hashable, List[Hashable]] = {}
    for handle in handles:
        if handle.node_id in by_id:
            raise DuplicateNodeError(handle.node_id)
        by_id[handle.node_id] = handle
        parent_to_children.setdefault(handle.node_id, [])
        if handle.parent_id is not None:
            parent_to_children.setdefault(handle.parent_id, []).append(handle.node_id)

    frozen_children: Dict[Hashable, Tuple[Hashable, ...]] = {
        node: tuple(children)
        for node, children in parent_to_children.items()
        if node in by_id
    }
    tree = LayoutTree(
        root=root.node_id if root is not None else None,
        handles=dict(by_id),
        parent_to_children=frozen_children,
    )
    logger.debug("Indexed %d nodes, root=%r", len(by_id), tree.root)
    return tree


def validate_tree(tree: LayoutTree) -> None:
    """Reject trees whose nodes are not all reachable from the root.

    Layout itself skips such nodes silently; hosts that want to treat them as a
    data integrity bug run this pass first.
    """

    if tree.root is None:
        return
    graph = tree.to_networkx()
    reachable = nx.descendants(graph, tree.root) | {tree.root}
    orphans = [node for node in tree.handles if node not in reachable]
    if orphans:
        raise OrphanedNodeError(orphans)
