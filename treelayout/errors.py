"""Exceptions raised for malformed trees and invalid layout configuration."""

from __future__ import annotations

from typing import Hashable, Iterable, Tuple


class TreeLayoutError(Exception):
    """Base class for all treelayout errors."""


class TreeStructureError(TreeLayoutError, ValueError):
    """The node collection does not form a single rooted tree."""


class MissingRootError(TreeStructureError):
    def __init__(self, node_count: int) -> None:
        super().__init__(
            f"No root node found among {node_count} nodes; exactly one node must have no parent."
        )
        self.node_count = node_count


class MultipleRootsError(TreeStructureError):
    def __init__(self, roots: Iterable[Hashable]) -> None:
        self.roots: Tuple[Hashable, ...] = tuple(roots)
        names = ", ".join(repr(root) for root in self.roots)
        super().__init__(f"Expected exactly one root node, found {len(self.roots)}: {names}")


class DuplicateNodeError(TreeStructureError):
    def __init__(self, node_id: Hashable) -> None:
        super().__init__(f"Node id {node_id!r} appears more than once")
        self.node_id = node_id


class OrphanedNodeError(TreeStructureError):
    def __init__(self, orphans: Iterable[Hashable]) -> None:
        self.orphans: Tuple[Hashable, ...] = tuple(orphans)
        names = ", ".join(repr(node) for node in self.orphans)
        super().__init__(f"{len(self.orphans)} node(s) unreachable from the root: {names}")


class ConfigurationError(TreeLayoutError, ValueError):
    """Layout parameters are out of range."""
