"""Node handles, nested tree descriptions and the child lookup index."""

from .loader import TreeDocument, load_tree
from .nodes import LayoutNode, NodeHandle, TreeNode, estimate_label_size
from .structure import LayoutTree, build_layout_tree, find_root, validate_tree

__all__ = [
    "LayoutNode",
    "LayoutTree",
    "NodeHandle",
    "TreeDocument",
    "TreeNode",
    "build_layout_tree",
    "estimate_label_size",
    "find_root",
    "load_tree",
    "validate_tree",
]
