from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .nodes import LayoutNode, TreeNode


def _parse_dimension(raw: str | None, node_name: str, attribute: str) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(
            f"Node {node_name!r} has non-numeric {attribute}={raw!r}"
        ) from None
    if value < 0.0:
        raise ValueError(f"Node {node_name!r} has negative {attribute}={raw!r}")
    return value


def _parse_node(element: ET.Element) -> TreeNode:
    name = element.attrib.get("name", "")
    node = TreeNode(
        name=name,
        color=element.attrib.get("color"),
        children=[_parse_node(child) for child in element.findall("node")],
        width=_parse_dimension(element.attrib.get("width"), name, "width"),
        height=_parse_dimension(element.attrib.get("height"), name, "height"),
    )
    if "id" in element.attrib:
        node.node_id = element.attrib["id"]
    return node


@dataclass(slots=True)
class TreeDocument:
    """A named tree description loaded from disk."""

    source_path: Path | None
    name: str
    root: TreeNode | None

    def layout_nodes(self) -> Tuple[LayoutNode, ...]:
        if self.root is None:
            return ()
        return self.root.to_layout_nodes()


def load_tree(path: Path | str) -> TreeDocument:
    resolved = Path(path).expanduser().resolve()
    try:
        document = ET.parse(resolved).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"Could not parse {resolved.name}: {exc}") from exc
    if document.tag != "tree":
        raise ValueError(f"Expected root <tree> element, got <{document.tag}>")
    roots = document.findall("node")
    if len(roots) > 1:
        raise ValueError(f"{resolved.name} declares {len(roots)} root nodes; expected one")
    return TreeDocument(
        source_path=resolved,
        name=document.attrib.get("name", resolved.stem),
        root=_parse_node(roots[0]) if roots else None,
    )
