from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
import sys
from typing import Any, Callable, Dict, List, Sequence

from treelayout.layout import LayoutParameters, LayoutResult, TreeLayout
from treelayout.tree import TreeDocument, build_layout_tree, load_tree

TREES_DIR = Path(__file__).resolve().parents[1] / "trees"

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TreeEntry:
    """A tree description found on disk, labelled by its ``<tree name>``."""

    path: Path
    group: str
    name: str
    node_count: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.path.name}, {self.node_count} nodes)"


def _catalog_directory(directory: Path, group: str) -> List[TreeEntry]:
    entries: List[TreeEntry] = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name.lower()):
        if not path.is_file() or path.suffix.lower() != ".xml":
            continue
        try:
            document = load_tree(path)
        except ValueError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            continue
        count = len(document.root.flatten_nodes()) if document.root is not None else 0
        entries.append(TreeEntry(path=path, group=group, name=document.name, node_count=count))
    return entries


def catalog_trees(trees_root: Path) -> List[TreeEntry]:
    """Every readable tree description one directory below ``trees_root``."""

    if not trees_root.exists():
        return []
    entries: List[TreeEntry] = []
    for group_dir in sorted(trees_root.iterdir(), key=lambda p: p.name.lower()):
        if group_dir.is_dir():
            entries.extend(_catalog_directory(group_dir, group_dir.name))
    return entries


def choose_entry(
    prompt: str,
    entries: Sequence[TreeEntry],
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> TreeEntry:
    """Ask for a tree by menu number or by name; a single entry is chosen without asking."""

    if not entries:
        raise FileNotFoundError("No tree descriptions available for selection.")
    if len(entries) == 1:
        return entries[0]

    by_name = {entry.name.lower(): entry for entry in entries}
    while True:
        print_fn("")
        print_fn(prompt)
        for number, entry in enumerate(entries, start=1):
            print_fn(f"  {number}. {entry.label}")
        response = input_fn("Tree number or name: ").strip()
        if response.lower() in by_name:
            return by_name[response.lower()]
        if response.isdigit() and 1 <= int(response) <= len(entries):
            return entries[int(response) - 1]
        print_fn(f"Enter a number from 1 to {len(entries)} or one of the tree names.")


def resolve_tree_path(
    target: str | None,
    trees_root: Path,
    *,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[[str], None] = print,
) -> Path:
    """Resolve ``target`` as a file, a directory, a tree name or a group of bundled trees."""

    if target:
        candidate = Path(target).expanduser()
        if candidate.is_file():
            return candidate.resolve()
        if candidate.is_dir():
            entries = _catalog_directory(candidate, candidate.name)
            if not entries:
                raise FileNotFoundError(f"No tree files found under {candidate}")
            prompt = f"Select a tree inside {candidate}:"
        else:
            key = target.lower()
            catalog = catalog_trees(trees_root)
            named = [entry for entry in catalog if entry.name.lower() == key]
            if len(named) == 1:
                return named[0].path.resolve()
            entries = named or [entry for entry in catalog if entry.group.lower() == key]
            if not entries:
                raise FileNotFoundError(f"Tree {target!r} not found under {trees_root}.")
            prompt = f"Several trees match {target!r}:"
    else:
        entries = catalog_trees(trees_root)
        if not entries:
            raise FileNotFoundError(f"No trees found under {trees_root}.")
        prompt = "Select a tree:"

    return choose_entry(prompt, entries, input_fn=input_fn, print_fn=print_fn).path.resolve()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lay out a tree description and print node placements."
    )
    parser.add_argument(
        "target",
        nargs="?",
        help=(
            "Tree name (e.g. 'demo') or path to a tree XML file. "
            "If omitted, an interactive selector will be shown."
        ),
    )
    parser.add_argument(
        "--node-separation",
        type=float,
        default=None,
        help="Horizontal gap between sibling subtrees.",
    )
    parser.add_argument(
        "--row-separation",
        type=float,
        default=None,
        help="Vertical gap between a parent and its row of children.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional JSON file path to export rectangles and connectors.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def layout_to_dict(document: TreeDocument, result: LayoutResult, params: LayoutParameters) -> Dict[str, Any]:
    labels = {node.node_id: node.label for node in document.layout_nodes()}
    return {
        "name": document.name,
        "parameters": {
            "node_separation": params.node_separation,
            "row_separation": params.row_separation,
        },
        "size": {"width": result.size.width, "height": result.size.height},
        "nodes": [
            {
                "id": str(node_id),
                "label": labels.get(node_id, ""),
                "x": rect.min_x,
                "y": rect.min_y,
                "width": rect.size.width,
                "height": rect.size.height,
            }
            for node_id, rect in result.rects.items()
        ],
        "connectors": result.connectors.to_array().reshape(-1, 4).tolist(),
    }


def _print_layout(document: TreeDocument, result: LayoutResult) -> None:
    labels = {node.node_id: node.label for node in document.layout_nodes()}
    print(f"Tree: {document.name}")
    print(f"  Size: {result.size.width:g} x {result.size.height:g}")
    for node_id, rect in result.rects.items():
        label = labels.get(node_id) or str(node_id)
        print(
            f"    {label:<24} x={rect.min_x:8.1f} y={rect.min_y:8.1f} "
            f"w={rect.size.width:6.1f} h={rect.size.height:6.1f}"
        )
    print(f"  Connectors: {len(result.connectors)}")


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        tree_path = resolve_tree_path(args.target, TREES_DIR)
        params = LayoutParameters().with_overrides(
            node_separation=args.node_separation,
            row_separation=args.row_separation,
        )
        document = load_tree(tree_path)
        tree = build_layout_tree(document.layout_nodes())
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    orphans = tree.orphans()
    if orphans:
        logger.warning("%d node(s) unreachable from the root are not laid out", len(orphans))

    result = TreeLayout(params).layout(tree)
    _print_layout(document, result)

    if args.output:
        args.output.write_text(json.dumps(layout_to_dict(document, result, params), indent=2))
        print(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
