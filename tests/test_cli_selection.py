import json
from pathlib import Path

import pytest

import treelayout
import treelayout.scripts
from treelayout.scripts.show_layout import TREES_DIR, catalog_trees, choose_entry, main, resolve_tree_path


def _silent_print(_: str) -> None:  # pragma: no cover - helper for tests
    return None


def _answers(*responses):
    remaining = iter(responses)
    return lambda _: next(remaining)


def test_bundled_trees_ship_inside_the_package():
    assert treelayout.scripts.__file__ is not None
    assert TREES_DIR.parent == Path(treelayout.__file__).resolve().parent
    assert [(entry.group, entry.name) for entry in catalog_trees(TREES_DIR)] == [
        ("demo", "demo"),
        ("orgchart", "orgchart"),
        ("orgchart", "orgchart-small"),
        ("single", "single"),
    ]


def test_catalog_counts_nodes():
    counts = {entry.name: entry.node_count for entry in catalog_trees(TREES_DIR)}
    assert counts == {"demo": 10, "orgchart": 6, "orgchart-small": 3, "single": 1}


def test_resolve_by_direct_path():
    explicit = TREES_DIR / "demo" / "demo.xml"
    resolved = resolve_tree_path(str(explicit), TREES_DIR, print_fn=_silent_print)
    assert resolved == explicit.resolve()


def test_resolve_by_document_name_skips_the_menu():
    resolved = resolve_tree_path(
        "OrgChart-Small", TREES_DIR, input_fn=_answers(), print_fn=_silent_print
    )
    assert resolved.name == "orgchart_small.xml"


def test_resolve_unique_name_and_directory_menu():
    resolved = resolve_tree_path(
        "single", TREES_DIR, input_fn=_answers(), print_fn=_silent_print
    )
    assert resolved.name == "single.xml"

    resolved = resolve_tree_path(
        str(TREES_DIR / "orgchart"), TREES_DIR, input_fn=_answers("2"), print_fn=_silent_print
    )
    assert resolved.name == "orgchart_small.xml"


def test_interactive_selection_accepts_names_and_retries():
    printed = []
    resolved = resolve_tree_path(
        None,
        TREES_DIR,
        input_fn=_answers("oops", "9", "single"),
        print_fn=printed.append,
    )
    assert resolved.name == "single.xml"
    assert "  3. orgchart-small (orgchart_small.xml, 3 nodes)" in printed
    assert printed.count("Enter a number from 1 to 4 or one of the tree names.") == 2


def test_invalid_tree_name():
    with pytest.raises(FileNotFoundError):
        resolve_tree_path("does_not_exist", TREES_DIR, print_fn=_silent_print)


def test_catalog_skips_unreadable_files_and_ignores_suffix_case(tmp_path):
    group = tmp_path / "ExampleTree"
    group.mkdir()
    (group / "example.XML").write_text("<tree name='example'><node name='only'/></tree>")
    (group / "broken.xml").write_text("<tree><node>")
    (group / "notes.txt").write_text("not a tree")

    entries = catalog_trees(tmp_path)
    assert len(entries) == 1
    assert entries[0].group == "ExampleTree"
    assert entries[0].name == "example"
    assert entries[0].node_count == 1


def test_choose_entry_requires_entries():
    with pytest.raises(FileNotFoundError):
        choose_entry("Select a tree:", [], print_fn=_silent_print)


def test_main_exports_json(tmp_path, capsys):
    output = tmp_path / "layout.json"
    main([str(TREES_DIR / "orgchart" / "orgchart_small.xml"), "--node-separation", "10", "--output", str(output)])

    printed = capsys.readouterr().out
    assert "Tree: orgchart-small" in printed
    assert "Connectors: 2" in printed

    exported = json.loads(output.read_text())
    assert exported["size"] == {"width": 210.0, "height": 120.0}
    assert exported["parameters"]["node_separation"] == 10.0
    assert [node["id"] for node in exported["nodes"]] == ["ceo", "cto", "cfo"]
    assert exported["connectors"][0] == [105.0, 20.0, 50.0, 80.0]


def test_main_rejects_negative_separation(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["demo", "--row-separation", "-5"])
    assert excinfo.value.code == 1
    assert "row_separation" in capsys.readouterr().err
