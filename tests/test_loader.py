import pytest

from treelayout.geometry import Size
from treelayout.tree import build_layout_tree, load_tree


def test_loads_demo(demo_document):
    assert demo_document.name == "demo"
    assert demo_document.source_path.name == "demo.xml"
    assert demo_document.root.node_id == "root"
    assert [child.name for child in demo_document.root.children] == ["Node A", "Node B", "Node C"]
    assert demo_document.root.color == "#1565c0"


def test_layout_nodes_structure(demo_document):
    tree = build_layout_tree(demo_document.layout_nodes())
    assert tree.root == "root"
    assert tree.parent_of("a1") == "a"
    assert tree.children_of("root") == ("a", "b", "c")
    assert tree.children_of("b1") == ("b1x", "b1y", "b1z")
    assert len(tree) == 10
    assert tree.handle("root").label == "Root"


def test_explicit_dimensions(tmp_path):
    path = tmp_path / "sized.xml"
    path.write_text(
        "<tree><node id='r' name='R' width='80' height='30'>"
        "<node id='c' name='C' width='60' height='20'/></node></tree>"
    )
    document = load_tree(path)
    assert document.name == "sized"
    nodes = {node.node_id: node for node in document.layout_nodes()}
    assert nodes["r"].size_that_fits() == Size(80, 30)
    assert nodes["c"].parent_id == "r"


def test_tree_without_nodes_is_empty(tmp_path):
    path = tmp_path / "empty.xml"
    path.write_text("<tree name='nothing'/>")
    document = load_tree(path)
    assert document.root is None
    assert document.layout_nodes() == ()


@pytest.mark.parametrize(
    "content",
    [
        "<forest/>",
        "<tree><node name='a'/><node name='b'/></tree>",
        "<tree><node name='a' width='wide'/></tree>",
        "<tree><node name='a' height='-1'/></tree>",
        "<tree><node name='a'>",
    ],
)
def test_invalid_documents_rejected(tmp_path, content):
    path = tmp_path / "bad.xml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_tree(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tree(tmp_path / "absent.xml")
