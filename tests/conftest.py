from pathlib import Path

import pytest

from treelayout.tree import build_layout_tree, load_tree


DEMO_PATH = Path(__file__).resolve().parents[1] / "treelayout" / "trees" / "demo" / "demo.xml"


@pytest.fixture(scope="session")
def demo_document():
    return load_tree(DEMO_PATH)


@pytest.fixture
def demo_tree(demo_document):
    return build_layout_tree(demo_document.layout_nodes())
