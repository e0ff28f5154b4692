"""Pytest configuration and shared fixtures for canvasoutline tests."""

import json

import networkx as nx
import pytest

from canvasoutline import CanvasParser, ContainmentResolver, OutlineGenerator
from canvasoutline.models import Element, GroupChild, GroupTree, LeafChild
from canvasoutline.resolver import ContainmentResult

DEEP_CHAIN_LENGTH = 1500


def _node(node_id, node_type, x, y, width=10, height=10, **payload):
    node = {
        "id": node_id,
        "type": node_type,
        "x": x,
        "y": y,
        "width": width,
        "height": height,
    }
    node.update(payload)
    return node


@pytest.fixture
def nested_canvas():
    """Group R contains group S which contains a two-line text note."""
    return json.dumps(
        {
            "nodes": [
                _node("R", "group", 0, 0, 100, 100, label="R"),
                _node("S", "group", 10, 10, 50, 50, label="S"),
                _node("T", "text", 20, 20, text="Hello\nWorld"),
            ],
            "edges": [],
        }
    )


@pytest.fixture
def mixed_canvas():
    """Groups, notes, a file card, an unknown kind and a stray note."""
    return json.dumps(
        {
            "nodes": [
                _node("plan", "group", 0, 0, 400, 300, label="Plan"),
                _node("n1", "text", 10, 10, text="Warm up\n10 minutes"),
                _node("week", "group", 50, 50, 200, 200, label="Week 1"),
                _node("f1", "file", 60, 60, file="notes/plan.md"),
                _node("n2", "text", 300, 250, text="Cool down"),
                _node("l1", "link", 70, 70, url="https://example.com"),
                _node("stray", "text", 900, 900, text="Loose idea"),
            ],
            "edges": [
                {"id": "e1", "fromNode": "n1", "toNode": "f1", "fromSide": "right"},
            ],
        }
    )


@pytest.fixture
def canvas_file(tmp_path, mixed_canvas):
    """The mixed canvas written to disk."""
    path = tmp_path / "board.canvas"
    path.write_text(mixed_canvas, encoding="utf-8")
    return path


@pytest.fixture
def generator():
    """Default OutlineGenerator instance."""
    return OutlineGenerator()


@pytest.fixture
def parser():
    """Default CanvasParser instance."""
    return CanvasParser()


@pytest.fixture
def resolver():
    """Fresh ContainmentResolver instance."""
    return ContainmentResolver()


@pytest.fixture
def deep_chain():
    """
    Containment result for a chain of nested groups deeper than the
    interpreter recursion limit, with one note in the innermost group.    """
    ids = [f"g{i}" for i in range(DEEP_CHAIN_LENGTH)]
    leaf = Element(id="t", type="text", text="bottom")
    graph = nx.DiGraph()
    graph.add_nodes_from(ids)
    graph.add_edges_from(zip(ids, ids[1:]))

    result = ContainmentResult(graph=graph, roots=[ids[0]])
    for index, group_id in enumerate(ids):
        if index + 1 < len(ids):
            children = [GroupChild(ids[index + 1])]
        else:
            children = [LeafChild(leaf)]
        result.trees[group_id] = GroupTree(
            group=Element(id=group_id, type="group", label=group_id), children=children
        )
        result.parents[group_id] = ids[index - 1] if index else None
    return result
