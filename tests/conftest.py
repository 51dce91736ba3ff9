"""Pytest fixtures for layout module tests."""

import pytest

from notegraph.graph import Edge, Node, NodeGroup, NoteGraph, seed_graph


def make_graph(node_ids: list[str], edges: list[tuple[str, str]]) -> NoteGraph:
    """Build a NoteGraph from ids and (source, target) pairs."""
    return NoteGraph(
        nodes=[Node(node_id) for node_id in node_ids],
        edges=[Edge(source, target) for source, target in edges],
    )


@pytest.fixture
def core5() -> tuple[NoteGraph, set[str]]:
    """Core with forward children F1, F2 and backward parents B1, B2, all locked."""
    return seed_graph()


@pytest.fixture
def forward_chain() -> NoteGraph:
    """Forward chain: Core -> A -> B -> C (depths 1, 2, 3)."""
    return make_graph(["Core", "A", "B", "C"], [("Core", "A"), ("A", "B"), ("B", "C")])


@pytest.fixture
def backward_chain() -> NoteGraph:
    """Backward chain: X -> Y -> Core (depths -2, -1)."""
    return make_graph(["Core", "Y", "X"], [("Y", "Core"), ("X", "Y")])


@pytest.fixture
def diamond_graph() -> NoteGraph:
    """Diamond: Core -> A, Core -> B, A -> D, B -> D (D at depth 2)."""
    return make_graph(
        ["Core", "A", "B", "D"],
        [("Core", "A"), ("Core", "B"), ("A", "D"), ("B", "D")],
    )


@pytest.fixture
def cycle_graph() -> NoteGraph:
    """Cycle through the anchor: Core -> A -> B -> Core."""
    return make_graph(["Core", "A", "B"], [("Core", "A"), ("A", "B"), ("B", "Core")])


@pytest.fixture
def disconnected_graph() -> NoteGraph:
    """Core -> A plus an isolated pair Z -> W."""
    return make_graph(["Core", "A", "Z", "W"], [("Core", "A"), ("Z", "W")])


@pytest.fixture
def three_ring_graph() -> NoteGraph:
    """Anchor with three forward children and one backward parent."""
    return NoteGraph(
        nodes=[
            Node("Core", NodeGroup.CORE),
            Node("F1"),
            Node("F2"),
            Node("F3"),
            Node("B1", NodeGroup.CITED_BY),
        ],
        edges=[
            Edge("Core", "F1"),
            Edge("Core", "F2"),
            Edge("Core", "F3"),
            Edge("B1", "Core"),
        ],
    )
