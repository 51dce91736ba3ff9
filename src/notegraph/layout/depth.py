"""Bidirectional BFS depth assignment around the anchor node."""

from collections import deque
from dataclasses import dataclass, field

import networkx as nx

from ..graph import NoteGraph, find_anchor


def _bfs(
    G: nx.DiGraph,
    anchor: str,
    node_to_depth: dict[str, int],
    forward: bool,
) -> None:
    """Assign depths along one edge direction, never revisiting assigned nodes."""
    neighbors = G.successors if forward else G.predecessors
    step = 1 if forward else -1
    queue: deque[str] = deque([anchor])

    while queue:
        node = queue.popleft()
        depth = node_to_depth[node]
        for nxt in neighbors(node):
            if nxt not in node_to_depth:
                node_to_depth[nxt] = depth + step
                queue.append(nxt)


def _assign(graph: NoteGraph, anchor: str | None) -> tuple[dict[str, int], list[str]]:
    if anchor is None:
        anchor = find_anchor(graph)
    if anchor is None:
        return {}, []

    G = graph.to_digraph()
    if anchor not in G:
        # Unknown anchor: nothing is reachable
        return {}, graph.node_ids()

    node_to_depth: dict[str, int] = {anchor: 0}
    # Forward pass first; on cycles a node seen here keeps its positive depth
    _bfs(G, anchor, node_to_depth, forward=True)
    _bfs(G, anchor, node_to_depth, forward=False)

    unreachable = [node_id for node_id in G.nodes if node_id not in node_to_depth]
    return node_to_depth, unreachable


@dataclass
class DepthClassification:
    """Depths for one snapshot, plus the nodes no BFS pass reached."""

    nodes_by_depth: dict[int, list[str]] = field(default_factory=dict)
    node_to_depth: dict[str, int] = field(default_factory=dict)
    unreachable: list[str] = field(default_factory=list)


def classify_depths(graph: NoteGraph, anchor: str | None = None) -> DepthClassification:
    """Signed BFS depth assignment.

    Following an edge forward (source -> target) adds one to the depth,
    following it backward subtracts one. The first pass to reach a node wins.
    Nodes that neither pass reaches sit at depth 0 with the anchor.

    Args:
        graph: Graph snapshot.
        anchor: Anchor node id. Defaults to ``find_anchor(graph)``.

    Returns:
        DepthClassification whose ``nodes_by_depth`` lists node ids in ring
        order (first assignment order, then unreachable nodes in snapshot
        order) and whose ``node_to_depth`` covers every node.
    """
    node_to_depth, unreachable = _assign(graph, anchor)
    for node_id in unreachable:
        node_to_depth[node_id] = 0

    # Group nodes by depth
    grouped: dict[int, list[str]] = {}
    for node_id, depth in node_to_depth.items():
        if depth not in grouped:
            grouped[depth] = []
        grouped[depth].append(node_id)

    return DepthClassification(
        nodes_by_depth={depth: grouped[depth] for depth in sorted(grouped)},
        node_to_depth=node_to_depth,
        unreachable=unreachable,
    )


def compute_depths(
    graph: NoteGraph,
    anchor: str | None = None,
) -> tuple[dict[int, list[str]], dict[str, int]]:
    """Return ``(nodes_by_depth, node_to_depth)``; see classify_depths."""
    depths = classify_depths(graph, anchor)
    return depths.nodes_by_depth, depths.node_to_depth


def find_unreachable(graph: NoteGraph, anchor: str | None = None) -> list[str]:
    """Return nodes that no forward or backward path connects to the anchor."""
    _, unreachable = _assign(graph, anchor)
    return unreachable
