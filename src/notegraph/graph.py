"""Graph snapshot model for note citation graphs."""

import json
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path

import networkx as nx

# Node whose id (case-insensitive) marks the centre of the radial layout
ANCHOR_NAME = "core"


class NodeGroup(IntEnum):
    """Role of a node relative to the anchor."""

    CORE = 1
    BASED_ON = 2  # forward reference
    CITED_BY = 3  # backward reference


class LinkType(str, Enum):
    """Known edge direction types."""

    FORWARD = "forward"
    BACKWARD = "backward"
    BASED_ON = "based-on"
    CITED_BY = "cited-by"


@dataclass(frozen=True)
class Node:
    """A note in the graph snapshot."""

    id: str
    group: int = NodeGroup.BASED_ON
    title: str | None = None
    position: tuple[float, float] | None = None  # Previously known coordinate

    @property
    def label(self) -> str:
        return self.title or self.id


@dataclass(frozen=True)
class Edge:
    """Directed reference from source to target."""

    source: str
    target: str
    type: str = LinkType.FORWARD.value


@dataclass
class NoteGraph:
    """Ordered snapshot of nodes and edges."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def get(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def valid_edges(self) -> list[Edge]:
        """Edges whose endpoints are both nodes of the snapshot."""
        known = set(self.node_ids())
        return [e for e in self.edges if e.source in known and e.target in known]

    def dangling_edges(self) -> list[Edge]:
        """Edges referring to at least one unknown node."""
        known = set(self.node_ids())
        return [e for e in self.edges if e.source not in known or e.target not in known]

    def to_digraph(self) -> nx.DiGraph:
        """Build a NetworkX DiGraph preserving snapshot order.

        Successors give the outgoing view and predecessors the incoming view
        used by the depth classifier. Dangling edges are left out.
        """
        G = nx.DiGraph()
        for node in self.nodes:
            G.add_node(node.id, group=node.group)
        for edge in self.valid_edges():
            G.add_edge(edge.source, edge.target, type=edge.type)
        return G


def find_anchor(graph: NoteGraph) -> str | None:
    """Return the anchor node id.

    The anchor is the node named ``core`` (any case), else the first node.

    Args:
        graph: Graph snapshot.

    Returns:
        Anchor id, or None for an empty graph.
    """
    for node in graph.nodes:
        if node.id.lower() == ANCHOR_NAME:
            return node.id
    if graph.nodes:
        return graph.nodes[0].id
    return None


def to_id(value) -> str:
    """Normalize a link endpoint that may be an id or a node object."""
    if isinstance(value, dict):
        return value["id"]
    if isinstance(value, Node):
        return value.id
    return value


def _parse_position(entry: dict) -> tuple[float, float] | None:
    x = entry.get("x")
    y = entry.get("y")
    if x is None or y is None:
        return None
    return (float(x), float(y))


def _entries(data: dict, key: str) -> list:
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise ValueError(f"'{key}' must be a list, got {type(entries).__name__}")
    return entries


def graph_from_dict(data: dict) -> NoteGraph:
    """Build a NoteGraph from a JSON-compatible dictionary.

    Args:
        data: Mapping with a ``nodes`` list and a ``links`` (or ``edges``) list.

    Returns:
        The parsed graph snapshot.

    Raises:
        ValueError: If the snapshot is not an object, or a node or link entry
            is not an object or is missing a required key.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Graph snapshot must be a JSON object, got {type(data).__name__}")

    graph = NoteGraph()

    for entry in _entries(data, "nodes"):
        if not isinstance(entry, dict):
            raise ValueError(f"Node entry must be an object: {entry!r}")
        if "id" not in entry:
            raise ValueError(f"Node entry without 'id': {entry!r}")
        graph.nodes.append(
            Node(
                id=str(entry["id"]),
                group=int(entry.get("group", NodeGroup.BASED_ON)),
                title=entry.get("title"),
                position=_parse_position(entry),
            )
        )

    for entry in _entries(data, "links" if "links" in data else "edges"):
        if not isinstance(entry, dict):
            raise ValueError(f"Link entry must be an object: {entry!r}")
        if "source" not in entry or "target" not in entry:
            raise ValueError(f"Link entry without 'source'/'target': {entry!r}")
        graph.edges.append(
            Edge(
                source=str(to_id(entry["source"])),
                target=str(to_id(entry["target"])),
                type=entry.get("type", LinkType.FORWARD.value),
            )
        )

    return graph


def load_graph(path: Path) -> tuple[NoteGraph, list[str] | None]:
    """Load a graph snapshot from a JSON file.

    Args:
        path: Path to the JSON snapshot.

    Returns:
        Tuple of (graph, locked_ids). locked_ids is None when the file has no
        ``lockedIds`` entry.

    Raises:
        ValueError: If the file is not valid JSON or not a graph snapshot.
    """
    with open(path) as f:
        data = json.load(f)
    graph = graph_from_dict(data)

    locked = data.get("lockedIds")
    if locked is not None and not isinstance(locked, list):
        raise ValueError(f"'lockedIds' must be a list, got {type(locked).__name__}")
    return graph, ([str(node_id) for node_id in locked] if locked is not None else None)


def load_positions(path: Path) -> dict[str, tuple[float, float]]:
    """Load persisted free-form positions (id -> {"x", "y"}) from JSON."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Positions file must be a JSON object, got {type(data).__name__}")

    positions: dict[str, tuple[float, float]] = {}
    for node_id, entry in data.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Position for {node_id!r} must be an object: {entry!r}")
        pos = _parse_position(entry)
        if pos is not None:
            positions[node_id] = pos
    return positions


def seed_graph() -> tuple[NoteGraph, set[str]]:
    """Starter snapshot: Core with two forward and two backward references.

    Returns:
        Tuple of (graph, locked_ids); all five nodes are locked to their rings.
    """
    graph = NoteGraph(
        nodes=[
            Node("Core", NodeGroup.CORE, "Core Paper"),
            Node("F1", NodeGroup.BASED_ON, "Later uses Core"),
            Node("F2", NodeGroup.BASED_ON, "Later uses Core"),
            Node("B1", NodeGroup.CITED_BY, "Prior work 1"),
            Node("B2", NodeGroup.CITED_BY, "Prior work 2"),
        ],
        edges=[
            Edge("Core", "F1", LinkType.FORWARD.value),
            Edge("Core", "F2", LinkType.FORWARD.value),
            Edge("B1", "Core", LinkType.BACKWARD.value),
            Edge("B2", "Core", LinkType.BACKWARD.value),
        ],
    )
    return graph, {node.id for node in graph.nodes}
