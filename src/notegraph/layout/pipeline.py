"""Full layout pass: ring anchors, persisted positions and solver placement."""

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field

from ..graph import NoteGraph, find_anchor
from .depth import classify_depths
from .placement import (
    Placement,
    PlacementConfig,
    RandomSource,
    choose_parent,
    has_fixed_position,
    make_rng,
    place_near,
    resolve_parent_position,
)
from .rings import RING_SPACING, assign_ring_positions
from .spatial import DEFAULT_CELL_SIZE, SpatialHashIndex


@dataclass
class LayoutResult:
    """Positions for one graph snapshot plus diagnostics."""

    anchor: str | None = None
    positions: dict[str, tuple[float, float]] = field(default_factory=dict)
    depths: dict[str, int] = field(default_factory=dict)
    anchors: dict[str, tuple[float, float]] = field(default_factory=dict)  # Ring positions
    placements: dict[str, Placement] = field(default_factory=dict)  # Solver-placed nodes
    warnings: list[str] = field(default_factory=list)


def compute_layout(
    graph: NoteGraph,
    locked_ids: Collection[str] = (),
    saved_positions: Mapping[str, tuple[float, float]] | None = None,
    rng: RandomSource | None = None,
    ring_spacing: float = RING_SPACING,
    placement: PlacementConfig = PlacementConfig(),
    cell_size: float = DEFAULT_CELL_SIZE,
) -> LayoutResult:
    """Rebuild the complete Position Map for a graph snapshot.

    Locked nodes take their ring anchor, other nodes take their persisted
    position, then their known position. Whatever is left is placed near its
    parent by the solver, in snapshot order, each accepted point joining the
    index before the next node is placed. Inputs are never modified.

    Args:
        graph: Graph snapshot.
        locked_ids: Nodes whose position comes from the ring assigner.
        saved_positions: Persisted free-form positions (read-only).
        rng: Random source for the solver. Defaults to an unseeded one.
        ring_spacing: Radius increment per depth level.
        placement: Solver sampling parameters.
        cell_size: Spatial index cell size.

    Returns:
        LayoutResult with positions in snapshot order.
    """
    saved_positions = saved_positions or {}
    locked = set(locked_ids)
    index = SpatialHashIndex(cell_size)
    if rng is None:
        rng = make_rng()

    result = LayoutResult(anchor=find_anchor(graph))

    depths = classify_depths(graph, result.anchor)
    result.depths = depths.node_to_depth
    result.anchors = assign_ring_positions(depths.nodes_by_depth, ring_spacing)

    for node_id in depths.unreachable:
        result.warnings.append(
            f"Node {node_id!r} is not connected to anchor {result.anchor!r}; "
            "placed on the anchor ring"
        )
    for edge in graph.dangling_edges():
        result.warnings.append(f"Ignoring edge {edge.source!r} -> {edge.target!r}: unknown node")
    known_ids = set(graph.node_ids())
    for node_id in sorted(locked - known_ids):
        result.warnings.append(f"Locked node {node_id!r} is not in the graph")

    # Finalized positions seed the index
    fixed: dict[str, tuple[float, float]] = {}
    known: dict[str, tuple[float, float]] = {}
    for node in graph.nodes:
        if node.id in locked:
            fixed[node.id] = result.anchors[node.id]
        elif node.id in saved_positions:
            fixed[node.id] = tuple(saved_positions[node.id])
        elif node.position is not None:
            fixed[node.id] = node.position
            known[node.id] = node.position
    for node_id, (x, y) in fixed.items():
        index.insert(x, y, node_id)

    edges = graph.valid_edges()
    for node in graph.nodes:
        if has_fixed_position(node, locked, saved_positions):
            continue
        parent_id = choose_parent(node.id, edges)
        parent_xy = resolve_parent_position(
            parent_id, locked, result.anchors, saved_positions, known
        )
        placed = place_near(parent_xy, index, rng, placement)
        if not placed.found:
            result.warnings.append(
                f"No free spot for {node.id!r} after {placed.attempts} attempts; "
                f"placed at distance {placed.distance:g} from {parent_id!r}"
            )
        result.placements[node.id] = placed
        known[node.id] = placed.position
        index.insert(placed.x, placed.y, node.id)

    for node in graph.nodes:
        if node.id in fixed:
            result.positions[node.id] = fixed[node.id]
        else:
            result.positions[node.id] = result.placements[node.id].position

    return result
