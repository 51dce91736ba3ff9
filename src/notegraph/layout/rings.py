"""Concentric ring positions derived from signed depths."""

import math

from ..graph import NoteGraph
from .depth import compute_depths

# Distance between consecutive rings
RING_SPACING = 100.0


def ring_radius(depth: int, ring_spacing: float = RING_SPACING) -> float:
    """Radius of the ring for ``depth``; depths +k and -k share a radius."""
    return abs(depth) * ring_spacing


def ring_angle(index: int, count: int, depth: int) -> float:
    """Angle of the ``index``-th node on a ring of ``count`` nodes.

    Negative rings are rotated by half a step so they never share an
    angular column with the non-negative ring of the same radius.
    """
    count = max(1, count)
    angle = 2 * math.pi * index / count
    if depth < 0:
        angle += math.pi / count
    return angle


def assign_ring_positions(
    nodes_by_depth: dict[int, list[str]],
    ring_spacing: float = RING_SPACING,
) -> dict[str, tuple[float, float]]:
    """Place every node on the circle for its depth.

    Args:
        nodes_by_depth: depth -> node ids in ring order.
        ring_spacing: Radius increment per depth level.

    Returns:
        Dictionary mapping node id to (x, y). The depth-0 ring collapses onto
        the origin.

    Raises:
        ValueError: If ring_spacing is not positive.
    """
    if ring_spacing <= 0:
        raise ValueError(f"ring_spacing must be positive, got {ring_spacing!r}")

    positions: dict[str, tuple[float, float]] = {}
    for depth in sorted(nodes_by_depth.keys()):
        ring = nodes_by_depth[depth]
        radius = ring_radius(depth, ring_spacing)
        for i, node_id in enumerate(ring):
            angle = ring_angle(i, len(ring), depth)
            positions[node_id] = (radius * math.cos(angle), radius * math.sin(angle))

    return positions


def compute_radial_anchors(
    graph: NoteGraph,
    anchor: str | None = None,
    ring_spacing: float = RING_SPACING,
) -> dict[str, tuple[float, float]]:
    """Depth classification followed by ring assignment for a whole snapshot."""
    nodes_by_depth, _ = compute_depths(graph, anchor)
    return assign_ring_positions(nodes_by_depth, ring_spacing)
