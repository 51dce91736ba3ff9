"""Edge curvature that bends links away from nodes they would pass through."""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from ..graph import Edge, to_id


@dataclass(frozen=True)
class CurvatureConfig:
    """Thresholds and magnitudes for edge bending."""

    min_segment_length: float = 2  # Shorter edges stay straight
    node_threshold: float = 18  # Max node-to-line distance that triggers bending
    edge_ignore_ratio: float = 0.18  # Ignored fraction at each end (arrowheads)
    base_curvature: float = 0.10
    distance_curvature: float = 0.06


def project_onto_segment(
    px: float,
    py: float,
    sx: float,
    sy: float,
    tx: float,
    ty: float,
) -> tuple[float, float]:
    """Project a point onto segment s -> t.

    Returns:
        (d2, b): squared distance from the point to the closest point of the
        segment, and that point's parameter along s -> t. ``b`` is 0 when the
        point lies behind s and 1 when it lies past t.
    """
    dx = tx - sx
    dy = ty - sy
    c1 = dx * (px - sx) + dy * (py - sy)
    if c1 <= 0:
        return (px - sx) ** 2 + (py - sy) ** 2, 0.0

    c2 = dx * dx + dy * dy
    if c2 <= c1:
        return (px - tx) ** 2 + (py - ty) ** 2, 1.0

    b = c1 / c2
    bx = sx + b * dx
    by = sy + b * dy
    return (px - bx) ** 2 + (py - by) ** 2, b


def compute_curvature(
    positions: Mapping[str, tuple[float, float]],
    source: str,
    target: str,
    config: CurvatureConfig = CurvatureConfig(),
) -> float:
    """Signed curvature for the edge source -> target.

    Only the first interfering node in ``positions`` order is considered,
    not the closest one. Positive values bend towards the side of the
    source -> target vector where the cross product is non-negative.

    Args:
        positions: Final node positions.
        source: Edge source id.
        target: Edge target id.
        config: Thresholds and magnitudes.

    Returns:
        0.0 for a straight edge, else ``(base + distance * tightness) * sign``.
    """
    s = positions.get(source)
    t = positions.get(target)
    if s is None or t is None:
        return 0.0

    sx, sy = s
    tx, ty = t
    dx = tx - sx
    dy = ty - sy
    if math.hypot(dx, dy) < config.min_segment_length:
        return 0.0

    thresh = config.node_threshold
    thresh2 = thresh * thresh
    low = config.edge_ignore_ratio
    high = 1 - config.edge_ignore_ratio

    for node_id, (x, y) in positions.items():
        if node_id == source or node_id == target:
            continue

        d2, b = project_onto_segment(x, y, sx, sy, tx, ty)
        if b <= low or b >= high:
            continue

        if d2 < thresh2:
            cross = dx * (y - sy) - dy * (x - sx)
            sign = 1 if cross >= 0 else -1
            tightness = max(0.0, 1 - math.sqrt(d2) / thresh)
            return (config.base_curvature + config.distance_curvature * tightness) * sign

    return 0.0


def _endpoints(link) -> tuple[str, str]:
    if isinstance(link, tuple):
        source, target = link
    else:
        source, target = link.source, link.target
    return to_id(source), to_id(target)


def make_curvature_accessor(
    positions: Mapping[str, tuple[float, float]],
    config: CurvatureConfig = CurvatureConfig(),
) -> Callable[[object], float]:
    """Return a per-edge curvature function bound to ``positions``.

    The returned callable accepts an Edge, any object with ``source`` and
    ``target`` attributes, or a (source, target) tuple.
    """
    # Snapshot so later changes to the caller's mapping do not leak in
    frozen = dict(positions)

    def curvature(link) -> float:
        source, target = _endpoints(link)
        return compute_curvature(frozen, source, target, config)

    return curvature


def compute_all_curvatures(
    positions: Mapping[str, tuple[float, float]],
    edges: Iterable[Edge],
    config: CurvatureConfig = CurvatureConfig(),
) -> list[tuple[Edge, float]]:
    """Curvature for every edge, in edge order."""
    curvature = make_curvature_accessor(positions, config)
    return [(edge, curvature(edge)) for edge in edges]
