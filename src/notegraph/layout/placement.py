"""Collision-avoiding placement of free nodes near a parent node.

Candidates are sampled on an annulus around the parent. Each attempt adds a
fixed rotation to a fresh random base angle so successive attempts sweep the
neighbourhood. When every attempt collides, a fallback point further out is
returned anyway: a slightly overlapping node is preferred to no node.
"""

from __future__ import annotations

import math
import random
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

from ..graph import Edge, Node
from .spatial import SpatialHashIndex

ORIGIN = (0.0, 0.0)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float: ...


def make_rng(seed: int | None = None) -> random.Random:
    """Return a seeded random source (unseeded when ``seed`` is None)."""
    return random.Random(seed)


@dataclass(frozen=True)
class PlacementConfig:
    """Sampling parameters for placing a node around its parent."""

    min_distance: float = 20
    max_distance: float = 30
    min_node_gap: float = 25
    max_attempts: int = 12
    fallback_offset: float = 10
    angle_step: float = math.pi / 6

    def __post_init__(self) -> None:
        finite = ("min_distance", "max_distance", "min_node_gap", "fallback_offset", "angle_step")
        for name in finite:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
        if self.min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {self.min_distance!r}")
        if self.max_distance < self.min_distance:
            raise ValueError(
                f"max_distance ({self.max_distance!r}) must be >= min_distance "
                f"({self.min_distance!r})"
            )
        if self.min_node_gap < 0:
            raise ValueError(f"min_node_gap must be >= 0, got {self.min_node_gap!r}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts!r}")

    @property
    def fallback_distance(self) -> float:
        return self.max_distance + self.fallback_offset


@dataclass(frozen=True)
class Placement:
    """Outcome of placing one node."""

    x: float
    y: float
    found: bool  # False when the fallback point was used
    attempts: int
    distance: float  # From the parent

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


def place_near(
    parent: tuple[float, float],
    index: SpatialHashIndex,
    rng: RandomSource,
    config: PlacementConfig = PlacementConfig(),
) -> Placement:
    """Find a position near ``parent`` that keeps ``min_node_gap`` to indexed points.

    The accepted point is not inserted into ``index``; that is the caller's job.

    Args:
        parent: Parent (x, y).
        index: Spatial index seeded with every finalized position.
        rng: Random source for distances and angles.
        config: Sampling parameters.

    Returns:
        The first collision-free candidate, or the fallback point with
        ``found=False`` once ``max_attempts`` candidates have collided.
    """
    px, py = parent
    span = config.max_distance - config.min_distance

    for attempt in range(config.max_attempts):
        dist = config.min_distance + rng.random() * span
        base_angle = rng.random() * 2 * math.pi
        angle = base_angle + attempt * config.angle_step

        x = px + dist * math.cos(angle)
        y = py + dist * math.sin(angle)
        if not index.has_collision(x, y, config.min_node_gap):
            return Placement(x, y, found=True, attempts=attempt + 1, distance=dist)

    dist = config.fallback_distance
    angle = rng.random() * 2 * math.pi
    return Placement(
        px + dist * math.cos(angle),
        py + dist * math.sin(angle),
        found=False,
        attempts=config.max_attempts,
        distance=dist,
    )


def choose_parent(node_id: str, edges: Iterable[Edge]) -> str | None:
    """Other endpoint of the first edge touching ``node_id``, in either direction."""
    for edge in edges:
        if edge.target == node_id and edge.source != node_id:
            return edge.source
        if edge.source == node_id and edge.target != node_id:
            return edge.target
    return None


def resolve_parent_position(
    parent_id: str | None,
    locked_ids: Collection[str],
    anchors: Mapping[str, tuple[float, float]],
    saved_positions: Mapping[str, tuple[float, float]],
    known_positions: Mapping[str, tuple[float, float]],
) -> tuple[float, float]:
    """Parent coordinate: ring anchor if locked, else persisted, else known, else origin."""
    if parent_id is None:
        return ORIGIN
    if parent_id in locked_ids:
        return anchors.get(parent_id, ORIGIN)
    if parent_id in saved_positions:
        return saved_positions[parent_id]
    if parent_id in known_positions:
        return known_positions[parent_id]
    return ORIGIN


def has_fixed_position(
    node: Node,
    locked_ids: Collection[str],
    saved_positions: Mapping[str, tuple[float, float]],
) -> bool:
    """True if the node's position does not come from the placement solver."""
    return node.id in locked_ids or node.id in saved_positions or node.position is not None
