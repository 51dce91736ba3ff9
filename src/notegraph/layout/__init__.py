"""Radial layout for note citation graphs.

Nodes sit on concentric rings by signed depth around the anchor, free nodes
are placed near a parent with a spatial hash, and edges bend around nodes
they would otherwise cross.
"""

from .curvature import (
    CurvatureConfig,
    compute_all_curvatures,
    compute_curvature,
    make_curvature_accessor,
)
from .depth import DepthClassification, classify_depths, compute_depths, find_unreachable
from .pipeline import LayoutResult, compute_layout
from .placement import (
    Placement,
    PlacementConfig,
    choose_parent,
    make_rng,
    place_near,
    resolve_parent_position,
)
from .rings import RING_SPACING, assign_ring_positions, compute_radial_anchors
from .spatial import SpatialHashIndex

__all__ = [
    "DepthClassification",
    "classify_depths",
    "compute_depths",
    "find_unreachable",
    "RING_SPACING",
    "assign_ring_positions",
    "compute_radial_anchors",
    "SpatialHashIndex",
    "Placement",
    "PlacementConfig",
    "choose_parent",
    "make_rng",
    "place_near",
    "resolve_parent_position",
    "CurvatureConfig",
    "compute_curvature",
    "compute_all_curvatures",
    "make_curvature_accessor",
    "LayoutResult",
    "compute_layout",
]
