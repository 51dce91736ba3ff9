"""Tests for rings.py layout module."""

import math

import pytest

from notegraph.layout.rings import (
    assign_ring_positions,
    compute_radial_anchors,
    ring_angle,
    ring_radius,
)


def _polar(pos: tuple[float, float]) -> tuple[float, float]:
    x, y = pos
    return math.hypot(x, y), math.atan2(y, x) % (2 * math.pi)


class TestRingGeometry:
    """Tests for ring_radius and ring_angle."""

    def test_radius_symmetric(self):
        """Depth +k and -k share a radius."""
        assert ring_radius(2) == ring_radius(-2) == 200
        assert ring_radius(0) == 0

    def test_radius_custom_spacing(self):
        assert ring_radius(3, ring_spacing=40) == 120

    def test_radius_increases_with_depth(self):
        radii = [ring_radius(d) for d in range(5)]
        assert radii == sorted(radii)
        assert len(set(radii)) == len(radii)

    def test_negative_ring_half_step(self):
        """Negative rings are rotated by pi / n."""
        assert ring_angle(0, 4, 1) == 0
        assert ring_angle(0, 4, -1) == pytest.approx(math.pi / 4)
        assert ring_angle(1, 4, -1) == pytest.approx(math.pi / 2 + math.pi / 4)

    def test_empty_ring_count(self):
        """A count of zero is treated as one."""
        assert ring_angle(0, 0, 1) == 0
        assert ring_angle(0, 0, -1) == pytest.approx(math.pi)


class TestAssignRingPositions:
    """Tests for assign_ring_positions function."""

    def test_anchor_at_origin(self, core5):
        graph, _ = core5
        positions = compute_radial_anchors(graph)

        assert positions["Core"][0] == pytest.approx(0)
        assert positions["Core"][1] == pytest.approx(0)

    def test_core5_layout(self, core5):
        """F1/F2 are pi apart, B1/B2 are pi apart and offset by pi/2."""
        graph, _ = core5
        positions = compute_radial_anchors(graph)

        for node in ("F1", "F2", "B1", "B2"):
            radius, _ = _polar(positions[node])
            assert radius == pytest.approx(100)

        _, f1 = _polar(positions["F1"])
        _, f2 = _polar(positions["F2"])
        _, b1 = _polar(positions["B1"])
        _, b2 = _polar(positions["B2"])

        assert f1 == pytest.approx(0)
        assert f2 - f1 == pytest.approx(math.pi)
        assert b1 == pytest.approx(math.pi / 2)
        assert b2 - b1 == pytest.approx(math.pi)

    def test_even_angular_spacing(self, three_ring_graph):
        """Nodes on a ring of n are 2*pi/n apart."""
        positions = compute_radial_anchors(three_ring_graph)
        angles = [_polar(positions[n])[1] for n in ("F1", "F2", "F3")]

        assert angles[1] - angles[0] == pytest.approx(2 * math.pi / 3)
        assert angles[2] - angles[1] == pytest.approx(2 * math.pi / 3)

    def test_single_negative_node(self, three_ring_graph):
        """A lone backward node is rotated by pi."""
        positions = compute_radial_anchors(three_ring_graph)
        x, y = positions["B1"]

        assert x == pytest.approx(-100)
        assert y == pytest.approx(0, abs=1e-9)

    def test_radius_follows_depth(self, forward_chain):
        positions = compute_radial_anchors(forward_chain, ring_spacing=50)
        radii = {node: _polar(pos)[0] for node, pos in positions.items()}

        assert radii["A"] == pytest.approx(50)
        assert radii["B"] == pytest.approx(100)
        assert radii["C"] == pytest.approx(150)

    def test_unreachable_at_origin(self, disconnected_graph):
        """Unreachable nodes collapse onto the anchor position."""
        positions = compute_radial_anchors(disconnected_graph)

        assert positions["Z"] == pytest.approx((0, 0))
        assert positions["W"] == pytest.approx((0, 0))

    def test_covers_every_node(self, disconnected_graph):
        positions = compute_radial_anchors(disconnected_graph)
        assert set(positions) == set(disconnected_graph.node_ids())

    def test_bit_identical_reruns(self, diamond_graph):
        """Two passes over an unchanged acyclic snapshot match exactly."""
        first = compute_radial_anchors(diamond_graph)
        second = compute_radial_anchors(diamond_graph)

        assert first == second
        assert list(first) == list(second)

    def test_empty(self):
        assert assign_ring_positions({}) == {}

    @pytest.mark.parametrize("spacing", [0, -10])
    def test_invalid_spacing(self, spacing):
        with pytest.raises(ValueError, match="ring_spacing"):
            assign_ring_positions({0: ["Core"]}, ring_spacing=spacing)
