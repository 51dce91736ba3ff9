"""Uniform-grid spatial hash for proximity queries during placement."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Roughly twice the default minimum node gap
DEFAULT_CELL_SIZE = 50.0


@dataclass(frozen=True)
class IndexedPoint:
    """A point registered in the index."""

    x: float
    y: float
    payload: Any = None


class SpatialHashIndex:
    """Point index bucketed into square cells of side ``cell_size``.

    Queries return every point in the cells covering the search radius,
    which is a superset of the points actually within that radius. Build a
    fresh index per layout pass; it is not thread-safe.
    """

    def __init__(self, cell_size: float = DEFAULT_CELL_SIZE):
        if not math.isfinite(cell_size) or cell_size <= 0:
            raise ValueError(f"cell_size must be a positive finite number, got {cell_size!r}")
        self.cell_size = float(cell_size)
        self._cells: dict[tuple[int, int], list[IndexedPoint]] = {}
        self._count = 0

    @classmethod
    def from_positions(
        cls,
        positions: Mapping[str, tuple[float, float]],
        cell_size: float = DEFAULT_CELL_SIZE,
    ) -> "SpatialHashIndex":
        """Build an index holding every position, with the node id as payload."""
        index = cls(cell_size)
        for node_id, (x, y) in positions.items():
            index.insert(x, y, node_id)
        return index

    def __len__(self) -> int:
        return self._count

    def cell_key(self, x: float, y: float) -> tuple[int, int]:
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def insert(self, x: float, y: float, payload: Any = None) -> None:
        key = self.cell_key(x, y)
        if key not in self._cells:
            self._cells[key] = []
        self._cells[key].append(IndexedPoint(x, y, payload))
        self._count += 1

    def query(self, x: float, y: float, radius: float) -> list[IndexedPoint]:
        """Return candidate points near (x, y).

        Scans ``ceil(radius / cell_size)`` cells in every direction around the
        query cell. Callers must still apply an exact distance test.
        """
        cell_radius = math.ceil(max(radius, 0.0) / self.cell_size)
        cx, cy = self.cell_key(x, y)

        nearby: list[IndexedPoint] = []
        for dx in range(-cell_radius, cell_radius + 1):
            for dy in range(-cell_radius, cell_radius + 1):
                cell = self._cells.get((cx + dx, cy + dy))
                if cell:
                    nearby.extend(cell)
        return nearby

    def has_collision(self, x: float, y: float, min_gap: float) -> bool:
        """True if any registered point lies strictly closer than ``min_gap``."""
        for point in self.query(x, y, min_gap):
            if math.hypot(x - point.x, y - point.y) < min_gap:
                return True
        return False
