"""Geometry for note citation graphs: depth rings, node placement and edge curvature."""

__version__ = "0.1.0"
