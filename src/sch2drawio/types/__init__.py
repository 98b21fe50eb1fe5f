"""Geometric value types for sch2drawio.

Points, bounding boxes, the flip/rotation state carried by rendered
geometry, and instance orientations.
"""

from __future__ import annotations

from .geometry import BoundingBox, FlipRotation, Point
from .orient import Orient

__all__ = ["BoundingBox", "FlipRotation", "Orient", "Point"]
