"""Instance orientations."""

from __future__ import annotations

from enum import Enum


class Orient(str, Enum):
    """The eight rigid placements a schematic instance can carry.

    Rotations are counterclockwise in schematic space. ``MY`` mirrors
    across the Y axis (negates X), ``MX`` across the X axis.
    """

    R0 = "R0"
    R90 = "R90"
    R180 = "R180"
    R270 = "R270"
    MY = "MY"
    MX = "MX"
    MYR90 = "MYR90"
    MXR90 = "MXR90"

    def __str__(self) -> str:
        return self.value
