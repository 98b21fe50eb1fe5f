"""Geometric value types shared by the merge, transform and render layers.

Points are plain ``(x, y)`` float tuples compared with exact equality:
fragments of one wire originate from the same schematic grid, so two
endpoints are either bit-identical or not connected at all.

Example::

    from sch2drawio.types import BoundingBox

    a = BoundingBox(0, 0, 10, 5)
    b = BoundingBox(20, -5, 2, 2)
    BoundingBox.union([a, b])   # BoundingBox(0, -5, 22, 10)
    BoundingBox.union([])       # None
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box stored as ``(min_x, min_y, width, height)``.

    Values are stored exactly as given. Callers computing a box from two
    corners must normalize first (``abs()`` of the extents).
    """

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    @property
    def center(self) -> Point:
        return (self.min_x + self.width / 2.0, self.min_y + self.height / 2.0)

    # ------------------------------------------------------------------
    # Derived boxes
    # ------------------------------------------------------------------

    @staticmethod
    def union(boxes: Iterable[BoundingBox]) -> Optional[BoundingBox]:
        """Smallest box containing every box in *boxes*.

        Single pass over the input. Returns ``None`` for an empty input.
        """
        min_x = math.inf
        min_y = math.inf
        max_x = -math.inf
        max_y = -math.inf
        seen = False

        for box in boxes:
            seen = True
            min_x = min(min_x, box.min_x)
            min_y = min(min_y, box.min_y)
            max_x = max(max_x, box.max_x)
            max_y = max(max_y, box.max_y)

        if not seen:
            return None
        return BoundingBox(min_x, min_y, max_x - min_x, max_y - min_y)

    def scaled_about_center(self, factor: float) -> BoundingBox:
        """Scale width and height by *factor* keeping the centre fixed."""
        cx, cy = self.center
        width = self.width * factor
        height = self.height * factor
        return BoundingBox(cx - width / 2.0, cy - height / 2.0, width, height)


@dataclass
class FlipRotation:
    """Flip and rotation state attached to a rendered object's geometry.

    Every field is optional; unset fields are omitted from the style string.
    Only the orientation transform mutates this.
    """

    flip_h: Optional[int] = None
    flip_v: Optional[int] = None
    legacy_anchor_points: Optional[int] = None
    rotation: Optional[float] = None
