"""Text justification for labels.

A :class:`Justify` pairs a horizontal and a vertical anchor. Schematic
documents spell the nine combinations as ``upperLeft`` .. ``lowerRight``;
diagram styles spell the parts as ``align`` / ``verticalAlign``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class JustifyX(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def mirrored(self) -> JustifyX:
        """Swap left and right; centre is unchanged."""
        if self is JustifyX.LEFT:
            return JustifyX.RIGHT
        if self is JustifyX.RIGHT:
            return JustifyX.LEFT
        return self


class JustifyY(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


_ROW_NAMES = {
    "upper": JustifyY.TOP,
    "center": JustifyY.MIDDLE,
    "lower": JustifyY.BOTTOM,
}

_COLUMN_NAMES = {
    "Left": JustifyX.LEFT,
    "Center": JustifyX.CENTER,
    "Right": JustifyX.RIGHT,
}


@dataclass(frozen=True)
class Justify:
    """Anchor of a text label relative to its reference point."""

    x: JustifyX = JustifyX.CENTER
    y: JustifyY = JustifyY.MIDDLE

    @classmethod
    def from_name(cls, name: str) -> Justify:
        """Parse a schematic justification name such as ``lowerLeft``.

        Raises:
            ValueError: If *name* is not one of the nine combinations.
        """
        for row, y in _ROW_NAMES.items():
            if name.startswith(row):
                column = name[len(row) :]
                if column in _COLUMN_NAMES:
                    return cls(_COLUMN_NAMES[column], y)
        raise ValueError(f"Unknown justification: {name!r}")

    @property
    def name(self) -> str:
        row = next(k for k, v in _ROW_NAMES.items() if v is self.y)
        column = next(k for k, v in _COLUMN_NAMES.items() if v is self.x)
        return row + column

    def __str__(self) -> str:
        return self.name
