"""Geometry of diagram objects.

A geometry is either a plain box (``x``, ``y``, ``width``, ``height``) or,
for edges, the connective form carrying source, target and intermediate
points relative to the page.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..types import BoundingBox, FlipRotation, Point
from .style import Style, format_number

DEFAULT_BOX = BoundingBox(0.0, 0.0, 120.0, 60.0)


def _point_element(point: Point, as_attribute: Optional[str] = None) -> ET.Element:
    attrs = {"x": format_number(point[0]), "y": format_number(point[1])}
    if as_attribute:
        attrs["as"] = as_attribute
    return ET.Element("mxPoint", attrs)


def _read_point(element: ET.Element) -> Point:
    return (float(element.get("x", 0)), float(element.get("y", 0)))


@dataclass
class Geometry:
    box: BoundingBox = DEFAULT_BOX
    relative: Optional[bool] = None
    source_point: Optional[Point] = None
    target_point: Optional[Point] = None
    points: List[Point] = field(default_factory=list)
    flip_rotation: FlipRotation = field(default_factory=FlipRotation)

    @property
    def is_connective(self) -> bool:
        return self.source_point is not None and self.target_point is not None

    def map_points(self, func: Callable[[Point], Point]) -> None:
        """Replace every explicit point with ``func(point)``."""
        self.points = [func(p) for p in self.points]
        if self.target_point is not None:
            self.target_point = func(self.target_point)
        if self.source_point is not None:
            self.source_point = func(self.source_point)

    # ------------------------------------------------------------------
    # Style keys owned by the geometry
    # ------------------------------------------------------------------

    def apply_to_style(self, style: Style) -> None:
        fr = self.flip_rotation
        if fr.flip_h is not None:
            style.set("flipH", fr.flip_h)
        if fr.flip_v is not None:
            style.set("flipV", fr.flip_v)
        if fr.rotation is not None:
            style.set("rotation", fr.rotation)
        if fr.legacy_anchor_points is not None:
            style.set("legacyAnchorPoints", fr.legacy_anchor_points)

    def take_from_style(self, style: Style) -> None:
        """Move flip and rotation keys out of *style* into this geometry."""
        fr = self.flip_rotation
        value = style.pop("flipH")
        if value is not None:
            fr.flip_h = int(float(value))
        value = style.pop("flipV")
        if value is not None:
            fr.flip_v = int(float(value))
        value = style.pop("rotation")
        if value is not None:
            fr.rotation = float(value)
        value = style.pop("legacyAnchorPoints")
        if value is not None:
            fr.legacy_anchor_points = int(float(value))

    # ------------------------------------------------------------------
    # XML
    # ------------------------------------------------------------------

    def to_element(self) -> ET.Element:
        if self.is_connective:
            relative = True if self.relative is None else self.relative
            element = ET.Element(
                "mxGeometry",
                {
                    "width": format_number(self.box.width),
                    "height": format_number(self.box.height),
                    "relative": "1" if relative else "0",
                    "as": "geometry",
                },
            )
            element.append(_point_element(self.source_point, "sourcePoint"))
            element.append(_point_element(self.target_point, "targetPoint"))
            if self.points:
                array = ET.SubElement(element, "Array", {"as": "points"})
                for point in self.points:
                    array.append(_point_element(point))
            return element

        return ET.Element(
            "mxGeometry",
            {
                "x": format_number(self.box.min_x),
                "y": format_number(self.box.min_y),
                "width": format_number(self.box.width),
                "height": format_number(self.box.height),
                "as": "geometry",
            },
        )

    @classmethod
    def from_element(cls, element: ET.Element) -> Geometry:
        geometry = cls(
            box=BoundingBox(
                float(element.get("x", 0)),
                float(element.get("y", 0)),
                float(element.get("width", 0)),
                float(element.get("height", 0)),
            )
        )
        relative = element.get("relative")
        if relative is not None:
            geometry.relative = relative == "1"
        for child in element:
            if child.tag == "mxPoint":
                role = child.get("as")
                if role == "sourcePoint":
                    geometry.source_point = _read_point(child)
                elif role == "targetPoint":
                    geometry.target_point = _read_point(child)
            elif child.tag == "Array" and child.get("as") == "points":
                geometry.points = [_read_point(p) for p in child if p.tag == "mxPoint"]
        return geometry
