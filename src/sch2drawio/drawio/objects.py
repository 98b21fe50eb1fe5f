"""Diagram objects: structural cells, vertices and edges.

All three share an id, a parent id, a value (label text), a style and an
optional tag. Tagged objects are written as ``UserObject`` wrappers so the
tag is visible in draw.io's "Edit Data" dialog; untagged objects are
plain ``mxCell`` elements.
"""

from __future__ import annotations

import copy
import json
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional

from ..types import Point
from .geometry import Geometry
from .style import Style, format_number
from .text import Justify, JustifyX, JustifyY

LAYER_PREFIX = "layer-"


def new_id() -> str:
    return uuid.uuid4().hex[:20]


@dataclass
class DiagramObject:
    id: str = field(default_factory=new_id)
    parent: Optional[str] = "1"
    value: str = ""
    style: Style = field(default_factory=Style)
    tag: Optional[str] = None

    @property
    def is_layer_bound(self) -> bool:
        """Whether the object sits directly on a generated layer."""
        return self.parent is not None and self.parent.startswith(LAYER_PREFIX)

    def clone(self):
        return copy.deepcopy(self)

    def style_string(self) -> str:
        return self.style.to_string()

    # Subclasses fill in the mxCell kind flag and children
    def _cell_attributes(self) -> dict:
        return {}

    def _cell_children(self) -> List[ET.Element]:
        return []

    def to_element(self) -> ET.Element:
        style = self.style_string()
        if self.tag is not None:
            wrapper = ET.Element(
                "UserObject", {"label": self.value, "tags": self.tag, "id": self.id}
            )
            attrs = {}
            if style:
                attrs["style"] = style
            attrs.update(self._cell_attributes())
            if self.parent is not None:
                attrs["parent"] = self.parent
            cell = ET.SubElement(wrapper, "mxCell", attrs)
            cell.extend(self._cell_children())
            return wrapper

        attrs = {"id": self.id}
        if self.value:
            attrs["value"] = self.value
        if style:
            attrs["style"] = style
        attrs.update(self._cell_attributes())
        if self.parent is not None:
            attrs["parent"] = self.parent
        cell = ET.Element("mxCell", attrs)
        cell.extend(self._cell_children())
        return cell


@dataclass
class Cell(DiagramObject):
    """Structural bookkeeping cell: the page root, a layer, or a group.

    Attributes:
        visible: Layer visibility; ``None`` leaves the attribute out.
        geometry: Present on group cells only.
    """

    visible: Optional[bool] = None
    geometry: Optional[Geometry] = None
    vertex: bool = False

    def _cell_attributes(self) -> dict:
        attrs = {}
        if self.vertex:
            attrs["vertex"] = "1"
        if self.visible is not None:
            attrs["visible"] = "1" if self.visible else "0"
        return attrs

    def _cell_children(self) -> List[ET.Element]:
        return [self.geometry.to_element()] if self.geometry is not None else []


def _vertex_style() -> Style:
    return Style(white_space="wrap", html=1)


@dataclass
class Vertex(DiagramObject):
    """Box-shaped object: rectangles, ellipses, polygons and text.

    Attributes:
        poly_coords: Polygon corners normalized to the box, ``[0, 1]`` on
            each axis. Written as the ``polyCoords`` style key.
    """

    style: Style = field(default_factory=_vertex_style)
    geometry: Geometry = field(default_factory=Geometry)
    poly_coords: List[Point] = field(default_factory=list)

    @property
    def justify(self) -> Optional[Justify]:
        if self.style.align is None and self.style.vertical_align is None:
            return None
        return Justify(
            JustifyX(self.style.align or JustifyX.CENTER.value),
            JustifyY(self.style.vertical_align or JustifyY.MIDDLE.value),
        )

    @justify.setter
    def justify(self, justify: Optional[Justify]) -> None:
        if justify is None:
            self.style.align = None
            self.style.vertical_align = None
        else:
            self.style.align = justify.x.value
            self.style.vertical_align = justify.y.value

    def style_string(self) -> str:
        style = self.style.copy()
        self.geometry.apply_to_style(style)
        if self.poly_coords:
            coords = ",".join(
                f"[{format_number(x)},{format_number(y)}]" for x, y in self.poly_coords
            )
            style.set("polyCoords", f"[{coords}]")
        return style.to_string()

    def take_poly_coords(self) -> None:
        """Move a parsed ``polyCoords`` style key into :attr:`poly_coords`."""
        raw = self.style.pop("polyCoords")
        if raw:
            self.poly_coords = [(float(x), float(y)) for x, y in json.loads(raw)]

    def _cell_attributes(self) -> dict:
        return {"vertex": "1"}

    def _cell_children(self) -> List[ET.Element]:
        return [self.geometry.to_element()]


def _edge_style() -> Style:
    return Style(rounded=0, end_arrow="none")


@dataclass
class Edge(DiagramObject):
    """Connective object drawn from a source point to a target point."""

    style: Style = field(default_factory=_edge_style)
    geometry: Geometry = field(default_factory=Geometry)

    def style_string(self) -> str:
        style = self.style.copy()
        self.geometry.apply_to_style(style)
        return style.to_string()

    def _cell_attributes(self) -> dict:
        return {"edge": "1"}

    def _cell_children(self) -> List[ET.Element]:
        return [self.geometry.to_element()]
