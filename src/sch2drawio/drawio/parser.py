"""Read drawio files back into diagram objects.

Used to instantiate pre-rendered symbols into a schematic and to restyle
a symbol library. Only what this package writes needs to round-trip, but
payloads compressed by draw.io itself (base64 + raw deflate + URL quoting)
are decoded too.

Example::

    from sch2drawio.drawio import parse_drawio

    pages = parse_drawio(Path("symbols/analogLib/res.drawio").read_text())
    page = pages["analogLib/res"]
    page.objects[0].id           # "analogLib/res-device-0"
    page.origin_bounding_box     # union of all vertex boxes
"""

from __future__ import annotations

import base64
import binascii
import logging
import urllib.parse
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..exceptions import FileFormatError
from ..types import BoundingBox
from .geometry import Geometry
from .objects import Cell, DiagramObject, Edge, Vertex
from .style import Style

logger = logging.getLogger(__name__)


@dataclass
class SymbolPage:
    """Objects of one page plus the union of its vertex boxes."""

    objects: List[DiagramObject] = field(default_factory=list)
    origin_bounding_box: BoundingBox = BoundingBox(0.0, 0.0, 0.0, 0.0)


def decode_diagram(text: str) -> str:
    """Return the ``mxGraphModel`` XML held by a ``diagram`` element's text.

    Raises:
        FileFormatError: If the payload is neither plain nor compressed XML.
    """
    payload = text.strip()
    if "<mxGraphModel" in payload:
        return payload
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FileFormatError(f"Diagram payload is not base64: {e}") from e

    inflated: Optional[bytes] = None
    for wbits in (-15, 15, 31):
        try:
            inflated = zlib.decompress(raw, wbits=wbits)
            break
        except zlib.error:
            continue
    if inflated is None:
        raise FileFormatError("Failed to decompress diagram payload")

    try:
        decoded = urllib.parse.unquote(inflated.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise FileFormatError(f"Diagram payload is not UTF-8: {e}") from e
    if "<mxGraphModel" not in decoded:
        raise FileFormatError("Decoded diagram payload has no mxGraphModel")
    return decoded


def _graph_model(diagram: ET.Element) -> Optional[ET.Element]:
    model = diagram.find("mxGraphModel")
    if model is not None:
        return model
    if diagram.text and diagram.text.strip():
        try:
            return ET.fromstring(decode_diagram(diagram.text))
        except ET.ParseError as e:
            raise FileFormatError(f"Invalid diagram payload: {e}") from e
    return None


def _read_object(element: ET.Element) -> Optional[DiagramObject]:
    """Build an object from an ``mxCell`` or ``UserObject`` element."""
    if element.tag == "mxCell":
        cell = element
        object_id = element.get("id", "")
        value = element.get("value", "")
        tag = None
    elif element.tag in ("UserObject", "object"):
        cell = element.find("mxCell")
        if cell is None:
            return None
        object_id = element.get("id", "")
        value = element.get("label", "")
        tag = element.get("tags")
    else:
        return None

    parent = cell.get("parent")
    # Root and layer declarations are rebuilt by whoever writes the page
    if object_id == "0" or parent is None or parent == "0":
        return None

    style = Style.parse(cell.get("style"))
    geometry_element = cell.find("mxGeometry")
    geometry = (
        Geometry.from_element(geometry_element) if geometry_element is not None else None
    )

    if cell.get("edge") == "1":
        edge = Edge(id=object_id, parent=parent, value=value, style=style, tag=tag)
        edge.geometry = geometry or Geometry()
        edge.geometry.take_from_style(style)
        return edge

    if cell.get("vertex") == "1" and style.base != "group":
        vertex = Vertex(id=object_id, parent=parent, value=value, style=style, tag=tag)
        vertex.geometry = geometry or Geometry()
        vertex.geometry.take_from_style(style)
        vertex.take_poly_coords()
        # Unknown align values fail here rather than at instantiation
        _ = vertex.justify
        return vertex

    return Cell(
        id=object_id,
        parent=parent,
        value=value,
        style=style,
        tag=tag,
        geometry=geometry,
        vertex=cell.get("vertex") == "1",
    )


def parse_drawio(content: str) -> Dict[str, SymbolPage]:
    """Parse a drawio document into ``{page name: SymbolPage}``.

    Pages keep document order.

    Raises:
        FileFormatError: On malformed XML, a root other than ``mxfile``, or
            an object whose geometry or style values cannot be read.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise FileFormatError(
            f"Invalid drawio XML: {e}",
            suggestions=["Regenerate the file with 'sch2drawio symbols'"],
        ) from e
    if root.tag != "mxfile":
        raise FileFormatError(
            f"Expected an mxfile document, found <{root.tag}>",
        )

    pages: Dict[str, SymbolPage] = {}
    for index, diagram in enumerate(root.iter("diagram")):
        name = diagram.get("name") or f"Page-{index + 1}"
        model = _graph_model(diagram)
        objects: List[DiagramObject] = []
        if model is not None:
            cells = model.find("root")
            for element in cells if cells is not None else []:
                try:
                    obj = _read_object(element)
                except (ValueError, TypeError) as e:
                    object_id = element.get("id", "")
                    raise FileFormatError(
                        f"Malformed object {object_id!r} on page {name}: {e}",
                        context={"object": object_id, "page": name},
                    ) from e
                if obj is not None:
                    objects.append(obj)

        box = BoundingBox.union(
            obj.geometry.box for obj in objects if isinstance(obj, Vertex)
        )
        pages[name] = SymbolPage(objects, box or BoundingBox(0.0, 0.0, 0.0, 0.0))
        logger.debug("Parsed page %s with %d objects", name, len(objects))
    return pages
