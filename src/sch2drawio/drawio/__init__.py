"""draw.io document model.

Styles, geometry, cells, vertices, edges, pages and files, with XML
emission and parsing.
"""

from __future__ import annotations

from .geometry import Geometry
from .objects import LAYER_PREFIX, Cell, DiagramObject, Edge, Vertex, new_id
from .page import DrawFile, Page
from .parser import SymbolPage, decode_diagram, parse_drawio
from .style import Style, format_number
from .text import Justify, JustifyX, JustifyY
from .tree import BinaryTree

__all__ = [
    "BinaryTree",
    "Cell",
    "DiagramObject",
    "DrawFile",
    "Edge",
    "Geometry",
    "Justify",
    "JustifyX",
    "JustifyY",
    "LAYER_PREFIX",
    "Page",
    "Style",
    "SymbolPage",
    "Vertex",
    "decode_diagram",
    "format_number",
    "new_id",
    "parse_drawio",
]
