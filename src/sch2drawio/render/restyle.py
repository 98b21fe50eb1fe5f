"""
Restyle previously rendered symbol files.

Re-rendering needs the schematic JSON; restyling only needs the generated
drawio files and the styles they were generated with. Each object is
updated according to the layer it sits on:

- ``layer-<name>-label``: font colour, font size (scaled by the
  ``font_zoom`` ratio, box recomputed from the text) and font family
- ``layer-<name>-shape``: stroke colour and width; fills follow the
  stroke colour
- ``layer-wire-intersection``: as a shape, plus the box is rescaled about
  its centre by the ``wire_intersection_scale`` ratio

Layer declarations are rebuilt from the new styles, so visibility and
stacking order follow them too.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..drawio.objects import DiagramObject, Edge, Vertex
from ..drawio.page import DrawFile
from ..drawio.parser import parse_drawio
from ..exceptions import FileFormatError
from ..schema.schematic import Layer
from ..schema.style import LayerStyle, LayerStyles
from ..types import BoundingBox
from .library import SymbolLibrary
from .renderer import new_page
from .shapes import label_layer_id, shape_layer_id

logger = logging.getLogger(__name__)


def update_label(obj: DiagramObject, old: LayerStyle, new: LayerStyle) -> None:
    if not isinstance(obj, Vertex):
        return
    style = obj.style
    if old.text_color != new.text_color:
        style.font_color = new.text_color

    if style.font_size is not None and old.font_zoom != new.font_zoom and old.font_zoom > 0:
        font_height = style.font_size * (new.font_zoom / old.font_zoom)
        style.font_size = font_height
        box = obj.geometry.box
        obj.geometry.box = BoundingBox(
            box.min_x, box.min_y, font_height * len(obj.value) / 2.0, font_height
        )

    if old.font_family != new.font_family:
        style.font_family = new.font_family


def update_shape(obj: DiagramObject, old: LayerStyle, new: LayerStyle) -> None:
    style = obj.style
    if isinstance(obj, Edge):
        if old.stroke_color != new.stroke_color:
            style.stroke_color = new.stroke_color
        if old.stroke_width != new.stroke_width:
            style.stroke_width = new.stroke_width
    elif isinstance(obj, Vertex):
        if style.stroke_color is not None and style.stroke_color != "none":
            style.stroke_width = new.stroke_width
            style.stroke_color = new.stroke_color
        if style.fill_color is not None and style.fill_color != "none":
            style.fill_color = new.stroke_color


def update_intersection(
    obj: DiagramObject, old_styles: LayerStyles, new_styles: LayerStyles
) -> None:
    old_scale = old_styles.wire_intersection_scale
    new_scale = new_styles.wire_intersection_scale
    if isinstance(obj, Vertex) and old_scale > 0 and old_scale != new_scale:
        obj.geometry.box = obj.geometry.box.scaled_about_center(new_scale / old_scale)
    update_shape(obj, old_styles.wire, new_styles.wire)


def update_object(obj: DiagramObject, old_styles: LayerStyles, new_styles: LayerStyles) -> None:
    """Restyle *obj* in place according to its layer parent."""
    parent = obj.parent
    if parent == shape_layer_id(Layer.WIRE, intersection=True):
        update_intersection(obj, old_styles, new_styles)
        return
    for layer in Layer:
        if parent == label_layer_id(layer):
            update_label(obj, old_styles.style_for(layer), new_styles.style_for(layer))
            return
        if parent == shape_layer_id(layer):
            update_shape(obj, old_styles.style_for(layer), new_styles.style_for(layer))
            return


def restyle(content: str, old_styles: LayerStyles, new_styles: LayerStyles) -> str:
    """Restyle one drawio document and return the new XML.

    Raises:
        FileFormatError: If the document is malformed or has no page.
        RepeatLayerError: If *new_styles* repeats a layer.
    """
    pages = parse_drawio(content)
    if not pages:
        raise FileFormatError("Drawio document has no page")

    drawfile = DrawFile()
    for name, symbol_page in pages.items():
        page = new_page(name, new_styles)
        for obj in symbol_page.objects:
            update_object(obj, old_styles, new_styles)
            page.add(obj)
        drawfile.add_page(page)
    return drawfile.to_xml()


def restyle_dir(
    directory: Path | str,
    old_styles: LayerStyles,
    new_styles: LayerStyles,
    output_dir: Optional[Path | str] = None,
) -> SymbolLibrary:
    """Restyle every symbol below *directory*.

    Files are rewritten in place unless *output_dir* is given.

    Raises:
        FileNotFoundError: If *directory* does not exist.
        FileFormatError: If a symbol file is malformed.
        ExportError: If a file cannot be written.
    """
    new_styles.validate_layer_order()
    library = SymbolLibrary.load_from_dir(directory)
    restyled = SymbolLibrary()
    for (lib, cell), content in library.items():
        try:
            restyled[(lib, cell)] = restyle(content, old_styles, new_styles)
        except FileFormatError as e:
            e.context.setdefault("symbol", f"{lib}/{cell}")
            raise
        logger.debug("Restyled %s/%s", lib, cell)

    target = Path(output_dir) if output_dir is not None else Path(directory)
    restyled.write_to_dir(target)
    return restyled
