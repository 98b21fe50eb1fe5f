"""Schematic shapes to diagram objects.

Schematic coordinates are multiplied by :data:`SCALE` and Y is negated:
schematics grow upwards, draw.io pages grow downwards.

Each layer owns two draw.io layers, ``layer-<name>-shape`` and
``layer-<name>-label``; the wire layer has a third one,
``layer-wire-intersection``, for junction dots.
"""

from __future__ import annotations

from typing import List, Optional

from ..drawio.geometry import Geometry
from ..drawio.objects import Cell, DiagramObject, Edge, Vertex
from ..drawio.text import JustifyX, JustifyY
from ..schema.schematic import Ellipse, Label, Layer, Line, Polygon, Rect, Shape
from ..schema.style import LayerStyle, LayerStyles
from ..types import BoundingBox

SCALE = 200.0

FILL_CROSS_HATCH = "cross-hatch"
FILL_HATCH = "hatch"
POLYGON_SHAPE = "mxgraph.basic.polygon"


# ----------------------------------------------------------------------------
# Layer ids
# ----------------------------------------------------------------------------


def shape_layer_id(layer: Layer, intersection: bool = False) -> str:
    if intersection:
        return f"layer-{layer.value}-intersection"
    return f"layer-{layer.value}-shape"


def label_layer_id(layer: Layer) -> str:
    return f"layer-{layer.value}-label"


def layer_cells(styles: LayerStyles) -> List[Cell]:
    """Layer declaration cells, bottom of the stack first.

    Raises:
        RepeatLayerError: If ``layer_order`` repeats a layer.
    """
    styles.validate_layer_order()
    cells: List[Cell] = []
    for layer in reversed(styles.layer_order):
        style = styles.style_for(layer)
        if layer is Layer.WIRE:
            cells.append(
                Cell(
                    id=shape_layer_id(layer, intersection=True),
                    parent="0",
                    value=f"{layer.value}-intersection",
                    visible=styles.wire_show_intersection,
                )
            )
        cells.append(
            Cell(
                id=shape_layer_id(layer),
                parent="0",
                value=f"{layer.value}-shape",
                visible=style.shape_sch_visible,
            )
        )
        cells.append(
            Cell(
                id=label_layer_id(layer),
                parent="0",
                value=f"{layer.value}-label",
                visible=style.label_sch_visible,
            )
        )
    return cells


# ----------------------------------------------------------------------------
# Fill styles
# ----------------------------------------------------------------------------


def apply_fill_style(vertex: Vertex, fill_style: int, layer_style: LayerStyle) -> None:
    """Set stroke and fill of *vertex* from a schematic fill code.

    ==== =========================================
    Code Appearance
    ==== =========================================
    0, 1 outline only
    2    solid fill, no outline
    3    cross-hatched fill, no outline
    4    hatched fill, no outline
    5    hatched fill with outline
    ==== =========================================

    Unknown codes fall back to outline only.
    """
    style = vertex.style
    color = layer_style.stroke_color
    style.stroke_width = layer_style.stroke_width

    if fill_style in (2, 3, 4):
        style.stroke_color = "none"
        style.fill_color = color
        if fill_style == 3:
            style.fill_style = FILL_CROSS_HATCH
        elif fill_style == 4:
            style.fill_style = FILL_HATCH
    elif fill_style == 5:
        style.stroke_color = color
        style.fill_color = color
        style.fill_style = FILL_HATCH
    else:
        style.stroke_color = color
        style.fill_color = "none"


# ----------------------------------------------------------------------------
# Shapes
# ----------------------------------------------------------------------------


def _box_vertex(
    shape: Rect | Ellipse, styles: LayerStyles, obj_id: str, intersection: bool
) -> Vertex:
    (x0, y0), (x1, y1) = shape.b_box
    vertex = Vertex(
        id=obj_id,
        parent=shape_layer_id(shape.layer, intersection),
        geometry=Geometry(
            box=BoundingBox(
                x0 * SCALE,
                -y1 * SCALE,
                abs((x1 - x0) * SCALE),
                abs((y1 - y0) * SCALE),
            )
        ),
    )
    apply_fill_style(vertex, shape.fill_style, styles.style_for(shape.layer))
    return vertex


def render_rect(shape: Rect, styles: LayerStyles, obj_id: str, intersection: bool = False) -> Vertex:
    return _box_vertex(shape, styles, obj_id, intersection)


def render_ellipse(
    shape: Ellipse, styles: LayerStyles, obj_id: str, intersection: bool = False
) -> Vertex:
    vertex = _box_vertex(shape, styles, obj_id, intersection)
    vertex.style.shape = "ellipse"
    return vertex


def render_line(
    shape: Line, styles: LayerStyles, obj_id: str, intersection: bool = False
) -> Optional[Edge]:
    """Edge through the line's points; ``None`` for fewer than two points."""
    points = shape.points
    if len(points) < 2:
        return None
    layer_style = styles.style_for(shape.layer)
    source, target = points[0], points[-1]

    edge = Edge(id=obj_id, parent=shape_layer_id(shape.layer, intersection))
    edge.style.stroke_width = layer_style.stroke_width
    edge.style.stroke_color = layer_style.stroke_color
    edge.geometry = Geometry(
        box=BoundingBox(
            0.0,
            0.0,
            abs(target[0] - source[0]) * SCALE,
            abs(target[1] - source[1]) * SCALE,
        ),
        relative=True,
        source_point=(source[0] * SCALE, -source[1] * SCALE),
        target_point=(target[0] * SCALE, -target[1] * SCALE),
        points=[(x * SCALE, -y * SCALE) for x, y in points[1:-1]],
    )
    return edge


def render_label(shape: Label, styles: LayerStyles, obj_id: str) -> Vertex:
    """Text box anchored at the label's reference point.

    The box width approximates a monospace font: half the font height
    per character.
    """
    layer_style = styles.style_for(shape.layer)
    x = shape.xy[0] * SCALE
    y = -shape.xy[1] * SCALE
    font_height = 1.2 * shape.height * SCALE * layer_style.font_zoom
    font_width = font_height * len(shape.text) / 2.0

    vertex = Vertex(id=obj_id, parent=label_layer_id(shape.layer), value=shape.text)
    justify = shape.justify
    if justify.x is JustifyX.CENTER:
        x -= font_width / 2.0
    elif justify.x is JustifyX.RIGHT:
        x -= font_width

    if justify.y is JustifyY.MIDDLE:
        y -= font_height / 2.0
    elif justify.y is JustifyY.BOTTOM:
        y -= font_height
        vertex.style.set("spacingBottom", "-2")

    vertex.geometry = Geometry(box=BoundingBox(x, y, font_width, font_height))
    style = vertex.style
    style.fill_color = "none"
    style.stroke_color = "none"
    style.font_color = layer_style.text_color
    style.font_size = font_height
    style.font_family = layer_style.font_family
    vertex.justify = justify
    style.set("spacing", "0")
    return vertex


def render_polygon(
    shape: Polygon, styles: LayerStyles, obj_id: str, intersection: bool = False
) -> Optional[Vertex]:
    """Polygon vertex with corners normalized to its box.

    ``None`` for fewer than three points. Normalized Y is flipped again
    (``1 - y``) because polygon coordinates grow downwards inside the box.
    """
    points = shape.points
    if len(points) < 3:
        return None

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    box_w = max_x - min_x
    box_h = max_y - min_y

    coords = []
    for px, py in points:
        norm_x = (px - min_x) / box_w if box_w > 0 else 0.0
        norm_y = (py - min_y) / box_h if box_h > 0 else 0.0
        coords.append((norm_x, 1.0 - norm_y))

    vertex = Vertex(
        id=obj_id,
        parent=shape_layer_id(shape.layer, intersection),
        geometry=Geometry(
            box=BoundingBox(
                min_x * SCALE, -max_y * SCALE, abs(box_w * SCALE), abs(box_h * SCALE)
            )
        ),
        poly_coords=coords,
    )
    apply_fill_style(vertex, shape.fill_style, styles.style_for(shape.layer))
    vertex.style.shape = POLYGON_SHAPE
    return vertex


def render_shape(
    shape: Shape, styles: LayerStyles, obj_id: str, intersection: bool = False
) -> List[DiagramObject]:
    """Render one shape; degenerate lines and polygons yield nothing."""
    if isinstance(shape, Rect):
        obj = render_rect(shape, styles, obj_id, intersection)
    elif isinstance(shape, Ellipse):
        obj = render_ellipse(shape, styles, obj_id, intersection)
    elif isinstance(shape, Line):
        obj = render_line(shape, styles, obj_id, intersection)
    elif isinstance(shape, Polygon):
        obj = render_polygon(shape, styles, obj_id, intersection)
    elif isinstance(shape, Label):
        obj = render_label(shape, styles, obj_id)
    else:
        raise TypeError(f"Unknown shape type: {type(shape).__name__}")
    return [obj] if obj is not None else []
