"""Symbol and schematic rendering.

Rendering runs in two passes:

1. :meth:`Renderer.render_symbols` draws every symbol template once, in
   its own frame, into a one-page drawio file per ``(lib, cell)``.
2. :meth:`Renderer.render_schematic` parses those files back and places a
   transformed copy of each for every instance, then draws wires, pins,
   labels and free shapes on top.

Symbols are rendered once however many instances use them; instances
always receive copies.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Dict, List

from ..drawio.objects import DiagramObject
from ..drawio.page import DrawFile, Page
from ..drawio.text import Justify, JustifyX, JustifyY
from ..exceptions import SymbolNotFoundError
from ..merge import merge_lines
from ..schema.schematic import Ellipse, Label, Layer, Line, Schematic, Symbol
from ..schema.style import LayerStyles
from ..transform import GroupTransform
from ..types import Point
from .library import SymbolLibrary
from .shapes import SCALE, layer_cells, render_shape

logger = logging.getLogger(__name__)

# Line layers are merged and drawn in this order after all other shapes
LINE_LAYER_ORDER = (
    Layer.WIRE,
    Layer.INSTANCE,
    Layer.ANNOTATE,
    Layer.PIN,
    Layer.DEVICE,
    Layer.TEXT,
)

PIN_LABEL_OFFSET = 0.175
PIN_LABEL_HEIGHT = 0.1

_UNSAFE_NET_CHARS = re.compile(r"[^\w]")


def wire_id(net: str, counter: int) -> str:
    """Id of a rendered wire: ``wire-<net>-<n>``, or random for unnamed nets."""
    if net:
        return f"wire-{_UNSAFE_NET_CHARS.sub('_', net)}-{counter}"
    return f"wire-{uuid.uuid4()}"


def new_page(name: str, styles: LayerStyles) -> Page:
    """Empty page carrying the layer declarations for *styles*."""
    page = Page(name=name, id=name)
    page.extend(layer_cells(styles))
    return page


class Renderer:
    """Renders one schematic with one set of layer styles.

    Raises:
        RepeatLayerError: If the styles repeat a layer in ``layer_order``.
    """

    def __init__(self, schematic: Schematic, styles: LayerStyles | None = None):
        self.schematic = schematic
        self.styles = styles if styles is not None else LayerStyles()
        self.styles.validate_layer_order()

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    def render_symbol_page(self, symbol: Symbol) -> Page:
        """Draw one symbol template.

        Non-line shapes are drawn first in template order. Lines are then
        merged per layer and drawn, continuing the same index sequence.
        """
        page = new_page(symbol.name, self.styles)
        lines: Dict[Layer, List[List[Point]]] = {layer: [] for layer in LINE_LAYER_ORDER}

        index = 0
        for shape in symbol.shapes:
            if isinstance(shape, Line):
                lines[shape.layer].append(list(shape.points))
                continue
            page.extend(render_shape(shape, self.styles, symbol.object_id(shape.layer, index)))
            index += 1

        for layer in LINE_LAYER_ORDER:
            for points in merge_lines(lines[layer]):
                line = Line(layer=layer, points=points)
                page.extend(render_shape(line, self.styles, symbol.object_id(layer, index)))
                index += 1
        return page

    def render_symbols(self) -> SymbolLibrary:
        """Render every symbol template into its own drawio document."""
        library = SymbolLibrary()
        for symbol in self.schematic.symbols:
            drawfile = DrawFile()
            drawfile.add_page(self.render_symbol_page(symbol))
            library[symbol.key] = drawfile.to_xml()
            logger.debug("Rendered symbol %s", symbol.name)
        logger.info("Rendered %d symbols", len(library))
        return library

    # ------------------------------------------------------------------
    # Schematic
    # ------------------------------------------------------------------

    def place_instances(self, page: Page, library: SymbolLibrary) -> None:
        """Add a transformed copy of each instance's symbol to *page*.

        Raises:
            SymbolNotFoundError: If an instance's symbol is not in *library*.
            UnsupportedOrientationError: If an instance uses an orientation
                other than R0, R90, R270 or MY.
        """
        symbol_pages = library.pages()
        for instance in self.schematic.instances:
            symbol_page = symbol_pages.get((instance.lib, instance.cell))
            if symbol_page is None:
                raise SymbolNotFoundError(
                    f"Symbol not found: {instance.lib}/{instance.cell}",
                    context={
                        "symbol": f"{instance.lib}/{instance.cell}",
                        "instance": instance.name,
                    },
                    suggestions=["Render the symbol library first with 'sch2drawio symbols'"],
                )
            group = GroupTransform(
                instance.orient,
                (instance.x * SCALE, -instance.y * SCALE),
                instance.name,
                instance.cell,
            )
            # Copies are collected first so a failure leaves no partial instance
            placed: List[DiagramObject] = [group.new_obj(obj) for obj in symbol_page.objects]
            page.extend(placed)
            logger.debug("Placed %s (%s/%s)", instance.name, instance.lib, instance.cell)

    def wires_by_net(self) -> Dict[str, List[List[Point]]]:
        """Wire fragments with at least two points, grouped by net name."""
        nets: Dict[str, List[List[Point]]] = {}
        for wire in self.schematic.wires:
            if len(wire.points) >= 2:
                nets.setdefault(wire.net, []).append(list(wire.points))
        return nets

    def render_wires(self, page: Page) -> None:
        counter = 0
        for net, fragments in self.wires_by_net().items():
            merged = merge_lines(fragments)
            logger.debug("Net %r: %d fragments -> %d lines", net, len(fragments), len(merged))
            for points in merged:
                counter += 1
                line = Line(layer=Layer.WIRE, points=points)
                page.extend(render_shape(line, self.styles, wire_id(net, counter)))

    def render_pins(self, page: Page) -> None:
        for i, pin in enumerate(self.schematic.pins):
            label = Label(
                layer=Layer.PIN,
                text=pin.name,
                xy=(pin.x - PIN_LABEL_OFFSET, pin.y),
                orient="",
                height=PIN_LABEL_HEIGHT,
                justify=Justify(JustifyX.RIGHT, JustifyY.MIDDLE),
            )
            page.extend(render_shape(label, self.styles, f"pin-{i}"))

    def render_free_shapes(self, page: Page) -> None:
        """Labels and top-level shapes.

        Ellipses on the wire layer are junction dots: they go to the
        intersection layer, scaled about their centre.
        """
        for i, label in enumerate(self.schematic.labels):
            page.extend(render_shape(label, self.styles, f"label-{i}"))

        scale = self.styles.wire_intersection_scale
        for i, shape in enumerate(self.schematic.shapes):
            if isinstance(shape, Ellipse) and shape.layer is Layer.WIRE:
                (x0, y0), (x1, y1) = shape.b_box
                cx, cy = (x0 + x1) / 2.0, (y0 + y1) / 2.0
                half_w = (x1 - x0) * scale / 2.0
                half_h = (y1 - y0) * scale / 2.0
                dot = shape.model_copy(
                    update={"b_box": ((cx - half_w, cy - half_h), (cx + half_w, cy + half_h))}
                )
                page.extend(render_shape(dot, self.styles, f"shape-{i}", intersection=True))
            else:
                page.extend(render_shape(shape, self.styles, f"shape-{i}"))

    def render_schematic_page(self, library: SymbolLibrary) -> Page:
        design = self.schematic.design
        page = new_page(f"{design.lib}/{design.cell}", self.styles)
        self.place_instances(page, library)
        self.render_wires(page)
        self.render_pins(page)
        self.render_free_shapes(page)
        return page

    def render_schematic_file(self, library: SymbolLibrary) -> DrawFile:
        drawfile = DrawFile()
        drawfile.add_page(self.render_schematic_page(library))
        return drawfile

    def render_schematic(self, library: SymbolLibrary) -> str:
        """Render the schematic as drawio XML using pre-rendered symbols."""
        return self.render_schematic_file(library).to_xml()
