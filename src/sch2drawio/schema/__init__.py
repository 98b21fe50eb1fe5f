"""Schematic and style document models."""

from __future__ import annotations

from .schematic import (
    Design,
    Ellipse,
    Instance,
    Label,
    Layer,
    Line,
    Pin,
    Polygon,
    Rect,
    Schematic,
    Shape,
    Symbol,
    Wire,
    load_schematic,
    parse_schematic,
)
from .style import DEFAULT_LAYER_ORDER, LayerStyle, LayerStyles, load_style, parse_style

__all__ = [
    "DEFAULT_LAYER_ORDER",
    "Design",
    "Ellipse",
    "Instance",
    "Label",
    "Layer",
    "LayerStyle",
    "LayerStyles",
    "Line",
    "Pin",
    "Polygon",
    "Rect",
    "Schematic",
    "Shape",
    "Symbol",
    "Wire",
    "load_schematic",
    "load_style",
    "parse_schematic",
    "parse_style",
]
