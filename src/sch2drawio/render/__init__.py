"""Rendering of symbols and schematics to drawio documents."""

from __future__ import annotations

from .library import SymbolLibrary
from .renderer import Renderer, wire_id
from .restyle import restyle, restyle_dir
from .shapes import SCALE, apply_fill_style, label_layer_id, render_shape, shape_layer_id

__all__ = [
    "SCALE",
    "Renderer",
    "SymbolLibrary",
    "apply_fill_style",
    "label_layer_id",
    "render_shape",
    "restyle",
    "restyle_dir",
    "shape_layer_id",
    "wire_id",
]
