"""
sch2drawio: Convert schematic JSON into editable draw.io diagrams.

Renders each symbol template of a schematic once into a drawio file, then
places oriented copies of those symbols for every instance, together with
merged wires, pins, labels and junction dots, into a single diagram.

Usage:
    from sch2drawio import Renderer, load_schematic, load_style

    schematic = load_schematic("top.json")
    renderer = Renderer(schematic, load_style("style.json"))

    library = renderer.render_symbols()
    library.write_to_dir("symbols")

    xml = renderer.render_schematic(library)

CLI:
    sch2drawio symbols top.json style.json ./symbols
    sch2drawio render top.json ./symbols style.json top.drawio
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    ExportError,
    FileFormatError,
    ParseError,
    RepeatLayerError,
    Sch2DrawioError,
    SymbolNotFoundError,
    UnsupportedOrientationError,
    ValidationError,
)
from .merge import merge_lines
from .render import Renderer, SymbolLibrary, restyle, restyle_dir
from .schema import LayerStyles, Schematic, load_schematic, load_style
from .transform import GroupTransform
from .types import BoundingBox, Orient

__all__ = [
    "__version__",
    # Core
    "Renderer",
    "SymbolLibrary",
    "GroupTransform",
    "merge_lines",
    "restyle",
    "restyle_dir",
    # Documents
    "Schematic",
    "LayerStyles",
    "load_schematic",
    "load_style",
    # Types
    "BoundingBox",
    "Orient",
    # Errors
    "Sch2DrawioError",
    "ParseError",
    "ValidationError",
    "FileFormatError",
    "SymbolNotFoundError",
    "ConfigurationError",
    "RepeatLayerError",
    "UnsupportedOrientationError",
    "ExportError",
]
