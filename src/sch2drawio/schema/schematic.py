"""
Pydantic models for the schematic JSON document.

A schematic document holds:
- The design being drawn (library and cell)
- Instances placing library symbols at a position and orientation
- Wire fragments tagged with their net name
- Top-level pins, labels and free shapes
- The symbol templates referenced by the instances

Shapes are a closed union discriminated by their ``type`` field.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..drawio.text import Justify
from ..exceptions import FileNotFoundError, ParseError, ValidationError
from ..types import Orient, Point

__all__ = [
    "Layer",
    "Rect",
    "Line",
    "Label",
    "Polygon",
    "Ellipse",
    "Shape",
    "Design",
    "Instance",
    "Wire",
    "Pin",
    "Symbol",
    "Schematic",
    "load_schematic",
    "parse_schematic",
    "format_validation_errors",
]


class Layer(str, Enum):
    """Semantic layer of a shape; drives style lookup and stacking."""

    INSTANCE = "instance"
    ANNOTATE = "annotate"
    PIN = "pin"
    DEVICE = "device"
    WIRE = "wire"
    TEXT = "text"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None

    def __str__(self) -> str:
        return self.value.capitalize()


class _ShapeBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    layer: Layer = Field(..., description="Layer used for style lookup")

    @field_validator("layer", mode="before")
    @classmethod
    def normalize_layer(cls, v: object) -> object:
        if isinstance(v, str):
            return v.lower()
        return v


class _FilledShape(_ShapeBase):
    fill_style: int = Field(default=1, alias="fillStyle", ge=0, le=255)


class _BoxShape(_FilledShape):
    b_box: Tuple[Point, Point] = Field(
        ..., alias="bBox", description="Lower-left and upper-right corners"
    )


class Rect(_BoxShape):
    type: Literal["rect"] = "rect"


class Ellipse(_BoxShape):
    type: Literal["ellipse"] = "ellipse"


class Line(_ShapeBase):
    type: Literal["line"] = "line"
    points: list[Point] = Field(default_factory=list)


class Polygon(_FilledShape):
    type: Literal["polygon"] = "polygon"
    points: list[Point] = Field(default_factory=list)


class Label(_ShapeBase):
    type: Literal["label"] = "label"
    text: str
    xy: Point
    orient: str = Field(default="R0", description="Orientation hint, not applied")
    height: float
    justify: Justify = Field(default_factory=Justify)

    @field_validator("justify", mode="before")
    @classmethod
    def parse_justify(cls, v: object) -> object:
        """Accept the ``upperLeft`` .. ``lowerRight`` names."""
        if isinstance(v, str):
            return Justify.from_name(v)
        return v


Shape = Annotated[
    Union[Rect, Line, Label, Polygon, Ellipse],
    Field(discriminator="type"),
]


class Design(BaseModel):
    """Library and cell of the schematic being drawn."""

    lib: str
    cell: str


class Instance(BaseModel):
    """A placed symbol."""

    name: str
    lib: str
    cell: str
    x: float
    y: float
    orient: Orient = Orient.R0


class Wire(BaseModel):
    """One fragment of a net."""

    net: str = ""
    points: list[Point] = Field(default_factory=list)


class Pin(BaseModel):
    name: str
    direction: str = ""
    x: float
    y: float


class Symbol(BaseModel):
    """A library cell's template shapes and pins."""

    lib: str
    cell: str
    shapes: list[Shape] = Field(default_factory=list)
    pins: list[Pin] = Field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        return (self.lib, self.cell)

    @property
    def name(self) -> str:
        return f"{self.lib}/{self.cell}"

    def object_id(self, layer: Layer, index: int) -> str:
        """Id of the *index*-th rendered object: ``lib/cell-layer-index``."""
        return f"{self.lib}/{self.cell}-{layer.value}-{index}"

    @field_validator("shapes")
    @classmethod
    def dedupe_shapes(cls, v: list) -> list:
        """Drop exact duplicate shapes, keeping first occurrence order."""
        seen = []
        for shape in v:
            if shape not in seen:
                seen.append(shape)
        return seen


class Schematic(BaseModel):
    """Top-level schematic document."""

    design: Design
    instances: list[Instance] = Field(default_factory=list)
    wires: list[Wire] = Field(default_factory=list)
    pins: list[Pin] = Field(default_factory=list)
    symbols: list[Symbol] = Field(default_factory=list)
    labels: list[Shape] = Field(default_factory=list)
    shapes: list[Shape] = Field(default_factory=list)

    def find_symbol(self, lib: str, cell: str) -> Symbol | None:
        for symbol in self.symbols:
            if symbol.lib == lib and symbol.cell == cell:
                return symbol
        return None


def format_validation_errors(error: PydanticValidationError) -> list[str]:
    """Flatten a pydantic error into ``loc: message`` strings."""
    messages = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{loc}: {item.get('msg')}" if loc else str(item.get("msg")))
    return messages


def parse_schematic(content: str, source: str | None = None) -> Schematic:
    """Parse schematic JSON text.

    Raises:
        ParseError: If the text is not valid JSON
        ValidationError: If the document doesn't match the schema
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Invalid schematic JSON: {e.msg}",
            line=e.lineno,
            column=e.colno,
            file_path=source,
        ) from e

    try:
        return Schematic.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            format_validation_errors(e),
            context={"file": source} if source else None,
        ) from e


def load_schematic(path: Path | str) -> Schematic:
    """Load a schematic JSON file.

    Args:
        path: Path to the schematic file

    Returns:
        Parsed Schematic instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid JSON
        ParseError: If the file cannot be read as UTF-8 text
        ValidationError: If the content doesn't match the schema
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Schematic file not found: {path}",
            context={"file": str(path)},
        )
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read schematic file: {e}", file_path=path) from e
    return parse_schematic(content, source=str(path))
