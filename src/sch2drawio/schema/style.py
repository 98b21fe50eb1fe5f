"""
Pydantic models for layer style configuration.

A style document assigns every schematic layer a stroke, text colour,
font and visibility, and fixes the stacking order of the six layers.
Style files may be JSON or YAML.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import FileNotFoundError, ParseError, RepeatLayerError, ValidationError
from .schematic import Layer, format_validation_errors

__all__ = [
    "LayerStyle",
    "LayerStyles",
    "load_style",
    "parse_style",
    "DEFAULT_LAYER_ORDER",
]

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

DEFAULT_LAYER_ORDER = [
    Layer.TEXT,
    Layer.PIN,
    Layer.WIRE,
    Layer.ANNOTATE,
    Layer.INSTANCE,
    Layer.DEVICE,
]


class LayerStyle(BaseModel):
    """Appearance of one layer."""

    stroke_color: str = Field(default="#000000", description="#RRGGBB or 'none'")
    stroke_width: float = Field(default=1.0, ge=0)
    text_color: str = Field(default="#000000", description="#RRGGBB or 'none'")
    font_zoom: float = Field(default=1.0, gt=0)
    font_family: str = "Verdana"
    label_sch_visible: bool = True
    shape_sch_visible: bool = True

    @field_validator("stroke_color", "text_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if v != "none" and not _COLOR_RE.match(v):
            raise ValueError(f"Expected #RRGGBB or 'none', got {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def expand_sch_visible(cls, data: Any) -> Any:
        """Legacy ``sch_visible`` sets both label and shape visibility."""
        if isinstance(data, dict) and "sch_visible" in data:
            data = dict(data)
            visible = data.pop("sch_visible")
            data.setdefault("label_sch_visible", visible)
            data.setdefault("shape_sch_visible", visible)
        return data


def _layer(
    stroke_color: str, stroke_width: float, text_color: str, visible: bool = True
) -> LayerStyle:
    return LayerStyle(
        stroke_color=stroke_color,
        stroke_width=stroke_width,
        text_color=text_color,
        label_sch_visible=visible,
        shape_sch_visible=visible,
    )


class LayerStyles(BaseModel):
    """Styles of all six layers plus their stacking order.

    ``layer_order`` lists layers top of the stack first.
    """

    layer_order: list[Layer] = Field(
        default_factory=lambda: list(DEFAULT_LAYER_ORDER), min_length=6, max_length=6
    )
    device: LayerStyle = Field(default_factory=lambda: _layer("#00FF00", 2.0, "#FF0000"))
    instance: LayerStyle = Field(
        default_factory=lambda: _layer("#0000FF", 1.0, "#0000FF", visible=False)
    )
    wire: LayerStyle = Field(default_factory=lambda: _layer("#00FFFF", 2.0, "#00CCCC"))
    wire_show_intersection: bool = True
    wire_intersection_scale: float = Field(default=1.0, gt=0)
    annotate: LayerStyle = Field(
        default_factory=lambda: _layer("#00FF00", 1.0, "#FF9900", visible=False)
    )
    pin: LayerStyle = Field(default_factory=lambda: _layer("#FF0000", 2.0, "#FF0000"))
    text: LayerStyle = Field(default_factory=lambda: _layer("#666666", 1.0, "#666666"))

    @field_validator("layer_order", mode="before")
    @classmethod
    def normalize_layers(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [item.lower() if isinstance(item, str) else item for item in v]
        return v

    def style_for(self, layer: Layer) -> LayerStyle:
        return getattr(self, layer.value)

    def validate_layer_order(self) -> None:
        """Check that ``layer_order`` is a permutation of the six layers.

        Scans from the bottom of the stack.

        Raises:
            RepeatLayerError: Naming the first layer seen twice.
        """
        seen: set[Layer] = set()
        for layer in reversed(self.layer_order):
            if layer in seen:
                raise RepeatLayerError(layer)
            seen.add(layer)


def parse_style(data: Any, source: str | None = None) -> LayerStyles:
    """Validate an already-decoded style mapping.

    Raises:
        ValidationError: If the content doesn't match the schema
        RepeatLayerError: If ``layer_order`` repeats a layer
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError(
            "Style file must contain a mapping",
            file_path=source,
        )
    try:
        styles = LayerStyles.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            format_validation_errors(e),
            context={"file": source} if source else None,
        ) from e
    styles.validate_layer_order()
    return styles


def load_style(path: Path | str | None = None) -> LayerStyles:
    """Load a style file, or return the defaults when *path* is ``None``.

    ``.yaml`` / ``.yml`` files are read as YAML, everything else as JSON.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid JSON/YAML or not UTF-8 text
        ValidationError: If the content doesn't match the schema
        RepeatLayerError: If ``layer_order`` repeats a layer
    """
    if path is None:
        return LayerStyles()

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Style file not found: {path}",
            context={"file": str(path)},
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read style file: {e}", file_path=path) from e
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML in style file: {e}", file_path=path) from e
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Invalid style JSON: {e.msg}",
                line=e.lineno,
                column=e.colno,
                file_path=path,
            ) from e

    return parse_style(data, source=str(path))
