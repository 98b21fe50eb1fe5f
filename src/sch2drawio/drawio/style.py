"""Diagram style strings.

draw.io stores an object's appearance as ``base;key=value;key=value;``.
:class:`Style` keeps the commonly edited keys as named attributes and
every other key in an ordered ``extra`` mapping, so styles read from a
file survive a round trip even when they carry keys this package never
touches.

Example::

    style = Style.parse("ellipse;whiteSpace=wrap;strokeColor=#FF0000;foo=1;")
    style.stroke_color          # "#FF0000"
    style.extra                 # {"foo": "1"}
    style.to_string()           # "ellipse;whiteSpace=wrap;strokeColor=#FF0000;foo=1;"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional, Tuple


def format_number(value: float) -> str:
    """Format a number the way draw.io writes it: no trailing ``.0``."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def _to_int(text: str) -> int:
    return int(float(text))


# (attribute, style key, parser) in serialization order
_KNOWN: Tuple[Tuple[str, str, Callable[[str], Any]], ...] = (
    ("shape", "shape", str),
    ("rounded", "rounded", _to_int),
    ("white_space", "whiteSpace", str),
    ("html", "html", _to_int),
    ("fill_color", "fillColor", str),
    ("stroke_color", "strokeColor", str),
    ("stroke_width", "strokeWidth", float),
    ("fill_style", "fillStyle", str),
    ("opacity", "opacity", _to_int),
    ("font_color", "fontColor", str),
    ("font_size", "fontSize", float),
    ("font_family", "fontFamily", str),
    ("align", "align", str),
    ("vertical_align", "verticalAlign", str),
    ("end_arrow", "endArrow", str),
    ("start_arrow", "startArrow", str),
)

_BY_KEY = {key: (attr, parse) for attr, key, parse in _KNOWN}


@dataclass
class Style:
    """Parsed style string.

    Attributes:
        base: Leading bare token such as ``ellipse``, ``text`` or ``group``.
        extra: Keys without a named attribute, in insertion order.
    """

    base: Optional[str] = None
    shape: Optional[str] = None
    rounded: Optional[int] = None
    white_space: Optional[str] = None
    html: Optional[int] = None
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    fill_style: Optional[str] = None
    opacity: Optional[int] = None
    font_color: Optional[str] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    align: Optional[str] = None
    vertical_align: Optional[str] = None
    end_arrow: Optional[str] = None
    start_arrow: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: Optional[str]) -> Style:
        """Parse a ``k=v;`` style string. Empty parts are ignored."""
        style = cls()
        if not text:
            return style
        for part in text.split(";"):
            if not part:
                continue
            if "=" in part:
                key, value = part.split("=", 1)
                style.set(key, value)
            else:
                style.base = part
        return style

    def get(self, key: str) -> Optional[Any]:
        """Look up a value by its style key."""
        if key in _BY_KEY:
            return getattr(self, _BY_KEY[key][0])
        return self.extra.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set a value by its style key.

        Strings given for named numeric attributes are converted; values
        that fail conversion are kept verbatim in ``extra``.
        """
        if key in _BY_KEY:
            attr, parse = _BY_KEY[key]
            if isinstance(value, str):
                try:
                    value = parse(value)
                except ValueError:
                    self.extra[key] = value
                    return
            setattr(self, attr, value)
            return
        self.extra[key] = value if isinstance(value, str) else format_number(value)

    def pop(self, key: str) -> Optional[Any]:
        """Remove a key and return its previous value."""
        if key in _BY_KEY:
            attr = _BY_KEY[key][0]
            value = getattr(self, attr)
            setattr(self, attr, None)
            return value
        return self.extra.pop(key, None)

    def items(self):
        """Yield ``(key, text)`` pairs in serialization order."""
        for attr, key, _ in _KNOWN:
            value = getattr(self, attr)
            if value is not None:
                yield key, value if isinstance(value, str) else format_number(value)
        yield from self.extra.items()

    def to_string(self) -> str:
        parts = []
        if self.base:
            parts.append(f"{self.base};")
        for key, value in self.items():
            parts.append(f"{key}={value};")
        return "".join(parts)

    def copy(self) -> Style:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["extra"] = dict(self.extra)
        return Style(**values)

    def __str__(self) -> str:
        return self.to_string()
