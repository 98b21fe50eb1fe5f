"""
Custom exception hierarchy for sch2drawio.

Provides consistent error handling with context, suggestions, and actionable guidance.
All exceptions include:
- Context information (file paths, symbol ids, layer names, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from sch2drawio.exceptions import SymbolNotFoundError

    raise SymbolNotFoundError(
        "Symbol not found in library",
        context={"symbol": "analogLib/res", "instance": "R0"},
        suggestions=["Render the symbol library first with 'sch2drawio symbols'"]
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class Sch2DrawioError(Exception):
    """
    Base exception for all sch2drawio errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (file, symbol, layer, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(Sch2DrawioError):
    """
    Input document could not be parsed.

    Raised for malformed schematic JSON, style JSON/YAML, or drawio XML.

    Example::

        raise ParseError(
            "Invalid JSON",
            line=12,
            column=4,
            file_path="schematic.json",
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column

        super().__init__(message, ctx, suggestions)


class ValidationError(Sch2DrawioError):
    """
    Data validation failed with one or more errors.

    Collects all validation errors instead of failing on the first one,
    providing a complete list of issues to fix.

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class FileFormatError(Sch2DrawioError):
    """
    File format not recognized or corrupted.

    Raised when a previously generated drawio file cannot be read back,
    e.g. while instantiating or restyling symbols.
    """

    pass


class FileNotFoundError(Sch2DrawioError):
    """
    Required file or directory was not found.
    """

    pass


class SymbolNotFoundError(Sch2DrawioError):
    """
    A (library, cell) pair referenced by the schematic has no rendered symbol.

    Example::

        raise SymbolNotFoundError(
            "Symbol not found: analogLib/res",
            context={"symbol": "analogLib/res"},
        )
    """

    pass


class ConfigurationError(Sch2DrawioError):
    """
    Configuration or style settings error.
    """

    pass


class RepeatLayerError(ConfigurationError):
    """
    A layer appears more than once in a style's ``layer_order``.

    Attributes:
        layer: The repeated layer
    """

    def __init__(self, layer: Any, suggestions: Optional[List[str]] = None):
        self.layer = layer
        super().__init__(
            f"Repeat layer: {layer}",
            context={"layer": str(layer)},
            suggestions=suggestions
            or ["layer_order must list each of the six layers exactly once"],
        )


class UnsupportedOrientationError(Sch2DrawioError):
    """
    An instance requests an orientation the transform engine does not handle.

    Only R0, R90, R270 and MY are supported.

    Attributes:
        orient: The rejected orientation
    """

    def __init__(self, orient: Any, context: Optional[Dict[str, Any]] = None):
        self.orient = orient
        ctx = {"orient": str(orient)}
        if context:
            ctx.update(context)
        super().__init__(
            f"Unsupported orientation: {orient}",
            context=ctx,
            suggestions=["Supported orientations are R0, R90, R270 and MY"],
        )


class ExportError(Sch2DrawioError):
    """
    Writing an output file or directory failed.
    """

    pass


__all__ = [
    "Sch2DrawioError",
    "ParseError",
    "ValidationError",
    "FileFormatError",
    "FileNotFoundError",
    "SymbolNotFoundError",
    "ConfigurationError",
    "RepeatLayerError",
    "UnsupportedOrientationError",
    "ExportError",
]
