"""Tests for the sch2drawio exception hierarchy."""

import pytest

from sch2drawio.exceptions import (
    ConfigurationError,
    ExportError,
    FileFormatError,
    FileNotFoundError,
    ParseError,
    RepeatLayerError,
    Sch2DrawioError,
    SymbolNotFoundError,
    UnsupportedOrientationError,
    ValidationError,
)
from sch2drawio.schema import Layer
from sch2drawio.types import Orient


class TestSch2DrawioError:
    """Tests for the base exception."""

    def test_basic_message(self):
        err = Sch2DrawioError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.context == {}
        assert err.suggestions == []

    def test_with_context(self):
        err = Sch2DrawioError("Error", context={"file": "top.json", "symbol": "lib/res"})
        msg = str(err)
        assert "Context:" in msg
        assert "file: top.json" in msg
        assert "symbol: lib/res" in msg

    def test_with_suggestions(self):
        err = Sch2DrawioError("Error", suggestions=["Try this", "Or this"])
        msg = str(err)
        assert "Suggestions:" in msg
        assert "- Try this" in msg
        assert "- Or this" in msg

    @pytest.mark.parametrize(
        "cls",
        [
            ParseError,
            FileFormatError,
            FileNotFoundError,
            SymbolNotFoundError,
            ConfigurationError,
            ExportError,
        ],
    )
    def test_subclasses(self, cls):
        assert issubclass(cls, Sch2DrawioError)
        with pytest.raises(Sch2DrawioError):
            raise cls("boom")


class TestParseError:
    def test_location_in_context(self):
        err = ParseError("Invalid JSON", line=3, column=7, file_path="top.json")
        assert err.context == {"file": "top.json", "line": 3, "column": 7}

    def test_explicit_context_wins(self):
        err = ParseError("Invalid", context={"file": "a.json"}, file_path="b.json")
        assert err.context["file"] == "a.json"


class TestValidationError:
    def test_lists_errors(self):
        err = ValidationError(["design: Field required", "wires.0.net: bad"])
        msg = str(err)
        assert "Validation failed with 2 error(s)" in msg
        assert "1. design: Field required" in msg
        assert "2. wires.0.net: bad" in msg
        assert err.errors == ["design: Field required", "wires.0.net: bad"]


class TestRepeatLayerError:
    def test_names_layer(self):
        err = RepeatLayerError(Layer.WIRE)
        assert err.message == "Repeat layer: Wire"
        assert err.context == {"layer": "Wire"}
        assert isinstance(err, ConfigurationError)


class TestUnsupportedOrientationError:
    def test_names_orientation(self):
        err = UnsupportedOrientationError(Orient.MX, context={"instance": "U3"})
        assert err.message == "Unsupported orientation: MX"
        assert err.context == {"orient": "MX", "instance": "U3"}
        assert "R0, R90, R270 and MY" in str(err)
