"""Tests for restyling rendered symbols."""

import pytest

from sch2drawio.drawio import Edge, Geometry, Style, Vertex, parse_drawio
from sch2drawio.exceptions import FileFormatError, FileNotFoundError, RepeatLayerError
from sch2drawio.render import Renderer, SymbolLibrary, restyle, restyle_dir
from sch2drawio.render.restyle import update_intersection, update_label, update_shape
from sch2drawio.schema import LayerStyle, LayerStyles
from sch2drawio.types import BoundingBox


class TestUpdateShape:
    """Shape-layer objects."""

    def test_edge_stroke(self):
        edge = Edge(style=Style(stroke_color="#000000", stroke_width=1.0))
        update_shape(edge, LayerStyle(), LayerStyle(stroke_color="#FF0000", stroke_width=3))
        assert edge.style.stroke_color == "#FF0000"
        assert edge.style.stroke_width == 3.0

    def test_outlined_vertex(self):
        vertex = Vertex(style=Style(stroke_color="#000000", fill_color="none"))
        update_shape(vertex, LayerStyle(), LayerStyle(stroke_color="#FF0000"))
        assert vertex.style.stroke_color == "#FF0000"
        assert vertex.style.fill_color == "none"

    def test_solid_vertex_keeps_no_outline(self):
        vertex = Vertex(style=Style(stroke_color="none", fill_color="#000000"))
        update_shape(vertex, LayerStyle(), LayerStyle(stroke_color="#FF0000"))
        assert vertex.style.stroke_color == "none"
        assert vertex.style.fill_color == "#FF0000"


class TestUpdateLabel:
    """Label-layer objects."""

    def test_font_zoom_resizes_box(self):
        vertex = Vertex(
            value="abcd",
            style=Style(font_size=10.0),
            geometry=Geometry(box=BoundingBox(5.0, 5.0, 20.0, 10.0)),
        )
        update_label(vertex, LayerStyle(), LayerStyle(font_zoom=2.0))
        assert vertex.style.font_size == 20.0
        assert vertex.geometry.box == BoundingBox(5.0, 5.0, 40.0, 20.0)

    def test_color_and_family(self):
        vertex = Vertex(value="x", style=Style(font_color="#000000", font_family="Verdana"))
        update_label(
            vertex, LayerStyle(), LayerStyle(text_color="#123456", font_family="Courier")
        )
        assert vertex.style.font_color == "#123456"
        assert vertex.style.font_family == "Courier"

    def test_unchanged_style_leaves_label(self):
        vertex = Vertex(value="x", style=Style(font_color="#ABCDEF"))
        update_label(vertex, LayerStyle(), LayerStyle())
        assert vertex.style.font_color == "#ABCDEF"


class TestUpdateIntersection:
    def test_rescaled_about_center(self):
        vertex = Vertex(
            style=Style(stroke_color="none", fill_color="#00FFFF"),
            geometry=Geometry(box=BoundingBox(0.0, 0.0, 10.0, 10.0)),
        )
        update_intersection(
            vertex, LayerStyles(), LayerStyles(wire_intersection_scale=2.0)
        )
        assert vertex.geometry.box == BoundingBox(-5.0, -5.0, 20.0, 20.0)


class TestRestyleDocument:
    """Whole documents."""

    def test_restyle_symbol(self, resistor_schematic):
        old = LayerStyles()
        new = LayerStyles(device={"stroke_color": "#FF00FF", "stroke_width": 4})
        content = Renderer(resistor_schematic, old).render_symbols()[("analogLib", "res")]
        (page,) = parse_drawio(restyle(content, old, new)).values()
        body = next(obj for obj in page.objects if obj.id == "analogLib/res-device-0")
        assert body.style.stroke_color == "#FF00FF"
        assert body.style.stroke_width == 4.0

    def test_layer_declarations_follow_new_styles(self, resistor_schematic):
        old = LayerStyles()
        new = LayerStyles(instance={"sch_visible": True})
        content = Renderer(resistor_schematic, old).render_symbols()[("analogLib", "res")]
        restyled = restyle(content, old, new)
        assert 'id="layer-instance-shape" value="instance-shape" visible="1"' in restyled

    def test_document_without_pages(self):
        with pytest.raises(FileFormatError):
            restyle("<mxfile/>", LayerStyles(), LayerStyles())


class TestRestyleDir:
    """Restyling a symbol directory."""

    def _write_library(self, schematic, directory):
        Renderer(schematic).render_symbols().write_to_dir(directory)

    def test_in_place(self, tmp_path, resistor_schematic):
        self._write_library(resistor_schematic, tmp_path)
        new = LayerStyles(pin={"stroke_color": "#ABCDEF"})
        restyle_dir(tmp_path, LayerStyles(), new)
        content = (tmp_path / "analogLib" / "res.drawio").read_text()
        assert "strokeColor=#ABCDEF" in content

    def test_output_dir(self, tmp_path, resistor_schematic):
        source = tmp_path / "in"
        target = tmp_path / "out"
        self._write_library(resistor_schematic, source)
        original = (source / "analogLib" / "res.drawio").read_text()
        restyled = restyle_dir(
            source, LayerStyles(), LayerStyles(pin={"stroke_color": "#ABCDEF"}), target
        )
        assert isinstance(restyled, SymbolLibrary)
        assert (source / "analogLib" / "res.drawio").read_text() == original
        assert (target / "analogLib" / "res.drawio").exists()

    def test_malformed_file_names_symbol(self, tmp_path):
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "bad.drawio").write_text("<mxfile")
        with pytest.raises(FileFormatError) as exc_info:
            restyle_dir(tmp_path, LayerStyles(), LayerStyles())
        assert exc_info.value.context["symbol"] == "lib/bad"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            restyle_dir(tmp_path / "missing", LayerStyles(), LayerStyles())

    def test_repeat_layer(self, tmp_path):
        bad = LayerStyles(layer_order=["text", "text", "pin", "wire", "device", "annotate"])
        with pytest.raises(RepeatLayerError):
            restyle_dir(tmp_path, LayerStyles(), bad)
