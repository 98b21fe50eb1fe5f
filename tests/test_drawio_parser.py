"""Tests for reading drawio documents back."""

import base64
import urllib.parse
import zlib

import pytest

from sch2drawio.drawio import (
    Cell,
    DrawFile,
    Edge,
    Geometry,
    Page,
    Vertex,
    decode_diagram,
    parse_drawio,
)
from sch2drawio.exceptions import FileFormatError
from sch2drawio.types import BoundingBox

MODEL = (
    '<mxGraphModel><root>'
    '<mxCell id="0"/>'
    '<mxCell id="layer-device-shape" value="device-shape" parent="0"/>'
    '<mxCell id="v1" value="R" style="ellipse;strokeColor=#00FF00;rotation=90;" '
    'vertex="1" parent="layer-device-shape">'
    '<mxGeometry x="10" y="20" width="30" height="40" as="geometry"/>'
    "</mxCell>"
    "</root></mxGraphModel>"
)


def _compress(xml: str) -> str:
    quoted = urllib.parse.quote(xml, safe="")
    compressor = zlib.compressobj(wbits=-15)
    raw = compressor.compress(quoted.encode("utf-8")) + compressor.flush()
    return base64.b64encode(raw).decode("ascii")


def _document(diagram_body: str, name: str = "Page-1") -> str:
    return f'<mxfile><diagram name="{name}" id="p">{diagram_body}</diagram></mxfile>'


class TestDecodeDiagram:
    """Compressed diagram payloads."""

    def test_plain_xml_passthrough(self):
        assert decode_diagram(MODEL) == MODEL

    def test_compressed(self):
        assert decode_diagram(_compress(MODEL)) == MODEL

    def test_not_base64(self):
        with pytest.raises(FileFormatError):
            decode_diagram("not base64 at all!")

    def test_not_deflate(self):
        with pytest.raises(FileFormatError):
            decode_diagram(base64.b64encode(b"plain bytes").decode("ascii"))


class TestParseDrawio:
    """Parsing documents into objects."""

    def test_layer_cells_skipped(self):
        pages = parse_drawio(_document(MODEL))
        (obj,) = pages["Page-1"].objects
        assert obj.id == "v1"

    def test_vertex_fields(self):
        (vertex,) = parse_drawio(_document(MODEL))["Page-1"].objects
        assert isinstance(vertex, Vertex)
        assert vertex.value == "R"
        assert vertex.parent == "layer-device-shape"
        assert vertex.style.base == "ellipse"
        assert vertex.geometry.box == BoundingBox(10.0, 20.0, 30.0, 40.0)

    def test_rotation_moved_to_geometry(self):
        (vertex,) = parse_drawio(_document(MODEL))["Page-1"].objects
        assert vertex.geometry.flip_rotation.rotation == 90.0
        assert vertex.style.get("rotation") is None
        assert "rotation=90;" in vertex.style_string()

    def test_compressed_page(self):
        pages = parse_drawio(_document(_compress(MODEL), name="sym"))
        assert [obj.id for obj in pages["sym"].objects] == ["v1"]

    def test_origin_bounding_box(self):
        page = parse_drawio(_document(MODEL))["Page-1"]
        assert page.origin_bounding_box == BoundingBox(10.0, 20.0, 30.0, 40.0)

    def test_unnamed_pages(self):
        content = "<mxfile><diagram/><diagram/></mxfile>"
        assert list(parse_drawio(content)) == ["Page-1", "Page-2"]

    def test_invalid_xml(self):
        with pytest.raises(FileFormatError):
            parse_drawio("<mxfile><diagram>")

    def test_wrong_root(self):
        with pytest.raises(FileFormatError):
            parse_drawio("<svg/>")

    def test_bad_geometry_number(self):
        model = MODEL.replace('x="10"', 'x="abc"')
        with pytest.raises(FileFormatError) as exc_info:
            parse_drawio(_document(model))
        assert exc_info.value.context == {"object": "v1", "page": "Page-1"}

    def test_bad_poly_coords(self):
        model = MODEL.replace("rotation=90;", "polyCoords=[[0,1;")
        with pytest.raises(FileFormatError) as exc_info:
            parse_drawio(_document(model))
        assert exc_info.value.context["object"] == "v1"

    def test_poly_coords_not_pairs(self):
        model = MODEL.replace("rotation=90;", "polyCoords=[1,2];")
        with pytest.raises(FileFormatError):
            parse_drawio(_document(model))

    def test_unknown_align(self):
        model = MODEL.replace("rotation=90;", "align=middle;")
        with pytest.raises(FileFormatError):
            parse_drawio(_document(model))


class TestWriteAndReadBack:
    """Documents written by DrawFile parse back to equivalent objects."""

    def _round_trip(self, *objects):
        page = Page(name="p")
        page.add(Cell(id="layer-wire-shape", parent="0", visible=True))
        page.extend(objects)
        drawfile = DrawFile()
        drawfile.add_page(page)
        return parse_drawio(drawfile.to_xml())["p"].objects

    def test_edge(self):
        edge = Edge(
            id="e",
            parent="layer-wire-shape",
            geometry=Geometry(
                box=BoundingBox(0, 0, 200, 0),
                relative=True,
                source_point=(0.0, 0.0),
                target_point=(200.0, -200.0),
                points=[(200.0, 0.0)],
            ),
        )
        (read,) = self._round_trip(edge)
        assert isinstance(read, Edge)
        assert read.geometry.source_point == (0.0, 0.0)
        assert read.geometry.target_point == (200.0, -200.0)
        assert read.geometry.points == [(200.0, 0.0)]
        assert read.style.end_arrow == "none"

    def test_tagged_vertex(self):
        vertex = Vertex(id="U1-v", parent="layer-wire-shape", value="U1", tag="U1")
        (read,) = self._round_trip(vertex)
        assert read.id == "U1-v"
        assert read.value == "U1"
        assert read.tag == "U1"

    def test_poly_coords(self):
        vertex = Vertex(
            id="p", parent="layer-wire-shape", poly_coords=[(0.0, 1.0), (1.0, 0.5), (0.0, 0.0)]
        )
        (read,) = self._round_trip(vertex)
        assert read.poly_coords == [(0.0, 1.0), (1.0, 0.5), (0.0, 0.0)]
        assert read.style.get("polyCoords") is None

    def test_group_cell(self):
        group = Cell(id="g", parent="1", vertex=True)
        group.style.base = "group"
        (read,) = self._round_trip(group)
        assert type(read) is Cell
        assert read.vertex is True

    def test_layer_visibility_written(self):
        page = Page(name="p")
        page.add(Cell(id="layer-pin-label", parent="0", visible=False))
        drawfile = DrawFile()
        drawfile.add_page(page)
        assert 'visible="0"' in drawfile.to_xml()
