"""Pytest fixtures for sch2drawio tests."""

import json

import pytest

from sch2drawio.schema import LayerStyles, parse_schematic

# One symbol holding a single wire-layer line, placed once at (2, 3)
MINIMAL_SCHEMATIC = {
    "design": {"lib": "lib", "cell": "top"},
    "instances": [
        {"name": "U1", "lib": "lib", "cell": "cellA", "x": 2, "y": 3, "orient": "R0"},
    ],
    "symbols": [
        {
            "lib": "lib",
            "cell": "cellA",
            "shapes": [
                {"type": "line", "layer": "wire", "points": [[0, 0], [1, 0]]},
            ],
        }
    ],
}

# Resistor-like symbol with every shape kind, two nets and a junction dot
RESISTOR_SCHEMATIC = {
    "design": {"lib": "demo", "cell": "divider"},
    "instances": [
        {"name": "R0", "lib": "analogLib", "cell": "res", "x": 0, "y": 0, "orient": "R0"},
        {"name": "R1", "lib": "analogLib", "cell": "res", "x": 0, "y": -2, "orient": "R90"},
    ],
    "wires": [
        {"net": "vout", "points": [[0, -0.5], [0, -1]]},
        {"net": "vout", "points": [[0, -1], [0, -1.5]]},
        {"net": "vout", "points": [[0, -1], [1, -1]]},
        {"net": "gnd!", "points": [[0, -2.5], [0, -3]]},
        {"net": "gnd!", "points": [[5, 5]]},
    ],
    "pins": [
        {"name": "OUT", "direction": "output", "x": 1, "y": -1},
    ],
    "labels": [
        {
            "type": "label",
            "layer": "text",
            "text": "divider",
            "xy": [0, 1],
            "height": 0.1,
            "justify": "lowerLeft",
        }
    ],
    "shapes": [
        {
            "type": "ellipse",
            "layer": "wire",
            "bBox": [[-0.05, -1.05], [0.05, -0.95]],
            "fillStyle": 2,
        }
    ],
    "symbols": [
        {
            "lib": "analogLib",
            "cell": "res",
            "shapes": [
                {
                    "type": "rect",
                    "layer": "device",
                    "bBox": [[-0.1, -0.3], [0.1, 0.3]],
                    "fillStyle": 1,
                },
                {"type": "line", "layer": "pin", "points": [[0, 0.3], [0, 0.5]]},
                {"type": "line", "layer": "pin", "points": [[0, -0.3], [0, -0.5]]},
                {
                    "type": "label",
                    "layer": "annotate",
                    "text": "[@cellName]",
                    "xy": [0.2, 0],
                    "height": 0.0625,
                    "justify": "centerLeft",
                },
                {
                    "type": "polygon",
                    "layer": "device",
                    "points": [[0, 0], [0.1, 0.1], [0, 0.2]],
                    "fillStyle": 2,
                },
            ],
            "pins": [
                {"name": "PLUS", "x": 0, "y": 0.5},
                {"name": "MINUS", "x": 0, "y": -0.5},
            ],
        }
    ],
}


@pytest.fixture
def minimal_data():
    """Fresh copy of the single-instance document."""
    return json.loads(json.dumps(MINIMAL_SCHEMATIC))


@pytest.fixture
def resistor_data():
    """Fresh copy of the two-resistor document."""
    return json.loads(json.dumps(RESISTOR_SCHEMATIC))


@pytest.fixture
def minimal_schematic():
    """Parsed single-instance schematic."""
    return parse_schematic(json.dumps(MINIMAL_SCHEMATIC))


@pytest.fixture
def resistor_schematic():
    """Parsed two-resistor schematic."""
    return parse_schematic(json.dumps(RESISTOR_SCHEMATIC))


@pytest.fixture
def default_styles():
    return LayerStyles()


@pytest.fixture
def schematic_file(tmp_path):
    """Two-resistor schematic written to a JSON file."""
    path = tmp_path / "divider.json"
    path.write_text(json.dumps(RESISTOR_SCHEMATIC))
    return path


@pytest.fixture
def style_file(tmp_path):
    """Style file with a red device layer."""
    path = tmp_path / "style.json"
    path.write_text(json.dumps({"device": {"stroke_color": "#FF0000", "stroke_width": 3}}))
    return path


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no user config and a working directory holding no project config."""
    import sch2drawio.config as config_module

    work = tmp_path / "work"
    work.mkdir()
    (work / ".git").mkdir()
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "no-user-config.toml")
    monkeypatch.chdir(work)
    return work
