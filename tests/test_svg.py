"""
Tests for the SVG renderer.
"""
from dataclasses import replace
import xml.etree.ElementTree as ET

import pytest

from fencelayout.model.geometry_primitives import Rect, Role, Text
from fencelayout.model.layout import Drawing, render_layout
from fencelayout.render.svg import escape, primitive_to_svg, render_svg, save_svg

NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture
def document(full_spec):
    return ET.fromstring(render_svg(render_layout(full_spec)).split("\n", 1)[1])


class TestDocument:

    def test_root_and_marker(self, document):
        assert document.tag == "{http://www.w3.org/2000/svg}svg"
        marker = document.find("svg:defs/svg:marker", NS)
        assert marker is not None and marker.get("id") == "arrowhead"
        assert document.find("svg:title", NS).text == "Sliding gate"

    def test_view_box_covers_bounds(self, full_spec):
        drawing = render_layout(full_spec)
        root = ET.fromstring(render_svg(drawing, margin=10).split("\n", 1)[1])
        min_x, min_y, width, height = map(float, root.get("viewBox").split())
        box = drawing.bounds()
        assert min_x == pytest.approx(box.min_x - 10, abs=0.01)
        assert min_y == pytest.approx(box.min_y - 10, abs=0.01)
        assert width == pytest.approx(box.width + 20, abs=0.01)
        assert height == pytest.approx(box.height + 20, abs=0.01)

    def test_elements_per_role(self, document, full_spec):
        drawing = render_layout(full_spec)
        rects = document.findall(".//svg:rect", NS)
        assert len(rects) == sum(isinstance(p, Rect) for p in drawing.primitives)
        panels = [r for r in rects if r.get("data-role") == "panel"]
        assert len(panels) == 6
        assert all(r.find("svg:title", NS).text == "100.00 mm" for r in panels)

        lines = document.findall(".//svg:line", NS)
        assert len(lines) == 2
        assert all(line.get("marker-end") == "url(#arrowhead)" for line in lines)

    def test_gaps_dashed(self, document):
        gaps = [r for r in document.findall(".//svg:rect", NS) if r.get("data-role") == "gap"]
        assert gaps and all(r.get("stroke-dasharray") == "4 3" for r in gaps)

    def test_text_halo_and_escaping(self, document):
        texts = {t.text: t for t in document.findall(".//svg:text", NS)}
        assert "base & omega" in texts
        label = texts["base & omega"]
        assert "paint-order: stroke" in label.get("style")
        assert texts["Sliding gate"].get("font-weight") == "600"

    def test_height_caption_rotated(self, document):
        rotated = [t for t in document.findall(".//svg:text", NS) if t.get("transform")]
        assert len(rotated) == 1
        assert rotated[0].get("transform").startswith("rotate(90 ")


class TestPrimitives:

    def test_escape(self):
        assert escape('a < b & "c"') == "a &lt; b &amp; &quot;c&quot;"

    def test_negative_zero(self):
        svg = primitive_to_svg(Rect(-0.0001, 0, 10, 10, role=Role.PANEL))
        assert 'x="0.00"' in svg

    def test_text_nudge_applied(self):
        svg = primitive_to_svg(Text(10, 20, "T", dy=-8))
        assert 'y="12.00"' in svg

    def test_unknown_primitive(self):
        with pytest.raises(TypeError):
            primitive_to_svg("not a primitive")

    def test_empty_drawing(self):
        root = ET.fromstring(render_svg(Drawing(), margin=5).split("\n", 1)[1])
        assert root.get("viewBox") == "-5.00 -5.00 10.00 10.00"

    def test_save(self, balanced_spec, tmp_path):
        path = tmp_path / "span.svg"
        save_svg(render_layout(replace(balanced_spec, scale=0.5)), path)
        content = path.read_text(encoding="utf-8")
        assert content.startswith('<?xml version="1.0"')
        assert "<title>Span</title>" in content
