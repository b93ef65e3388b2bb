"""Tests for svg_renderer.py."""

import xml.etree.ElementTree as ET

import pytest

from models import Item, LabelStyle
from grid_builder import build_layout
from svg_renderer import render_svg, render_puzzle_svg, render_answer_svg

NS = {"svg": "http://www.w3.org/2000/svg"}


class _KeepOrder:
    def random(self):
        return 0.999


@pytest.fixture
def layout():
    """すな across at (0,0), あな down at (1,-1), してん across at (0,2): a 3x4 box."""
    items = [Item("w0", "砂", "すな"), Item("w1", "穴", "あな"), Item("w2", "視点", "してん")]
    return build_layout(items, _KeepOrder())


def _texts(path):
    return [t.text for t in ET.parse(path).findall(".//svg:text", NS)]


class TestRenderSvg:
    def test_creates_valid_svg(self, layout, tmp_path):
        path = tmp_path / "grid.svg"
        render_svg(layout, str(path))
        root = ET.parse(path).getroot()
        assert root.tag == "{http://www.w3.org/2000/svg}svg"

    def test_dimensions_follow_bounds(self, layout, tmp_path):
        path = tmp_path / "grid.svg"
        render_svg(layout, str(path), cell_size=24.0)
        root = ET.parse(path).getroot()
        assert root.get("width") == str(24.0 * 3)
        assert root.get("height") == str(24.0 * 4)

    def test_puzzle_has_only_labels(self, layout, tmp_path):
        path = tmp_path / "puzzle.svg"
        render_puzzle_svg(layout, str(path))
        assert sorted(_texts(path)) == ["1", "2", "3"]

    def test_alpha_labels(self, layout, tmp_path):
        path = tmp_path / "puzzle.svg"
        render_puzzle_svg(layout, str(path), label_style=LabelStyle.ALPHA)
        assert sorted(_texts(path)) == ["A", "B", "C"]

    def test_answer_has_glyphs(self, layout, tmp_path):
        path = tmp_path / "answer.svg"
        render_answer_svg(layout, str(path))
        texts = _texts(path)
        for glyph in "すなあしてん":
            assert glyph in texts
        # The shared cell is drawn once
        assert texts.count("な") == 1

    def test_empty_and_occupied_cells(self, layout, tmp_path):
        path = tmp_path / "grid.svg"
        render_svg(layout, str(path))
        rects = ET.parse(path).findall(".//svg:rect", NS)
        fills = [r.get("fill") for r in rects]
        # 12 positions in the box, 6 of them occupied, plus the outer border
        assert fills.count("white") == 6
        assert fills.count("#e5e7eb") == 6
        assert fills.count("none") == 1

    def test_highlighted_cells_framed(self, layout, tmp_path):
        path = tmp_path / "grid.svg"
        render_svg(layout, str(path), highlighted=[(0, 0), (2, 2), (9, 9)])
        content = path.read_text(encoding="utf-8")
        assert content.count('stroke="#f43f5e"') == 2
