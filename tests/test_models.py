"""Tests for models.py."""

import pytest

from models import (
    Bounds,
    Cell,
    CrosswordError,
    Direction,
    GridStore,
    Item,
    LabelStyle,
    Placement,
    WordRef,
)


class TestEnums:
    def test_direction_values(self):
        assert Direction.ACROSS.value == "ACROSS"
        assert Direction.DOWN.value == "DOWN"

    def test_direction_other(self):
        assert Direction.ACROSS.other is Direction.DOWN
        assert Direction.DOWN.other is Direction.ACROSS

    def test_label_style_values(self):
        assert LabelStyle("numeric") is LabelStyle.NUMERIC
        assert LabelStyle("alpha") is LabelStyle.ALPHA


class TestItem:
    def test_frozen(self):
        item = Item(id="w0", display="砂", reading="すな")
        with pytest.raises(AttributeError):
            item.reading = "すなはま"


class TestCell:
    def test_has_direction(self):
        cell = Cell(glyph="な", words=[WordRef("w0", 1, Direction.ACROSS)])
        assert cell.has_direction(Direction.ACROSS)
        assert not cell.has_direction(Direction.DOWN)

    def test_words_are_independent(self):
        a = Cell(glyph="あ")
        b = Cell(glyph="い")
        a.words.append(WordRef("w0", 0, Direction.ACROSS))
        assert b.words == []


class TestGridStore:
    def test_occupy_creates_cell(self):
        grid = GridStore()
        cell = grid.occupy((0, 0), "す", WordRef("w0", 0, Direction.ACROSS))
        assert grid.get((0, 0)) is cell
        assert cell.glyph == "す"
        assert (0, 0) in grid
        assert len(grid) == 1

    def test_occupy_appends_to_existing_cell(self):
        grid = GridStore()
        grid.occupy((1, 0), "な", WordRef("w0", 1, Direction.ACROSS))
        cell = grid.occupy((1, 0), "な", WordRef("w1", 1, Direction.DOWN))
        assert [ref.item_id for ref in cell.words] == ["w0", "w1"]
        assert len(grid) == 1

    def test_glyph_fixed_by_first_word(self):
        grid = GridStore()
        grid.occupy((0, 0), "か", WordRef("w0", 0, Direction.ACROSS))
        grid.occupy((0, 0), "さ", WordRef("w1", 0, Direction.DOWN))
        assert grid.get((0, 0)).glyph == "か"

    def test_missing_coordinate(self):
        assert GridStore().get((3, -7)) is None

    def test_coordinates(self):
        grid = GridStore()
        grid.occupy((0, 0), "す", WordRef("w0", 0, Direction.ACROSS))
        grid.occupy((1, 0), "な", WordRef("w0", 1, Direction.ACROSS))
        assert sorted(grid.coordinates()) == [(0, 0), (1, 0)]


class TestPlacement:
    def test_cells_across(self):
        p = Placement("w0", "視点", Direction.ACROSS, -1, 2, 3)
        assert p.start == (-1, 2)
        assert p.cells == [(-1, 2), (0, 2), (1, 2)]

    def test_cells_down(self):
        p = Placement("w1", "穴", Direction.DOWN, 1, -1, 2)
        assert p.cells == [(1, -1), (1, 0)]


class TestBounds:
    def test_defaults_are_degenerate(self):
        bounds = Bounds()
        assert (bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y) == (0, 0, 0, 0)
        assert bounds.width == 1
        assert bounds.height == 1


class TestCrosswordError:
    def test_is_exception(self):
        with pytest.raises(CrosswordError, match="test error"):
            raise CrosswordError("test error")
