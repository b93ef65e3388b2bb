"""Data models for the reading crossword generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Coord = tuple[int, int]  # (x, y); x grows to the right, y grows downward


class Direction(Enum):
    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def other(self) -> Direction:
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class LabelStyle(Enum):
    NUMERIC = "numeric"
    ALPHA = "alpha"


@dataclass(frozen=True)
class Item:
    """An input word: ``display`` is shown in clues, ``reading`` is placed on the grid."""

    id: str
    display: str
    reading: str  # hiragana after ingestion


@dataclass(frozen=True)
class WordRef:
    """Which word runs through a cell, at which index, in which direction."""

    item_id: str
    index: int
    direction: Direction


@dataclass
class Cell:
    """An occupied grid position. ``glyph`` is fixed by the word that created it."""

    glyph: str
    words: list[WordRef] = field(default_factory=list)

    def has_direction(self, direction: Direction) -> bool:
        return any(ref.direction is direction for ref in self.words)


@dataclass
class GridStore:
    """Sparse, grow-only mapping from coordinate to cell."""

    cells: dict[Coord, Cell] = field(default_factory=dict)

    def get(self, coord: Coord) -> Cell | None:
        return self.cells.get(coord)

    def occupy(self, coord: Coord, glyph: str, ref: WordRef) -> Cell:
        """Create the cell at *coord* if needed and append *ref* to it."""
        cell = self.cells.get(coord)
        if cell is None:
            cell = Cell(glyph=glyph)
            self.cells[coord] = cell
        cell.words.append(ref)
        return cell

    def coordinates(self) -> list[Coord]:
        return list(self.cells)

    def __contains__(self, coord: Coord) -> bool:
        return coord in self.cells

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Placement:
    """One committed word on the grid."""

    item_id: str
    display: str
    direction: Direction
    x: int
    y: int
    length: int

    @property
    def start(self) -> Coord:
        return (self.x, self.y)

    @property
    def cells(self) -> list[Coord]:
        if self.direction is Direction.ACROSS:
            return [(self.x + i, self.y) for i in range(self.length)]
        return [(self.x, self.y + i) for i in range(self.length)]


@dataclass(frozen=True)
class Bounds:
    """Smallest box covering every occupied coordinate (inclusive)."""

    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class NumberedClue:
    """A clue with its grid-assigned number and rendered label."""

    number: int
    label: str
    clue_text: str
    answer: str
    direction: Direction


@dataclass(frozen=True)
class Layout:
    """Finished crossword: grid, placements in insertion order, and derived data.

    ``degraded`` lists item ids that were placed without a legality check.
    """

    grid: GridStore
    placements: tuple[Placement, ...]
    bounds: Bounds
    clue_numbers: dict[str, int]
    degraded: tuple[str, ...] = ()


class CrosswordError(Exception):
    """Fatal error reading input or writing output."""
