"""Assemble the Layout from placed words: bounds, clue numbers, labels, clue lists."""

from __future__ import annotations

from typing import Iterable, Sequence

from grid_placer import RandomSource, place_items
from models import (
    Bounds, Coord, Direction, GridStore, Item, LabelStyle, Layout, NumberedClue, Placement,
)


def build_layout(
    items: Sequence[Item], rng: RandomSource | None = None, **engine_options,
) -> Layout:
    """Run the placement engine and derive bounds and clue numbers.

    *engine_options* are passed through to :func:`grid_placer.place_items`
    (``random_pick_prob``, ``top_k``).
    """
    grid, placements, degraded = place_items(items, rng, **engine_options)
    return Layout(
        grid=grid,
        placements=tuple(placements),
        bounds=compute_bounds(grid),
        clue_numbers=compute_clue_numbers(placements, grid),
        degraded=tuple(degraded),
    )


def compute_bounds(grid: GridStore) -> Bounds:
    coords = grid.coordinates()
    if not coords:
        return Bounds()
    xs = [x for x, _ in coords]
    ys = [y for _, y in coords]
    return Bounds(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def compute_clue_numbers(
    placements: Iterable[Placement], grid: GridStore,
) -> dict[str, int]:
    """Number across words by (y, x), then down words by (x, y).

    A down word starting on an already numbered cell reuses that number.
    """
    placements = list(placements)
    numbers: dict[str, int] = {}
    by_start: dict[Coord, int] = {}
    counter = 1

    across = sorted(
        (p for p in placements if p.direction is Direction.ACROSS),
        key=lambda p: (p.y, p.x),
    )
    for p in across:
        if (p.x - 1, p.y) in grid:
            continue
        numbers[p.item_id] = counter
        by_start[p.start] = counter
        counter += 1

    down = sorted(
        (p for p in placements if p.direction is Direction.DOWN),
        key=lambda p: (p.x, p.y),
    )
    for p in down:
        if (p.x, p.y - 1) in grid:
            continue
        if p.start in by_start:
            numbers[p.item_id] = by_start[p.start]
            continue
        numbers[p.item_id] = counter
        by_start[p.start] = counter
        counter += 1

    return numbers


def label_from_number(number: int, style: LabelStyle = LabelStyle.NUMERIC) -> str:
    """Decimal digits, or bijective base-26 letters (1=A, 26=Z, 27=AA)."""
    if style is not LabelStyle.ALPHA:
        return str(number)
    label = ""
    n = number
    while n > 0:
        n -= 1
        label = chr(ord("A") + n % 26) + label
        n //= 26
    return label


def start_labels(layout: Layout, style: LabelStyle = LabelStyle.NUMERIC) -> dict[Coord, str]:
    """Map each numbered start cell to its rendered label."""
    labels: dict[Coord, str] = {}
    for p in layout.placements:
        number = layout.clue_numbers.get(p.item_id)
        if number is not None:
            labels[p.start] = label_from_number(number, style)
    return labels


def build_clue_lists(
    layout: Layout, style: LabelStyle = LabelStyle.NUMERIC,
) -> tuple[list[NumberedClue], list[NumberedClue]]:
    """Map each placement to its number, return sorted across/down lists."""
    across: list[NumberedClue] = []
    down: list[NumberedClue] = []

    for p in layout.placements:
        number = layout.clue_numbers.get(p.item_id)
        if number is None:
            continue
        clue = NumberedClue(
            number=number,
            label=label_from_number(number, style),
            clue_text=p.display,
            answer=placed_reading(layout.grid, p),
            direction=p.direction,
        )
        if p.direction is Direction.ACROSS:
            across.append(clue)
        else:
            down.append(clue)

    across.sort(key=lambda c: c.number)
    down.sort(key=lambda c: c.number)
    return across, down


def placed_reading(grid: GridStore, placement: Placement) -> str:
    """Read a placement's glyphs back off the grid."""
    return "".join(grid.cells[coord].glyph for coord in placement.cells)


def selected_glyphs(layout: Layout, coords: Iterable[Coord]) -> list[str]:
    """Glyphs of the highlighted cells in the given order; empty positions are skipped."""
    glyphs = []
    for coord in coords:
        cell = layout.grid.get(coord)
        if cell is not None:
            glyphs.append(cell.glyph)
    return glyphs
