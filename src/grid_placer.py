"""Reading placement: shuffled insertion, crossing search, top-K random pick."""

from __future__ import annotations

import logging
import random
from collections import namedtuple
from typing import Protocol, Sequence

from models import Cell, Coord, Direction, GridStore, Item, Placement, WordRef

LOGGER = logging.getLogger(__name__)

RANDOM_PICK_PROB = 0.28  # chance of picking among the top K instead of the best
TOP_K_FOR_RANDOM = 4
OVERLAP_WEIGHT = 1000
FALLBACK_SCAN_X = range(-4, 21)

Candidate = namedtuple("Candidate", ["x", "y", "direction", "overlaps", "score"])


class RandomSource(Protocol):
    def random(self) -> float: ...


def place_items(
    items: Sequence[Item],
    rng: RandomSource | None = None,
    random_pick_prob: float = RANDOM_PICK_PROB,
    top_k: int = TOP_K_FOR_RANDOM,
) -> tuple[GridStore, list[Placement], list[str]]:
    """Place every item exactly once.

    Returns the grid, placements in insertion order, and the ids of items
    that fell through to the unchecked last-resort placement.
    """
    if rng is None:
        rng = random.Random()

    grid = GridStore()
    placements: list[Placement] = []
    degraded: list[str] = []
    if not items:
        return grid, placements, degraded

    order = _shuffled(items, rng)
    _place_word(order[0], 0, 0, Direction.ACROSS, grid, placements)

    for item in order[1:]:
        candidates = find_candidates(item.reading, grid)
        if candidates:
            pick = _pick_candidate(candidates, rng, random_pick_prob, top_k)
            _place_word(item, pick.x, pick.y, pick.direction, grid, placements)
            continue
        if not _place_fallback(item, grid, placements):
            _place_degraded(item, grid, placements)
            degraded.append(item.id)

    return grid, placements, degraded


def _shuffled(items: Sequence[Item], rng: RandomSource) -> list[Item]:
    """Fisher-Yates shuffle drawing only ``rng.random()``."""
    order = list(items)
    for i in range(len(order) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        order[i], order[j] = order[j], order[i]
    return order


def _pick_candidate(
    candidates: list[Candidate], rng: RandomSource,
    random_pick_prob: float, top_k: int,
) -> Candidate:
    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    if rng.random() >= random_pick_prob:
        return ranked[0]
    pool = ranked[:max(top_k, 1)]
    return pool[int(rng.random() * len(pool))]


# ── Candidate finding ─────────────────────────────────────────────────

def _build_glyph_index(grid: GridStore) -> dict[str, list[tuple[Coord, Cell]]]:
    """Map glyph -> [(coord, cell)] for every occupied cell."""
    idx: dict[str, list[tuple[Coord, Cell]]] = {}
    for coord, cell in grid.cells.items():
        idx.setdefault(cell.glyph, []).append((coord, cell))
    return idx


def find_candidates(reading: str, grid: GridStore) -> list[Candidate]:
    """Every legal placement of *reading* that crosses at least one existing cell."""
    index = _build_glyph_index(grid)
    candidates: list[Candidate] = []
    checked: set[tuple[int, int, Direction]] = set()

    for i, glyph in enumerate(reading):
        for (x, y), cell in index.get(glyph, []):
            existing = cell.words[0].direction if cell.words else Direction.ACROSS
            for direction in (existing.other, existing):
                if direction is Direction.ACROSS:
                    sx, sy = x - i, y
                else:
                    sx, sy = x, y - i
                key = (sx, sy, direction)
                if key in checked:
                    continue
                checked.add(key)
                if not can_place(reading, direction, sx, sy, grid):
                    continue
                overlaps = _count_overlaps(reading, direction, sx, sy, grid)
                score = overlaps * OVERLAP_WEIGHT - abs(sx) - abs(sy)
                candidates.append(Candidate(sx, sy, direction, overlaps, score))
    return candidates


def _count_overlaps(
    reading: str, direction: Direction, x: int, y: int, grid: GridStore,
) -> int:
    dx = 1 if direction is Direction.ACROSS else 0
    dy = 1 if direction is Direction.DOWN else 0
    count = 0
    for i, glyph in enumerate(reading):
        cell = grid.get((x + dx * i, y + dy * i))
        if cell is not None and cell.glyph == glyph:
            count += 1
    return count


# ── Validation ────────────────────────────────────────────────────────

def can_place(
    reading: str, direction: Direction, x: int, y: int, grid: GridStore,
) -> bool:
    """Check glyph matching, no extension, no parallel overlap, no side contact."""
    length = len(reading)
    dx = 1 if direction is Direction.ACROSS else 0
    dy = 1 if direction is Direction.DOWN else 0

    # Cells just before the start and just after the end must be empty
    if (x - dx, y - dy) in grid:
        return False
    if (x + dx * length, y + dy * length) in grid:
        return False

    # Perpendicular offsets
    px, py = dy, dx

    for i, glyph in enumerate(reading):
        cx = x + dx * i
        cy = y + dy * i
        cell = grid.get((cx, cy))

        if cell is not None:
            if cell.glyph != glyph:
                return False
            if cell.has_direction(direction):
                return False
            continue

        if (cx + px, cy + py) in grid or (cx - px, cy - py) in grid:
            return False

    return True


# ── Grid manipulation ─────────────────────────────────────────────────

def _place_word(
    item: Item, x: int, y: int, direction: Direction,
    grid: GridStore, placements: list[Placement],
) -> None:
    dx = 1 if direction is Direction.ACROSS else 0
    dy = 1 if direction is Direction.DOWN else 0
    for i, glyph in enumerate(item.reading):
        grid.occupy((x + dx * i, y + dy * i), glyph, WordRef(item.id, i, direction))
    placements.append(Placement(
        item_id=item.id, display=item.display, direction=direction,
        x=x, y=y, length=len(item.reading),
    ))
    LOGGER.debug("Placed %s (%s) %s at (%d,%d)",
                 item.id, item.reading, direction.value, x, y)


def _max_y(grid: GridStore) -> int:
    return max((y for _, y in grid.coordinates()), default=-1)


def _place_fallback(item: Item, grid: GridStore, placements: list[Placement]) -> bool:
    """Place *item* on its own below everything else, leaving one blank row."""
    y = _max_y(grid) + 2
    if can_place(item.reading, Direction.ACROSS, 0, y, grid):
        _place_word(item, 0, y, Direction.ACROSS, grid, placements)
        return True
    if can_place(item.reading, Direction.DOWN, 0, y, grid):
        _place_word(item, 0, y, Direction.DOWN, grid, placements)
        return True
    for x in FALLBACK_SCAN_X:
        if can_place(item.reading, Direction.ACROSS, x, y, grid):
            _place_word(item, x, y, Direction.ACROSS, grid, placements)
            return True
    return False


def _place_degraded(item: Item, grid: GridStore, placements: list[Placement]) -> None:
    """Last resort: place across one row further down without any legality check."""
    y = _max_y(grid) + 3
    LOGGER.warning("No legal position for %s (%s); placing unchecked at (0,%d)",
                   item.id, item.reading, y)
    _place_word(item, 0, y, Direction.ACROSS, grid, placements)
