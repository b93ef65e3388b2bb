"""Render the crossword grid as standalone SVG."""

from __future__ import annotations

from typing import Iterable
from xml.sax.saxutils import escape

from grid_builder import start_labels
from models import Coord, LabelStyle, Layout

FONT_FAMILY = "Hiragino Sans, Noto Sans JP, sans-serif"
EMPTY_FILL = "#e5e7eb"
LINE_COLOR = "#cbd5e1"
HIGHLIGHT_COLOR = "#f43f5e"


def render_svg(
    layout: Layout,
    output_path: str,
    show_answers: bool = False,
    cell_size: float = 36.0,
    label_style: LabelStyle = LabelStyle.NUMERIC,
    highlighted: Iterable[Coord] = (),
) -> None:
    """Write the grid covered by ``layout.bounds`` to an SVG file."""
    bounds = layout.bounds
    labels = start_labels(layout, label_style)
    highlighted = set(highlighted)

    label_font = cell_size * 0.28
    glyph_font = cell_size * 0.5
    width = cell_size * bounds.width
    height = cell_size * bounds.height

    parts: list[str] = []
    parts.append(
        f'<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">\n'
    )

    for ry in range(bounds.height):
        for rx in range(bounds.width):
            coord = (bounds.min_x + rx, bounds.min_y + ry)
            cell = layout.grid.get(coord)
            x = rx * cell_size
            y = ry * cell_size

            fill = "white" if cell is not None else EMPTY_FILL
            parts.append(
                f'  <rect x="{x}" y="{y}" width="{cell_size}" '
                f'height="{cell_size}" fill="{fill}" '
                f'stroke="{LINE_COLOR}" stroke-width="1"/>\n'
            )
            if cell is None:
                continue

            if coord in labels:
                parts.append(
                    f'  <text x="{x + 2}" y="{y + label_font + 1}" '
                    f'font-family="{FONT_FAMILY}" font-size="{label_font}" '
                    f'fill="#6b7280">{labels[coord]}</text>\n'
                )

            if show_answers:
                parts.append(
                    f'  <text x="{x + cell_size / 2}" y="{y + cell_size * 0.55}" '
                    f'text-anchor="middle" dominant-baseline="central" '
                    f'font-family="{FONT_FAMILY}" font-size="{glyph_font}" '
                    f'fill="#111827">{escape(cell.glyph)}</text>\n'
                )

            if coord in highlighted:
                parts.append(
                    f'  <rect x="{x + 2}" y="{y + 2}" width="{cell_size - 4}" '
                    f'height="{cell_size - 4}" rx="6" fill="none" '
                    f'stroke="{HIGHLIGHT_COLOR}" stroke-width="4"/>\n'
                )

    # Outer border
    parts.append(
        f'  <rect x="0" y="0" width="{width}" height="{height}" '
        f'fill="none" stroke="{LINE_COLOR}" stroke-width="1.5"/>\n'
    )
    parts.append('</svg>\n')

    with open(output_path, 'w', encoding='utf-8') as f:
        f.writelines(parts)


def render_puzzle_svg(layout: Layout, output_path: str, **options) -> None:
    """Render puzzle grid (no answers) to SVG."""
    render_svg(layout, output_path, show_answers=False, **options)


def render_answer_svg(layout: Layout, output_path: str, **options) -> None:
    """Render answer grid (with glyphs) to SVG."""
    render_svg(layout, output_path, show_answers=True, **options)
