"""Render the crossword to a two-page A4 PDF using ReportLab.

Page 1 is the puzzle (empty grid, clue lists, rearrangement prompt with
empty boxes), page 2 the answer key (filled grid, clue lists, highlighted
letters and the model answer).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Paragraph

from grid_builder import selected_glyphs, start_labels
from models import Bounds, Coord, LabelStyle, Layout, NumberedClue

PAGE_W, PAGE_H = A4  # 595 x 842
MARGIN = 12 * mm
FONT = "HeiseiKakuGo-W5"

MAX_CELL = 28.0
MIN_CELL = 10.0
BOX_SIZE = 26.0
SECTION_HEADER_H = 14.0
DEFAULT_BOX_COUNT = 5

EMPTY_RGB = (0.898, 0.906, 0.922)
LINE_RGB = (0.796, 0.835, 0.882)
HIGHLIGHT_RGB = (0.957, 0.247, 0.369)

PUZZLE_HEADING = "太四角の並び替え問題（以下にあてはまる言葉を作ってね）"
PROMPT_HEADING = "並び替え問題文"
ALL_LETTERS_HEADING = "すべての文字"
MODEL_ANSWER_HEADING = "模範解答"
PROMPT_PLACEHOLDER = "（講師が問題文を入力）"
NO_CLUES = "（なし）"

pdfmetrics.registerFont(UnicodeCIDFont(FONT))


@dataclass
class LayoutParams:
    """All computed layout measurements."""

    page_w: float = PAGE_W
    page_h: float = PAGE_H
    margin: float = MARGIN
    usable_w: float = PAGE_W - 2 * MARGIN
    usable_h: float = PAGE_H - 2 * MARGIN

    # Grid
    grid_cols: int = 1
    grid_rows: int = 1
    cell_size: float = MAX_CELL
    grid_x: float = 0.0
    grid_y: float = 0.0  # top of grid in page coords

    # Title banner
    banner_h: float = 28.0
    banner_y: float = 0.0

    # Fonts
    clue_font_size: float = 10.5
    clue_leading: float = 14.0
    space_after: float = 2.0
    label_font_size: float = 7.0

    # Clue zone: across on the left, down on the right
    clue_zone_y: float = 0.0
    clue_gutter: float = 16.0
    clue_col_w: float = 0.0

    title: str = ""


def render_pdf(
    layout: Layout,
    across: list[NumberedClue],
    down: list[NumberedClue],
    title: str,
    output_path: str,
    label_style: LabelStyle = LabelStyle.NUMERIC,
    highlighted: Sequence[Coord] = (),
    prompt: str = "",
    answer: str = "",
) -> None:
    """Compute layout, fit content, draw page 1 (puzzle) + page 2 (answer key)."""
    from reportlab.pdfgen.canvas import Canvas

    glyphs = selected_glyphs(layout, highlighted)
    model_answer = list(answer) if answer else glyphs

    params = _compute_layout(layout.bounds, title)
    params = _adaptive_fit(across, down, prompt, answer, params)

    c = Canvas(output_path, pagesize=A4)
    labels = start_labels(layout, label_style)

    # --- Page 1: Puzzle ---
    _draw_title_banner(c, f"{title}（問題用）", params)
    _draw_grid(c, layout, labels, highlighted, params, show_answers=False)
    y = _draw_clue_zone(c, across, down, params)
    y = _draw_paragraph_block(c, PUZZLE_HEADING, prompt or PROMPT_PLACEHOLDER, y - 12, params)
    _draw_boxes(c, [""] * (len(glyphs) or DEFAULT_BOX_COUNT), params.margin, y - 4)
    c.showPage()

    # --- Page 2: Answer Key ---
    _draw_title_banner(c, f"{title}（解答用）", params)
    _draw_grid(c, layout, labels, highlighted, params, show_answers=True)
    y = _draw_clue_zone(c, across, down, params)
    y = _draw_paragraph_block(c, PROMPT_HEADING, prompt or PROMPT_PLACEHOLDER, y - 12, params)
    if answer:
        y = _draw_heading(c, ALL_LETTERS_HEADING, params.margin, y - 8, params.usable_w)
        y = _draw_boxes(c, glyphs, params.margin, y - 4)
    y = _draw_heading(c, MODEL_ANSWER_HEADING, params.margin, y - 8, params.usable_w)
    _draw_boxes(c, model_answer, params.margin, y - 4)
    c.showPage()

    c.save()


def _compute_layout(bounds: Bounds, title: str) -> LayoutParams:
    """Size cells so the grid fits the page width and about half its height."""
    lp = LayoutParams(grid_cols=bounds.width, grid_rows=bounds.height, title=title)
    lp.cell_size = max(
        MIN_CELL,
        min(MAX_CELL, lp.usable_w / lp.grid_cols, lp.usable_h * 0.45 / lp.grid_rows),
    )
    _recompute_positions(lp)
    return lp


def _recompute_positions(lp: LayoutParams) -> None:
    """(Re)calculate derived positions from current params."""
    grid_w = lp.cell_size * lp.grid_cols
    grid_h = lp.cell_size * lp.grid_rows

    lp.banner_y = lp.page_h - lp.margin - lp.banner_h
    lp.grid_x = (lp.page_w - grid_w) / 2
    lp.grid_y = lp.banner_y - 10
    lp.clue_zone_y = lp.grid_y - grid_h - 14
    lp.clue_col_w = (lp.usable_w - lp.clue_gutter) / 2
    lp.label_font_size = max(5.0, lp.cell_size * 0.26)


def _adaptive_fit(
    across: list[NumberedClue],
    down: list[NumberedClue],
    prompt: str,
    answer: str,
    layout: LayoutParams,
) -> LayoutParams:
    """Step through adjustments until the answer page fits on one sheet."""
    for _ in range(20):
        if _content_fits(across, down, prompt, answer, layout):
            return layout

        # Step 1: reduce font
        if layout.clue_font_size > 7.0:
            layout.clue_font_size -= 0.5
            layout.clue_leading = layout.clue_font_size + 3.0
            continue

        # Step 2: reduce cell size
        if layout.cell_size > MIN_CELL:
            layout.cell_size = max(MIN_CELL, layout.cell_size - 2)
            _recompute_positions(layout)
            continue

        break

    return layout


def _content_fits(
    across: list[NumberedClue],
    down: list[NumberedClue],
    prompt: str,
    answer: str,
    layout: LayoutParams,
) -> bool:
    style = _clue_style(layout)
    clue_h = max(
        _column_height(across, style, layout.clue_col_w),
        _column_height(down, style, layout.clue_col_w),
    )
    p = Paragraph(escape(prompt or PROMPT_PLACEHOLDER), style)
    _, prompt_h = p.wrap(layout.usable_w, 10000)
    section_h = 12 + SECTION_HEADER_H + 4 + prompt_h
    if answer:
        section_h += 8 + SECTION_HEADER_H + 4 + BOX_SIZE
    section_h += 8 + SECTION_HEADER_H + 4 + BOX_SIZE

    available = layout.clue_zone_y - layout.margin
    return clue_h + section_h <= available


def _column_height(clues: list[NumberedClue], style: ParagraphStyle, width: float) -> float:
    height = SECTION_HEADER_H + 4
    for markup in _clue_markups(clues):
        p = Paragraph(markup, style)
        _, h = p.wrap(width, 10000)
        height += h + style.spaceAfter
    return height


def _clue_style(layout: LayoutParams) -> ParagraphStyle:
    """Build a ParagraphStyle for clue text."""
    return ParagraphStyle(
        "ClueStyle",
        fontName=FONT,
        fontSize=layout.clue_font_size,
        leading=layout.clue_leading,
        spaceAfter=layout.space_after,
        wordWrap="CJK",
    )


def _clue_markups(clues: list[NumberedClue]) -> list[str]:
    if not clues:
        return [NO_CLUES]
    return [f"{escape(clue.label)}. {escape(clue.clue_text)}" for clue in clues]


# ─── Drawing functions ──────────────────────────────────────────────────────


def _draw_title_banner(c, text: str, layout: LayoutParams) -> None:
    """Black rect + white centered title."""
    x = layout.margin
    y = layout.banner_y
    w = layout.usable_w
    h = layout.banner_h

    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y, w, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont(FONT, 16)
    text_w = stringWidth(text, FONT, 16)
    tx = x + (w - text_w) / 2
    ty = y + (h - 16) / 2 + 2
    c.drawString(tx, ty, text)


def _draw_grid(
    c,
    layout: Layout,
    labels: dict[Coord, str],
    highlighted: Iterable[Coord],
    params: LayoutParams,
    show_answers: bool,
) -> None:
    """Draw the bounded grid: grey empty positions, white cells, labels, optional glyphs."""
    bounds = layout.bounds
    highlighted = set(highlighted)
    x0 = params.grid_x
    y0 = params.grid_y
    cs = params.cell_size

    c.setLineWidth(0.75)
    for ry in range(bounds.height):
        for rx in range(bounds.width):
            coord = (bounds.min_x + rx, bounds.min_y + ry)
            cell = layout.grid.get(coord)
            cx = x0 + rx * cs
            cy = y0 - (ry + 1) * cs

            c.setStrokeColorRGB(*LINE_RGB)
            if cell is None:
                c.setFillColorRGB(*EMPTY_RGB)
                c.rect(cx, cy, cs, cs, fill=1, stroke=1)
                continue
            c.setFillColorRGB(1, 1, 1)
            c.rect(cx, cy, cs, cs, fill=1, stroke=1)

            # Label (upper-left)
            if coord in labels:
                c.setFillColorRGB(0.42, 0.45, 0.5)
                c.setFont(FONT, params.label_font_size)
                c.drawString(cx + 1.5, cy + cs - params.label_font_size - 0.5, labels[coord])

            if show_answers:
                font_size = cs * 0.55
                c.setFillColorRGB(0, 0, 0)
                c.setFont(FONT, font_size)
                c.drawCentredString(cx + cs / 2, cy + cs * 0.28, cell.glyph)

            if coord in highlighted:
                c.setStrokeColorRGB(*HIGHLIGHT_RGB)
                c.setLineWidth(2.5)
                c.roundRect(cx + 2, cy + 2, cs - 4, cs - 4, 3, fill=0, stroke=1)
                c.setLineWidth(0.75)


def _draw_clue_zone(
    c,
    across: list[NumberedClue],
    down: list[NumberedClue],
    layout: LayoutParams,
) -> float:
    """Draw across (left) and down (right) clue columns. Returns the lowest y used."""
    style = _clue_style(layout)
    lowest = layout.clue_zone_y

    for i, (heading, clues) in enumerate((("よこ", across), ("たて", down))):
        col_x = layout.margin + i * (layout.clue_col_w + layout.clue_gutter)
        y = _draw_heading(c, heading, col_x, layout.clue_zone_y, layout.clue_col_w) - 4
        for markup in _clue_markups(clues):
            p = Paragraph(markup, style)
            _, h = p.wrap(layout.clue_col_w, 10000)
            p.drawOn(c, col_x, y - h)
            y -= h + style.spaceAfter
        lowest = min(lowest, y)

    return lowest


def _draw_paragraph_block(c, heading: str, text: str, y: float, layout: LayoutParams) -> float:
    """Heading bar followed by a full-width paragraph. Returns y at the bottom."""
    y = _draw_heading(c, heading, layout.margin, y, layout.usable_w) - 4
    p = Paragraph(escape(text), _clue_style(layout))
    _, h = p.wrap(layout.usable_w, 10000)
    p.drawOn(c, layout.margin, y - h)
    return y - h


def _draw_heading(c, text: str, x: float, y: float, width: float) -> float:
    """Black rect + white text. Returns y at bottom of header."""
    h = SECTION_HEADER_H
    c.setFillColorRGB(0, 0, 0)
    c.rect(x, y - h, width, h, fill=1, stroke=0)

    c.setFillColorRGB(1, 1, 1)
    c.setFont(FONT, 9)
    c.drawString(x + 4, y - h + 3.5, text)

    return y - h


def _draw_boxes(c, letters: Sequence[str], x: float, y: float) -> float:
    """A row of thick red boxes, each holding one letter (or nothing). Returns bottom y."""
    c.setStrokeColorRGB(*HIGHLIGHT_RGB)
    c.setLineWidth(2.5)
    for i, letter in enumerate(letters):
        bx = x + i * (BOX_SIZE + 4)
        c.roundRect(bx, y - BOX_SIZE, BOX_SIZE, BOX_SIZE, 4, fill=0, stroke=1)
        if letter:
            c.setFillColorRGB(0, 0, 0)
            c.setFont(FONT, BOX_SIZE * 0.55)
            c.drawCentredString(bx + BOX_SIZE / 2, y - BOX_SIZE * 0.72, letter)
    return y - BOX_SIZE
