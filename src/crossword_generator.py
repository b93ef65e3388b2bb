#!/usr/bin/env python3
"""CLI entry point for reading-crossword generation.

Reads a word list (text lines like ``視点=してん`` or an XLSX sheet), lays
the readings out on a sparse grid and writes PDF, clue XLSX, puzzle SVG
and answer SVG into an ``output`` folder.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from pathlib import Path

from grid_placer import RANDOM_PICK_PROB, TOP_K_FOR_RANDOM
from models import Coord, CrosswordError, Item, LabelStyle, Layout

DEFAULT_TITLE = "よみクロスワード"


def _parse_coord(text: str) -> Coord:
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")
    return (x, y)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Generate a reading crossword from word=reading pairs."
    )
    p.add_argument("input", help="Word list: .txt (one entry per line) or .xlsx")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output PDF path (default: input with .pdf extension)",
    )
    p.add_argument("--title", default=DEFAULT_TITLE,
                   help=f'Title text (default: "{DEFAULT_TITLE}")')
    p.add_argument("--seed", type=int, default=None,
                   help="Random seed (default: random)")
    p.add_argument("--labels", choices=[s.value for s in LabelStyle],
                   default=LabelStyle.NUMERIC.value,
                   help="Clue label style: 1,2,3... or A,B,C... (default: numeric)")
    p.add_argument("--highlight", type=_parse_coord, action="append", default=[],
                   metavar="X,Y",
                   help="Mark a cell for the rearrangement puzzle (repeatable)")
    p.add_argument("--prompt", default="",
                   help="Rearrangement puzzle prompt shown under the clues")
    p.add_argument("--answer", default="",
                   help="Model answer for the rearrangement puzzle")
    p.add_argument("--random-pick-prob", type=float, default=RANDOM_PICK_PROB,
                   help=f"Chance of picking among the top candidates (default: {RANDOM_PICK_PROB})")
    p.add_argument("--top-k", type=int, default=TOP_K_FOR_RANDOM,
                   help=f"Candidates considered for a random pick (default: {TOP_K_FOR_RANDOM})")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log every placement")
    return p


def main(argv: list[str] | None = None) -> None:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else random.randint(0, 2**31)
    t0 = time.time()

    try:
        _run(args, seed, t0)
    except CrosswordError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _load_items(input_path: Path) -> tuple[list[Item], list[Item]]:
    """Return ``(usable, skipped)`` items from a text or XLSX word list."""
    if input_path.suffix.lower() == ".xlsx":
        from xlsx_reader import read_items_xlsx
        return read_items_xlsx(input_path), []

    from reading_parser import read_items, usable_items

    items, warnings = read_items(input_path)
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    usable = usable_items(items)
    skipped = [item for item in items if not item.reading]
    if not usable:
        raise CrosswordError("No entries with a reading")
    return usable, skipped


def _output_all(
    layout: Layout,
    title: str,
    output_path: str,
    label_style: LabelStyle,
    highlighted: list[Coord],
    prompt: str,
    answer: str,
    skipped: list[Item] | None = None,
) -> None:
    """Generate all output files in an 'output' folder: PDF, XLSX, puzzle SVG, answer SVG."""
    from grid_builder import build_clue_lists
    from pdf_renderer import render_pdf
    from svg_renderer import render_answer_svg, render_puzzle_svg
    from xlsx_writer import write_clues_xlsx

    stem = Path(output_path).stem
    out_dir = Path(output_path).parent / "output"
    out_dir.mkdir(exist_ok=True)

    pdf_path = str(out_dir / f"{stem}.pdf")
    xlsx_path = str(out_dir / f"{stem}_clues.xlsx")
    puzzle_svg_path = str(out_dir / f"{stem}_puzzle.svg")
    answer_svg_path = str(out_dir / f"{stem}_answer.svg")

    across, down = build_clue_lists(layout, label_style)
    render_pdf(layout, across, down, title, pdf_path, label_style=label_style,
               highlighted=highlighted, prompt=prompt, answer=answer)
    write_clues_xlsx(across, down, xlsx_path, skipped=skipped)
    render_puzzle_svg(layout, puzzle_svg_path, label_style=label_style, highlighted=highlighted)
    render_answer_svg(layout, answer_svg_path, label_style=label_style, highlighted=highlighted)

    print(f"Output: {pdf_path}", file=sys.stderr)
    print(f"Output: {xlsx_path}", file=sys.stderr)
    print(f"Output: {puzzle_svg_path}", file=sys.stderr)
    print(f"Output: {answer_svg_path}", file=sys.stderr)


def _run(args, seed: int, t0: float) -> None:
    """Read the word list, lay it out and write every output format."""
    from grid_builder import build_layout

    input_path = Path(args.input)
    output_path = args.output or str(input_path.with_suffix(".pdf"))

    items, skipped = _load_items(input_path)
    print(f"Read {len(items)} entries (seed={seed})", file=sys.stderr)

    layout = build_layout(
        items,
        random.Random(seed),
        random_pick_prob=args.random_pick_prob,
        top_k=args.top_k,
    )
    for item_id in layout.degraded:
        print(f"Warning: '{item_id}' could not be placed cleanly", file=sys.stderr)

    _output_all(
        layout, args.title, output_path, LabelStyle(args.labels),
        args.highlight, args.prompt, args.answer, skipped=skipped,
    )

    elapsed = time.time() - t0
    crossings = sum(1 for cell in layout.grid.cells.values() if len(cell.words) > 1)
    print(
        f"Placed {len(layout.placements)} words, "
        f"{crossings} crossings, "
        f"grid {layout.bounds.width}x{layout.bounds.height}, "
        f"time {elapsed:.1f}s",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
