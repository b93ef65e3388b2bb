"""Read word/reading pairs from an XLSX workbook."""

from __future__ import annotations

import sys
from pathlib import Path

import openpyxl

from models import CrosswordError, Item
from reading_parser import to_hiragana


def read_items_xlsx(path: str | Path) -> list[Item]:
    """Open *path*, skip a header row if present, return items with hiragana readings.

    Column A holds the display form, column B the reading.
    """
    path = Path(path)
    if not path.exists():
        raise CrosswordError(f"File not found: {path}")

    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    ws = wb.active

    rows = [row for row in ws.iter_rows(max_col=2, values_only=True) if any(row)]
    wb.close()

    if rows and _is_header(rows[0]):
        rows = rows[1:]

    pairs: list[tuple[str, str]] = []
    for row in rows:
        display = str(row[0]).strip() if row[0] is not None else ""
        raw_reading = str(row[1]).strip() if len(row) > 1 and row[1] is not None else ""
        pairs.append((display, to_hiragana(raw_reading)))

    return _validate_and_filter(pairs)


def _is_header(row: tuple) -> bool:
    """A first row whose reading column holds no kana is taken as a header."""
    if len(row) < 2 or row[1] is None:
        return False
    return not _is_kana(to_hiragana(str(row[1]).strip()))


def _is_kana(text: str) -> bool:
    return bool(text) and all("ぁ" <= ch <= "ゖ" or ch == "ー" for ch in text)


def _validate_and_filter(pairs: list[tuple[str, str]]) -> list[Item]:
    """Drop rows without a reading, deduplicate, error if none remain."""
    seen: set[tuple[str, str]] = set()
    result: list[Item] = []

    for display, reading in pairs:
        if not reading:
            print(
                f"Warning: skipping '{display}' (no reading)",
                file=sys.stderr,
            )
            continue
        if (display, reading) in seen:
            print(
                f"Warning: duplicate entry '{display}={reading}', skipping",
                file=sys.stderr,
            )
            continue
        seen.add((display, reading))
        result.append(Item(id=f"w{len(result)}", display=display, reading=reading))

    if not result:
        raise CrosswordError("No usable entries after filtering")

    return result
