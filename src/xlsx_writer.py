"""Write the numbered clue list to an XLSX file."""

from __future__ import annotations

import openpyxl
from openpyxl.styles import Font

from models import Item, NumberedClue


def write_clues_xlsx(
    across: list[NumberedClue],
    down: list[NumberedClue],
    output_path: str,
    skipped: list[Item] | None = None,
) -> None:
    """Write across and down clues to an Excel workbook.

    The label is embedded in the clue cell: 'A. 視点'.
    Readings are in column B.
    If *skipped* is provided, a second sheet lists entries without a reading.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Clues"

    header_font = Font(bold=True, size=12)
    row = 1

    for heading, clues in (("よこ", across), ("たて", down)):
        ws.cell(row=row, column=1, value=heading).font = header_font
        row += 1
        for clue in clues:
            ws.cell(row=row, column=1, value=f"{clue.label}. {clue.clue_text}")
            ws.cell(row=row, column=2, value=clue.answer)
            row += 1
        # Blank separator
        row += 1

    ws.column_dimensions["A"].width = 40
    ws.column_dimensions["B"].width = 20

    if skipped:
        ws2 = wb.create_sheet(title="Not placed")
        ws2.cell(row=1, column=1, value="Word").font = header_font
        ws2.cell(row=1, column=2, value="Reading").font = header_font
        for i, item in enumerate(skipped, start=2):
            ws2.cell(row=i, column=1, value=item.display)
            ws2.cell(row=i, column=2, value=item.reading)
        ws2.column_dimensions["A"].width = 40
        ws2.column_dimensions["B"].width = 20

    wb.save(output_path)
