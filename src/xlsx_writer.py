"""Write a puzzle's clue lists to an XLSX file."""

from __future__ import annotations

import openpyxl
from openpyxl.styles import Font

from models import Crossword, Entry
from puzzle_engine import across_entries, down_entries, entry_answer


def write_clues_xlsx(puzzle: Crossword, output_path: str) -> None:
    """Write across and down clues to an Excel workbook.

    Numbering is embedded in the clue cell: '1. Clue text'.
    Answers are in column B ('?' for letters not yet set), entry ids in column C.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Clues"

    header_font = Font(bold=True, size=12)
    row = 1

    ws.cell(row=row, column=1, value="ACROSS").font = header_font
    row += 1
    row = _write_section(ws, puzzle, across_entries(puzzle), row)

    # Blank separator
    row += 1

    ws.cell(row=row, column=1, value="DOWN").font = header_font
    row += 1
    _write_section(ws, puzzle, down_entries(puzzle), row)

    ws.column_dimensions["A"].width = 60
    ws.column_dimensions["B"].width = 15
    ws.column_dimensions["C"].width = 8

    wb.save(output_path)


def _write_section(ws, puzzle: Crossword, entries: list[Entry], row: int) -> int:
    for entry in entries:
        ws.cell(row=row, column=1, value=f"{entry.number}. {entry.clue}")
        ws.cell(row=row, column=2, value=entry_answer(puzzle, entry))
        ws.cell(row=row, column=3, value=entry.id)
        row += 1
    return row
