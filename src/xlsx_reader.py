"""Read clue text from an XLSX workbook and attach it to puzzle entries."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import openpyxl

from models import Crossword, CrosswordError, Direction
from puzzle_engine import set_clue

_ENTRY_ID_RE = re.compile(r"^[AD]-\d+$")
_NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s?(.*)$", re.DOTALL)
_SECTIONS = {"ACROSS": Direction.ACROSS, "DOWN": Direction.DOWN}


def read_clues(path: str | Path) -> dict[str, str]:
    """Open *path* and return ``{entry_id: clue}`` from the first sheet.

    A row is recognised either by an entry id in column C, or by a
    ``'<n>. clue'`` label in column A below an ACROSS/DOWN header.
    """
    path = Path(path)
    if not path.exists():
        raise CrosswordError(f"File not found: {path}")

    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    ws = wb.active

    clues: dict[str, str] = {}
    section: Direction | None = None
    for row in ws.iter_rows(min_row=1, values_only=True):
        label = _text(row[0] if len(row) > 0 else None)
        entry_id = _text(row[2] if len(row) > 2 else None).strip()

        if label.strip().upper() in _SECTIONS and not entry_id:
            section = _SECTIONS[label.strip().upper()]
            continue

        match = _NUMBERED_RE.match(label)
        if match is None:
            continue
        number, clue_text = match.group(1), match.group(2).strip()

        if _ENTRY_ID_RE.match(entry_id):
            clues[entry_id] = clue_text
        elif section is not None:
            clues[f"{section.prefix}-{number}"] = clue_text

    wb.close()
    return clues


def apply_clues(puzzle: Crossword, clues: dict[str, str]) -> int:
    """Set each known clue on *puzzle*; return how many were applied."""
    applied = 0
    for entry_id, text in clues.items():
        if puzzle.entry(entry_id) is None:
            print(
                f"Warning: skipping clue for '{entry_id}' (no such entry)",
                file=sys.stderr,
            )
            continue
        set_clue(puzzle, entry_id, text)
        applied += 1
    return applied


def _text(value) -> str:
    return "" if value is None else str(value)
