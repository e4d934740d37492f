"""Editing operations that keep grid, numbering and entries consistent."""

from __future__ import annotations

import re

from indexer import reindex
from models import (
    Crossword,
    Direction,
    Entry,
    blank_grid,
    check_dimensions,
    now_iso,
)

DEFAULT_ROWS = 13
DEFAULT_COLS = 13
DEFAULT_TITLE = "New Crossword"
DEFAULT_AUTHOR = "You"

# Latin plus the Ukrainian alphabet (А-Я covers the shared Cyrillic range).
_LETTER_RE = re.compile(r"[A-ZА-ЯІЇЄҐ]")


def create_empty(
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    title: str = DEFAULT_TITLE,
    author: str = DEFAULT_AUTHOR,
) -> Crossword:
    """Build an all-open grid and index it."""
    puzzle = Crossword.create(rows, cols, title=title, author=author)
    reindex(puzzle)
    return puzzle


def toggle_block(puzzle: Crossword, row: int, col: int) -> None:
    """Flip a cell between open and block, then re-index.

    Splitting a run into 1-letter pieces drops the entry and its clue without
    warning. Kept as-is for compatibility with existing puzzle files; a prompt
    before discarding a non-empty clue would be the friendlier behaviour.
    """
    cell = puzzle.cell(row, col)
    cell.is_block = not cell.is_block
    if cell.is_block:
        cell.solution = None
        cell.clear_index()
    reindex(puzzle)
    touch(puzzle)


def set_letter(puzzle: Crossword, row: int, col: int, ch: str | None) -> None:
    """Set or clear the solution letter. Invalid input is ignored."""
    cell = puzzle.cell(row, col)
    if cell.is_block:
        return
    if not ch:
        cell.solution = None
    else:
        letter = normalize_letter(ch)
        if letter is None:
            return
        cell.solution = letter
    touch(puzzle)


def set_clue(puzzle: Crossword, entry_id: str, text: str) -> None:
    """Replace the clue of *entry_id*; unknown ids are ignored."""
    entry = puzzle.entry(entry_id)
    if entry is None:
        return
    entry.clue = text
    touch(puzzle)


def resize(puzzle: Crossword, rows: int, cols: int) -> None:
    """Replace the grid with a fresh all-open one of the new size."""
    check_dimensions(rows, cols)
    puzzle.rows = rows
    puzzle.cols = cols
    puzzle.grid = blank_grid(rows, cols)
    reindex(puzzle)


def normalize_letter(ch: str | None) -> str | None:
    """Uppercase a single accepted letter, or return None."""
    if not ch or len(ch) != 1:
        return None
    up = ch.upper()
    if len(up) != 1 or not _LETTER_RE.fullmatch(up):
        return None
    return up


def touch(puzzle: Crossword) -> None:
    puzzle.updated_at = now_iso()


def across_entries(puzzle: Crossword) -> list[Entry]:
    return [e for e in puzzle.entries if e.direction is Direction.ACROSS]


def down_entries(puzzle: Crossword) -> list[Entry]:
    return [e for e in puzzle.entries if e.direction is Direction.DOWN]


def entry_answer(puzzle: Crossword, entry: Entry, blank: str = "?") -> str:
    """Solution letters along *entry*, with *blank* for unset cells."""
    return "".join(puzzle.grid[r][c].solution or blank for r, c in entry.cells)
