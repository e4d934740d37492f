"""Compare a solver's working grid against the puzzle solution."""

from __future__ import annotations

from models import Crossword

UserGrid = list[list[str]]


def check_answers(puzzle: Crossword, user_grid: UserGrid) -> list[list[bool]]:
    """Return a rows x cols mask, True where a typed letter is wrong.

    Blocks, cells without a solution and untouched cells are never flagged.
    """
    errors = [[False] * puzzle.cols for _ in range(puzzle.rows)]
    for r in range(puzzle.rows):
        for c in range(puzzle.cols):
            cell = puzzle.grid[r][c]
            if cell.is_block:
                continue
            typed = (_user_value(user_grid, r, c) or "").upper()
            if typed and cell.solution and typed != cell.solution:
                errors[r][c] = True
    return errors


def is_complete(puzzle: Crossword, user_grid: UserGrid) -> bool:
    """True iff every open cell has a solution and the user typed exactly it."""
    for r in range(puzzle.rows):
        for c in range(puzzle.cols):
            cell = puzzle.grid[r][c]
            if cell.is_block:
                continue
            typed = (_user_value(user_grid, r, c) or "").upper()
            if not cell.solution or typed != cell.solution:
                return False
    return True


def empty_user_grid(rows: int, cols: int) -> UserGrid:
    return [[""] * cols for _ in range(rows)]


def _user_value(user_grid: UserGrid, r: int, c: int) -> str | None:
    try:
        return user_grid[r][c]
    except IndexError:
        return None
