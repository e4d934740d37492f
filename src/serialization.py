"""JSON document format for puzzles: export, import and plain-dict conversion."""

from __future__ import annotations

import json
from typing import Any

from indexer import reindex
from models import (
    Cell,
    Crossword,
    CrosswordError,
    Direction,
    Entry,
    MalformedImport,
    check_dimensions,
    now_iso,
)
from puzzle_engine import normalize_letter


def puzzle_to_dict(puzzle: Crossword) -> dict[str, Any]:
    """Convert *puzzle* to the persisted record layout (camelCase keys)."""
    return {
        "rows": puzzle.rows,
        "cols": puzzle.cols,
        "grid": [[_cell_to_dict(cell) for cell in row] for row in puzzle.grid],
        "entries": [_entry_to_dict(entry) for entry in puzzle.entries],
        "title": puzzle.title,
        "author": puzzle.author,
        "updatedAt": puzzle.updated_at,
    }


def puzzle_from_dict(data: Any) -> Crossword:
    """Rebuild a puzzle from a record and re-index it.

    Stored entries are only trusted for their clue text; numbering and runs
    are always derived again from the grid.
    """
    try:
        if not isinstance(data, dict):
            raise MalformedImport("Puzzle document must be an object")
        rows, cols = data["rows"], data["cols"]
        check_dimensions(rows, cols)
        raw_grid = data["grid"]
        if not isinstance(raw_grid, list) or len(raw_grid) != rows:
            raise MalformedImport(f"Grid must have {rows} rows")
        grid: list[list[Cell]] = []
        for r, raw_row in enumerate(raw_grid):
            if not isinstance(raw_row, list) or len(raw_row) != cols:
                raise MalformedImport(f"Grid row {r} must have {cols} cells")
            grid.append([_cell_from_dict(raw, r, c) for c, raw in enumerate(raw_row)])
        entries = [_entry_from_dict(raw) for raw in data.get("entries") or []]
        puzzle = Crossword(
            rows=rows,
            cols=cols,
            grid=grid,
            entries=entries,
            title=_text(data.get("title")),
            author=_text(data.get("author")),
            updated_at=now_iso(),
        )
        reindex(puzzle)
        return puzzle
    except MalformedImport:
        raise
    except CrosswordError as e:
        raise MalformedImport(str(e)) from e
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedImport(f"Invalid puzzle document: {e!r}") from e


def export_puzzle(puzzle: Crossword) -> str:
    """Indented JSON text for download."""
    return json.dumps(puzzle_to_dict(puzzle), ensure_ascii=False, indent=2)


def import_puzzle(text: str) -> Crossword:
    """Parse user-supplied JSON text into a freshly indexed puzzle."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedImport(f"Not a JSON document: {e}") from e
    return puzzle_from_dict(data)


def export_filename(puzzle: Crossword) -> str:
    return f"{puzzle.title or 'crossword'}.json"


def _cell_to_dict(cell: Cell) -> dict[str, Any]:
    record: dict[str, Any] = {"row": cell.row, "col": cell.col, "isBlock": cell.is_block}
    if cell.solution is not None:
        record["solution"] = cell.solution
    if cell.number is not None:
        record["number"] = cell.number
    ids = cell.entry_ids
    if ids:
        record["entryId"] = ids[0]
        record["entryIds"] = list(ids)
    return record


def _cell_from_dict(raw: Any, r: int, c: int) -> Cell:
    if not isinstance(raw, dict):
        raise MalformedImport(f"Cell ({r},{c}) must be an object")
    is_block = raw.get("isBlock", False)
    if not isinstance(is_block, bool):
        raise MalformedImport(f"Cell ({r},{c}) isBlock must be true or false")
    stored = raw.get("solution")
    # Anything that is not a single accepted letter is dropped.
    solution = None
    if not is_block and isinstance(stored, str):
        solution = normalize_letter(stored)
    # Position always comes from the grid layout, not the stored fields.
    return Cell(row=r, col=c, is_block=is_block, solution=solution)


def _entry_to_dict(entry: Entry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "number": entry.number,
        "direction": entry.direction.value,
        "row": entry.row,
        "col": entry.col,
        "length": entry.length,
        "clue": entry.clue,
    }


def _entry_from_dict(raw: Any) -> Entry:
    if not isinstance(raw, dict):
        raise MalformedImport("Entry records must be objects")
    return Entry(
        id=str(raw["id"]),
        number=int(raw.get("number", 0)),
        direction=Direction(raw.get("direction", Direction.ACROSS.value)),
        row=int(raw.get("row", 0)),
        col=int(raw.get("col", 0)),
        length=int(raw.get("length", 0)),
        clue=_text(raw.get("clue")),
    )


def _text(value: Any) -> str:
    return "" if value is None else str(value)
