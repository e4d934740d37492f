"""Derive entries and cell numbers from block placement."""

from __future__ import annotations

from models import Crossword, Direction, Entry, now_iso


def reindex(puzzle: Crossword) -> None:
    """Scan L→R, T→B, rebuild entries and numbers, keep clues whose id recurs."""
    old_clues = {entry.id: entry.clue for entry in puzzle.entries}
    entries: list[Entry] = []
    counter = 1

    for cell in puzzle.iter_cells():
        cell.clear_index()

    for r in range(puzzle.rows):
        for c in range(puzzle.cols):
            cell = puzzle.grid[r][c]
            if cell.is_block:
                continue

            started = False
            for direction in (Direction.ACROSS, Direction.DOWN):
                if not starts_entry(puzzle, r, c, direction):
                    continue
                entry_id = f"{direction.prefix}-{counter}"
                entry = Entry(
                    id=entry_id,
                    number=counter,
                    direction=direction,
                    row=r,
                    col=c,
                    length=run_length(puzzle, r, c, direction),
                    clue=old_clues.get(entry_id, ""),
                )
                entries.append(entry)
                _stamp(puzzle, entry)
                started = True

            if started:
                cell.number = counter
                counter += 1

    puzzle.entries = entries
    puzzle.updated_at = now_iso()


def starts_entry(puzzle: Crossword, r: int, c: int, direction: Direction) -> bool:
    if direction is Direction.ACROSS:
        return _starts_across(puzzle, r, c)
    return _starts_down(puzzle, r, c)


def run_length(puzzle: Crossword, r: int, c: int, direction: Direction) -> int:
    """Count open cells from (r, c) forward until a block or the grid edge."""
    dr, dc = direction.step
    length = 0
    while puzzle.contains(r + dr * length, c + dc * length):
        if puzzle.grid[r + dr * length][c + dc * length].is_block:
            break
        length += 1
    return length


def entry_ids_in_scan_order(puzzle: Crossword) -> list[str]:
    """Distinct entry ids met in a row-major walk, across before down per cell."""
    seen: set[str] = set()
    ordered: list[str] = []
    for cell in puzzle.iter_cells():
        for entry_id in cell.entry_ids:
            if entry_id not in seen:
                seen.add(entry_id)
                ordered.append(entry_id)
    return ordered


def _stamp(puzzle: Crossword, entry: Entry) -> None:
    for r, c in entry.cells:
        cell = puzzle.grid[r][c]
        if entry.direction is Direction.ACROSS:
            cell.across_id = entry.id
        else:
            cell.down_id = entry.id


def _starts_across(puzzle: Crossword, r: int, c: int) -> bool:
    """Left is block/edge AND right is open."""
    if puzzle.grid[r][c].is_block:
        return False
    left_is_edge_or_block = (c == 0) or puzzle.grid[r][c - 1].is_block
    right_is_open = (c + 1 < puzzle.cols) and not puzzle.grid[r][c + 1].is_block
    return left_is_edge_or_block and right_is_open


def _starts_down(puzzle: Crossword, r: int, c: int) -> bool:
    """Top is block/edge AND bottom is open."""
    if puzzle.grid[r][c].is_block:
        return False
    top_is_edge_or_block = (r == 0) or puzzle.grid[r - 1][c].is_block
    bottom_is_open = (r + 1 < puzzle.rows) and not puzzle.grid[r + 1][c].is_block
    return top_is_edge_or_block and bottom_is_open
