"""Player mode: cursor navigation, letter entry and progress tracking."""

from __future__ import annotations

from answer_validator import check_answers, empty_user_grid, is_complete
from indexer import entry_ids_in_scan_order
from models import Crossword, Direction, Entry
from puzzle_engine import normalize_letter
from storage import PlayerState, PuzzleStorage

ARROW_KEYS = {
    "ArrowLeft": (0, -1),
    "ArrowRight": (0, 1),
    "ArrowUp": (-1, 0),
    "ArrowDown": (1, 0),
}
DELETE_KEYS = ("Backspace", "Delete")


class PlayerSession:
    """Solver state for one puzzle.

    Holds the working grid, the error mask, the completion flag, the typing
    direction and the selected cell. Every input is handled synchronously;
    state is written to *storage* (when given) after letter entry, direction
    changes, entry jumps and resets.
    """

    def __init__(
        self,
        puzzle: Crossword,
        storage: PuzzleStorage | None = None,
        user_grid: list[list[str]] | None = None,
        direction: Direction = Direction.ACROSS,
        selection: tuple[int, int] | None = None,
    ) -> None:
        self.puzzle = puzzle
        self.storage = storage
        self.user_grid = user_grid or empty_user_grid(puzzle.rows, puzzle.cols)
        self.direction = direction
        self.selection = selection if self._selectable(selection) else self._first_open()
        self.errors = check_answers(puzzle, self.user_grid)
        self.completed = is_complete(puzzle, self.user_grid)

    @classmethod
    def start(cls, puzzle: Crossword, storage: PuzzleStorage | None = None) -> PlayerSession:
        """Open a session, resuming stored progress when it belongs to *puzzle*."""
        saved = storage.load_player() if storage is not None else None
        if saved is None or saved.title != puzzle.title or not _fits(saved.user_grid, puzzle):
            return cls(puzzle, storage)
        return cls(
            puzzle,
            storage,
            user_grid=saved.user_grid,
            direction=saved.direction,
            selection=saved.selection,
        )

    # ── Persistence ──────────────────────────────────────────────────

    def save_state(self) -> None:
        if self.storage is None:
            return
        self.storage.save_player(
            PlayerState(
                title=self.puzzle.title,
                user_grid=self.user_grid,
                direction=self.direction,
                selection=self.selection,
            )
        )

    # ── Cursor ───────────────────────────────────────────────────────

    def select(self, row: int, col: int) -> None:
        if self.puzzle.cell(row, col).is_block:
            return
        self.selection = (row, col)

    def move(self, d_row: int, d_col: int) -> None:
        """Single step; ignored if it would leave the grid or land on a block."""
        r, c = self.selection[0] + d_row, self.selection[1] + d_col
        if self._selectable((r, c)):
            self.selection = (r, c)

    def step(self, sign: int) -> None:
        """Advance along the typing direction to the next open cell, if any."""
        if sign == 0:
            return
        unit = 1 if sign > 0 else -1
        dr, dc = self.direction.step
        dr, dc = dr * unit, dc * unit
        limit = self.puzzle.cols if self.direction is Direction.ACROSS else self.puzzle.rows
        r, c = self.selection
        for _ in range(limit):
            r, c = r + dr, c + dc
            if not self.puzzle.contains(r, c):
                break
            if not self.puzzle.grid[r][c].is_block:
                self.selection = (r, c)
                break

    def toggle_direction(self) -> None:
        self.direction = self.direction.flipped()
        self.save_state()

    def current_entry(self) -> Entry | None:
        """Entry under the cursor, preferring the typing direction."""
        cell = self.puzzle.cell(*self.selection)
        entry_id = cell.entry_id_for(self.direction)
        if entry_id is None and cell.entry_ids:
            entry_id = cell.entry_ids[0]
        return self.puzzle.entry(entry_id)

    def jump_next_entry(self, sign: int = 1) -> None:
        """Move to the start of the next (or previous) entry, wrapping around."""
        ids = entry_ids_in_scan_order(self.puzzle)
        if not ids:
            return
        here = self.current_entry()
        if here is not None and here.id in ids:
            next_id = ids[(ids.index(here.id) + sign) % len(ids)]
        else:
            next_id = ids[0] if sign > 0 else ids[-1]
        entry = self.puzzle.entry(next_id)
        if entry is None:
            return
        self.direction = entry.direction
        self.selection = (entry.row, entry.col)
        self.save_state()

    # ── Letters ──────────────────────────────────────────────────────

    def put(self, ch: str, row: int | None = None, col: int | None = None) -> None:
        """Write an already-normalized letter ('' clears) into the working grid."""
        if row is None or col is None:
            row, col = self.selection
        if self.puzzle.cell(row, col).is_block:
            return
        self.user_grid[row][col] = ch
        self.check()
        self.completed = is_complete(self.puzzle, self.user_grid)
        self.save_state()

    def reveal_cell(self) -> None:
        solution = self.puzzle.cell(*self.selection).solution
        if solution:
            self.put(solution, *self.selection)

    def reveal_word(self) -> None:
        entry = self.current_entry()
        if entry is None:
            return
        for r, c in entry.cells:
            solution = self.puzzle.grid[r][c].solution
            if solution:
                self.put(solution, r, c)

    def check(self) -> list[list[bool]]:
        self.errors = check_answers(self.puzzle, self.user_grid)
        return self.errors

    def reset(self) -> None:
        self.user_grid = empty_user_grid(self.puzzle.rows, self.puzzle.cols)
        self.check()
        self.completed = False
        self.save_state()

    # ── Keyboard ─────────────────────────────────────────────────────

    def handle_key(self, key: str) -> None:
        """Dispatch one key press the way the player grid reacts to it."""
        if key in ARROW_KEYS:
            self.move(*ARROW_KEYS[key])
        elif key == "Tab":
            self.jump_next_entry(1)
        elif key == "ShiftTab":
            self.jump_next_entry(-1)
        elif key in DELETE_KEYS:
            self.put("")
            self.step(-1)
        else:
            letter = normalize_letter(key)
            if letter is not None:
                self.put(letter)
                self.step(1)

    # ── Helpers ──────────────────────────────────────────────────────

    def _selectable(self, pos: tuple[int, int] | None) -> bool:
        if pos is None or not self.puzzle.contains(*pos):
            return False
        return not self.puzzle.grid[pos[0]][pos[1]].is_block

    def _first_open(self) -> tuple[int, int]:
        for cell in self.puzzle.iter_cells():
            if not cell.is_block:
                return (cell.row, cell.col)
        return (0, 0)


def _fits(user_grid: list[list[str]], puzzle: Crossword) -> bool:
    return len(user_grid) == puzzle.rows and all(len(row) == puzzle.cols for row in user_grid)
