"""Editor mode: authoring operations that persist after every change."""

from __future__ import annotations

import puzzle_engine
from models import Crossword, Entry
from serialization import export_filename, export_puzzle, import_puzzle
from storage import PuzzleStorage

BLOCK_KEYS = ("#", ".")
DELETE_KEYS = ("Backspace", "Delete")


class EditorSession:
    def __init__(self, puzzle: Crossword, storage: PuzzleStorage | None = None) -> None:
        self.puzzle = puzzle
        self.storage = storage

    @classmethod
    def open(cls, storage: PuzzleStorage | None = None) -> EditorSession:
        """Resume the stored editor puzzle, or start a default empty one."""
        puzzle = storage.load_editor() if storage is not None else None
        if puzzle is None:
            puzzle = puzzle_engine.create_empty()
        return cls(puzzle, storage)

    @property
    def across_entries(self) -> list[Entry]:
        return puzzle_engine.across_entries(self.puzzle)

    @property
    def down_entries(self) -> list[Entry]:
        return puzzle_engine.down_entries(self.puzzle)

    def new_grid(self, rows: int, cols: int) -> None:
        """Replace the puzzle with an empty one, keeping title and author."""
        self.puzzle = puzzle_engine.create_empty(
            rows,
            cols,
            self.puzzle.title or puzzle_engine.DEFAULT_TITLE,
            self.puzzle.author or puzzle_engine.DEFAULT_AUTHOR,
        )
        self.persist()

    def toggle_block(self, row: int, col: int) -> None:
        puzzle_engine.toggle_block(self.puzzle, row, col)
        self.persist()

    def type_key(self, row: int, col: int, key: str) -> None:
        """Apply one key press to the cell at (row, col)."""
        if key in DELETE_KEYS:
            puzzle_engine.set_letter(self.puzzle, row, col, None)
            self.persist()
        elif key in BLOCK_KEYS:
            self.toggle_block(row, col)
        elif len(key) == 1:
            puzzle_engine.set_letter(self.puzzle, row, col, key)
            self.persist()

    def set_clue(self, entry_id: str, text: str) -> None:
        puzzle_engine.set_clue(self.puzzle, entry_id, text)
        self.persist()

    def resize(self, rows: int, cols: int) -> None:
        puzzle_engine.resize(self.puzzle, rows, cols)
        self.persist()

    def export(self) -> tuple[str, str]:
        """(download file name, JSON text)."""
        return export_filename(self.puzzle), export_puzzle(self.puzzle)

    def import_text(self, text: str) -> None:
        """Replace the puzzle with *text*.

        Raises MalformedImport and keeps the current puzzle when *text* does
        not parse.
        """
        puzzle = import_puzzle(text)
        self.puzzle = puzzle
        self.persist()

    def persist(self) -> None:
        if self.storage is not None:
            self.storage.save_editor(self.puzzle)
