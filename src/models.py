"""Data models for the crossword editor and player."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Direction(Enum):
    ACROSS = "across"
    DOWN = "down"

    @property
    def prefix(self) -> str:
        """Letter used in entry identifiers: ``A-1`` / ``D-1``."""
        return "A" if self is Direction.ACROSS else "D"

    @property
    def step(self) -> tuple[int, int]:
        """(d_row, d_col) for one cell forward along this direction."""
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    def flipped(self) -> Direction:
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


@dataclass
class Cell:
    """A single grid cell.

    A cell can belong to one across and one down entry at the same time, so
    membership is kept per direction rather than in a single field.
    """

    row: int
    col: int
    is_block: bool = False
    solution: str | None = None
    number: int | None = None
    across_id: str | None = None
    down_id: str | None = None

    @property
    def entry_ids(self) -> tuple[str, ...]:
        """Entry ids covering this cell, across first."""
        return tuple(i for i in (self.across_id, self.down_id) if i)

    def entry_id_for(self, direction: Direction) -> str | None:
        return self.across_id if direction is Direction.ACROSS else self.down_id

    def clear_index(self) -> None:
        self.number = None
        self.across_id = None
        self.down_id = None


@dataclass
class Entry:
    """One across or down word with its clue."""

    id: str
    number: int
    direction: Direction
    row: int
    col: int
    length: int
    clue: str = ""

    @property
    def cells(self) -> list[tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]


@dataclass
class Crossword:
    """A rows x cols puzzle: grid, entries and metadata."""

    rows: int
    cols: int
    grid: list[list[Cell]] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)
    title: str = ""
    author: str = ""
    updated_at: str = field(default_factory=lambda: now_iso())

    @classmethod
    def create(cls, rows: int, cols: int, title: str = "", author: str = "") -> Crossword:
        """Create a puzzle whose cells are all open. Entries are not indexed."""
        check_dimensions(rows, cols)
        return cls(rows=rows, cols=cols, grid=blank_grid(rows, cols), title=title, author=author)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.contains(row, col):
            raise OutOfBounds(f"Cell ({row},{col}) outside {self.rows}x{self.cols} grid")
        return self.grid[row][col]

    def entry(self, entry_id: str | None) -> Entry | None:
        if not entry_id:
            return None
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def iter_cells(self):
        """Yield every cell in row-major order."""
        for row in self.grid:
            yield from row


def blank_grid(rows: int, cols: int) -> list[list[Cell]]:
    return [[Cell(row=r, col=c) for c in range(cols)] for r in range(rows)]


def check_dimensions(rows: int, cols: int) -> None:
    if not isinstance(rows, int) or not isinstance(cols, int) or rows < 1 or cols < 1:
        raise InvalidDimension(f"Grid must be at least 1x1, got {rows}x{cols}")


def now_iso() -> str:
    """UTC timestamp in ISO-8601 with milliseconds and a ``Z`` suffix."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class CrosswordError(Exception):
    """Base error for crossword operations."""


class InvalidDimension(CrosswordError, ValueError):
    """Grid requested with a non-positive row or column count."""


class OutOfBounds(CrosswordError, IndexError):
    """Coordinate outside the current grid."""


class MalformedImport(CrosswordError):
    """Imported text is not a valid puzzle document."""
