"""Tests for models.py."""

import pytest

from models import (
    Cell,
    Crossword,
    CrosswordError,
    Direction,
    Entry,
    InvalidDimension,
    MalformedImport,
    OutOfBounds,
    now_iso,
)


class TestDirection:
    def test_values(self):
        assert Direction.ACROSS.value == "across"
        assert Direction.DOWN.value == "down"

    def test_prefix(self):
        assert Direction.ACROSS.prefix == "A"
        assert Direction.DOWN.prefix == "D"

    def test_flipped(self):
        assert Direction.ACROSS.flipped() is Direction.DOWN
        assert Direction.DOWN.flipped() is Direction.ACROSS


class TestCell:
    def test_defaults(self):
        cell = Cell(row=2, col=3)
        assert cell.is_block is False
        assert cell.solution is None
        assert cell.number is None
        assert cell.entry_ids == ()

    def test_dual_membership(self):
        cell = Cell(row=0, col=0, across_id="A-1", down_id="D-1")
        assert cell.entry_ids == ("A-1", "D-1")
        assert cell.entry_id_for(Direction.DOWN) == "D-1"

    def test_clear_index(self):
        cell = Cell(row=0, col=0, number=1, across_id="A-1", down_id="D-1")
        cell.clear_index()
        assert cell.number is None
        assert cell.entry_ids == ()


class TestEntry:
    def test_across_cells(self):
        entry = Entry("A-1", 1, Direction.ACROSS, row=1, col=2, length=3)
        assert entry.cells == [(1, 2), (1, 3), (1, 4)]

    def test_down_cells(self):
        entry = Entry("D-2", 2, Direction.DOWN, row=0, col=1, length=2)
        assert entry.cells == [(0, 1), (1, 1)]

    def test_clue_defaults_empty(self):
        assert Entry("A-1", 1, Direction.ACROSS, 0, 0, 2).clue == ""


class TestCrossword:
    def test_create_shape(self):
        puzzle = Crossword.create(3, 5)
        assert len(puzzle.grid) == 3
        assert all(len(row) == 5 for row in puzzle.grid)

    def test_positions_match(self):
        puzzle = Crossword.create(3, 4)
        for r in range(3):
            for c in range(4):
                assert (puzzle.grid[r][c].row, puzzle.grid[r][c].col) == (r, c)

    def test_cells_are_independent(self):
        puzzle = Crossword.create(2, 2)
        puzzle.grid[0][0].is_block = True
        assert puzzle.grid[0][1].is_block is False

    @pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 2)])
    def test_invalid_dimension(self, rows, cols):
        with pytest.raises(InvalidDimension):
            Crossword.create(rows, cols)

    def test_cell_out_of_bounds(self):
        puzzle = Crossword.create(2, 2)
        with pytest.raises(OutOfBounds):
            puzzle.cell(2, 0)
        with pytest.raises(OutOfBounds):
            puzzle.cell(0, -1)

    def test_entry_lookup(self):
        puzzle = Crossword.create(1, 2)
        puzzle.entries = [Entry("A-1", 1, Direction.ACROSS, 0, 0, 2)]
        assert puzzle.entry("A-1") is puzzle.entries[0]
        assert puzzle.entry("D-1") is None
        assert puzzle.entry(None) is None

    def test_iter_cells_row_major(self):
        puzzle = Crossword.create(2, 2)
        assert [(c.row, c.col) for c in puzzle.iter_cells()] == [(0, 0), (0, 1), (1, 0), (1, 1)]


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(InvalidDimension, CrosswordError)
        assert issubclass(OutOfBounds, CrosswordError)
        assert issubclass(MalformedImport, CrosswordError)
        assert issubclass(OutOfBounds, IndexError)

    def test_is_exception(self):
        with pytest.raises(CrosswordError, match="test error"):
            raise CrosswordError("test error")


def test_now_iso_format():
    stamp = now_iso()
    assert stamp.endswith("Z")
    assert "T" in stamp
