"""Tests for indexer.py."""

import random

import pytest

import indexer
from indexer import (
    _starts_across,
    _starts_down,
    entry_ids_in_scan_order,
    reindex,
    run_length,
)
from models import Crossword, Direction


def _make_puzzle(rows, cols, blocks=()):
    puzzle = Crossword.create(rows, cols)
    for r, c in blocks:
        puzzle.grid[r][c].is_block = True
    reindex(puzzle)
    return puzzle


def _layout(puzzle):
    return [(e.id, e.row, e.col, e.length) for e in puzzle.entries]


class TestScenarios:
    def test_single_cell_has_no_entries(self):
        puzzle = _make_puzzle(1, 1)
        assert puzzle.entries == []
        assert puzzle.grid[0][0].number is None

    def test_one_by_three_row(self):
        puzzle = _make_puzzle(1, 3)
        assert _layout(puzzle) == [("A-1", 0, 0, 3)]
        assert puzzle.grid[0][0].number == 1
        assert all(cell.down_id is None for cell in puzzle.grid[0])

    def test_split_row_into_single_letters(self):
        puzzle = _make_puzzle(1, 3, blocks=[(0, 1)])
        assert puzzle.entries == []
        assert all(cell.number is None for cell in puzzle.grid[0])

    def test_open_three_by_three(self):
        puzzle = _make_puzzle(3, 3)
        assert [e.id for e in puzzle.entries] == ["A-1", "D-1", "D-2", "D-3", "A-4", "A-5"]
        assert [[cell.number for cell in row] for row in puzzle.grid] == [
            [1, 2, 3],
            [4, None, None],
            [5, None, None],
        ]

    def test_center_block(self):
        puzzle = _make_puzzle(3, 3, blocks=[(1, 1)])
        assert _layout(puzzle) == [
            ("A-1", 0, 0, 3),
            ("D-1", 0, 0, 3),
            ("D-2", 0, 2, 3),
            ("A-3", 2, 0, 3),
        ]

    def test_shared_start_uses_one_number(self):
        puzzle = _make_puzzle(2, 2)
        first = [e for e in puzzle.entries if e.row == 0 and e.col == 0]
        assert {e.direction for e in first} == {Direction.ACROSS, Direction.DOWN}
        assert {e.number for e in first} == {1}

    def test_block_cells_carry_nothing(self):
        puzzle = _make_puzzle(3, 3, blocks=[(1, 1)])
        cell = puzzle.grid[1][1]
        assert cell.number is None
        assert cell.entry_ids == ()


class TestStamping:
    def test_crossing_cell_has_both_ids(self):
        puzzle = _make_puzzle(3, 3)
        assert puzzle.grid[1][1].entry_ids == ("A-4", "D-2")

    @pytest.mark.parametrize("seed", range(8))
    def test_runs_match_entries(self, seed):
        rng = random.Random(seed)
        rows, cols = rng.randint(1, 7), rng.randint(1, 7)
        blocks = [(r, c) for r in range(rows) for c in range(cols) if rng.random() < 0.25]
        puzzle = _make_puzzle(rows, cols, blocks)

        for entry in puzzle.entries:
            assert entry.length >= 2
            assert entry.length == run_length(puzzle, entry.row, entry.col, entry.direction)
            for r, c in entry.cells:
                cell = puzzle.grid[r][c]
                assert not cell.is_block
                assert cell.entry_id_for(entry.direction) == entry.id

        numbers = [cell.number for cell in puzzle.iter_cells() if cell.number is not None]
        assert numbers == list(range(1, len(numbers) + 1))

    def test_reindex_is_idempotent(self):
        puzzle = _make_puzzle(5, 5, blocks=[(0, 2), (2, 2), (4, 0)])
        before = _layout(puzzle)
        numbers = [cell.number for cell in puzzle.iter_cells()]
        reindex(puzzle)
        assert _layout(puzzle) == before
        assert [cell.number for cell in puzzle.iter_cells()] == numbers


class TestTimestamp:
    def test_reindex_refreshes_updated_at(self, monkeypatch):
        puzzle = _make_puzzle(3, 3)
        monkeypatch.setattr(indexer, "now_iso", lambda: "2030-01-01T00:00:00.000Z")
        reindex(puzzle)
        assert puzzle.updated_at == "2030-01-01T00:00:00.000Z"


class TestCluePreservation:
    def test_clue_survives_when_id_recurs(self):
        puzzle = _make_puzzle(3, 3)
        puzzle.entries[0].clue = "Top row"
        puzzle.grid[2][2].is_block = True
        reindex(puzzle)
        assert puzzle.entry("A-1").clue == "Top row"

    def test_clue_lost_when_entry_vanishes(self):
        puzzle = _make_puzzle(1, 3)
        puzzle.entries[0].clue = "Whole row"
        puzzle.grid[0][1].is_block = True
        reindex(puzzle)
        puzzle.grid[0][1].is_block = False
        reindex(puzzle)
        assert puzzle.entry("A-1").clue == ""

    def test_renumbered_entry_takes_clue_of_new_id(self):
        puzzle = _make_puzzle(3, 3)
        puzzle.entry("D-2").clue = "Middle column"
        puzzle.grid[0][1].is_block = True
        reindex(puzzle)
        # (1,1) now starts a down entry numbered 4, D-2 moved to column 2.
        assert puzzle.entry("D-2").col == 2
        assert puzzle.entry("D-2").clue == "Middle column"


class TestStartDetection:
    def test_starts_across_at_edge(self):
        puzzle = Crossword.create(1, 3)
        assert _starts_across(puzzle, 0, 0) is True
        assert _starts_across(puzzle, 0, 1) is False

    def test_starts_across_after_block(self):
        puzzle = Crossword.create(1, 4)
        puzzle.grid[0][0].is_block = True
        assert _starts_across(puzzle, 0, 1) is True

    def test_no_start_before_block(self):
        puzzle = Crossword.create(1, 3)
        puzzle.grid[0][1].is_block = True
        assert _starts_across(puzzle, 0, 0) is False

    def test_starts_down(self):
        puzzle = Crossword.create(3, 1)
        assert _starts_down(puzzle, 0, 0) is True
        assert _starts_down(puzzle, 1, 0) is False

    def test_run_length_stops_at_block(self):
        puzzle = Crossword.create(1, 5)
        puzzle.grid[0][3].is_block = True
        assert run_length(puzzle, 0, 0, Direction.ACROSS) == 3


class TestScanOrder:
    def test_distinct_ids_in_row_major_order(self):
        puzzle = _make_puzzle(3, 3)
        assert entry_ids_in_scan_order(puzzle) == ["A-1", "D-1", "D-2", "D-3", "A-4", "A-5"]

    def test_empty_when_no_entries(self):
        assert entry_ids_in_scan_order(_make_puzzle(1, 1)) == []
