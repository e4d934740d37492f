"""Tests for storage.py."""

from models import Direction
from puzzle_engine import create_empty, set_clue, toggle_block
from storage import (
    KEY_EDITOR,
    KEY_PLAYER,
    JsonFileStore,
    MemoryStore,
    PlayerState,
    PuzzleStorage,
)


class TestMemoryStore:
    def test_get_missing(self):
        assert MemoryStore().get("nope") is None

    def test_set_get(self):
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"


class TestJsonFileStore:
    def test_round_trip(self, tmp_path):
        store = JsonFileStore(tmp_path / "slots")
        store.set(KEY_EDITOR, '{"a": 1}')
        assert (tmp_path / "slots" / f"{KEY_EDITOR}.json").exists()
        assert JsonFileStore(tmp_path / "slots").get(KEY_EDITOR) == '{"a": 1}'

    def test_missing_slot(self, tmp_path):
        assert JsonFileStore(tmp_path).get(KEY_PLAYER) is None


class TestEditorSlot:
    def test_save_and_load(self):
        storage = PuzzleStorage(MemoryStore())
        puzzle = create_empty(3, 3, "Stored", "Me")
        toggle_block(puzzle, 1, 1)
        set_clue(puzzle, "A-1", "Top")
        storage.save_editor(puzzle)

        loaded = storage.load_editor()
        assert loaded.title == "Stored"
        assert loaded.grid[1][1].is_block
        assert loaded.entry("A-1").clue == "Top"

    def test_empty_slot(self):
        assert PuzzleStorage(MemoryStore()).load_editor() is None

    def test_corrupt_slot(self, capsys):
        storage = PuzzleStorage(MemoryStore({KEY_EDITOR: "{broken"}))
        assert storage.load_editor() is None
        assert "Warning" in capsys.readouterr().err

    def test_invalid_document(self, capsys):
        storage = PuzzleStorage(MemoryStore({KEY_EDITOR: '{"rows": 1}'}))
        assert storage.load_editor() is None
        assert "Warning" in capsys.readouterr().err

    def test_slots_are_independent(self):
        store = MemoryStore()
        storage = PuzzleStorage(store)
        storage.save_player(PlayerState("T", [[""]]))
        assert storage.load_editor() is None
        assert set(store.data) == {KEY_PLAYER}


class TestPlayerSlot:
    def test_save_and_load(self):
        storage = PuzzleStorage(MemoryStore())
        state = PlayerState("T", [["A", ""], ["", "B"]], Direction.DOWN, (1, 0))
        storage.save_player(state)
        assert storage.load_player() == state

    def test_record_layout(self):
        state = PlayerState("T", [["A"]], Direction.DOWN, (0, 0))
        assert state.to_dict() == {
            "title": "T", "userGrid": [["A"]], "dir": "down", "sel": {"r": 0, "c": 0},
        }

    def test_defaults_for_missing_fields(self):
        state = PlayerState.from_dict({"title": "T"})
        assert state.user_grid == []
        assert state.direction is Direction.ACROSS
        assert state.selection == (0, 0)

    def test_bad_direction(self, capsys):
        storage = PuzzleStorage(MemoryStore({KEY_PLAYER: '{"title": "T", "dir": "sideways"}'}))
        assert storage.load_player() is None
        assert "Warning" in capsys.readouterr().err

    def test_non_object(self):
        assert PuzzleStorage(MemoryStore({KEY_PLAYER: "null"})).load_player() is None
