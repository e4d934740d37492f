"""Key-value persistence for the editor puzzle and the player session."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from models import Crossword, Direction, MalformedImport
from serialization import puzzle_from_dict, puzzle_to_dict

KEY_EDITOR = "cw_editor_current"
KEY_PLAYER = "cw_player_state"


class KeyValueStore:
    """Storage port: string values under string keys."""

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` file per slot inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._path(key).write_text(value, encoding="utf-8")


@dataclass
class PlayerState:
    """Solver progress for one puzzle, matched by title."""

    title: str
    user_grid: list[list[str]] = field(default_factory=list)
    direction: Direction = Direction.ACROSS
    selection: tuple[int, int] = (0, 0)

    def to_dict(self) -> dict[str, Any]:
        r, c = self.selection
        return {
            "title": self.title,
            "userGrid": self.user_grid,
            "dir": self.direction.value,
            "sel": {"r": r, "c": c},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        sel = data.get("sel") or {}
        return cls(
            title=data.get("title") or "",
            user_grid=[[str(v or "") for v in row] for row in data.get("userGrid") or []],
            direction=Direction(data.get("dir") or Direction.ACROSS.value),
            selection=(int(sel.get("r", 0)), int(sel.get("c", 0))),
        )


class PuzzleStorage:
    """The two independent slots: current editor puzzle and player session."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save_editor(self, puzzle: Crossword) -> None:
        self.store.set(KEY_EDITOR, json.dumps(puzzle_to_dict(puzzle), ensure_ascii=False))

    def load_editor(self) -> Crossword | None:
        data = self._load(KEY_EDITOR)
        if data is None:
            return None
        try:
            return puzzle_from_dict(data)
        except MalformedImport as e:
            print(f"Warning: ignoring stored editor puzzle ({e})", file=sys.stderr)
            return None

    def save_player(self, state: PlayerState) -> None:
        self.store.set(KEY_PLAYER, json.dumps(state.to_dict(), ensure_ascii=False))

    def load_player(self) -> PlayerState | None:
        data = self._load(KEY_PLAYER)
        if not isinstance(data, dict):
            return None
        try:
            return PlayerState.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            print(f"Warning: ignoring stored player state ({e})", file=sys.stderr)
            return None

    def _load(self, key: str) -> Any:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            print(f"Warning: unreadable storage slot '{key}' ({e})", file=sys.stderr)
            return None
