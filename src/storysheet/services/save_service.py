"""Serialization helpers for save data."""
from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Protocol

from storysheet.domain.state import GameState
from storysheet.services.errors import SaveLoadError

SavePayload = Dict[str, Any]


class SaveStore(Protocol):
    """Key-value persistence for save payloads, keyed by sheet id."""

    def has_save(self, sheet_id: str) -> bool: ...

    def read(self, sheet_id: str) -> SavePayload | None: ...

    def write(self, sheet_id: str, payload: SavePayload) -> None: ...

    def delete(self, sheet_id: str) -> None: ...


class MemorySaveStore:
    """In-process SaveStore."""

    def __init__(self) -> None:
        self._saves: Dict[str, SavePayload] = {}

    def has_save(self, sheet_id: str) -> bool:
        return sheet_id in self._saves

    def read(self, sheet_id: str) -> SavePayload | None:
        payload = self._saves.get(sheet_id)
        return copy.deepcopy(payload) if payload is not None else None

    def write(self, sheet_id: str, payload: SavePayload) -> None:
        self._saves[sheet_id] = copy.deepcopy(payload)

    def delete(self, sheet_id: str) -> None:
        self._saves.pop(sheet_id, None)


class SaveService:
    """Converts GameState to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def __init__(self, node_ids: Mapping[str, object] | None = None) -> None:
        self._node_ids = node_ids

    def serialize(self, state: GameState, sheet_id: str) -> SavePayload:
        """Return a JSON-serializable payload for persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "sheet_id": sheet_id,
            "current_node_id": state.current_node_id,
            "flags": sorted(state.flags),
            "history": list(state.history),
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def deserialize(self, payload: Mapping[str, Any], *, sheet_id: str | None = None) -> GameState:
        """Rehydrate a GameState from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("save_version")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported save version: {version!r}.")

        saved_sheet_id = self._require_str(payload.get("sheet_id"), "save.sheet_id")
        if sheet_id is not None and saved_sheet_id != sheet_id:
            raise SaveLoadError("Save file is for a different game.")

        current_node_id = self._require_str(payload.get("current_node_id"), "save.current_node_id")
        if self._node_ids is not None and current_node_id not in self._node_ids:
            raise SaveLoadError(f"Save references unknown story node: {current_node_id}")
        self._require_str(payload.get("saved_at"), "save.saved_at")

        return GameState(
            current_node_id=current_node_id,
            flags=frozenset(self._require_str_list(payload.get("flags"), "save.flags")),
            history=tuple(self._require_str_list(payload.get("history"), "save.history")),
        )

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    def _require_str_list(self, value: Any, context: str) -> List[str]:
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        return [self._require_str(entry, f"{context} entry") for entry in value]
