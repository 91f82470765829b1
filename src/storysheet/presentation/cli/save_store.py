"""File-system SaveStore with one JSON file per sheet."""
from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict

from storysheet.presentation.cli import config
from storysheet.services.errors import SaveLoadError


class FileSaveStore:
    """Handles per-sheet persistence on disk."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()

    def has_save(self, sheet_id: str) -> bool:
        """Return True if the sheet has save data on disk."""
        return self._save_path(sheet_id).exists()

    def read(self, sheet_id: str) -> Dict[str, Any] | None:
        """Load the stored payload, or None when nothing was saved yet."""
        path = self._save_path(sheet_id)
        if not path.exists():
            return None
        return self._read_json(path)

    def write(self, sheet_id: str, payload: Dict[str, Any]) -> None:
        """Persist the payload for the sheet."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._save_path(sheet_id)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def delete(self, sheet_id: str) -> None:
        """Delete the sheet's payload if it exists."""
        try:
            self._save_path(sheet_id).unlink()
        except FileNotFoundError:
            return

    @staticmethod
    def write_export(payload: Dict[str, Any], destination: Path) -> None:
        """Write a save payload to a standalone file for sharing."""
        destination.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    @staticmethod
    def read_export(source: Path) -> Dict[str, Any]:
        """Read an exported save file without storing it."""
        return FileSaveStore._read_json(source)

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SaveLoadError(f"Unable to read save file: {path}") from exc
        except ValueError as exc:
            raise SaveLoadError(f"Invalid save file: {path}") from exc
        if not isinstance(payload, dict):
            raise SaveLoadError(f"Invalid save file: {path}")
        return payload

    def _save_path(self, sheet_id: str) -> Path:
        digest = hashlib.sha1(sheet_id.encode("utf-8")).hexdigest()[:16]
        return self._base_dir / f"save_{digest}.json"
