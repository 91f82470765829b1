"""Base repository implementation for exported sheet tabs."""
from __future__ import annotations

from pathlib import Path
from typing import Generic, List, TypeVar

from storysheet.core.types import Row
from storysheet.data import paths
from storysheet.data.csv_parser import parse_rows
from storysheet.data.sheet_loader import load_text

T = TypeVar("T")


class SheetRepositoryBase(Generic[T]):
    """Common caching and loading behavior for sheet repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._loaded: T | None = None

    @property
    def file_path(self) -> Path:
        return paths.get_sheets_path(self._base_path) / self._filename

    def _load_rows(self) -> List[Row]:
        return parse_rows(load_text(self.file_path))

    def _build(self, rows: List[Row]) -> T:
        """Convert parsed rows into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> T:
        if self._loaded is None:
            self._loaded = self._build(self._load_rows())
        return self._loaded
