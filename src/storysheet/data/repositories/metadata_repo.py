"""Repository for game metadata."""
from __future__ import annotations

from pathlib import Path
from typing import List

from storysheet.core.types import Row
from storysheet.data.metadata_schema import map_metadata_rows
from storysheet.data.paths import METADATA_FILENAME
from storysheet.data.repositories.base import SheetRepositoryBase
from storysheet.domain.defs import Metadata


class MetadataRepository(SheetRepositoryBase[Metadata]):
    """Loads the metadata tab."""

    def __init__(self, base_path: Path | str | None = None, filename: str = METADATA_FILENAME) -> None:
        super().__init__(filename, base_path)

    def _build(self, rows: List[Row]) -> Metadata:
        return map_metadata_rows(rows)

    def load(self) -> Metadata:
        return self._ensure_loaded()
