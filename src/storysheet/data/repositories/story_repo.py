"""Repository for story node definitions."""
from __future__ import annotations

from pathlib import Path
from typing import List

from storysheet.core.types import Row
from storysheet.data.paths import STORY_FILENAME
from storysheet.data.repositories.base import SheetRepositoryBase
from storysheet.data.story_schema import map_story_rows
from storysheet.domain.defs import StoryNode


class StoryRepository(SheetRepositoryBase[List[StoryNode]]):
    """Loads the story tab and maps it onto nodes."""

    def __init__(self, base_path: Path | str | None = None, filename: str = STORY_FILENAME) -> None:
        super().__init__(filename, base_path)

    def _build(self, rows: List[Row]) -> List[StoryNode]:
        return map_story_rows(rows)

    def all(self) -> list[StoryNode]:
        """Return every node in sheet order."""
        return list(self._ensure_loaded())
