"""Helpers for resolving sheet file locations."""
from __future__ import annotations

from pathlib import Path

STORY_FILENAME = "story.csv"
METADATA_FILENAME = "metadata.csv"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_sheets_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing exported sheet tabs."""
    if base_path is not None:
        return Path(base_path)
    return get_repo_root() / "data" / "sheets"
