"""Low-level text helpers for repositories."""
from __future__ import annotations

from pathlib import Path

from .errors import DataLoadError


def load_text(path: Path) -> str:
    """Read an exported sheet tab and raise DataLoadError on failure."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        raise DataLoadError(f"Sheet file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read sheet file: {path}") from exc

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DataLoadError(f"Sheet file is not valid UTF-8: {path}: {exc}") from exc
