"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "fade_duration_ms": 600,
    "fade_hold_ms": 150,
    "asset_base_url": "",
    "continue_label": "Continue",
    "blank_branch_label": "",
}
_MAX_FADE_MS = 10_000


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Storysheet"
        return Path.home() / "Storysheet"
    return Path.home() / ".config" / "storysheet"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def _normalize_ms(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return min(max(value, 0), _MAX_FADE_MS)


def _normalize_str(value: object, default: str) -> str:
    return value if isinstance(value, str) else default


def normalize_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "fade_duration_ms": _normalize_ms(raw.get("fade_duration_ms"), DEFAULT_CONFIG["fade_duration_ms"]),
        "fade_hold_ms": _normalize_ms(raw.get("fade_hold_ms"), DEFAULT_CONFIG["fade_hold_ms"]),
        "asset_base_url": _normalize_str(raw.get("asset_base_url"), DEFAULT_CONFIG["asset_base_url"]),
        "continue_label": _normalize_str(raw.get("continue_label"), DEFAULT_CONFIG["continue_label"]),
        "blank_branch_label": _normalize_str(raw.get("blank_branch_label"), DEFAULT_CONFIG["blank_branch_label"]),
    }


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return dict(DEFAULT_CONFIG)
    if not isinstance(raw, dict):
        return dict(DEFAULT_CONFIG)
    return normalize_config(raw)

