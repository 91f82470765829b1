"""Asset reference and narrative text helpers."""
from __future__ import annotations

SENTINEL_VALUES = frozenset({"clear", "none", "stop"})


def resolve_asset_url(value: str | None, base_url: str | None = None) -> str | None:
    """
    Turn a sheet media cell into a usable reference.

    Full ``http(s)`` URLs and the ``clear``/``none``/``stop`` sentinels pass
    through untouched. Short names are joined onto ``base_url`` when one is
    configured and returned as-is otherwise.
    """
    if not value:
        return None
    if value in SENTINEL_VALUES:
        return value
    if value.startswith(("http://", "https://")):
        return value
    if base_url:
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        return f"{base}{value}"
    return value


def prepare_text(text: str | None) -> str:
    """Normalize narrative text exported from a sheet (literal ``\\n`` escapes)."""
    if not text:
        return ""
    return text.replace("\\n", "\n").strip()
