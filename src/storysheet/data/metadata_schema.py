"""Maps metadata tab rows onto a Metadata record.

Two layouts are accepted:

* key/value - one ``(key, value)`` pair per row, optionally preceded by a
  ``key,value`` header row;
* columnar - row 0 holds header labels and row 1 the matching values.

Detection looks at the first row that is not the literal ``key`` header:
when it has exactly two cells and its first cell is a known field alias the
sheet is read as key/value, otherwise as columnar. A two-row, two-column
columnar sheet whose first header is an alias is therefore read as key/value.
"""
from __future__ import annotations

import re
from typing import Dict, Sequence

from storysheet.data.errors import SchemaError
from storysheet.domain.defs import Metadata

HEADER_TOKEN = "key"

FIELD_ALIASES: Dict[str, tuple[str, ...]] = {
    "title": ("title", "game title", "game_title", "name", "game name"),
    "author": ("author", "authors", "by", "created by"),
    "description": ("description", "tagline", "summary", "subtitle"),
    "start_node": ("start_node", "startnode", "start node", "start"),
    "credits": ("credits",),
    "about": ("about",),
    "theme": ("theme",),
    "version": ("version", "game version"),
}

_ALIAS_TO_FIELD: Dict[str, str] = {
    alias: field_name for field_name, aliases in FIELD_ALIASES.items() for alias in aliases
}
_HTML_TAG = re.compile(r"<[^>]*>")


def resolve_alias(label: str) -> str | None:
    """Return the Metadata field a header label stands for, if any."""
    return _ALIAS_TO_FIELD.get(label.strip().lower())


def strip_html(value: str) -> str:
    return _HTML_TAG.sub("", value).strip()


def is_key_value_layout(rows: Sequence[Sequence[str]]) -> bool:
    for row in rows:
        if row and row[0].strip().lower() == HEADER_TOKEN:
            continue
        return len(row) == 2 and resolve_alias(row[0]) is not None
    return False


def map_metadata_rows(rows: Sequence[Sequence[str]]) -> Metadata:
    """Build Metadata from parsed rows in either supported layout."""
    if is_key_value_layout(rows):
        fields = _read_key_value(rows)
    else:
        fields = _read_columnar(rows)

    title = fields.get("title")
    if not title:
        raise SchemaError('Metadata sheet must include a "title" entry.')
    return Metadata(
        title=title,
        author=fields.get("author"),
        description=fields.get("description"),
        start_node=fields.get("start_node"),
        credits=fields.get("credits"),
        about=fields.get("about"),
        theme=fields.get("theme"),
        version=fields.get("version"),
    )


def _read_key_value(rows: Sequence[Sequence[str]]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for row in rows:
        if not row:
            continue
        key = row[0].strip().lower()
        if not key or key == HEADER_TOKEN:
            continue
        field_name = resolve_alias(key)
        value = strip_html(row[1]) if len(row) > 1 else ""
        if field_name is not None and value:
            fields[field_name] = value
    return fields


def _read_columnar(rows: Sequence[Sequence[str]]) -> Dict[str, str]:
    if not rows:
        return {}
    headers = rows[0]
    values = rows[1] if len(rows) > 1 else []
    fields: Dict[str, str] = {}
    for index, label in enumerate(headers):
        field_name = resolve_alias(label)
        if field_name is None or field_name in fields:
            continue
        value = values[index].strip() if index < len(values) else ""
        if value:
            fields[field_name] = value
    return fields


__all__ = [
    "FIELD_ALIASES",
    "HEADER_TOKEN",
    "is_key_value_layout",
    "map_metadata_rows",
    "resolve_alias",
    "strip_html",
]
