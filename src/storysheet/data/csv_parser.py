"""Quote-aware parser for comma-delimited sheet exports.

The parser is a single pass over the input with two states, inside a quoted
section or not. Unquoted whitespace around a cell is trimmed; anything that
appeared between quotes is kept verbatim apart from ``""`` unescaping.
``\\n``, ``\\r\\n`` and a lone ``\\r`` all end a row, and a final row without a
terminator is still emitted.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from storysheet.core.types import Row

DELIMITER = ","
QUOTE = '"'
_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n", "\r")


class _CellBuffer:
    """Accumulates one cell and remembers where its quoted span lies."""

    __slots__ = ("chars", "quoted_start", "quoted_end")

    def __init__(self) -> None:
        self.chars: List[str] = []
        self.quoted_start: int | None = None
        self.quoted_end: int | None = None

    def open_quote(self) -> None:
        if self.quoted_start is None:
            self.quoted_start = len(self.chars)

    def close_quote(self) -> None:
        self.quoted_end = len(self.chars)

    @property
    def touched(self) -> bool:
        return bool(self.chars) or self.quoted_start is not None

    def finish(self) -> str:
        text = "".join(self.chars)
        if self.quoted_start is None:
            return text.strip()
        end = self.quoted_end if self.quoted_end is not None else len(text)
        head = text[: self.quoted_start].lstrip()
        tail = text[end:].rstrip()
        return head + text[self.quoted_start : end] + tail


def parse_rows(text: str) -> List[Row]:
    """Split delimited text into rows of cells."""
    rows: List[Row] = []
    row: Row = []
    cell = _CellBuffer()
    in_quotes = False
    index = 0
    length = len(text)

    while index < length:
        char = text[index]
        if in_quotes:
            if char == QUOTE:
                if index + 1 < length and text[index + 1] == QUOTE:
                    cell.chars.append(QUOTE)
                    index += 1
                else:
                    in_quotes = False
                    cell.close_quote()
            else:
                cell.chars.append(char)
        elif char == QUOTE:
            in_quotes = True
            cell.open_quote()
        elif char == DELIMITER:
            row.append(cell.finish())
            cell = _CellBuffer()
        elif char == "\n" or char == "\r":
            row.append(cell.finish())
            rows.append(row)
            row = []
            cell = _CellBuffer()
            if char == "\r" and index + 1 < length and text[index + 1] == "\n":
                index += 1
        else:
            cell.chars.append(char)
        index += 1

    if cell.touched or row:
        row.append(cell.finish())
        rows.append(row)
    return rows


def format_cell(value: str) -> str:
    """Quote a cell only when parsing it back would otherwise change it."""
    if any(token in value for token in _NEEDS_QUOTING) or value != value.strip():
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def format_rows(rows: Iterable[Sequence[str]]) -> str:
    """Serialize rows so that ``parse_rows`` yields them back unchanged."""
    return "".join(DELIMITER.join(format_cell(cell) for cell in row) + "\n" for row in rows)


__all__ = ["format_cell", "format_rows", "parse_rows"]
