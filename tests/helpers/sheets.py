from __future__ import annotations

from typing import Sequence

from storysheet.core.events import Observer
from storysheet.data.csv_parser import format_rows
from storysheet.data.story_schema import CHOICE_GROUPS, STORY_COLUMNS, STORY_COLUMN_COUNT
from storysheet.services.sheet_service import LoadedGame, build_game

STORY_HEADER = sorted(STORY_COLUMNS, key=STORY_COLUMNS.__getitem__)


def story_row(
    node_id: str,
    text: str = "",
    *,
    choices: Sequence[Sequence[str]] = (),
    **cells: str,
) -> list[str]:
    """Build a 26-cell story row; ``choices`` holds (text, target[, style]) tuples."""
    row = [""] * STORY_COLUMN_COUNT
    row[STORY_COLUMNS["node_id"]] = node_id
    row[STORY_COLUMNS["text"]] = text
    for (text_col, target_col, style_col), choice in zip(CHOICE_GROUPS, choices):
        row[text_col] = choice[0]
        row[target_col] = choice[1]
        if len(choice) > 2:
            row[style_col] = choice[2]
    for column, value in cells.items():
        row[STORY_COLUMNS[column]] = value
    return row


def story_text(*rows: Sequence[str]) -> str:
    return format_rows([STORY_HEADER, *rows])


def metadata_text(title: str = "Test Game", start_node: str | None = None) -> str:
    rows = [["key", "value"], ["title", title]]
    if start_node:
        rows.append(["start_node", start_node])
    return format_rows(rows)


def make_game(
    *rows: Sequence[str],
    start_node: str | None = None,
    sheet_id: str = "test-sheet",
    observer: Observer | None = None,
) -> LoadedGame:
    return build_game(
        story_text(*rows),
        metadata_text(start_node=start_node),
        sheet_id=sheet_id,
        observer=observer or (lambda event: None),
    )
