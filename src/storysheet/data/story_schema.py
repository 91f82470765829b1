"""Maps story tab rows onto StoryNode definitions.

Columns are positional (A-Z); header text is ignored.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Sequence, Tuple

from storysheet.core.types import ChoiceStyle, SpeakerPosition
from storysheet.data.errors import SchemaError
from storysheet.domain.defs import Choice, StoryNode, Transition

STORY_COLUMNS: Dict[str, int] = {
    "node_id": 0,
    "speaker": 1,
    "text": 2,
    "speaker_position": 3,
    "speaker_image": 4,
    "left_image": 5,
    "center_image": 6,
    "right_image": 7,
    "bg_image": 8,
    "transition": 9,
    "choice_1_text": 10,
    "choice_1_target": 11,
    "choice_1_style": 12,
    "choice_2_text": 13,
    "choice_2_target": 14,
    "choice_2_style": 15,
    "choice_3_text": 16,
    "choice_3_target": 17,
    "choice_3_style": 18,
    "choice_4_text": 19,
    "choice_4_target": 20,
    "choice_4_style": 21,
    "music": 22,
    "sound_effect": 23,
    "set_flag": 24,
    "require_flag": 25,
}
STORY_COLUMN_COUNT = len(STORY_COLUMNS)

# (text, target, style) column triples, in display order.
CHOICE_GROUPS: Tuple[Tuple[int, int, int], ...] = tuple(
    (
        STORY_COLUMNS[f"choice_{slot}_text"],
        STORY_COLUMNS[f"choice_{slot}_target"],
        STORY_COLUMNS[f"choice_{slot}_style"],
    )
    for slot in range(1, 5)
)

_SPEAKER_POSITIONS: Dict[str, SpeakerPosition] = {"left": "left", "center": "center", "right": "right"}
_CHOICE_STYLES: Dict[str, ChoiceStyle] = {"danger": "danger", "subtle": "subtle"}
_TRANSITIONS = {transition.value: transition for transition in Transition}


def map_story_rows(rows: Sequence[Sequence[str]]) -> List[StoryNode]:
    """Convert parsed rows (header first) into story nodes in sheet order."""
    if len(rows) < 2:
        raise SchemaError("Story sheet must have a header row and at least one data row.")

    nodes: List[StoryNode] = []
    for row in rows[1:]:
        node = map_story_row(row)
        if node is not None:
            nodes.append(node)
    return nodes


def map_story_row(row: Sequence[str]) -> StoryNode | None:
    """Map a single data row, or return None for rows that carry no node."""
    node_id = _cell(row, "node_id")
    if not node_id:
        return None
    text = _cell(row, "text")
    if not text and not _cell(row, "choice_1_target"):
        return None

    return StoryNode(
        node_id=node_id,
        text=text,
        speaker=_optional(row, "speaker"),
        speaker_position=_SPEAKER_POSITIONS.get(_cell(row, "speaker_position").strip().lower()),
        speaker_image=_optional(row, "speaker_image"),
        left_image=_optional(row, "left_image"),
        center_image=_optional(row, "center_image"),
        right_image=_optional(row, "right_image"),
        bg_image=_optional(row, "bg_image"),
        transition=_TRANSITIONS.get(_cell(row, "transition").strip().lower(), Transition.CUT),
        choices=_parse_choices(row),
        music=_optional(row, "music"),
        sound_effect=_optional(row, "sound_effect"),
        set_flag=parse_flags(_cell(row, "set_flag")),
        require_flag=parse_flags(_cell(row, "require_flag")),
    )


def parse_flags(value: str) -> FrozenSet[str] | None:
    """Split a comma separated flag cell; an empty cell means no flags at all."""
    if not value:
        return None
    return frozenset(token.strip() for token in value.split(",") if token.strip())


def _parse_choices(row: Sequence[str]) -> Tuple[Choice, ...]:
    choices: List[Choice] = []
    for text_col, target_col, style_col in CHOICE_GROUPS:
        target = _at(row, target_col)
        if not target:
            continue
        style = _CHOICE_STYLES.get(_at(row, style_col).strip().lower())
        choices.append(Choice(text=_at(row, text_col), target=target, style=style))
    return tuple(choices)


def _at(row: Sequence[str], index: int) -> str:
    if index >= len(row):
        return ""
    return row[index]


def _cell(row: Sequence[str], column: str) -> str:
    return _at(row, STORY_COLUMNS[column])


def _optional(row: Sequence[str], column: str) -> str | None:
    return _cell(row, column) or None


__all__ = ["CHOICE_GROUPS", "STORY_COLUMNS", "STORY_COLUMN_COUNT", "map_story_row", "map_story_rows", "parse_flags"]
