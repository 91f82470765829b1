"""Story definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Tuple

from storysheet.core.types import ChoiceStyle, SpeakerPosition


class Transition(Enum):
    """How the player arrives at a node."""

    CUT = "cut"
    FADE = "fade"
    CHECKPOINT = "checkpoint"


@dataclass(frozen=True, slots=True)
class Choice:
    """One outgoing edge of a story node.

    An empty ``text`` marks an auto-advance choice.
    """

    text: str
    target: str
    style: ChoiceStyle | None = None


@dataclass(frozen=True, slots=True)
class StoryNode:
    """Fully parsed story node.

    ``set_flag`` and ``require_flag`` are ``None`` when the sheet cell was
    empty, which is distinct from a cell that held only separators.
    """

    node_id: str
    text: str
    speaker: str | None = None
    speaker_position: SpeakerPosition | None = None
    speaker_image: str | None = None
    left_image: str | None = None
    center_image: str | None = None
    right_image: str | None = None
    bg_image: str | None = None
    transition: Transition = Transition.CUT
    choices: Tuple[Choice, ...] = field(default_factory=tuple)
    music: str | None = None
    sound_effect: str | None = None
    set_flag: FrozenSet[str] | None = None
    require_flag: FrozenSet[str] | None = None

    @property
    def is_ending(self) -> bool:
        return not self.choices

    @property
    def is_auto_advance(self) -> bool:
        return len(self.choices) == 1 and not self.choices[0].text
