"""Background, character slot and music persistence between nodes.

Media cells follow a persistence-by-omission rule: a value replaces what is
shown, ``clear``/``none`` removes it and an empty cell keeps it.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from storysheet.domain.defs import StoryNode

CLEAR_VALUES = frozenset({"clear", "none"})
STOP_MUSIC = "stop"


@dataclass(frozen=True, slots=True)
class SceneState:
    """What remains on stage after entering a node.

    ``generation`` increases each time a node sets a background different from
    the one currently shown; character slots are emptied when it does.
    """

    background: str | None = None
    left: str | None = None
    center: str | None = None
    right: str | None = None
    music: str | None = None
    generation: int = 0


def apply_media_value(current: str | None, value: str | None) -> str | None:
    if not value:
        return current
    if value.lower() in CLEAR_VALUES:
        return None
    return value


def resolve_slot_images(node: StoryNode) -> tuple[str | None, str | None, str | None]:
    """Return (left, center, right) with the speaker image in its own slot."""
    left, center, right = node.left_image, node.center_image, node.right_image
    if node.speaker_image:
        if node.speaker_position == "left":
            left = node.speaker_image
        elif node.speaker_position == "center":
            center = node.speaker_image
        elif node.speaker_position == "right":
            right = node.speaker_image
    return left, center, right


def advance_scene(scene: SceneState, node: StoryNode) -> SceneState:
    """Return the scene shown once ``node`` has been entered."""
    background = apply_media_value(scene.background, node.bg_image)
    generation = scene.generation
    slots = scene
    if node.bg_image and background != scene.background:
        generation += 1
        slots = SceneState()

    left, center, right = resolve_slot_images(node)
    music = scene.music
    if node.music:
        music = None if node.music.lower() == STOP_MUSIC else node.music

    return replace(
        scene,
        background=background,
        left=apply_media_value(slots.left, left),
        center=apply_media_value(slots.center, center),
        right=apply_media_value(slots.right, right),
        music=music,
        generation=generation,
    )
