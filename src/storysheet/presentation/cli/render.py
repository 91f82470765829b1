"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

from storysheet.services.story_service import ChoiceView, StoryNodeView

_TEXT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when STORYSHEET_DEBUG is explicitly set to '1'."""
    return os.getenv("STORYSHEET_DEBUG") == "1"


def wrap_paragraphs(text: str, width: int = _TEXT_WIDTH) -> list[str]:
    """Wrap each paragraph of ``text`` on word boundaries, keeping blank lines."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(textwrap.wrap(paragraph, width=width, break_long_words=False, break_on_hyphens=False))
    return lines


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def format_choice(index: int, choice: ChoiceView) -> str:
    marker = {"danger": " (!)", "subtle": " (~)"}.get(choice.style or "", "")
    return f"{index}. {choice.label}{marker}"


def render_node(view: StoryNodeView) -> None:
    """Render the current node's speaker, text and choices."""
    print()
    if debug_enabled():
        print(f"[{view.node_id}] bg={view.background} music={view.music} scene={view.scene_generation}")
    if view.speaker:
        print(f"{view.speaker}:")
    for line in wrap_paragraphs(view.text):
        print(line)
    render_choices(view.choices)


def render_choices(choices: Sequence[ChoiceView]) -> None:
    """Display numbered story choices."""
    if not choices:
        return
    print()
    for idx, choice in enumerate(choices, start=1):
        print(format_choice(idx, choice))


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_text_page(title: str, content: str | None) -> None:
    """Print a credits/about style page."""
    render_heading(title)
    for line in wrap_paragraphs(content or "Nothing here yet."):
        print(line)
