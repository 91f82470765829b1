"""Hide choices whose destination requires flags the player lacks."""
from __future__ import annotations

from typing import AbstractSet, Iterable, List, Mapping

from storysheet.core.events import ChoiceHiddenEvent, Observer
from storysheet.domain.defs import Choice, StoryNode


def is_reachable(choice: Choice, flags: AbstractSet[str], graph: Mapping[str, StoryNode]) -> bool:
    target = graph.get(choice.target)
    # Dangling targets stay visible; navigation turns them into a no-op.
    if target is None or not target.require_flag:
        return True
    return target.require_flag <= flags


def filter_choices(
    choices: Iterable[Choice],
    flags: AbstractSet[str],
    graph: Mapping[str, StoryNode],
    *,
    observer: Observer | None = None,
) -> List[Choice]:
    """Return the reachable choices, preserving their order.

    An empty result means the caller should treat the node as an ending.
    """
    visible: List[Choice] = []
    for choice in choices:
        if is_reachable(choice, flags, graph):
            visible.append(choice)
        elif observer is not None:
            required = graph[choice.target].require_flag or frozenset()
            observer(
                ChoiceHiddenEvent(
                    choice_text=choice.text or "(auto-advance)",
                    target=choice.target,
                    required=tuple(sorted(required)),
                    flags=tuple(sorted(flags)),
                )
            )
    return visible
