"""Engine events and the observer seam used for diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

logger = logging.getLogger("storysheet")


@dataclass(frozen=True, slots=True)
class EngineEvent:
    """Base class for engine events."""


@dataclass(frozen=True, slots=True)
class ChoiceHiddenEvent(EngineEvent):
    choice_text: str
    target: str
    required: Tuple[str, ...]
    flags: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class NodeEnteredEvent(EngineEvent):
    node_id: str
    via: str


@dataclass(frozen=True, slots=True)
class NavigationBlockedEvent(EngineEvent):
    """A choice pointed at a node that does not exist in the graph."""

    source_node_id: str
    target: str


@dataclass(frozen=True, slots=True)
class InputLockedEvent(EngineEvent):
    """A choice arrived while a fade was still running."""

    phase: str


@dataclass(frozen=True, slots=True)
class FadePhaseChangedEvent(EngineEvent):
    phase: str
    target: str | None


@dataclass(frozen=True, slots=True)
class AutosavedEvent(EngineEvent):
    sheet_id: str
    node_id: str


@dataclass(frozen=True, slots=True)
class AutosaveFailedEvent(EngineEvent):
    """Writing the autosave failed; play continues unsaved."""

    sheet_id: str
    node_id: str
    reason: str


@dataclass(frozen=True, slots=True)
class GameLoadedEvent(EngineEvent):
    sheet_id: str
    node_count: int
    start_node: str
    title: str


@dataclass(frozen=True, slots=True)
class DuplicateNodeEvent(EngineEvent):
    node_id: str


@dataclass(frozen=True, slots=True)
class StartNodeDefaultedEvent(EngineEvent):
    node_id: str


Observer = Callable[[EngineEvent], None]

_WARNING_EVENTS = (NavigationBlockedEvent, DuplicateNodeEvent, InputLockedEvent, AutosaveFailedEvent)


def log_event(event: EngineEvent) -> None:
    """Default observer: forward events to the ``storysheet`` logger."""
    level = logging.WARNING if isinstance(event, _WARNING_EVENTS) else logging.DEBUG
    logger.log(level, "%s %s", type(event).__name__, event)


__all__ = [
    "AutosaveFailedEvent",
    "AutosavedEvent",
    "ChoiceHiddenEvent",
    "DuplicateNodeEvent",
    "EngineEvent",
    "FadePhaseChangedEvent",
    "GameLoadedEvent",
    "InputLockedEvent",
    "NavigationBlockedEvent",
    "NodeEnteredEvent",
    "Observer",
    "StartNodeDefaultedEvent",
    "log_event",
]
