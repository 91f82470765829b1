"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


@dataclass(frozen=True, slots=True)
class GameState:
    """Position, accumulated flags and visited nodes of one play-through.

    ``history`` holds the nodes left behind, oldest first.
    """

    current_node_id: str
    flags: FrozenSet[str] = field(default_factory=frozenset)
    history: Tuple[str, ...] = field(default_factory=tuple)
