"""Navigation reducer over GameState.

Commands are applied strictly in submission order. The reducer performs no
validation: callers resolve targets against the graph and apply the choice
filter before issuing ``Navigate``.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Union

from storysheet.domain.defs import StoryNode
from storysheet.domain.state import GameState


@dataclass(frozen=True, slots=True)
class Navigate:
    target_id: str
    target_node: StoryNode


@dataclass(frozen=True, slots=True)
class Reset:
    start_node_id: str


@dataclass(frozen=True, slots=True)
class Restore:
    state: GameState


NavigationCommand = Union[Navigate, Reset, Restore]


def reduce(state: GameState, command: NavigationCommand) -> GameState:
    """Return the state that results from applying ``command``."""
    if isinstance(command, Navigate):
        flags = state.flags
        if command.target_node.set_flag:
            flags = flags | command.target_node.set_flag
        return GameState(
            current_node_id=command.target_id,
            flags=flags,
            history=state.history + (state.current_node_id,),
        )
    if isinstance(command, Reset):
        return GameState(current_node_id=command.start_node_id)
    if isinstance(command, Restore):
        return command.state
    raise TypeError(f"Unknown navigation command: {command!r}")


class NavigationStateMachine:
    """Owns the current GameState and serializes command dispatch."""

    def __init__(self, start_node_id: str) -> None:
        self._state = GameState(current_node_id=start_node_id)
        self._queue: Deque[NavigationCommand] = deque()
        self._dispatching = False

    @property
    def state(self) -> GameState:
        return self._state

    def dispatch(self, command: NavigationCommand) -> GameState:
        """Apply a command; commands issued while dispatching run afterwards."""
        self._queue.append(command)
        if self._dispatching:
            return self._state
        self._dispatching = True
        try:
            while self._queue:
                self._state = reduce(self._state, self._queue.popleft())
        finally:
            self._dispatching = False
        return self._state

    def navigate(self, target_id: str, target_node: StoryNode) -> GameState:
        return self.dispatch(Navigate(target_id, target_node))

    def reset(self, start_node_id: str) -> GameState:
        return self.dispatch(Reset(start_node_id))

    def restore(self, state: GameState) -> GameState:
        return self.dispatch(Restore(state))

    def snapshot(self) -> GameState:
        return self._state
