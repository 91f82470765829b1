"""Timed fade that hides the moment the story switches nodes.

::

    hidden -> fading-out -(fade)-> black -(hold)-> fading-in -(fade)-> hidden

The pending target is committed exactly when ``black`` is entered, so the
content underneath only changes while the overlay is fully opaque.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Tuple

from storysheet.core.events import FadePhaseChangedEvent, Observer
from storysheet.core.scheduler import Scheduler, TimerHandle
from storysheet.domain.defs import StoryNode

DEFAULT_FADE_DURATION = 0.6
DEFAULT_HOLD_DURATION = 0.15

CommitCallback = Callable[[str, StoryNode], None]


class FadePhase(Enum):
    HIDDEN = "hidden"
    FADING_OUT = "fading-out"
    BLACK = "black"
    FADING_IN = "fading-in"

    @property
    def overlay_opacity(self) -> float:
        """Target opacity of the overlay while in this phase."""
        return 1.0 if self in (FadePhase.FADING_OUT, FadePhase.BLACK) else 0.0


class TransitionSequencer:
    """Four-phase fade driven by a scheduler.

    The sequencer does not lock out input: callers must ignore choices while
    ``is_idle`` is False. Starting again mid-fade replaces the pending target
    and restarts the fade-out.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_commit: CommitCallback,
        *,
        fade_duration: float = DEFAULT_FADE_DURATION,
        hold_duration: float = DEFAULT_HOLD_DURATION,
        observer: Observer | None = None,
    ) -> None:
        if fade_duration < 0 or hold_duration < 0:
            raise ValueError("Fade durations must be non-negative.")
        self._scheduler = scheduler
        self._on_commit = on_commit
        self._fade_duration = fade_duration
        self._hold_duration = hold_duration
        self._observer = observer
        self._phase = FadePhase.HIDDEN
        self._pending: Tuple[str, StoryNode] | None = None
        self._timer: TimerHandle | None = None

    @property
    def phase(self) -> FadePhase:
        return self._phase

    @property
    def is_idle(self) -> bool:
        return self._phase is FadePhase.HIDDEN

    @property
    def pending_target(self) -> str | None:
        return self._pending[0] if self._pending else None

    def start(self, target_id: str, target_node: StoryNode) -> None:
        """Begin fading out towards ``target_id`` without touching game state."""
        self._cancel_timer()
        self._pending = (target_id, target_node)
        self._set_phase(FadePhase.FADING_OUT)
        self._timer = self._scheduler.call_later(self._fade_duration, self._finish_fade_out)

    def cancel(self) -> None:
        """Abort any running fade, dropping the pending target."""
        self._cancel_timer()
        self._pending = None
        self._set_phase(FadePhase.HIDDEN)

    def _finish_fade_out(self) -> None:
        self._timer = None
        pending = self._pending
        self._set_phase(FadePhase.BLACK)
        self._pending = None
        try:
            if pending is not None:
                self._on_commit(*pending)
        finally:
            # A failing commit must still let the overlay fade back in.
            self._timer = self._scheduler.call_later(self._hold_duration, self._finish_hold)

    def _finish_hold(self) -> None:
        self._timer = None
        self._set_phase(FadePhase.FADING_IN)
        self._timer = self._scheduler.call_later(self._fade_duration, self._finish_fade_in)

    def _finish_fade_in(self) -> None:
        self._timer = None
        self._set_phase(FadePhase.HIDDEN)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set_phase(self, phase: FadePhase) -> None:
        if phase is self._phase:
            return
        self._phase = phase
        if self._observer is not None:
            self._observer(FadePhaseChangedEvent(phase=phase.value, target=self.pending_target))
