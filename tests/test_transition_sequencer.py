from typing import List, Tuple

import pytest

from storysheet.core.events import EngineEvent, FadePhaseChangedEvent
from storysheet.core.scheduler import ManualScheduler
from storysheet.domain.defs import StoryNode
from storysheet.services.transition_sequencer import FadePhase, TransitionSequencer


def _make_sequencer(
    fade: float = 0.6, hold: float = 0.15
) -> Tuple[TransitionSequencer, ManualScheduler, List[str], List[EngineEvent]]:
    scheduler = ManualScheduler()
    commits: List[str] = []
    events: List[EngineEvent] = []
    sequencer = TransitionSequencer(
        scheduler,
        lambda target_id, node: commits.append(target_id),
        fade_duration=fade,
        hold_duration=hold,
        observer=events.append,
    )
    return sequencer, scheduler, commits, events


def test_full_cycle_commits_only_when_black() -> None:
    sequencer, scheduler, commits, events = _make_sequencer()

    sequencer.start("B", StoryNode("B", "text"))
    assert sequencer.phase is FadePhase.FADING_OUT
    assert sequencer.pending_target == "B"
    assert commits == []

    scheduler.advance(0.6)
    assert sequencer.phase is FadePhase.BLACK
    assert commits == ["B"]
    assert sequencer.pending_target is None

    scheduler.advance(0.15)
    assert sequencer.phase is FadePhase.FADING_IN
    assert commits == ["B"]

    scheduler.advance(0.6)
    assert sequencer.phase is FadePhase.HIDDEN
    assert sequencer.is_idle
    assert commits == ["B"]
    assert [event.phase for event in events if isinstance(event, FadePhaseChangedEvent)] == [
        "fading-out",
        "black",
        "fading-in",
        "hidden",
    ]
    assert events[1] == FadePhaseChangedEvent(phase="black", target="B")


def test_nothing_commits_before_fade_out_finishes() -> None:
    sequencer, scheduler, commits, _ = _make_sequencer()

    sequencer.start("B", StoryNode("B", "text"))
    scheduler.advance(0.59)

    assert commits == []
    assert not sequencer.is_idle


def test_restart_mid_fade_replaces_pending_target() -> None:
    sequencer, scheduler, commits, _ = _make_sequencer()

    sequencer.start("B", StoryNode("B", "text"))
    scheduler.advance(0.3)
    sequencer.start("C", StoryNode("C", "text"))
    scheduler.advance(0.3)
    assert commits == []

    scheduler.run_until_idle()
    assert commits == ["C"]
    assert sequencer.is_idle


def test_cancel_drops_pending_target() -> None:
    sequencer, scheduler, commits, _ = _make_sequencer()

    sequencer.start("B", StoryNode("B", "text"))
    sequencer.cancel()
    scheduler.run_until_idle()

    assert commits == []
    assert sequencer.phase is FadePhase.HIDDEN
    assert scheduler.pending_count == 0


def test_zero_durations_still_pass_through_every_phase() -> None:
    sequencer, scheduler, commits, events = _make_sequencer(fade=0.0, hold=0.0)

    sequencer.start("B", StoryNode("B", "text"))
    scheduler.run_until_idle()

    assert commits == ["B"]
    assert len(events) == 4


def test_overlay_opacity() -> None:
    assert FadePhase.FADING_OUT.overlay_opacity == 1.0
    assert FadePhase.BLACK.overlay_opacity == 1.0
    assert FadePhase.FADING_IN.overlay_opacity == 0.0
    assert FadePhase.HIDDEN.overlay_opacity == 0.0


def test_negative_durations_rejected() -> None:
    with pytest.raises(ValueError):
        TransitionSequencer(ManualScheduler(), lambda target_id, node: None, fade_duration=-0.1)


def test_failed_commit_still_fades_back_in() -> None:
    scheduler = ManualScheduler()

    def explode(target_id: str, node: StoryNode) -> None:
        raise OSError("disk full")

    sequencer = TransitionSequencer(scheduler, explode)
    sequencer.start("B", StoryNode("B", "text"))

    with pytest.raises(OSError):
        scheduler.advance(0.6)
    assert sequencer.phase is FadePhase.BLACK
    assert scheduler.pending_count == 1

    scheduler.run_until_idle()
    assert sequencer.is_idle
