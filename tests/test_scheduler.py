import asyncio
from typing import List

import pytest

from storysheet.core.scheduler import AsyncioScheduler, ManualScheduler


def test_manual_scheduler_fires_in_due_order() -> None:
    scheduler = ManualScheduler()
    fired: List[str] = []
    scheduler.call_later(2.0, lambda: fired.append("late"))
    scheduler.call_later(1.0, lambda: fired.append("early"))
    scheduler.call_later(1.0, lambda: fired.append("early-second"))

    scheduler.advance(0.5)
    assert fired == []
    assert scheduler.pending_count == 3

    scheduler.advance(1.5)
    assert fired == ["early", "early-second", "late"]
    assert scheduler.now == 2.0
    assert scheduler.pending_count == 0


def test_cancelled_timers_do_not_fire() -> None:
    scheduler = ManualScheduler()
    fired: List[str] = []
    handle = scheduler.call_later(1.0, lambda: fired.append("x"))

    handle.cancel()
    scheduler.advance(5.0)

    assert fired == []
    assert scheduler.pending_count == 0


def test_timers_scheduled_from_callbacks_fire_within_window() -> None:
    scheduler = ManualScheduler()
    fired: List[float] = []

    def first() -> None:
        fired.append(scheduler.now)
        scheduler.call_later(1.0, lambda: fired.append(scheduler.now))

    scheduler.call_later(1.0, first)
    scheduler.advance(3.0)

    assert fired == [1.0, 2.0]
    assert scheduler.now == 3.0


def test_run_until_idle_drains_chain() -> None:
    scheduler = ManualScheduler()
    count = 0

    def tick() -> None:
        nonlocal count
        count += 1
        if count < 4:
            scheduler.call_later(0.5, tick)

    scheduler.call_later(0.5, tick)
    scheduler.run_until_idle()

    assert count == 4
    assert scheduler.now == 2.0


def test_run_until_idle_guards_against_endless_chains() -> None:
    scheduler = ManualScheduler()

    def forever() -> None:
        scheduler.call_later(0.0, forever)

    scheduler.call_later(0.0, forever)
    with pytest.raises(RuntimeError):
        scheduler.run_until_idle(max_steps=50)


def test_negative_delays_are_rejected() -> None:
    scheduler = ManualScheduler()

    with pytest.raises(ValueError):
        scheduler.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1.0)


def test_asyncio_scheduler_uses_running_loop() -> None:
    fired: List[str] = []

    async def scenario() -> None:
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.01, lambda: fired.append("ran"))
        cancelled = scheduler.call_later(0.01, lambda: fired.append("cancelled"))
        cancelled.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert fired == ["ran"]
