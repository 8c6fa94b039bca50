"""
Scheduler tests on a real event loop with short intervals.
"""

import asyncio

import pytest

from lifecycle.scheduler import Scheduler
from lifecycle.task_registry import TaskRegistry, TaskCategory


@pytest.mark.asyncio
async def test_one_shot_timer_fires_once():
    scheduler = Scheduler()
    calls = []

    timer = scheduler.add_timer(0.01, lambda: calls.append("x"), description="once")
    await asyncio.sleep(0.08)

    assert calls == ["x"]
    assert timer.fired == 1
    assert not timer.active
    assert scheduler.active_timers() == []


@pytest.mark.asyncio
async def test_repeating_timer_survives_callback_errors():
    scheduler = Scheduler()
    calls = []

    def flaky():
        calls.append(len(calls))
        if len(calls) == 1:
            raise RuntimeError("first tick fails")

    timer = scheduler.add_timer(0.01, flaky, repeat=True, description="poll")
    await asyncio.sleep(0.1)
    timer.cancel()
    await asyncio.sleep(0)

    assert len(calls) >= 3
    assert not timer.active


@pytest.mark.asyncio
async def test_map_change_cancels_only_flagged_timers():
    scheduler = Scheduler()
    fired = []

    drain = scheduler.add_timer(0.05, lambda: fired.append("drain"), stop_on_map_change=True)
    poll = scheduler.add_timer(0.05, lambda: fired.append("poll"))

    assert scheduler.on_map_change() == 1
    await asyncio.sleep(0.1)

    assert fired == ["poll"]
    assert not drain.active
    assert not poll.active


@pytest.mark.asyncio
async def test_cancel_all():
    scheduler = Scheduler()
    scheduler.add_timer(10, lambda: None, repeat=True)
    scheduler.add_timer(10, lambda: None)

    assert scheduler.cancel_all() == 2
    await asyncio.sleep(0)
    assert scheduler.active_timers() == []


@pytest.mark.asyncio
async def test_next_tick_runs_after_current_callback():
    scheduler = Scheduler()
    order = []

    scheduler.next_tick(order.append, "deferred")
    order.append("now")
    assert order == ["now"]

    await asyncio.sleep(0)
    assert order == ["now", "deferred"]


@pytest.mark.asyncio
async def test_next_tick_errors_are_contained():
    scheduler = Scheduler()
    order = []

    def broken():
        raise ValueError("bad tick")

    scheduler.next_tick(broken)
    scheduler.next_tick(order.append, "still runs")
    await asyncio.sleep(0)

    assert order == ["still runs"]


@pytest.mark.asyncio
async def test_timers_are_tracked():
    scheduler = Scheduler()
    timer = scheduler.add_timer(10, lambda: None, description="Drain delay")

    records = TaskRegistry.instance().active(TaskCategory.TIMER)
    assert len(records) == 1
    assert "Drain delay" in records[0].info.description

    timer.cancel()
    await asyncio.sleep(0)
    assert TaskRegistry.instance().active(TaskCategory.TIMER) == []


def test_now_is_monotonic():
    scheduler = Scheduler()
    first = scheduler.now()
    assert scheduler.now() >= first
