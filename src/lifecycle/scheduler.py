"""
Scheduler
---------

Cooperative timer loop for the updater. Every timer is a tracked asyncio
task on the single event loop, so no two callbacks ever run at the same time
and shared state needs no locks.

Features:
- One-shot and repeating timers (seconds, float allowed)
- Timers flagged stop_on_map_change are cancelled by on_map_change()
- next_tick(): run a callback on the loop's next iteration; used by async
  continuations (probe results) before they touch shared state
- Callback exceptions are logged, never propagated into the loop
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DRAIN)


@dataclass(eq=False)
class Timer:
    """Handle for a scheduled callback"""
    interval: float
    callback: Callable[[], None]
    repeat: bool = False
    stop_on_map_change: bool = False
    description: str = ""
    fired: int = 0
    task: Optional[asyncio.Task] = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self.task is not None and not self.task.done()

    def cancel(self) -> None:
        if self.task is not None and not self.task.done():
            self.task.cancel()


class Scheduler:
    """
    Timer service bound to the running asyncio loop

    Example:
        scheduler = Scheduler()
        scheduler.add_timer(1800, drain.poll, repeat=True, description="Update poll")
        scheduler.add_timer(120, drain.prepare_shutdown, stop_on_map_change=True)
        scheduler.next_tick(drain.manage_update, result)
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._timers: List[Timer] = []

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        """Monotonic clock in seconds"""
        return time.monotonic()

    def add_timer(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        repeat: bool = False,
        stop_on_map_change: bool = False,
        description: str = ""
    ) -> Timer:
        """
        Schedule callback after interval seconds (every interval if repeat).

        Returns:
            Timer handle (cancel() to stop)
        """
        timer = Timer(
            interval=interval,
            callback=callback,
            repeat=repeat,
            stop_on_map_change=stop_on_map_change,
            description=description or getattr(callback, "__name__", "timer"),
        )
        timer.task = create_tracked_task(
            self._run_timer(timer),
            category=TaskCategory.TIMER,
            description=f"Timer: {timer.description} ({interval}s{', repeat' if repeat else ''})",
            loop=self._get_loop(),
        )
        self._timers.append(timer)
        timer.task.add_done_callback(lambda _t, t=timer: self._forget(t))

        log.debug(
            "Timer scheduled",
            timer=timer.description,
            interval=f"{interval}s",
            repeat=repeat,
            stop_on_map_change=stop_on_map_change
        )
        return timer

    async def _run_timer(self, timer: Timer) -> None:
        while True:
            await asyncio.sleep(timer.interval)
            timer.fired += 1
            try:
                timer.callback()
            except Exception as e:
                log.error(
                    f"Timer callback failed: {timer.description}",
                    error=str(e),
                    error_type=type(e).__name__
                )
            if not timer.repeat:
                return

    def _forget(self, timer: Timer) -> None:
        if timer in self._timers:
            self._timers.remove(timer)

    def next_tick(self, callback: Callable[..., None], *args) -> None:
        """Run callback(*args) on the loop's next iteration."""
        def _run():
            try:
                callback(*args)
            except Exception as e:
                log.error(
                    f"Deferred callback failed: {getattr(callback, '__name__', callback)}",
                    error=str(e),
                    error_type=type(e).__name__
                )

        self._get_loop().call_soon(_run)

    def on_map_change(self) -> int:
        """
        Cancel every timer flagged stop_on_map_change.

        Returns:
            Number of timers cancelled
        """
        cancelled = 0
        for timer in list(self._timers):
            if timer.stop_on_map_change and timer.active:
                timer.cancel()
                cancelled += 1
        if cancelled:
            log.info(f"Map change cancelled {cancelled} timer(s)")
        return cancelled

    def cancel_all(self) -> int:
        cancelled = 0
        for timer in list(self._timers):
            if timer.active:
                timer.cancel()
                cancelled += 1
        return cancelled

    def active_timers(self) -> List[Timer]:
        return [t for t in self._timers if t.active]
