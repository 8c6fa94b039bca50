from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.drain_scheduler import DrainScheduler

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TimerShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the poll / drain / quit timers.

    Stops the drain scheduler so no timer fires while the rest of the
    plugin is being torn down.

    Priority: 90 (first)
    """

    def __init__(self, drain: "DrainScheduler"):
        self.drain = drain

    @property
    def shutdown_priority(self) -> int:
        return 90

    async def shutdown(self) -> None:
        cancelled = self.drain.stop()
        log.info(f"Stopped update timers ({cancelled} cancelled)")
