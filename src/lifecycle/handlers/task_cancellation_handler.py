from __future__ import annotations
import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Shutdown handler for in-flight tracked tasks.

    Cancels and awaits every running task of the given categories
    (probe requests by default) so none resumes after unload.

    Priority: 60
    """

    def __init__(self, categories: Optional[List[TaskCategory]] = None):
        self.categories = categories or [TaskCategory.PROBE]

    @property
    def shutdown_priority(self) -> int:
        """Tasks are cancelled after timers."""
        return 60

    async def shutdown(self) -> None:
        """Cancel and await all matching tasks."""
        tasks = TaskRegistry.instance().get_tasks_for_shutdown(self.categories)
        if not tasks:
            log.debug("No background tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task(s)...")
        for task in tasks:
            task.cancel()

        # Wait for all tasks to finish (either complete or raise CancelledError)
        await asyncio.gather(*tasks, return_exceptions=True)
        log.debug("All tasks cancelled")
