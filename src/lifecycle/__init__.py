"""
Lifecycle subsystem
-------------------

Exports the public API for:
- cooperative timers
- task tracking & introspection
- unload sequence and its handlers

External code should import from:
    from lifecycle import Scheduler, ShutdownCoordinator, TaskRegistry
    from lifecycle.handlers import TimerShutdownHandler
"""

from .scheduler import Scheduler, Timer
from .shutdown_coordinator import ShutdownCoordinator
from .task_registry import TaskRegistry, TaskCategory, TaskInfo, create_tracked_task
from .shutdown_protocol import IShutdownHandler
from . import handlers

__all__ = [
    "Scheduler",
    "Timer",
    "ShutdownCoordinator",
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "create_tracked_task",
    "IShutdownHandler",
    "handlers",
]
