from .timer_shutdown_handler import TimerShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler
from .probe_client_shutdown_handler import ProbeClientShutdownHandler

__all__ = [
    "TimerShutdownHandler",
    "TaskCancellationHandler",
    "ProbeClientShutdownHandler",
]
