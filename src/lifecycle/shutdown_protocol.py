"""
Shutdown handler protocol for component-based unload.

Each component that needs cleanup when the plugin unloads implements
IShutdownHandler to participate in the shutdown sequence.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Protocol for components that need graceful shutdown.

    The ShutdownCoordinator calls shutdown() on each handler in priority
    order (highest first).

    Example:
        class TimerShutdownHandler:
            @property
            def shutdown_priority(self) -> int:
                return 90

            async def shutdown(self) -> None:
                self.drain.stop()
    """

    @property
    def shutdown_priority(self) -> int:
        """
        Higher priority shuts down earlier.
        """
        ...

    async def shutdown(self) -> None:
        """
        Called during coordinated shutdown.
        """
        ...
