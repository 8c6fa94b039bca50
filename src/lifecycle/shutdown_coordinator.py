"""
Shutdown coordinator that orchestrates the updater's unload sequence.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Dict
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ShutdownCoordinator:
    """
    Coordinates graceful unload of updater components.

    Maintains a list of shutdown handlers and executes them in priority order
    when shutdown is triggered. Handles signal registration, timeout management,
    and error logging.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(TimerShutdownHandler(drain))
        coordinator.register(TaskCancellationHandler())
        coordinator.register(ProbeClientShutdownHandler(probe))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Initialize shutdown coordinator.

        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}
        self._completed = False

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    @property
    def completed(self) -> bool:
        return self._completed

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method

        Raises:
            ValueError: If handler doesn't implement the protocol
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Install SIGINT (Ctrl+C) and SIGTERM handlers that trigger shutdown.

        Args:
            loop: Running asyncio event loop
        """
        def signal_handler(sig: signal.Signals) -> None:
            log.info(f"Signal {sig.name} received → triggering shutdown")
            self.request_shutdown(sig.name)

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
            except (NotImplementedError, RuntimeError):
                log.warn(f"Signal handler for {sig.name} not supported on this platform")
                return

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown programmatically (first reason wins)."""
        if self._shutdown_trigger["reason"] is None:
            self._shutdown_trigger["reason"] = reason
        self._shutdown_event.set()

    def reset(self) -> None:
        """Re-arm the sequence after a completed shutdown (plugin hot reload)."""
        self._shutdown_trigger["reason"] = None
        self._shutdown_event.clear()
        self._completed = False
        log.debug("Shutdown coordinator reset")

    async def wait_for_shutdown(self) -> None:
        """Block until a signal or request_shutdown() triggers shutdown."""
        await self._shutdown_event.wait()
        log.debug(f"Shutdown triggered: {self.reason}")

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout (timeout_per_handler) and the entire
        sequence has a global timeout (total_timeout). Running twice is a no-op.
        """
        if self._completed:
            log.debug("Shutdown sequence already completed")
            return

        log.info("🛑 Initiating updater shutdown sequence...")
        log.info(f"   Reason: {self.reason or 'UNKNOWN'}")

        sorted_handlers = sorted(
            self._handlers, key=lambda h: h.shutdown_priority, reverse=True
        )

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        try:
            for handler in sorted_handlers:
                handler_name = handler.__class__.__name__

                elapsed = loop.time() - start_time
                if elapsed > self._total_timeout:
                    log.error(
                        f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)"
                    )
                    break

                try:
                    log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                    await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                    log.debug(f"✓ {handler_name} shutdown complete")

                except asyncio.TimeoutError:
                    log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")

                except asyncio.CancelledError:
                    log.debug(f"{handler_name} shutdown was cancelled")
                    raise

                except Exception as e:
                    # Continue with other handlers even if one fails
                    log.error(f"❌ Error shutting down {handler_name}", error=str(e))

            log.info("✓ Shutdown sequence complete")

        except asyncio.CancelledError:
            log.warn("Shutdown sequence was cancelled")
            raise
        finally:
            self._completed = True

    def get_handler(self, handler_type: type):
        """
        Get a registered handler by type.

        Returns:
            Handler instance or None if not found
        """
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
