"""
main.py — Entry point for the game server auto-updater
------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring dependencies (Dependency Injection)
- starting the update check loop
- unloading cleanly on SIGINT/SIGTERM or host request

The host runtime (game server bridge) is supplied by the embedding
application as an IHostRuntime implementation.
"""

import sys

# Set UTF-8 encoding for output (log symbols)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from pathlib import Path
from typing import Optional, Union

import httpx

from controllers.auto_update_controller import AutoUpdateController
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import ProbeClientShutdownHandler, TaskCancellationHandler, TimerShutdownHandler
from lifecycle.scheduler import Scheduler
from managers import ConfigManager
from models.config import UpdaterConfig
from services import (
    DrainScheduler, EventBus, IHostRuntime, ServiceContainer, SessionTracker, VersionProbe
)
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


def build_services(
    host: IHostRuntime,
    config: UpdaterConfig,
    client: Optional[httpx.AsyncClient] = None
) -> ServiceContainer:
    """Create and wire every service; nothing is started yet."""
    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    scheduler = Scheduler()
    probe = VersionProbe(config, host.game_directory, client=client)
    sessions = SessionTracker()
    drain = DrainScheduler(
        config=config,
        host=host,
        probe=probe,
        sessions=sessions,
        scheduler=scheduler,
    )

    coordinator = ShutdownCoordinator()
    coordinator.register(TimerShutdownHandler(drain))
    coordinator.register(TaskCancellationHandler())
    coordinator.register(ProbeClientShutdownHandler(probe))

    return ServiceContainer(
        config=config,
        host=host,
        event_bus=event_bus,
        scheduler=scheduler,
        probe=probe,
        sessions=sessions,
        drain=drain,
        coordinator=coordinator,
    )


def create_controller(
    host: IHostRuntime,
    config: Optional[UpdaterConfig] = None,
    config_path: Union[str, Path] = "config/config.yaml"
) -> AutoUpdateController:
    """
    Load config (unless given), build services and subscribe the controller
    to the event bus. Call controller.load() to start polling.
    """
    if config is None:
        log.info("Loading configuration...")
        config = ConfigManager(config_path).load()
    configure_logger(config.log_level)

    services = build_services(host, config)
    controller = AutoUpdateController(services)
    controller.subscribe(services.event_bus)
    return controller


async def run(host: IHostRuntime, config_path: Union[str, Path] = "config/config.yaml") -> None:
    """Run the updater until a shutdown signal arrives, then unload."""
    controller = create_controller(host, config_path=config_path)
    coordinator = controller.coordinator

    coordinator.setup_signal_handlers(asyncio.get_running_loop())
    controller.load()

    log.info("🏁 Auto-updater running. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()

    await controller.unload()
    log.info("👋 Auto-updater stopped.")
