"""Service Container - Dependency injection container for the updater"""

from dataclasses import dataclass

from lifecycle.scheduler import Scheduler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from models.config import UpdaterConfig
from services.drain_scheduler import DrainScheduler
from services.event_bus import EventBus
from services.host_protocol import IHostRuntime
from services.session_tracker import SessionTracker
from services.version_probe import VersionProbe


@dataclass
class ServiceContainer:
    """
    Everything the controller needs, built once at load time.

    Usage:
        services = build_services(host, config)
        controller = AutoUpdateController(services)
    """

    config: UpdaterConfig
    host: IHostRuntime
    event_bus: EventBus
    scheduler: Scheduler
    probe: VersionProbe
    sessions: SessionTracker
    drain: DrainScheduler
    coordinator: ShutdownCoordinator
