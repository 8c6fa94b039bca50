"""Services layer"""

from .event_bus import EventBus
from .host_protocol import IHostRuntime
from .version_probe import VersionProbe
from .notification_policy import NotificationPolicy
from .shutdown_policy import ShutdownPolicy, should_shutdown_now
from .session_tracker import SessionTracker
from .drain_scheduler import DrainScheduler
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "IHostRuntime",
    "VersionProbe",
    "NotificationPolicy",
    "ShutdownPolicy",
    "should_shutdown_now",
    "SessionTracker",
    "DrainScheduler",
    "ServiceContainer",
]
