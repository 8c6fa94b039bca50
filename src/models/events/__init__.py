"""
Event system for the auto-updater

The host runtime publishes these; AutoUpdateController subscribes to them.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.host import (
    ClientConnectedEvent,
    ClientDisconnectedEvent,
    PlayerSpawnedEvent,
    MapStartEvent,
    MapEndEvent,
    SteamApiActivatedEvent,
    HibernationChangedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",

    "ClientConnectedEvent",
    "ClientDisconnectedEvent",
    "PlayerSpawnedEvent",
    "MapStartEvent",
    "MapEndEvent",
    "SteamApiActivatedEvent",
    "HibernationChangedEvent",
]
