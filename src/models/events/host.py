"""Host runtime events (players, map lifecycle, server status)"""

from dataclasses import dataclass

from models.domain.player import PlayerInfo
from models.events.base import Event
from models.events.types import EventType


@dataclass(init=False)
class ClientConnectedEvent(Event):
    """A client finished connecting to a slot"""
    slot: int

    def __init__(self, slot: int):
        super().__init__(type=EventType.CLIENT_CONNECTED)
        self.slot = slot


@dataclass(init=False)
class ClientDisconnectedEvent(Event):
    """A client left its slot"""
    slot: int

    def __init__(self, slot: int):
        super().__init__(type=EventType.CLIENT_DISCONNECTED)
        self.slot = slot


@dataclass(init=False)
class PlayerSpawnedEvent(Event):
    """A player spawned (carries the controller snapshot incl. team)"""
    player: PlayerInfo

    def __init__(self, player: PlayerInfo):
        super().__init__(type=EventType.PLAYER_SPAWNED)
        self.player = player


@dataclass(init=False)
class MapStartEvent(Event):
    map_name: str

    def __init__(self, map_name: str):
        super().__init__(type=EventType.MAP_START)
        self.map_name = map_name


@dataclass(init=False)
class MapEndEvent(Event):
    def __init__(self):
        super().__init__(type=EventType.MAP_END)


@dataclass(init=False)
class SteamApiActivatedEvent(Event):
    def __init__(self):
        super().__init__(type=EventType.STEAM_API_ACTIVATED)


@dataclass(init=False)
class HibernationChangedEvent(Event):
    """Server entered or left hibernation (sv_hibernate_when_empty)"""
    is_hibernating: bool

    def __init__(self, is_hibernating: bool):
        super().__init__(type=EventType.HIBERNATION_CHANGED)
        self.is_hibernating = is_hibernating
