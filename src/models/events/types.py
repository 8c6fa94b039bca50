from enum import Enum, auto


class EventType(Enum):
    # Host runtime (players)
    CLIENT_CONNECTED = auto()
    CLIENT_DISCONNECTED = auto()
    PLAYER_SPAWNED = auto()

    # Host runtime (server)
    MAP_START = auto()
    MAP_END = auto()
    STEAM_API_ACTIVATED = auto()
    HIBERNATION_CHANGED = auto()
