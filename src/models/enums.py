"""
Enums for the auto-updater state machine and host model
"""

from enum import Enum, IntEnum, auto


class DrainState(Enum):
    """
    Update drain lifecycle

    IDLE: No update known
    UPDATE_PENDING: Update found, waiting for population to allow a drain
    DRAINING: Players notified, drain timer running
    TERMINATING: Players kicked, quit scheduled or issued
    """
    IDLE = auto()
    UPDATE_PENDING = auto()
    DRAINING = auto()
    TERMINATING = auto()


class CsTeam(IntEnum):
    """Team numbers as reported by the game (ordering matters)"""
    NONE = 0
    SPECTATOR = 1
    TERRORIST = 2
    COUNTER_TERRORIST = 3


class PlayerConnectedState(Enum):
    """Connection state of a player controller"""
    NEVER_CONNECTED = auto()
    CONNECTED = auto()
    CONNECTING = auto()
    RECONNECTING = auto()
    DISCONNECTING = auto()
    DISCONNECTED = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    PROBE = auto()       # Local version + remote version checks
    DRAIN = auto()       # State machine transitions, timers
    SESSION = auto()     # Player connect/disconnect/spawn bookkeeping
    NOTIFY = auto()      # Chat notifications
    HOST = auto()        # Host commands and host-side warnings
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()     # Default general category
