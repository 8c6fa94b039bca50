"""Domain models - Players, sessions and version state"""

from models.domain.player import PlayerInfo
from models.domain.session import Session
from models.domain.version_state import ProbeResult, VersionState

__all__ = [
    "PlayerInfo",
    "Session",
    "ProbeResult",
    "VersionState",
]
