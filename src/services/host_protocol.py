"""
Host runtime protocol.

The only way the updater reaches into the game server. A host adapter
(plugin bridge, RCON client, test double) implements IHostRuntime and is
injected into the drain scheduler and controller.
"""

from pathlib import Path
from typing import List, Optional, Protocol

from models.domain.player import PlayerInfo


class IHostRuntime(Protocol):
    """
    Accessor capability for the game server process.

    Commands may raise HostActionFailed when the host rejects them; callers
    log and move on.

    Example:
        class RconHost:
            game_directory = Path("/srv/cs2/game")

            def execute_command(self, command: str) -> None:
                self.rcon.send(command)
            ...
    """

    @property
    def game_directory(self) -> Path:
        """Root of the dedicated server install (contains csgo/steam.inf)"""
        ...

    def get_players(self) -> List[PlayerInfo]:
        """All player controllers currently in slots (bots included)"""
        ...

    def get_player(self, slot: int) -> Optional[PlayerInfo]:
        ...

    def get_visible_max_players(self) -> Optional[int]:
        """sv_visiblemaxplayers, or None when the host has no such setting"""
        ...

    def get_max_players(self) -> int:
        ...

    def print_to_chat(self, slot: int, message: str) -> None:
        ...

    def execute_command(self, command: str) -> None:
        ...
