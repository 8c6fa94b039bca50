"""Player domain model - host-side snapshot of a player controller"""

from dataclasses import dataclass

from models.enums import CsTeam, PlayerConnectedState


@dataclass(frozen=True)
class PlayerInfo:
    """
    Snapshot of one player controller as reported by the host

    The host builds these on demand; they are never cached across ticks.
    """
    slot: int
    user_id: int
    is_valid: bool = True
    is_bot: bool = False
    is_hltv: bool = False
    team: CsTeam = CsTeam.NONE
    connected: PlayerConnectedState = PlayerConnectedState.CONNECTED

    @property
    def is_eligible(self) -> bool:
        """Real player: not a bot and not an HLTV/observer feed"""
        return self.is_valid and not self.is_bot and not self.is_hltv

    @property
    def is_spectating(self) -> bool:
        return self.team <= CsTeam.SPECTATOR

    @property
    def is_kickable(self) -> bool:
        """Still holding (or acquiring) a connection the host can drop"""
        return self.connected in (
            PlayerConnectedState.CONNECTED,
            PlayerConnectedState.CONNECTING,
            PlayerConnectedState.RECONNECTING,
        )
