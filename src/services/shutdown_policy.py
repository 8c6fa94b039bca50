"""Shutdown policy - may the drain start now, and how long should it last"""

from typing import TYPE_CHECKING

from models.config import UpdaterConfig

if TYPE_CHECKING:
    from services.host_protocol import IHostRuntime

INSTANT_SHUTDOWN_DELAY = 1


def should_shutdown_now(current_population: int, max_population: int, config: UpdaterConfig) -> bool:
    """
    True when the server is quiet enough to start draining.

    - population fraction below min_player_percentage_shutdown_allowed, or
    - population at or below min_players_instant_shutdown
    A non-positive max_population counts as "shutdown now".
    """
    if current_population <= config.min_players_instant_shutdown:
        return True
    if max_population <= 0:
        return True
    return current_population / max_population < config.min_player_percentage_shutdown_allowed


class ShutdownPolicy:
    """Config-bound wrapper around should_shutdown_now() plus drain timing"""

    def __init__(self, config: UpdaterConfig):
        self.config = config

    def should_shutdown_now(self, current_population: int, max_population: int) -> bool:
        return should_shutdown_now(current_population, max_population, self.config)

    def drain_delay(self, current_population: int) -> int:
        """1 second when (almost) nobody is around, otherwise the configured delay"""
        if current_population <= self.config.min_players_instant_shutdown:
            return INSTANT_SHUTDOWN_DELAY
        return self.config.shutdown_delay

    @staticmethod
    def resolve_max_population(host: "IHostRuntime") -> int:
        """Visible max players if the host reports one, else the slot count"""
        visible = host.get_visible_max_players()
        if visible is not None and visible > 0:
            return visible
        return host.get_max_players()
