"""Notification policy - countdown text and who still needs to hear it"""

from typing import Iterable, List

from models.domain.player import PlayerInfo


class NotificationPolicy:
    """
    Builds the per-player restart notice

    Pure: computes text and recipients, the caller sends it.

    Countdown rules:
    - remaining = max(1, shutdown_delay - floor(now - update_found_at))
    - < 60 s shown in seconds, otherwise whole minutes (remainder dropped)
    - plural unless the shown number is 1; above 120 s always plural

    Example:
        policy = NotificationPolicy()
        policy.message_for(now=70, update_found_at=0, shutdown_delay=120, required_version=14051)
        # "... (Version: 14051), the server will restart in 50 seconds"
    """

    tag = "{green}AutoUpdater{default}"
    template = " [{tag}] New game update released (Version: {version}), the server will restart in {countdown}"

    @staticmethod
    def remaining_seconds(now: float, update_found_at: float, shutdown_delay: int) -> int:
        elapsed = int(now - update_found_at)
        return max(1, shutdown_delay - elapsed)

    @staticmethod
    def format_countdown(remaining: int) -> str:
        """Render "N second(s)" / "N minute(s)" for a remaining time in seconds"""
        if remaining < 60:
            value, unit = remaining, "second"
        else:
            value, unit = remaining // 60, "minute"

        plural = value != 1 or remaining > 120
        return f"{value} {unit}{'s' if plural else ''}"

    def message_for(
        self,
        now: float,
        update_found_at: float,
        shutdown_delay: int,
        required_version: int
    ) -> str:
        remaining = self.remaining_seconds(now, update_found_at, shutdown_delay)
        return self.template.format(
            tag=self.tag,
            version=required_version,
            countdown=self.format_countdown(remaining),
        )

    @staticmethod
    def drain_recipients(players: Iterable[PlayerInfo]) -> List[PlayerInfo]:
        """Everyone who is about to be kicked: eligible players, spectators included"""
        return [p for p in players if p.is_eligible]

    @staticmethod
    def should_notify_on_spawn(player: PlayerInfo, already_notified: bool) -> bool:
        """Spawn reminder: eligible, playing on a team, not told yet"""
        return player.is_eligible and not player.is_spectating and not already_notified
