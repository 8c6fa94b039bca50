"""Drain scheduler - update detection and player-aware shutdown state machine"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.config import UpdaterConfig
from models.domain.player import PlayerInfo
from models.domain.version_state import ProbeResult, VersionState
from models.enums import DrainState
from models.errors import HostActionFailed, LocalVersionUnavailable, RemoteUnavailable
from services.notification_policy import NotificationPolicy
from services.session_tracker import SessionTracker
from services.shutdown_policy import ShutdownPolicy
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from lifecycle.scheduler import Scheduler, Timer
    from services.host_protocol import IHostRuntime
    from services.version_probe import VersionProbe

log = get_logger().for_category(LogCategory.DRAIN)

TERMINATE_DELAY = 1


class DrainScheduler:
    """
    Owns VersionState and the timers that move the server towards a restart

    States:
        IDLE -> UPDATE_PENDING -> DRAINING -> TERMINATING

    Flow:
    1. poll() (repeating timer) starts a probe task unless a restart is already required
    2. A positive probe result is handed back via scheduler.next_tick() to manage_update()
    3. manage_update() records the update and asks ShutdownPolicy whether to drain now
    4. begin_drain() notifies everyone and arms the drain timer (1 s or shutdown_delay)
    5. prepare_shutdown() kicks remaining players and arms a 1 s quit timer
    6. shutdown_server() sends "quit" exactly once

    All state mutation happens on scheduler callbacks or host event handlers,
    i.e. serialized on the event loop.
    """

    def __init__(
        self,
        config: UpdaterConfig,
        host: "IHostRuntime",
        probe: "VersionProbe",
        sessions: SessionTracker,
        scheduler: "Scheduler",
        notifications: Optional[NotificationPolicy] = None,
        policy: Optional[ShutdownPolicy] = None,
    ):
        self.config = config
        self.host = host
        self.probe = probe
        self.sessions = sessions
        self.scheduler = scheduler
        self.notifications = notifications or NotificationPolicy()
        self.policy = policy or ShutdownPolicy(config)

        self.version_state = VersionState()
        self._state = DrainState.IDLE
        self._server_loading = False
        self._quit_issued = False
        self._stopped = False

        self._poll_timer: Optional["Timer"] = None
        self._drain_timer: Optional["Timer"] = None
        self._quit_timer: Optional["Timer"] = None

    # === Introspection ===

    @property
    def state(self) -> DrainState:
        return self._state

    @property
    def server_loading(self) -> bool:
        return self._server_loading

    @property
    def quit_issued(self) -> bool:
        return self._quit_issued

    @property
    def stopped(self) -> bool:
        return self._stopped

    # === Timers ===

    def start(self) -> None:
        """Arm the repeating update check."""
        self._stopped = False
        if self._poll_timer is not None and self._poll_timer.active:
            return
        self._poll_timer = self.scheduler.add_timer(
            self.config.update_check_interval,
            self.poll,
            repeat=True,
            description="Update check"
        )
        log.info(f"Update check scheduled every {self.config.update_check_interval:g}s")

    def stop(self) -> int:
        """
        Cancel every timer this scheduler owns; returns how many were active.

        Until start() is called again, results already queued on the loop
        are dropped and no new timer is armed.
        """
        self._stopped = True
        cancelled = 0
        for timer in (self._poll_timer, self._drain_timer, self._quit_timer):
            if timer is not None and timer.active:
                timer.cancel()
                cancelled += 1
        return cancelled

    def _stop_timers_on_map_change(self) -> bool:
        return self.config.shutdown_on_map_change_if_pending_update

    # === Polling ===

    def poll(self) -> None:
        """Poll tick: launch a probe unless a restart is already underway."""
        if self._stopped:
            return
        if self.version_state.restart_required:
            log.debug("Restart already required, skipping update check")
            return

        create_tracked_task(
            self.check_server_version(),
            category=TaskCategory.PROBE,
            description="Steam UpToDateCheck"
        )

    async def check_server_version(self) -> None:
        """
        Run one probe off the scheduler's critical path.

        Failures are logged and leave state untouched; the next poll retries.
        """
        try:
            result = await self.probe.check_for_update()
        except LocalVersionUnavailable as e:
            log.error(
                "The current patch version could not be retrieved. This server will not be checked for updates.",
                reason=e.message
            )
            return
        except RemoteUnavailable as e:
            log.warn(e.message, category=LogCategory.PROBE)
            return
        except Exception as e:
            log.error(
                "An error occurred checking the server for updates",
                error=str(e),
                error_type=type(e).__name__
            )
            return

        if not result.available:
            log.debug("Server is up to date", category=LogCategory.PROBE, version=result.local_version)
            return

        self.scheduler.next_tick(self.manage_update, result)

    # === State machine ===

    def manage_update(self, result: ProbeResult) -> None:
        """Record a positive probe and start the drain if population allows."""
        if self._stopped:
            log.debug("Updater stopped, dropping update check result")
            return
        if self.version_state.restart_required:
            return

        now = self.scheduler.now()
        if self.version_state.mark_update_found(now, result.required_version):
            self._state = DrainState.UPDATE_PENDING
            log.info(
                f"New game update released (Version: {result.required_version}). "
                "The server is preparing for a shutdown.",
                installed=result.local_version or "unknown"
            )

        if self._server_loading:
            log.debug("Map is loading, drain decision deferred to next update check")
            return

        players = self._current_players()
        max_population = self.policy.resolve_max_population(self.host)

        if not self.policy.should_shutdown_now(len(players), max_population):
            log.info(
                "Shutdown postponed, server population too high",
                players=f"{len(players)}/{max_population}",
                threshold=f"{self.config.min_player_percentage_shutdown_allowed:.0%}"
            )
            return

        self.begin_drain(players)

    def begin_drain(self, players: List[PlayerInfo]) -> None:
        """Notify everyone, arm the drain timer and lock in the restart."""
        if self._stopped:
            return
        for player in players:
            self.notify_player(player)
            self.sessions.mark_notified(player.slot)

        delay = self.policy.drain_delay(len(players))
        self._drain_timer = self.scheduler.add_timer(
            delay,
            self.prepare_shutdown,
            stop_on_map_change=self._stop_timers_on_map_change(),
            description="Drain delay"
        )

        self.version_state.require_restart()
        self._state = DrainState.DRAINING
        log.info("Drain started", players=len(players), delay=f"{delay}s")

    def prepare_shutdown(self) -> None:
        """Drain timer fired: kick every remaining player, then quit in 1 s."""
        if self._stopped or self._state is DrainState.TERMINATING:
            return
        self._state = DrainState.TERMINATING

        reason = (
            f"Due to the game update (Version: {self.version_state.required_version}), "
            "the server is now restarting."
        )
        kicked = 0
        for player in self.host.get_players():
            if player.is_bot or not player.is_kickable:
                continue
            if self._execute(f"kickid {player.user_id} {reason}"):
                kicked += 1

        log.info("Players disconnected, quitting shortly", kicked=kicked)
        self._quit_timer = self.scheduler.add_timer(
            TERMINATE_DELAY,
            self.shutdown_server,
            stop_on_map_change=self._stop_timers_on_map_change(),
            description="Quit"
        )

    def shutdown_server(self) -> None:
        """Terminal step: ask the host to quit (only once)."""
        if self._stopped or self._quit_issued:
            return
        self._quit_issued = True
        self._state = DrainState.TERMINATING
        log.info("Shutting down server for update", version=self.version_state.required_version)
        self._execute("quit")

    # === Notifications ===

    def notify_player(self, player: PlayerInfo) -> None:
        state = self.version_state
        message = self.notifications.message_for(
            now=self.scheduler.now(),
            update_found_at=state.update_found_at if state.update_found_at is not None else self.scheduler.now(),
            shutdown_delay=self.config.shutdown_delay,
            required_version=state.required_version,
        )
        try:
            self.host.print_to_chat(player.slot, message)
        except HostActionFailed as e:
            log.warn(f"Could not notify slot {player.slot}", category=LogCategory.NOTIFY, reason=e.message)

    # === Map lifecycle ===

    def on_map_start(self, map_name: str) -> None:
        self._server_loading = False
        if self.version_state.restart_required:
            log.debug(f"Map {map_name} started with a restart pending")
            return
        self.version_state.reset_for_new_map()
        self._state = DrainState.IDLE

    def on_map_end(self) -> None:
        if (
            not self._stopped
            and self.version_state.restart_required
            and self.config.shutdown_on_map_change_if_pending_update
        ):
            log.info("Map ended with a pending update, shutting down now")
            if self._drain_timer is not None:
                self._drain_timer.cancel()
            self._state = DrainState.TERMINATING
            self.shutdown_server()

        self.scheduler.on_map_change()
        self._server_loading = True

    # === Helpers ===

    def _current_players(self) -> List[PlayerInfo]:
        return self.notifications.drain_recipients(self.host.get_players())

    def _execute(self, command: str) -> bool:
        try:
            self.host.execute_command(command)
            return True
        except HostActionFailed as e:
            log.error("Host command failed", category=LogCategory.HOST, command=command.split(" ")[0], reason=e.message)
            return False
