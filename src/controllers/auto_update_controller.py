"""AutoUpdateController - host-facing entry point of the updater"""

from __future__ import annotations

from models.domain.player import PlayerInfo
from models.events import (
    EventType,
    ClientConnectedEvent,
    ClientDisconnectedEvent,
    PlayerSpawnedEvent,
    MapStartEvent,
    MapEndEvent,
    SteamApiActivatedEvent,
    HibernationChangedEvent,
)
from services.event_bus import EventBus
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


class AutoUpdateController:
    """
    Capability interface the host runtime drives

    Responsibilities:
    - load()/unload(): start polling, run the unload sequence (repeatable
      for hot reload)
    - on_* methods: host lifecycle callbacks (connect, disconnect, spawn,
      map start/end, Steam API ready, hibernation)
    - subscribe(): the same callbacks wired to EventBus events

    The controller never reaches into the host except through the injected
    IHostRuntime held by the services.
    """

    def __init__(self, services: ServiceContainer):
        """
        Args:
            services: ServiceContainer with drain scheduler, sessions, host, etc.
        """
        self.services = services
        self.host = services.host
        self.sessions = services.sessions
        self.drain = services.drain
        self.scheduler = services.scheduler
        self.coordinator = services.coordinator
        self._loaded = False

    # === Lifecycle ===

    def load(self) -> None:
        if self._loaded:
            return
        if self.coordinator.completed:
            self.coordinator.reset()
        self.drain.start()
        self._loaded = True
        log.info("Auto-updater loaded")

    async def unload(self) -> None:
        if not self._loaded:
            return
        self.coordinator.request_shutdown("unload")
        await self.coordinator.shutdown_all()
        self._loaded = False
        log.info("Auto-updater unloaded")

    @property
    def loaded(self) -> bool:
        return self._loaded

    # === Host callbacks ===

    def on_client_connected(self, slot: int) -> None:
        player = self.host.get_player(slot)
        if player is None:
            log.debug(f"No player controller for slot {slot}", category=LogCategory.SESSION)
            return
        self.sessions.on_connect(player)

    def on_client_disconnect(self, slot: int) -> None:
        self.sessions.on_disconnect(slot)

    def on_player_spawn(self, player: PlayerInfo) -> None:
        if self.sessions.on_spawn(player, self.drain.version_state.update_available):
            self.scheduler.next_tick(self.drain.notify_player, player)

    def on_map_start(self, map_name: str) -> None:
        self.sessions.reset_for_new_map()
        self.drain.on_map_start(map_name)

    def on_map_end(self) -> None:
        self.drain.on_map_end()

    def on_steam_api_activated(self) -> None:
        log.info("Checking for updates...", category=LogCategory.PROBE)

    def on_hibernation_changed(self, is_hibernating: bool) -> None:
        if is_hibernating:
            log.warn(
                "'sv_hibernate_when_empty' ConVar is enabled. This plugin might not work as expected.",
                category=LogCategory.HOST
            )

    # === EventBus wiring ===

    def subscribe(self, event_bus: EventBus) -> None:
        """Route host events published on the bus to the callbacks above."""
        event_bus.subscribe(EventType.CLIENT_CONNECTED, self._handle_client_connected)
        event_bus.subscribe(EventType.CLIENT_DISCONNECTED, self._handle_client_disconnected)
        event_bus.subscribe(EventType.PLAYER_SPAWNED, self._handle_player_spawned)
        event_bus.subscribe(EventType.MAP_START, self._handle_map_start)
        event_bus.subscribe(EventType.MAP_END, self._handle_map_end)
        event_bus.subscribe(EventType.STEAM_API_ACTIVATED, self._handle_steam_api_activated)
        event_bus.subscribe(EventType.HIBERNATION_CHANGED, self._handle_hibernation_changed)

    def _handle_client_connected(self, event: ClientConnectedEvent) -> None:
        self.on_client_connected(event.slot)

    def _handle_client_disconnected(self, event: ClientDisconnectedEvent) -> None:
        self.on_client_disconnect(event.slot)

    def _handle_player_spawned(self, event: PlayerSpawnedEvent) -> None:
        self.on_player_spawn(event.player)

    def _handle_map_start(self, event: MapStartEvent) -> None:
        self.on_map_start(event.map_name)

    def _handle_map_end(self, event: MapEndEvent) -> None:
        self.on_map_end()

    def _handle_steam_api_activated(self, event: SteamApiActivatedEvent) -> None:
        self.on_steam_api_activated()

    def _handle_hibernation_changed(self, event: HibernationChangedEvent) -> None:
        self.on_hibernation_changed(event.is_hibernating)
