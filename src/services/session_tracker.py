"""Session tracker - connected eligible players and who has been notified"""

from typing import Dict, Iterator, List

from models.domain.player import PlayerInfo
from models.domain.session import Session
from services.notification_policy import NotificationPolicy
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SESSION)


class SessionTracker:
    """
    Owns the Session set, keyed by slot

    - on_connect / on_disconnect follow the host's client lifecycle
    - on_spawn decides whether a (re)spawning player still needs the notice
    - reset_for_new_map clears every notified flag but keeps the sessions

    Example:
        tracker = SessionTracker()
        tracker.on_connect(player)
        if tracker.on_spawn(player, update_available=True):
            send_notice(player)
    """

    def __init__(self):
        self._sessions: Dict[int, Session] = {}

    def on_connect(self, player: PlayerInfo) -> bool:
        """
        Track a newly connected player.

        Returns:
            True if a session was created (eligible and not yet tracked)
        """
        if not player.is_eligible:
            log.debug(f"Ignoring ineligible connection on slot {player.slot}", bot=player.is_bot, hltv=player.is_hltv)
            return False
        if player.slot in self._sessions:
            return False

        self._sessions[player.slot] = Session(slot=player.slot)
        log.debug(f"Session opened for slot {player.slot}", sessions=len(self._sessions))
        return True

    def on_disconnect(self, slot: int) -> None:
        if self._sessions.pop(slot, None) is not None:
            log.debug(f"Session closed for slot {slot}", sessions=len(self._sessions))

    def on_spawn(self, player: PlayerInfo, update_available: bool) -> bool:
        """
        Decide whether a spawning player must be notified now.

        Marks the session notified when returning True. Eligible players
        that were never seen connecting (e.g. joined before load) are
        tracked here.
        """
        if not update_available:
            return False
        if not NotificationPolicy.should_notify_on_spawn(player, self.is_notified(player.slot)):
            return False

        session = self._sessions.get(player.slot)
        if session is None:
            session = self._sessions[player.slot] = Session(slot=player.slot)
        session.notified = True
        return True

    def mark_notified(self, slot: int) -> None:
        session = self._sessions.get(slot)
        if session is None:
            session = self._sessions[slot] = Session(slot=slot)
        session.notified = True

    def is_notified(self, slot: int) -> bool:
        session = self._sessions.get(slot)
        return session is not None and session.notified

    def reset_for_new_map(self) -> None:
        for session in self._sessions.values():
            session.notified = False
        log.debug(f"Notification flags reset for {len(self._sessions)} session(s)")

    def clear(self) -> None:
        self._sessions.clear()

    @property
    def sessions(self) -> List[Session]:
        return list(self._sessions.values())

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, slot: object) -> bool:
        return slot in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))
